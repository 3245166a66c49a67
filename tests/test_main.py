"""
Tests for the root and health endpoints.
"""

from fastapi import status


def test_root_is_plain_text(client):
    response = client.get("/")

    assert response.status_code == status.HTTP_200_OK
    assert response.text == "Bookshelf API is running!"
    assert response.headers["content-type"].startswith("text/plain")


def test_health_check(client):
    response = client.get("/health")

    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["status"] == "healthy"
    assert data["database"] == "connected"
    assert "pool" in data


def test_health_check_database_down(client, app, db_path):
    # Make the connectivity check fail: swap in an engine that cannot open its file
    from sqlalchemy.ext.asyncio import create_async_engine

    healthy_engine = app.state.engine
    app.state.engine = create_async_engine(
        f"sqlite+aiosqlite:///{db_path.parent / 'gone' / 'db.sqlite'}"
    )
    try:
        response = client.get("/health")
    finally:
        app.state.engine = healthy_engine

    assert response.status_code == status.HTTP_503_SERVICE_UNAVAILABLE
    assert response.json()["status"] == "unhealthy"


def test_cors_headers(client):
    response = client.get("/api/books", headers={"Origin": "http://localhost:3000"})

    assert response.headers["access-control-allow-origin"] == "*"
