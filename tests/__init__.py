"""
Test Suite for Bookshelf API

Test Organization:
- conftest.py: Shared fixtures (per-test SQLite database, client, sample data)
- test_books.py: /api/books endpoints
- test_errors.py: database faults, pool exhaustion, startup failure
- test_main.py: root and health endpoints
- test_config.py: settings
- test_db_init.py: standalone schema initializer

Running Tests:
    pip install -e ".[test]"
    pytest
"""
