"""
Tests Package - Unit and Integration Tests

Test structure:
- tests/conftest.py - Shared pytest fixtures (fake store, test settings)
- tests/test_*.py - Unit tests per module, HTTP tests via FastAPI TestClient

Unit tests use an in-memory fake store keyed by SQL statement, or a patched
connection pool. tests/test_integration.py runs the SQL against a real
PostgreSQL (TEST_DATABASE_URL or a Testcontainers container).
"""
