"""Shared pytest fixtures for the sheet_lib test suite.

This module provides common fixtures used across unit and integration
tests.

Fixtures:
    db_session: In-memory SQLite connection with the annotation schema
    flask_client: Flask test client for the sheet editor app

Markers:
    slow: Mark test as slow-running (skip with -m "not slow")
    integration: Mark test as integration test
"""

import sqlite3
import sys
from pathlib import Path

import pytest

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))


# -----------------------------------------------------------------------------
# Pytest Markers
# -----------------------------------------------------------------------------

def pytest_configure(config):
    """Register custom pytest markers."""
    config.addinivalue_line(
        "markers", "slow: mark test as slow-running (deselect with '-m \"not slow\"')"
    )
    config.addinivalue_line(
        "markers", "integration: mark test as an integration test"
    )


# -----------------------------------------------------------------------------
# Database Session Fixture
# -----------------------------------------------------------------------------

@pytest.fixture
def db_session():
    """Create an in-memory SQLite connection with the annotation schema.

    Yields:
        sqlite3.Connection: Configured database connection.

    Note:
        Connection is automatically closed after the test.
    """
    from sheet_lib.annotations.sqlite_provider import SCHEMA

    conn = sqlite3.connect(':memory:')
    conn.row_factory = sqlite3.Row
    conn.executescript(SCHEMA)
    conn.commit()

    yield conn

    conn.close()


# -----------------------------------------------------------------------------
# Flask Client Fixture
# -----------------------------------------------------------------------------

@pytest.fixture
def flask_client():
    """Create a Flask test client for the sheet editor app.

    Returns:
        flask.testing.FlaskClient: Test client for making requests.

    Example:
        def test_capacity(flask_client):
            response = flask_client.get('/api/capacity')
            assert response.status_code == 200
    """
    from sheet_flask import app
    import sheet_routes  # noqa: F401 - registers routes

    app.config['TESTING'] = True

    with app.test_client() as client:
        yield client
