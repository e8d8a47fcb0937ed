"""Shared fixtures: throwaway databases and a Flask test client."""

import pytest

from app import create_app


@pytest.fixture
def db(tmp_path):
    return str(tmp_path / "drinks.db")


@pytest.fixture
def app_config(tmp_path, db):
    return {
        "TESTING": True,
        "DRINK_LOG_DB_PATH": db,
        "HEALTH_DB_PATH": str(tmp_path / "health.db"),
        "HEALTH_ENABLED": True,
    }


@pytest.fixture
def flask_app(app_config):
    return create_app(app_config)


@pytest.fixture
def client(flask_app):
    with flask_app.test_client() as c:
        yield c
