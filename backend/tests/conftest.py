"""
Pytest fixtures for repair shop backend tests.

Provides a freshly seeded data store per test, the Flask app and test
client, and X-User-Id headers for each demo account.
"""

from datetime import datetime

import pytest

from repairshop import create_app
from repairshop.datastore import DataStore
from repairshop.extensions import data_store as data_store_ext


SEED_NOW = datetime(2024, 6, 20, 9, 30)


@pytest.fixture(scope='function')
def store():
    """Seeded data store, not attached to any app."""
    return DataStore.seeded(now=SEED_NOW)


@pytest.fixture(scope='function')
def empty_store():
    return DataStore()


@pytest.fixture(scope='function')
def app(store):
    """Create application for testing, backed by the `store` fixture."""
    app = create_app({
        'TESTING': True,
        'SEED_SAMPLE_DATA': False,
        'LOG_LEVEL': 'WARNING',
    })
    data_store_ext.init_app(app, store)
    yield app


@pytest.fixture(scope='function')
def client(app):
    """Create test client."""
    return app.test_client()


@pytest.fixture(scope='function')
def runner(app):
    return app.test_cli_runner()


def user_headers(user_id: str) -> dict:
    """Helper to create identity headers for a user."""
    return {'X-User-Id': user_id}


@pytest.fixture
def owner_headers():
    return user_headers("1")


@pytest.fixture
def staff_headers():
    """Downtown staff (store-1)."""
    return user_headers("2")


@pytest.fixture
def mall_staff_headers():
    """Mall staff (store-2)."""
    return user_headers("3")
