"""
Shared pytest fixtures: every test gets its own SQLite file under tmp_path.
"""
import pytest
from fastapi.testclient import TestClient

from fixgeni.core.settings import Settings
from fixgeni.db import Store
from fixgeni.domain.seed.catalog import parse_catalog
from fixgeni.main import create_app

ADMIN_SECRET = "test-admin-secret"


@pytest.fixture
def settings(tmp_path):
    return Settings(
        database_url=f"sqlite:///{tmp_path / 'fixgeni.db'}",
        security_secret_key=ADMIN_SECRET,
        seed_on_boot=False,
        store_timeout_sec=5,
        log_level="WARNING",
    )


@pytest.fixture
def store(settings):
    s = Store(settings.database_url, timeout_sec=settings.store_timeout_sec)
    s.init()
    s.create_schema()
    yield s
    s.close()


@pytest.fixture
def db(store):
    with store.session_scope() as session:
        yield session


@pytest.fixture
def two_categories():
    return parse_catalog({
        "categories": [
            {"slug": "plumbing", "name": "Plumbing"},
            {"slug": "electrical", "name": "Electrical"},
        ]
    })


@pytest.fixture
def app(settings, store, two_categories):
    return create_app(settings, store=store, catalog=two_categories)


@pytest.fixture
def client(app):
    with TestClient(app) as c:
        yield c


@pytest.fixture
def admin_secret():
    return ADMIN_SECRET


@pytest.fixture
def admin_headers(admin_secret):
    return {"X-Admin-Token": admin_secret}
