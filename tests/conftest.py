from __future__ import annotations

import pytest

from oltradius import create_app
from oltradius.extensions import db
from oltradius.services.app_settings import AppSettingsStore, FileStorage


@pytest.fixture
def app(tmp_path):
    app = create_app(
        {
            "TESTING": True,
            "SQLALCHEMY_DATABASE_URI": "sqlite://",
            "SETTINGS_STORAGE_DIR": str(tmp_path / "settings"),
            "SETTINGS_AUTOFLUSH": True,
            "RATELIMIT_STORAGE_URI": "memory://",
        }
    )
    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()
    app.extensions["app_settings"].close()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def storage(tmp_path):
    return FileStorage(tmp_path / "store")


@pytest.fixture
def store(storage):
    store = AppSettingsStore.load(storage)
    yield store
    store.close()
