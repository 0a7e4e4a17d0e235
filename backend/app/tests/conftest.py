"""
Shared fixtures: isolated data directories, a fresh app and per-user stores.
"""
import uuid
import pytest
from fastapi.testclient import TestClient
from app.core.config import Settings
from app.db.store import StoreProvisioner
from app.main import create_app
from app.tests.factories import register_and_login

TEST_SECRET = "test-session-secret-" + "x" * 64


@pytest.fixture
def settings(tmp_path):
    return Settings(SESSION_SECRET=TEST_SECRET, DATABASE_PATH=str(tmp_path / "data"))


@pytest.fixture
def app(settings):
    app = create_app(settings)
    yield app
    app.state.provisioner.dispose()
    app.state.identity_engine.dispose()


@pytest.fixture
def client(app):
    return TestClient(app)


@pytest.fixture
def auth_client(client):
    """A client logged in as alice."""
    register_and_login(client)
    return client


@pytest.fixture
def provisioner(tmp_path):
    provisioner = StoreProvisioner(str(tmp_path / "stores"))
    yield provisioner
    provisioner.dispose()


@pytest.fixture
def store(provisioner):
    return provisioner.open_store(uuid.uuid4().hex)
