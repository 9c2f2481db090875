import os
import sys
import tempfile

import pytest

# Environment must be in place before soconnect.config.settings is imported
os.environ["APP_ENV"] = "test"
os.environ["STORAGE_BACKEND"] = "memory"
os.environ["SESSION_BACKEND"] = "memory"
os.environ["SESSION_SECRET"] = "test-secret"
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["STORE_RETRY_BACKOFF"] = "0"
os.environ["STORE_READ_ATTEMPTS"] = "3"
os.environ["PASSCODE_HASH_ITERATIONS"] = "1000"
os.environ["ADMIN_API_KEY"] = "test-admin-key"
os.environ["MAX_UPLOAD_MB"] = "10"
os.environ["UPLOAD_BASE"] = tempfile.mkdtemp(prefix="soconnect-uploads-")
os.environ["LOG_PATH"] = ""

# Add backend directory to path
sys.path.insert(0, os.path.abspath(os.path.dirname(__file__) + "/.."))

from fastapi.testclient import TestClient
from soconnect.fastapi_app import create_fastapi_app
from soconnect.setup.ioc.container import create_container

ADMIN_HEADERS = {"X-Admin-Key": "test-admin-key"}


def register(client, code, name="User", passcode="secret"):
    res = client.post("/register", json={"name": name, "code": code, "passcode": passcode})
    assert res.status_code == 201, f"register {code} failed: {res.status_code} {res.text}"


def login(client, code, passcode="secret"):
    res = client.post("/login", json={"code": code, "passcode": passcode})
    assert res.status_code == 200, f"login {code} failed: {res.status_code} {res.text}"
    return {"Authorization": f"Bearer {res.json()['token']}"}


@pytest.fixture()
def container():
    """Fresh in-memory container: every test starts with empty stores."""
    return create_container()


@pytest.fixture()
def app(container):
    """Create and configure a new FastAPI app instance for each test."""
    return create_fastapi_app(container)


@pytest.fixture()
def client(app):
    """A test client for the FastAPI app."""
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture()
def ann(client):
    """Auth headers of Ann (11111)."""
    register(client, "11111", name="Ann", passcode="p")
    return login(client, "11111", passcode="p")


@pytest.fixture()
def bob(client):
    """Auth headers of Bob (22222)."""
    register(client, "22222", name="Bob", passcode="q")
    return login(client, "22222", passcode="q")
