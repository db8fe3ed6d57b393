import os
import pytest

HOUSEHOLD = "test-household"


@pytest.fixture(scope="session", autouse=True)
def set_test_env(tmp_path_factory):
    db_file = tmp_path_factory.mktemp("data") / "test.db"
    os.environ["DB_PATH"] = str(db_file)
    os.environ["APP_PASSWORD"] = "testpass"
    os.environ["SECRET_KEY"] = "test-secret-key-for-testing"


@pytest.fixture(scope="session")
def client(set_test_env):
    from fastapi.testclient import TestClient
    from app.main import app
    with TestClient(app, raise_server_exceptions=True) as c:
        yield c


@pytest.fixture(scope="session")
def authed_client(client):
    client.post("/login", data={"household": HOUSEHOLD, "password": "testpass"})
    return client


@pytest.fixture
def db(tmp_path):
    """A fresh, empty database for one test of the core modules."""
    from kondate.db.database import init_db, override_db_path
    with override_db_path(tmp_path / "core.db"):
        init_db()
        yield HOUSEHOLD
