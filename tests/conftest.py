"""Shared fixtures: fresh stores per test and an API client bound to one."""
import pytest
from fastapi.testclient import TestClient

from main import create_app
from repositories.duckdb_store import DuckDBStore
from repositories.memory_store import MemoryStore

DEMO_EMAIL = "demo@example.test"


@pytest.fixture
def memory_store():
    return MemoryStore(demo_user_email=DEMO_EMAIL, session_ttl_days=30)


@pytest.fixture
def duckdb_store(tmp_path):
    store = DuckDBStore(
        db_file=str(tmp_path / "budget.duckdb"),
        demo_user_email=DEMO_EMAIL,
        session_ttl_days=30,
    )
    store.init_schema()
    return store


@pytest.fixture(params=["memory", "duckdb"])
def store(request):
    """Runs a test once per storage backend."""
    return request.getfixturevalue(f"{request.param}_store")


@pytest.fixture
def owner(store):
    """A registered user with one account, returned as ``(user, account)``."""
    user = store.create_user(email="owner@example.test", name="Owner")
    account = store.upsert_account(
        user_id=user.id,
        name="Chequing",
        institution="Test Bank",
        type="chequing",
        currency="CAD",
    )
    return user, account


@pytest.fixture
def client(memory_store):
    app = create_app(store=memory_store)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def auth_headers(client):
    response = client.post(
        "/auth/register",
        json={"email": "jane@example.test", "password": "correct-horse", "name": "Jane"},
    )
    assert response.status_code == 201
    return {"Authorization": f"Bearer {response.json()['token']}"}
