import mongomock
import pytest
from fastapi.testclient import TestClient

from core.database import Database, get_db
from main import app


@pytest.fixture
def database():
    """Database backed by an in-memory mongomock client"""
    return Database(client=mongomock.MongoClient(), name="smarthome_test")


@pytest.fixture
def client(database):
    """HTTP client wired to the mongomock database; startup hooks are not run"""
    app.dependency_overrides[get_db] = lambda: database
    yield TestClient(app)
    app.dependency_overrides.clear()
