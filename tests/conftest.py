import pytest
from fastapi.testclient import TestClient

from app import app
from backend import MemoryBackend, get_backend
from room_service import RoomService


@pytest.fixture
def memory_backend():
    return MemoryBackend()


@pytest.fixture
def service(memory_backend):
    return RoomService(memory_backend)


@pytest.fixture
def api_client(memory_backend):
    app.dependency_overrides[get_backend] = lambda: memory_backend
    client = TestClient(app)
    try:
        yield client
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def unconfigured_client():
    app.dependency_overrides[get_backend] = lambda: None
    client = TestClient(app)
    try:
        yield client
    finally:
        app.dependency_overrides.clear()
