# tests/conftest.py
"""
Shared fixtures.

Every test gets its own SQLite file under pytest's tmp_path. The FastAPI
TestClient is an httpx.Client, so it also serves as the HTTP client behind
HttpTransport: web mode is exercised end to end without a live server.
"""
import pytest
from fastapi.testclient import TestClient

from student_registry.client import Dispatcher, HttpTransport
from student_registry.main import create_app
from student_registry.services.record_store import RecordStore


@pytest.fixture
def database_url(tmp_path):
    return f"sqlite:///{tmp_path / 'students.db'}"


@pytest.fixture
def store(database_url):
    with RecordStore(database_url) as store:
        yield store


@pytest.fixture
def api_client(tmp_path):
    app = create_app(f"sqlite:///{tmp_path / 'server.db'}")
    with TestClient(app) as client:
        yield client


@pytest.fixture
def local_dispatcher(store, api_client):
    dispatcher = Dispatcher(store=store, transport=HttpTransport(client=api_client))
    yield dispatcher
    dispatcher.close()


@pytest.fixture
def web_dispatcher(api_client):
    dispatcher = Dispatcher(store=None, transport=HttpTransport(client=api_client))
    yield dispatcher
    dispatcher.close()


@pytest.fixture
def student_data():
    return {
        "national_id": "29801011234567",
        "name": "Mona Adel",
        "class_code": "1A",
        "serial_number": 12,
        "birth_day": 1,
        "birth_month": 1,
        "birth_year": 2008,
        "gender": "F",
        "guardian_name": "Adel Hassan",
        "notes": "",
    }
