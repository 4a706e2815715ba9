"""Pytest fixtures for the task tracker API."""

import os
import tempfile

# Set env vars before importing anything from app
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///" + os.path.join(tempfile.gettempdir(), "task_tracker_unused.db"))
os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("ERROR_LOG_FILE", os.path.join(tempfile.gettempdir(), "task_tracker_test_error.log"))

import sqlite3

import pytest
from fastapi.testclient import TestClient

from app.database import db_state
from app.main import app


PASSWORD = "Password1"


@pytest.fixture
def db_path(tmp_path):
    return tmp_path / "tasks.db"


@pytest.fixture
def client(db_path):
    # Fresh SQLite file per test; the lifespan creates the tables
    db_state.configure(f"sqlite+aiosqlite:///{db_path}")
    with TestClient(app) as c:
        yield c
    db_state.configure(None)


@pytest.fixture
def count_rows(db_path):
    def _count(table):
        with sqlite3.connect(db_path) as conn:
            return conn.execute(f"SELECT COUNT(*) FROM {table}").fetchone()[0]
    return _count


def _register(client, email, name="Test User", password=PASSWORD):
    return client.post("/register", json={"name": name, "email": email, "password": password})


@pytest.fixture
def register(client):
    def _do(email, name="Test User", password=PASSWORD):
        return _register(client, email, name=name, password=password)
    return _do


def bearer_for(client, email, password=PASSWORD):
    response = client.post("/token", data={"username": email, "password": password})
    assert response.status_code == 200, response.text
    return {"Authorization": f"Bearer {response.json()['access_token']}"}


@pytest.fixture
def alice(client):
    _register(client, "alice@example.com", name="Alice")
    return bearer_for(client, "alice@example.com")


@pytest.fixture
def bob(client):
    _register(client, "bob@example.com", name="Bob")
    return bearer_for(client, "bob@example.com")


@pytest.fixture
def make_task(client, alice):
    def _make(headers=None, **fields):
        payload = {"title": "Write report", **fields}
        response = client.post("/tasks/", json=payload, headers=headers or alice)
        assert response.status_code == 201, response.text
        return response.json()
    return _make
