import copy

import pytest
from fastapi.testclient import TestClient

from school_api.core.config import Settings
from school_api.db.base import dispose_engines
from school_api.main import create_app

SAMPLE_PAYLOADS = {
    "teachers": {
        "name": "Mateus Mariot",
        "school_disciplines": "Portuguese",
        "contact": "mateus@school.net",
        "phone_number": "4870707070",
        "status": True,
    },
    "students": {
        "name": "Victor Leotte",
        "age": 6,
        "phone_number": "48999055949",
        "status": True,
    },
    "professionals": {
        "name": "Ana Souza",
        "specialty": "Psychology",
        "email": "ana@school.net",
        "phone_number": "4833334444",
        "status": True,
    },
    "events": {
        "description": "Staff sync",
        "date": "2024-05-20T14:30:00Z",
        "comments": "Q2 goals",
    },
    "appointments": {
        "specialty": "Psychology",
        "comments": "First session",
        "date": "2024-06-01T09:00:00Z",
        "student": "Victor Leotte",
        "professional": "Ana Souza",
    },
    "users": {
        "name": "Karen Stackoski",
        "email": "karen@school.net",
        "user": "karen",
        "level": "admin",
        "status": True,
        "password": "s3cret-pass",
    },
}


def sample(resource: str) -> dict:
    return copy.deepcopy(SAMPLE_PAYLOADS[resource])


@pytest.fixture
def make_settings(tmp_path):
    def factory(**overrides):
        values = {
            "STORAGE_BACKEND": "json",
            "DATA_DIR": str(tmp_path / "data"),
            "DATABASE_URI": f"sqlite:///{tmp_path / 'school.db'}",
        }
        values.update(overrides)
        return Settings(_env_file=None, **values)

    yield factory
    dispose_engines()


@pytest.fixture
def make_client(make_settings):
    def factory(**overrides):
        return TestClient(create_app(make_settings(**overrides)))

    return factory


@pytest.fixture
def client(make_client):
    return make_client()


@pytest.fixture
def sql_client(make_client):
    return make_client(STORAGE_BACKEND="sql")


@pytest.fixture
def payload():
    """Fresh valid payload for a resource path"""
    return sample
