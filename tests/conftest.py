import os

# must be set before config.settings is imported anywhere
os.environ.setdefault("CACHE_BACKEND", "memory")
os.environ.setdefault("ENVIRONMENT", "development")

import json
from unittest.mock import MagicMock

import jwt
import pytest
import requests

from helpers.backend_client import BackendClient
from utils.cache_utils import MemoryStore

TEST_SECRET = "test-secret-key-that-is-long-enough-for-hs256"


def make_token(user_id="user-1", **claims):
    payload = {"id": user_id, **claims}
    return jwt.encode(payload, TEST_SECRET, algorithm="HS256")


def make_response(status_code=200, payload=None, text=None):
    resp = requests.Response()
    resp.status_code = status_code
    if text is not None:
        resp._content = text.encode()
    elif payload is not None:
        resp._content = json.dumps(payload).encode()
    else:
        resp._content = b""
    return resp


def report(report_id, owner, status="Resolved", embedded=False):
    return {
        "_id": report_id,
        "user": {"_id": owner, "name": "Someone"} if embedded else owner,
        "status": status,
        "description": "Overflowing bin",
        "latitude": 14.85,
        "longitude": 120.81,
    }


def resolved_reports(count, owner="user-1"):
    return [report(f"r{i}", owner, embedded=bool(i % 2)) for i in range(count)]


@pytest.fixture
def store():
    return MemoryStore()


@pytest.fixture
def backend():
    """Upstream client double; configure return values per test."""
    client = MagicMock(spec=BackendClient)
    client.list_reports.return_value = []
    return client


@pytest.fixture
def token():
    return make_token("user-1")
