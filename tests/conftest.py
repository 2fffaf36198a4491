"""Pytest shared fixtures for the directory console core."""
import json
import pathlib
import sys
from unittest.mock import MagicMock

# Add project root to Python path
ROOT = pathlib.Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

import pytest

from directory_console.config.settings import AppConfig
from directory_console.core.api.client import ApiClient
from directory_console.core.api.users import UsersApi
from directory_console.core.user_store import UserStore


BASE_URL = "https://api.test"


class StubResponse:
    """Minimal stand-in for requests.Response."""

    def __init__(self, payload=None, status_code: int = 200, reason: str = "OK", url: str = BASE_URL):
        self._payload = payload
        self.status_code = status_code
        self.reason = reason
        self.url = url
        self.text = "" if payload is None else json.dumps(payload)
        self.content = self.text.encode("utf-8")

    def json(self):
        return self._payload


def make_user(user_id, name, username=None, email=None, department="Acme", **extra):
    username = username or name.split(" ")[0].lower()
    user = {
        "id": user_id,
        "name": name,
        "username": username,
        "email": email or f"{username}@example.com",
        "phone": "",
        "website": "",
        "company": {"name": department},
    }
    user.update(extra)
    return user


def make_users(count: int):
    return [make_user(i, f"User{i} Last{i}", username=f"user{i}") for i in range(1, count + 1)]


def valid_form(**overrides):
    form = {
        "firstName": "Ada",
        "lastName": "Lovelace",
        "username": "ada",
        "email": "ada@example.com",
        "phone": "",
        "website": "",
        "department": "",
    }
    form.update(overrides)
    return form


@pytest.fixture
def user_factory():
    return make_user


@pytest.fixture
def users_factory():
    return make_users


@pytest.fixture
def form_factory():
    return valid_form


@pytest.fixture
def stub_response():
    return StubResponse


# ─────────────────────────────────────────────────────────────────────────────
# Transport fixtures
# ─────────────────────────────────────────────────────────────────────────────
@pytest.fixture
def sleeps():
    """Delays requested by the retry loop (nothing actually sleeps)."""
    return []


@pytest.fixture
def session():
    """Mock requests session; set ``session.request.side_effect`` per test."""
    return MagicMock()


@pytest.fixture
def client(session, sleeps):
    return ApiClient(BASE_URL, timeout=10, retry_attempts=3, retry_delay=1.0, session=session, sleep=sleeps.append)


@pytest.fixture
def users_api(client):
    return UsersApi(client, clock=lambda: 1_700_000_000.0)


# ─────────────────────────────────────────────────────────────────────────────
# Store fixtures
# ─────────────────────────────────────────────────────────────────────────────
@pytest.fixture
def sample_users():
    return [
        make_user(1, "John Doe", username="jdoe", email="john@example.com", department="Sales"),
        make_user(2, "Jane Smith", username="jsmith", email="jane@example.com", department="Engineering"),
        make_user(3, "bob Brown", username="bob", email="bob@corp.io", department="Engineering"),
        make_user(4, "Alice Doe-Ray", username="alice", email="alice@example.com", department="Marketing"),
    ]


@pytest.fixture
def fake_api(sample_users):
    """UsersApi double echoing payloads the way the real service does."""
    api = MagicMock(spec=UsersApi)
    api.get_users.return_value = [dict(user) for user in sample_users]
    counter = iter(range(1_000, 2_000))
    api.create_user.side_effect = lambda data: {**data, "id": 11}
    api.update_user.side_effect = lambda user_id, data: {**data, "id": int(user_id)}
    api.delete_user.side_effect = lambda user_id: {"success": True, "id": int(user_id)}
    api.next_fallback_id.side_effect = lambda: next(counter)
    return api


@pytest.fixture
def store(fake_api):
    store = UserStore(fake_api)
    store.load_all()
    return store


@pytest.fixture
def config():
    return AppConfig(api_base_url=BASE_URL, retry_delay_ms=0)
