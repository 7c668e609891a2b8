from __future__ import annotations

import os
import sys
from pathlib import Path

# Settings are read at import time: pin them before importing msusers.
os.environ["APP_ENV"] = "test"
os.environ.pop("DATABASE_URL", None)

# Ensure repo root is on sys.path so `import msusers` works under pytest.
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

import pytest  # noqa: E402
from argon2 import PasswordHasher  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from msusers.api import dependencies  # noqa: E402
from msusers.main import app  # noqa: E402
from msusers.repos.user_repo import InMemoryUserRepo  # noqa: E402
from msusers.services.password_hasher import Argon2PasswordHasher  # noqa: E402

# Cheap Argon2 parameters keep the suite fast; production uses the defaults.
FAST_HASHER = Argon2PasswordHasher(
    PasswordHasher(time_cost=1, memory_cost=8 * 1024, parallelism=1)
)


@pytest.fixture(autouse=True)
def reset_user_store() -> None:
    assert isinstance(dependencies.user_repo, InMemoryUserRepo)
    dependencies.user_repo.clear()


@pytest.fixture(autouse=True)
def fast_password_hasher(monkeypatch: pytest.MonkeyPatch) -> Argon2PasswordHasher:
    monkeypatch.setattr(dependencies, "password_hasher", FAST_HASHER)
    return FAST_HASHER


@pytest.fixture
def client() -> TestClient:
    return TestClient(app)


def mint_token(subject: str = "test-user@example.com") -> str:
    """Create a valid ES256 JWT signed by the app's issuer."""
    return dependencies.token_issuer.issue(subject)


@pytest.fixture
def token() -> str:
    return mint_token()


@pytest.fixture
def auth_headers(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


def make_user_payload(**overrides: object) -> dict[str, object]:
    """A camelCase payload that passes every validation rule."""
    payload: dict[str, object] = {
        "firstName": "Maria",
        "lastName": "Souza",
        "email": "maria@example.com",
        "cpf": "111.444.777-35",
        "birthdate": "1990-05-17",
        "password": "s3cure-pass",
        "active": True,
    }
    payload.update(overrides)
    return payload


@pytest.fixture
def user_payload() -> dict[str, object]:
    return make_user_payload()
