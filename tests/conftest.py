# tests/conftest.py
from __future__ import annotations

import hashlib
import os
from collections.abc import Callable, Iterator
from typing import Any

import base58
import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from nacl.signing import SigningKey

os.environ.setdefault("PYTEST_RUNNING", "true")
os.environ.setdefault("SECRET_KEY", "test-secret-key")

from wallet_signin.api.v1.endpoints import auth as auth_endpoints
from wallet_signin.main import app as fastapi_app
from wallet_signin.services.accounts import InMemoryAccountDirectory
from wallet_signin.services.nonce_store import NonceStore
from wallet_signin.services.wallet_auth import WalletAuthService

TEST_SERVER_NAME = "chat.example.com"
TEST_TTL_SECONDS = 300
TEST_CAPACITY = 10_000


class FakeClock:
    """Monotonic clock that only moves when told to."""

    def __init__(self, start: float = 1_000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


def make_wallet(seed: int) -> dict[str, Any]:
    """Return a deterministic wallet derived from ``seed``."""
    signing_key = SigningKey(hashlib.sha256(bytes([seed])).digest())
    pubkey_bytes = signing_key.verify_key.encode()
    return {
        "signing_key": signing_key,
        "pubkey_bytes": pubkey_bytes,
        "pubkey_hex": pubkey_bytes.hex(),
        "address": base58.b58encode(pubkey_bytes).decode(),
    }


def sign_text(wallet: dict[str, Any], message: str) -> str:
    """Sign ``message`` the way a wallet does and return base58 signature."""
    signature = wallet["signing_key"].sign(message.encode("utf-8")).signature
    return base58.b58encode(signature).decode()


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def nonce_store(clock: FakeClock) -> NonceStore:
    return NonceStore(ttl_seconds=TEST_TTL_SECONDS, capacity=TEST_CAPACITY, clock=clock)


@pytest.fixture()
def wallet_auth(nonce_store: NonceStore) -> WalletAuthService:
    return WalletAuthService(nonce_store, server_name=TEST_SERVER_NAME, enabled=True)


@pytest.fixture()
def accounts() -> InMemoryAccountDirectory:
    return InMemoryAccountDirectory()


@pytest.fixture()
def wallet_factory() -> Callable[[int], dict[str, Any]]:
    return make_wallet


@pytest.fixture()
def sign() -> Callable[[dict[str, Any], str], str]:
    return sign_text


@pytest.fixture()
def wallet() -> dict[str, Any]:
    """Primary test wallet."""
    return make_wallet(42)


@pytest.fixture()
def other_wallet() -> dict[str, Any]:
    """Unrelated second wallet."""
    return make_wallet(7)


@pytest.fixture(scope="session")
def app() -> FastAPI:
    return fastapi_app


@pytest.fixture(autouse=True)
def override_service_dependencies(
    app: FastAPI,
    wallet_auth: WalletAuthService,
    accounts: InMemoryAccountDirectory,
) -> Iterator[None]:
    app.dependency_overrides[auth_endpoints.get_wallet_auth_service_dep] = lambda: wallet_auth
    app.dependency_overrides[auth_endpoints.get_account_directory_dep] = lambda: accounts
    try:
        yield
    finally:
        app.dependency_overrides.pop(auth_endpoints.get_wallet_auth_service_dep, None)
        app.dependency_overrides.pop(auth_endpoints.get_account_directory_dep, None)


@pytest.fixture()
def client(app: FastAPI) -> Iterator[TestClient]:
    with TestClient(app, base_url="http://test") as test_client:
        yield test_client
