"""
Global pytest fixtures for the Universal Loot test suite.

Responsibilities:
    - Provide a Settings snapshot with a fixed test secret and a cheap bcrypt cost
    - Provide isolated in-memory Storage, hasher, issuer, verifier and AuthService
    - Provide a fresh FastAPI TestClient via the app factory for integration tests

Why an app factory?
    Using `create_app()` ensures each test gets fresh in-memory state and its
    own signing secret, eliminating cross-test flakiness.

LLM Prompt Example:
    "Show how to structure pytest fixtures to isolate service state and
    support both integration and unit tests without external dependencies."
"""

import pytest
from fastapi.testclient import TestClient

from auth.service import AuthService
from auth.tokens import TokenIssuer, TokenVerifier
from auth.utils import PasswordHasher
from loot_platform.config import Settings
from loot_platform.storage.storage import Storage
from main import create_app

TEST_SECRET = "test-secret-0123456789abcdef0123456789abcdef"
FAST_ROUNDS = 4  # bcrypt minimum; keeps the suite fast


@pytest.fixture
def test_settings(monkeypatch) -> Settings:
    """Settings read from a controlled environment."""
    monkeypatch.setenv("JWT_SECRET", TEST_SECRET)
    monkeypatch.setenv("LOOT_BCRYPT_ROUNDS", str(FAST_ROUNDS))
    monkeypatch.setenv("LOOT_TOKEN_TTL_SECONDS", "3600")
    monkeypatch.setenv("LOOT_STORAGE_BACKEND", "memory")
    return Settings()


@pytest.fixture
def test_secret() -> str:
    return TEST_SECRET


@pytest.fixture
def storage() -> Storage:
    """Provide a fresh in-memory Storage backend."""
    return Storage()


@pytest.fixture
def hasher() -> PasswordHasher:
    return PasswordHasher(rounds=FAST_ROUNDS)


@pytest.fixture
def issuer() -> TokenIssuer:
    return TokenIssuer(TEST_SECRET, ttl_seconds=3600)


@pytest.fixture
def verifier() -> TokenVerifier:
    return TokenVerifier(TEST_SECRET)


@pytest.fixture
def auth_service(storage: Storage, hasher: PasswordHasher, issuer: TokenIssuer) -> AuthService:
    """AuthService wired to the storage fixture, so tests can inspect the store directly."""
    return AuthService(storage=storage, hasher=hasher, issuer=issuer)


@pytest.fixture
def client(storage: Storage, test_settings: Settings) -> TestClient:
    """
    Provide a fresh TestClient with a new app instance.

    Notes:
        - Uses the app factory to ensure clean, isolated state per test invocation.
        - The app shares the `storage` fixture so tests can assert on stored rows.
    """
    app = create_app(storage=storage, settings=test_settings)
    return TestClient(app)
