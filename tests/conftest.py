"""Shared test fixtures."""
from datetime import datetime, timezone
from typing import Callable, Iterator

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from pastebin.config import Settings
from pastebin.main import create_app
from pastebin.service import PasteService
from pastebin.stores import MemoryPasteStore

T0_MS = 1_000_000_000_000
T0 = datetime.fromtimestamp(T0_MS / 1000, tz=timezone.utc)


class FakeTime:
    """Manually advanced epoch-seconds source for the memory store's expiry."""

    def __init__(self, now: float = T0_MS / 1000):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def fake_time() -> FakeTime:
    return FakeTime()


@pytest.fixture
def store(fake_time: FakeTime) -> MemoryPasteStore:
    return MemoryPasteStore(time_func=fake_time)


@pytest.fixture
def service(store: MemoryPasteStore) -> PasteService:
    return PasteService(store)


@pytest.fixture
def make_settings(monkeypatch: pytest.MonkeyPatch) -> Callable[..., Settings]:
    """Build Settings from a clean environment plus the given overrides."""

    def _make(**env: str) -> Settings:
        for name in (
            "REDIS_URL",
            "REDIS_SOCKET_TIMEOUT",
            "MEMORY_FALLBACK",
            "DEBUG",
            "APP_DOMAIN",
            "TEST_MODE",
            "PASTE_KEY_PREFIX",
            "LOG_LEVEL",
            "CORS_ORIGINS",
        ):
            monkeypatch.delenv(name, raising=False)
        for name, value in env.items():
            monkeypatch.setenv(name, value)
        return Settings()

    return _make


@pytest.fixture
def settings(make_settings: Callable[..., Settings]) -> Settings:
    return make_settings(TEST_MODE="1", APP_DOMAIN="http://paste.test")


@pytest.fixture
def app(settings: Settings, store: MemoryPasteStore) -> FastAPI:
    return create_app(settings=settings, store=store)


@pytest.fixture
def client(app: FastAPI) -> Iterator[TestClient]:
    with TestClient(app) as test_client:
        yield test_client
