import pytest
from fastapi.testclient import TestClient

from chatpass.domain import services
from chatpass.main import create_app
from chatpass.presentation.dependencies import get_quota_store
from chatpass.settings import get_settings
from tests.fakes import FakeQuotaStore

SECRET = "api-secret"
ADMIN_CODE = "letmein"
SITE_URL = "https://chat.example.com"


@pytest.fixture()
def app_and_store(monkeypatch):
    monkeypatch.setenv("TOKEN_SECRET", SECRET)
    monkeypatch.setenv("ADMIN_CODE", ADMIN_CODE)
    monkeypatch.setenv("SITE_URL", SITE_URL)
    # consecutive test requests land well inside the real debounce window
    monkeypatch.setenv("TURN_DEBOUNCE_SECONDS", "0")
    get_settings.cache_clear()

    app = create_app()
    store = FakeQuotaStore()
    app.dependency_overrides[get_quota_store] = lambda: store

    try:
        yield app, store
    finally:
        app.dependency_overrides.clear()
        get_settings.cache_clear()


@pytest.fixture()
def client(app_and_store):
    app, _ = app_and_store
    return TestClient(app, raise_server_exceptions=False)


@pytest.fixture()
def store(app_and_store):
    _, store = app_and_store
    return store


@pytest.fixture()
def token() -> str:
    return services.issue(SECRET, 60)


@pytest.fixture()
def expired_token() -> str:
    return services.issue_raw(SECRET, services.now_ms() - 1_000)
