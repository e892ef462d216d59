import pytest
from fastapi.testclient import TestClient

from quickstock.api.server import app
from quickstock.config import Settings, get_settings
from quickstock.routes_intelligence import get_responder

from fakes import AWS

PROVIDER_ENV = ("AWS_ACCESS_KEY_ID", "AWS_SECRET_ACCESS_KEY", "GEMINI_API_KEY", "BEDROCK_MODEL_ID", "GEMINI_MODEL")


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for name in PROVIDER_ENV:
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    get_responder.cache_clear()
    yield
    app.dependency_overrides.clear()
    get_settings.cache_clear()
    get_responder.cache_clear()


@pytest.fixture
def client():
    with TestClient(app) as c:
        yield c


@pytest.fixture
def bedrock_settings():
    return Settings(**AWS)
