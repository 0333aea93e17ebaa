"""Fixtures compartidas: dobles del SDK de OpenAI y del requester."""

from types import SimpleNamespace
from typing import Any, Dict, List

import pytest

from mockapi_core.config import get_settings


class FakeCompletions:
    """Imita `client.chat.completions` y registra cada llamada."""

    def __init__(self, content: Any = None, error: Exception | None = None):
        self.content = content
        self.error = error
        self.calls: List[Dict[str, Any]] = []

    def create(self, **kwargs):
        self.calls.append(kwargs)
        if self.error is not None:
            raise self.error
        message = SimpleNamespace(content=self.content)
        return SimpleNamespace(choices=[SimpleNamespace(message=message)])


class FakeOpenAI:
    def __init__(self, content: Any = None, error: Exception | None = None):
        self.completions = FakeCompletions(content=content, error=error)
        self.chat = SimpleNamespace(completions=self.completions)


class FakeRequester:
    """Requester de prueba: devuelve texto fijo o lanza un error."""

    def __init__(self, text: str = "", error: Exception | None = None):
        self.text = text
        self.error = error
        self.descriptions: List[str] = []

    def request_completion(self, description: str) -> str:
        self.descriptions.append(description)
        if self.error is not None:
            raise self.error
        return self.text


@pytest.fixture(autouse=True)
def clean_settings(monkeypatch):
    """Entorno limpio y cache de settings vacío en cada test."""
    for name in (
        "OPENAI_API_KEY",
        "OPENAI_MODEL_TEXT",
        "OPENAI_TEMPERATURE",
        "OPENAI_TIMEOUT_SECONDS",
        "OPENAI_JSON_MODE",
        "PORT",
        "HOST",
        "RATE_LIMIT_WINDOW_SECONDS",
        "RATE_LIMIT_MAX_REQUESTS",
        "TRUST_PROXY",
        "CORS_ORIGINS",
        "LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def fake_openai():
    return FakeOpenAI
