from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from openai import APIStatusError, OpenAI, OpenAIError, RateLimitError

from .config import Settings, get_settings
from .exceptions import UpstreamError, UpstreamRateLimitedError
from .prompts import MOCK_API_SYSTEM_PROMPT, build_mock_api_prompt

logger = logging.getLogger(__name__)


def get_client(settings: Settings | None = None) -> OpenAI:
    """
    Construye el cliente de OpenAI a partir de la configuración.

    `max_retries=0`: cada generación hace exactamente una llamada al proveedor.
    El timeout es explícito (`OPENAI_TIMEOUT_SECONDS`).
    """
    settings = settings or get_settings()
    if not settings.openai_api_key:
        raise UpstreamError("OPENAI_API_KEY is not configured")
    return OpenAI(
        api_key=settings.openai_api_key,
        timeout=settings.openai_timeout_s,
        max_retries=0,
    )


class CompletionRequester:
    """
    Pide al modelo una especificación de mock API y devuelve el texto crudo.

    El cliente se crea una sola vez (lazy) y se reutiliza entre requests:
    solo guarda configuración estática (credenciales, base URL).
    """

    def __init__(self, client: Optional[OpenAI] = None, settings: Settings | None = None):
        self._client = client
        self._settings = settings or get_settings()

    @property
    def client(self) -> OpenAI:
        if self._client is None:
            self._client = get_client(self._settings)
        return self._client

    def build_messages(self, description: str) -> List[Dict[str, str]]:
        return [
            {"role": "system", "content": MOCK_API_SYSTEM_PROMPT},
            {"role": "user", "content": build_mock_api_prompt(description)},
        ]

    def request_completion(self, description: str) -> str:
        """
        Hace una única llamada a chat.completions y devuelve el contenido.

        Raises:
            UpstreamRateLimitedError: el proveedor respondió 429.
            UpstreamError: cualquier otra falla (red, auth, respuesta vacía).
        """
        settings = self._settings
        kwargs: Dict[str, Any] = {
            "model": settings.openai_model_text,
            "messages": self.build_messages(description),
            "temperature": settings.openai_temperature,
        }
        # Se pide modo JSON, pero la recuperación posterior no depende de que
        # el proveedor lo respete.
        if settings.openai_json_mode:
            kwargs["response_format"] = {"type": "json_object"}

        try:
            completion = self.client.chat.completions.create(**kwargs)
        except RateLimitError as e:
            logger.warning("OpenAI rate limit: %s", e)
            raise UpstreamRateLimitedError() from e
        except APIStatusError as e:
            if e.status_code == 429:
                logger.warning("OpenAI rate limit: %s", e)
                raise UpstreamRateLimitedError() from e
            raise UpstreamError(str(e)) from e
        except OpenAIError as e:
            raise UpstreamError(str(e)) from e

        choices = getattr(completion, "choices", None) or []
        content = choices[0].message.content if choices else None
        if not content:
            raise UpstreamError("OpenAI returned empty content")
        return content
