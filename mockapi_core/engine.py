from __future__ import annotations

"""
mockapi_core.engine
===================

Orquestador de alto nivel: descripción → LLM → recuperación de JSON.

Lo usan tanto la capa HTTP (`api/routes/mock_api.py`) como la CLI
(`mockapi_core.cli`). No sabe nada de HTTP: las fallas salen como
excepciones de `mockapi_core.exceptions` y cada capa las traduce.
"""

from typing import Any, Protocol

from .exceptions import InvalidInputError
from .json_recovery import recover_json


class SupportsCompletion(Protocol):
    """Cualquier objeto capaz de devolver el texto crudo del modelo."""

    def request_completion(self, description: str) -> str:
        ...


def validate_description(description: Any) -> str:
    """
    Valida la descripción antes de cualquier llamada saliente.

    Raises:
        InvalidInputError: si falta, no es texto o es el string vacío.
            Un texto de solo espacios se acepta y se envía tal cual.
    """
    if not isinstance(description, str) or not description:
        raise InvalidInputError()
    return description


def generate_mock_api(description: Any, requester: SupportsCompletion) -> Any:
    """
    Genera una especificación de mock API a partir de una descripción.

    Flujo:
    ------
    1) Validación de la descripción (sin red).
    2) `requester.request_completion(description)` → texto crudo.
    3) `recover_json(texto)` → JSON recuperado, sin validar esquema.

    Raises:
        InvalidInputError, UpstreamRateLimitedError, UpstreamError,
        UnrecoverableFormatError
    """
    description = validate_description(description)
    raw_text = requester.request_completion(description)
    return recover_json(raw_text)
