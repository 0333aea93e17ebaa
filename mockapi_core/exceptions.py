"""
Jerarquía de excepciones de mockapi_core.

Todas heredan de `MockApiError`, así la capa HTTP puede capturar casos
específicos o el caso general:

    try:
        spec = generate_mock_api(description, requester)
    except UpstreamRateLimitedError:
        ...  # 429
    except UpstreamError:
        ...  # 500
"""

from __future__ import annotations


class MockApiError(Exception):
    """Base para todos los errores del generador."""


class InvalidInputError(MockApiError):
    """El cliente no envió una descripción utilizable."""

    def __init__(self, message: str = "Description is required"):
        super().__init__(message)
        self.message = message


class UpstreamError(MockApiError):
    """Falla del proveedor LLM (red, auth, respuesta malformada)."""

    def __init__(self, detail: str):
        super().__init__(detail)
        self.detail = detail


class UpstreamRateLimitedError(UpstreamError):
    """El proveedor respondió HTTP 429."""

    def __init__(
        self,
        detail: str = "OpenAI API rate limit exceeded. Please try again later.",
    ):
        super().__init__(detail)


class UnrecoverableFormatError(MockApiError):
    """
    Ninguna estrategia de recuperación produjo JSON válido.

    Conserva el texto original (sin transformar) para que el cliente pueda
    rescatarlo manualmente.
    """

    def __init__(self, original_text: str, inner_message: str):
        self.original_text = original_text
        self.inner_message = inner_message
        super().__init__(f"Failed to parse API specification: {inner_message}")
