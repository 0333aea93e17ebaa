"""
Dependencias de FastAPI.

Este módulo proporciona dependencias reutilizables para:
- Obtener el `CompletionRequester` compartido (un único cliente de OpenAI
  por proceso)

En tests se reemplazan con `app.dependency_overrides`.
"""

from functools import lru_cache

from mockapi_core.config import get_settings
from mockapi_core.llm_client import CompletionRequester


@lru_cache
def get_completion_requester() -> CompletionRequester:
    """
    Devuelve el `CompletionRequester` del proceso.

    El cliente de OpenAI se construye recién en la primera llamada al
    proveedor, así un `OPENAI_API_KEY` faltante se reporta como error del
    proveedor (500) y no tumba el arranque.
    """
    return CompletionRequester(settings=get_settings())
