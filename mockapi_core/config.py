# mockapi_core/config.py
from dataclasses import dataclass, field
from functools import lru_cache
from typing import List
import os

from dotenv import load_dotenv

"""
mockapi_core.config
===================

Gestión centralizada de configuración del servicio.

Este módulo define:
- La estructura de configuración (`Settings`)
- El mecanismo para cargar variables desde entorno (.env)
- Un acceso único y cacheado a la configuración (`get_settings`)

Convenciones
------------
- Las variables de entorno se cargan desde un archivo `.env` si existe.
- Los defaults replican el comportamiento del servicio original
  (puerto 3000, ventana de 15 minutos con 100 requests por IP).
- Si `OPENAI_API_KEY` no está presente, el error se lanza en el lugar
  donde se usa (el cliente LLM), no acá.
"""

# Cargar variables de entorno desde .env (si existe)
load_dotenv()


_TRUE_VALUES = {"1", "true", "yes", "on"}


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return raw.strip().lower() in _TRUE_VALUES


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} debe ser un entero (recibido: {raw!r})")


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except ValueError:
        raise ValueError(f"{name} debe ser un número (recibido: {raw!r})")


def _env_list(name: str, default: str) -> List[str]:
    raw = os.getenv(name, default)
    return [item.strip() for item in raw.split(",") if item.strip()]


@dataclass
class Settings:
    """
    Contenedor tipado de configuración global del servicio.

    Attributes
    ----------
    openai_api_key:
        API key de OpenAI. Debe estar presente para generar mock APIs.
    openai_model_text:
        Modelo de chat usado para generar la especificación.
    openai_temperature:
        Temperatura enviada al modelo.
    openai_timeout_s:
        Timeout explícito (segundos) de la llamada al proveedor.
    openai_json_mode:
        Si se pide `response_format={"type": "json_object"}` al proveedor.
    host / port:
        Dirección de escucha de uvicorn.
    rate_limit_window_s / rate_limit_max_requests:
        Ventana fija y tope de requests por IP para `/generate-mock-api`.
    trust_proxy:
        Si se toma la IP del cliente desde `X-Forwarded-For`.
    cors_origins:
        Orígenes permitidos por CORS (`*` = cualquiera).
    """

    # OpenAI
    openai_api_key: str
    openai_model_text: str = "gpt-3.5-turbo"
    openai_temperature: float = 0.7
    openai_timeout_s: float = 60.0
    openai_json_mode: bool = True

    # Servidor
    host: str = "0.0.0.0"
    port: int = 3000

    # Rate limiting entrante
    rate_limit_window_s: int = 15 * 60
    rate_limit_max_requests: int = 100
    trust_proxy: bool = True

    cors_origins: List[str] = field(default_factory=lambda: ["*"])
    log_level: str = "INFO"


@lru_cache
def get_settings() -> Settings:
    """
    Devuelve una instancia única y cacheada de `Settings`.

    Variables de entorno utilizadas
    -------------------------------
    - OPENAI_API_KEY
    - OPENAI_MODEL_TEXT (default: "gpt-3.5-turbo")
    - OPENAI_TEMPERATURE (default: 0.7)
    - OPENAI_TIMEOUT_SECONDS (default: 60)
    - OPENAI_JSON_MODE (default: true)
    - HOST / PORT (default: 0.0.0.0 / 3000)
    - RATE_LIMIT_WINDOW_SECONDS (default: 900)
    - RATE_LIMIT_MAX_REQUESTS (default: 100)
    - TRUST_PROXY (default: true)
    - CORS_ORIGINS (default: "*", separados por coma)
    - LOG_LEVEL (default: "INFO")

    Notas
    -----
    - En tests, llamar a `get_settings.cache_clear()` después de modificar
      el entorno.
    """
    return Settings(
        openai_api_key=os.getenv("OPENAI_API_KEY", ""),
        openai_model_text=os.getenv("OPENAI_MODEL_TEXT", "gpt-3.5-turbo"),
        openai_temperature=_env_float("OPENAI_TEMPERATURE", 0.7),
        openai_timeout_s=_env_float("OPENAI_TIMEOUT_SECONDS", 60.0),
        openai_json_mode=_env_bool("OPENAI_JSON_MODE", True),
        host=os.getenv("HOST", "0.0.0.0"),
        port=_env_int("PORT", 3000),
        rate_limit_window_s=_env_int("RATE_LIMIT_WINDOW_SECONDS", 15 * 60),
        rate_limit_max_requests=_env_int("RATE_LIMIT_MAX_REQUESTS", 100),
        trust_proxy=_env_bool("TRUST_PROXY", True),
        cors_origins=_env_list("CORS_ORIGINS", "*"),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
    )
