"""
API HTTP principal para mockapi_core.

Esta aplicación FastAPI expone el endpoint REST que usa el core interno
(mockapi_core.engine) para generar especificaciones de mock APIs.

Uso:
    uvicorn api.main:app --reload --port 3000
"""

import logging
import os

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from mockapi_core import __version__
from mockapi_core.config import Settings, get_settings

from .rate_limit import FixedWindowRateLimiter, RateLimitMiddleware
from .routes import health, mock_api

# Determinar ambiente
ENVIRONMENT = os.getenv("ENVIRONMENT", "local")
LOG_LEVEL = get_settings().log_level

# Configurar logging según ambiente
log_level = getattr(logging, LOG_LEVEL, logging.INFO)
logging.basicConfig(
    level=log_level,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

RATE_LIMITED_PATHS = ("/generate-mock-api",)


async def _invalid_body_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    # Cuerpo que no es JSON válido
    return JSONResponse(
        status_code=400,
        content={"error": "Invalid request body", "details": jsonable_encoder(exc.errors())},
    )


def create_app(settings: Settings | None = None) -> FastAPI:
    """
    Construye la app FastAPI con CORS, rate limiting y rutas.

    Args:
        settings: Configuración a usar. Por defecto, `get_settings()`.
    """
    settings = settings or get_settings()
    logger.info(f"🚀 Iniciando API en ambiente: {ENVIRONMENT}")

    app = FastAPI(
        title="Mock API Core",
        description="API para generar especificaciones de mock APIs asistidas por IA",
        version=__version__,
    )

    limiter = FixedWindowRateLimiter(
        window_s=settings.rate_limit_window_s,
        max_requests=settings.rate_limit_max_requests,
    )
    logger.info(
        f"⏱️ Rate limit: {settings.rate_limit_max_requests} requests "
        f"cada {settings.rate_limit_window_s}s por IP"
    )
    app.add_middleware(
        RateLimitMiddleware,
        limiter=limiter,
        paths=RATE_LIMITED_PATHS,
        trust_proxy=settings.trust_proxy,
    )
    app.state.rate_limiter = limiter

    # CORS: con "*" no se permiten credenciales
    allow_all = "*" in settings.cors_origins
    logger.info(f"🌐 CORS origins configurados: {settings.cors_origins}")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"] if allow_all else settings.cors_origins,
        allow_credentials=not allow_all,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(RequestValidationError, _invalid_body_handler)

    # Registrar rutas
    app.include_router(health.router)
    app.include_router(mock_api.router)

    return app


app = create_app()
