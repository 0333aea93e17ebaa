"""
Endpoint para generar mock APIs.

Este endpoint maneja:
- POST /generate-mock-api: descripción → especificación JSON de mock API

Toda falla se convierte acá en un cuerpo JSON con el status correspondiente.
"""

import logging
from typing import Any, Optional, Union

from fastapi import APIRouter, Body, Depends
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from mockapi_core.engine import generate_mock_api
from mockapi_core.exceptions import (
    InvalidInputError,
    UnrecoverableFormatError,
    UpstreamError,
    UpstreamRateLimitedError,
)
from mockapi_core.llm_client import CompletionRequester

from ..dependencies import get_completion_requester
from ..models.requests import ErrorResponse, MockApiRequest, UnparseableSpecResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["mock-api"])

MANUAL_ADJUSTMENT_SUGGESTION = "The API specification might need manual adjustment"


def _extract_description(payload: Any) -> Optional[str]:
    # Cuerpo ausente, no-objeto o con tipos inválidos → sin descripción
    if not isinstance(payload, dict):
        return None
    try:
        return MockApiRequest.model_validate(payload).description
    except ValidationError:
        return None


@router.post(
    "/generate-mock-api",
    responses={
        400: {"model": ErrorResponse},
        429: {"model": ErrorResponse},
        500: {"model": Union[UnparseableSpecResponse, ErrorResponse]},
    },
)
def create_mock_api(
    payload: Any = Body(default=None),
    requester: CompletionRequester = Depends(get_completion_requester),
):
    """
    Genera una especificación de mock API a partir de una descripción.

    Endpoint sync: corre en el threadpool de FastAPI.

    Args:
        payload: JSON con `{"description": "<texto>"}`

    Returns:
        El JSON recuperado del modelo, tal cual (sin validar esquema).
    """
    description = _extract_description(payload)

    try:
        spec = generate_mock_api(description, requester)
    except InvalidInputError as e:
        return JSONResponse(status_code=400, content={"error": e.message})
    except UpstreamRateLimitedError as e:
        logger.error("Error: %s", e)
        return JSONResponse(
            status_code=429,
            content={"error": "Rate limit exceeded", "message": e.detail},
        )
    except UpstreamError as e:
        logger.error("Error: %s", e)
        return JSONResponse(
            status_code=500,
            content={"error": "Failed to generate mock API", "details": e.detail},
        )
    except UnrecoverableFormatError as e:
        return JSONResponse(
            status_code=500,
            content={
                "error": str(e),
                "rawResponse": e.original_text,
                "suggestion": MANUAL_ADJUSTMENT_SUGGESTION,
            },
        )
    except Exception as e:
        logger.exception("Error inesperado generando mock API")
        return JSONResponse(
            status_code=500,
            content={"error": "Failed to generate mock API", "details": str(e)},
        )

    return JSONResponse(status_code=200, content=spec)
