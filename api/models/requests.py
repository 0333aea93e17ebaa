"""
Modelos de request para la API.

Estos modelos definen la estructura esperada de los requests HTTP,
validando tipos y valores antes de pasarlos al core.
"""

from typing import Any, Optional

from pydantic import BaseModel, Field


class MockApiRequest(BaseModel):
    """
    Request para generar una mock API.

    `description` es opcional a nivel de tipo: la validación de "requerida
    y no vacía" la hace `mockapi_core.engine.validate_description`, para que
    el 400 tenga siempre el mismo cuerpo.
    """

    description: Optional[str] = Field(
        default=None,
        description="Descripción en lenguaje natural de la API a simular",
    )


class ErrorResponse(BaseModel):
    """Cuerpo de error genérico (400 / 429 / 500 del proveedor)."""

    error: str
    message: Optional[str] = None
    # String con el error del proveedor, o lista de errores si el cuerpo no es JSON
    details: Optional[Any] = None


class UnparseableSpecResponse(BaseModel):
    """Cuerpo del 500 cuando el texto del modelo no se pudo convertir a JSON."""

    error: str
    rawResponse: str = Field(..., description="Texto original devuelto por el modelo")
    suggestion: str
