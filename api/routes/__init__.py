"""Rutas de la API."""

from . import health, mock_api

__all__ = ["health", "mock_api"]
