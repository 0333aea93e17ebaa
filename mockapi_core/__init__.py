"""
mockapi_core
============

Núcleo del generador de mock APIs: configuración, cliente LLM, recuperación
tolerante de JSON y el orquestador que los combina.

La capa HTTP (`api/`) y la CLI (`mockapi_core.cli`) hablan solo con
`mockapi_core.engine`.
"""

__version__ = "0.1.0"
