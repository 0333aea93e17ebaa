"""
API HTTP para mockapi_core.

Esta capa expone el endpoint REST que usa el core interno
(mockapi_core.engine) para generar especificaciones de mock APIs.

La API está diseñada para ser consumida por:
- UI web
- Clientes externos
- Scripts de automatización (ver tools/check_api.py)
"""
