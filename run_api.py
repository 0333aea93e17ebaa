#!/usr/bin/env python3
"""
Script helper para ejecutar la API FastAPI.
Ejecuta desde la raíz del proyecto para asegurar que Python encuentre el módulo 'api'.
"""

import sys
from pathlib import Path

# Asegurar que el directorio raíz esté en el PYTHONPATH
project_root = Path(__file__).parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

if __name__ == "__main__":
    try:
        import uvicorn

        from mockapi_core.config import get_settings

        settings = get_settings()
        print(f"🚀 Iniciando API FastAPI en http://localhost:{settings.port}")
        print(f"📖 Documentación disponible en http://localhost:{settings.port}/docs")
        uvicorn.run("api.main:app", host=settings.host, port=settings.port, reload=True)
    except ImportError as e:
        print(f"❌ Error: No se pudo importar uvicorn. ¿Activaste el venv?")
        print(f"   Ejecuta: pip install -e .")
        print(f"   Error: {e}")
        sys.exit(1)
    except Exception as e:
        print(f"❌ Error al iniciar el servidor: {e}")
        sys.exit(1)
