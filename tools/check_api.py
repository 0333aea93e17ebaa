#!/usr/bin/env python3
"""
Script de verificación para diagnosticar problemas con la API.

Ejecutar:
    python tools/check_api.py
    python tools/check_api.py --url http://localhost:3000 \
        --description "API de un blog con posts, comentarios y perfiles"

Con `--url` además se hace un POST real a /generate-mock-api contra un
servidor levantado (consume una llamada al proveedor).
"""

import argparse
import json
import sys
from pathlib import Path

# Agregar raíz del proyecto al path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

DEFAULT_DESCRIPTION = (
    "I need a REST API for a blog platform with posts, comments, and user profiles"
)


def check_dependencies() -> None:
    print("1. Verificando dependencias:")
    try:
        import fastapi
        print(f"   ✅ FastAPI {fastapi.__version__}")
    except ImportError as e:
        print(f"   ❌ FastAPI no instalado: {e}")
        sys.exit(1)

    try:
        import pydantic
        print(f"   ✅ Pydantic {pydantic.__version__}")
    except ImportError as e:
        print(f"   ❌ Pydantic no instalado: {e}")
        sys.exit(1)

    try:
        import uvicorn
        print(f"   ✅ Uvicorn {uvicorn.__version__}")
    except ImportError as e:
        print(f"   ❌ Uvicorn no instalado: {e}")
        sys.exit(1)

    try:
        import openai
        print(f"   ✅ OpenAI SDK {openai.__version__}")
    except ImportError as e:
        print(f"   ❌ OpenAI SDK no instalado: {e}")
        sys.exit(1)


def check_core() -> None:
    print("\n2. Verificando imports del core:")
    try:
        from mockapi_core.config import get_settings
        settings = get_settings()
        print("   ✅ mockapi_core.config")
        if settings.openai_api_key:
            print("   ✅ OPENAI_API_KEY encontrada (no la muestro por seguridad)")
        else:
            print("   ⚠️ OPENAI_API_KEY no configurada: /generate-mock-api va a devolver 500")
    except ImportError as e:
        print(f"   ❌ Error importando core: {e}")
        sys.exit(1)

    try:
        from mockapi_core.engine import generate_mock_api  # noqa: F401
        print("   ✅ mockapi_core.engine")
    except ImportError as e:
        print(f"   ❌ Error importando engine: {e}")
        sys.exit(1)


def check_app() -> None:
    print("\n3. Verificando creación de la app FastAPI:")
    try:
        from api.main import app
        print("   ✅ App FastAPI creada correctamente")
        print(f"   ✅ Título: {app.title}")
        print(f"   ✅ Versión: {app.version}")
    except Exception as e:
        print(f"   ❌ Error creando app: {e}")
        import traceback
        traceback.print_exc()
        sys.exit(1)


def try_generation(url: str, description: str) -> None:
    import requests

    print(f"\n4. Probando generación contra {url}")
    print(f"   Descripción: {description}")
    resp = requests.post(
        f"{url.rstrip('/')}/generate-mock-api",
        json={"description": description},
        timeout=120,
    )
    print(f"   Status: {resp.status_code}")
    try:
        body = resp.json()
    except ValueError:
        print(f"   ❌ Respuesta no-JSON: {resp.text[:500]}")
        sys.exit(1)
    print(json.dumps(body, indent=2, ensure_ascii=False))
    if resp.status_code != 200:
        sys.exit(1)


def main() -> None:
    parser = argparse.ArgumentParser(description="Verificación de la API de mock APIs")
    parser.add_argument("--url", help="URL base de un servidor levantado")
    parser.add_argument("--description", default=DEFAULT_DESCRIPTION)
    args = parser.parse_args()

    print("🔍 Verificando dependencias y estructura de la API...\n")
    check_dependencies()
    check_core()
    check_app()

    if args.url:
        try_generation(args.url, args.description)

    print("\n✅ Todas las verificaciones pasaron. La API debería funcionar correctamente.")
    print("\nPara levantar el servidor:")
    print("   python run_api.py")


if __name__ == "__main__":
    main()
