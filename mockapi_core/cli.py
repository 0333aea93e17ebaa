"""
mockapi_core.cli
================

Punto de entrada mínimo para generar una mock API desde la terminal,
sin levantar el servidor HTTP.

Uso:
    mock-api "API de un blog con posts, comentarios y perfiles"
    mock-api --raw respuesta_guardada.txt

Con `--raw` no se llama al proveedor: solo se corre la recuperación de JSON
sobre una respuesta guardada (útil para diagnosticar un `rawResponse`
devuelto por la API).
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from .engine import generate_mock_api
from .exceptions import MockApiError, UnrecoverableFormatError
from .json_recovery import recover_json
from .llm_client import CompletionRequester


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="mock-api",
        description="Genera una especificación de mock API a partir de una descripción.",
    )
    parser.add_argument("description", nargs="?", help="Descripción de la API a simular")
    parser.add_argument(
        "--raw",
        type=Path,
        help="Archivo con una respuesta cruda del modelo (no llama al proveedor)",
    )
    parser.add_argument("--indent", type=int, default=2, help="Indentación del JSON de salida")
    parser.add_argument("-v", "--verbose", action="store_true", help="Logging en nivel DEBUG")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    if args.raw is None and args.description is None:
        parser.error("se requiere una descripción o --raw")

    try:
        if args.raw is not None:
            spec = recover_json(args.raw.read_text(encoding="utf-8"))
        else:
            spec = generate_mock_api(args.description, CompletionRequester())
    except UnrecoverableFormatError as e:
        print(f"❌ {e}", file=sys.stderr)
        print(e.original_text, file=sys.stderr)
        return 2
    except MockApiError as e:
        print(f"❌ {e}", file=sys.stderr)
        return 1

    print(json.dumps(spec, indent=args.indent, ensure_ascii=False))
    return 0


if __name__ == "__main__":
    sys.exit(main())
