"""
mockapi_core.json_recovery
==========================

Recuperación tolerante de JSON a partir del texto libre que devuelve el LLM.

Aunque se le pida "solo JSON", el modelo a veces envuelve la respuesta en
prosa, en bloques ```json```, o usa claves sin comillas / con comillas simples.
Este módulo prueba una cadena ordenada de estrategias y devuelve el primer
resultado que parsea:

1. Bloque cercado ```json ... ```
2. Tramo entre la primera `{` y la última `}`
3. Parse directo del texto completo
4. Saneamiento heurístico (`sanitize_near_json`) y parse

Reglas de la cadena
-------------------
- Una estrategia cuyo patrón NO aparece devuelve `None` y se pasa a la
  siguiente.
- Una estrategia cuyo patrón aparece pero no parsea corta la cadena primaria
  y se va directo al saneamiento (paso 4).
- Gana la primera que parsea, aunque otra posterior también funcionaría.

Limitación conocida: el entrecomillado de claves es por regex y puede
alterar strings legítimos que contengan secuencias tipo `palabra:`.
"""

from __future__ import annotations

import json
import logging
import re
from dataclasses import dataclass
from typing import Any, Callable, List, Optional

from .exceptions import UnrecoverableFormatError

logger = logging.getLogger(__name__)


_FENCED_JSON_RE = re.compile(r"```json\n(.*?)\n```", re.DOTALL)

# Saneamiento (paso 4)
_LEADING_NOISE_RE = re.compile(r"^[^{]*")
_TRAILING_NOISE_RE = re.compile(r"[^}]*\Z")
_LOOSE_KEY_RE = re.compile(r"(['\"])?([a-zA-Z0-9_]+)(['\"])?:")


@dataclass(frozen=True)
class RecoveryAttempt:
    """Resultado de una estrategia que encontró su patrón."""

    strategy: str
    value: Any = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def _reject_constant(name: str) -> Any:
    # NaN / Infinity no son JSON válido
    raise ValueError(f"Unexpected token {name} in JSON")


def _parse(strategy: str, candidate: str) -> RecoveryAttempt:
    try:
        value = json.loads(candidate, parse_constant=_reject_constant)
        return RecoveryAttempt(strategy=strategy, value=value)
    except (ValueError, RecursionError) as e:
        # RecursionError: anidamiento demasiado profundo para el parser
        return RecoveryAttempt(strategy=strategy, error=str(e))


def from_fenced_block(text: str) -> Optional[RecoveryAttempt]:
    match = _FENCED_JSON_RE.search(text)
    # Un bloque vacío cuenta como ausente
    if not match or not match.group(1):
        return None
    return _parse("fenced_block", match.group(1))


def from_brace_span(text: str) -> Optional[RecoveryAttempt]:
    first = text.find("{")
    last = text.rfind("}")
    if first == -1 or last == -1:
        return None
    # Si la última } está antes de la primera {, el tramo queda vacío y falla
    return _parse("brace_span", text[first : last + 1])


def from_direct_parse(text: str) -> Optional[RecoveryAttempt]:
    return _parse("direct", text)


Strategy = Callable[[str], Optional[RecoveryAttempt]]

PRIMARY_STRATEGIES: List[Strategy] = [
    from_fenced_block,
    from_brace_span,
    from_direct_parse,
]


def sanitize_near_json(text: str) -> str:
    """
    Transforma texto "casi JSON" en algo que `json.loads` pueda aceptar.

    Pasos, en orden:
    (a) descarta todo lo anterior a la primera `{`
    (b) descarta todo lo posterior a la última `}`
    (c) reescribe claves sin comillas o con comillas simples como `"clave":`
    (d) reemplaza toda comilla simple restante por comilla doble

    Es una función pura: no parsea, solo transforma.
    """
    sanitized = _LEADING_NOISE_RE.sub("", text, count=1)
    sanitized = _TRAILING_NOISE_RE.sub("", sanitized, count=1)
    sanitized = _LOOSE_KEY_RE.sub(r'"\2":', sanitized)
    return sanitized.replace("'", '"')


def salvage_parse(text: str) -> RecoveryAttempt:
    return _parse("salvage", sanitize_near_json(text))


def recover_json(text: str) -> Any:
    """
    Recupera el JSON embebido en una respuesta del LLM.

    Args:
        text: Texto crudo devuelto por el proveedor.

    Returns:
        El valor JSON parseado (normalmente un dict con `results`).

    Raises:
        UnrecoverableFormatError: si ninguna estrategia produce JSON válido.
            Lleva el texto original sin transformar y el mensaje del parser.
    """
    for strategy in PRIMARY_STRATEGIES:
        attempt = strategy(text)
        if attempt is None:
            continue
        if attempt.ok:
            logger.debug("JSON recuperado con estrategia '%s'", attempt.strategy)
            return attempt.value
        logger.debug(
            "Estrategia '%s' encontró su patrón pero no parseó: %s",
            attempt.strategy,
            attempt.error,
        )
        break

    attempt = salvage_parse(text)
    if attempt.ok:
        logger.debug("JSON recuperado con estrategia '%s'", attempt.strategy)
        return attempt.value

    logger.error("Final parsing failed: %s", text)
    raise UnrecoverableFormatError(original_text=text, inner_message=attempt.error)
