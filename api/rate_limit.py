"""
Rate limiting entrante por IP, de ventana fija.

Se aplica solo a las rutas indicadas (por defecto `/generate-mock-api`).
Cada cliente abre su propia ventana con su primer request; al vencer, el
contador vuelve a cero.

Respuesta al superar el tope: HTTP 429 en texto plano con `Retry-After`.
Las respuestas aceptadas llevan `X-RateLimit-Limit` y `X-RateLimit-Remaining`.
"""

from __future__ import annotations

import logging
import math
import time
from dataclasses import dataclass
from typing import Callable, Dict, Iterable

from fastapi import Request
from fastapi.responses import PlainTextResponse
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.responses import Response

logger = logging.getLogger(__name__)

RATE_LIMIT_MESSAGE = "Too many requests from this IP, please try again later"


@dataclass
class _Window:
    started_at: float
    count: int = 0


@dataclass(frozen=True)
class RateDecision:
    allowed: bool
    limit: int
    remaining: int
    reset_in_s: float


class FixedWindowRateLimiter:
    """
    Contador en memoria de requests por clave (IP) y ventana fija.

    Solo se usa desde el event loop (middleware), sin locks.
    """

    def __init__(
        self,
        window_s: float,
        max_requests: int,
        clock: Callable[[], float] = time.monotonic,
    ):
        if window_s <= 0:
            raise ValueError("window_s debe ser > 0")
        if max_requests < 1:
            raise ValueError("max_requests debe ser >= 1")
        self.window_s = window_s
        self.max_requests = max_requests
        self._clock = clock
        self._windows: Dict[str, _Window] = {}

    def hit(self, key: str) -> RateDecision:
        now = self._clock()
        self._prune(now)

        window = self._windows.get(key)
        if window is None or now - window.started_at >= self.window_s:
            # Reinsertar al final mantiene el dict ordenado por started_at
            self._windows.pop(key, None)
            window = _Window(started_at=now)
            self._windows[key] = window

        window.count += 1
        reset_in = max(0.0, window.started_at + self.window_s - now)
        return RateDecision(
            allowed=window.count <= self.max_requests,
            limit=self.max_requests,
            remaining=max(0, self.max_requests - window.count),
            reset_in_s=reset_in,
        )

    def reset(self) -> None:
        self._windows.clear()

    def __len__(self) -> int:
        return len(self._windows)

    def _prune(self, now: float) -> None:
        # Las ventanas vencidas están siempre al principio
        while self._windows:
            key, window = next(iter(self._windows.items()))
            if now - window.started_at < self.window_s:
                break
            del self._windows[key]


def client_address(request: Request, trust_proxy: bool) -> str:
    """IP del cliente; con `trust_proxy` se usa la primera de `X-Forwarded-For`."""
    if trust_proxy:
        forwarded = request.headers.get("x-forwarded-for", "")
        first = forwarded.split(",")[0].strip()
        if first:
            return first
    if request.client is not None:
        return request.client.host
    return "unknown"


class RateLimitMiddleware(BaseHTTPMiddleware):
    def __init__(
        self,
        app,
        limiter: FixedWindowRateLimiter,
        paths: Iterable[str],
        trust_proxy: bool = True,
    ):
        super().__init__(app)
        self.limiter = limiter
        self.paths = frozenset(paths)
        self.trust_proxy = trust_proxy

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        # Preflight de CORS no cuenta; "/ruta/" cuenta igual que "/ruta"
        path = request.url.path.rstrip("/") or "/"
        if path not in self.paths or request.method == "OPTIONS":
            return await call_next(request)

        key = client_address(request, self.trust_proxy)
        decision = self.limiter.hit(key)
        headers = {
            "X-RateLimit-Limit": str(decision.limit),
            "X-RateLimit-Remaining": str(decision.remaining),
        }

        if not decision.allowed:
            logger.warning("Rate limit superado para %s en %s", key, request.url.path)
            headers["Retry-After"] = str(math.ceil(decision.reset_in_s))
            return PlainTextResponse(RATE_LIMIT_MESSAGE, status_code=429, headers=headers)

        response = await call_next(request)
        response.headers.update(headers)
        return response
