#customer_map/src/customer_map/api/middleware/request_timing.py

import time

from fastapi import Request
from loguru import logger
from starlette.middleware.base import BaseHTTPMiddleware

TIMING_HEADER = "X-Map-Elapsed-Ms"


# --------------------------------------------------
# ⏱️ Tempo de resposta das rotas do mapa
# --------------------------------------------------
class RequestTimingMiddleware(BaseHTTPMiddleware):
    """
    Mede cada requisição, devolve o tempo no cabeçalho X-Map-Elapsed-Ms
    e registra no loguru. Respostas 4xx/5xx saem como warning.
    """

    async def dispatch(self, request: Request, call_next):
        inicio = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - inicio) * 1000

        response.headers[TIMING_HEADER] = f"{elapsed_ms:.1f}"

        mensagem = f"{request.method} {request.url.path} → {response.status_code} ({elapsed_ms:.1f} ms)"
        if response.status_code >= 400:
            logger.warning(f"⚠️ {mensagem}")
        else:
            logger.debug(f"🗺️ {mensagem}")
        return response
