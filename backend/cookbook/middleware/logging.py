"""
Cookbook Backend: Request Logging Middleware
=============================================

What:  One access log line per request on the `cookbook.access` logger.
How:   Reads go out as "GET /recipes 200 3.1ms [rid]". Writes (POST, PUT,
       DELETE) also name the caller from X-User-Id, so a changed or removed
       record can be traced back to the user id that asked for it:

           DELETE /recipes/<id> 200 4.2ms [rid] caller=<user id>
           POST /ingredients 403 1.0ms [rid] caller=-

       Level follows the status code (5xx ERROR, 4xx WARNING, else INFO).
       /health is not logged.

Bodies are never logged: user payloads carry passwords and emails.
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from cookbook.middleware.request_id import request_id_var

logger = logging.getLogger("cookbook.access")

WRITE_METHODS = frozenset({"POST", "PUT", "PATCH", "DELETE"})
SILENT_PATHS = frozenset({"/health"})

# The header is client-controlled; keep a bounded, single-line copy
MAX_CALLER_LENGTH = 64


def level_for_status(status: int) -> int:
    if status >= 500:
        return logging.ERROR
    if status >= 400:
        return logging.WARNING
    return logging.INFO


def caller_of(request: Request) -> str:
    """The X-User-Id a write claims to come from, or "-" when absent."""
    raw = request.headers.get("X-User-Id", "").strip()
    if not raw:
        return "-"
    return raw.replace("\n", " ").replace("\r", " ")[:MAX_CALLER_LENGTH]


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if request.url.path in SILENT_PATHS:
            return await call_next(request)

        started = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - started) * 1000

        line = "%s %s %d %.1fms [%s]"
        args = [
            request.method,
            request.url.path,
            response.status_code,
            elapsed_ms,
            request_id_var.get(""),
        ]
        extra = {
            "request_id": request_id_var.get(""),
            "method": request.method,
            "path": request.url.path,
            "status": response.status_code,
            "duration_ms": round(elapsed_ms, 2),
        }
        if request.method in WRITE_METHODS:
            caller = caller_of(request)
            line += " caller=%s"
            args.append(caller)
            extra["caller"] = caller

        logger.log(level_for_status(response.status_code), line, *args, extra=extra)
        return response
