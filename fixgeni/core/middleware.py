"""
HTTP middleware shared by every deployment: CORS, security headers,
access log and a request body limit.
"""

from __future__ import annotations

import logging
import time

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from fixgeni.core.settings import Settings

access_log = logging.getLogger("access")

# Same defaults helmet applies to an Express app.
SECURITY_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "SAMEORIGIN",
    "X-DNS-Prefetch-Control": "off",
    "X-Download-Options": "noopen",
    "X-Permitted-Cross-Domain-Policies": "none",
    "Referrer-Policy": "no-referrer",
    "Cross-Origin-Opener-Policy": "same-origin",
    "Cross-Origin-Resource-Policy": "same-origin",
    "Origin-Agent-Cluster": "?1",
    "Strict-Transport-Security": "max-age=15552000; includeSubDomains",
}


def install_middleware(app: FastAPI, settings: Settings) -> None:
    # Registration order matters: the last one added runs first.

    @app.middleware("http")
    async def limit_body_size(request: Request, call_next):
        too_large = JSONResponse(status_code=413, content={"detail": "Request body too large"})
        length = request.headers.get("content-length")
        if length and length.isdigit() and int(length) > settings.max_body_bytes:
            return too_large
        # Chunked uploads carry no Content-Length; count what actually arrived.
        # The body is cached on the request and replayed to the route.
        if len(await request.body()) > settings.max_body_bytes:
            return too_large
        return await call_next(request)

    @app.middleware("http")
    async def security_headers(request: Request, call_next):
        response = await call_next(request)
        for name, value in SECURITY_HEADERS.items():
            response.headers.setdefault(name, value)
        return response

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        started = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - started) * 1000
        url = request.url.path + (f"?{request.url.query}" if request.url.query else "")
        # morgan "tiny": :method :url :status :res[content-length] - :response-time ms
        access_log.info(
            "%s %s %d %s - %.3f ms",
            request.method,
            url,
            response.status_code,
            response.headers.get("content-length", "-"),
            elapsed_ms,
        )
        return response

    origins = [o for o in settings.cors_origins if o != "*"]
    if origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )
    else:
        # No list configured: reflect the caller's origin.
        app.add_middleware(
            CORSMiddleware,
            allow_origin_regex=".*",
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )
