"""HTTP middleware: cache suppression, CORS preflight and request IDs."""

from __future__ import annotations

import uuid
from datetime import datetime, timezone
from typing import Any, Callable, Iterable

from flask import Flask, Response, request
from werkzeug.http import http_date

from fastgo.contextx import X_REQUEST_ID, with_request_id


def no_cache_headers(now: datetime | None = None) -> dict[str, str]:
    """Headers that stop clients from caching a response."""
    if now is None:
        now = datetime.now(timezone.utc)
    return {
        "Cache-Control": "no-cache, no-store, max-age=0, must-revalidate, value",
        "Expires": "Thu, 01 Jan 1970 00:00:00 GMT",
        "Last-Modified": http_date(now),
    }


def cors_headers() -> dict[str, str]:
    """Headers answering a CORS preflight request."""
    return {
        "Access-Control-Allow-Origin": "*",
        "Access-Control-Allow-Methods": "GET,POST,PUT,PATCH,DELETE,HEAD,OPTIONS",
        "Access-Control-Allow-Headers": "authorization, origin, content-type, accept",
        "Allow": "HEAD,GET,POST,PUT,PATCH,DELETE,OPTIONS",
        "Content-Type": "application/json",
    }


class _RequestIDMiddleware:
    """WSGI wrapper that runs each request with an x-request-id in context."""

    def __init__(self, wsgi_app: Callable[..., Iterable[bytes]]) -> None:
        self.wsgi_app = wsgi_app

    def __call__(self, environ: dict[str, Any], start_response: Callable[..., Any]) -> Iterable[bytes]:
        # Preflight requests are answered before the request ID is assigned.
        if environ.get("REQUEST_METHOD") == "OPTIONS":
            return self.wsgi_app(environ, start_response)

        rid = environ.get("HTTP_X_REQUEST_ID") or str(uuid.uuid4())

        def _start_response(status: str, headers: list[tuple[str, str]], exc_info: Any = None) -> Any:
            headers = [(name, value) for name, value in headers if name.lower() != X_REQUEST_ID]
            headers.append((X_REQUEST_ID, rid))
            return start_response(status, headers, exc_info)

        return with_request_id(rid).run(self.wsgi_app, environ, _start_response)


def install(app: Flask) -> Flask:
    """Attach the no-cache, CORS and request-ID middleware to a Flask app."""

    @app.before_request
    def _cors() -> Response | None:
        if request.method == "OPTIONS":
            return Response(status=200, headers=cors_headers())
        return None

    @app.after_request
    def _no_cache(response: Response) -> Response:
        response.headers.update(no_cache_headers())
        return response

    app.wsgi_app = _RequestIDMiddleware(app.wsgi_app)  # type: ignore[method-assign]
    return app