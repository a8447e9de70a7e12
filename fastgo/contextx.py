"""Request-scoped values kept in context variables."""

from __future__ import annotations

import contextvars

X_REQUEST_ID = "x-request-id"

_request_id_var: contextvars.ContextVar[str] = contextvars.ContextVar("request_id", default="")


def with_request_id(request_id: str) -> contextvars.Context:
    """Return a copy of the current context that carries the given request ID."""
    ctx = contextvars.copy_context()
    ctx.run(_request_id_var.set, request_id)
    return ctx


def request_id() -> str:
    """Return the request ID of the current context, or an empty string."""
    return _request_id_var.get()