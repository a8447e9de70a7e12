"""Structured errors carrying an HTTP status code, a reason and a message."""

from __future__ import annotations

from http import HTTPStatus


def _sprintf(format: str, args: tuple) -> str:
    return format % args if args else format


class ErrorX(Exception):
    """An error with an HTTP status code, a business reason and a user-facing message."""

    def __init__(self, code: int = 0, reason: str = "", message: str = "") -> None:
        super().__init__(code, reason, message)
        self.code = code
        self.reason = reason
        self.message = message

    def __str__(self) -> str:
        return f"error: code = {self.code} reason = {self.reason} message = {self.message}"

    def __repr__(self) -> str:
        return f"ErrorX(code={self.code!r}, reason={self.reason!r}, message={self.message!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ErrorX):
            return NotImplemented
        return (self.code, self.reason, self.message) == (other.code, other.reason, other.message)

    def __hash__(self) -> int:
        return hash((self.code, self.reason, self.message))

    def with_message(self, format: str, *args: object) -> ErrorX:
        """Return a copy of this error with a new, formatted message."""
        return ErrorX(self.code, self.reason, _sprintf(format, args))


def new(code: int, reason: str, format: str, *args: object) -> ErrorX:
    """Create an error with a formatted message."""
    return ErrorX(code, reason, _sprintf(format, args))


def from_error(err: BaseException | None) -> ErrorX | None:
    """Convert any exception to an ErrorX, looking through explicit causes."""
    if err is None:
        return None
    seen: set[int] = set()
    current: BaseException | None = err
    while current is not None and id(current) not in seen:
        if isinstance(current, ErrorX):
            return current
        seen.add(id(current))
        current = current.__cause__
    return ErrorX(ERR_INTERNAL.code, ERR_INTERNAL.reason, str(err))


OK = ErrorX(HTTPStatus.OK, "", "")
ERR_INTERNAL = ErrorX(HTTPStatus.INTERNAL_SERVER_ERROR, "InternalError", "Internal server error.")
ERR_NOT_FOUND = ErrorX(HTTPStatus.NOT_FOUND, "NotFound", "Resource not found.")
ERR_DB_READ = ErrorX(HTTPStatus.INTERNAL_SERVER_ERROR, "InternalError.DBRead", "Database read failure.")
ERR_DB_WRITE = ErrorX(HTTPStatus.INTERNAL_SERVER_ERROR, "InternalError.DBWrite", "Database write failure.")
ERR_POST_NOT_FOUND = ErrorX(HTTPStatus.NOT_FOUND, "NotFound.PostNotFound", "Post not found.")