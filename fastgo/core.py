"""Uniform JSON responses for successes and errors."""

from __future__ import annotations

import json
from dataclasses import dataclass
from http import HTTPStatus
from typing import Any

from flask import Response

from fastgo.errorsx import from_error

_JSON_CONTENT_TYPE = "application/json; charset=utf-8"


@dataclass
class ErrorResponse:
    """Body returned to clients when a request fails."""

    reason: str = ""
    message: str = ""

    def to_dict(self) -> dict[str, str]:
        """Return the JSON body, leaving out empty fields."""
        return {key: value for key, value in (("reason", self.reason), ("message", self.message)) if value}


def _json_response(status: int, payload: Any) -> Response:
    body = json.dumps(payload, separators=(",", ":"), ensure_ascii=False)
    return Response(body, status=int(status), content_type=_JSON_CONTENT_TYPE)


def write_response(err: BaseException | None, data: Any) -> Response:
    """Build a JSON error response if err is set, otherwise a 200 response with data."""
    if err is not None:
        errx = from_error(err)
        return _json_response(errx.code, ErrorResponse(errx.reason, errx.message).to_dict())
    return _json_response(HTTPStatus.OK, data)