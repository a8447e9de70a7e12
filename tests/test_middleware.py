import json
import uuid
from datetime import datetime, timezone

import pytest
from flask import Flask
from werkzeug.http import parse_date

from fastgo.contextx import request_id
from fastgo.core import write_response
from fastgo.middleware import cors_headers, install, no_cache_headers


@pytest.fixture
def client():
    app = Flask("middleware-test")

    @app.get("/ping")
    def ping():
        return write_response(None, {"rid": request_id()})

    install(app)
    return app.test_client()


def test_no_cache_headers_fixed_values():
    headers = no_cache_headers(datetime(2024, 1, 2, 3, 4, 5, tzinfo=timezone.utc))
    assert headers["Cache-Control"] == "no-cache, no-store, max-age=0, must-revalidate, value"
    assert headers["Expires"] == "Thu, 01 Jan 1970 00:00:00 GMT"
    assert headers["Last-Modified"] == "Tue, 02 Jan 2024 03:04:05 GMT"


def test_no_cache_last_modified_round_trips():
    now = datetime(2023, 6, 7, 8, 9, 10, tzinfo=timezone.utc)
    assert parse_date(no_cache_headers(now)["Last-Modified"]) == now


def test_cors_headers_values():
    headers = cors_headers()
    assert headers["Access-Control-Allow-Origin"] == "*"
    assert headers["Allow"] == "HEAD,GET,POST,PUT,PATCH,DELETE,OPTIONS"


def test_get_sets_no_cache_and_generated_request_id(client):
    resp = client.get("/ping")
    assert resp.status_code == 200
    assert resp.headers["Cache-Control"] == no_cache_headers()["Cache-Control"]
    rid = resp.headers["x-request-id"]
    assert str(uuid.UUID(rid)) == rid
    assert json.loads(resp.get_data(as_text=True)) == {"rid": rid}


def test_incoming_request_id_is_kept(client):
    resp = client.get("/ping", headers={"x-request-id": "req-1"})
    assert resp.headers["x-request-id"] == "req-1"
    assert json.loads(resp.get_data(as_text=True)) == {"rid": "req-1"}


def test_each_request_gets_its_own_id(client):
    first = client.get("/ping").headers["x-request-id"]
    second = client.get("/ping").headers["x-request-id"]
    assert first != second
    assert len(first) == len(second) == 36


def test_options_is_answered_by_cors(client):
    resp = client.options("/ping")
    assert resp.status_code == 200
    assert resp.headers["Access-Control-Allow-Methods"] == cors_headers()["Access-Control-Allow-Methods"]
    assert resp.headers["Content-Type"] == "application/json"
    assert resp.get_data() == b""
    assert "x-request-id" not in resp.headers


def test_options_on_unknown_path_is_ok(client):
    resp = client.options("/missing")
    assert resp.status_code == 200
    assert resp.headers["Access-Control-Allow-Origin"] == "*"