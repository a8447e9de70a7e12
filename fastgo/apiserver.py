"""The HTTP API server: application routes and a signal-aware run loop."""

from __future__ import annotations

import logging
import signal
import threading
from dataclasses import dataclass, field
from http import HTTPStatus
from typing import Any

from flask import Flask, Response
from werkzeug.exceptions import HTTPException
from werkzeug.serving import make_server

from fastgo.core import write_response
from fastgo.errorsx import ERR_NOT_FOUND
from fastgo.middleware import install
from fastgo.mysql_options import MySQLOptions, split_host_port

logger = logging.getLogger(__name__)

_SHUTDOWN_TIMEOUT = 10.0
_SIGNALS = (signal.SIGINT, signal.SIGTERM)


def create_app() -> Flask:
    """Build the Flask application with its routes, error handlers and middleware."""
    app = Flask(__name__)

    def not_found(_exc: Exception) -> Response:
        return write_response(ERR_NOT_FOUND.with_message("Page not found"), None)

    app.register_error_handler(HTTPStatus.NOT_FOUND, not_found)
    app.register_error_handler(HTTPStatus.METHOD_NOT_ALLOWED, not_found)

    @app.errorhandler(Exception)
    def _recover(exc: Exception) -> Any:
        if isinstance(exc, HTTPException):
            return exc
        logger.error("Recovered from panic", exc_info=exc)
        return Response(status=HTTPStatus.INTERNAL_SERVER_ERROR)

    @app.get("/healthz")
    def healthz() -> Response:
        return write_response(None, {"Status": "ok"})

    install(app)
    return app


@dataclass
class Config:
    """Application settings used to build the server."""

    mysql_options: MySQLOptions = field(default_factory=MySQLOptions)
    addr: str = "0.0.0.0:6666"

    def new_server(self) -> Server:
        """Create a server for this configuration."""
        return Server(cfg=self, app=create_app())


@dataclass
class Server:
    """An HTTP server bound to a configuration and an application."""

    cfg: Config
    app: Flask

    def run(self) -> None:
        """Serve requests until SIGINT or SIGTERM, then shut down within ten seconds."""
        host, port_str = split_host_port(self.cfg.addr)
        logger.info(
            "Start to listening the incoming requests on http address",
            extra={"addr": self.cfg.addr},
        )
        httpd = make_server(host, int(port_str), self.app, threaded=True)
        serving = threading.Thread(target=httpd.serve_forever, daemon=True)

        quit_event = threading.Event()
        previous: dict[int, Any] = {}
        if threading.current_thread() is threading.main_thread():
            for sig in _SIGNALS:
                previous[sig] = signal.signal(sig, lambda _signum, _frame: quit_event.set())
        try:
            serving.start()
            while not quit_event.wait(0.5):
                pass

            logger.info("Shutting down server...")
            stopper = threading.Thread(target=httpd.shutdown, daemon=True)
            stopper.start()
            stopper.join(_SHUTDOWN_TIMEOUT)
            if stopper.is_alive():
                err = TimeoutError("server shutdown timed out")
                logger.error("Insecure Server forced to shutdown", extra={"err": str(err)})
                raise err
            httpd.server_close()
        finally:
            for sig, handler in previous.items():
                signal.signal(sig, handler)

        logger.info("Server exited")