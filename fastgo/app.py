"""Command-line entry point of the API server."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from datetime import datetime
from typing import Any

from fastgo.config import Settings, file_path, load_settings
from fastgo.options import ServerOptions
from fastgo.version import add_flags, print_and_exit_if_requested

_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "error": logging.ERROR,
}
_LEVEL_NAMES = {logging.WARNING: "WARN", logging.CRITICAL: "ERROR"}
_STANDARD_ATTRS = frozenset(logging.LogRecord("", 0, "", 0, "", (), None).__dict__) | {
    "message",
    "asctime",
    "taskName",
}

_installed: list[logging.Handler] = []


def _record_fields(record: logging.LogRecord) -> list[tuple[str, Any]]:
    timestamp = datetime.fromtimestamp(record.created).astimezone().isoformat(timespec="milliseconds")
    fields: list[tuple[str, Any]] = [
        ("time", timestamp),
        ("level", _LEVEL_NAMES.get(record.levelno, record.levelname)),
        ("msg", record.getMessage()),
    ]
    fields.extend((key, value) for key, value in record.__dict__.items() if key not in _STANDARD_ATTRS)
    if record.exc_info:
        fields.append(("exc", logging.Formatter().formatException(record.exc_info)))
    return fields


class _JSONFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        return json.dumps(dict(_record_fields(record)), ensure_ascii=False, default=str)


class _TextFormatter(logging.Formatter):
    @staticmethod
    def _quote(value: Any) -> str:
        text = str(value)
        if not text or not text.isprintable() or any(ch in text for ch in ' ="'):
            return json.dumps(text, ensure_ascii=False)
        return text

    def format(self, record: logging.LogRecord) -> str:
        return " ".join(f"{key}={self._quote(value)}" for key, value in _record_fields(record))


def new_fastgo_command() -> argparse.ArgumentParser:
    """Build the command-line parser of fg-apiserver."""
    parser = argparse.ArgumentParser(
        prog="fg-apiserver",
        description=(
            "A very lightweight full go project, designed to help beginners quickly "
            "learn Go project development."
        ),
    )
    parser.add_argument(
        "-c",
        "--config",
        default=file_path(),
        help="Path to the fg-apiserver configuration file.",
    )
    add_flags(parser)
    return parser


def init_log(settings: Settings) -> logging.Handler:
    """Configure the root logger from the log.format, log.level and log.output settings."""
    level = _LEVELS.get(settings.get_string("log.level"), logging.INFO)
    output = settings.get_string("log.output")
    fmt = settings.get_string("log.format")

    handler: logging.Handler
    if output in ("", "stdout"):
        handler = logging.StreamHandler(sys.stdout)
    else:
        handler = logging.FileHandler(output, mode="a", encoding="utf-8")
    handler.setFormatter(_TextFormatter() if fmt == "text" else _JSONFormatter())

    root = logging.getLogger()
    for old in _installed:
        root.removeHandler(old)
        old.close()
    _installed[:] = [handler]
    root.handlers = [handler]
    root.setLevel(level)
    return handler


def run(opts: ServerOptions, settings: Settings) -> None:
    """Set up logging, validate the options and serve until told to stop."""
    init_log(settings)
    opts.validate()
    server = opts.config().new_server()
    server.run()


def main(argv: list[str] | None = None) -> int:
    """Run fg-apiserver and return its exit status."""
    args = new_fastgo_command().parse_args(argv)
    print_and_exit_if_requested(args.version)
    settings = load_settings(args.config)
    try:
        opts = ServerOptions.from_mapping(settings.as_mapping())
        run(opts, settings)
    except Exception as exc:  # noqa: BLE001 - reported to the user as the command's error
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())