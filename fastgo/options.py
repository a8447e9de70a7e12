"""Command-line and file options of the API server."""

from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import timedelta
from fractions import Fraction
from typing import Any, Callable

from fastgo.apiserver import Config
from fastgo.mysql_options import MySQLOptions, split_host_port

_PORT_RE = re.compile(r"[+-]?[0-9]+")
_DURATION_RE = re.compile(r"[+-]?(?:(?:\d+(?:\.\d*)?|\.\d+)(?:ns|us|µs|μs|ms|s|m|h))+")
_DURATION_PART_RE = re.compile(r"(\d+(?:\.\d*)?|\.\d+)(ns|us|µs|μs|ms|s|m|h)")
_UNIT_NS = {
    "ns": 1,
    "us": 1_000,
    "µs": 1_000,
    "μs": 1_000,
    "ms": 1_000_000,
    "s": 1_000_000_000,
    "m": 60_000_000_000,
    "h": 3_600_000_000_000,
}


def _valid_port(port_str: str) -> bool:
    return bool(_PORT_RE.fullmatch(port_str)) and 1 <= int(port_str) <= 65535


def _as_str(value: Any, key: str) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "1" if value else "0"
    if isinstance(value, (str, int, float)):
        return str(value)
    raise ValueError(f"'{key}' expected a string, got {type(value).__name__}")


def _as_int(value: Any, key: str) -> int:
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value)
    if isinstance(value, str):
        if value == "":
            return 0
        try:
            return int(value, 10)
        except ValueError as exc:
            raise ValueError(f"cannot parse '{key}' as int: {value!r}") from exc
    raise ValueError(f"'{key}' expected an int, got {type(value).__name__}")


def _parse_duration(text: str, key: str) -> timedelta:
    if text in ("0", "+0", "-0"):
        return timedelta(0)
    if not _DURATION_RE.fullmatch(text):
        raise ValueError(f"'{key}': invalid duration {text!r}")
    total = sum(
        (Fraction(number) * _UNIT_NS[unit] for number, unit in _DURATION_PART_RE.findall(text)),
        Fraction(0),
    )
    if text.startswith("-"):
        total = -total
    return timedelta(microseconds=float(total / 1000))


def _as_duration(value: Any, key: str) -> timedelta:
    if isinstance(value, timedelta):
        return value
    if isinstance(value, bool):
        raise ValueError(f"'{key}' expected a duration, got bool")
    if isinstance(value, (int, float)):
        return timedelta(microseconds=value / 1000)
    if isinstance(value, str):
        return _parse_duration(value, key)
    raise ValueError(f"'{key}' expected a duration, got {type(value).__name__}")


_MYSQL_FIELDS: dict[str, tuple[str, Callable[[Any, str], Any]]] = {
    "addr": ("addr", _as_str),
    "username": ("username", _as_str),
    "password": ("password", _as_str),
    "database": ("database", _as_str),
    "max-idle-connections": ("max_idle_connections", _as_int),
    "max-open-connections": ("max_open_connections", _as_int),
    "max-connection-left-time": ("max_connection_life_time", _as_duration),
}


def _lowered(data: Mapping[Any, Any]) -> dict[str, Any]:
    return {str(key).lower(): value for key, value in data.items()}


@dataclass
class ServerOptions:
    """All options that configure the API server."""

    mysql_options: MySQLOptions = field(default_factory=MySQLOptions)
    addr: str = "0.0.0.0:6666"

    @classmethod
    def from_mapping(cls, data: Mapping[Any, Any]) -> ServerOptions:
        """Build options from a nested mapping, keeping defaults for missing keys."""
        opts = cls()
        top = _lowered(data)
        if "addr" in top:
            opts.addr = _as_str(top["addr"], "addr")
        mysql = top.get("mysql")
        if mysql is not None:
            if not isinstance(mysql, Mapping):
                raise ValueError("'mysql' expected a mapping")
            values = _lowered(mysql)
            for key, (attr, convert) in _MYSQL_FIELDS.items():
                if key in values:
                    setattr(opts.mysql_options, attr, convert(values[key], f"mysql.{key}"))
        return opts

    def validate(self) -> None:
        """Raise ValueError if any option is unusable."""
        mysql = self.mysql_options
        if not mysql.addr:
            raise ValueError("MYSQL server address cannot be empty")
        try:
            host, port_str = split_host_port(mysql.addr)
        except ValueError as exc:
            raise ValueError(f"invalid MySQL address format '{mysql.addr}': '{exc}'") from exc
        if not _valid_port(port_str):
            raise ValueError(f"invalid MySQL port: {port_str}")
        if not host:
            raise ValueError("MYSQL hostname cannot be empty")
        if not mysql.username:
            raise ValueError("MySQL username cannot be empty")
        if not mysql.password:
            raise ValueError("MySQL password cannot be empty")
        if not mysql.database:
            raise ValueError("MySQL database name cannot be empty")
        if mysql.max_idle_connections <= 0:
            raise ValueError("MySQL max idle connections must be greater than 0")
        if mysql.max_open_connections <= 0:
            raise ValueError("MySQL max open connections must be greater than 0")
        if mysql.max_idle_connections > mysql.max_open_connections:
            raise ValueError("MySQL max idle connections cannot be greater than max open connections")
        if mysql.max_connection_life_time <= timedelta(0):
            raise ValueError("MySQL max connection lifetime must be greater than 0")

        if not self.addr:
            raise ValueError("server address cannot be empty")
        try:
            _, port_str = split_host_port(self.addr)
        except ValueError as exc:
            raise ValueError(f"invalid server address format '{self.addr}': '{exc}'") from exc
        if not _valid_port(port_str):
            raise ValueError(f"invalid server port: {port_str}")

    def config(self) -> Config:
        """Return the application configuration built from these options."""
        return Config(mysql_options=self.mysql_options, addr=self.addr)