"""Connection options for the MySQL database."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import timedelta

from sqlalchemy import URL, create_engine
from sqlalchemy.engine import Engine

PASSWORD = "password"

_PORT_RE = re.compile(r"[+-]?[0-9]+")


def split_host_port(addr: str) -> tuple[str, str]:
    """Split "host:port" or "[host]:port" into host and port, rejecting malformed input."""

    def fail(why: str) -> ValueError:
        return ValueError(f"address {addr}: {why}")

    last_colon = addr.rfind(":")
    if last_colon < 0:
        raise fail("missing port in address")

    if addr.startswith("["):
        end = addr.find("]")
        if end < 0:
            raise fail("missing ']' in address")
        rest = addr[end + 1 :]
        if not rest or rest[0] != ":":
            raise fail("missing port in address")
        if end + 1 != last_colon:
            raise fail("too many colons in address")
        host = addr[1:end]
        if "[" in addr[1:]:
            raise fail("unexpected '[' in address")
        if "]" in rest:
            raise fail("unexpected ']' in address")
        return host, addr[last_colon + 1 :]

    host = addr[:last_colon]
    if ":" in host:
        raise fail("too many colons in address")
    if "[" in addr:
        raise fail("unexpected '[' in address")
    if "]" in addr:
        raise fail("unexpected ']' in address")
    return host, addr[last_colon + 1 :]


def _parse_port(port_str: str) -> int | None:
    if not _PORT_RE.fullmatch(port_str):
        return None
    port = int(port_str)
    return port if 1 <= port <= 65535 else None


@dataclass
class MySQLOptions:
    """Address, credentials and pool limits for a MySQL database."""

    addr: str = "127.0.0.1:3306"
    username: str = "onex"
    password: str = field(default=PASSWORD, repr=False)
    database: str = "onex"
    max_idle_connections: int = 100
    max_open_connections: int = 100
    max_connection_life_time: timedelta = timedelta(seconds=10)

    def validate(self) -> None:
        """Raise ValueError if any option is unusable."""
        if not self.addr:
            raise ValueError("MySQL server address cannot be empty")
        try:
            host, port_str = split_host_port(self.addr)
        except ValueError as exc:
            raise ValueError(f"invalid MySQL address format '{self.addr}': {exc}") from exc
        if _parse_port(port_str) is None:
            raise ValueError(f"invalid MySQL port: {port_str}")
        if not host:
            raise ValueError("MySQL hostname cannot be empty")
        if not self.username:
            raise ValueError("MySQL username cannot be empty")
        if not self.password:
            raise ValueError("MySQL password cannot be empty")
        if not self.database:
            raise ValueError("MySQL database name cannot be empty")
        if self.max_idle_connections <= 0:
            raise ValueError("MySQL max idle connections must be greater than 0")
        if self.max_open_connections <= 0:
            raise ValueError("MySQL max open connections must be greater than 0")
        if self.max_idle_connections > self.max_open_connections:
            raise ValueError("MySQL max idle connections cannot be greater than max open connections")
        if self.max_connection_life_time <= timedelta(0):
            raise ValueError("MySQL max connection lifetime must be greater than 0")

    def dsn(self) -> str:
        """Return the data source name describing this connection."""
        return (
            f"{self.username}:{self.password}@tcp({self.addr})/{self.database}"
            "?charset=utf8&parseTime=true&loc=local"
        )

    def new_db(self) -> Engine:
        """Create a pooled SQLAlchemy engine for this database; no connection is made yet."""
        host, port_str = split_host_port(self.addr)
        url = URL.create(
            "mysql+pymysql",
            username=self.username,
            password=self.password,
            host=host,
            port=int(port_str),
            database=self.database,
            query={"charset": "utf8"},
        )
        lifetime = int(self.max_connection_life_time.total_seconds())
        return create_engine(
            url,
            pool_size=self.max_idle_connections,
            max_overflow=max(0, self.max_open_connections - self.max_idle_connections),
            pool_recycle=lifetime if lifetime > 0 else -1,
        )