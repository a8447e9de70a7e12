"""Machine-derived salt for resource identifiers."""

from __future__ import annotations

import hashlib
import os
import socket
from pathlib import Path

_MACHINE_ID_FILES: tuple[Path, ...] = (
    Path("/etc/machine-id"),
    Path("/sys/class/dmi/id/product_uuid"),
)

_FNV64_OFFSET_BASIS = 0xCBF29CE484222325
_FNV64_PRIME = 0x100000001B3
_MASK64 = (1 << 64) - 1


def _fnv1a64(data: bytes) -> int:
    value = _FNV64_OFFSET_BASIS
    for byte in data:
        value ^= byte
        value = (value * _FNV64_PRIME) & _MASK64
    return value


def _read_platform_machine_id() -> bytes:
    for path in _MACHINE_ID_FILES:
        try:
            data = path.read_bytes()
        except OSError:
            continue
        if data:
            return data
    return b""


def read_machine_id() -> bytes:
    """Return three bytes identifying this machine, or random bytes if none can be found."""
    machine_id = _read_platform_machine_id()
    if not machine_id:
        try:
            machine_id = socket.gethostname().encode()
        except OSError:
            machine_id = b""

    if machine_id:
        return hashlib.sha256(machine_id).digest()[:3]

    try:
        return os.urandom(3)
    except NotImplementedError as exc:
        raise RuntimeError("id: cannot get hostname or generate a random number") from exc


def salt() -> int:
    """Return the 64-bit FNV-1a hash of the machine ID."""
    return _fnv1a64(read_machine_id())