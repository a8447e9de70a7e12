"""Build version information and the --version command-line flag."""

from __future__ import annotations

import argparse
import enum
import json
import platform
import sys
from dataclasses import dataclass

_GIT_VERSION = "v0.0.0-master+$Format:%H$"
_GIT_COMMIT = "$Format:%H$"
_GIT_TREE_STATE = ""
_BUILD_DATE = "1970-01-01T00:00:00Z"

_RAW = "raw"
_MAX_COL_WIDTH = 80
_TRUE_STRINGS = frozenset({"1", "t", "T", "TRUE", "true", "True"})
_FALSE_STRINGS = frozenset({"0", "f", "F", "FALSE", "false", "False"})


@dataclass(frozen=True)
class Info:
    """Version information about the running build."""

    git_version: str
    git_commit: str
    git_tree_state: str
    build_date: str
    python_version: str
    compiler: str
    platform: str

    def __str__(self) -> str:
        return self.git_version

    def _pairs(self) -> list[tuple[str, str]]:
        return [
            ("gitVersion", self.git_version),
            ("gitCommit", self.git_commit),
            ("gitTreeState", self.git_tree_state),
            ("buildDate", self.build_date),
            ("pythonVersion", self.python_version),
            ("compiler", self.compiler),
            ("platform", self.platform),
        ]

    def to_json(self) -> str:
        """Return the information as compact JSON."""
        return json.dumps(dict(self._pairs()), separators=(",", ":"))

    def text(self) -> str:
        """Return the information as a two-column table with right-aligned labels."""
        rows = [(f"{key}:", value[:_MAX_COL_WIDTH]) for key, value in self._pairs()]
        width = max(len(label) for label, _ in rows)
        return "\n".join(f"{label:>{width}} {value}" for label, value in rows)


def get() -> Info:
    """Return the version information of this build."""
    return Info(
        git_version=_GIT_VERSION,
        git_commit=_GIT_COMMIT,
        git_tree_state=_GIT_TREE_STATE,
        build_date=_BUILD_DATE,
        python_version=platform.python_version(),
        compiler=platform.python_implementation(),
        platform=f"{sys.platform}/{platform.machine()}",
    )


class VersionFlag(enum.Enum):
    """State of the --version flag."""

    NOT_SET = 0
    ENABLED = 1
    RAW = 2

    def __str__(self) -> str:
        if self is VersionFlag.RAW:
            return _RAW
        return "true" if self is VersionFlag.ENABLED else "false"


def parse_version_flag(value: str) -> VersionFlag:
    """Parse a --version value: "raw" or a boolean spelling."""
    if value == _RAW:
        return VersionFlag.RAW
    if value in _TRUE_STRINGS:
        return VersionFlag.ENABLED
    if value in _FALSE_STRINGS:
        return VersionFlag.NOT_SET
    raise ValueError(f"invalid version flag value: {value!r}")


def add_flags(parser: argparse.ArgumentParser) -> None:
    """Register --version on the parser; a bare --version means true."""
    parser.add_argument(
        "--version",
        nargs="?",
        const=VersionFlag.ENABLED,
        default=VersionFlag.NOT_SET,
        type=parse_version_flag,
        metavar="version",
        help="Print version information and quit",
    )


def print_and_exit_if_requested(flag: VersionFlag) -> None:
    """Print version information and exit with status 0 if the flag asks for it."""
    if flag is VersionFlag.RAW:
        print(get().text())
        sys.exit(0)
    if flag is VersionFlag.ENABLED:
        print(str(get()))
        sys.exit(0)