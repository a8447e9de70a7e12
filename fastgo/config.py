"""Configuration file lookup and environment-variable overrides."""

from __future__ import annotations

import copy
import os
import sys
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml

DEFAULT_HOME_DIR = ".fastgo"
DEFAULT_CONFIG_NAME = "fg-apiserver.yaml"
ENV_PREFIX = "FASTGO"


def _home_dir() -> Path:
    try:
        return Path.home()
    except (RuntimeError, KeyError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(1)


def search_dirs() -> list[str]:
    """Return the directories searched for the default configuration file."""
    return [str(_home_dir() / DEFAULT_HOME_DIR), "."]


def file_path() -> str:
    """Return the full path of the default configuration file."""
    return str(_home_dir() / DEFAULT_HOME_DIR / DEFAULT_CONFIG_NAME)


def _lower_keys(data: Mapping[Any, Any]) -> dict[str, Any]:
    return {
        str(key).lower(): _lower_keys(value) if isinstance(value, Mapping) else value
        for key, value in data.items()
    }


def _env_name(key: str) -> str:
    name = f"{ENV_PREFIX}_{key}".upper()
    return name.replace(".", "_").replace("-", "_")


class Settings:
    """Configuration values read from a file, with environment variables taking precedence."""

    def __init__(self, data: Mapping[Any, Any] | None = None, environ: Mapping[str, str] | None = None) -> None:
        self._data = _lower_keys(data or {})
        self._environ = os.environ if environ is None else environ

    def _env(self, key: str) -> str | None:
        return self._environ.get(_env_name(key)) or None

    def get(self, key: str) -> Any:
        """Return the value for a dotted, case-insensitive key, or None if it is unset."""
        key = key.lower()
        env_value = self._env(key)
        if env_value is not None:
            return env_value
        node: Any = self._data
        for part in key.split("."):
            if not isinstance(node, Mapping) or part not in node:
                return None
            node = node[part]
        return node

    def get_string(self, key: str) -> str:
        """Return the value for a key as a string; unset values give an empty string."""
        value = self.get(key)
        if value is None:
            return ""
        if isinstance(value, bool):
            return "true" if value else "false"
        return str(value)

    def as_mapping(self) -> dict[str, Any]:
        """Return all file settings as a nested mapping, with environment overrides applied."""

        def overlay(node: dict[str, Any], prefix: str) -> dict[str, Any]:
            result: dict[str, Any] = {}
            for key, value in node.items():
                path = f"{prefix}{key}"
                if isinstance(value, dict):
                    result[key] = overlay(value, f"{path}.")
                else:
                    env_value = self._env(path)
                    result[key] = env_value if env_value is not None else copy.deepcopy(value)
            return result

        return overlay(self._data, "")


def _read_config(path: Path) -> dict[str, Any]:
    try:
        with path.open(encoding="utf-8") as handle:
            data = yaml.safe_load(handle)
    except (OSError, yaml.YAMLError, UnicodeDecodeError):
        return {}
    return data if isinstance(data, dict) else {}


def load_settings(config_file: str | None = None, environ: Mapping[str, str] | None = None) -> Settings:
    """Read the given configuration file, or search the default locations; failures give empty settings."""
    if config_file:
        data = _read_config(Path(config_file))
    else:
        data = {}
        for directory in search_dirs():
            candidate = Path(directory) / DEFAULT_CONFIG_NAME
            if candidate.is_file():
                data = _read_config(candidate)
                break
    return Settings(data, environ)