"""
repr-verifier — settings loader.

File: src/repr_verifier/config/loader.py
Last updated: 2026-10-18

Purpose
- Load verifier defaults from ``[tool.repr_verifier]`` in ``pyproject.toml``, a
  standalone TOML/YAML file, and ``REPR_VERIFIER_*`` environment variables.

What should be included in this file
- Precedence logic: env > file > defaults.
- TOML loading via ``tomllib``; YAML via ``yaml.safe_load``.
- Deterministic environment variable mapping and coercion.

Functional requirements
- An explicit path that does not exist is an error; a missing discovered
  ``pyproject.toml`` simply yields the defaults.
"""

from __future__ import annotations

import os
import tomllib
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Final

import yaml

from repr_verifier.config.schema import (
    SETTINGS_KEYS,
    VerifierSettings,
    assert_valid_settings,
)
from repr_verifier.constants import ENV_PREFIX, PYPROJECT_FILE, PYPROJECT_TABLE
from repr_verifier.exceptions import ConfigurationError

_BOOLEAN_TRUE: Final[frozenset[str]] = frozenset({"1", "true", "t", "yes", "y", "on"})
_BOOLEAN_FALSE: Final[frozenset[str]] = frozenset({"0", "false", "f", "no", "n", "off"})
_BOOLEAN_ENV_KEYS: Final[frozenset[str]] = frozenset(
    {"hash_code", "inherited_fields", "fail_on_excluded_fields"}
)
_YAML_SUFFIXES: Final[frozenset[str]] = frozenset({".yaml", ".yml"})


class SettingsLoadError(ConfigurationError):
    """Raised when a settings file cannot be read or an override cannot be coerced."""


def load_settings(
    path: str | Path | None = None,
    *,
    environ: Mapping[str, str] | None = None,
    search_from: str | Path | None = None,
) -> VerifierSettings:
    """Load effective settings with deterministic precedence: env > file > defaults."""

    env_map = dict(os.environ if environ is None else environ)
    if path is not None:
        resolved = Path(path)
        if not resolved.is_file():
            raise SettingsLoadError(f"settings file not found: {resolved}")
        file_payload = load_settings_file(resolved)
        prefix = _issue_prefix(resolved)
    else:
        discovered = find_pyproject(Path.cwd() if search_from is None else Path(search_from))
        file_payload = load_settings_file(discovered) if discovered is not None else {}
        prefix = _issue_prefix(discovered)

    merged = dict(file_payload)
    merged.update(collect_env_overrides(env_map))
    return assert_valid_settings(merged, prefix=prefix)


def load_settings_file(path: Path) -> dict[str, Any]:
    """Raw settings mapping from one file; ``pyproject.toml`` is read from its tool table."""

    if path.suffix.lower() in _YAML_SUFFIXES:
        payload = _load_yaml(path)
    else:
        payload = _load_toml(path)

    if path.name == PYPROJECT_FILE:
        for key in PYPROJECT_TABLE:
            section = payload.get(key, {})
            if not isinstance(section, Mapping):
                raise SettingsLoadError(f"{path}: [{'.'.join(PYPROJECT_TABLE)}] must be a table")
            payload = dict(section)
    return payload


def find_pyproject(start: Path) -> Path | None:
    """Nearest ``pyproject.toml`` at or above ``start``."""

    current = start.resolve()
    for candidate_dir in (current, *current.parents):
        candidate = candidate_dir / PYPROJECT_FILE
        if candidate.is_file():
            return candidate
    return None


def collect_env_overrides(environ: Mapping[str, str]) -> dict[str, Any]:
    overrides: dict[str, Any] = {}
    for key in SETTINGS_KEYS:
        env_name = f"{ENV_PREFIX}{key.upper()}"
        if env_name not in environ:
            continue
        raw = environ[env_name]
        if key in _BOOLEAN_ENV_KEYS:
            overrides[key] = _coerce_bool(raw, env_name)
        else:
            overrides[key] = raw
    return overrides


def _issue_prefix(path: Path | None) -> str:
    if path is not None and path.name == PYPROJECT_FILE:
        return ".".join(PYPROJECT_TABLE)
    return ""


def _coerce_bool(raw: str, env_name: str) -> bool:
    lowered = raw.strip().lower()
    if lowered in _BOOLEAN_TRUE:
        return True
    if lowered in _BOOLEAN_FALSE:
        return False
    raise SettingsLoadError(f"{env_name}: expected boolean, got {raw!r}")


def _load_toml(path: Path) -> dict[str, Any]:
    try:
        with path.open("rb") as handle:
            return tomllib.load(handle)
    except tomllib.TOMLDecodeError as exc:
        raise SettingsLoadError(f"{path}: invalid TOML: {exc}") from exc
    except OSError as exc:
        raise SettingsLoadError(f"{path}: {exc}") from exc


def _load_yaml(path: Path) -> dict[str, Any]:
    try:
        with path.open("r", encoding="utf-8") as handle:
            loaded = yaml.safe_load(handle)
    except yaml.YAMLError as exc:
        raise SettingsLoadError(f"{path}: invalid YAML: {exc}") from exc
    except OSError as exc:
        raise SettingsLoadError(f"{path}: {exc}") from exc
    if loaded is None:
        return {}
    if not isinstance(loaded, Mapping):
        raise SettingsLoadError(f"{path}: top-level YAML value must be a mapping")
    return dict(loaded)


__all__ = [
    "SettingsLoadError",
    "collect_env_overrides",
    "find_pyproject",
    "load_settings",
    "load_settings_file",
]
