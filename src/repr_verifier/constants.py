"""Stable constants shared across the verifier modules."""

from __future__ import annotations

from typing import Final

# Field value template: first ``%s`` is the field name, second ``%s`` the value.
PLACEHOLDER: Final[str] = "%s"
PLACEHOLDER_COUNT: Final[int] = 2
DEFAULT_FIELD_VALUE_PATTERN: Final[str] = r"(?<![\w.])%s=%s(?=, |\)|\]|\}|>|$)"

# Nested instances built for fields typed with arbitrary classes.
MAX_NESTING_DEPTH: Final[int] = 3

# Settings sources.
PYPROJECT_FILE: Final[str] = "pyproject.toml"
PYPROJECT_TABLE: Final[tuple[str, ...]] = ("tool", "repr_verifier")
ENV_PREFIX: Final[str] = "REPR_VERIFIER_"


__all__ = [
    "DEFAULT_FIELD_VALUE_PATTERN",
    "ENV_PREFIX",
    "MAX_NESTING_DEPTH",
    "PLACEHOLDER",
    "PLACEHOLDER_COUNT",
    "PYPROJECT_FILE",
    "PYPROJECT_TABLE",
]
