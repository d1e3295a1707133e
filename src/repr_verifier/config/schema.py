"""
repr-verifier — settings schema and validation.

File: src/repr_verifier/config/schema.py
Last updated: 2026-10-18

Purpose
- Define the verifier defaults that can live in ``pyproject.toml`` (or a
  standalone TOML/YAML file) and validate them strictly.

What should be included in this file
- ``VerifierSettings`` value object.
- Validation returning structured issues (key path + message).

Functional requirements
- Unknown keys and wrong types are reported, never ignored.
- The field value pattern is checked with the same rule the fluent API uses.

Non-functional requirements
- Keep rules deterministic and easy to audit.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any, Final

from repr_verifier.constants import DEFAULT_FIELD_VALUE_PATTERN
from repr_verifier.exceptions import ConfigurationError
from repr_verifier.extraction import FieldPattern
from repr_verifier.rendering import NameStyle, RenderMethod

_BOOLEAN_KEYS: Final[tuple[str, ...]] = (
    "hash_code",
    "inherited_fields",
    "fail_on_excluded_fields",
)
_STRING_KEYS: Final[tuple[str, ...]] = ("field_value_pattern", "null_value")
SETTINGS_KEYS: Final[tuple[str, ...]] = (
    "class_name",
    "render_method",
    *_BOOLEAN_KEYS,
    *_STRING_KEYS,
)


@dataclass(frozen=True, slots=True)
class VerifierSettings:
    """File/env-sourced defaults applied before fluent configuration calls."""

    class_name: NameStyle = NameStyle.NONE
    hash_code: bool = False
    field_value_pattern: str = DEFAULT_FIELD_VALUE_PATTERN
    null_value: str | None = None
    inherited_fields: bool = True
    render_method: RenderMethod = RenderMethod.REPR
    fail_on_excluded_fields: bool = False

    def to_dict(self) -> dict[str, object]:
        return {
            "class_name": self.class_name.value,
            "hash_code": self.hash_code,
            "field_value_pattern": self.field_value_pattern,
            "null_value": self.null_value,
            "inherited_fields": self.inherited_fields,
            "render_method": self.render_method.value,
            "fail_on_excluded_fields": self.fail_on_excluded_fields,
        }


@dataclass(frozen=True, slots=True)
class SettingsIssue:
    """Structured validation issue with a dotted key path."""

    path: str
    message: str


@dataclass(frozen=True, slots=True)
class SettingsValidationResult:
    """Validation result with parsed settings when no issues were found."""

    settings: VerifierSettings | None
    issues: tuple[SettingsIssue, ...]

    @property
    def is_valid(self) -> bool:
        return self.settings is not None and not self.issues


class SettingsValidationError(ConfigurationError):
    """Raised when strict settings validation fails."""

    def __init__(self, issues: Sequence[SettingsIssue]) -> None:
        self.issues = tuple(issues)
        if not self.issues:
            rendered = "unknown validation failure"
        else:
            rendered = "\n".join(f"- {item.path}: {item.message}" for item in self.issues)
        super().__init__(f"invalid repr_verifier settings:\n{rendered}")


def default_settings() -> VerifierSettings:
    return VerifierSettings()


def validate_settings(payload: Mapping[str, Any], *, prefix: str = "") -> SettingsValidationResult:
    """Validate a raw settings mapping and collect every issue."""

    issues: list[SettingsIssue] = []
    parsed: dict[str, Any] = {}

    def path_of(key: str) -> str:
        return f"{prefix}.{key}" if prefix else key

    for key in sorted(payload):
        if key not in SETTINGS_KEYS:
            issues.append(SettingsIssue(path_of(str(key)), "unknown key"))

    for key in _BOOLEAN_KEYS:
        if key not in payload:
            continue
        value = payload[key]
        if not isinstance(value, bool):
            issues.append(SettingsIssue(path_of(key), "expected boolean"))
            continue
        parsed[key] = value

    for key in _STRING_KEYS:
        if key not in payload:
            continue
        value = payload[key]
        if value is None and key == "null_value":
            continue
        if not isinstance(value, str):
            issues.append(SettingsIssue(path_of(key), "expected string"))
            continue
        parsed[key] = value

    if "field_value_pattern" in parsed:
        try:
            FieldPattern.compile(parsed["field_value_pattern"])
        except ConfigurationError as exc:
            issues.append(SettingsIssue(path_of("field_value_pattern"), str(exc)))

    for key, enum_type in (("class_name", NameStyle), ("render_method", RenderMethod)):
        if key not in payload:
            continue
        value = payload[key]
        allowed = ", ".join(item.value for item in enum_type)
        if not isinstance(value, str):
            issues.append(SettingsIssue(path_of(key), f"expected one of: {allowed}"))
            continue
        try:
            parsed[key] = enum_type(value.strip().lower())
        except ValueError:
            issues.append(SettingsIssue(path_of(key), f"expected one of: {allowed}"))

    if issues:
        return SettingsValidationResult(settings=None, issues=tuple(issues))
    return SettingsValidationResult(settings=VerifierSettings(**parsed), issues=())


def assert_valid_settings(payload: Mapping[str, Any], *, prefix: str = "") -> VerifierSettings:
    result = validate_settings(payload, prefix=prefix)
    if not result.is_valid or result.settings is None:
        raise SettingsValidationError(result.issues)
    return result.settings


__all__ = [
    "SETTINGS_KEYS",
    "SettingsIssue",
    "SettingsValidationError",
    "SettingsValidationResult",
    "VerifierSettings",
    "assert_valid_settings",
    "default_settings",
    "validate_settings",
]
