"""
repr-verifier — error model and message generator.

File: src/repr_verifier/report.py
Last updated: 2026-10-18

Purpose
- Typed discrepancy records collected per class, and the deterministic
  multi-class failure message built from them.

What should be included in this file
- ``VerificationError``: closed tagged variant discriminated by ``ErrorKind``.
- ``ClassResult`` / ``VerificationReport``: immutable, registration-ordered.
- ``generate_error_message`` and ``render_report``.

Functional requirements
- All mismatched fields of one class travel in a single ``FIELD_VALUE`` error.
- Messages are byte-identical for identical reports.
"""

from __future__ import annotations

import json
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from enum import StrEnum

JSONScalar = str | int | float | bool | None
JSONValue = JSONScalar | list["JSONValue"] | dict[str, "JSONValue"]

_INDENT = "    "


class ErrorKind(StrEnum):
    """Discriminator of ``VerificationError``."""

    CLASS_NAME = "class_name"
    HASH_CODE = "hash_code"
    FIELD_VALUE = "field_value"
    EXCLUDED_FIELD = "excluded_field"
    CONSTRUCTION = "construction"


@dataclass(frozen=True, slots=True)
class FieldValue:
    """One offending field: expected text and what the extractor found."""

    field_name: str
    expected: str | None
    actual: str | None = None

    def describe(self) -> str:
        found = "not found" if self.actual is None else f"found {self.actual}"
        if self.expected is None:
            return f"{self.field_name}: {found}"
        return f"{self.field_name}: expected {self.expected}, {found}"

    def to_dict(self) -> dict[str, JSONValue]:
        return {"field": self.field_name, "expected": self.expected, "actual": self.actual}


@dataclass(frozen=True, slots=True)
class VerificationError:
    """Tagged discrepancy record; payload fields depend on ``kind``."""

    kind: ErrorKind
    expected_segment: str | None = None
    expected_hash: int | None = None
    entries: tuple[FieldValue, ...] = ()
    reason: str | None = None

    def __post_init__(self) -> None:
        kind = ErrorKind(self.kind)
        object.__setattr__(self, "kind", kind)
        object.__setattr__(self, "entries", tuple(self.entries))
        payload = {
            "expected_segment": self.expected_segment is not None,
            "expected_hash": self.expected_hash is not None,
            "entries": bool(self.entries),
            "reason": self.reason is not None,
        }
        required = _PAYLOAD_BY_KIND[kind]
        present = {name for name, is_set in payload.items() if is_set}
        if present != {required}:
            raise ValueError(f"{kind.value} error requires exactly the {required!r} payload")

    @classmethod
    def class_name(cls, expected_segment: str) -> VerificationError:
        return cls(kind=ErrorKind.CLASS_NAME, expected_segment=expected_segment)

    @classmethod
    def hash_code(cls, expected_hash: int) -> VerificationError:
        return cls(kind=ErrorKind.HASH_CODE, expected_hash=expected_hash)

    @classmethod
    def field_value(cls, entries: Iterable[FieldValue]) -> VerificationError:
        return cls(kind=ErrorKind.FIELD_VALUE, entries=tuple(entries))

    @classmethod
    def excluded_field(cls, entries: Iterable[FieldValue]) -> VerificationError:
        return cls(kind=ErrorKind.EXCLUDED_FIELD, entries=tuple(entries))

    @classmethod
    def construction(cls, reason: str) -> VerificationError:
        return cls(kind=ErrorKind.CONSTRUCTION, reason=reason)

    def describe(self) -> list[str]:
        if self.kind is ErrorKind.CLASS_NAME:
            return [f"- class name: expected {self.expected_segment!r}, not found"]
        if self.kind is ErrorKind.HASH_CODE:
            return [f"- hash code: expected {self.expected_hash}, not found"]
        if self.kind is ErrorKind.CONSTRUCTION:
            return [f"- construction: {self.reason}"]
        title = "field values" if self.kind is ErrorKind.FIELD_VALUE else "excluded fields present"
        return [f"- {title}:", *(f"{_INDENT}{item.describe()}" for item in self.entries)]

    def to_dict(self) -> dict[str, JSONValue]:
        payload: dict[str, JSONValue] = {"kind": self.kind.value}
        if self.kind is ErrorKind.CLASS_NAME:
            payload["expected_segment"] = self.expected_segment
        elif self.kind is ErrorKind.HASH_CODE:
            payload["expected_hash"] = self.expected_hash
        elif self.kind is ErrorKind.CONSTRUCTION:
            payload["reason"] = self.reason
        else:
            payload["entries"] = [item.to_dict() for item in self.entries]
        return payload


_PAYLOAD_BY_KIND: dict[ErrorKind, str] = {
    ErrorKind.CLASS_NAME: "expected_segment",
    ErrorKind.HASH_CODE: "expected_hash",
    ErrorKind.FIELD_VALUE: "entries",
    ErrorKind.EXCLUDED_FIELD: "entries",
    ErrorKind.CONSTRUCTION: "reason",
}


@dataclass(frozen=True, slots=True)
class ClassResult:
    """Outcome for one verified class."""

    target: type
    rendered: str | None
    errors: tuple[VerificationError, ...] = ()

    @property
    def passed(self) -> bool:
        return not self.errors

    @property
    def class_label(self) -> str:
        return qualified_name(self.target)

    def to_dict(self) -> dict[str, JSONValue]:
        return {
            "class": self.class_label,
            "rendered": self.rendered,
            "passed": self.passed,
            "errors": [item.to_dict() for item in self.errors],
        }


@dataclass(frozen=True, slots=True)
class VerificationReport:
    """Registration-ordered results of one ``verify()`` run."""

    results: tuple[ClassResult, ...] = ()

    @property
    def passed(self) -> bool:
        return all(item.passed for item in self.results)

    @property
    def failures(self) -> tuple[ClassResult, ...]:
        return tuple(item for item in self.results if not item.passed)

    def errors_for(self, target: type) -> tuple[VerificationError, ...]:
        for item in self.results:
            if item.target is target:
                return item.errors
        raise KeyError(qualified_name(target))

    def to_dict(self) -> dict[str, JSONValue]:
        return {
            "passed": self.passed,
            "classes": [item.to_dict() for item in self.results],
        }

    def to_json(self) -> str:
        """Canonical JSON string suitable for comparison."""

        return json.dumps(self.to_dict(), sort_keys=True, separators=(",", ":"), ensure_ascii=False)


def qualified_name(cls: type) -> str:
    return f"{cls.__module__}.{cls.__qualname__}"


def generate_error_message(
    target: type,
    rendered: str | None,
    errors: Sequence[VerificationError],
) -> str:
    """Labeled block for one class: name, rendered text, one entry per error."""

    lines = [
        f"{qualified_name(target)} failed verification.",
        f"Rendered: {rendered if rendered is not None else '<not rendered>'}",
    ]
    for error in errors:
        lines.extend(error.describe())
    return "\n".join(lines)


def render_report(report: VerificationReport) -> str:
    """Blocks for every failing class, registration order, blank-line separated."""

    return "\n\n".join(
        generate_error_message(item.target, item.rendered, item.errors)
        for item in report.failures
    )


__all__ = [
    "ClassResult",
    "ErrorKind",
    "FieldValue",
    "VerificationError",
    "VerificationReport",
    "generate_error_message",
    "qualified_name",
    "render_report",
]
