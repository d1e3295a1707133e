"""
repr-verifier — field value extraction.

File: src/repr_verifier/extraction.py
Last updated: 2026-10-18

Purpose
- Turn a field value template (two ``%s`` tokens: field name, then value) into
  per-field matchers over the rendered text.

Functional requirements
- The template is validated once, when it is configured.
- ``matches`` puts the escaped expected text in the value slot: a match means the
  rendered value equals the expected text exactly.
- ``extract`` puts a lazy capture group in the value slot and returns the
  leftmost match, or "not found". Neither operation raises for a missing field.
"""

from __future__ import annotations

import functools
import re
from dataclasses import dataclass
from typing import Final

from repr_verifier.constants import DEFAULT_FIELD_VALUE_PATTERN, PLACEHOLDER, PLACEHOLDER_COUNT
from repr_verifier.exceptions import ConfigurationError

_CAPTURE_GROUP: Final[str] = "rv_value"


@dataclass(frozen=True, slots=True)
class Extraction:
    """Outcome of looking up one field in the rendered text."""

    found: bool
    text: str | None = None

    @classmethod
    def missing(cls) -> Extraction:
        return cls(found=False)


@dataclass(frozen=True, slots=True)
class FieldPattern:
    """Validated field value template split around its two placeholders."""

    template: str
    prefix: str
    separator: str
    suffix: str

    @classmethod
    def compile(cls, template: str | None = DEFAULT_FIELD_VALUE_PATTERN) -> FieldPattern:
        if not isinstance(template, str):
            raise ConfigurationError("field value pattern must be a string")
        count = template.count(PLACEHOLDER)
        if count != PLACEHOLDER_COUNT:
            raise ConfigurationError(
                f"field value pattern must contain exactly {PLACEHOLDER_COUNT} "
                f"{PLACEHOLDER!r} placeholders (field name, value), found {count}: {template!r}"
            )
        prefix, separator, suffix = template.split(PLACEHOLDER)
        pattern = cls(template=template, prefix=prefix, separator=separator, suffix=suffix)
        try:
            _compile(pattern.source_for("field", f"(?P<{_CAPTURE_GROUP}>.*?)"))
        except re.error as exc:
            raise ConfigurationError(f"invalid field value pattern {template!r}: {exc}") from exc
        return pattern

    def source_for(self, field_name: str, value_source: str) -> str:
        return f"{self.prefix}{re.escape(field_name)}{self.separator}{value_source}{self.suffix}"

    def matches(self, text: str, field_name: str, expected: str) -> bool:
        """True when the field is rendered with exactly ``expected``."""

        try:
            compiled = _compile(self.source_for(field_name, re.escape(expected)))
        except re.error:
            return False
        return compiled.search(text) is not None

    def extract(self, text: str, field_name: str) -> Extraction:
        """Leftmost value rendered for ``field_name``, if any."""

        compiled = _compile(self.source_for(field_name, f"(?P<{_CAPTURE_GROUP}>.*?)"))
        match = compiled.search(text)
        if match is None:
            return Extraction.missing()
        return Extraction(found=True, text=match.group(_CAPTURE_GROUP))


@functools.lru_cache(maxsize=512)
def _compile(source: str) -> re.Pattern[str]:
    return re.compile(source)


__all__ = ["Extraction", "FieldPattern"]
