"""Expected textual form of a field value inside the rendered text."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import Any

from repr_verifier.catalog import Field

Formatter = Callable[[Any], str]


@dataclass(frozen=True, slots=True)
class ExpectationResolver:
    """Formatter for the field type, else the null sentinel, else ``repr``."""

    formatters: Mapping[Any, Formatter] = field(default_factory=dict)
    null_value: str | None = None

    def formatter_for(self, field_type: Any) -> Formatter | None:
        try:
            return self.formatters.get(field_type)
        except TypeError:
            return None

    def expect(self, field: Field, value: object) -> str:
        formatter = self.formatter_for(field.type)
        if formatter is not None:
            return str(formatter(value))
        if value is None and self.null_value is not None:
            return self.null_value
        return repr(value)


__all__ = ["ExpectationResolver", "Formatter"]
