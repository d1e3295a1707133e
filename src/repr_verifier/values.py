"""
repr-verifier — value provider and deterministic default table.

File: src/repr_verifier/values.py
Last updated: 2026-10-18

Purpose
- Resolve the value assigned to each selected field: a caller prefab for the
  field's type when registered, otherwise a deterministic default.

What should be included in this file
- ``ValuePolicy`` protocol so callers can plug their own default table.
- ``DeterministicValuePolicy``: the documented default table.
- ``ValueProvider``: prefab lookup in front of the policy.

Functional requirements
- Defaults are derived from a SHA-256 digest of the field's qualified name, so
  two fields of the same type get distinct values and reruns reproduce them.
- Prefabs match the field type exactly; an explicit ``None`` prefab is honored.

Non-functional requirements
- Pure lookups: no state is shared between calls.
"""

from __future__ import annotations

import collections.abc
import datetime as dt
import enum
import hashlib
import types
import uuid
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from decimal import Decimal
from fractions import Fraction
from pathlib import PurePath
from typing import (
    Annotated,
    Any,
    Final,
    Literal,
    Protocol,
    TypeVar,
    Union,
    get_args,
    get_origin,
    runtime_checkable,
)

from repr_verifier.builder import build_instance
from repr_verifier.catalog import Field, catalog_fields, normalize_annotation
from repr_verifier.constants import MAX_NESTING_DEPTH
from repr_verifier.exceptions import InstanceConstructionError

_EPOCH_DATE: Final[dt.date] = dt.date(2000, 1, 1)
_EPOCH_DATETIME: Final[dt.datetime] = dt.datetime(2000, 1, 1)
_SEQUENCE_ORIGINS: Final[frozenset[Any]] = frozenset(
    {
        list,
        collections.abc.Sequence,
        collections.abc.MutableSequence,
        collections.abc.Iterable,
        collections.abc.Collection,
    }
)
_SET_ORIGINS: Final[frozenset[Any]] = frozenset(
    {set, collections.abc.Set, collections.abc.MutableSet}
)
_MAPPING_ORIGINS: Final[frozenset[Any]] = frozenset(
    {dict, collections.abc.Mapping, collections.abc.MutableMapping}
)


@runtime_checkable
class ValuePolicy(Protocol):
    """Supplies the value for a field that has no prefab registered."""

    def default_for(self, field: Field) -> object: ...


@dataclass(frozen=True, slots=True)
class DeterministicValuePolicy:
    """Default table keyed by type; values are stable per field identity.

    ============================  ==============================================
    type                          value
    ============================  ==============================================
    ``bool``                      digest parity
    ``int``                       1000..9999
    ``float``                     the ``int`` value plus ``0.5``
    ``complex``                   ``complex(int, 1)``
    ``str``                       ``"<field>-<8 hex digits>"``
    ``bytes`` / ``bytearray``     the ``str`` value, UTF-8 encoded
    ``Decimal``                   ``Decimal("<int>.25")``
    ``Fraction``                  ``Fraction(<int>, 7)``
    ``uuid.UUID``                 first 16 digest bytes
    ``date`` / ``datetime``       offset from 2000-01-01
    ``time`` / ``timedelta``      derived from the digest
    ``Path`` / ``PurePath``       ``/<str value>``
    ``Enum`` subclasses           member picked by the digest
    ``Literal[...]``              argument picked by the digest
    containers                    one element built from the element type
    other classes                 nested instance, depth-limited
    ``Any`` / unknown             the ``str`` value
    ============================  ==============================================
    """

    max_depth: int = MAX_NESTING_DEPTH

    def default_for(self, field: Field) -> object:
        annotation = field.annotation if field.annotation is not None else field.type
        return self.value_for_annotation(annotation, seed=field.qualified_name)

    def value_for_annotation(
        self,
        annotation: Any,
        *,
        seed: str,
        depth: int = 0,
        building: tuple[type, ...] = (),
    ) -> object:
        annotation = _first_member(annotation)
        lookup, _ = normalize_annotation(annotation)
        number = _digest_number(seed)
        label = seed.rsplit(".", 1)[-1]

        if lookup is None or lookup is type(None):
            return None
        if get_origin(lookup) is Literal:
            choices = get_args(lookup)
            return choices[number % len(choices)]
        supertype = getattr(lookup, "__supertype__", None)
        if supertype is not None:
            return self.value_for_annotation(
                supertype, seed=seed, depth=depth, building=building
            )
        if lookup is Any or lookup is object or isinstance(lookup, (TypeVar, str)):
            return _text(label, seed)

        origin = get_origin(annotation)
        if origin is None and isinstance(lookup, type):
            origin = lookup
        if origin in _SEQUENCE_ORIGINS or origin is tuple or origin in _SET_ORIGINS:
            return self._container(origin, annotation, seed=seed, depth=depth, building=building)
        if origin is frozenset:
            return frozenset(
                self._container(set, annotation, seed=seed, depth=depth, building=building)
            )
        if origin in _MAPPING_ORIGINS:
            args = _container_args(annotation)
            key_type = args[0] if args else str
            value_type = args[1] if len(args) > 1 else str
            key = self.value_for_annotation(
                key_type, seed=f"{seed}.key", depth=depth, building=building
            )
            value = self.value_for_annotation(
                value_type, seed=f"{seed}.value", depth=depth, building=building
            )
            return {key: value}

        if not isinstance(lookup, type):
            return _text(label, seed)
        return self._scalar(lookup, label=label, seed=seed, depth=depth, building=building)

    def _scalar(
        self,
        lookup: type,
        *,
        label: str,
        seed: str,
        depth: int,
        building: tuple[type, ...],
    ) -> object:
        number = _digest_number(seed)
        integer = 1000 + number % 9000

        if issubclass(lookup, enum.Enum):
            members = list(lookup)
            return members[number % len(members)] if members else None
        if lookup is bool:
            return bool(number & 1)
        if issubclass(lookup, int):
            return lookup(integer)
        if issubclass(lookup, float):
            return lookup(integer + 0.5)
        if issubclass(lookup, complex):
            return lookup(integer, 1)
        if issubclass(lookup, str):
            return lookup(_text(label, seed))
        if issubclass(lookup, (bytes, bytearray)):
            return lookup(_text(label, seed).encode("utf-8"))
        if issubclass(lookup, Decimal):
            return lookup(f"{integer}.25")
        if issubclass(lookup, Fraction):
            return lookup(integer, 7)
        if issubclass(lookup, uuid.UUID):
            return uuid.UUID(bytes=hashlib.sha256(seed.encode("utf-8")).digest()[:16])
        if issubclass(lookup, dt.datetime):
            return _EPOCH_DATETIME + dt.timedelta(seconds=number % 1_000_000_000)
        if issubclass(lookup, dt.date):
            return _EPOCH_DATE + dt.timedelta(days=number % 10_000)
        if issubclass(lookup, dt.time):
            return dt.time(number % 24, number % 60, (number // 60) % 60)
        if issubclass(lookup, dt.timedelta):
            return dt.timedelta(seconds=1 + number % 86_400)
        if issubclass(lookup, PurePath):
            return lookup(f"/{_text(label, seed)}")
        return self._nested(lookup, seed=seed, depth=depth, building=building)

    def _container(
        self,
        origin: Any,
        annotation: Any,
        *,
        seed: str,
        depth: int,
        building: tuple[type, ...],
    ) -> object:
        args = _container_args(annotation)
        if origin is tuple and args and not (len(args) == 2 and args[1] is Ellipsis):
            return tuple(
                self.value_for_annotation(
                    item, seed=f"{seed}[{index}]", depth=depth, building=building
                )
                for index, item in enumerate(args)
            )
        element_type = args[0] if args else str
        element = self.value_for_annotation(
            element_type, seed=f"{seed}[0]", depth=depth, building=building
        )
        if origin is tuple:
            return (element,)
        if origin in _SET_ORIGINS:
            try:
                return {element}
            except TypeError:
                return set()
        return [element]

    def _nested(
        self,
        target: type,
        *,
        seed: str,
        depth: int,
        building: tuple[type, ...],
    ) -> object:
        if depth >= self.max_depth or target in building:
            return None
        nested_fields = catalog_fields(target, inherited=True)
        values = {
            item.name: self.value_for_annotation(
                item.annotation,
                seed=f"{seed}.{item.name}",
                depth=depth + 1,
                building=(*building, target),
            )
            for item in nested_fields
        }
        try:
            return build_instance(target, values, unset=())
        except InstanceConstructionError:
            return None


@dataclass(frozen=True, slots=True)
class ValueProvider:
    """Prefab lookup in front of a ``ValuePolicy``."""

    prefab_values: Mapping[Any, object] = field(default_factory=dict)
    policy: ValuePolicy = field(default_factory=DeterministicValuePolicy)

    def has_prefab(self, field_type: Any) -> bool:
        try:
            return field_type in self.prefab_values
        except TypeError:
            return False

    def value_for(self, field: Field) -> object:
        if self.has_prefab(field.type):
            return self.prefab_values[field.type]
        return self.policy.default_for(field)

    def values_for(self, fields: Sequence[Field]) -> dict[str, object]:
        return {item.name: self.value_for(item) for item in fields}


def _digest_number(seed: str) -> int:
    digest = hashlib.sha256(seed.encode("utf-8")).digest()
    return int.from_bytes(digest[:8], "big")


def _text(label: str, seed: str) -> str:
    return f"{label}-{hashlib.sha256(seed.encode('utf-8')).hexdigest()[:8]}"


def _first_member(annotation: Any) -> Any:
    """Unwrap ``Optional``/union and ``Annotated`` to the first concrete member."""

    origin = get_origin(annotation)
    if origin is Union or origin is types.UnionType:
        members = [item for item in get_args(annotation) if item is not type(None)]
        return _first_member(members[0]) if members else None
    if origin is Annotated:
        return _first_member(get_args(annotation)[0])
    return annotation


def _container_args(annotation: Any) -> tuple[Any, ...]:
    if isinstance(annotation, types.GenericAlias) or get_origin(annotation) is not None:
        return get_args(annotation)
    return ()


__all__ = [
    "DeterministicValuePolicy",
    "ValuePolicy",
    "ValueProvider",
]
