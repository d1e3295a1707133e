"""
repr-verifier — field catalog.

File: src/repr_verifier/catalog.py
Last updated: 2026-10-18

Purpose
- Enumerate the instance fields of a class that take part in verification and
  apply the configured field selection.

What should be included in this file
- ``Field`` identity records (declaring class, name, normalized type).
- Selection modes: all, only, ignore, matching.

Functional requirements
- Fields are class-level annotations plus unannotated ``__slots__`` entries
  (typed ``Any``). Ancestor fields come first when inherited
  fields are included; a name redeclared by a subclass keeps the ancestor
  position.
- ``ClassVar``/``InitVar`` annotations, dunder names and name-mangled private
  names are treated as synthetic and never returned.
- ``only`` fails fast when a listed name is not a field of the class.

Non-functional requirements
- Deterministic ordering; no mutation of the inspected class.
"""

from __future__ import annotations

import dataclasses
import inspect
import re
import sys
import types
import typing
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass
from enum import StrEnum
from typing import Any, ClassVar, Literal, Union, cast, get_args, get_origin

from repr_verifier.exceptions import ConfigurationError


class SelectionMode(StrEnum):
    """Which catalog fields participate in verification."""

    ALL = "all"
    ONLY = "only"
    IGNORE = "ignore"
    MATCHING = "matching"


@dataclass(frozen=True, slots=True)
class Field:
    """Identity of one verifiable instance field."""

    declaring_class: type
    name: str
    type: Any
    annotation: Any = None
    nullable: bool = False

    @property
    def qualified_name(self) -> str:
        return f"{self.declaring_class.__module__}.{self.declaring_class.__qualname__}.{self.name}"


@dataclass(frozen=True, slots=True)
class FieldSelection:
    """Field selection policy; exactly one mode is active."""

    mode: SelectionMode = SelectionMode.ALL
    names: tuple[str, ...] = ()
    pattern: str | None = None

    def __post_init__(self) -> None:
        if self.mode is SelectionMode.MATCHING:
            if self.pattern is None:
                raise ConfigurationError("matching selection requires a pattern")
            try:
                re.compile(self.pattern)
            except re.error as exc:
                raise ConfigurationError(
                    f"invalid field matching pattern {self.pattern!r}: {exc}"
                ) from exc
        elif self.pattern is not None:
            raise ConfigurationError(f"{self.mode.value} selection does not take a pattern")

    @classmethod
    def only(cls, names: Iterable[str]) -> FieldSelection:
        return cls(mode=SelectionMode.ONLY, names=_as_names(names, "only these fields"))

    @classmethod
    def ignore(cls, names: Iterable[str]) -> FieldSelection:
        return cls(mode=SelectionMode.IGNORE, names=_as_names(names, "ignored fields"))

    @classmethod
    def matching(cls, pattern: str) -> FieldSelection:
        if not isinstance(pattern, str):
            raise ConfigurationError("field matching pattern must be a string")
        return cls(mode=SelectionMode.MATCHING, pattern=pattern)

    @property
    def is_default(self) -> bool:
        return self.mode is SelectionMode.ALL

    def apply(self, fields: Sequence[Field], *, target: type) -> tuple[Field, ...]:
        """Return the selected subset of ``fields``, preserving their order."""

        if self.mode is SelectionMode.ALL:
            return tuple(fields)
        if self.mode is SelectionMode.MATCHING:
            compiled = re.compile(cast(str, self.pattern))
            return tuple(item for item in fields if compiled.fullmatch(item.name))

        known = {item.name for item in fields}
        if self.mode is SelectionMode.ONLY:
            missing = [name for name in self.names if name not in known]
            if missing:
                raise ConfigurationError(
                    f"{target.__qualname__} has no field(s) named {', '.join(missing)}"
                )
            wanted = set(self.names)
            return tuple(item for item in fields if item.name in wanted)

        ignored = set(self.names)
        return tuple(item for item in fields if item.name not in ignored)


@dataclass(frozen=True, slots=True)
class ClassSpec:
    """Target class, its selected fields, and the catalog fields left out.

    ``excluded`` holds catalog fields dropped by the selection; ``unset`` holds
    every field of the full hierarchy that is not selected, which the builder
    fills with defaults.
    """

    target: type
    fields: tuple[Field, ...]
    excluded: tuple[Field, ...] = ()
    unset: tuple[Field, ...] = ()

    def __post_init__(self) -> None:
        names = [item.name for item in self.fields]
        if len(names) != len(set(names)):
            raise ConfigurationError(f"duplicate field names in {self.target.__qualname__}")

    @property
    def field_names(self) -> tuple[str, ...]:
        return tuple(item.name for item in self.fields)


def resolve_fields(
    cls: type,
    *,
    inherited: bool = True,
    selection: FieldSelection | None = None,
) -> ClassSpec:
    """Resolve the ordered, selected field set for ``cls``."""

    active = selection if selection is not None else FieldSelection()
    catalog = catalog_fields(cls, inherited=inherited)
    selected = active.apply(catalog, target=cls)
    chosen = {item.name for item in selected}
    excluded = tuple(item for item in catalog if item.name not in chosen)
    hierarchy = catalog if inherited else catalog_fields(cls, inherited=True)
    unset = tuple(item for item in hierarchy if item.name not in chosen)
    return ClassSpec(target=cls, fields=selected, excluded=excluded, unset=unset)


def catalog_fields(cls: type, *, inherited: bool = True) -> tuple[Field, ...]:
    """Every eligible instance field of ``cls`` before selection."""

    if not isinstance(cls, type):
        raise ConfigurationError(f"expected a class, got {cls!r}")

    owners = [klass for klass in reversed(cls.__mro__) if klass is not object]
    if not inherited:
        owners = [cls]

    ordered: dict[str, Field] = {}
    for klass in owners:
        own = dict(_own_annotations(klass))
        hints = _type_hints(klass, own)
        for name in _slot_names(klass):
            own.setdefault(name, Any)
        for name, raw in own.items():
            annotation = hints.get(name, raw)
            if _is_synthetic(klass, name, annotation):
                ordered.pop(name, None)
                continue
            lookup_type, nullable = normalize_annotation(annotation)
            ordered[name] = Field(
                declaring_class=klass,
                name=name,
                type=lookup_type,
                annotation=annotation,
                nullable=nullable,
            )
    return tuple(ordered.values())


def normalize_annotation(annotation: Any) -> tuple[Any, bool]:
    """Collapse an annotation to its lookup type and whether it admits ``None``."""

    origin = get_origin(annotation)
    if origin is Union or origin is types.UnionType:
        args = get_args(annotation)
        members = [item for item in args if item is not type(None)]
        nullable = len(members) != len(args)
        if len(members) == 1:
            inner, _ = normalize_annotation(members[0])
            return inner, nullable
        return annotation, nullable
    if origin is typing.Annotated:
        return normalize_annotation(get_args(annotation)[0])
    if origin is Literal:
        return annotation, None in get_args(annotation)
    if isinstance(origin, type):
        return origin, False
    return annotation, annotation is None or annotation is type(None)


def names_declared(classes: Sequence[type], *, inherited: bool) -> frozenset[str]:
    """Union of catalog field names across ``classes``."""

    names: set[str] = set()
    for cls in classes:
        names.update(item.name for item in catalog_fields(cls, inherited=inherited))
    return frozenset(names)


def _own_annotations(klass: type) -> Mapping[str, Any]:
    try:
        return inspect.get_annotations(klass)
    except (NameError, TypeError):
        return klass.__dict__.get("__annotations__", {})


def _type_hints(klass: type, own: Mapping[str, Any]) -> dict[str, Any]:
    """Resolved hints for ``klass``; unresolvable annotations stay as written."""

    try:
        return typing.get_type_hints(klass)
    except (NameError, TypeError, AttributeError, SyntaxError):
        pass

    # One bad forward reference must not discard the hints of the other fields.
    module = sys.modules.get(klass.__module__)
    globalns = dict(vars(module)) if module is not None else {}
    localns = dict(vars(klass))
    localns.setdefault(klass.__name__, klass)
    return {name: _evaluate(raw, globalns, localns) for name, raw in own.items()}


def _evaluate(raw: Any, globalns: dict[str, Any], localns: dict[str, Any]) -> Any:
    if not isinstance(raw, str):
        return raw
    try:
        return eval(raw, globalns, localns)  # noqa: S307 - same evaluation typing performs.
    except (NameError, AttributeError, TypeError, SyntaxError):
        return raw


def _slot_names(klass: type) -> tuple[str, ...]:
    slots = klass.__dict__.get("__slots__", ())
    if isinstance(slots, str):
        slots = (slots,)
    return tuple(name for name in slots if name not in {"__dict__", "__weakref__"})


def _is_synthetic(klass: type, name: str, annotation: Any) -> bool:
    if not name.isidentifier() or name.startswith("__"):
        return True
    if name.startswith(f"_{klass.__name__.lstrip('_')}__"):
        return True
    if annotation is ClassVar or get_origin(annotation) is ClassVar:
        return True
    if annotation is dataclasses.InitVar or isinstance(annotation, dataclasses.InitVar):
        return True
    if isinstance(annotation, str):
        head = annotation.split("[", 1)[0].strip()
        return head.rsplit(".", 1)[-1] in {"ClassVar", "InitVar"}
    return False


def _as_names(names: Iterable[str], label: str) -> tuple[str, ...]:
    if names is None:
        raise ConfigurationError(f"{label} must not be None")
    if isinstance(names, str):
        names = (names,)
    collected: list[str] = []
    for item in names:
        if not isinstance(item, str) or not item:
            raise ConfigurationError(f"{label} must be non-empty strings, got {item!r}")
        if item not in collected:
            collected.append(item)
    return tuple(collected)


__all__ = [
    "ClassSpec",
    "Field",
    "FieldSelection",
    "SelectionMode",
    "catalog_fields",
    "names_declared",
    "normalize_annotation",
    "resolve_fields",
]
