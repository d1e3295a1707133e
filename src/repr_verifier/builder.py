"""Instance construction that bypasses ``__init__`` and sets fields directly."""

from __future__ import annotations

import dataclasses
import enum
import inspect
import types
from collections.abc import Mapping, Sequence
from typing import TYPE_CHECKING, Any, Final

from repr_verifier.exceptions import InstanceConstructionError

if TYPE_CHECKING:
    from repr_verifier.catalog import Field

_ZERO_VALUES: Final[dict[type, Any]] = {
    bool: False,
    int: 0,
    float: 0.0,
    complex: 0j,
    str: "",
    bytes: b"",
    tuple: (),
    frozenset: frozenset(),
}
_EMPTY_FACTORIES: Final[dict[type, Any]] = {
    list: list,
    dict: dict,
    set: set,
    bytearray: bytearray,
}


def build_instance(
    cls: type,
    values: Mapping[str, object],
    *,
    unset: Sequence[Field] = (),
) -> object:
    """Create ``cls`` without running its constructors and assign ``values``.

    Fields listed in ``unset`` receive their class default, or a zero value for
    their type, so the rendering method can read every declared attribute.
    """

    if inspect.isabstract(cls):
        missing = ", ".join(sorted(getattr(cls, "__abstractmethods__", ())))
        raise InstanceConstructionError(cls, f"abstract class (unimplemented: {missing})")
    if issubclass(cls, enum.Enum):
        raise InstanceConstructionError(cls, "enum members cannot be constructed")

    if _is_named_tuple(cls):
        return _build_named_tuple(cls, values, unset=unset)

    try:
        instance = object.__new__(cls)
    except TypeError as exc:
        raise InstanceConstructionError(cls, str(exc)) from exc

    for item in unset:
        _assign(instance, cls, item.name, unset_value(cls, item))
    for name, value in values.items():
        _assign(instance, cls, name, value)
    return instance


def unset_value(cls: type, field: Field) -> object:
    """Class default for ``field`` when one exists, else a zero value for its type."""

    if dataclasses.is_dataclass(cls):
        for item in dataclasses.fields(cls):
            if item.name != field.name:
                continue
            if item.default is not dataclasses.MISSING:
                return item.default
            if item.default_factory is not dataclasses.MISSING:
                return item.default_factory()
            break

    for klass in cls.__mro__:
        if field.name in klass.__dict__:
            attribute = klass.__dict__[field.name]
            if not isinstance(attribute, (types.MemberDescriptorType, property)):
                return attribute
            break

    return zero_value(field.type)


def zero_value(field_type: Any) -> object:
    if isinstance(field_type, type):
        if field_type in _ZERO_VALUES:
            return _ZERO_VALUES[field_type]
        factory = _EMPTY_FACTORIES.get(field_type)
        if factory is not None:
            return factory()
    return None


def _assign(instance: object, cls: type, name: str, value: object) -> None:
    try:
        object.__setattr__(instance, name, value)
    except (AttributeError, TypeError) as exc:
        raise InstanceConstructionError(cls, f"cannot assign field {name!r}: {exc}") from exc


def _is_named_tuple(cls: type) -> bool:
    return issubclass(cls, tuple) and isinstance(getattr(cls, "_fields", None), tuple)


def _build_named_tuple(
    cls: type,
    values: Mapping[str, object],
    *,
    unset: Sequence[Field],
) -> object:
    by_name = {item.name: item for item in unset}
    defaults: Mapping[str, object] = getattr(cls, "_field_defaults", {})
    ordered: list[object] = []
    for name in cls._fields:  # type: ignore[attr-defined]
        if name in values:
            ordered.append(values[name])
        elif name in defaults:
            ordered.append(defaults[name])
        elif name in by_name:
            ordered.append(zero_value(by_name[name].type))
        else:
            ordered.append(None)
    return tuple.__new__(cls, ordered)


__all__ = ["build_instance", "unset_value", "zero_value"]
