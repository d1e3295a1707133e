"""Invoke the rendering method under test and derive identity segments."""

from __future__ import annotations

import re
from enum import StrEnum


class RenderMethod(StrEnum):
    """String-representation method exercised by the verifier."""

    REPR = "repr"
    STR = "str"


class NameStyle(StrEnum):
    """Class-name segment the rendered text must contain."""

    NONE = "none"
    NAME = "name"
    SIMPLE_NAME = "simple_name"


def render(instance: object, method: RenderMethod = RenderMethod.REPR) -> str:
    """Call the rendering method once; exceptions propagate unchanged."""

    if method is RenderMethod.STR:
        return str(instance)
    return repr(instance)


def identity_hash(instance: object) -> int:
    """``hash()`` when the class defines ``__hash__``, otherwise ``id()``."""

    for klass in type(instance).__mro__:
        if klass is object:
            break
        if "__hash__" in klass.__dict__:
            if klass.__dict__["__hash__"] is None:
                break
            return hash(instance)
    return id(instance)


def hash_segments(value: int) -> tuple[str, ...]:
    """Accepted textual forms of a hash value: decimal and ``0x`` hex."""

    return (str(value), hex(value))


def contains_hash(text: str, value: int) -> bool:
    """True when a hash segment appears as a whole number, not inside a longer one."""

    return any(
        re.search(rf"(?<![\w-]){re.escape(segment)}(?!\w)", text) is not None
        for segment in hash_segments(value)
    )


def contains_class_name(text: str, *segments: str) -> bool:
    """True when any of ``segments`` appears as a whole dotted name.

    ``pkg.Person`` does not satisfy the simple name ``Person``, and ``Person``
    does not satisfy ``APerson``.
    """

    alternatives = "|".join(re.escape(item) for item in segments)
    return re.search(rf"(?<![\w.])(?:{alternatives})(?!\w)", text) is not None


def class_name_segment(cls: type, style: NameStyle) -> str | None:
    if style is NameStyle.NAME:
        return f"{cls.__module__}.{cls.__qualname__}"
    if style is NameStyle.SIMPLE_NAME:
        return cls.__name__
    return None


def accepted_class_names(cls: type, style: NameStyle) -> tuple[str, ...]:
    """Segments that satisfy ``style``.

    The simple-name style also accepts ``__qualname__`` since default reprs of
    nested and function-local classes start with it.
    """

    segment = class_name_segment(cls, style)
    if segment is None:
        return ()
    if style is NameStyle.SIMPLE_NAME and cls.__qualname__ != segment:
        return (cls.__qualname__, segment)
    return (segment,)


__all__ = [
    "NameStyle",
    "RenderMethod",
    "accepted_class_names",
    "class_name_segment",
    "contains_class_name",
    "contains_hash",
    "hash_segments",
    "identity_hash",
    "render",
]
