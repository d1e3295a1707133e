"""
repr-verifier — unit tests for rendering helpers

File: tests/unit/rendering/test_rendering.py
Last updated: 2026-10-18

Purpose
- Validate render method dispatch, identity hash selection and the token
  boundaries used by the class-name and hash checks.
"""

from __future__ import annotations

import pytest

from repr_verifier.rendering import (
    NameStyle,
    RenderMethod,
    accepted_class_names,
    class_name_segment,
    contains_class_name,
    contains_hash,
    hash_segments,
    identity_hash,
    render,
)


class Plain:
    def __repr__(self) -> str:
        return "Plain()"

    def __str__(self) -> str:
        return "plain"


class Hashed:
    def __hash__(self) -> int:
        return 255


class HashedChild(Hashed):
    pass


class Unhashable:
    __hash__ = None  # type: ignore[assignment]


class Outer:
    class Inner:
        pass


def test_render_dispatches_on_method() -> None:
    assert render(Plain()) == "Plain()"
    assert render(Plain(), RenderMethod.STR) == "plain"


def test_render_propagates_exceptions() -> None:
    class Broken:
        def __repr__(self) -> str:
            raise RuntimeError("boom")

    with pytest.raises(RuntimeError, match="boom"):
        render(Broken())


def test_identity_hash_uses_overridden_hash() -> None:
    assert identity_hash(Hashed()) == 255
    assert identity_hash(HashedChild()) == 255


def test_identity_hash_defaults_to_id() -> None:
    instance = Plain()

    assert identity_hash(instance) == id(instance)


def test_identity_hash_for_unhashable_class_is_id() -> None:
    instance = Unhashable()

    assert identity_hash(instance) == id(instance)


def test_hash_segments() -> None:
    assert hash_segments(255) == ("255", "0xff")


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("Hashed@255", True),
        ("Hashed@0xff", True),
        ("Hashed@12550", False),
        ("Hashed@0xffa", False),
        ("id=1255", False),
        ("Hashed@-255", False),
    ],
)
def test_contains_hash_respects_token_boundaries(text: str, expected: bool) -> None:
    assert contains_hash(text, 255) is expected


def test_contains_hash_handles_negative_values() -> None:
    assert contains_hash("Thing@-42", -42)


@pytest.mark.parametrize(
    ("text", "segment", "expected"),
    [
        ("Person(id=1)", "Person", True),
        ("pkg.Person(id=1)", "Person", False),
        ("APerson(id=1)", "Person", False),
        ("Persons(id=1)", "Person", False),
        ("pkg.Person(id=1)", "pkg.Person", True),
    ],
)
def test_contains_class_name_respects_token_boundaries(
    text: str,
    segment: str,
    expected: bool,
) -> None:
    assert contains_class_name(text, segment) is expected


def test_class_name_segment_styles() -> None:
    assert class_name_segment(Outer.Inner, NameStyle.NONE) is None
    assert class_name_segment(Outer.Inner, NameStyle.SIMPLE_NAME) == "Inner"
    assert class_name_segment(Outer.Inner, NameStyle.NAME) == f"{__name__}.Outer.Inner"


def test_simple_name_style_accepts_qualname_of_nested_class() -> None:
    accepted = accepted_class_names(Outer.Inner, NameStyle.SIMPLE_NAME)

    assert accepted == ("Outer.Inner", "Inner")
    assert contains_class_name("Outer.Inner(x=1)", *accepted)
    assert not contains_class_name(f"{__name__}.Outer.Inner(x=1)", *accepted)


def test_accepted_class_names_for_other_styles() -> None:
    assert accepted_class_names(Plain, NameStyle.SIMPLE_NAME) == ("Plain",)
    assert accepted_class_names(Plain, NameStyle.NAME) == (f"{__name__}.Plain",)
    assert accepted_class_names(Plain, NameStyle.NONE) == ()
