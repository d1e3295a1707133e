"""
repr-verifier — unit tests for the field catalog

File: tests/unit/catalog/test_catalog.py
Last updated: 2026-10-18

Purpose
- Validate field enumeration order, synthetic-field exclusion, annotation
  normalization and selection modes.
"""

from __future__ import annotations

import dataclasses
from typing import TYPE_CHECKING, Any, ClassVar, Optional

import pytest

from repr_verifier.catalog import (
    FieldSelection,
    SelectionMode,
    catalog_fields,
    names_declared,
    normalize_annotation,
    resolve_fields,
)
from repr_verifier.exceptions import ConfigurationError

if TYPE_CHECKING:
    from decimal import Decimal


class Base:
    alpha: int
    beta: str


class Child(Base):
    gamma: float
    alpha: str  # type: ignore[assignment]


class WithSynthetic:
    visible: int
    counter: ClassVar[int] = 0
    __hidden: int
    _private: bool


@dataclasses.dataclass
class WithInitVar:
    kept: int
    seed: dataclasses.InitVar[int] = 0


class Typed:
    nickname: str | None
    legacy: Optional[int]  # noqa: UP007
    tags: list[int]
    lookup: dict[str, int]


class PartlyResolvable:
    id: int
    price: Decimal
    note: str | None


class SlotsOnly:
    __slots__ = ("left", "right", "__weakref__")


class SlotsAnnotated:
    __slots__ = ("count", "label")
    count: int


def _names(fields: tuple) -> list[str]:
    return [item.name for item in fields]


def test_ancestor_fields_come_first() -> None:
    fields = catalog_fields(Child, inherited=True)

    assert _names(fields) == ["alpha", "beta", "gamma"]


def test_redeclared_field_keeps_position_but_takes_subclass_type() -> None:
    alpha = catalog_fields(Child, inherited=True)[0]

    assert alpha.declaring_class is Child
    assert alpha.type is str


def test_own_fields_only_when_not_inherited() -> None:
    assert _names(catalog_fields(Child, inherited=False)) == ["gamma", "alpha"]


def test_synthetic_fields_are_excluded() -> None:
    assert _names(catalog_fields(WithSynthetic)) == ["visible", "_private"]


def test_init_var_is_excluded() -> None:
    assert _names(catalog_fields(WithInitVar)) == ["kept"]


def test_annotations_are_normalized() -> None:
    by_name = {item.name: item for item in catalog_fields(Typed)}

    assert by_name["nickname"].type is str
    assert by_name["nickname"].nullable is True
    assert by_name["legacy"].type is int
    assert by_name["legacy"].nullable is True
    assert by_name["tags"].type is list
    assert by_name["tags"].annotation == list[int]
    assert by_name["lookup"].type is dict


@pytest.mark.parametrize(
    ("annotation", "expected"),
    [
        (int, (int, False)),
        (int | None, (int, True)),
        (list[str], (list, False)),
        (None, (None, True)),
    ],
)
def test_normalize_annotation(annotation: object, expected: tuple[object, bool]) -> None:
    assert normalize_annotation(annotation) == expected


def test_qualified_name_includes_declaring_class() -> None:
    beta = catalog_fields(Child)[1]

    assert beta.qualified_name == f"{Base.__module__}.Base.beta"


def test_only_selection_keeps_declaration_order() -> None:
    spec = resolve_fields(Child, selection=FieldSelection.only(["gamma", "alpha"]))

    assert spec.field_names == ("alpha", "gamma")
    assert _names(spec.excluded) == ["beta"]


def test_only_selection_rejects_unknown_name() -> None:
    with pytest.raises(ConfigurationError, match="delta"):
        resolve_fields(Child, selection=FieldSelection.only(["delta"]))


def test_ignore_selection() -> None:
    spec = resolve_fields(Child, selection=FieldSelection.ignore(["beta"]))

    assert spec.field_names == ("alpha", "gamma")


def test_matching_selection_uses_full_match() -> None:
    spec = resolve_fields(Child, selection=FieldSelection.matching("a.*"))

    assert spec.field_names == ("alpha",)


def test_unset_covers_ancestor_fields_when_not_inherited() -> None:
    spec = resolve_fields(Child, inherited=False)

    assert spec.field_names == ("gamma", "alpha")
    assert spec.excluded == ()
    assert _names(spec.unset) == ["beta"]


def test_selection_requires_names() -> None:
    with pytest.raises(ConfigurationError):
        FieldSelection.only(None)  # type: ignore[arg-type]
    with pytest.raises(ConfigurationError):
        FieldSelection.ignore([""])


def test_selection_mode_payloads_are_validated() -> None:
    with pytest.raises(ConfigurationError):
        FieldSelection(mode=SelectionMode.MATCHING)
    with pytest.raises(ConfigurationError):
        FieldSelection(mode=SelectionMode.ONLY, pattern="x")


def test_catalog_rejects_non_class() -> None:
    with pytest.raises(ConfigurationError):
        catalog_fields("Child")  # type: ignore[arg-type]


def test_names_declared_is_union_across_classes() -> None:
    assert names_declared([Base, WithSynthetic], inherited=True) == frozenset(
        {"alpha", "beta", "visible", "_private"}
    )


def test_unresolvable_annotation_only_affects_its_own_field() -> None:
    by_name = {item.name: item for item in catalog_fields(PartlyResolvable)}

    assert by_name["id"].type is int
    assert by_name["note"].type is str
    assert by_name["note"].nullable is True
    assert by_name["price"].type == "Decimal"


def test_slot_only_names_are_fields_typed_any() -> None:
    fields = catalog_fields(SlotsOnly)

    assert _names(fields) == ["left", "right"]
    assert all(item.type is Any for item in fields)


def test_annotations_win_over_slot_entries() -> None:
    by_name = {item.name: item for item in catalog_fields(SlotsAnnotated)}

    assert list(by_name) == ["count", "label"]
    assert by_name["count"].type is int
    assert by_name["label"].type is Any
