"""
repr-verifier — unit tests for the value provider

File: tests/unit/values/test_value_provider.py
Last updated: 2026-10-18

Purpose
- Validate prefab precedence and the deterministic default table.

What this test file should cover
- Prefabs win (including an explicit None); defaults are stable and distinct.
- Container, enum, literal and nested-class defaults.
"""

from __future__ import annotations

import datetime as dt
import enum
import uuid
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Literal

from hypothesis import given
from hypothesis import strategies as st

from repr_verifier.catalog import Field, catalog_fields
from repr_verifier.values import DeterministicValuePolicy, ValuePolicy, ValueProvider


class Color(enum.Enum):
    RED = "red"
    GREEN = "green"


@dataclass
class Address:
    street: str
    number: int


@dataclass
class Node:
    label: str
    parent: Node | None


class Sample:
    count: int
    total: int
    ratio: float
    flag: bool
    name: str
    amount: Decimal
    when: dt.datetime
    day: dt.date
    token: uuid.UUID
    color: Color
    mode: Literal["fast", "slow"]
    tags: list[str]
    pair: tuple[int, str]
    lookup: dict[str, int]
    anything: Any
    address: Address
    maybe: int | None


def _field(name: str) -> Field:
    for item in catalog_fields(Sample):
        if item.name == name:
            return item
    raise KeyError(name)


POLICY = DeterministicValuePolicy()


def test_prefab_wins_over_default() -> None:
    provider = ValueProvider(prefab_values={int: 7})

    assert provider.value_for(_field("count")) == 7


def test_explicit_none_prefab_is_honored() -> None:
    provider = ValueProvider(prefab_values={int: None})

    assert provider.value_for(_field("count")) is None


def test_prefab_lookup_is_exact_on_field_type() -> None:
    provider = ValueProvider(prefab_values={float: 1.5})

    assert provider.value_for(_field("count")) != 1.5
    assert provider.value_for(_field("ratio")) == 1.5


def test_optional_field_uses_prefab_of_inner_type() -> None:
    provider = ValueProvider(prefab_values={int: 3})

    assert provider.value_for(_field("maybe")) == 3


def test_same_typed_fields_get_distinct_values() -> None:
    assert POLICY.default_for(_field("count")) != POLICY.default_for(_field("total"))


def test_defaults_are_type_appropriate() -> None:
    values = ValueProvider().values_for(catalog_fields(Sample))

    assert isinstance(values["count"], int) and 1000 <= values["count"] <= 9999
    assert isinstance(values["ratio"], float) and str(values["ratio"]).endswith(".5")
    assert isinstance(values["flag"], bool)
    assert isinstance(values["name"], str) and values["name"].startswith("name-")
    assert isinstance(values["amount"], Decimal)
    assert isinstance(values["when"], dt.datetime)
    assert isinstance(values["day"], dt.date)
    assert isinstance(values["token"], uuid.UUID)
    assert values["color"] in set(Color)
    assert values["mode"] in {"fast", "slow"}
    assert isinstance(values["tags"], list) and len(values["tags"]) == 1
    assert isinstance(values["pair"], tuple)
    assert isinstance(values["pair"][0], int) and isinstance(values["pair"][1], str)
    assert isinstance(values["lookup"], dict) and len(values["lookup"]) == 1
    assert isinstance(values["anything"], str)
    assert isinstance(values["maybe"], int)


def test_nested_class_default_is_a_built_instance() -> None:
    address = POLICY.default_for(_field("address"))

    assert isinstance(address, Address)
    assert isinstance(address.street, str)
    assert isinstance(address.number, int)


def test_recursive_class_default_stops_at_cycle() -> None:
    policy = DeterministicValuePolicy()
    node_field = Field(declaring_class=Sample, name="node", type=Node, annotation=Node)

    node = policy.default_for(node_field)

    assert isinstance(node, Node)
    assert node.parent is None


def test_policy_satisfies_protocol() -> None:
    assert isinstance(POLICY, ValuePolicy)


def test_custom_policy_is_used_without_prefab() -> None:
    class Constant:
        def default_for(self, field: Field) -> object:
            return f"<{field.name}>"

    provider = ValueProvider(policy=Constant())

    assert provider.value_for(_field("count")) == "<count>"


@given(st.from_regex(r"[a-z_][a-z0-9_]{0,20}", fullmatch=True))
def test_defaults_are_reproducible_for_any_field_name(name: str) -> None:
    field = Field(declaring_class=Sample, name=name, type=int, annotation=int)

    first = DeterministicValuePolicy().default_for(field)
    second = DeterministicValuePolicy().default_for(field)

    assert first == second
    assert isinstance(first, int) and 1000 <= first <= 9999
