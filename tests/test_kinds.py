# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for kind classification and conversion."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any, Literal, NewType, Optional

import pytest

from pyopts import Option
from pyopts.kinds import (
    ANY_KIND,
    annotation_label,
    appended,
    classify,
    convert,
    element_fit,
    fits_exactly,
    same_kind,
    value_kind,
)
from tests.helpers.records import Level, WithBool, WithItem, WithPhoneNum, WithRetry, WithUsername

UserId = NewType("UserId", int)


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (True, bool),
        (3, int),
        (WithPhoneNum(3), int),
        (WithUsername("x"), str),
        (WithBool(False), bool),
        (Option(2.0), float),
        (Level.HIGH, int),
        (WithRetry(1), WithRetry),
        ((1, 2), tuple),
    ],
)
def test_value_kind(value: object, expected: type) -> None:
    assert value_kind(value) is expected


def test_bool_and_int_are_distinct_kinds() -> None:
    assert not same_kind(int, bool)
    assert not same_kind(bool, int)
    assert same_kind(WithRetry, WithRetry)
    assert not same_kind(WithRetry, int)


def test_classify_scalar() -> None:
    (kind,) = classify(int)

    assert kind.label == "int"
    assert kind.key is int
    assert not kind.is_sequence


def test_classify_optional_matches_plain() -> None:
    assert classify(int | None) == classify(int)
    assert classify(Optional[str]) == classify(str)


def test_classify_union_keeps_member_order() -> None:
    labels = [kind.label for kind in classify(int | str)]

    assert labels == ["int", "str"]


@pytest.mark.parametrize("annotation", [Any, object])
def test_classify_any(annotation: object) -> None:
    assert classify(annotation) == (ANY_KIND,)


def test_classify_list_exposes_element() -> None:
    (kind,) = classify(list[str])

    assert kind.is_sequence
    assert kind.target is list
    assert [element.label for element in kind.element or ()] == ["str"]


def test_classify_abstract_sequence_uses_list() -> None:
    (kind,) = classify(Sequence[int])

    assert kind.key is list
    assert kind.target is list


def test_classify_abstract_mapping_uses_dict() -> None:
    (kind,) = classify(Mapping[str, int])

    assert kind.key is dict
    assert kind.target is dict


def test_fixed_tuple_is_not_appendable() -> None:
    (kind,) = classify(tuple[int, str])

    assert kind.key is tuple
    assert not kind.is_sequence


def test_bare_list_appends_anything() -> None:
    (kind,) = classify(list)

    assert element_fit(kind, WithRetry(1)) == ANY_KIND


def test_new_type_classifies_as_supertype() -> None:
    assert classify(UserId)[0].key is int


def test_enum_field_keyed_by_mixin() -> None:
    (kind,) = classify(Level)

    assert kind.key is int
    assert kind.target is Level


def test_unsupported_annotation_never_fits() -> None:
    (kind,) = classify(Literal["a", "b"])

    assert kind.key is None
    assert not fits_exactly(kind, "a")
    assert element_fit(kind, "a") is None


def test_element_fit_prefers_exact_element() -> None:
    (kind,) = classify(list[int | str])

    element = element_fit(kind, WithItem("x"))

    assert element is not None
    assert element.label == "str"


def test_convert_strips_option_class() -> None:
    (kind,) = classify(str)

    converted = convert(kind, WithUsername("bob"))

    assert converted == "bob"
    assert type(converted) is str


def test_convert_unwraps_option_payload() -> None:
    assert convert(classify(bool)[0], WithBool(True)) is True


def test_appended_rebuilds_declared_container() -> None:
    (items,) = classify(list[str])
    (ports,) = classify(tuple[int, ...])

    assert appended(items, None, "a") == ["a"]
    assert appended(items, ["a"], "b") == ["a", "b"]
    assert appended(ports, (1,), 2) == (1, 2)


@pytest.mark.parametrize(
    ("annotation", "expected"),
    [
        (int, "int"),
        (list[str], "list[str]"),
        ("Decimal | None", "Decimal | None"),
    ],
)
def test_annotation_label(annotation: object, expected: str) -> None:
    assert annotation_label(annotation) == expected
