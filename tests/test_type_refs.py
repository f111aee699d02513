from __future__ import annotations

import pytest

from parse.name_resolution import OBJECT_TYPE, TypeRef, parse_type_ref


@pytest.mark.parametrize(
    "spelling",
    ["object", "System.Object", "global::System.Object", "Object", "object?", "System . Object"],
)
def test_object_spellings_resolve_to_system_object(spelling: str) -> None:
    assert parse_type_ref(spelling) == OBJECT_TYPE
    assert parse_type_ref(spelling).is_universal_object


def test_local_object_type_shadows_system_object() -> None:
    type_ref = parse_type_ref("Object", frozenset({"Object"}))

    assert type_ref == TypeRef(namespace="", name="Object")
    assert not type_ref.is_universal_object


@pytest.mark.parametrize(
    ("spelling", "expected"),
    [
        ("string", TypeRef(namespace="", name="string")),
        ("System.IFormattable", TypeRef(namespace="System", name="IFormattable")),
        (
            "global::System.FormattableString",
            TypeRef(namespace="System", name="FormattableString"),
        ),
        ("T", TypeRef(namespace="", name="T")),
    ],
)
def test_other_types_are_not_object(spelling: str, expected: TypeRef) -> None:
    type_ref = parse_type_ref(spelling)

    assert type_ref == expected
    assert not type_ref.is_universal_object


def test_array_type_carries_element_type() -> None:
    type_ref = parse_type_ref("object[]")

    assert type_ref.is_array
    assert type_ref.element_type == OBJECT_TYPE
    assert not type_ref.is_universal_object
    assert type_ref.display() == "System.Object[]"


@pytest.mark.parametrize("spelling", ["object[]?", "object?[]", "object? []?"])
def test_nullable_array_of_object(spelling: str) -> None:
    type_ref = parse_type_ref(spelling)

    assert type_ref.is_array
    assert type_ref.element_type == OBJECT_TYPE
