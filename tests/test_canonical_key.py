from __future__ import annotations

from jsondts.inference.canonical import canonical_key, canonical_payload, shape_digest
from jsondts.inference.model import (
    NULL,
    NUMBER,
    STRING,
    ArrayOf,
    FieldSpec,
    ObjectShape,
    Reference,
    UnionOf,
    UnknownArray,
)


def test_object_key_ignores_field_discovery_order() -> None:
    left = ObjectShape((FieldSpec("a", NUMBER), FieldSpec("b", STRING)))
    right = ObjectShape((FieldSpec("b", STRING), FieldSpec("a", NUMBER)))
    assert left == right
    assert canonical_key(left) == canonical_key(right)


def test_object_key_distinguishes_optional_fields() -> None:
    required = ObjectShape((FieldSpec("a", NUMBER),))
    optional = ObjectShape((FieldSpec("a", NUMBER, optional=True),))
    assert canonical_key(required) != canonical_key(optional)


def test_object_key_distinguishes_field_types() -> None:
    numeric = ObjectShape((FieldSpec("a", NUMBER),))
    textual = ObjectShape((FieldSpec("a", STRING),))
    assert canonical_key(numeric) != canonical_key(textual)


def test_array_keys_are_structural() -> None:
    assert canonical_payload(ArrayOf(NUMBER)) == ["array", "number"]
    assert canonical_payload(UnknownArray()) == ["array", None]
    assert canonical_payload(ArrayOf(Reference(3))) == ["array", ["ref", 3]]
    assert canonical_key(ArrayOf(NUMBER)) != canonical_key(UnknownArray())
    assert canonical_key(ArrayOf(Reference(1))) != canonical_key(ArrayOf(Reference(2)))


def test_union_key_is_member_order_independent() -> None:
    left = UnionOf(frozenset({NUMBER, NULL, STRING}))
    right = UnionOf(frozenset({STRING, NUMBER, NULL}))
    assert canonical_key(left) == canonical_key(right)
    assert canonical_payload(left) == ["union", ["null", "number", "string"]]


def test_object_payload_lists_fields_by_name() -> None:
    shape = ObjectShape(
        (
            FieldSpec("zeta", NUMBER, optional=True),
            FieldSpec("alpha", ArrayOf(STRING)),
        )
    )
    assert canonical_payload(shape) == [
        "object",
        [
            ["alpha", False, ["array", "string"]],
            ["zeta", True, "number"],
        ],
    ]
    assert canonical_key(shape) == (
        '["object",[["alpha",false,["array","string"]],["zeta",true,"number"]]]'
    )


def test_shape_digest_follows_key() -> None:
    left = ObjectShape((FieldSpec("a", NUMBER), FieldSpec("b", STRING)))
    right = ObjectShape((FieldSpec("b", STRING), FieldSpec("a", NUMBER)))
    assert shape_digest(left) == shape_digest(right)
    assert len(shape_digest(left)) == 64
    assert shape_digest(left) != shape_digest(ObjectShape())
