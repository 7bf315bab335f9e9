from __future__ import annotations

import hashlib
import json

from jsondts.inference.model import (
    ArrayOf,
    JsonType,
    ObjectShape,
    Primitive,
    Reference,
    UnionOf,
    UnknownArray,
)
from jsondts.invariants import never
from jsondts.json_types import JSONValue
from jsondts.order_contract import sort_once


def canonical_payload(shape: JsonType) -> JSONValue:
    """Structural JSON encoding of a type, independent of field discovery order.

    Nested objects are expected to be hoisted already, so they appear as
    ``["ref", id]`` and two shapes with the same nested declaration compare
    equal by id.
    """
    match shape:
        case Primitive(kind=kind):
            return kind.value
        case UnknownArray():
            return ["array", None]
        case ArrayOf(element=element):
            return ["array", canonical_payload(element)]
        case Reference(declaration_id=declaration_id):
            return ["ref", declaration_id]
        case UnionOf(members=members):
            return [
                "union",
                sort_once(
                    (canonical_payload(member) for member in members),
                    source="canonical_payload.union_members",
                    key=_encode,
                ),
            ]
        case ObjectShape(fields=fields):
            return [
                "object",
                [
                    [spec.name, spec.optional, canonical_payload(spec.type)]
                    for spec in sort_once(
                        fields,
                        source="canonical_payload.object_fields",
                        key=lambda spec: spec.name,
                    )
                ],
            ]
        case _:
            never("canonical_payload() received a non-type value", value_type=type(shape).__name__)


def canonical_key(shape: JsonType) -> str:
    return _encode(canonical_payload(shape))


def shape_digest(shape: JsonType) -> str:
    return hashlib.sha256(canonical_key(shape).encode("utf-8")).hexdigest()


def _encode(payload: JSONValue) -> str:
    return json.dumps(
        payload,
        sort_keys=False,
        separators=(",", ":"),
        ensure_ascii=False,
    )
