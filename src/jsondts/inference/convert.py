from __future__ import annotations

from dataclasses import dataclass

from jsondts.inference.cache import DeclarationCache
from jsondts.inference.canonical import canonical_key
from jsondts.inference.model import (
    BOOLEAN,
    NULL,
    NUMBER,
    STRING,
    ArrayOf,
    ConflictPolicy,
    FieldSpec,
    JsonType,
    ObjectShape,
    Reference,
    UnionOf,
    UnknownArray,
)
from jsondts.inference.naming import context_label, pointer_child, pointer_element
from jsondts.inference.unify import unify_all
from jsondts.invariants import never
from jsondts.json_types import JSONValue
from jsondts.order_contract import sort_once


@dataclass(frozen=True)
class Conversion:
    type: JsonType
    cache: DeclarationCache


def infer_shape(
    value: JSONValue,
    policy: ConflictPolicy = ConflictPolicy.UNION,
) -> JsonType:
    """Structural type of a parsed JSON value, before any hoisting."""
    match value:
        case None:
            return NULL
        case bool():
            return BOOLEAN
        case int() | float():
            return NUMBER
        case str():
            return STRING
        case list():
            element = unify_all((infer_shape(item, policy) for item in value), policy)
            if element is None:
                return UnknownArray()
            return ArrayOf(element)
        case dict():
            fields = []
            for name, item in value.items():
                if not isinstance(name, str):
                    never("object keys must be strings", key_type=type(name).__name__)
                fields.append(FieldSpec(name=name, type=infer_shape(item, policy)))
            return ObjectShape(tuple(fields))
        case _:
            never("infer_shape() received non-JSON value", value_type=type(value).__name__)


def hoist(
    cache: DeclarationCache,
    shape: JsonType,
    document: str,
    pointer: str = "",
) -> JsonType:
    """Declare every object and unresolved array of ``shape`` bottom-up.

    Nested shapes are declared before the shape that contains them, so every
    ``Reference`` in a cached type points at an existing declaration.
    """
    context = context_label(document, pointer)
    match shape:
        case ObjectShape():
            hoisted = tuple(
                FieldSpec(
                    name=spec.name,
                    type=hoist(cache, spec.type, document, pointer_child(pointer, spec.name)),
                    optional=spec.optional,
                )
                for spec in shape.in_discovery_order()
            )
            return cache.declare(ObjectShape(hoisted, order=shape.order), context)
        case UnknownArray():
            return cache.declare(shape, context)
        case ArrayOf(element=element):
            element_type = hoist(cache, element, document, pointer_element(pointer))
            array = ArrayOf(element_type)
            if isinstance(element_type, Reference):
                return cache.declare(array, context)
            return array
        case UnionOf(members=members):
            ordered = sort_once(members, source="hoist.union_members", key=canonical_key)
            return UnionOf(
                frozenset(hoist(cache, member, document, pointer) for member in ordered)
            )
        case _:
            return shape


def convert_to_type(
    cache: DeclarationCache,
    value: JSONValue,
    context: str,
    *,
    policy: ConflictPolicy = ConflictPolicy.UNION,
) -> Conversion:
    """Convert one parsed document, extending ``cache`` with its shapes.

    Returns the document's top-level type together with the cache. The
    top-level type is a ``Reference`` when the root is an object, an array of
    objects or an empty array; otherwise it is the inline type.
    """
    shape = infer_shape(value, policy)
    return Conversion(type=hoist(cache, shape, context), cache=cache)
