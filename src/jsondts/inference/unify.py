from __future__ import annotations

from typing import Iterable, List

from jsondts.inference.model import (
    UNKNOWN,
    ArrayOf,
    ConflictPolicy,
    FieldSpec,
    JsonType,
    ObjectShape,
    Primitive,
    PrimitiveKind,
    UnionOf,
    UnknownArray,
)


def unify(
    left: JsonType,
    right: JsonType,
    policy: ConflictPolicy = ConflictPolicy.UNION,
) -> JsonType:
    """Merge two observations of the same position into one type.

    The operation is commutative and associative, and ``unify(a, a) == a``.
    Pairs that cannot be merged structurally are resolved by ``policy``:
    ``UNION`` keeps every alternative, ``UNKNOWN`` widens to ``unknown``.
    """
    if left == right:
        return left
    match (left, right):
        case (Primitive(kind=PrimitiveKind.UNKNOWN), _) | (_, Primitive(kind=PrimitiveKind.UNKNOWN)):
            return UNKNOWN
        case (UnknownArray(), ArrayOf()):
            return right
        case (ArrayOf(), UnknownArray()):
            return left
        case (ArrayOf(element=left_element), ArrayOf(element=right_element)):
            return ArrayOf(unify(left_element, right_element, policy))
        case (ObjectShape(), ObjectShape()):
            return _unify_objects(left, right, policy)
        case _:
            return _conflict(left, right, policy)


def unify_all(
    shapes: Iterable[JsonType],
    policy: ConflictPolicy = ConflictPolicy.UNION,
) -> JsonType | None:
    result: JsonType | None = None
    for shape in shapes:
        result = shape if result is None else unify(result, shape, policy)
    return result


def _unify_objects(
    left: ObjectShape,
    right: ObjectShape,
    policy: ConflictPolicy,
) -> ObjectShape:
    fields: List[FieldSpec] = []
    names = list(left.order) + [name for name in right.order if name not in left.order]
    for name in names:
        left_spec = left.get(name)
        right_spec = right.get(name)
        if left_spec is None or right_spec is None:
            present = left_spec or right_spec
            fields.append(FieldSpec(name=name, type=present.type, optional=True))
            continue
        fields.append(
            FieldSpec(
                name=name,
                type=unify(left_spec.type, right_spec.type, policy),
                optional=left_spec.optional or right_spec.optional,
            )
        )
    return ObjectShape(tuple(fields), order=tuple(names))


def _conflict(left: JsonType, right: JsonType, policy: ConflictPolicy) -> JsonType:
    if policy is ConflictPolicy.UNKNOWN:
        return UNKNOWN
    return _join_union([*_members(left), *_members(right)], policy)


def _members(shape: JsonType) -> List[JsonType]:
    if isinstance(shape, UnionOf):
        return list(shape.members)
    return [shape]


def _join_union(members: List[JsonType], policy: ConflictPolicy) -> JsonType:
    # A union keeps at most one object and one array alternative; those merge
    # with the structural rules, everything else is kept as distinct members.
    objects: JsonType | None = None
    arrays: JsonType | None = None
    others: set[JsonType] = set()
    for member in members:
        match member:
            case ObjectShape():
                objects = member if objects is None else _unify_objects(objects, member, policy)
            case ArrayOf() | UnknownArray():
                arrays = member if arrays is None else unify(arrays, member, policy)
            case _:
                others.add(member)
    if objects is not None:
        others.add(objects)
    if arrays is not None:
        others.add(arrays)
    if len(others) == 1:
        return next(iter(others))
    return UnionOf(frozenset(others))
