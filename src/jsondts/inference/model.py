from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Tuple, TypeAlias


class PrimitiveKind(str, Enum):
    NULL = "null"
    BOOLEAN = "boolean"
    NUMBER = "number"
    STRING = "string"
    UNKNOWN = "unknown"


class ConflictPolicy(str, Enum):
    """How the unifier resolves two observations that cannot be merged."""

    UNION = "union"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class Primitive:
    kind: PrimitiveKind


@dataclass(frozen=True)
class ArrayOf:
    element: "JsonType"


@dataclass(frozen=True)
class UnknownArray:
    pass


@dataclass(frozen=True)
class FieldSpec:
    name: str
    type: "JsonType"
    optional: bool = False


@dataclass(frozen=True)
class ObjectShape:
    fields: Tuple[FieldSpec, ...] = ()
    # Names in the order they were first seen; not part of equality.
    order: Tuple[str, ...] = field(default=(), compare=False, repr=False)

    def __post_init__(self) -> None:
        if not self.order:
            object.__setattr__(self, "order", tuple(spec.name for spec in self.fields))
        ordered = tuple(sorted(self.fields, key=lambda spec: spec.name))
        object.__setattr__(self, "fields", ordered)

    def in_discovery_order(self) -> List[FieldSpec]:
        by_name = {spec.name: spec for spec in self.fields}
        seen = [by_name[name] for name in self.order if name in by_name]
        missing = [spec for spec in self.fields if spec.name not in self.order]
        return seen + missing

    def get(self, name: str) -> FieldSpec | None:
        for spec in self.fields:
            if spec.name == name:
                return spec
        return None


@dataclass(frozen=True)
class UnionOf:
    members: frozenset["JsonType"]


@dataclass(frozen=True)
class Reference:
    declaration_id: int


JsonType: TypeAlias = Primitive | ArrayOf | UnknownArray | ObjectShape | UnionOf | Reference

NULL = Primitive(PrimitiveKind.NULL)
BOOLEAN = Primitive(PrimitiveKind.BOOLEAN)
NUMBER = Primitive(PrimitiveKind.NUMBER)
STRING = Primitive(PrimitiveKind.STRING)
UNKNOWN = Primitive(PrimitiveKind.UNKNOWN)


@dataclass
class Declaration:
    id: int
    type: JsonType
    key: str
    contexts: List[str] = field(default_factory=list)

    @property
    def unresolved(self) -> bool:
        return isinstance(self.type, UnknownArray)
