from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterator, List

from jsondts.inference.canonical import canonical_key
from jsondts.inference.model import (
    ArrayOf,
    Declaration,
    JsonType,
    ObjectShape,
    Reference,
    UnionOf,
)
from jsondts.invariants import never


@dataclass
class DeclarationCache:
    """Append-only store of hoisted declarations, keyed by canonical shape.

    Ids are assigned from 1 in insertion order and never reused. The only
    mutations are inserting a new declaration and appending a context to an
    existing one, so at most one declaration exists per canonical key.
    """

    declarations: Dict[int, Declaration] = field(default_factory=dict)
    index: Dict[str, int] = field(default_factory=dict)
    next_id: int = 1

    def __len__(self) -> int:
        return len(self.declarations)

    def __iter__(self) -> Iterator[Declaration]:
        return iter(self.declarations.values())

    def __contains__(self, declaration_id: object) -> bool:
        return declaration_id in self.declarations

    def get(self, declaration_id: int) -> Declaration:
        declaration = self.declarations.get(declaration_id)
        if declaration is None:
            never("unknown declaration id", declaration_id=declaration_id)
        return declaration

    def lookup(self, key: str) -> int | None:
        return self.index.get(key)

    def insert(self, shape: JsonType, context: str) -> int:
        key = canonical_key(shape)
        if key in self.index:
            never("declaration already cached", key=key, declaration_id=self.index[key])
        for declaration_id in references(shape):
            if declaration_id not in self.declarations:
                never("forward reference in declaration", key=key, declaration_id=declaration_id)
        declaration_id = self.next_id
        self.next_id += 1
        self.declarations[declaration_id] = Declaration(
            id=declaration_id,
            type=shape,
            key=key,
            contexts=[context],
        )
        self.index[key] = declaration_id
        return declaration_id

    def add_context(self, declaration_id: int, context: str) -> None:
        declaration = self.get(declaration_id)
        if context not in declaration.contexts:
            declaration.contexts.append(context)

    def declare(self, shape: JsonType, context: str) -> Reference:
        existing = self.lookup(canonical_key(shape))
        if existing is not None:
            self.add_context(existing, context)
            return Reference(existing)
        return Reference(self.insert(shape, context))

    def verify(self) -> None:
        for key, declaration_id in self.index.items():
            declaration = self.declarations.get(declaration_id)
            if declaration is None or declaration.key != key:
                never("cache index out of sync", key=key, declaration_id=declaration_id)
        previous = 0
        for declaration_id, declaration in self.declarations.items():
            if declaration_id <= previous or declaration.id != declaration_id:
                never("declaration ids are not monotonic", declaration_id=declaration_id)
            previous = declaration_id
            if self.index.get(declaration.key) != declaration_id:
                never("declaration missing from index", declaration_id=declaration_id)
            for target in references(declaration.type):
                if target not in self.declarations:
                    never(
                        "dangling declaration reference",
                        declaration_id=declaration_id,
                        target=target,
                    )


def references(shape: JsonType) -> List[int]:
    match shape:
        case Reference(declaration_id=declaration_id):
            return [declaration_id]
        case ArrayOf(element=element):
            return references(element)
        case UnionOf(members=members):
            return [target for member in members for target in references(member)]
        case ObjectShape(fields=fields):
            return [target for spec in fields for target in references(spec.type)]
        case _:
            return []