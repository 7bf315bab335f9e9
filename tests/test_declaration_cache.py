from __future__ import annotations

import pytest

from jsondts.exceptions import NeverThrown
from jsondts.inference.cache import DeclarationCache, references
from jsondts.inference.canonical import canonical_key
from jsondts.inference.model import (
    NUMBER,
    STRING,
    ArrayOf,
    FieldSpec,
    ObjectShape,
    Reference,
    UnionOf,
    UnknownArray,
)


def test_insert_assigns_monotonic_ids() -> None:
    cache = DeclarationCache()
    first = cache.insert(ObjectShape((FieldSpec("a", NUMBER),)), "a.json")
    second = cache.insert(ObjectShape((FieldSpec("b", NUMBER),)), "b.json")
    assert (first, second) == (1, 2)
    assert [declaration.id for declaration in cache] == [1, 2]
    assert len(cache) == 2
    cache.verify()


def test_lookup_uses_canonical_key() -> None:
    cache = DeclarationCache()
    shape = ObjectShape((FieldSpec("a", NUMBER), FieldSpec("b", STRING)))
    declaration_id = cache.insert(shape, "a.json")
    reordered = ObjectShape((FieldSpec("b", STRING), FieldSpec("a", NUMBER)))
    assert cache.lookup(canonical_key(reordered)) == declaration_id
    assert cache.lookup(canonical_key(ObjectShape())) is None


def test_insert_rejects_duplicate_keys() -> None:
    cache = DeclarationCache()
    cache.insert(UnknownArray(), "a.json")
    with pytest.raises(NeverThrown):
        cache.insert(UnknownArray(), "b.json")


def test_insert_rejects_forward_references() -> None:
    cache = DeclarationCache()
    with pytest.raises(NeverThrown):
        cache.insert(ArrayOf(Reference(7)), "a.json")
    assert len(cache) == 0


def test_declare_appends_each_context_once() -> None:
    cache = DeclarationCache()
    shape = ObjectShape((FieldSpec("a", NUMBER),))
    first = cache.declare(shape, "a.json")
    second = cache.declare(shape, "b.json")
    third = cache.declare(shape, "a.json")
    assert first == second == third == Reference(1)
    assert cache.get(1).contexts == ["a.json", "b.json"]
    assert len(cache) == 1


def test_cache_grows_by_at_most_one_per_new_shape() -> None:
    cache = DeclarationCache()
    shapes = [
        ObjectShape((FieldSpec("a", NUMBER),)),
        ObjectShape((FieldSpec("a", NUMBER),)),
        UnknownArray(),
        ObjectShape((FieldSpec("a", STRING),)),
        UnknownArray(),
    ]
    sizes = []
    for index, shape in enumerate(shapes):
        cache.declare(shape, f"doc{index}.json")
        sizes.append(len(cache))
    assert sizes == [1, 1, 2, 3, 3]


def test_get_unknown_id_raises() -> None:
    cache = DeclarationCache()
    with pytest.raises(NeverThrown):
        cache.get(1)
    assert 1 not in cache


def test_verify_detects_index_drift() -> None:
    cache = DeclarationCache()
    cache.declare(ObjectShape(), "a.json")
    cache.index["stale"] = 1
    with pytest.raises(NeverThrown):
        cache.verify()


def test_verify_detects_dangling_references() -> None:
    cache = DeclarationCache()
    target = cache.declare(ObjectShape(), "a.json")
    cache.declare(ArrayOf(target), "b.json")
    cache.verify()
    del cache.declarations[target.declaration_id]
    del cache.index[canonical_key(ObjectShape())]
    with pytest.raises(NeverThrown):
        cache.verify()


def test_references_walks_nested_types() -> None:
    shape = ObjectShape(
        (
            FieldSpec("items", Reference(2)),
            FieldSpec("maybe", UnionOf(frozenset({NUMBER, Reference(3)}))),
            FieldSpec("list", ArrayOf(Reference(1))),
        )
    )
    assert sorted(references(shape)) == [1, 2, 3]
    assert references(NUMBER) == []
