"""Shape inference and declaration deduplication for JSON documents."""

from jsondts.inference.cache import DeclarationCache
from jsondts.inference.canonical import canonical_key, canonical_payload, shape_digest
from jsondts.inference.convert import Conversion, convert_to_type, hoist, infer_shape
from jsondts.inference.model import (
    ArrayOf,
    ConflictPolicy,
    Declaration,
    FieldSpec,
    JsonType,
    ObjectShape,
    Primitive,
    PrimitiveKind,
    Reference,
    UnionOf,
    UnknownArray,
)
from jsondts.inference.naming import type_alias
from jsondts.inference.render import (
    RenderOptions,
    collect_unresolved,
    render_common_file,
    render_declaration,
    render_stub,
    render_type,
    render_unresolved_warning,
)
from jsondts.inference.unify import unify, unify_all

__all__ = [
    "ArrayOf",
    "ConflictPolicy",
    "Conversion",
    "Declaration",
    "DeclarationCache",
    "FieldSpec",
    "JsonType",
    "ObjectShape",
    "Primitive",
    "PrimitiveKind",
    "Reference",
    "RenderOptions",
    "UnionOf",
    "UnknownArray",
    "canonical_key",
    "canonical_payload",
    "collect_unresolved",
    "convert_to_type",
    "hoist",
    "infer_shape",
    "render_common_file",
    "render_declaration",
    "render_stub",
    "render_type",
    "render_unresolved_warning",
    "shape_digest",
    "type_alias",
    "unify",
    "unify_all",
]
