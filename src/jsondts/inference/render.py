from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List

from jsondts.inference.cache import DeclarationCache
from jsondts.inference.model import (
    ArrayOf,
    Declaration,
    JsonType,
    ObjectShape,
    Primitive,
    PrimitiveKind,
    Reference,
    UnionOf,
    UnknownArray,
)
from jsondts.inference.naming import (
    DEFAULT_ALIAS_PREFIX,
    property_name,
    single_line,
    type_alias,
)
from jsondts.invariants import never
from jsondts.order_contract import sort_once

COMPUTE_HELPER = "C"
COMPUTE_HELPER_PREAMBLE = """
/**
 * Compute utility which makes resulting types easier to read
 * with IntelliSense by expanding them fully, instead of leaving
 * object properties with cryptic type names.
 */
type C<A extends any> = {[K in keyof A]: A[K]} & {};
""".strip()

UNRESOLVED_ELEMENT = "unknown"

_PRIMITIVE_RANK = {
    PrimitiveKind.BOOLEAN: 0,
    PrimitiveKind.NUMBER: 1,
    PrimitiveKind.STRING: 2,
    PrimitiveKind.UNKNOWN: 3,
    PrimitiveKind.NULL: 4,
}


@dataclass(frozen=True)
class RenderOptions:
    alias_prefix: str = DEFAULT_ALIAS_PREFIX
    common_file: str = "_common"
    compute_helper: bool = True

    @property
    def common_dts(self) -> str:
        return f"{self.common_file}.d.ts"


_DEFAULT_OPTIONS = RenderOptions()


def render_type(shape: JsonType, options: RenderOptions = _DEFAULT_OPTIONS) -> str:
    match shape:
        case Primitive(kind=kind):
            return kind.value
        case Reference(declaration_id=declaration_id):
            return type_alias(declaration_id, options.alias_prefix)
        case UnknownArray():
            return f"{UNRESOLVED_ELEMENT}[]"
        case ArrayOf(element=UnionOf() as element):
            return f"({render_type(element, options)})[]"
        case ArrayOf(element=element):
            return f"{render_type(element, options)}[]"
        case UnionOf(members=members):
            ordered = sort_once(
                members,
                source="render_type.union_members",
                key=lambda member: _member_rank(member, options),
            )
            return " | ".join(render_type(member, options) for member in ordered)
        case ObjectShape(fields=fields):
            if not fields:
                return "{}"
            rendered = "; ".join(
                f"{property_name(spec.name)}{'?' if spec.optional else ''}: "
                f"{render_type(spec.type, options)}"
                for spec in fields
            )
            return f"{{ {rendered} }}"
        case _:
            never("render_type() received a non-type value", value_type=type(shape).__name__)


def _member_rank(member: JsonType, options: RenderOptions) -> tuple[int, int, str]:
    match member:
        case Primitive(kind=kind):
            return (2, _PRIMITIVE_RANK[kind], "")
        case ArrayOf() | UnknownArray():
            return (1, 0, render_type(member, options))
        case Reference(declaration_id=declaration_id):
            return (0, declaration_id, "")
        case _:
            return (0, 0, render_type(member, options))


def render_declaration(
    declaration: Declaration,
    *,
    exported: bool = False,
    options: RenderOptions = _DEFAULT_OPTIONS,
) -> str:
    """One ``type`` alias line followed by its provenance comment."""
    body = render_type(declaration.type, options)
    if options.compute_helper and isinstance(declaration.type, ObjectShape):
        body = f"{COMPUTE_HELPER}<{body}>"
    name = type_alias(declaration.id, options.alias_prefix)
    prefix = "export " if exported else ""
    provenance = ", ".join(single_line(context) for context in declaration.contexts)
    return f"{prefix}type {name} = {body}; // {provenance}"


def render_common_file(
    cache: DeclarationCache,
    exported_ids: Iterable[int] = (),
    options: RenderOptions = _DEFAULT_OPTIONS,
) -> str:
    exported = set(exported_ids)
    lines: List[str] = []
    if options.compute_helper:
        lines.append(COMPUTE_HELPER_PREAMBLE)
        lines.append("")
    for declaration in cache:
        lines.append(
            render_declaration(
                declaration,
                exported=declaration.id in exported,
                options=options,
            )
        )
    return "\n".join(lines) + "\n"


def render_stub(
    type_ref: JsonType,
    relative_import: str,
    options: RenderOptions = _DEFAULT_OPTIONS,
) -> str:
    if not isinstance(type_ref, Reference):
        never("document stubs re-export declared aliases only", type_ref=type_ref)
    name = type_alias(type_ref.declaration_id, options.alias_prefix)
    return f'export {{ {name} as default }} from "{relative_import}";'


def collect_unresolved(cache: DeclarationCache) -> List[Declaration]:
    return [declaration for declaration in cache if declaration.unresolved]


def render_unresolved_warning(
    declarations: Iterable[Declaration],
    options: RenderOptions = _DEFAULT_OPTIONS,
) -> str:
    aliases = "\n".join(
        f"  type {type_alias(declaration.id, options.alias_prefix)}, "
        f"derived from {single_line(declaration.contexts[0])}"
        for declaration in declarations
    )
    return "\n".join(
        [
            "The proper array type for the following type aliases could not be",
            "inferred because the provided JSON featured empty arrays:",
            "",
            aliases,
            "",
            f'These type aliases have been given the type "{UNRESOLVED_ELEMENT}[]". Opening',
            f"{options.common_dts} and manually providing the proper types is recommended.",
        ]
    )
