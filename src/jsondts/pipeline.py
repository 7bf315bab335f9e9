from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path, PurePosixPath
from typing import Callable, List
import json

import typer

from jsondts.config import Settings
from jsondts.exceptions import MalformedDocumentError
from jsondts.inference.cache import DeclarationCache
from jsondts.inference.canonical import shape_digest
from jsondts.inference.convert import convert_to_type
from jsondts.inference.model import Declaration, JsonType, Reference
from jsondts.inference.naming import type_alias
from jsondts.inference.render import (
    collect_unresolved,
    render_common_file,
    render_stub,
    render_type,
    render_unresolved_warning,
)
from jsondts.json_types import JSONValue
from jsondts.order_contract import sort_once
from jsondts.schema import DeclarationDTO, DocumentDTO, RunReportDTO, UnresolvedArrayDTO

Echo = Callable[[str], None]


@dataclass(frozen=True)
class DocumentResult:
    source: str
    stub: str
    type: Reference


@dataclass(frozen=True)
class RunResult:
    cache: DeclarationCache
    common_path: Path
    documents: List[DocumentResult] = field(default_factory=list)
    unresolved: List[Declaration] = field(default_factory=list)

    @property
    def exported_ids(self) -> set[int]:
        return {document.type.declaration_id for document in self.documents}


def discover_inputs(input_dir: Path) -> List[str]:
    """Relative paths of the visible ``.json`` files below ``input_dir``.

    Dotfiles and anything under a dot-directory are skipped.
    """
    relatives = (path.relative_to(input_dir) for path in input_dir.rglob("*.json"))
    return sort_once(
        (
            relative.as_posix()
            for relative in relatives
            if (input_dir / relative).is_file()
            and not any(part.startswith(".") for part in relative.parts)
        ),
        source="discover_inputs.paths",
    )


def load_document(path: Path) -> JSONValue:
    try:
        raw = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        raise MalformedDocumentError(path, f"not valid UTF-8 ({exc.reason})") from exc
    try:
        return json.loads(raw)
    except json.JSONDecodeError as exc:
        raise MalformedDocumentError(
            path, f"{exc.msg} (line {exc.lineno}, column {exc.colno})"
        ) from exc


def stub_path(relative: str) -> str:
    return PurePosixPath(relative).with_suffix(".d.ts").as_posix()


def relative_import(stub_relative: str, common_file: str) -> str:
    depth = len(PurePosixPath(stub_relative).parent.parts)
    if depth == 0:
        return f"./{common_file}"
    return "/".join([".."] * depth + [common_file])


def declare_root(cache: DeclarationCache, type_ref: JsonType, context: str) -> Reference:
    """Give an inline root type its own declaration so the stub can re-export it."""
    if isinstance(type_ref, Reference):
        return type_ref
    return cache.declare(type_ref, context)


def run_pipeline(
    input_dir: Path,
    output_dir: Path,
    settings: Settings = Settings(),
    echo: Echo = typer.echo,
) -> RunResult:
    options = settings.render_options
    cache = DeclarationCache()
    inputs = discover_inputs(input_dir)
    documents: List[DocumentResult] = []

    echo("Parsing JSON files...")
    for number, relative in enumerate(inputs, start=1):
        value = load_document(input_dir / relative)
        conversion = convert_to_type(
            cache, value, relative, policy=settings.conflict_policy
        )
        cache = conversion.cache
        type_ref = declare_root(cache, conversion.type, relative)

        stub = stub_path(relative)
        target = output_dir / stub
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(
            render_stub(type_ref, relative_import(stub, options.common_file), options),
            encoding="utf-8",
        )
        documents.append(DocumentResult(source=relative, stub=stub, type=type_ref))
        echo(f"Finished file {number} of {len(inputs)}: {relative}")

    cache.verify()
    echo(f"Creating {options.common_dts} file...")
    output_dir.mkdir(parents=True, exist_ok=True)
    common_path = output_dir / options.common_dts
    result = RunResult(
        cache=cache,
        common_path=common_path,
        documents=documents,
        unresolved=collect_unresolved(cache),
    )
    common_path.write_text(
        render_common_file(cache, result.exported_ids, options),
        encoding="utf-8",
    )
    echo(f"{options.common_dts} created successfully.")

    if result.unresolved:
        echo("\n" + render_unresolved_warning(result.unresolved, options))
    return result


def build_report(result: RunResult, settings: Settings = Settings()) -> RunReportDTO:
    options = settings.render_options
    exported = result.exported_ids
    return RunReportDTO(
        common_file=options.common_dts,
        conflict_policy=settings.conflict_policy.value,
        declarations=[
            DeclarationDTO(
                id=declaration.id,
                alias=type_alias(declaration.id, options.alias_prefix),
                type=render_type(declaration.type, options),
                digest=shape_digest(declaration.type),
                contexts=list(declaration.contexts),
                exported=declaration.id in exported,
                unresolved=declaration.unresolved,
            )
            for declaration in result.cache
        ],
        documents=[
            DocumentDTO(
                source=document.source,
                stub=document.stub,
                type=render_type(document.type, options),
            )
            for document in result.documents
        ],
        unresolved=[
            UnresolvedArrayDTO(
                alias=type_alias(declaration.id, options.alias_prefix),
                derived_from=declaration.contexts[0],
                contexts=list(declaration.contexts),
            )
            for declaration in result.unresolved
        ],
    )
