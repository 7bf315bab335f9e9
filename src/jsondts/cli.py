from __future__ import annotations

from pathlib import Path
from typing import List, Optional
import sys

import click
import typer

from jsondts.config import load_settings
from jsondts.exceptions import MalformedDocumentError
from jsondts.pipeline import build_report, run_pipeline

USAGE = "Usage: json-dts INPUT-DIR OUTPUT-DIR"
INSTRUCTIONS = """
Reads all JSON files inside INPUT-DIR (including those in subdirectories),
parses each into a TS declaration file with matching name and places those
into OUTPUT-DIR, matching the folder structure inside of INPUT-DIR.
""".strip()

app = typer.Typer(
    add_completion=False,
    context_settings={"help_option_names": ["-h", "--help"]},
)


@app.command(help=INSTRUCTIONS)
def generate(
    input_dir: Path = typer.Argument(
        ...,
        metavar="INPUT-DIR",
        exists=True,
        file_okay=False,
        dir_okay=True,
        resolve_path=True,
    ),
    output_dir: Path = typer.Argument(..., metavar="OUTPUT-DIR", resolve_path=True),
    config: Optional[Path] = typer.Option(
        None,
        "--config",
        help="Path to a jsondts.toml file (defaults to ./jsondts.toml).",
    ),
    report: Optional[Path] = typer.Option(
        None,
        "--report",
        help="Write a JSON summary of the declarations to this path.",
    ),
) -> None:
    settings = load_settings(config_path=config)
    try:
        result = run_pipeline(input_dir, output_dir, settings, echo=typer.echo)
    except MalformedDocumentError as exc:
        typer.echo(f"Malformed JSON in {exc.path}: {exc.detail}", err=True)
        raise typer.Exit(code=1)
    if report is not None:
        report.parent.mkdir(parents=True, exist_ok=True)
        report.write_text(
            build_report(result, settings).model_dump_json(indent=2) + "\n",
            encoding="utf-8",
        )


def main(argv: List[str] | None = None) -> int:
    command = typer.main.get_command(app)
    args = list(sys.argv[1:] if argv is None else argv)
    try:
        result = command.main(args=args, prog_name="json-dts", standalone_mode=False)
    except click.exceptions.Exit as exc:
        return exc.exit_code
    except click.UsageError as exc:
        typer.echo(USAGE, err=True)
        if not _is_arity_error(exc):
            typer.echo(exc.format_message(), err=True)
        return 1
    return result if isinstance(result, int) else 0


def _is_arity_error(exc: click.UsageError) -> bool:
    if isinstance(exc, click.MissingParameter):
        return True
    return "unexpected extra argument" in exc.format_message()


def run() -> None:  # pragma: no cover - console script entry
    sys.exit(main())
