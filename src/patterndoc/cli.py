"""Command-line interface for patterndoc."""

import logging
from dataclasses import replace
from pathlib import Path
from typing import Annotated, Optional

import typer

from patterndoc.api import parse_files
from patterndoc.config import ParserConfig
from patterndoc.errors import PatternDocError
from patterndoc.report import patterns_to_json, print_patterns

app = typer.Typer(
    name="patterndoc",
    help="Extract pattern documentation from tagged comment blocks",
    add_completion=False,
)


@app.callback()
def main() -> None:
    """Extract pattern documentation from tagged comment blocks."""


@app.command(name="parse")
def parse_cmd(
    files: Annotated[list[Path], typer.Argument(help="Source files to parse")],
    format: Annotated[
        str,
        typer.Option("--format", "-f", help="Output format (console, json)"),
    ] = "console",
    output: Annotated[
        Optional[Path],
        typer.Option("--output", "-o", help="Output file path (json only)"),
    ] = None,
    config_file: Annotated[
        Optional[Path],
        typer.Option("--config", "-c", help="Configuration file (YAML or JSON)"),
    ] = None,
    lenient: Annotated[
        bool,
        typer.Option("--lenient", help="Skip malformed @param lines instead of failing"),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Enable debug logging"),
    ] = False,
) -> None:
    """Parse pattern documentation from source files."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    for file in files:
        if not file.exists():
            typer.echo(f"Error: File not found: {file}", err=True)
            raise typer.Exit(1)

    if format not in ("console", "json"):
        typer.echo(f"Error: Unknown format: {format}", err=True)
        raise typer.Exit(1)

    try:
        if config_file:
            config = ParserConfig.from_file(config_file)
        else:
            config = ParserConfig.from_env()
        if lenient:
            config = replace(config, strict=False)
        patterns = parse_files(files, config)
    except (PatternDocError, OSError, UnicodeDecodeError) as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    if format == "json":
        result = patterns_to_json(patterns)
        if output:
            output.write_text(result, encoding="utf-8")
            typer.echo(f"Patterns written to {output}")
        else:
            typer.echo(result)
    else:
        print_patterns(patterns)


if __name__ == "__main__":
    app()
