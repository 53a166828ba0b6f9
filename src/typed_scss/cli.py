"""Typer CLI entrypoint."""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape

from . import __version__
from .config import DEFAULT_PATTERN, TypingsConfig, load_sass_config
from .runner import run_typings

HELP = """Create .scss.d.ts from CSS modules *.scss files.

\b
Examples:
  typed-scss src/styles
  typed-scss src -o dist
  typed-scss -p 'styles/**/*.scss' -w
"""

app = typer.Typer(
    add_completion=False,
    help=HELP,
    context_settings={"help_option_names": ["-h", "--help"]},
)
console = Console()


def _print_version(value: bool) -> None:
    if value:
        console.print(__version__)
        raise typer.Exit()


@app.command()
def main(
    input_dir: Path = typer.Argument(
        Path("."), help="Directory to search for scss files."
    ),
    camel_case: bool = typer.Option(
        False, "--camel-case", "-c", help="Convert CSS class tokens to camelCase"
    ),
    out_dir: Optional[Path] = typer.Option(None, "--out-dir", "-o", help="Output directory"),
    pattern: str = typer.Option(
        DEFAULT_PATTERN, "--pattern", "-p", help="Glob pattern with scss files"
    ),
    watch: bool = typer.Option(
        False, "--watch", "-w", help="Watch input directory's scss files or pattern"
    ),
    drop_extension: bool = typer.Option(
        False, "--drop-extension", "-d", help="Drop the input files extension"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show verbose message"),
    ignore: Optional[str] = typer.Option(
        None, "--ignore", "-i", help="Glob pattern for files that should be ignored"
    ),
    version: bool = typer.Option(
        False,
        "--version",
        callback=_print_version,
        is_eager=True,
        help="Show the version and exit.",
    ),
) -> None:
    config = TypingsConfig(
        search_dir=str(input_dir),
        pattern=pattern,
        out_dir=str(out_dir) if out_dir is not None else None,
        camel_case=camel_case,
        drop_extension=drop_extension,
        watch=watch,
        verbose=verbose,
        ignore=ignore,
    )
    try:
        config.ensure_search_dir()
    except FileNotFoundError as exc:
        console.print(f"[red]Error: {escape(str(exc))}[/red]")
        raise typer.Exit(code=1)

    try:
        sass_options = load_sass_config()
    except ValueError as exc:
        console.print(f"[red]Error: {escape(str(exc))}[/red]")
        raise typer.Exit(code=1)

    try:
        asyncio.run(run_typings(config, sass_options))
    except KeyboardInterrupt:
        if watch:
            console.print("Stopped watching")
        else:
            raise typer.Exit(code=130)


def run() -> None:
    app()


if __name__ == "__main__":
    run()
