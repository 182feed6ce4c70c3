"""
Command-line interface for the fathead compiler.

Uses Typer to provide a CLI with options for the most common configuration
settings; everything else comes from the YAML config file.
"""

from __future__ import annotations

from pathlib import Path

import typer
from rich.console import Console

from .config import load_config, validate_config
from .core.errors import FatheadError
from .runner import run_pipeline

app = typer.Typer(add_completion=False)
console = Console()


@app.callback()
def main() -> None:
    """Compile HTML reference documentation into a Fathead output file."""


@app.command()
def run(
    docs_dir: Path | None = typer.Option(
        None, "--docs-dir", "-d", file_okay=False, help="Directory holding the HTML pages."
    ),
    output: Path | None = typer.Option(None, "--output", "-o", help="Output file path."),
    config: Path | None = typer.Option(None, "--config", "-c", exists=True, readable=True),
    base_url: str | None = typer.Option(None, "--base-url", help="Canonical URL of the docs."),
    progress: bool = typer.Option(True, "--progress/--no-progress"),
    log_level: str | None = typer.Option(None, "--log-level", help="Logging level."),
    log_file: bool | None = typer.Option(
        None, "--log-file/--no-log-file", help="Enable or disable file logging."
    ),
):
    """Run the compiler.

    Parses every page under the docs directory, resolves aliases and writes
    articles, redirects and disambiguations to the output file.
    """
    try:
        cfg = load_config(str(config) if config else None)
        if docs_dir is not None:
            cfg.source.docs_dir = str(docs_dir)
        if output is not None:
            cfg.output.path = str(output)
        if base_url:
            cfg.source.base_url = base_url
        if log_level:
            cfg.logging.level = log_level
        if log_file is not None:
            cfg.logging.file = log_file
        validate_config(cfg)
    except ValueError as exc:
        console.print(f"[red]Invalid configuration[/red]: {exc}")
        raise typer.Exit(code=2)

    source_dir = Path(cfg.source.docs_dir)
    if not source_dir.is_dir():
        console.print(f"[red]Docs directory not found[/red]: {source_dir}")
        raise typer.Exit(code=2)

    output_path = Path(cfg.output.path)
    try:
        stats = run_pipeline(source_dir, output_path, cfg, show_progress=progress, console=console)
    except FatheadError as exc:
        console.print(f"[red]Compilation failed[/red]: {exc}")
        raise typer.Exit(code=1)

    console.print(f"Wrote {stats.rows} rows to {output_path}")


if __name__ == "__main__":
    app()
