"""
Command-line interface for the article site builder.

Uses Typer to provide a CLI with options for all major configuration
settings. Source, output and template directories may also come from the
YAML config or from ARTICLE_SITE_* environment variables (a .env file is
loaded when present).
"""

from __future__ import annotations

import os
from pathlib import Path

import typer
from dotenv import load_dotenv
from rich.console import Console

from .config import load_config
from .core.errors import ConfigError, TemplateLoadError
from .runner import run_build
from .utils.logging import setup_logging

app = typer.Typer(add_completion=False)
console = Console()
err_console = Console(stderr=True)

ENV_SOURCE_DIR = "ARTICLE_SITE_SRC"
ENV_OUTPUT_DIR = "ARTICLE_SITE_OUT"
ENV_TEMPLATE_DIR = "ARTICLE_SITE_TPL"


@app.command()
def build(
    ctx: typer.Context,
    src: Path | None = typer.Option(
        None, "--src", "-src", help="Folder containing <title>.<slug>.md articles."
    ),
    out: Path | None = typer.Option(
        None, "--out", "-out", help="Destination root folder for articles."
    ),
    tpl: Path | None = typer.Option(
        None, "--tpl", "-tpl", help="Folder containing the article.html template."
    ),
    config: Path | None = typer.Option(
        None, "--config", "-c", exists=True, dir_okay=False, help="YAML config file."
    ),
    workers: str | None = typer.Option(
        None,
        "--workers",
        "-w",
        help="Concurrent render jobs: auto, unbounded, or a positive integer.",
    ),
    strict: bool | None = typer.Option(
        None,
        "--strict/--no-strict",
        help="Exit with status 1 if any article failed or was skipped.",
    ),
    log_level: str | None = typer.Option(None, "--log-level", help="Logging level."),
    log_format: str | None = typer.Option(
        None, "--log-format", help="Log file format: jsonl or plain."
    ),
    log_file: bool | None = typer.Option(
        None, "--log-file/--no-log-file", help="Enable or disable file logging."
    ),
):
    """Render every article in SRC into OUT/<slug>/index.html.

    Args:
        src: Source directory with markdown articles
        out: Output root directory
        tpl: Directory holding the page template
        config: Optional path to YAML config file
        workers: Concurrency setting (auto, unbounded, N)
        strict: Whether partial failures change the exit code
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR)
        log_format: Log file format (jsonl, plain)
        log_file: Enable/disable file logging
    """
    load_dotenv()

    try:
        cfg = load_config(str(config) if config else None)
    except ConfigError as exc:
        err_console.print(f"[red]Error:[/red] {exc}")
        raise typer.Exit(code=1)

    # CLI options take precedence over environment, which overrides the config file.
    for value, env_name, attr in (
        (src, ENV_SOURCE_DIR, "source_dir"),
        (out, ENV_OUTPUT_DIR, "output_dir"),
        (tpl, ENV_TEMPLATE_DIR, "template_dir"),
    ):
        resolved = str(value) if value else os.getenv(env_name)
        if resolved:
            setattr(cfg.paths, attr, resolved)

    if not (cfg.paths.source_dir and cfg.paths.output_dir and cfg.paths.template_dir):
        typer.echo(ctx.get_help(), err=True)
        raise typer.Exit(code=1)

    if workers:
        cfg.render.max_workers = workers
    if strict is not None:
        cfg.build.strict = strict
    if log_level:
        cfg.logging.level = log_level
    if log_format:
        cfg.logging.format = log_format
    if log_file is not None:
        cfg.logging.file = log_file

    logger = setup_logging(cfg.logging, Path(cfg.paths.output_dir))

    try:
        report = run_build(cfg, logger=logger, console=console)
    except (ConfigError, TemplateLoadError) as exc:
        err_console.print(f"[red]Error:[/red] {exc}")
        raise typer.Exit(code=1)

    if cfg.build.strict and not report.ok:
        raise typer.Exit(code=1)


if __name__ == "__main__":
    app()
