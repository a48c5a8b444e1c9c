"""
Build pipeline orchestration.

This module wires the concurrent stages together:
1. Discovery lists the source directory into a conduit
2. Translation turns discovered paths into render jobs
3. The render pool converts and writes each job in its own thread
4. The calling thread consumes render results and logs each outcome

Every stage talks through an unbuffered conduit, so no stage can run ahead
of the one it feeds. The page template is loaded before any stage starts;
a template that cannot be loaded aborts the run.
"""

from __future__ import annotations

import logging
import threading
from functools import partial
from pathlib import Path

from rich.console import Console

from .config import AppConfig, resolve_max_workers
from .core.conduit import Conduit
from .core.errors import ConfigError, FormatError, MarkupError
from .core.jobs import build_render_job
from .core.types import (
    BuildReport,
    DiscoveredPath,
    DiscoveryFailure,
    RenderFailure,
    RenderJob,
    RenderResult,
)
from .input.discovery import feed_discovered
from .render.markup import validate_extensions
from .render.metadata import build_metadata_policy
from .render.pool import RenderHandler, RenderPool
from .render.template import load_page_template
from .render.worker import render_article
from .utils.logging import LOGGER_NAME, log_event


def run_build(
    cfg: AppConfig,
    logger: logging.Logger | None = None,
    console: Console | None = None,
    handler: RenderHandler | None = None,
) -> BuildReport:
    """Run the complete article build.

    Args:
        cfg: Application configuration
        logger: Logger for pipeline events (defaults to the package logger)
        console: Rich console for the final summary; no summary if None
        handler: Override for the per-job render callable

    Returns:
        BuildReport aggregating every outcome of the run

    Raises:
        ConfigError: If a required path or option is missing or invalid
        TemplateLoadError: If the page template cannot be loaded
    """
    logger = logger or logging.getLogger(LOGGER_NAME)
    source_dir, output_dir, template_dir = _require_paths(cfg)
    max_workers = resolve_max_workers(cfg.render.max_workers)

    # Load the template before anything runs so a bad template aborts the run.
    template = load_page_template(template_dir, cfg.paths.template_name)
    if handler is None:
        handler = _build_handler(cfg, template)

    log_event(
        logger,
        "Build start",
        event="build_start",
        source=str(source_dir),
        output=str(output_dir),
        max_workers=max_workers if max_workers is not None else "unbounded",
    )

    report = BuildReport()
    discovered: Conduit[DiscoveredPath] = Conduit("discovered paths")
    jobs: Conduit[RenderJob] = Conduit("render jobs")
    results: Conduit[RenderResult] = Conduit("render results")

    pool = RenderPool(handler, max_workers=max_workers, logger=logger)
    stages = [
        pool.start(jobs, results),
        _start_stage(
            "discovery",
            feed_discovered,
            source_dir,
            discovered,
            cfg.paths.article_suffix,
        ),
        _start_stage(
            "translation",
            _translate_paths,
            discovered,
            jobs,
            output_dir,
            cfg.paths.output_filename,
            report,
            logger,
        ),
    ]

    for result in results:
        if isinstance(result, RenderFailure):
            report.failed.append(result)
            log_event(
                logger,
                f"failed to render {result.path}: {result.error}",
                level=logging.ERROR,
                event="render_failed",
                path=str(result.path),
                error=str(result.error),
                error_type=type(result.error).__name__,
            )
        else:
            report.rendered.append(result)
            log_event(
                logger,
                f"successfully rendered {result.path}",
                event="render_ok",
                path=str(result.path),
                source=str(result.input_path),
            )

    for stage in stages:
        stage.join()

    log_event(
        logger,
        "finished",
        event="build_complete",
        rendered=len(report.rendered),
        failed=len(report.failed),
        skipped=len(report.skipped),
    )
    if console is not None:
        _render_build_stats(report, console)
    return report


def _translate_paths(
    discovered: Conduit[DiscoveredPath],
    jobs: Conduit[RenderJob],
    output_dir: Path,
    output_filename: str,
    report: BuildReport,
    logger: logging.Logger,
) -> None:
    """Turn discovered paths into render jobs, closing ``jobs`` when done."""
    try:
        for item in discovered:
            if isinstance(item, DiscoveryFailure):
                report.discovery_errors.append(item.error)
                log_event(
                    logger,
                    str(item.error),
                    level=logging.ERROR,
                    event="discovery_failed",
                    path=str(item.error.directory),
                    error=item.error.reason,
                )
                continue

            try:
                job = build_render_job(item.path, output_dir, output_filename)
            except FormatError as exc:
                report.skipped.append(item.path)
                log_event(
                    logger,
                    str(exc),
                    level=logging.WARNING,
                    event="filename_rejected",
                    path=str(item.path),
                )
                continue

            jobs.send(job)
    finally:
        jobs.close()


def _start_stage(name: str, target, *args) -> threading.Thread:
    thread = threading.Thread(target=target, args=args, name=name, daemon=True)
    thread.start()
    return thread


def _build_handler(cfg: AppConfig, template) -> RenderHandler:
    """Bind the configured template, metadata policy and extensions to render_article."""
    try:
        validate_extensions(cfg.render.markdown_extensions)
    except MarkupError as exc:
        raise ConfigError(str(exc)) from exc

    policy = build_metadata_policy(
        cfg.render.metadata,
        title=cfg.render.placeholder_title,
        created_at=cfg.render.placeholder_created_at,
        date_format=cfg.render.date_format,
    )
    return partial(
        render_article,
        template=template,
        metadata_policy=policy,
        extensions=tuple(cfg.render.markdown_extensions),
    )


def _require_paths(cfg: AppConfig) -> tuple[Path, Path, Path]:
    """Return source, output and template directories, all required."""
    missing = [
        flag
        for flag, value in (
            ("src", cfg.paths.source_dir),
            ("out", cfg.paths.output_dir),
            ("tpl", cfg.paths.template_dir),
        )
        if not value
    ]
    if missing:
        raise ConfigError(f"missing required paths: {', '.join(missing)}")
    return (
        Path(cfg.paths.source_dir),
        Path(cfg.paths.output_dir),
        Path(cfg.paths.template_dir),
    )


def _render_build_stats(report: BuildReport, console: Console) -> None:
    """Display build statistics to the console."""
    console.print(
        "[bold]Build summary[/bold]: "
        f"rendered={len(report.rendered)}, failed={len(report.failed)}, "
        f"skipped={len(report.skipped)}, discovery_errors={len(report.discovery_errors)}"
    )
