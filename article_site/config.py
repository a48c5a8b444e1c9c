"""
Configuration management using YAML files and dataclasses.

This module defines all configuration dataclasses and provides loading
from YAML files with defaults. Configuration sections:
- PathsConfig: Source, output and template locations
- RenderConfig: Concurrency, markdown and page metadata settings
- LoggingConfig: Logging behavior
- BuildConfig: Run-level policy such as strict exit codes
- AppConfig: Root configuration container
"""

from __future__ import annotations

from dataclasses import dataclass, field
import os
from typing import Any

import yaml

from .core.errors import ConfigError


@dataclass
class PathsConfig:
    """Configuration for input and output locations.

    Attributes:
        source_dir: Directory containing article files (not scanned recursively)
        output_dir: Root directory for rendered pages
        template_dir: Directory containing the page template
        template_name: File name of the page template inside template_dir
        article_suffix: Literal suffix an entry must end with to be an article
        output_filename: File written inside each <slug> directory
    """

    source_dir: str | None = None
    output_dir: str | None = None
    template_dir: str | None = None
    template_name: str = "article.html"
    article_suffix: str = ".md"
    output_filename: str = "index.html"


@dataclass
class RenderConfig:
    """Configuration for article rendering.

    Attributes:
        max_workers: "auto", "unbounded", or a positive number of concurrent jobs
        markdown_extensions: Python-Markdown extensions to enable
        metadata: Metadata policy ("placeholder" or "filename")
        placeholder_title: Title used by the placeholder policy
        placeholder_created_at: Date used by the placeholder policy
        date_format: strftime format used by the filename policy
    """

    max_workers: int | str = "auto"
    markdown_extensions: list[str] = field(default_factory=lambda: ["fenced_code", "tables"])
    metadata: str = "placeholder"
    placeholder_title: str = "title"
    placeholder_created_at: str = "23/07/23"
    date_format: str = "%d/%m/%y"


@dataclass
class LoggingConfig:
    """Configuration for logging behavior.

    Attributes:
        level: Logging level ("DEBUG", "INFO", "WARNING", "ERROR")
        console: Whether to log to console
        file: Whether to log to file
        format: Log file format ("jsonl" or "plain")
        filename: Name of the log file
        directory: Directory for the log file (defaults to the output root)
    """

    level: str = "INFO"
    console: bool = True
    file: bool = False
    format: str = "plain"
    filename: str = "build.jsonl"
    directory: str | None = None


@dataclass
class BuildConfig:
    """Run-level policy.

    Attributes:
        strict: Exit non-zero when any article fails, is skipped, or discovery fails
    """

    strict: bool = False


@dataclass
class AppConfig:
    """Root configuration container aggregating all config sections."""

    paths: PathsConfig = field(default_factory=PathsConfig)
    render: RenderConfig = field(default_factory=RenderConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    build: BuildConfig = field(default_factory=BuildConfig)


def load_config(path: str | None) -> AppConfig:
    """Load configuration from a YAML file with defaults."""
    if not path:
        return AppConfig()

    try:
        with open(path, "r", encoding="utf-8") as f:
            raw = yaml.safe_load(f) or {}
    except OSError as exc:
        raise ConfigError(f"failed to read config {path}: {exc}") from exc
    except yaml.YAMLError as exc:
        raise ConfigError(f"invalid YAML in config {path}: {exc}") from exc

    if not isinstance(raw, dict):
        raise ConfigError(f"config {path} must contain a mapping")
    return _merge_config(AppConfig(), raw)


def _merge_config(base: AppConfig, raw: dict[str, Any]) -> AppConfig:
    """Merge raw YAML config into base AppConfig."""
    data = _asdict(base)
    for key, value in raw.items():
        if key not in data:
            continue
        if isinstance(value, dict) and isinstance(data[key], dict):
            data[key].update(value)
        elif value is not None:
            raise ConfigError(f"config section '{key}' must be a mapping")
    return _fromdict(data)


def _asdict(cfg: AppConfig) -> dict[str, Any]:
    """Convert AppConfig to nested dictionary."""
    return {
        "paths": {
            "source_dir": cfg.paths.source_dir,
            "output_dir": cfg.paths.output_dir,
            "template_dir": cfg.paths.template_dir,
            "template_name": cfg.paths.template_name,
            "article_suffix": cfg.paths.article_suffix,
            "output_filename": cfg.paths.output_filename,
        },
        "render": {
            "max_workers": cfg.render.max_workers,
            "markdown_extensions": list(cfg.render.markdown_extensions),
            "metadata": cfg.render.metadata,
            "placeholder_title": cfg.render.placeholder_title,
            "placeholder_created_at": cfg.render.placeholder_created_at,
            "date_format": cfg.render.date_format,
        },
        "logging": {
            "level": cfg.logging.level,
            "console": cfg.logging.console,
            "file": cfg.logging.file,
            "format": cfg.logging.format,
            "filename": cfg.logging.filename,
            "directory": cfg.logging.directory,
        },
        "build": {
            "strict": cfg.build.strict,
        },
    }


def _fromdict(data: dict[str, Any]) -> AppConfig:
    """Reconstruct AppConfig from nested dictionary."""
    try:
        return AppConfig(
            paths=PathsConfig(**data["paths"]),
            render=RenderConfig(**data["render"]),
            logging=LoggingConfig(**data["logging"]),
            build=BuildConfig(**data["build"]),
        )
    except TypeError as exc:
        raise ConfigError(f"unknown config option: {exc}") from exc


def resolve_max_workers(value: int | str | None) -> int | None:
    """Translate the configured worker setting into a pool size.

    Returns:
        A positive worker count, or None for unbounded fan-out

    Raises:
        ConfigError: If the value is not "auto", "unbounded" or a positive integer
    """
    if value is None:
        return None
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered == "auto":
            return (os.cpu_count() or 1) * 4
        if lowered == "unbounded":
            return None
        if not lowered.isdigit():
            raise ConfigError(
                "Unsupported max_workers. Use 'auto', 'unbounded' or a positive integer."
            )
        value = int(lowered)
    if isinstance(value, bool) or value < 1:
        raise ConfigError("max_workers must be a positive integer")
    return value
