"""
Core data types for the article build pipeline.

This module defines the values that flow between pipeline stages:
- ArticlePath / DiscoveryFailure: the two variants of a discovered path
- RenderJob: resolved input/output pair for one article
- RenderSuccess / RenderFailure: the two variants of a render result
- PageMetadata: presentation metadata merged into the page template
- BuildReport: aggregated outcome of a whole run
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Union

from .errors import ArticleSiteError, DiscoveryError


@dataclass(frozen=True)
class ArticlePath:
    """An eligible article file found during discovery.

    Attributes:
        path: Source directory joined with the entry name
    """

    path: Path


@dataclass(frozen=True)
class DiscoveryFailure:
    """The source directory listing failed; no paths follow."""

    error: DiscoveryError


DiscoveredPath = Union[ArticlePath, DiscoveryFailure]


@dataclass(frozen=True)
class RenderJob:
    """One article ready for conversion.

    Attributes:
        input_path: Markdown source file
        output_path: Destination HTML file, <output_root>/<slug>/index.html
    """

    input_path: Path
    output_path: Path


@dataclass(frozen=True)
class RenderSuccess:
    input_path: Path
    output_path: Path

    @property
    def path(self) -> Path:
        return self.output_path

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class RenderFailure:
    """A job that stopped at one of its render steps.

    Attributes:
        input_path: The article that failed
        error: The error raised by the failing step
    """

    input_path: Path
    error: ArticleSiteError

    @property
    def path(self) -> Path:
        return self.input_path

    @property
    def ok(self) -> bool:
        return False


RenderResult = Union[RenderSuccess, RenderFailure]


@dataclass(frozen=True)
class PageMetadata:
    title: str
    created_at: str


@dataclass
class BuildReport:
    """Outcome of a build run.

    Attributes:
        rendered: Successfully written articles
        failed: Articles whose render job failed
        skipped: Discovered files rejected by the filename format check
        discovery_errors: Errors raised while listing the source directory
    """

    rendered: list[RenderSuccess] = field(default_factory=list)
    failed: list[RenderFailure] = field(default_factory=list)
    skipped: list[Path] = field(default_factory=list)
    discovery_errors: list[DiscoveryError] = field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.rendered) + len(self.failed)

    @property
    def ok(self) -> bool:
        return not (self.failed or self.skipped or self.discovery_errors)
