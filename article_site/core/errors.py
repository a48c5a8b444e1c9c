"""
Exception taxonomy for the build pipeline.

Per-article errors (ArticleIOError, MarkupError, TemplateError,
RenderError) are carried inside RenderFailure results and never abort
sibling articles. DiscoveryError and FormatError are logged and the run
continues. ConfigError and TemplateLoadError are fatal and stop the run
before any article is processed.
"""

from __future__ import annotations

from pathlib import Path


class ArticleSiteError(Exception):
    """Base class for all article-site errors."""


class ConfigError(ArticleSiteError):
    """Required configuration is missing or invalid."""


class DiscoveryError(ArticleSiteError):
    """The source directory could not be listed."""

    def __init__(self, directory: Path, reason: str):
        super().__init__(f"failed to read source directory {directory}: {reason}")
        self.directory = directory
        self.reason = reason


class FormatError(ArticleSiteError):
    """Article filename does not have the form <title>.<slug>.<extension>."""

    def __init__(self, filename: str):
        super().__init__(f"wrong filename format for file {filename}")
        self.filename = filename


class ArticleIOError(ArticleSiteError):
    """Reading the article, or creating its output directory or file, failed."""


class MarkupError(ArticleSiteError):
    """The markdown body could not be converted to HTML."""


class TemplateError(ArticleSiteError):
    """The page template failed while rendering an article."""


class TemplateLoadError(TemplateError):
    """The page template is missing or does not parse."""


class RenderError(ArticleSiteError):
    """Unexpected failure while rendering an article."""


class ConduitClosed(ArticleSiteError):
    """Raised when sending on, or receiving from, a closed conduit."""
