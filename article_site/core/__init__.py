"""
Core domain models and pipeline plumbing.

This package contains the data types, error taxonomy, conduit and job
translation shared by every pipeline stage.
"""

from .conduit import Conduit
from .errors import (
    ArticleIOError,
    ArticleSiteError,
    ConduitClosed,
    ConfigError,
    DiscoveryError,
    FormatError,
    MarkupError,
    RenderError,
    TemplateError,
    TemplateLoadError,
)
from .jobs import build_render_job, split_article_name
from .types import (
    ArticlePath,
    BuildReport,
    DiscoveredPath,
    DiscoveryFailure,
    PageMetadata,
    RenderFailure,
    RenderJob,
    RenderResult,
    RenderSuccess,
)

__all__ = [
    "Conduit",
    "ArticleIOError",
    "ArticleSiteError",
    "ConduitClosed",
    "ConfigError",
    "DiscoveryError",
    "FormatError",
    "MarkupError",
    "RenderError",
    "TemplateError",
    "TemplateLoadError",
    "build_render_job",
    "split_article_name",
    "ArticlePath",
    "BuildReport",
    "DiscoveredPath",
    "DiscoveryFailure",
    "PageMetadata",
    "RenderFailure",
    "RenderJob",
    "RenderResult",
    "RenderSuccess",
]
