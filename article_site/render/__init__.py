"""
Article rendering.

This package turns render jobs into HTML pages: markdown conversion,
page templating, metadata policies and the concurrent worker pool.
"""

from .markup import render_markdown, validate_extensions
from .metadata import build_metadata_policy, filename_metadata, placeholder_metadata
from .pool import RenderPool
from .template import load_page_template, write_page
from .worker import render_article

__all__ = [
    "render_markdown",
    "validate_extensions",
    "build_metadata_policy",
    "filename_metadata",
    "placeholder_metadata",
    "RenderPool",
    "load_page_template",
    "write_page",
    "render_article",
]
