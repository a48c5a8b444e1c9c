"""Translate discovered article paths into render jobs."""

from __future__ import annotations

from pathlib import Path

from .errors import FormatError
from .types import RenderJob

OUTPUT_FILENAME = "index.html"


def split_article_name(filename: str) -> tuple[str, str, str]:
    """Split ``<title>.<slug>.<extension>`` into its three components.

    Raises:
        FormatError: If the name does not have exactly three dot-separated parts
    """
    chunks = filename.split(".")
    if len(chunks) != 3:
        raise FormatError(filename)
    title, slug, extension = chunks
    return title, slug, extension


def build_render_job(
    input_path: Path,
    output_root: Path,
    output_filename: str = OUTPUT_FILENAME,
) -> RenderJob:
    """Build the job for one article: ``<output_root>/<slug>/<output_filename>``."""
    _title, slug, _extension = split_article_name(input_path.name)
    return RenderJob(
        input_path=input_path,
        output_path=output_root / slug / output_filename,
    )
