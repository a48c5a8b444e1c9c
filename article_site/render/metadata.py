"""
Presentation metadata policies.

A policy maps a render job to the title and date shown on the page:
- placeholder: the same configured title and date for every article
- filename: title from the filename, date from the source file's mtime
"""

from __future__ import annotations

from datetime import datetime
from typing import Callable

from ..core.errors import ArticleIOError, ConfigError
from ..core.jobs import split_article_name
from ..core.types import PageMetadata, RenderJob

MetadataPolicy = Callable[[RenderJob], PageMetadata]

DEFAULT_TITLE = "title"
DEFAULT_CREATED_AT = "23/07/23"
DEFAULT_DATE_FORMAT = "%d/%m/%y"


def placeholder_metadata(
    title: str = DEFAULT_TITLE,
    created_at: str = DEFAULT_CREATED_AT,
) -> MetadataPolicy:
    metadata = PageMetadata(title=title, created_at=created_at)

    def _policy(job: RenderJob) -> PageMetadata:
        return metadata

    return _policy


def filename_metadata(date_format: str = DEFAULT_DATE_FORMAT) -> MetadataPolicy:
    def _policy(job: RenderJob) -> PageMetadata:
        title, _slug, _extension = split_article_name(job.input_path.name)
        try:
            mtime = job.input_path.stat().st_mtime
        except OSError as exc:
            raise ArticleIOError(f"failed to stat {job.input_path}: {exc}") from exc
        return PageMetadata(
            title=title.replace("-", " ").replace("_", " ").strip() or title,
            created_at=datetime.fromtimestamp(mtime).strftime(date_format),
        )

    return _policy


def build_metadata_policy(
    name: str,
    *,
    title: str = DEFAULT_TITLE,
    created_at: str = DEFAULT_CREATED_AT,
    date_format: str = DEFAULT_DATE_FORMAT,
) -> MetadataPolicy:
    """Build a metadata policy by name.

    Raises:
        ConfigError: If the policy name is not supported
    """
    mode = (name or "placeholder").lower()
    if mode == "placeholder":
        return placeholder_metadata(title, created_at)
    if mode == "filename":
        return filename_metadata(date_format)
    raise ConfigError("Unsupported metadata policy. Use 'placeholder' or 'filename'.")
