"""
Per-article render job.

Each job runs its steps strictly in order and stops at the first failure:
1. Read the markdown source
2. Render it to an HTML fragment
3. Create the output directory tree
4. Create (or truncate) the output file
5. Merge metadata and content into the page template
"""

from __future__ import annotations

from typing import Sequence

import jinja2

from ..core.errors import ArticleIOError, ArticleSiteError
from ..core.types import RenderFailure, RenderJob, RenderResult, RenderSuccess
from .markup import DEFAULT_EXTENSIONS, render_markdown
from .metadata import MetadataPolicy, placeholder_metadata
from .template import write_page


def render_article(
    job: RenderJob,
    template: jinja2.Template,
    *,
    metadata_policy: MetadataPolicy | None = None,
    extensions: Sequence[str] = DEFAULT_EXTENSIONS,
) -> RenderResult:
    """Render one article into its output file.

    Args:
        job: Input and output paths of the article
        template: Loaded page template, shared between threads
        metadata_policy: Produces title and date; fixed placeholders if None
        extensions: Python-Markdown extensions to enable

    Returns:
        RenderSuccess carrying the output path, or RenderFailure carrying the
        input path and the error of the step that failed
    """
    policy = metadata_policy or placeholder_metadata()
    try:
        _render_to_file(job, template, policy, extensions)
    except ArticleSiteError as exc:
        return RenderFailure(input_path=job.input_path, error=exc)
    return RenderSuccess(input_path=job.input_path, output_path=job.output_path)


def _render_to_file(
    job: RenderJob,
    template: jinja2.Template,
    policy: MetadataPolicy,
    extensions: Sequence[str],
) -> None:
    try:
        source = job.input_path.read_bytes()
    except OSError as exc:
        raise ArticleIOError(f"failed to read {job.input_path}: {exc}") from exc

    body = render_markdown(source, extensions)

    try:
        job.output_path.parent.mkdir(mode=0o777, parents=True, exist_ok=True)
    except OSError as exc:
        raise ArticleIOError(f"failed to create {job.output_path.parent}: {exc}") from exc

    try:
        dst = job.output_path.open("w", encoding="utf-8")
    except OSError as exc:
        raise ArticleIOError(f"failed to create {job.output_path}: {exc}") from exc

    with dst:
        write_page(template, policy(job), body, dst)
