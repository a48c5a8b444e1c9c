"""
Page template loading and merging with Jinja2.

The template is loaded once per run and shared read-only by every render
thread. Rendering exposes three variables to the template:
- title: presentation title of the article
- created_at: presentation date of the article
- content: rendered HTML fragment, marked safe so it is not escaped
"""

from __future__ import annotations

from pathlib import Path
from typing import TextIO

import jinja2
from jinja2 import Environment, FileSystemLoader, StrictUndefined, select_autoescape
from markupsafe import Markup

from ..core.errors import TemplateError, TemplateLoadError
from ..core.types import PageMetadata

TEMPLATE_NAME = "article.html"


def load_page_template(template_dir: Path, name: str = TEMPLATE_NAME) -> jinja2.Template:
    """Load and compile ``<template_dir>/<name>``.

    Raises:
        TemplateLoadError: If the file is missing, unreadable or malformed
    """
    env = Environment(
        loader=FileSystemLoader(str(template_dir)),
        autoescape=select_autoescape(["html"]),
        undefined=StrictUndefined,
        keep_trailing_newline=True,
    )
    try:
        return env.get_template(name)
    except jinja2.TemplateNotFound as exc:
        raise TemplateLoadError(f"template {template_dir / name} not found") from exc
    except jinja2.TemplateSyntaxError as exc:
        raise TemplateLoadError(
            f"template {template_dir / name} is malformed (line {exc.lineno}): {exc.message}"
        ) from exc
    except (jinja2.TemplateError, OSError, UnicodeDecodeError) as exc:
        raise TemplateLoadError(f"failed to load template {template_dir / name}: {exc}") from exc


def write_page(
    template: jinja2.Template,
    metadata: PageMetadata,
    content: str,
    dst: TextIO,
) -> None:
    """Merge metadata and HTML content into ``template`` and stream it to ``dst``.

    Raises:
        TemplateError: If the template fails to render or the write fails
    """
    try:
        template.stream(
            title=metadata.title,
            created_at=metadata.created_at,
            content=Markup(content),
        ).dump(dst)
    except jinja2.TemplateError as exc:
        raise TemplateError(f"template execution failed: {exc}") from exc
    except OSError as exc:
        raise TemplateError(f"failed to write page: {exc}") from exc
