"""Markdown to HTML conversion using Python-Markdown."""

from __future__ import annotations

from typing import Sequence

import markdown

from ..core.errors import MarkupError

DEFAULT_EXTENSIONS = ("fenced_code", "tables")


def _build_converter(extensions: Sequence[str]) -> markdown.Markdown:
    # Markdown instances keep per-document state, so each conversion gets its own.
    return markdown.Markdown(extensions=list(extensions), output_format="html")


def validate_extensions(extensions: Sequence[str]) -> None:
    """Fail early when a configured extension cannot be loaded."""
    try:
        _build_converter(extensions)
    except (ImportError, AttributeError, TypeError, ValueError) as exc:
        raise MarkupError(f"invalid markdown extensions {list(extensions)}: {exc}") from exc


def render_markdown(source: bytes, extensions: Sequence[str] = DEFAULT_EXTENSIONS) -> str:
    """Render raw markdown bytes to an HTML fragment.

    Raises:
        MarkupError: If the bytes are not UTF-8 or the converter fails
    """
    try:
        text = source.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise MarkupError(f"article is not valid UTF-8: {exc}") from exc

    try:
        return _build_converter(extensions).convert(text)
    except Exception as exc:  # noqa: BLE001
        raise MarkupError(str(exc)) from exc
