"""
Article discovery.

Lists a single source directory (no recursion) and yields every entry whose
name ends with the article suffix. A failed listing is reported once as a
DiscoveryFailure and ends the sequence.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Iterator

from ..core.conduit import Conduit
from ..core.errors import DiscoveryError
from ..core.types import ArticlePath, DiscoveredPath, DiscoveryFailure

ARTICLE_SUFFIX = ".md"


def discover_articles(directory: Path, suffix: str = ARTICLE_SUFFIX) -> Iterator[DiscoveredPath]:
    """Lazily yield discovered article paths in lexical order.

    Args:
        directory: Source directory to scan
        suffix: Literal filename suffix an entry must end with

    Yields:
        ArticlePath for each matching entry, or a single DiscoveryFailure
        if the directory cannot be listed
    """
    try:
        names = sorted(os.listdir(directory))
    except OSError as exc:
        yield DiscoveryFailure(DiscoveryError(directory, exc.strerror or str(exc)))
        return

    for name in names:
        if name.endswith(suffix):
            yield ArticlePath(directory / name)


def feed_discovered(
    directory: Path,
    out: Conduit[DiscoveredPath],
    suffix: str = ARTICLE_SUFFIX,
) -> None:
    """Send every discovered path into ``out`` and close it afterwards."""
    try:
        for item in discover_articles(directory, suffix):
            out.send(item)
    finally:
        out.close()
