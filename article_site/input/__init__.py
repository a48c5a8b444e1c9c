"""
Input discovery utilities.

This package contains code for finding article files in the source directory.
"""

from .discovery import discover_articles, feed_discovered

__all__ = ["discover_articles", "feed_discovered"]
