"""
Article Site - static HTML pages from a folder of markdown articles.

This package scans a source folder for `<title>.<slug>.md` files, renders
each one to HTML through a shared Jinja2 page template, and writes the
result to `<out>/<slug>/index.html` using a concurrent render pipeline.

Main entry point is the CLI via the `article-site` command.

Example:
    $ article-site -src articles/ -out public/ -tpl templates/
"""

__all__ = ["__version__", "AppConfig", "load_config", "run_build", "BuildReport"]
__version__ = "0.1.0"

from .config import AppConfig, load_config
from .core.types import BuildReport
from .runner import run_build
