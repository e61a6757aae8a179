"""Command line entry points for lexpath."""

from .main import PathReport, build_parser, main

__all__ = ["PathReport", "build_parser", "main"]
