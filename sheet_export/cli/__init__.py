"""Command line interface for sheet-export."""

from sheet_export.cli.lib import build_parser, main

__all__ = [
    "build_parser",
    "main",
]
