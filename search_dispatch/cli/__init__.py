"""
Command line interface for search_dispatch.
"""

from .app import build_parser, main

__all__ = ["build_parser", "main"]
