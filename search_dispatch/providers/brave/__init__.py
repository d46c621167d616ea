"""
Brave Search provider package.

Exports:
- BraveProvider: client implementing SearchProvider for Brave Search
"""

from .client import BraveProvider

__all__ = ["BraveProvider"]
