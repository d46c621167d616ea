"""
Google Custom Search provider package.

Exports:
- GoogleProvider: client implementing SearchProvider for Google Custom Search
"""

from .client import GoogleProvider

__all__ = ["GoogleProvider"]
