"""
SerpAPI provider package.

Exports:
- SerpApiProvider: client implementing SearchProvider for SerpAPI
"""

from .client import SerpApiProvider

__all__ = ["SerpApiProvider"]
