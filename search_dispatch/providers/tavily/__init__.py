"""
Tavily provider package.

Exports:
- TavilyProvider: client implementing SearchProvider for Tavily
"""

from .client import TavilyProvider

__all__ = ["TavilyProvider"]
