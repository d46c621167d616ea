"""
Provider-agnostic interfaces (Protocols) for the search providers layer.

This module defines the boundary contract that upstream code should depend on:
- SearchProvider: execute a normalized SearchQuery and report health

Clients for each concrete vendor (Tavily, Brave, ...) implement SearchProvider
structurally. Upstream does not import vendor clients directly; it goes
through build_provider() in factory.py.

Related DTOs are defined in: search_dispatch/providers/base/models.py
"""

from __future__ import annotations

from typing import FrozenSet, Protocol, runtime_checkable

from ..exceptions import UnsupportedSearchTypeError
from .models import HealthCheckResult, ProviderType, SearchQuery, SearchResponse, SearchType


@runtime_checkable
class SearchProvider(Protocol):
    """
    Minimal interface for web search providers.

    Implementations map SearchQuery fields to vendor request parameters,
    normalize responses to SearchResponse, and raise on failure. Error messages
    should carry the HTTP status so transient failures can be recognized.
    """

    provider_type: ProviderType
    supported_search_types: FrozenSet[SearchType]

    def search(self, query: SearchQuery) -> SearchResponse:
        ...

    def test_connection(self) -> HealthCheckResult:
        """Run a minimal query; never raises."""
        ...


def ensure_supported(provider: SearchProvider, search_type: SearchType) -> None:
    """Reject a search type the provider cannot serve."""
    if search_type not in provider.supported_search_types:
        supported = ", ".join(sorted(t.value for t in provider.supported_search_types))
        name = getattr(provider.provider_type, "value", provider.provider_type)
        raise UnsupportedSearchTypeError(
            f"{name} does not support {SearchType(search_type).value} search. Supported: {supported}",
            provider=name,
        )
