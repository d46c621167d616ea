"""
search_dispatch: run web searches across interchangeable providers with
bounded retry and automatic fallback.

Quick start:
    from search_dispatch import SearchQuery, build_dispatcher
    response = build_dispatcher().dispatch(SearchQuery(query="python packaging"))
"""

from search_dispatch.providers import (
    AggregateDispatchFailure,
    ConfigurationError,
    DispatchCancelledError,
    ProviderConstructionError,
    SearchError,
)
from search_dispatch.providers.base import (
    ProviderCredentials,
    ProviderType,
    SearchQuery,
    SearchResponse,
    SearchResult,
    SearchSettings,
    SearchType,
)
from search_dispatch.dispatch import (
    CancellationToken,
    RetryExecutor,
    RetryPolicy,
    SearchConfigResolver,
    SearchDispatcher,
)
from search_dispatch.composition import build_dispatcher, build_resolver

__all__ = [
    "AggregateDispatchFailure",
    "ConfigurationError",
    "DispatchCancelledError",
    "ProviderConstructionError",
    "SearchError",
    "ProviderCredentials",
    "ProviderType",
    "SearchQuery",
    "SearchResponse",
    "SearchResult",
    "SearchSettings",
    "SearchType",
    "CancellationToken",
    "RetryExecutor",
    "RetryPolicy",
    "SearchConfigResolver",
    "SearchDispatcher",
    "build_dispatcher",
    "build_resolver",
]
