"""
Search dispatch with retry and provider fallback.

dispatch() walks the provider chain strictly in order, one provider call in
flight at a time:

    Idle -> Attempting[i] -> Success                     -> Done
                          -> transient failure            -> Attempting[i] (retry, via RetryExecutor)
                          -> exhausted, not last/pinned   -> Attempting[i+1]
                          -> exhausted, last or pinned    -> Failed

Provider construction failures count as an immediate permanent failure for
that chain entry. Cancellation aborts the whole walk.
"""

from __future__ import annotations

import logging
from typing import List, Mapping, Optional, Tuple

from search_dispatch.providers.base.catalog import PROVIDER_INFO
from search_dispatch.providers.base.factory import ProviderBuilder, build_provider
from search_dispatch.providers.base.interfaces import ensure_supported
from search_dispatch.providers.base.models import (
    HealthCheckResult,
    ProviderInfo,
    ProviderType,
    SearchQuery,
    SearchResponse,
    SearchSettings,
)
from search_dispatch.providers.exceptions import (
    AggregateDispatchFailure,
    ConfigurationError,
    DispatchCancelledError,
)

from .cancellation import CancellationToken
from .config_resolver import SearchConfigResolver
from .ordering import provider_execution_order
from .retry import RetryExecutor

logger = logging.getLogger(__name__)


class SearchDispatcher:
    """
    Entry point for running a search against the configured providers.

    Construction:
      dispatcher = SearchDispatcher(SearchConfigResolver(store))
      response = dispatcher.dispatch(SearchQuery(query="..."))
    """

    def __init__(
        self,
        resolver: SearchConfigResolver,
        executor: Optional[RetryExecutor] = None,
        provider_builder: ProviderBuilder = build_provider,
        catalog: Mapping[ProviderType, ProviderInfo] = PROVIDER_INFO,
        deadline_s: Optional[float] = None,
    ) -> None:
        self.resolver = resolver
        self.executor = executor or RetryExecutor()
        self._build = provider_builder
        self._catalog = catalog
        self._deadline_s = deadline_s

    def dispatch(self, query: SearchQuery, token: Optional[CancellationToken] = None) -> SearchResponse:
        settings = self.resolver.load()
        pinned = query.provider

        if pinned is None and settings.primary_provider is None:
            raise ConfigurationError("No search provider configured")

        chain = provider_execution_order(settings, query, self._catalog)
        if not chain:
            raise ConfigurationError("No search provider configured")

        if token is None and self._deadline_s is not None:
            token = CancellationToken(deadline_s=self._deadline_s)

        failures: List[Tuple[ProviderType, BaseException]] = []
        for index, provider_type in enumerate(chain):
            try:
                response = self._attempt(provider_type, settings, query, token)
            except DispatchCancelledError:
                raise
            except Exception as e:
                if pinned is not None:
                    raise
                failures.append((provider_type, e))
                logger.warning("Search provider (%s) failed: %s", provider_type.value, e)
                if index == len(chain) - 1:
                    raise AggregateDispatchFailure(failures) from e
                logger.info("Attempting fallback to %s...", chain[index + 1].value)
                continue

            if index > 0:
                logger.info("Fallback search with %s succeeded", provider_type.value)
            return response

        # chain is non-empty, so the loop always returns or raises
        raise ConfigurationError("No search provider configured")

    def test_provider(self, provider: ProviderType | str) -> HealthCheckResult:
        """Build the provider from stored credentials and run its health check."""
        try:
            provider_type = ProviderType.parse(provider)
            client = self._build(provider_type, self.resolver.provider_credentials(provider_type))
            return client.test_connection()
        except Exception as e:
            return HealthCheckResult(success=False, error=str(e) or "Failed to create provider")

    def _attempt(
        self,
        provider_type: ProviderType,
        settings: SearchSettings,
        query: SearchQuery,
        token: Optional[CancellationToken],
    ) -> SearchResponse:
        if token is not None:
            token.raise_if_cancelled()
        provider = self._build(provider_type, settings.credentials_for(provider_type))
        ensure_supported(provider, query.search_type)
        logger.info("Searching %s via %s", query.search_type.value, provider_type.value)
        return self.executor.run(provider, query, token=token)
