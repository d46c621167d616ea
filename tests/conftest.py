"""
Shared test fixtures for search dispatch tests.

Nothing here touches the network: providers are scripted fakes and vendor
HTTP calls are mocked with `responses` in the client tests.
"""

import os
import random
import sys
from typing import Any, Callable, Dict, Iterable, List, Optional

import pytest

# Ensure project root is on sys.path so 'search_dispatch' imports resolve in tests
_PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if _PROJECT_ROOT not in sys.path:
    sys.path.insert(0, _PROJECT_ROOT)

from search_dispatch.dispatch import RetryExecutor, RetryPolicy, SearchConfigResolver, SearchDispatcher
from search_dispatch.providers.base.models import (
    HealthCheckResult,
    ProviderCredentials,
    ProviderType,
    SearchQuery,
    SearchResponse,
    SearchResult,
    SearchType,
)
from search_dispatch.providers.exceptions import ProviderConstructionError
from search_dispatch.settings import InMemorySettingsStore


ALL_KEYS = {
    "tavily": {"api_key": "tvly-key"},
    "brave": {"api_key": "brave-key"},
    "serpapi": {"api_key": "serp-key"},
    "google": {"api_key": "google-key", "search_engine_id": "cx-1"},
}


class ZeroRandom(random.Random):
    """random() pinned to 0 so uniform(0, jitter) is always 0."""

    def random(self) -> float:
        return 0.0


class RecordingSleep:
    def __init__(self) -> None:
        self.calls: List[float] = []

    def __call__(self, seconds: float) -> None:
        self.calls.append(seconds)


class FakeProvider:
    """
    Scripted SearchProvider. Each outcome is either an exception to raise or a
    SearchResponse/None to return; the last outcome repeats once the script runs out.
    """

    def __init__(
        self,
        provider_type: ProviderType,
        outcomes: Optional[Iterable[Any]] = None,
        supported: Iterable[SearchType] = (SearchType.WEB, SearchType.NEWS, SearchType.IMAGES),
    ) -> None:
        self.provider_type = provider_type
        self.supported_search_types = frozenset(supported)
        self._outcomes = list(outcomes) if outcomes is not None else ["ok"]
        self.calls: List[SearchQuery] = []

    def search(self, query: SearchQuery) -> SearchResponse:
        self.calls.append(query)
        index = min(len(self.calls), len(self._outcomes)) - 1
        outcome = self._outcomes[index]
        if isinstance(outcome, BaseException):
            raise outcome
        if outcome == "ok":
            return make_response(query, self.provider_type)
        return outcome

    def test_connection(self) -> HealthCheckResult:
        return HealthCheckResult(success=True)


def make_response(query: SearchQuery, provider: ProviderType, n: int = 1) -> SearchResponse:
    return SearchResponse(
        results=[SearchResult(title=f"Result {i}", url=f"https://example.com/{i}") for i in range(n)],
        query=query.query,
        search_type=query.search_type,
        provider=provider,
    )


def settings_doc(
    primary: Optional[str] = None,
    fallback: Optional[str] = None,
    providers: Iterable[str] = (),
) -> Dict[str, Any]:
    doc: Dict[str, Any] = {"primary_provider": primary, "fallback_provider": fallback}
    for name in providers:
        doc[name] = dict(ALL_KEYS[name])
    return doc


@pytest.fixture
def sleep() -> RecordingSleep:
    return RecordingSleep()


@pytest.fixture
def executor(sleep) -> RetryExecutor:
    return RetryExecutor(policy=RetryPolicy(), rng=ZeroRandom(), sleep=sleep)


@pytest.fixture
def make_dispatcher(executor) -> Callable[..., SearchDispatcher]:
    """
    Build a dispatcher over an in-memory store. `fakes` maps provider type to a
    FakeProvider (or an exception to raise on construction); the builder records every construction in dispatcher.built.
    """

    def _make(doc: Dict[str, Any], fakes: Dict[ProviderType, FakeProvider], **kwargs) -> SearchDispatcher:
        store = InMemorySettingsStore({"search": doc})
        built: List[ProviderType] = []

        def builder(provider_type: ProviderType, credentials: ProviderCredentials):
            built.append(provider_type)
            fake = fakes.get(provider_type)
            if fake is None:
                raise ProviderConstructionError(f"{provider_type.value} API key is required", provider=provider_type.value)
            if isinstance(fake, BaseException):
                raise fake
            return fake

        dispatcher = SearchDispatcher(
            SearchConfigResolver(store), executor=kwargs.pop("executor", executor), provider_builder=builder, **kwargs
        )
        dispatcher.built = built
        return dispatcher

    return _make
