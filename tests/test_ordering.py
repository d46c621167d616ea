from conftest import settings_doc
from search_dispatch.dispatch.ordering import provider_execution_order
from search_dispatch.providers.base.models import ProviderType, SearchQuery, SearchSettings

T, B, S, G = ProviderType.TAVILY, ProviderType.BRAVE, ProviderType.SERPAPI, ProviderType.GOOGLE


def _settings(**kwargs) -> SearchSettings:
    return SearchSettings.from_dict(settings_doc(**kwargs))


def test_weighted_provider_leads_when_configured():
    settings = _settings(primary="tavily", fallback="google", providers=["tavily", "brave", "serpapi", "google"])

    assert provider_execution_order(settings, SearchQuery(query="q")) == [B, T, G, S]


def test_order_unchanged_when_weighted_provider_unconfigured():
    settings = _settings(primary="tavily", fallback="google", providers=["tavily", "google"])

    assert provider_execution_order(settings, SearchQuery(query="q")) == [T, G]


def test_weighted_primary_is_not_duplicated():
    settings = _settings(primary="brave", fallback="tavily", providers=["tavily", "brave"])

    assert provider_execution_order(settings, SearchQuery(query="q")) == [B, T]


def test_weighted_fallback_moves_to_front():
    settings = _settings(primary="serpapi", fallback="brave", providers=["serpapi", "brave"])

    assert provider_execution_order(settings, SearchQuery(query="q")) == [B, S]


def test_pin_returns_only_the_pinned_provider():
    settings = _settings(primary="tavily", fallback="google", providers=["tavily", "brave", "google"])

    assert provider_execution_order(settings, SearchQuery(query="q", provider="google")) == [G]


def test_pin_is_honored_even_when_unconfigured():
    settings = _settings(primary="tavily", providers=["tavily"])

    assert provider_execution_order(settings, SearchQuery(query="q", provider="serpapi")) == [S]


def test_unconfigured_primary_and_fallback_are_dropped():
    settings = _settings(primary="serpapi", fallback="google", providers=["tavily"])

    assert provider_execution_order(settings, SearchQuery(query="q")) == []


def test_same_primary_and_fallback_collapse():
    settings = _settings(primary="tavily", fallback="tavily", providers=["tavily"])

    assert provider_execution_order(settings, SearchQuery(query="q")) == [T]


def test_google_needs_engine_id_to_count_as_configured():
    doc = settings_doc(primary="tavily", fallback="google", providers=["tavily"])
    doc["google"] = {"api_key": "google-key"}
    settings = SearchSettings.from_dict(doc)

    assert provider_execution_order(settings, SearchQuery(query="q")) == [T]


def test_chain_never_repeats_an_identity():
    settings = _settings(primary="brave", fallback="brave", providers=["tavily", "brave", "serpapi", "google"])

    order = provider_execution_order(settings, SearchQuery(query="q"))

    assert len(order) == len(set(order))
    assert order == [B, T, S, G]
