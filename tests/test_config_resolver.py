import pytest

from conftest import settings_doc
from search_dispatch.dispatch.config_resolver import SearchConfigResolver
from search_dispatch.providers.base.models import ProviderCredentials, ProviderType, SearchSettings
from search_dispatch.settings import InMemorySettingsStore


class CountingStore(InMemorySettingsStore):
    def __init__(self, initial=None, fail_load=False, fail_save=False):
        super().__init__(initial)
        self.loads = 0
        self.fail_load = fail_load
        self.fail_save = fail_save

    def load(self, key):
        self.loads += 1
        if self.fail_load:
            raise OSError("database is locked")
        return super().load(key)

    def save(self, key, value):
        if self.fail_save:
            raise OSError("disk full")
        super().save(key, value)


def test_defaults_when_store_is_empty():
    settings = SearchConfigResolver(CountingStore()).load()

    assert settings.primary_provider is None
    assert settings.fallback_provider is None
    assert settings.credentials == {}


def test_read_error_degrades_to_defaults():
    resolver = SearchConfigResolver(CountingStore({"search": settings_doc(primary="tavily")}, fail_load=True))

    settings = resolver.load()

    assert settings.primary_provider is None


def test_auto_selects_primary_and_fallback_in_table_order():
    store = CountingStore({"search": settings_doc(providers=["google", "serpapi", "brave"])})

    settings = SearchConfigResolver(store).load()

    assert settings.primary_provider is ProviderType.BRAVE
    assert settings.fallback_provider is ProviderType.SERPAPI


def test_auto_select_keeps_existing_fallback():
    doc = settings_doc(fallback="google", providers=["tavily", "brave", "google"])

    settings = SearchConfigResolver(CountingStore({"search": doc})).load()

    assert settings.primary_provider is ProviderType.TAVILY
    assert settings.fallback_provider is ProviderType.GOOGLE


def test_single_configured_provider_gets_no_fallback():
    settings = SearchConfigResolver(CountingStore({"search": settings_doc(providers=["serpapi"])})).load()

    assert settings.primary_provider is ProviderType.SERPAPI
    assert settings.fallback_provider is None


def test_load_is_cached_until_invalidated():
    store = CountingStore({"search": settings_doc(primary="tavily", providers=["tavily"])})
    resolver = SearchConfigResolver(store)

    resolver.load()
    resolver.load()
    assert store.loads == 1

    store.save("search", settings_doc(primary="brave", providers=["brave"]))
    assert resolver.load().primary_provider is ProviderType.TAVILY

    resolver.invalidate_cache()
    assert resolver.load().primary_provider is ProviderType.BRAVE
    assert store.loads == 2


def test_reload_reads_the_store_again():
    store = CountingStore({"search": settings_doc(primary="tavily", providers=["tavily"])})
    resolver = SearchConfigResolver(store)
    resolver.load()

    store.save("search", settings_doc(primary="serpapi", providers=["serpapi"]))

    assert resolver.reload().primary_provider is ProviderType.SERPAPI


def test_load_returns_a_copy():
    resolver = SearchConfigResolver(CountingStore({"search": settings_doc(primary="tavily", providers=["tavily"])}))

    first = resolver.load()
    first.primary_provider = ProviderType.GOOGLE
    first.credentials[ProviderType.TAVILY].api_key = "mutated"

    second = resolver.load()
    assert second.primary_provider is ProviderType.TAVILY
    assert second.credentials[ProviderType.TAVILY].api_key == "tvly-key"


def test_save_keeps_stored_key_when_incoming_key_is_empty():
    store = CountingStore({"search": settings_doc(primary="tavily", providers=["tavily", "brave"])})
    resolver = SearchConfigResolver(store)

    incoming = SearchSettings(
        primary_provider=ProviderType.BRAVE,
        fallback_provider=ProviderType.TAVILY,
        credentials={
            ProviderType.TAVILY: ProviderCredentials(api_key=""),
            ProviderType.BRAVE: ProviderCredentials(api_key="new-brave"),
        },
    )
    resolver.save(incoming)

    stored = store.load("search")
    assert stored["tavily"] == {"api_key": "tvly-key"}
    assert stored["brave"] == {"api_key": "new-brave"}
    assert stored["primary_provider"] == "brave"


def test_save_merges_google_fields():
    store = CountingStore({"search": settings_doc(providers=["google"])})
    resolver = SearchConfigResolver(store)

    resolver.save(SearchSettings(credentials={ProviderType.GOOGLE: ProviderCredentials(search_engine_id="cx-2")}))

    assert store.load("search")["google"] == {"api_key": "google-key", "search_engine_id": "cx-2"}


def test_save_updates_cache():
    store = CountingStore()
    resolver = SearchConfigResolver(store)
    resolver.load()

    resolver.save(
        SearchSettings(
            primary_provider=ProviderType.SERPAPI,
            credentials={ProviderType.SERPAPI: ProviderCredentials(api_key="k")},
        )
    )
    loads_after_save = store.loads

    assert resolver.load().primary_provider is ProviderType.SERPAPI
    assert store.loads == loads_after_save


def test_save_propagates_store_errors():
    resolver = SearchConfigResolver(CountingStore(fail_save=True))

    with pytest.raises(OSError, match="disk full"):
        resolver.save(SearchSettings(primary_provider=ProviderType.TAVILY))


def test_legacy_camel_case_documents_are_understood():
    doc = {
        "primaryProvider": "google",
        "fallbackProvider": None,
        "google": {"apiKey": "g", "searchEngineId": "cx"},
    }

    settings = SearchConfigResolver(CountingStore({"search": doc})).load()

    assert settings.primary_provider is ProviderType.GOOGLE
    assert settings.credentials_for(ProviderType.GOOGLE).search_engine_id == "cx"


def test_config_status_reports_providers():
    resolver = SearchConfigResolver(CountingStore({"search": settings_doc(primary="brave", providers=["brave"])}))

    status = resolver.config_status()

    assert status["primary_provider"] is ProviderType.BRAVE
    assert status["is_configured"] is True
    configured = {p["type"]: p["configured"] for p in status["providers"]}
    assert configured == {
        ProviderType.TAVILY: False,
        ProviderType.BRAVE: True,
        ProviderType.SERPAPI: False,
        ProviderType.GOOGLE: False,
    }


def test_nothing_configured():
    assert SearchConfigResolver(CountingStore()).is_any_provider_configured() is False


def test_unknown_stored_provider_keeps_credentials():
    doc = {"primaryProvider": "exa", "fallbackProvider": "bing", "tavily": {"apiKey": "tvly"}}
    store = CountingStore({"search": doc})
    resolver = SearchConfigResolver(store)

    settings = resolver.load()

    assert settings.credentials_for(ProviderType.TAVILY).api_key == "tvly"
    assert settings.primary_provider is ProviderType.TAVILY
    assert settings.fallback_provider is None


def test_save_repairs_unknown_stored_provider():
    store = CountingStore({"search": {"primaryProvider": "exa", "tavily": {"apiKey": "tvly"}}})
    resolver = SearchConfigResolver(store)

    resolver.save(
        SearchSettings(
            primary_provider=ProviderType.BRAVE,
            credentials={ProviderType.BRAVE: ProviderCredentials(api_key="brave-key")},
        )
    )

    stored = store.load("search")
    assert stored["primary_provider"] == "brave"
    assert stored["tavily"] == {"api_key": "tvly"}
    assert stored["brave"] == {"api_key": "brave-key"}
