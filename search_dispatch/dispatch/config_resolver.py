"""
Search settings resolution with a read-mostly cache.

The resolver owns its cache. Readers get value copies; writers go through
save(), which replaces the cache wholesale, or call invalidate_cache() after
writing to the store themselves.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Any, Dict, List, Optional

from search_dispatch.providers.base.catalog import PROVIDER_INFO, configured_providers
from search_dispatch.providers.base.models import (
    ProviderCredentials,
    ProviderType,
    SearchSettings,
)
from search_dispatch.settings.interfaces import SettingsStore

logger = logging.getLogger(__name__)

SETTINGS_KEY = "search"


class SearchConfigResolver:
    def __init__(self, store: SettingsStore, key: str = SETTINGS_KEY) -> None:
        self._store = store
        self._key = key
        self._cached: Optional[SearchSettings] = None

    def load(self) -> SearchSettings:
        """
        Return current settings (a copy). On a cache miss the store is read;
        read failures are logged and degrade to defaults.
        """
        cached = self._cached
        if cached is not None:
            return cached.copy()

        settings = SearchSettings()
        try:
            stored = self._store.load(self._key)
            if stored:
                settings = SearchSettings.from_dict(stored)
        except Exception as e:
            logger.error("Failed to load search settings from store: %s", e)
            settings = SearchSettings()

        self._auto_select(settings)
        self._cached = settings
        return settings.copy()

    def invalidate_cache(self) -> None:
        self._cached = None

    def reload(self) -> SearchSettings:
        self.invalidate_cache()
        return self.load()

    def save(self, settings: SearchSettings) -> SearchSettings:
        """
        Persist settings, keeping stored credentials for any provider whose
        incoming api key is empty. Google merges field by field.
        """
        existing = SearchSettings()
        stored = self._store.load(self._key)
        if stored:
            existing = SearchSettings.from_dict(stored)

        merged: Dict[ProviderType, ProviderCredentials] = {}
        for provider in ProviderType:
            incoming = settings.credentials.get(provider)
            current = existing.credentials.get(provider)
            result = self._merge_credentials(provider, incoming, current)
            if result is not None and not result.is_empty():
                merged[provider] = result

        to_save = SearchSettings(
            primary_provider=settings.primary_provider,
            fallback_provider=settings.fallback_provider,
            credentials=merged,
        )
        self._store.save(self._key, to_save.to_dict())
        self._cached = to_save
        logger.info("Search settings saved")
        return to_save.copy()

    # -------------------- status helpers --------------------

    def provider_credentials(self, provider: ProviderType) -> ProviderCredentials:
        return self.load().credentials_for(provider)

    def available_providers(self) -> List[Dict[str, Any]]:
        settings = self.load()
        return [
            {
                "type": provider,
                "name": info.display_name,
                "description": info.description,
                "configured": info.is_configured(settings.credentials.get(provider)),
                "supported_types": sorted(t.value for t in info.supported_search_types),
            }
            for provider, info in PROVIDER_INFO.items()
        ]

    def is_any_provider_configured(self) -> bool:
        return bool(configured_providers(self.load()))

    def config_status(self) -> Dict[str, Any]:
        settings = self.load()
        providers = self.available_providers()
        return {
            "primary_provider": settings.primary_provider,
            "fallback_provider": settings.fallback_provider,
            "providers": providers,
            "is_configured": any(p["configured"] for p in providers),
        }

    # -------------------- internal helpers --------------------

    @staticmethod
    def _auto_select(settings: SearchSettings) -> None:
        if settings.primary_provider:
            return
        configured = configured_providers(settings)
        if not configured:
            return
        settings.primary_provider = configured[0]
        logger.info("Auto-selected primary search provider: %s", configured[0].value)
        if len(configured) > 1 and not settings.fallback_provider:
            settings.fallback_provider = configured[1]
            logger.info("Auto-selected fallback search provider: %s", configured[1].value)

    @staticmethod
    def _merge_credentials(
        provider: ProviderType,
        incoming: Optional[ProviderCredentials],
        current: Optional[ProviderCredentials],
    ) -> Optional[ProviderCredentials]:
        if incoming is None or incoming.is_empty():
            return current
        if provider == ProviderType.GOOGLE:
            base = current or ProviderCredentials()
            return replace(
                base,
                api_key=incoming.api_key or base.api_key,
                search_engine_id=incoming.search_engine_id or base.search_engine_id,
            )
        return incoming if incoming.api_key else current
