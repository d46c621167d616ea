"""
Static provider table.

Order of PROVIDER_INFO is significant: it is the deterministic scan order used
for auto-selecting primary/fallback and for appending extra configured providers
to the execution chain.
"""

from __future__ import annotations

from typing import Dict, List

from .models import ProviderCredentials, ProviderInfo, ProviderType, SearchSettings, SearchType


PROVIDER_INFO: Dict[ProviderType, ProviderInfo] = {
    ProviderType.TAVILY: ProviderInfo(
        provider_type=ProviderType.TAVILY,
        display_name="Tavily",
        description="AI-optimized search API with relevance-ranked web and news results",
        supported_search_types=frozenset({SearchType.WEB, SearchType.NEWS}),
    ),
    ProviderType.BRAVE: ProviderInfo(
        provider_type=ProviderType.BRAVE,
        display_name="Brave Search",
        description="Independent search index with web, news and image endpoints",
        supported_search_types=frozenset({SearchType.WEB, SearchType.NEWS, SearchType.IMAGES}),
        priority_weight=1,
    ),
    ProviderType.SERPAPI: ProviderInfo(
        provider_type=ProviderType.SERPAPI,
        display_name="SerpAPI",
        description="Google results through SerpAPI (web, news, images)",
        supported_search_types=frozenset({SearchType.WEB, SearchType.NEWS, SearchType.IMAGES}),
    ),
    ProviderType.GOOGLE: ProviderInfo(
        provider_type=ProviderType.GOOGLE,
        display_name="Google Custom Search",
        description="Google Programmable Search Engine (web, images)",
        supported_search_types=frozenset({SearchType.WEB, SearchType.IMAGES}),
        required_fields=("api_key", "search_engine_id"),
    ),
}


def get_provider_info(provider: ProviderType) -> ProviderInfo:
    return PROVIDER_INFO[ProviderType.parse(provider)]


def is_provider_configured(provider: ProviderType, credentials: ProviderCredentials | None) -> bool:
    return get_provider_info(provider).is_configured(credentials)


def configured_providers(settings: SearchSettings) -> List[ProviderType]:
    """Providers with valid credentials, in table order."""
    return [
        provider
        for provider, info in PROVIDER_INFO.items()
        if info.is_configured(settings.credentials.get(provider))
    ]
