"""
Providers Base Package

Exports provider-agnostic contracts, DTOs, the static provider table and the
provider factory for use by the dispatch layer.

- Interfaces: normalized provider boundary (SearchProvider)
- Models (DTOs): serialization-friendly query/response/settings objects
- Catalog: per-provider metadata (supported types, credentials, priority weight)
- Factory: lazy creation of vendor clients by canonical name
"""

from .models import (
    ProviderType,
    SearchType,
    DateRange,
    SearchQuery,
    SearchResult,
    SearchResponse,
    HealthCheckResult,
    ProviderCredentials,
    SearchSettings,
    ProviderInfo,
)

from .interfaces import SearchProvider, ensure_supported
from .catalog import PROVIDER_INFO, configured_providers, get_provider_info, is_provider_configured
from .factory import ProviderBuilder, ProviderFactory, UnknownProviderError, build_provider

__all__ = [
    # Models
    "ProviderType",
    "SearchType",
    "DateRange",
    "SearchQuery",
    "SearchResult",
    "SearchResponse",
    "HealthCheckResult",
    "ProviderCredentials",
    "SearchSettings",
    "ProviderInfo",
    # Interfaces
    "SearchProvider",
    "ensure_supported",
    # Catalog
    "PROVIDER_INFO",
    "configured_providers",
    "get_provider_info",
    "is_provider_configured",
    # Factory
    "ProviderBuilder",
    "ProviderFactory",
    "UnknownProviderError",
    "build_provider",
]
