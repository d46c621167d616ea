"""
Provider-agnostic domain models (DTOs) for the search providers layer.

These dataclasses define a normalized contract for search queries/responses,
provider credentials and static provider metadata. They are intentionally minimal
and JSON-serializable to allow easy logging, caching, and testing.

Design goals
- Pure data: no provider-specific behavior here.
- Provider clients convert between vendor payloads and these DTOs.
- Upstream layers depend only on these models and provider interfaces.

See interfaces in: search_dispatch/providers/base/interfaces.py
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, asdict, replace
from enum import Enum
from typing import Any, Dict, FrozenSet, List, Literal, Optional, Tuple

logger = logging.getLogger(__name__)


class ProviderType(str, Enum):
    """Canonical provider identifiers."""
    TAVILY = "tavily"
    BRAVE = "brave"
    SERPAPI = "serpapi"
    GOOGLE = "google"

    @classmethod
    def parse(cls, value: Any) -> "ProviderType":
        if isinstance(value, cls):
            return value
        name = str(value or "").lower().strip()
        try:
            return cls(name)
        except ValueError:
            raise ValueError(f"Unknown search provider type: {value}") from None


class SearchType(str, Enum):
    WEB = "web"
    NEWS = "news"
    IMAGES = "images"


DateRange = Literal["day", "week", "month", "year"]


@dataclass
class SearchQuery:
    """
    Normalized search request.

    ``provider`` pins the call to exactly one provider and disables fallback.
    """
    query: str
    search_type: SearchType = SearchType.WEB
    max_results: int = 10
    date_range: Optional[DateRange] = None
    region: Optional[str] = None
    language: Optional[str] = None
    safe_search: Optional[bool] = None
    provider: Optional[ProviderType] = None

    def __post_init__(self) -> None:
        self.search_type = SearchType(self.search_type or SearchType.WEB)
        if self.provider is not None:
            self.provider = ProviderType.parse(self.provider)

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["search_type"] = self.search_type.value
        data["provider"] = self.provider.value if self.provider else None
        return data


@dataclass
class SearchResult:
    """A single hit. Image fields are only populated for image searches."""
    title: str
    url: str
    snippet: str = ""
    published_date: Optional[str] = None
    source: Optional[str] = None
    thumbnail_url: Optional[str] = None
    image_url: Optional[str] = None
    width: Optional[int] = None
    height: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        return {k: v for k, v in asdict(self).items() if v is not None}


@dataclass
class SearchResponse:
    """
    Normalized response from a search provider.

    ``provider`` always names the provider that actually served the results.
    """
    results: List[SearchResult]
    query: str
    search_type: SearchType
    provider: ProviderType
    total_results: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "results": [r.to_dict() for r in self.results],
            "query": self.query,
            "search_type": self.search_type.value,
            "provider": self.provider.value,
            "total_results": self.total_results,
        }


@dataclass
class HealthCheckResult:
    success: bool
    error: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class ProviderCredentials:
    """
    Credentials for one provider. Google additionally needs a search engine id.
    """
    api_key: Optional[str] = None
    search_engine_id: Optional[str] = None

    def is_empty(self) -> bool:
        return not self.api_key and not self.search_engine_id

    def to_dict(self) -> Dict[str, Any]:
        return {k: v for k, v in asdict(self).items() if v}

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "ProviderCredentials":
        data = data or {}
        return cls(
            api_key=data.get("api_key") or data.get("apiKey"),
            search_engine_id=data.get("search_engine_id") or data.get("searchEngineId"),
        )


def _parse_slot(name: str, value: Any) -> Optional[ProviderType]:
    """Unknown provider names in a stored slot read as unset; credentials are kept."""
    if not value:
        return None
    try:
        return ProviderType.parse(value)
    except ValueError:
        logger.warning("Ignoring unknown %s in stored settings: %r", name, value)
        return None


@dataclass
class SearchSettings:
    """
    Stored provider selection and credentials.

    Instances handed out by the config resolver are copies; mutate them freely
    and write back through ``save``.
    """
    primary_provider: Optional[ProviderType] = None
    fallback_provider: Optional[ProviderType] = None
    credentials: Dict[ProviderType, ProviderCredentials] = field(default_factory=dict)

    def credentials_for(self, provider: ProviderType) -> ProviderCredentials:
        return self.credentials.get(ProviderType.parse(provider)) or ProviderCredentials()

    def copy(self) -> "SearchSettings":
        return replace(
            self,
            credentials={p: replace(c) for p, c in self.credentials.items()},
        )

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "primary_provider": self.primary_provider.value if self.primary_provider else None,
            "fallback_provider": self.fallback_provider.value if self.fallback_provider else None,
        }
        for provider, creds in self.credentials.items():
            if not creds.is_empty():
                data[provider.value] = creds.to_dict()
        return data

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "SearchSettings":
        data = data or {}
        primary = data.get("primary_provider") or data.get("primaryProvider")
        fallback = data.get("fallback_provider") or data.get("fallbackProvider")
        credentials: Dict[ProviderType, ProviderCredentials] = {}
        for provider in ProviderType:
            entry = data.get(provider.value)
            if isinstance(entry, dict):
                creds = ProviderCredentials.from_dict(entry)
                if not creds.is_empty():
                    credentials[provider] = creds
        return cls(
            primary_provider=_parse_slot("primary_provider", primary),
            fallback_provider=_parse_slot("fallback_provider", fallback),
            credentials=credentials,
        )


@dataclass(frozen=True)
class ProviderInfo:
    """
    Static metadata for a provider variant.

    ``priority_weight`` promotes a configured provider toward the front of the
    execution order; 0 means no preference.
    """
    provider_type: ProviderType
    display_name: str
    description: str
    supported_search_types: FrozenSet[SearchType]
    required_fields: Tuple[str, ...] = ("api_key",)
    priority_weight: int = 0

    def is_configured(self, credentials: Optional[ProviderCredentials]) -> bool:
        if credentials is None:
            return False
        return all(getattr(credentials, name, None) for name in self.required_fields)
