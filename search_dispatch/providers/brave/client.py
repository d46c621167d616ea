"""
Brave Search API client.

https://brave.com/search/api/
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

import requests

from search_dispatch.providers.base.http import date_range_value, send
from search_dispatch.providers.base.interfaces import ensure_supported
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

_FRESHNESS = {"day": "pd", "week": "pw", "month": "pm", "year": "py"}
_ENDPOINTS = {
    SearchType.WEB: "web/search",
    SearchType.NEWS: "news/search",
    SearchType.IMAGES: "images/search",
}


class BraveProvider:
    provider_type = ProviderType.BRAVE
    supported_search_types = frozenset({SearchType.WEB, SearchType.NEWS, SearchType.IMAGES})
    base_url = "https://api.search.brave.com/res/v1"

    def __init__(
        self,
        credentials: ProviderCredentials,
        session: Optional[requests.Session] = None,
        timeout: float = 30.0,
    ) -> None:
        if not credentials.api_key:
            raise ProviderConstructionError(
                "Brave API key is required. Configure it in settings or get one from https://brave.com/search/api/",
                provider=self.provider_type.value,
            )
        self._api_key = credentials.api_key
        self._session = session or requests.Session()
        self._timeout = timeout

    def search(self, query: SearchQuery) -> SearchResponse:
        ensure_supported(self, query.search_type)
        params: Dict[str, Any] = {"q": query.query, "count": str(query.max_results or 10)}
        if query.region:
            params["country"] = query.region
        if query.language:
            params["search_lang"] = query.language
        if query.safe_search is not None:
            params["safesearch"] = "strict" if query.safe_search else "off"
        freshness = date_range_value(_FRESHNESS, query.date_range, "pw")
        if freshness:
            params["freshness"] = freshness

        data = send(
            self._session, "Brave", "GET", f"{self.base_url}/{_ENDPOINTS[query.search_type]}",
            provider=self.provider_type.value,
            timeout=self._timeout,
            params=params,
            headers={"Accept": "application/json", "X-Subscription-Token": self._api_key},
        )
        return SearchResponse(
            results=self._map_results(data, query.search_type),
            query=query.query,
            search_type=query.search_type,
            provider=self.provider_type,
        )

    def test_connection(self) -> HealthCheckResult:
        try:
            self.search(SearchQuery(query="test", max_results=1))
            return HealthCheckResult(success=True)
        except Exception as e:
            return HealthCheckResult(success=False, error=str(e) or "Failed to connect to Brave Search API")

    @staticmethod
    def _map_results(data: Dict[str, Any], search_type: SearchType) -> List[SearchResult]:
        if search_type == SearchType.IMAGES:
            return [
                SearchResult(
                    title=r.get("title") or "",
                    url=r.get("url") or r.get("page_url") or "",
                    snippet=r.get("description") or "",
                    thumbnail_url=(r.get("thumbnail") or {}).get("src"),
                    image_url=(r.get("properties") or {}).get("url") or r.get("url"),
                    width=(r.get("properties") or {}).get("width"),
                    height=(r.get("properties") or {}).get("height"),
                )
                for r in data.get("results") or []
            ]

        if search_type == SearchType.NEWS:
            return [
                SearchResult(
                    title=r.get("title") or "",
                    url=r.get("url") or "",
                    snippet=r.get("description") or "",
                    published_date=r.get("age"),
                    source=(r.get("meta_url") or {}).get("hostname"),
                )
                for r in data.get("results") or []
            ]

        return [
            SearchResult(
                title=r.get("title") or "",
                url=r.get("url") or "",
                snippet=r.get("description") or "",
                source=(r.get("meta_url") or {}).get("hostname"),
            )
            for r in (data.get("web") or {}).get("results") or []
        ]
