"""
Google Custom Search (Programmable Search Engine) client.

https://developers.google.com/custom-search/v1/introduction
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

_DATE_RESTRICT = {"day": "d1", "week": "w1", "month": "m1", "year": "y1"}

# Google CSE returns at most 10 items per request
MAX_RESULTS = 10


class GoogleProvider:
    provider_type = ProviderType.GOOGLE
    supported_search_types = frozenset({SearchType.WEB, SearchType.IMAGES})
    base_url = "https://www.googleapis.com/customsearch/v1"

    def __init__(
        self,
        credentials: ProviderCredentials,
        session: Optional[requests.Session] = None,
        timeout: float = 30.0,
    ) -> None:
        if not credentials.api_key:
            raise ProviderConstructionError(
                "Google API key is required. Configure it in settings or get one from https://console.cloud.google.com/",
                provider=self.provider_type.value,
            )
        if not credentials.search_engine_id:
            raise ProviderConstructionError(
                "Google Search Engine ID is required. Create one at https://programmablesearchengine.google.com/",
                provider=self.provider_type.value,
            )
        self._api_key = credentials.api_key
        self._search_engine_id = credentials.search_engine_id
        self._session = session or requests.Session()
        self._timeout = timeout

    def search(self, query: SearchQuery) -> SearchResponse:
        ensure_supported(self, query.search_type)
        params: Dict[str, Any] = {
            "key": self._api_key,
            "cx": self._search_engine_id,
            "q": query.query,
            "num": str(min(query.max_results or 10, MAX_RESULTS)),
        }
        if query.region:
            params["gl"] = query.region
        if query.language:
            params["lr"] = f"lang_{query.language}"
        if query.safe_search is not None:
            params["safe"] = "active" if query.safe_search else "off"
        if query.search_type == SearchType.IMAGES:
            params["searchType"] = "image"
        restrict = date_range_value(_DATE_RESTRICT, query.date_range, "w1")
        if restrict:
            params["dateRestrict"] = restrict

        data = send(
            self._session, "Google CSE", "GET", self.base_url,
            provider=self.provider_type.value, timeout=self._timeout, params=params,
        )
        total = (data.get("searchInformation") or {}).get("totalResults")
        return SearchResponse(
            results=self._map_results(data.get("items") or [], query.search_type),
            query=query.query,
            search_type=query.search_type,
            provider=self.provider_type,
            total_results=int(total) if total else None,
        )

    def test_connection(self) -> HealthCheckResult:
        try:
            self.search(SearchQuery(query="test", max_results=1))
            return HealthCheckResult(success=True)
        except Exception as e:
            return HealthCheckResult(success=False, error=str(e) or "Failed to connect to Google Custom Search")

    @staticmethod
    def _map_results(items: List[Dict[str, Any]], search_type: SearchType) -> List[SearchResult]:
        results: List[SearchResult] = []
        for item in items:
            result = SearchResult(
                title=item.get("title") or "",
                url=item.get("link") or "",
                snippet=item.get("snippet") or "",
                source=item.get("displayLink"),
            )
            if search_type == SearchType.IMAGES:
                image = item.get("image") or {}
                result.thumbnail_url = image.get("thumbnailLink")
                result.image_url = item.get("link")
                result.width = image.get("width")
                result.height = image.get("height")
            results.append(result)
        return results
