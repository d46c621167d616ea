"""
SerpAPI client (Google engine).

https://serpapi.com/
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
from search_dispatch.providers.exceptions import PermanentProviderError, ProviderConstructionError

_TBS = {"day": "qdr:d", "week": "qdr:w", "month": "qdr:m", "year": "qdr:y"}
_TBM = {SearchType.IMAGES: "isch", SearchType.NEWS: "nws"}


class SerpApiProvider:
    provider_type = ProviderType.SERPAPI
    supported_search_types = frozenset({SearchType.WEB, SearchType.NEWS, SearchType.IMAGES})
    base_url = "https://serpapi.com/search.json"

    def __init__(
        self,
        credentials: ProviderCredentials,
        session: Optional[requests.Session] = None,
        timeout: float = 30.0,
    ) -> None:
        if not credentials.api_key:
            raise ProviderConstructionError(
                "SerpAPI key is required. Configure it in settings or get one from https://serpapi.com/",
                provider=self.provider_type.value,
            )
        self._api_key = credentials.api_key
        self._session = session or requests.Session()
        self._timeout = timeout

    def search(self, query: SearchQuery) -> SearchResponse:
        ensure_supported(self, query.search_type)
        params: Dict[str, Any] = {
            "api_key": self._api_key,
            "q": query.query,
            "engine": "google",
            "num": str(query.max_results or 10),
        }
        if query.region:
            params["gl"] = query.region
        if query.language:
            params["hl"] = query.language
        if query.safe_search is not None:
            params["safe"] = "active" if query.safe_search else "off"
        if query.search_type in _TBM:
            params["tbm"] = _TBM[query.search_type]
        tbs = date_range_value(_TBS, query.date_range, "qdr:w")
        if tbs:
            params["tbs"] = tbs

        data = send(
            self._session, "SerpAPI", "GET", self.base_url,
            provider=self.provider_type.value, timeout=self._timeout, params=params,
        )
        # SerpAPI reports some failures (quota, bad key) with HTTP 200 and an error field
        if data.get("error"):
            raise PermanentProviderError(f"SerpAPI error: {data['error']}", provider=self.provider_type.value)

        return SearchResponse(
            results=self._map_results(data, query.search_type),
            query=query.query,
            search_type=query.search_type,
            provider=self.provider_type,
            total_results=(data.get("search_information") or {}).get("total_results"),
        )

    def test_connection(self) -> HealthCheckResult:
        try:
            self.search(SearchQuery(query="test", max_results=1))
            return HealthCheckResult(success=True)
        except Exception as e:
            return HealthCheckResult(success=False, error=str(e) or "Failed to connect to SerpAPI")

    @staticmethod
    def _map_results(data: Dict[str, Any], search_type: SearchType) -> List[SearchResult]:
        if search_type == SearchType.IMAGES:
            return [
                SearchResult(
                    title=r.get("title") or "",
                    url=r.get("link") or r.get("original") or "",
                    snippet=r.get("snippet") or "",
                    thumbnail_url=r.get("thumbnail"),
                    image_url=r.get("original"),
                    width=r.get("original_width"),
                    height=r.get("original_height"),
                    source=r.get("source"),
                )
                for r in data.get("images_results") or []
            ]

        if search_type == SearchType.NEWS:
            return [
                SearchResult(
                    title=r.get("title") or "",
                    url=r.get("link") or "",
                    snippet=r.get("snippet") or "",
                    published_date=r.get("date"),
                    source=r.get("source"),
                )
                for r in data.get("news_results") or []
            ]

        return [
            SearchResult(
                title=r.get("title") or "",
                url=r.get("link") or "",
                snippet=r.get("snippet") or "",
                source=r.get("displayed_link"),
            )
            for r in data.get("organic_results") or []
        ]
