"""
Tavily Search API client.

https://docs.tavily.com/
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

_DAYS = {"day": 1, "week": 7, "month": 30, "year": 365}


class TavilyProvider:
    provider_type = ProviderType.TAVILY
    supported_search_types = frozenset({SearchType.WEB, SearchType.NEWS})
    base_url = "https://api.tavily.com"

    def __init__(
        self,
        credentials: ProviderCredentials,
        session: Optional[requests.Session] = None,
        timeout: float = 30.0,
    ) -> None:
        if not credentials.api_key:
            raise ProviderConstructionError(
                "Tavily API key is required. Configure it in settings or get one from https://tavily.com/",
                provider=self.provider_type.value,
            )
        self._api_key = credentials.api_key
        self._session = session or requests.Session()
        self._timeout = timeout

    def search(self, query: SearchQuery) -> SearchResponse:
        ensure_supported(self, query.search_type)
        payload: Dict[str, Any] = {
            "api_key": self._api_key,
            "query": query.query,
            "search_depth": "advanced",
            "max_results": query.max_results or 10,
            "include_answer": False,
            "include_raw_content": False,
            "topic": "news" if query.search_type == SearchType.NEWS else "general",
        }
        days = date_range_value(_DAYS, query.date_range, 7)
        if days is not None:
            payload["days"] = days

        data = send(
            self._session, "Tavily", "POST", f"{self.base_url}/search",
            provider=self.provider_type.value, timeout=self._timeout, json=payload,
        )
        return SearchResponse(
            results=self._map_results(data.get("results") or []),
            query=query.query,
            search_type=query.search_type,
            provider=self.provider_type,
        )

    def test_connection(self) -> HealthCheckResult:
        try:
            self.search(SearchQuery(query="test", max_results=1))
            return HealthCheckResult(success=True)
        except Exception as e:
            return HealthCheckResult(success=False, error=str(e) or "Failed to connect to Tavily API")

    @staticmethod
    def _map_results(results: List[Dict[str, Any]]) -> List[SearchResult]:
        return [
            SearchResult(
                title=r.get("title") or "",
                url=r.get("url") or "",
                snippet=r.get("content") or r.get("snippet") or "",
                published_date=r.get("published_date"),
                source=r.get("source"),
            )
            for r in results
        ]
