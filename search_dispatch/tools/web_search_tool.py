"""
WebSearchTool: agent-facing wrapper around SearchDispatcher.
"""

import logging
from typing import Any, Dict, List

from search_dispatch.dispatch import SearchDispatcher
from search_dispatch.providers.base.models import ProviderType, SearchQuery, SearchResponse, SearchType

from .tool_base import Tool

logger = logging.getLogger(__name__)

MAX_RESULTS_CAP = 20
DEFAULT_MAX_RESULTS = 10


class WebSearchTool(Tool):
    """
    Web search with automatic provider fallback.

    Returns a dict with "type" and "content" (formatted text) plus the
    structured results; failures come back as an error dict instead of raising.
    """

    def __init__(self, dispatcher: SearchDispatcher):
        self.dispatcher = dispatcher

    @property
    def name(self) -> str:
        return "web_search"

    @property
    def description(self) -> str:
        return (
            "Searches the web using the configured search provider, falling back to other "
            "configured providers on failure. Supports web, news and image searches."
        )

    @property
    def input_schema(self) -> Dict[str, Any]:
        return {
            "type": "object",
            "properties": {
                "query": {"type": "string", "description": "The search query"},
                "search_type": {
                    "type": "string",
                    "enum": [t.value for t in SearchType],
                    "default": "web",
                },
                "max_results": {
                    "type": "integer",
                    "minimum": 1,
                    "maximum": MAX_RESULTS_CAP,
                    "default": DEFAULT_MAX_RESULTS,
                },
                "provider": {
                    "type": "string",
                    "enum": [p.value for p in ProviderType],
                    "description": "Use only this provider (disables fallback)",
                },
                "date_range": {"type": "string", "enum": ["day", "week", "month", "year"]},
                "region": {"type": "string", "description": "Country code, e.g. 'us'"},
            },
            "required": ["query"],
        }

    def run(self, input: Dict[str, Any]) -> Dict[str, Any]:
        text = (input.get("query") or "").strip()
        if not text:
            return self.format_error("query is required")

        resolver = self.dispatcher.resolver
        if not resolver.is_any_provider_configured():
            return self.format_error(
                "No search provider configured. Add an API key for one of: "
                "tavily, brave, serpapi, or google (API key + search engine ID)"
            )

        settings = resolver.load()
        if not settings.primary_provider and not input.get("provider"):
            return self.format_error("No primary search provider selected. Configure one in settings.")

        try:
            query = SearchQuery(
                query=text,
                search_type=input.get("search_type") or SearchType.WEB,
                max_results=min(int(input.get("max_results") or DEFAULT_MAX_RESULTS), MAX_RESULTS_CAP),
                date_range=input.get("date_range"),
                region=input.get("region"),
                provider=input.get("provider"),
            )
        except (TypeError, ValueError) as e:
            return self.format_error(str(e))

        provider_name = query.provider.value if query.provider else settings.primary_provider.value
        logger.info("Searching %s: %r via %s", query.search_type.value, text, provider_name)

        try:
            response = self.dispatcher.dispatch(query)
        except Exception as e:
            logger.warning("web_search failed: %s", e)
            return self.format_error(str(e))

        return {
            "type": "search_results",
            "content": self._format(response),
            "provider": response.provider.value,
            "result_count": len(response.results),
            "results": [r.to_dict() for r in response.results],
        }

    @staticmethod
    def _format(response: SearchResponse) -> str:
        lines: List[str] = [
            f"{response.search_type.value.title()} results for \"{response.query}\" "
            f"(via {response.provider.value}):"
        ]
        if not response.results:
            lines.append("No results found.")
        for i, r in enumerate(response.results, 1):
            lines.append(f"\n{i}. {r.title}")
            lines.append(f"   URL: {r.url}")
            if r.snippet:
                lines.append(f"   {r.snippet}")
        return "\n".join(lines)
