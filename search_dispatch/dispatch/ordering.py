"""
Provider execution order for a dispatch call.

1. A pinned query (query.provider) yields exactly [pinned].
2. Otherwise start from [primary, fallback], keeping only configured entries.
3. When a configured provider carries priority_weight > 0, every other configured
   provider is appended in table order and the list is stable-sorted by weight
   (descending), so weighted providers lead and ties keep configured order.
4. Duplicates are dropped, first occurrence wins.
"""

from __future__ import annotations

import logging
from typing import Iterable, List, Mapping, Optional

from search_dispatch.providers.base.catalog import PROVIDER_INFO
from search_dispatch.providers.base.models import ProviderInfo, ProviderType, SearchQuery, SearchSettings

logger = logging.getLogger(__name__)


def _dedupe(providers: Iterable[ProviderType]) -> List[ProviderType]:
    seen = set()
    ordered: List[ProviderType] = []
    for provider in providers:
        if provider not in seen:
            seen.add(provider)
            ordered.append(provider)
    return ordered


def provider_execution_order(
    settings: SearchSettings,
    query: Optional[SearchQuery] = None,
    catalog: Mapping[ProviderType, ProviderInfo] = PROVIDER_INFO,
) -> List[ProviderType]:
    if query is not None and query.provider is not None:
        return [query.provider]

    configured = [p for p in catalog if catalog[p].is_configured(settings.credentials.get(p))]
    base = [
        p for p in (settings.primary_provider, settings.fallback_provider)
        if p is not None and p in configured
    ]

    weight = {p: catalog[p].priority_weight for p in configured}
    if any(weight[p] > 0 for p in configured):
        base = _dedupe(base + configured)
        base.sort(key=lambda p: weight[p], reverse=True)

    order = _dedupe(base)
    logger.debug("Provider execution order: %s", [p.value for p in order])
    return order


__all__ = ["provider_execution_order"]
