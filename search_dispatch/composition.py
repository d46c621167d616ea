"""
Composition module (edge wiring): builds the store, resolver and dispatcher
from Config.
"""

from __future__ import annotations

from functools import partial
from typing import Optional

from search_dispatch.config import Config
from search_dispatch.dispatch import RetryExecutor, SearchConfigResolver, SearchDispatcher
from search_dispatch.providers.base.factory import build_provider
from search_dispatch.settings import SettingsStore, get_settings_store


def build_resolver(store: Optional[SettingsStore] = None) -> SearchConfigResolver:
    return SearchConfigResolver(store or get_settings_store())


def build_dispatcher(
    store: Optional[SettingsStore] = None,
    resolver: Optional[SearchConfigResolver] = None,
) -> SearchDispatcher:
    """
    Construct a SearchDispatcher with the configured retry policy, HTTP timeout
    and deadline.
    """
    return SearchDispatcher(
        resolver or build_resolver(store),
        executor=RetryExecutor(policy=Config.retry_policy()),
        provider_builder=partial(build_provider, timeout=Config.HTTP_TIMEOUT),
        deadline_s=Config.DEADLINE_S,
    )
