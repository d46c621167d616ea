"""
Provider Factory

Purpose
- Centralized, provider-agnostic creation of SearchProvider clients.
- Lazy-imports vendor clients so only the ones actually used get loaded.
- No side effects: strictly returns instances or raises ProviderConstructionError.

Construction failures (unknown type, missing credential field) are kept
distinct from execution failures so the dispatcher can treat them as an
immediate permanent failure for that chain entry.
"""

from __future__ import annotations

from typing import Any, Callable, Dict, Optional, Type

from ..exceptions import ProviderConstructionError
from .interfaces import SearchProvider
from .models import ProviderCredentials, ProviderType


class UnknownProviderError(ProviderConstructionError):
    pass


ProviderBuilder = Callable[[ProviderType, ProviderCredentials], SearchProvider]


class ProviderFactory:
    """
    Create search provider clients based on a canonical name (e.g., 'brave').
    """

    # Map canonical provider names to import paths and class names
    _PROVIDERS: Dict[str, Dict[str, str]] = {
        "tavily": {
            "module": "search_dispatch.providers.tavily.client",
            "class": "TavilyProvider",
        },
        "brave": {
            "module": "search_dispatch.providers.brave.client",
            "class": "BraveProvider",
        },
        "serpapi": {
            "module": "search_dispatch.providers.serpapi.client",
            "class": "SerpApiProvider",
        },
        "google": {
            "module": "search_dispatch.providers.google.client",
            "class": "GoogleProvider",
        },
    }

    @classmethod
    def create(
        cls,
        provider: ProviderType | str,
        credentials: Optional[ProviderCredentials] = None,
        **kwargs: Any,
    ) -> SearchProvider:
        """
        Create a provider client instance.

        Args:
            provider: Canonical provider name (e.g., 'tavily')
            credentials: Credentials for that provider
            **kwargs: Client-specific constructor kwargs (session, timeout)

        Returns:
            Instance implementing SearchProvider

        Raises:
            UnknownProviderError: if provider is not registered.
            ProviderConstructionError: if the client rejects its credentials.
        """
        name = getattr(provider, "value", provider) or ""
        name = str(name).lower().strip()
        spec = cls._PROVIDERS.get(name)
        if not spec:
            raise UnknownProviderError(f"Unknown search provider type: {provider}", provider=name or None)

        module_path, class_name = spec["module"], spec["class"]
        mod = __import__(module_path, fromlist=[class_name])
        klass: Type[SearchProvider] = getattr(mod, class_name)
        try:
            return klass(credentials or ProviderCredentials(), **kwargs)  # type: ignore[call-arg]
        except ProviderConstructionError:
            raise
        except Exception as e:
            raise ProviderConstructionError(
                f"Failed to initialize provider '{name}': {e}", provider=name
            ) from e


def build_provider(
    provider: ProviderType | str,
    credentials: Optional[ProviderCredentials] = None,
    **kwargs: Any,
) -> SearchProvider:
    """Pure factory: ProviderType + credentials -> SearchProvider."""
    return ProviderFactory.create(provider, credentials, **kwargs)
