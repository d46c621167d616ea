"""
Exception hierarchy for search providers and dispatch.

SearchError
├── ConfigurationError              no provider configured at all (fatal, zero calls)
├── ProviderError
│   ├── ProviderConstructionError   provider could not be built from its credentials
│   ├── UnsupportedSearchTypeError  query type outside the provider's supported set
│   └── ProviderRequestError        upstream call failed
│       ├── TransientProviderError  retried in place
│       └── PermanentProviderError  not retried, advances the chain
└── DispatchError
    ├── AggregateDispatchFailure    every chain entry exhausted
    └── DispatchCancelledError      cancellation token fired or deadline passed
"""

from __future__ import annotations

from typing import List, Optional, Sequence, Tuple


class SearchError(Exception):
    """Base class for all search-dispatch errors."""


class ConfigurationError(SearchError):
    pass


class ProviderError(SearchError):
    """An error attributable to a single provider."""

    def __init__(self, message: str, provider: Optional[str] = None) -> None:
        super().__init__(message)
        self.provider = provider


class ProviderConstructionError(ProviderError):
    pass


class UnsupportedSearchTypeError(ProviderError):
    pass


class ProviderRequestError(ProviderError):
    """
    Upstream request failure. ``status`` carries the HTTP status when there was one.
    """

    def __init__(self, message: str, provider: Optional[str] = None, status: Optional[int] = None) -> None:
        super().__init__(message, provider=provider)
        self.status = status


class TransientProviderError(ProviderRequestError):
    pass


class PermanentProviderError(ProviderRequestError):
    pass


class DispatchError(SearchError):
    pass


class DispatchCancelledError(DispatchError):
    pass


class AggregateDispatchFailure(DispatchError):
    """
    Raised once every provider in the chain has failed.

    ``failures`` keeps (provider, error) pairs in attempt order.
    """

    def __init__(self, failures: Sequence[Tuple[str, BaseException]]) -> None:
        self.failures: List[Tuple[str, BaseException]] = list(failures)
        super().__init__(format_chain_failures(self.failures))


def error_message(error: object) -> str:
    """Best-effort message text for anything raised (or rejected) by a provider."""
    if error is None:
        return ""
    if isinstance(error, BaseException):
        return str(error)
    if isinstance(error, dict):
        return str(error.get("message") or "")
    return str(getattr(error, "message", None) or error)


def format_chain_failures(failures: Sequence[Tuple[str, BaseException]]) -> str:
    parts: List[str] = []
    for index, (provider, err) in enumerate(failures):
        name = getattr(provider, "value", provider)
        if index == 0:
            parts.append(f"Primary provider ({name}) failed: {error_message(err)}.")
        else:
            parts.append(f"Fallback provider ({name}) also failed: {error_message(err)}.")
    return " ".join(parts)
