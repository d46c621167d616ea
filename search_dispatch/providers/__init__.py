"""
Aggregator and exports for the search providers package.
"""

# Re-export exception types
from .exceptions import (
    SearchError,
    ConfigurationError,
    ProviderError,
    ProviderConstructionError,
    UnsupportedSearchTypeError,
    ProviderRequestError,
    TransientProviderError,
    PermanentProviderError,
    DispatchError,
    DispatchCancelledError,
    AggregateDispatchFailure,
)

__all__ = [
    "SearchError",
    "ConfigurationError",
    "ProviderError",
    "ProviderConstructionError",
    "UnsupportedSearchTypeError",
    "ProviderRequestError",
    "TransientProviderError",
    "PermanentProviderError",
    "DispatchError",
    "DispatchCancelledError",
    "AggregateDispatchFailure",
]
