"""
Dispatch layer: settings resolution, provider ordering, retry and fallback.
"""

from .cancellation import CancellationToken
from .classifier import ErrorClass, TRANSIENT_PATTERNS, classify_error, is_transient
from .config_resolver import SETTINGS_KEY, SearchConfigResolver
from .ordering import provider_execution_order
from .retry import RetryExecutor, RetryPolicy
from .orchestrator import SearchDispatcher

__all__ = [
    "CancellationToken",
    "ErrorClass",
    "TRANSIENT_PATTERNS",
    "classify_error",
    "is_transient",
    "SETTINGS_KEY",
    "SearchConfigResolver",
    "provider_execution_order",
    "RetryExecutor",
    "RetryPolicy",
    "SearchDispatcher",
]
