"""
Transient/permanent classification of provider failures.
"""

from __future__ import annotations

import re
from enum import Enum

from search_dispatch.providers.exceptions import (
    DispatchCancelledError,
    PermanentProviderError,
    ProviderConstructionError,
    TransientProviderError,
    UnsupportedSearchTypeError,
    error_message,
)


class ErrorClass(str, Enum):
    TRANSIENT = "transient"
    PERMANENT = "permanent"


TRANSIENT_PATTERNS = (
    "rate limit",
    "429",
    "too many requests",
    "timeout",
    "ETIMEDOUT",
    "ECONNRESET",
    "EAI_AGAIN",
    "502",
    "503",
    "504",
    "service unavailable",
)

_TRANSIENT_RE = re.compile("|".join(re.escape(p) for p in TRANSIENT_PATTERNS), re.IGNORECASE)

_ALWAYS_PERMANENT = (
    PermanentProviderError,
    ProviderConstructionError,
    UnsupportedSearchTypeError,
    DispatchCancelledError,
)


def classify_error(error: object) -> ErrorClass:
    """
    TRANSIENT when the error text matches a known transient pattern
    (case-insensitive), PERMANENT otherwise, including for None and empty values.
    """
    if isinstance(error, TransientProviderError):
        return ErrorClass.TRANSIENT
    if isinstance(error, _ALWAYS_PERMANENT):
        return ErrorClass.PERMANENT
    if _TRANSIENT_RE.search(error_message(error)):
        return ErrorClass.TRANSIENT
    return ErrorClass.PERMANENT


def is_transient(error: object) -> bool:
    return classify_error(error) is ErrorClass.TRANSIENT
