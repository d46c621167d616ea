"""
Shared HTTP plumbing for vendor clients.

Every vendor client goes through send() so that network failures and non-2xx
responses surface as ProviderRequestError subclasses with a message of the form
"<Vendor> API error: <status> - <body>".
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import requests

from ..exceptions import PermanentProviderError, TransientProviderError

logger = logging.getLogger(__name__)

TRANSIENT_STATUSES = frozenset({429, 502, 503, 504})

# Vendor error bodies can be large HTML pages
_MAX_BODY_CHARS = 500


def send(
    session: requests.Session,
    vendor: str,
    method: str,
    url: str,
    *,
    provider: str,
    timeout: float,
    params: Optional[Dict[str, Any]] = None,
    json: Optional[Dict[str, Any]] = None,
    headers: Optional[Dict[str, str]] = None,
) -> Dict[str, Any]:
    """Perform one request and return the decoded JSON body."""
    try:
        response = session.request(method, url, params=params, json=json, headers=headers, timeout=timeout)
    except requests.Timeout as e:
        raise TransientProviderError(f"{vendor} request timeout: {e}", provider=provider) from e
    except requests.ConnectionError as e:
        raise TransientProviderError(f"{vendor} connection error: {e}", provider=provider) from e

    if not response.ok:
        body = (response.text or "").strip()[:_MAX_BODY_CHARS]
        message = f"{vendor} API error: {response.status_code} - {body}"
        logger.debug("%s returned HTTP %s", vendor, response.status_code)
        error_cls = TransientProviderError if response.status_code in TRANSIENT_STATUSES else PermanentProviderError
        raise error_cls(message, provider=provider, status=response.status_code)

    try:
        return response.json()
    except ValueError as e:
        raise PermanentProviderError(f"{vendor} API error: invalid JSON response ({e})", provider=provider) from e


def date_range_value(mapping: Dict[str, Any], date_range: Optional[str], default: Any) -> Any:
    """Translate a day/week/month/year range into the vendor's vocabulary."""
    if not date_range:
        return None
    return mapping.get(date_range, default)
