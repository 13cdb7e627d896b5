"""
HTTP Client - Sandbox-style request helper.

Mirrors the DON sandbox request helper: failures never raise, they come back
as a response dict with the `error` flag set, and callers decide what to do.
"""

import requests
from typing import Dict, Any, Optional, Callable

from ..config.settings import HTTP_TIMEOUT_MS


class FunctionsError(Exception):
    """Error raised by fetchers and sources with a caller-facing message."""


# Signature shared by make_http_request and test doubles
HttpRequester = Callable[..., Dict[str, Any]]


def make_http_request(
    url: str,
    method: str = "GET",
    headers: Optional[Dict[str, str]] = None,
    params: Optional[Dict[str, Any]] = None,
    data: Any = None,
    timeout: int = HTTP_TIMEOUT_MS,
) -> Dict[str, Any]:
    """
    Perform an outbound HTTP request.

    Args:
        url: Target URL
        method: HTTP method
        headers: Request headers
        params: Query string parameters
        data: JSON body (sent for non-GET methods)
        timeout: Timeout in milliseconds

    Returns:
        Dict with data, error, message, status and headers
    """
    result = {
        "data": None,
        "error": False,
        "message": None,
        "status": None,
        "headers": {},
    }

    try:
        response = requests.request(
            method.upper(),
            url,
            headers=headers,
            params=params,
            json=data if method.upper() != "GET" else None,
            timeout=timeout / 1000,
        )
    except requests.exceptions.RequestException as e:
        result["error"] = True
        result["message"] = f"Request to {url} failed: {e}"
        return result

    result["status"] = response.status_code
    result["headers"] = dict(response.headers)

    try:
        result["data"] = response.json()
    except ValueError:
        result["data"] = response.text

    if not response.ok:
        result["error"] = True
        result["message"] = f"HTTP {response.status_code} from {url}"

    return result
