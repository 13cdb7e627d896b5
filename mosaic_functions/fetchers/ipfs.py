"""
IPFS Fetcher - Documents stored on the pinning gateway by content hash.

Fetches the customer work submission and the verification report.
"""

from typing import Dict, Any, Optional

from ..config.settings import IPFS_BASE_URL
from ..core.http import FunctionsError, HttpRequester, make_http_request


def build_ipfs_url(content_hash: str, base_url: str = IPFS_BASE_URL) -> str:
    """Build the gateway URL for a content hash."""
    return f"{base_url.rstrip('/')}/{content_hash}"


def fetch_ipfs_document(content_hash: str, http: HttpRequester = make_http_request) -> Dict[str, Any]:
    """
    Fetch a document by content hash.

    Returns:
        Raw response dict from the HTTP helper
    """
    if not content_hash:
        raise ValueError("Content hash is required")

    return http(url=build_ipfs_url(content_hash))


def fetch_customer_work(work_hash: str, http: HttpRequester = make_http_request) -> Dict[str, Any]:
    """
    Fetch the customer work submission.

    Raises:
        FunctionsError: If the document cannot be fetched or is not a JSON object
    """
    try:
        response = fetch_ipfs_document(work_hash, http)
    except Exception as e:
        print(f"Customer work fetch error: {e}")
        raise FunctionsError("Error fetching customer work data") from e

    work = response.get("data")
    if response.get("error") or not isinstance(work, dict):
        print(f"Customer work fetch error: {response.get('message')}")
        raise FunctionsError("Error fetching customer work data")

    return work


def fetch_report(report_hash: str, http: HttpRequester = make_http_request) -> Optional[Any]:
    """
    Fetch the verification report.

    The report is passed as-is to the organize step, so a failed fetch
    yields None instead of raising.
    """
    try:
        response = fetch_ipfs_document(report_hash, http)
    except ValueError as e:
        print(f"Report fetch error: {e}")
        return None

    if response.get("error"):
        print(f"Report fetch error: {response.get('message')}")
        return None
    return response.get("data")
