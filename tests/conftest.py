"""
Pytest configuration and fixtures for Mosaic Functions.

This file contains shared fixtures used across all test modules.
All network access goes through FakeHttp, which is handed to fetchers and
sources in place of make_http_request. AI calls go to a MagicMock standing in
for the OpenAI client.
"""

import pytest
import json
import sys
from pathlib import Path
from types import SimpleNamespace
from typing import Dict, Any, Optional
from unittest.mock import MagicMock

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from mosaic_functions.config import settings
from mosaic_functions.config.settings import IPFS_BASE_URL, PRICEDB_GRAPHQL_URL


# =============================================================================
# HTTP DOUBLES
# =============================================================================

def ok_response(data: Any) -> Dict[str, Any]:
    """Successful response in the shape make_http_request returns."""
    return {"data": data, "error": False, "message": None, "status": 200, "headers": {}}


def error_response(message: str = "HTTP 500", status: Optional[int] = 500) -> Dict[str, Any]:
    """Failed response in the shape make_http_request returns."""
    return {"data": None, "error": True, "message": message, "status": status, "headers": {}}


class FakeHttp:
    """
    Routes requests to canned responses.

    - IPFS gateway URLs by content hash
    - Price database GraphQL by operationName
    """

    def __init__(self, ipfs=None, graphql=None):
        self.ipfs = ipfs or {}
        self.graphql = graphql or {}
        self.calls = []

    def __call__(self, url, method="GET", headers=None, params=None, data=None, timeout=None):
        self.calls.append({
            "url": url,
            "method": method,
            "headers": headers,
            "data": data,
            "timeout": timeout,
        })

        if url.startswith(IPFS_BASE_URL):
            content_hash = url.rsplit("/", 1)[-1]
            return self.ipfs.get(content_hash, error_response("HTTP 404", 404))

        if url == PRICEDB_GRAPHQL_URL:
            return self.graphql.get(data["operationName"], error_response())

        return error_response(f"Unknown URL {url}", None)

    def urls(self):
        return [call["url"] for call in self.calls]


# =============================================================================
# OPENAI DOUBLES
# =============================================================================

def openai_response(content: Any) -> SimpleNamespace:
    """Chat completion whose first choice carries `content`."""
    if not isinstance(content, str):
        content = json.dumps(content)
    message = SimpleNamespace(role="assistant", content=content)
    return SimpleNamespace(
        id="chatcmpl-test",
        choices=[SimpleNamespace(index=0, message=message, finish_reason="stop")],
    )


def make_openai_client(content: Any = None, side_effect=None) -> MagicMock:
    """
    OpenAI client double.

    chat.completions.create returns `content` as the first choice, unless a
    side_effect (exception or sequence) is given.
    """
    client = MagicMock()
    if side_effect is not None:
        client.chat.completions.create.side_effect = side_effect
    else:
        client.chat.completions.create.return_value = openai_response(content)
    return client


def sent_request(client: MagicMock) -> Dict[str, Any]:
    """Keyword arguments of the last chat completion call."""
    return client.chat.completions.create.call_args[1]


# =============================================================================
# SOURCE DATA FIXTURES
# =============================================================================

WORK_HASH = "QmWorkSubmissionHash"
REPORT_HASH = "QmReportHash"
CERTIFICATE_HASH = "QmCertificateImageHash"
PROFILE_HASH = "QmProfileHash"


@pytest.fixture
def customer_submission() -> Dict[str, Any]:
    """Work submission as uploaded by the customer."""
    return {
        "artist": "Yayoi Kusama",
        "title": "Pumpkin",
        "ownerName": "Jane Doe",
        "askingPrice": 1200000,
    }


@pytest.fixture
def artist_record() -> Dict[str, Any]:
    """Price database artist with two catalogue works."""
    return {
        "artistId": "yayoi-kusama",
        "permalink": "a:kusama",
        "artistName": "Yayoi Kusama",
        "works": [
            {"permalink": "w:111aaa", "workTitle": "\"Infinity Nets\"", "sales": []},
            {"permalink": "w:038e7b184c25ad9", "workTitle": "\"Pumpkin\"", "sales": []},
        ],
    }


@pytest.fixture
def artwork_record() -> Dict[str, Any]:
    """Price database artwork details."""
    return {
        "permalink": "w:038e7b184c25ad9",
        "artistPermalink": "a:kusama",
        "workTitle": "\"Pumpkin\"",
        "lastSaleDate": "2021-05-12",
        "lastSalePrice": 1200000,
    }


@pytest.fixture
def report() -> Dict[str, Any]:
    """Verification report with differently named keys."""
    return {
        "artistName": "yayoi kusama ",
        "workTitle": "Pumpkin",
        "customerName": "Jane Doe",
        "appraisedValue": 1200000,
    }


@pytest.fixture
def organized_consistent() -> Dict[str, Any]:
    """Organize step output where every collection agrees."""
    return {
        "artist": ["Yayoi Kusama", "yayoi kusama ", "Yayoi Kusama"],
        "title": ["Pumpkin", "Pumpkin", "Pumpkin"],
        "price": [1200000, 1200000, ""],
        "customerAndOwnerName": ["Jane Doe", " jane doe", None],
    }


@pytest.fixture
def organized_discrepant() -> Dict[str, Any]:
    """Organize step output with a price mismatch."""
    return {
        "artist": ["Yayoi Kusama", "Yayoi Kusama"],
        "title": ["Pumpkin"],
        "price": [1200000, 950000],
        "customerAndOwnerName": ["Jane Doe"],
    }


@pytest.fixture
def verification_http(customer_submission, artist_record, artwork_record, report):
    """FakeHttp wired for a successful work verification run."""
    return FakeHttp(
        ipfs={
            WORK_HASH: ok_response(customer_submission),
            REPORT_HASH: ok_response(report),
        },
        graphql={
            "artistDetails": ok_response({"data": {"artist": artist_record}}),
            "ArtworkForAdmin": ok_response({"data": {"artwork": artwork_record}}),
        },
    )


@pytest.fixture
def openai_client(organized_consistent) -> MagicMock:
    """OpenAI client double answering the organize step consistently."""
    return make_openai_client(organized_consistent)


@pytest.fixture
def secrets() -> Dict[str, str]:
    """Secrets as exposed to sources."""
    return {"openaiApiKey": "sk-test-key"}


# =============================================================================
# CLEANUP FIXTURES
# =============================================================================

@pytest.fixture(autouse=True)
def isolate_env(monkeypatch):
    """
    Keep real credentials out of tests.
    """
    for name in ("PRIVATE_KEY", "OPENAI_API_KEY", "BASE_SEPOLIA_RPC_URL"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setattr(settings, "WALLET_PRIVATE_KEY", None)
    monkeypatch.setitem(settings.SECRETS, "openaiApiKey", None)
    monkeypatch.setitem(settings.DON_CONFIG, "rpc_url", None)
    yield
