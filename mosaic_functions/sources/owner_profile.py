"""
Owner Profile Source.

Fetches an owner profile document from IPFS and encodes
(address, name, email) as (address, string, string).

Args:
    0: profile content hash (optional)
"""

from typing import Dict, Any, List

from web3 import Web3

from ..core.abi import PROFILE_SCHEMA, encode_response
from ..core.http import FunctionsError, HttpRequester, make_http_request
from ..core.reconcile import js_string
from ..fetchers.ipfs import fetch_ipfs_document

RETURN_TYPES = PROFILE_SCHEMA

DEFAULT_PROFILE_HASH = "QmRSdqx45aauK98krtT3fwg6jfRbE4QecDAhMt6YhNWXBU"


def run(
    args: List[str],
    secrets: Dict[str, Any],
    http: HttpRequester = make_http_request,
    ai_client: Any = None,
) -> bytes:
    """
    Source entry point.

    Raises:
        FunctionsError: If the profile cannot be fetched or has no valid address

    The profile source makes no AI calls; ai_client is accepted and ignored.
    """
    profile_hash = args[0] if args else DEFAULT_PROFILE_HASH

    response = fetch_ipfs_document(profile_hash, http)
    profile = response.get("data")
    if response.get("error") or not isinstance(profile, dict):
        raise FunctionsError("Error fetching owner profile")

    address = profile.get("address")
    if not address or not Web3.is_address(address):
        raise FunctionsError(f"Invalid owner address: {address}")

    name = js_string(profile.get("name"))
    email = js_string(profile.get("email"))

    print("address: ", address)
    print("name: ", name)
    print("email: ", email)

    return encode_response(PROFILE_SCHEMA, [Web3.to_checksum_address(address), name, email])
