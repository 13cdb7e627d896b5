"""
Work Verification Source.

Runs once per on-chain verification request:
1. Fetch the customer submission from IPFS
2. Look up the work's market record in the price database
3. Fetch the verification report from IPFS
4. Ask the AI to organize the three sources into named collections
5. Flag collections whose values disagree
6. Encode (owner name, price) or the discrepancies as (string, uint256)

Args (request arguments):
    0: customer submission content hash
    1: report content hash

Secrets:
    openaiApiKey
"""

from typing import Dict, Any, List, Optional

from openai import OpenAI

from ..core.abi import VERIFICATION_SCHEMA, encode_error_response, encode_verification_result
from ..core.http import FunctionsError, HttpRequester, make_http_request
from ..core.reconcile import get_discrepancies, parse_organized_data
from ..fetchers.ipfs import fetch_customer_work, fetch_report
from ..fetchers.openai_chat import organize_data
from ..fetchers.pricedb import fetch_work_market_data

RETURN_TYPES = VERIFICATION_SCHEMA


def aggregate_work_data(work_hash: str, report_hash: str, http: HttpRequester = make_http_request) -> Dict[str, Any]:
    """
    Fetch the three sources, in order.

    Returns:
        Dict with customerSubmission, market and report
    """
    customer_submission = fetch_customer_work(work_hash, http)
    market = fetch_work_market_data(customer_submission, http)
    report = fetch_report(report_hash, http)

    return {
        "customerSubmission": customer_submission,
        "market": market,
        "report": report,
    }


def verify_work(
    work_hash: str,
    report_hash: str,
    api_key: str,
    http: HttpRequester = make_http_request,
    ai_client: Optional[OpenAI] = None,
) -> Dict[str, Any]:
    """
    Run the fetch and reconcile steps without encoding.

    Returns:
        Dict with sanitized collections and discrepancies
    """
    aggregated_data = aggregate_work_data(work_hash, report_hash, http)
    organized = organize_data(aggregated_data, api_key, ai_client)
    sanitized = parse_organized_data(organized)
    print(sanitized)

    return {
        "sanitized": sanitized,
        "discrepancies": get_discrepancies(sanitized),
    }


def run(
    args: List[str],
    secrets: Dict[str, Any],
    http: HttpRequester = make_http_request,
    ai_client: Optional[OpenAI] = None,
) -> bytes:
    """
    Source entry point.

    Raises:
        FunctionsError: If the OpenAI key is missing. Any other failure,
            including missing hashes, is encoded as an error payload paired with 0.
    """
    if not secrets.get("openaiApiKey"):
        raise FunctionsError("OpenAI API key is required")

    try:
        if len(args) < 2:
            raise FunctionsError("Customer submission hash and report hash are required")

        work_hash, report_hash = args[0], args[1]
        result = verify_work(work_hash, report_hash, secrets["openaiApiKey"], http, ai_client)

        if result["discrepancies"]:
            return encode_error_response(result["discrepancies"])

        sanitized = result["sanitized"]
        return encode_verification_result(
            sanitized["customerAndOwnerName"][0],
            sanitized["price"][0],
        )
    except Exception as e:
        print(f"Verification error: {e}")
        return encode_error_response({"error": str(e) or type(e).__name__})
