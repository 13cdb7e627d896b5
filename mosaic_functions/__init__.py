"""
Mosaic Functions.

Oracle request sources for artwork verification: fetch the customer
submission, market record and report, reconcile them, and ABI-encode the
result for the calling contract.

Quick Start:
    from mosaic_functions import build_request_config, simulate_script

    config = build_request_config("work-verification")
    result = simulate_script(config)
    print(result["response_bytes_hexstring"], result["error_string"])
"""

__version__ = "1.0.0"

from .core import (
    FunctionsError,
    make_http_request,
    encode_response,
    decode_response,
    get_discrepancies,
    sanitize_organized_data,
)

from .request_config import (
    Location,
    CodeLanguage,
    RequestConfig,
    build_request_config,
)

from .simulate import simulate_script

from .sources import SOURCES, get_source

__all__ = [
    "__version__",
    # Core
    "FunctionsError",
    "make_http_request",
    "encode_response",
    "decode_response",
    "get_discrepancies",
    "sanitize_organized_data",
    # Requests
    "Location",
    "CodeLanguage",
    "RequestConfig",
    "build_request_config",
    "simulate_script",
    # Sources
    "SOURCES",
    "get_source",
]
