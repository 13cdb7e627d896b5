"""Core components: HTTP helper, response encoder, reconciliation."""

from .http import FunctionsError, make_http_request

from .abi import (
    encode_response,
    decode_response,
    encode_verification_result,
    encode_error_response,
    to_uint256,
    to_hex,
    from_hex,
    VERIFICATION_SCHEMA,
    CERTIFICATE_SCHEMA,
    PROFILE_SCHEMA,
)

from .reconcile import (
    CATEGORIES,
    normalize_value,
    sanitize_organized_data,
    parse_organized_data,
    get_discrepancies,
)

__all__ = [
    # HTTP
    "FunctionsError",
    "make_http_request",
    # Encoder
    "encode_response",
    "decode_response",
    "encode_verification_result",
    "encode_error_response",
    "to_uint256",
    "to_hex",
    "from_hex",
    "VERIFICATION_SCHEMA",
    "CERTIFICATE_SCHEMA",
    "PROFILE_SCHEMA",
    # Reconciliation
    "CATEGORIES",
    "normalize_value",
    "sanitize_organized_data",
    "parse_organized_data",
    "get_discrepancies",
]
