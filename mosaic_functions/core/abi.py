"""
Response Encoder - ABI encoding of source results.

Sources return raw bytes to the calling contract. The contract decodes them
with a fixed tuple schema, so every code path of a source must produce bytes
matching that schema.
"""

import json
from typing import Any, Sequence, Tuple

from eth_abi import decode, encode

# Tuple schemas per source
VERIFICATION_SCHEMA = ["string", "uint256"]
CERTIFICATE_SCHEMA = ["string", "string"]
PROFILE_SCHEMA = ["address", "string", "string"]

UINT256_MAX = 2**256 - 1


def to_uint256(value: Any) -> int:
    """
    Coerce a price-like value to a uint256.

    Accepts ints, integral floats and numeric strings ("$1,200,000").

    Raises:
        ValueError: If the value is not a non-negative integer amount
    """
    if isinstance(value, bool):
        raise ValueError(f"Cannot encode boolean {value!r} as uint256")

    if isinstance(value, str):
        cleaned = value.strip().replace(",", "").lstrip("$").strip()
        try:
            value = int(cleaned)
        except ValueError:
            try:
                value = float(cleaned)
            except ValueError:
                raise ValueError(f"Cannot encode {value!r} as uint256")

    if isinstance(value, float):
        if not value.is_integer():
            raise ValueError(f"Cannot encode non-integer {value!r} as uint256")
        value = int(value)

    if not isinstance(value, int):
        raise ValueError(f"Cannot encode {type(value).__name__} as uint256")

    if value < 0 or value > UINT256_MAX:
        raise ValueError(f"Value {value} out of uint256 range")

    return value


def encode_response(types: Sequence[str], values: Sequence[Any]) -> bytes:
    """ABI-encode values with the given type list."""
    return encode(list(types), list(values))


def decode_response(types: Sequence[str], data: bytes) -> Tuple:
    """Decode bytes produced by encode_response."""
    return decode(list(types), data)


def encode_verification_result(owner_name: str, price: Any) -> bytes:
    """Encode a successful verification as (string, uint256)."""
    return encode_response(VERIFICATION_SCHEMA, [str(owner_name), to_uint256(price)])


def encode_error_response(payload: Any) -> bytes:
    """
    Encode an error or discrepancy payload paired with 0.

    Args:
        payload: JSON-serialisable payload (discrepancy list or error dict),
            serialized without whitespace and with non-ASCII text kept as-is

    Returns:
        (string, uint256) encoded bytes
    """
    message = json.dumps(payload, separators=(",", ":"), ensure_ascii=False)
    return encode_response(VERIFICATION_SCHEMA, [message, 0])


def to_hex(data: bytes) -> str:
    """Format response bytes as a 0x-prefixed hex string."""
    return "0x" + data.hex()


def from_hex(hexstring: str) -> bytes:
    """Parse a 0x-prefixed hex string."""
    if hexstring.startswith("0x"):
        hexstring = hexstring[2:]
    return bytes.fromhex(hexstring)
