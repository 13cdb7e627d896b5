"""
Certificate Extraction Source.

Reads the artist and title off a certificate of authenticity image stored on
IPFS and encodes them as (string, string). Both values are empty strings when
either is missing or when anything fails.

Args:
    0: certificate image content hash

Secrets:
    openaiApiKey
"""

import json
from typing import Dict, Any, List, Optional

from openai import OpenAI

from ..core.abi import CERTIFICATE_SCHEMA, encode_response
from ..core.http import FunctionsError, HttpRequester, make_http_request
from ..fetchers.ipfs import build_ipfs_url
from ..fetchers.openai_chat import analyze_certificate

RETURN_TYPES = CERTIFICATE_SCHEMA

EMPTY_RESULT = ["", ""]


def run(
    args: List[str],
    secrets: Dict[str, Any],
    http: HttpRequester = make_http_request,
    ai_client: Optional[OpenAI] = None,
) -> bytes:
    """Source entry point."""
    if not secrets.get("openaiApiKey"):
        raise FunctionsError("OpenAI API key is required")

    try:
        image_url = build_ipfs_url(args[0])
        analyzed = json.loads(analyze_certificate(image_url, secrets["openaiApiKey"], ai_client))

        artist = analyzed.get("artist")
        title = analyzed.get("title")

        if not artist or not title:
            return encode_response(CERTIFICATE_SCHEMA, EMPTY_RESULT)
        return encode_response(CERTIFICATE_SCHEMA, [str(artist), str(title)])
    except Exception as e:
        print(f"Certificate extraction error: {e}")
        return encode_response(CERTIFICATE_SCHEMA, EMPTY_RESULT)
