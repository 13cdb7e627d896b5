"""
Local Simulator - Run a source the way the DON would.

Runs the configured source in-process, captures everything it prints and
applies the DON response size limit.
"""

import io
from contextlib import redirect_stdout
from typing import Dict, Any, Optional

from openai import OpenAI

from .config.settings import MAX_RESPONSE_BYTES
from .core.abi import decode_response, to_hex
from .core.http import HttpRequester, make_http_request
from .request_config import RequestConfig
from .sources import get_source


def simulate_script(
    request_config: RequestConfig,
    http: HttpRequester = make_http_request,
    ai_client: Optional[OpenAI] = None,
) -> Dict[str, Any]:
    """
    Simulate a request.

    Args:
        request_config: Request to run
        http: HTTP helper handed to the source
        ai_client: OpenAI client handed to the source (built from the key when None)

    Returns:
        Dict with response_bytes_hexstring, decoded, captured_terminal_output, error_string
    """
    result = {
        "response_bytes_hexstring": None,
        "decoded": None,
        "captured_terminal_output": "",
        "error_string": None,
    }

    source = get_source(request_config.source)
    output = io.StringIO()

    try:
        with redirect_stdout(output):
            response = source.run(
                list(request_config.args),
                dict(request_config.secrets),
                http=http,
                ai_client=ai_client,
            )
    except Exception as e:
        result["error_string"] = str(e) or type(e).__name__
        result["captured_terminal_output"] = output.getvalue()
        return result

    result["captured_terminal_output"] = output.getvalue()

    if not isinstance(response, (bytes, bytearray)):
        result["error_string"] = f"Source returned {type(response).__name__}, expected bytes"
        return result

    if len(response) > MAX_RESPONSE_BYTES:
        result["error_string"] = f"Response of {len(response)} bytes exceeds the {MAX_RESPONSE_BYTES} byte limit"
        return result

    result["response_bytes_hexstring"] = to_hex(bytes(response))
    result["decoded"] = list(decode_response(source.RETURN_TYPES, bytes(response)))

    return result
