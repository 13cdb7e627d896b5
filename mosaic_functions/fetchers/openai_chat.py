"""
OpenAI Fetcher - Chat completion calls in JSON mode.

Two prompts are used:
- Certificate analysis: read artist and title off a certificate image
- Organize: group fields of three JSON sources into named collections

Both results come from a language model and are not deterministic, even with
a fixed seed. Callers treat them as an external oracle and may pass their own
client.
"""

import json
from typing import Dict, Any, List, Optional

from openai import OpenAI, OpenAIError

from ..config.settings import OPENAI_BASE_URL, OPENAI_CONFIG
from ..core.http import FunctionsError
from ..core.reconcile import CATEGORIES


CERTIFICATE_PROMPT = (
    "Analyze the image which is an artwork certificate of authenticity and extract the "
    "following information in a JSON format: { artist: 'value', title: 'value' }. "
    "If the information is not available, please return the object but with empty values."
)

SYSTEM_PROMPT = "You are a helpful assistant designed to output JSON."


def get_openai_client(api_key: str) -> OpenAI:
    """Client with the sandbox's 40 second budget and no retries."""
    return OpenAI(
        api_key=api_key,
        base_url=OPENAI_BASE_URL,
        timeout=OPENAI_CONFIG["timeout_ms"] / 1000,
        max_retries=0,
    )


def build_organize_prompt(aggregated_data: Dict[str, Any]) -> str:
    """Build the organize prompt embedding the three sources as JSON."""
    skeleton = json.dumps({category: [] for category in CATEGORIES})
    return (
        "Organize relevant data from three JSON data sources into categorized arrays. "
        "Extract data into four specific arrays: artist, title, owner, and price, and output "
        f"them in a JSON structure as shown below: {skeleton}. "
        "Recognize that some keys in the data sources may have different names but similar "
        "meanings; include these values under the appropriate categories. Sources :"
        f"\n Source 1 : {json.dumps(aggregated_data.get('customerSubmission'))}"
        f"\n Source 2 : {json.dumps(aggregated_data.get('report'))}"
        f"\n Source 3 : {json.dumps(aggregated_data.get('market'))}"
    )


def chat_completion(
    messages: List[Dict[str, Any]],
    api_key: str,
    seed: Optional[int] = None,
    model: str = OPENAI_CONFIG["model"],
    client: Optional[OpenAI] = None,
) -> str:
    """
    Run a JSON-mode chat completion.

    Args:
        messages: Chat messages
        api_key: OpenAI API key (ignored when client is given)
        seed: Sampling seed
        model: Model name
        client: Optional pre-built client

    Returns:
        Message content of the first choice (JSON text)

    Raises:
        FunctionsError: If the request fails or the response has no content
    """
    client = client or get_openai_client(api_key)

    params = {
        "model": model,
        "messages": messages,
        "response_format": {"type": "json_object"},
    }
    if seed is not None:
        params["seed"] = seed

    try:
        response = client.chat.completions.create(**params)
    except OpenAIError as e:
        print(f"OpenAI error: {e}")
        raise FunctionsError(str(e) or "OpenAI request failed") from e

    if not response.choices or not response.choices[0].message.content:
        raise FunctionsError("Empty response from OpenAI")

    return response.choices[0].message.content


def analyze_certificate(image_url: str, api_key: str, client: Optional[OpenAI] = None) -> str:
    """Extract artist and title from a certificate image. Returns JSON text."""
    messages = [
        {
            "role": "user",
            "content": [
                {"type": "text", "text": CERTIFICATE_PROMPT},
                {"type": "image_url", "image_url": {"url": image_url}},
            ],
        }
    ]
    return chat_completion(messages, api_key, seed=OPENAI_CONFIG["certificate_seed"], client=client)


def organize_data(aggregated_data: Dict[str, Any], api_key: str, client: Optional[OpenAI] = None) -> str:
    """Group the aggregated sources into named collections. Returns JSON text."""
    messages = [
        {"role": "system", "content": SYSTEM_PROMPT},
        {"role": "user", "content": build_organize_prompt(aggregated_data)},
    ]
    return chat_completion(messages, api_key, seed=OPENAI_CONFIG["organize_seed"], client=client)
