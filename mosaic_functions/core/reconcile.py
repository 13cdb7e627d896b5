"""
Reconciliation Module - Cross-source field comparison.

The AI organize step groups values from the customer submission, the report
and the market record into four named collections. This module cleans those
collections and flags any collection whose values disagree.

Comparison is case and whitespace insensitive. The first value of a
collection is always the reference; there is no voting or majority logic.
"""

import json
from typing import Any, Dict, List

# Collections expected from the organize step
CATEGORIES = ["artist", "title", "price", "customerAndOwnerName"]


def js_string(value: Any) -> str:
    """Convert a JSON value to text the way JavaScript's String() does."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, list):
        return ",".join("" if v is None else js_string(v) for v in value)
    if isinstance(value, dict):
        return "[object Object]"
    return str(value)


def normalize_value(value: Any) -> str:
    """Normalize a value for comparison: text, trimmed, lower-cased."""
    return js_string(value).strip().lower()


def sanitize_organized_data(organized_data: Dict[str, Any]) -> Dict[str, List[Any]]:
    """
    Drop empty/falsy values from every collection.

    Args:
        organized_data: Parsed output of the organize step

    Returns:
        Dict of key -> list with falsy values removed
    """
    sanitized = {}

    for key, collection in organized_data.items():
        if collection is None:
            collection = []
        elif not isinstance(collection, list):
            collection = [collection]

        sanitized[key] = [value for value in collection if value]

    return sanitized


def parse_organized_data(raw: str) -> Dict[str, List[Any]]:
    """
    Parse and sanitize the organize step's JSON text.

    Raises:
        ValueError: If the text is not a JSON object
    """
    parsed = json.loads(raw)
    if not isinstance(parsed, dict):
        raise ValueError("Organized data is not a JSON object")
    return sanitize_organized_data(parsed)


def get_discrepancies(organized_data: Dict[str, List[Any]]) -> List[Dict[str, Any]]:
    """
    Find collections whose values are not all equal.

    Args:
        organized_data: Sanitized collections

    Returns:
        List of {"key", "collection"} entries, in key order
    """
    discrepancies = []

    for key, collection in organized_data.items():
        if len(collection) == 0:
            continue

        reference = normalize_value(collection[0])
        all_match = all(normalize_value(value) == reference for value in collection)

        if not all_match:
            discrepancies.append({"key": key, "collection": collection})

    return discrepancies
