"""
Source payloads run per request.

Each source module provides:
- run(args, secrets, http, ai_client) -> bytes
- RETURN_TYPES - the tuple schema the calling contract decodes

Available sources:
- work-verification: (owner name, price) or discrepancies
- certificate-extraction: (artist, title) from a certificate image
- owner-profile: (address, name, email) from an IPFS profile
"""

from . import certificate_extraction, owner_profile, work_verification

SOURCES = {
    "work-verification": work_verification,
    "certificate-extraction": certificate_extraction,
    "owner-profile": owner_profile,
}


def get_source(name: str):
    """
    Look up a source module by name.

    Raises:
        ValueError: If no source has that name
    """
    if name not in SOURCES:
        raise ValueError(f"Source must be one of {list(SOURCES.keys())}")
    return SOURCES[name]


__all__ = [
    "SOURCES",
    "get_source",
]
