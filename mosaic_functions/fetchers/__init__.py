"""
Data fetchers used by the sources.

IPFS and price database fetchers take an optional `http` callable (defaults to
make_http_request); the OpenAI calls take an optional `client`. Both can be
swapped out in tests and in the simulator.

Available fetchers:
- ipfs: Customer submissions and reports by content hash
- pricedb: Artist and artwork market records (GraphQL)
- openai_chat: Certificate analysis and data organization (chat completion)
"""

from .ipfs import (
    build_ipfs_url,
    fetch_ipfs_document,
    fetch_customer_work,
    fetch_report,
)

from .pricedb import (
    format_artist_name,
    strip_title_quotes,
    fetch_artist_data,
    fetch_work_details,
    fetch_work_market_data,
)

from .openai_chat import (
    get_openai_client,
    chat_completion,
    analyze_certificate,
    organize_data,
)

__all__ = [
    # IPFS
    "build_ipfs_url",
    "fetch_ipfs_document",
    "fetch_customer_work",
    "fetch_report",
    # Price database
    "format_artist_name",
    "strip_title_quotes",
    "fetch_artist_data",
    "fetch_work_details",
    "fetch_work_market_data",
    # OpenAI
    "get_openai_client",
    "chat_completion",
    "analyze_certificate",
    "organize_data",
]
