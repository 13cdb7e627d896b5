"""
Functions configuration.

Endpoints, model settings, DON settings and secrets.
"""

import os

from dotenv import load_dotenv

load_dotenv()

# Data sources
IPFS_BASE_URL = os.getenv("IPFS_BASE_URL", "https://peach-genuine-lamprey-766.mypinata.cloud/ipfs")
PRICEDB_GRAPHQL_URL = os.getenv("PRICEDB_GRAPHQL_URL", "https://pricedb.ms.masterworks.io/graphql")
OPENAI_BASE_URL = os.getenv("OPENAI_BASE_URL", "https://api.openai.com/v1")

# AI settings
OPENAI_CONFIG = {
    "model": os.getenv("OPENAI_MODEL", "gpt-4o"),
    "certificate_seed": 10,
    "organize_seed": 1996,
    "timeout_ms": 40_000,
}

# Sandbox limits
HTTP_TIMEOUT_MS = int(os.getenv("HTTP_TIMEOUT_MS", 9_000))
MAX_RESPONSE_BYTES = 256

# Secrets exposed to sources as `secrets`
SECRETS = {
    "openaiApiKey": os.getenv("OPENAI_API_KEY"),
}

WALLET_PRIVATE_KEY = os.getenv("PRIVATE_KEY")

# DON settings - hardcoded for Base Sepolia
DON_CONFIG = {
    "router_address": os.getenv("FUNCTIONS_ROUTER_ADDRESS", "0xf9B8fc078197181C841c296C876945aaa425B278"),
    "don_id": os.getenv("FUNCTIONS_DON_ID", "fun-base-sepolia-1"),
    "rpc_url": os.getenv("BASE_SEPOLIA_RPC_URL"),
    "gateway_urls": [
        "https://01.functions-gateway.testnet.chain.link/",
        "https://02.functions-gateway.testnet.chain.link/",
    ],
    "slot_id": 0,
    "expiration_minutes": 2880,  # 2 days
}

# Sample request arguments
DEFAULT_ARGS = [
    "Qmbi73JQdBVuLYUMDamKS3Z42uQf54MP1L2WFxKLUCmJuk",  # customer submission hash
    "QmUCMNYFoJAoaX21CeVBChvwXUqbXPSEBouAGci283Bi1d",  # report hash
]
