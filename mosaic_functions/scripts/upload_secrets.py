#!/usr/bin/env python3
"""
Upload encrypted secrets to the DON.

Encrypts {openaiApiKey} to the DON public key and uploads it to the gateways.
Prints the encrypted secrets reference and version to pass with requests.
"""

import argparse
import sys
from typing import Dict, Any, Optional

from eth_account import Account

from mosaic_functions.config import settings
from mosaic_functions.config.settings import DON_CONFIG
from mosaic_functions.secrets_manager import SecretsManager


def parse_arguments(argv=None):
    """Parse command line arguments"""
    parser = argparse.ArgumentParser(description="Upload encrypted secrets to DON gateways")

    parser.add_argument("--slot-id", type=int, default=DON_CONFIG["slot_id"],
                        help="Secrets slot id")
    parser.add_argument("--expiration", type=int, default=DON_CONFIG["expiration_minutes"],
                        help="Minutes until the secrets expire")
    parser.add_argument("--gateway", type=str, action="append", dest="gateways",
                        help="Gateway URL (repeatable, defaults to the testnet gateways)")

    return parser.parse_args(argv)


def upload_secrets(
    slot_id: int = DON_CONFIG["slot_id"],
    expiration_minutes: int = DON_CONFIG["expiration_minutes"],
    gateway_urls: Optional[list] = None,
    secrets_manager: Optional[SecretsManager] = None,
) -> Dict[str, Any]:
    """
    Encrypt and upload the secrets.

    Returns:
        Dict with version and encrypted_secrets_reference

    Raises:
        ValueError: If the private key or RPC URL are not configured
        RuntimeError: If no gateway accepted the secrets
    """
    gateway_urls = gateway_urls or DON_CONFIG["gateway_urls"]

    private_key = settings.WALLET_PRIVATE_KEY
    if not private_key:
        raise ValueError("private key not provided - check your environment variables")

    rpc_url = DON_CONFIG["rpc_url"]
    if not rpc_url:
        raise ValueError("rpcUrl not provided - check your environment variables")

    secrets = {"openaiApiKey": settings.SECRETS["openaiApiKey"] or ""}

    if secrets_manager is None:
        secrets_manager = SecretsManager(
            signer=Account.from_key(private_key),
            functions_router_address=DON_CONFIG["router_address"],
            don_id=DON_CONFIG["don_id"],
            rpc_url=rpc_url,
        )
    secrets_manager.initialize()

    encrypted = secrets_manager.encrypt_secrets(secrets)

    print(
        f"Upload encrypted secret to gateways {gateway_urls}. "
        f"slotId {slot_id}. Expiration in minutes: {expiration_minutes}"
    )

    upload_result = secrets_manager.upload_encrypted_secrets_to_don(
        encrypted_secrets_hexstring=encrypted["encryptedSecrets"],
        gateway_urls=gateway_urls,
        slot_id=slot_id,
        minutes_until_expiration=expiration_minutes,
    )

    if not upload_result["success"]:
        raise RuntimeError(f"Encrypted secrets not uploaded to {gateway_urls}")

    print(f"\nSecrets uploaded properly to gateways {gateway_urls}! Gateways response: {upload_result}")

    version = int(upload_result["version"])
    reference = secrets_manager.build_don_hosted_encrypted_secrets_reference(slot_id, version)

    print(f"\nMake a note of the encryptedSecretsReference: {reference}")
    print(f"\nSecrets version: {version}")

    return {
        "version": version,
        "encrypted_secrets_reference": reference,
    }


def main(argv=None) -> int:
    args = parse_arguments(argv)

    try:
        upload_secrets(args.slot_id, args.expiration, args.gateways)
    except Exception as e:
        print(f"ERROR: {e}")
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
