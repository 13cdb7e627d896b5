"""
Secrets Manager - Encrypt secrets and host them on the DON.

Flow:
1. initialize(): resolve the DON coordinator from the Functions router and
   read the DON public key
2. encrypt_secrets(): encrypt a {name: value} dict to the DON public key
3. upload_encrypted_secrets_to_don(): signed `secrets_set` call to each gateway
4. build_don_hosted_encrypted_secrets_reference(): reference passed with requests

The DON's own threshold decryption and distribution are out of scope. The
encryption scheme is pluggable through the `encryptor` argument.
"""

import base64
import json
import os
import time
import uuid
from typing import Dict, Any, List, Optional, Callable

import requests
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import ec
from cryptography.hazmat.primitives.ciphers.aead import AESGCM
from cryptography.hazmat.primitives.kdf.hkdf import HKDF
from eth_abi import encode
from eth_account.messages import encode_defunct
from web3 import Web3


# =============================================================================
# ABI DEFINITIONS
# =============================================================================

ROUTER_ABI = [
    {
        "inputs": [{"name": "id", "type": "bytes32"}],
        "name": "getContractById",
        "outputs": [{"type": "address"}],
        "stateMutability": "view",
        "type": "function"
    }
]

COORDINATOR_ABI = [
    {
        "inputs": [],
        "name": "getDONPublicKey",
        "outputs": [{"type": "bytes"}],
        "stateMutability": "view",
        "type": "function"
    }
]

GATEWAY_TIMEOUT = 30
HKDF_INFO = b"mosaic-functions-secrets"

Encryptor = Callable[[bytes, bytes], bytes]


# =============================================================================
# ENCRYPTION
# =============================================================================

def ecies_encrypt(plaintext: bytes, public_key: bytes) -> bytes:
    """
    Encrypt to a secp256k1 public key (ECDH + HKDF-SHA256 + AES-GCM).

    Args:
        plaintext: Data to encrypt
        public_key: Uncompressed public key, with or without the 0x04 prefix

    Returns:
        ephemeral public key (65 bytes) || nonce (12 bytes) || ciphertext
    """
    if len(public_key) == 64:
        public_key = b"\x04" + public_key

    peer_key = ec.EllipticCurvePublicKey.from_encoded_point(ec.SECP256K1(), public_key)
    ephemeral_key = ec.generate_private_key(ec.SECP256K1())
    shared_secret = ephemeral_key.exchange(ec.ECDH(), peer_key)

    key = HKDF(
        algorithm=hashes.SHA256(),
        length=32,
        salt=None,
        info=HKDF_INFO,
    ).derive(shared_secret)

    nonce = os.urandom(12)
    ciphertext = AESGCM(key).encrypt(nonce, plaintext, None)

    ephemeral_public = ephemeral_key.public_key().public_bytes(
        serialization.Encoding.X962,
        serialization.PublicFormat.UncompressedPoint,
    )
    return ephemeral_public + nonce + ciphertext


def don_id_to_bytes32(don_id: str) -> bytes:
    """Encode a DON id as a right-padded bytes32 string."""
    raw = don_id.encode("utf-8")
    if len(raw) > 31:
        raise ValueError(f"DON id too long for bytes32: {don_id}")
    return raw.ljust(32, b"\x00")


def build_don_hosted_encrypted_secrets_reference(slot_id: int, version: int) -> str:
    """Reference to DON-hosted secrets: 0x + abi.encode(uint8 slotId, uint64 version)."""
    return "0x" + encode(["uint8", "uint64"], [slot_id, version]).hex()


def _dig(data: Any, *keys: str) -> Any:
    """Walk nested gateway dicts, returning None where a level is missing or not a dict."""
    for key in keys:
        if not isinstance(data, dict):
            return None
        data = data.get(key)
    return data


# =============================================================================
# SECRETS MANAGER
# =============================================================================

class SecretsManager:
    """
    Encrypts secrets for a DON and uploads them to its gateways.

    Args:
        signer: eth_account LocalAccount used to sign uploads
        functions_router_address: Functions router contract address
        don_id: DON identifier (e.g. "fun-base-sepolia-1")
        rpc_url: RPC endpoint of the router's chain
        web3: Optional pre-built Web3 instance (overrides rpc_url)
        encryptor: Optional (plaintext, don_public_key) -> ciphertext
    """

    def __init__(
        self,
        signer,
        functions_router_address: str,
        don_id: str,
        rpc_url: Optional[str] = None,
        web3: Optional[Web3] = None,
        encryptor: Optional[Encryptor] = None,
    ):
        if not rpc_url and web3 is None:
            raise ValueError("rpc_url or web3 is required")

        self.signer = signer
        self.functions_router_address = functions_router_address
        self.don_id = don_id
        self.rpc_url = rpc_url
        self.w3 = web3
        self.encryptor = encryptor or ecies_encrypt

        self.don_public_key: Optional[bytes] = None
        self.coordinator_address: Optional[str] = None
        self.initialized = False

    def initialize(self) -> None:
        """Resolve the coordinator and read the DON public key."""
        if self.w3 is None:
            self.w3 = Web3(Web3.HTTPProvider(self.rpc_url))

        if not self.w3.is_connected():
            raise ConnectionError(f"Failed to connect to {self.rpc_url}")

        router = self.w3.eth.contract(
            address=Web3.to_checksum_address(self.functions_router_address),
            abi=ROUTER_ABI,
        )
        self.coordinator_address = router.functions.getContractById(don_id_to_bytes32(self.don_id)).call()

        coordinator = self.w3.eth.contract(
            address=Web3.to_checksum_address(self.coordinator_address),
            abi=COORDINATOR_ABI,
        )
        self.don_public_key = bytes(coordinator.functions.getDONPublicKey().call())
        self.initialized = True

    def _require_initialized(self) -> None:
        if not self.initialized:
            raise RuntimeError("SecretsManager not initialized - call initialize() first")

    def encrypt_secrets(self, secrets: Dict[str, str]) -> Dict[str, str]:
        """
        Encrypt a secrets dict to the DON public key.

        Args:
            secrets: Secret name -> string value

        Returns:
            Dict with encryptedSecrets (0x hex)
        """
        self._require_initialized()

        if not secrets:
            raise ValueError("Secrets must be a non-empty dict")
        for key, value in secrets.items():
            if not isinstance(value, str):
                raise ValueError(f"Secret {key} must be a string value")

        plaintext = json.dumps(secrets).encode("utf-8")
        ciphertext = self.encryptor(plaintext, self.don_public_key)

        return {"encryptedSecrets": "0x" + ciphertext.hex()}

    def _build_gateway_request(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        """Wrap a signed secrets payload in a gateway JSON-RPC request."""
        message_id = uuid.uuid4().hex
        message = {
            "message_id": message_id,
            "method": "secrets_set",
            "don_id": self.don_id,
            "receiver": "",
            "payload": payload,
        }
        signature = self.signer.sign_message(encode_defunct(text=json.dumps(message, sort_keys=True)))

        return {
            "id": message_id,
            "jsonrpc": "2.0",
            "method": "secrets_set",
            "params": {
                **message,
                "sender": self.signer.address.lower(),
                "signature": signature.signature.hex(),
            },
        }

    def upload_encrypted_secrets_to_don(
        self,
        encrypted_secrets_hexstring: str,
        gateway_urls: List[str],
        slot_id: int,
        minutes_until_expiration: int,
    ) -> Dict[str, Any]:
        """
        Upload encrypted secrets to every gateway.

        Args:
            encrypted_secrets_hexstring: Output of encrypt_secrets
            gateway_urls: Gateway endpoints
            slot_id: Storage slot
            minutes_until_expiration: Lifetime of the secrets

        Returns:
            Dict with success, version, node_responses and errors
        """
        if not gateway_urls:
            raise ValueError("At least one gateway URL is required")
        if slot_id < 0:
            raise ValueError("slot_id must be non-negative")
        if minutes_until_expiration < 5:
            raise ValueError("minutes_until_expiration must be at least 5")

        hex_body = encrypted_secrets_hexstring[2:] if encrypted_secrets_hexstring.startswith("0x") else encrypted_secrets_hexstring
        now = time.time()
        version = int(now)

        storage_payload = {
            "slot_id": slot_id,
            "version": version,
            "payload": base64.b64encode(bytes.fromhex(hex_body)).decode("ascii"),
            "expiration": int(now * 1000) + minutes_until_expiration * 60 * 1000,
        }
        storage_signature = self.signer.sign_message(encode_defunct(text=json.dumps(storage_payload, sort_keys=True)))
        storage_payload["signature"] = base64.b64encode(storage_signature.signature).decode("ascii")

        result = {
            "success": False,
            "version": version,
            "node_responses": [],
            "errors": [],
        }

        for url in gateway_urls:
            request_body = self._build_gateway_request(storage_payload)
            try:
                response = requests.post(
                    url,
                    json=request_body,
                    headers={"Content-Type": "application/json"},
                    timeout=GATEWAY_TIMEOUT,
                )
                response.raise_for_status()
                body = response.json()
            except (requests.exceptions.RequestException, ValueError) as e:
                print(f"Gateway {url} error: {e}")
                result["errors"].append(f"{url}: {e}")
                continue

            node_responses = _dig(body, "result", "body", "payload", "node_responses")
            if not isinstance(node_responses, list):
                node_responses = []
            result["node_responses"].extend(node_responses)

            if any(_dig(node, "body", "payload", "success") or _dig(node, "success")
                   for node in node_responses):
                result["success"] = True
            else:
                result["errors"].append(f"{url}: no node accepted the secrets")

        return result

    def build_don_hosted_encrypted_secrets_reference(self, slot_id: int, version: int) -> str:
        """See module-level build_don_hosted_encrypted_secrets_reference."""
        return build_don_hosted_encrypted_secrets_reference(slot_id, version)
