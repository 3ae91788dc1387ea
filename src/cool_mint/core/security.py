"""Signature and identity utilities built on Ed25519 primitives."""
from __future__ import annotations

import binascii

from nacl.exceptions import BadSignatureError, CryptoError
from nacl.signing import VerifyKey

IDENTITY_LENGTH_BYTES = 32
SIGNATURE_LENGTH_BYTES = 64


def normalize_identity(identity_hex: str) -> str:
    """Return the canonical lowercase form of a hex-encoded identity.

    Identities are hex-encoded 32-byte Ed25519 public keys; an optional
    ``0x`` prefix is accepted.

    Raises:
        ValueError: If the value is not 32 bytes of hex.
    """
    cleaned = identity_hex.strip().lower()
    if cleaned.startswith("0x"):
        cleaned = cleaned[2:]
    try:
        raw = binascii.unhexlify(cleaned)
    except (binascii.Error, ValueError) as err:
        raise ValueError(f"Invalid identity hex: {err}") from err
    if len(raw) != IDENTITY_LENGTH_BYTES:
        raise ValueError("Identities must be 32 bytes")
    return cleaned


def identity_bytes(identity_hex: str) -> bytes:
    """Decode a hex identity into its raw 32 bytes."""
    return binascii.unhexlify(normalize_identity(identity_hex))


def is_zero_identity(identity_hex: str) -> bool:
    """Return True if the identity is the all-zero placeholder."""
    return not any(identity_bytes(identity_hex))


def verify_signature(pubkey_hex: str, message: bytes, signature_hex: str) -> bool:
    """Verify an Ed25519 signature.

    Args:
        pubkey_hex: Hex-encoded 32-byte public key.
        message: Exact bytes that were signed on the client.
        signature_hex: Hex-encoded 64-byte signature.

    Returns:
        True if the signature is valid for `message` under `pubkey_hex`; False otherwise.
    """
    try:
        pubkey = VerifyKey(identity_bytes(pubkey_hex))
        signature = binascii.unhexlify(signature_hex.removeprefix("0x"))
        if len(signature) != SIGNATURE_LENGTH_BYTES:
            return False
        pubkey.verify(message, signature)
        return True
    except (BadSignatureError, CryptoError, binascii.Error, ValueError, TypeError):
        return False
