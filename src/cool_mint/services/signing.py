"""Caller request signing used by the API layer."""
from __future__ import annotations

from cool_mint.core.security import verify_signature

FIELD_SEPARATOR = "|"


def canonical_request_bytes(
    channel: str, caller_hex: str, client_nonce: str, *fields: object
) -> bytes:
    """Return the exact bytes a caller signs for a mint request.

    Layout: ``channel|caller|client_nonce|field...`` encoded as UTF-8.
    """
    parts = [channel, caller_hex, client_nonce, *(str(field) for field in fields)]
    return FIELD_SEPARATOR.join(parts).encode("utf-8")


def verify_request_signature(caller_hex: str, payload_bytes: bytes, signature_hex: str) -> bool:
    """Validate that a request signature matches the payload under the caller's key.

    Args:
        caller_hex: Hex-encoded public key the request claims to come from.
        payload_bytes: Canonical payload bytes that were allegedly signed.
        signature_hex: Hex-encoded signature to verify.

    Returns:
        True if the signature is valid for the given payload and key; False otherwise.
    """
    return verify_signature(caller_hex, payload_bytes, signature_hex)
