# src/cool_mint/services/voucher.py
"""Mint voucher authorization.

A voucher lets the configured signer grant a single mint to a named
recipient. Vouchers are signed over a typed, domain-separated digest::

    digest = H(0x19 0x01 || domain_separator || H(TYPE_HASH || recipient || nonce))

so a signature is only valid for one recipient, one nonce, and one
deployment (collection name, version, chain id and deployment address).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

import blake3
from nacl.signing import SigningKey
from sqlalchemy.orm import Session

from cool_mint.core.errors import InvalidConfiguration, InvalidVoucherSigner, ReplayedVoucher
from cool_mint.core.security import (
    identity_bytes,
    is_zero_identity,
    normalize_identity,
    verify_signature,
)
from cool_mint.core.settings import Settings, settings
from cool_mint.models import VoucherRedemption

logger = logging.getLogger(__name__)

DOMAIN_TYPE = (
    "EIP712Domain(string name,string version,uint256 chainId,address verifyingContract)"
)
VOUCHER_TYPE = "MintVoucher(address to,uint256 nonce)"
UINT256_BYTES = 32
MAX_UINT256 = 2**256 - 1
DIGEST_PREFIX = b"\x19\x01"


def _hash(data: bytes) -> bytes:
    return blake3.blake3(data).digest()


def _encode_uint256(value: int) -> bytes:
    if not 0 <= value <= MAX_UINT256:
        raise ValueError(f"Value out of uint256 range: {value}")
    return value.to_bytes(UINT256_BYTES, "big")


DOMAIN_TYPE_HASH = _hash(DOMAIN_TYPE.encode())
VOUCHER_TYPE_HASH = _hash(VOUCHER_TYPE.encode())


@dataclass(frozen=True)
class VoucherDomain:
    """Fixed inputs that scope voucher signatures to one deployment."""

    name: str
    version: str
    chain_id: int
    verifying_identity: str

    @classmethod
    def from_settings(cls, config: Settings) -> VoucherDomain:
        return cls(
            name=config.collection_name,
            version=config.collection_version,
            chain_id=config.chain_id,
            verifying_identity=normalize_identity(config.deployment_address),
        )

    def separator(self) -> bytes:
        """Return the domain separator hash."""
        return _hash(
            DOMAIN_TYPE_HASH
            + _hash(self.name.encode())
            + _hash(self.version.encode())
            + _encode_uint256(self.chain_id)
            + identity_bytes(self.verifying_identity)
        )


def voucher_struct_hash(recipient_hex: str, nonce: int) -> bytes:
    """Return the struct hash of a ``MintVoucher(to, nonce)`` record."""
    return _hash(VOUCHER_TYPE_HASH + identity_bytes(recipient_hex) + _encode_uint256(nonce))


def voucher_digest(domain_separator: bytes, recipient_hex: str, nonce: int) -> bytes:
    """Return the digest a voucher signer signs."""
    return _hash(DIGEST_PREFIX + domain_separator + voucher_struct_hash(recipient_hex, nonce))


def sign_voucher(
    signing_key: SigningKey, domain: VoucherDomain, recipient_hex: str, nonce: int
) -> str:
    """Sign a voucher for ``recipient_hex`` and return the hex signature.

    Args:
        signing_key: The voucher signer's Ed25519 private key.
        domain: Deployment the voucher is valid for.
        recipient_hex: Identity that will receive the minted token.
        nonce: Per-recipient voucher nonce.

    Returns:
        Hex-encoded 64-byte Ed25519 signature over the voucher digest.
    """
    digest = voucher_digest(domain.separator(), recipient_hex, nonce)
    return signing_key.sign(digest).signature.hex()


class VoucherAuthorizer:
    """Verifies vouchers against the configured signer and the replay record."""

    def __init__(self, signer_hex: str | None, domain: VoucherDomain) -> None:
        if not signer_hex:
            raise InvalidConfiguration("Mint voucher signer is not configured")
        try:
            signer = normalize_identity(signer_hex)
            zero = is_zero_identity(signer)
        except ValueError as err:
            raise InvalidConfiguration(f"Mint voucher signer is invalid: {err}") from err
        if zero:
            raise InvalidConfiguration("Mint voucher signer must not be the zero identity")

        self.signer = signer
        self.domain = domain
        self._domain_separator = domain.separator()

    @property
    def domain_separator(self) -> bytes:
        return self._domain_separator

    def digest(self, recipient_hex: str, nonce: int) -> bytes:
        """Return the voucher digest for this deployment."""
        return voucher_digest(self._domain_separator, recipient_hex, nonce)

    def is_consumed(self, db: Session, recipient_hex: str, nonce: int) -> bool:
        """Return True if the voucher ``(recipient, nonce)`` was already redeemed."""
        key = (normalize_identity(recipient_hex), str(nonce))
        return db.get(VoucherRedemption, key) is not None

    def authorize(self, db: Session, recipient_hex: str, nonce: int, signature_hex: str) -> None:
        """Validate a voucher without consuming it.

        Raises:
            ReplayedVoucher: If ``(recipient, nonce)`` was already redeemed.
            InvalidVoucherSigner: If the signature was not produced by the
                configured signer over this exact recipient and nonce.
        """
        recipient = normalize_identity(recipient_hex)
        if self.is_consumed(db, recipient, nonce):
            raise ReplayedVoucher(f"Voucher nonce {nonce} already used for {recipient}")

        try:
            digest = self.digest(recipient, nonce)
        except ValueError as err:
            raise InvalidVoucherSigner(f"Voucher cannot be verified: {err}") from err
        if not verify_signature(self.signer, digest, signature_hex):
            raise InvalidVoucherSigner("Voucher was not signed by the mint voucher signer")

    def consume(self, db: Session, recipient_hex: str, nonce: int) -> None:
        """Stage the replay record; committed together with the mint."""
        db.add(VoucherRedemption(recipient_hex=normalize_identity(recipient_hex), nonce=str(nonce)))


def get_voucher_authorizer() -> VoucherAuthorizer:
    """Return a voucher authorizer built from the runtime settings."""
    return VoucherAuthorizer(settings.mint_voucher_signer, VoucherDomain.from_settings(settings))
