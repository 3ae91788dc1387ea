# src/cool_mint/models/replay_protection.py
"""Models supporting voucher and request replay protection."""

from sqlalchemy import Text
from sqlalchemy.orm import Mapped, mapped_column

from cool_mint.db.session import Base


class VoucherRedemption(Base):
    """Record indicating that a (recipient, nonce) voucher has been redeemed."""

    __tablename__ = "voucher_redemption"

    # (recipient_hex, nonce) -> existence means "already consumed".
    recipient_hex: Mapped[str] = mapped_column(Text, primary_key=True)
    # Decimal string; uint256 nonces do not fit BigInteger.
    nonce: Mapped[str] = mapped_column(Text, primary_key=True)


class RequestNonce(Base):
    """Record indicating that a caller's request nonce has already been used."""

    __tablename__ = "request_nonce"

    caller_hex: Mapped[str] = mapped_column(Text, primary_key=True)
    nonce_hash_hex: Mapped[str] = mapped_column(Text, primary_key=True)
