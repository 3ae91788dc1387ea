# src/cool_mint/schemas/mint.py
"""Mint-related Pydantic schemas."""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator

from cool_mint.core.security import normalize_identity

MAX_UINT256 = 2**256 - 1


class _CallerRequest(BaseModel):
    caller: str = Field(..., description="Hex-encoded Ed25519 public key of the requester")
    client_nonce: str = Field(..., min_length=1, max_length=128)

    @field_validator("caller")
    @classmethod
    def _normalize_caller(cls, value: str) -> str:
        return normalize_identity(value)


class DirectMintRequest(_CallerRequest):
    """Schema for a paid single mint."""

    payment: int = Field(..., ge=0, description="Attached payment in the smallest unit")


class BatchMintRequest(_CallerRequest):
    """Schema for the one-time paid batch mint."""

    payment: int = Field(..., ge=0, description="Attached payment in the smallest unit")


class VoucherMintRequest(_CallerRequest):
    """Schema for redeeming a signed mint voucher."""

    recipient: str = Field(..., description="Identity named in the signed voucher")
    nonce: int = Field(..., ge=0, le=MAX_UINT256)
    voucher_signature: str = Field(..., description="Hex Ed25519 signature from the voucher signer")

    @field_validator("recipient")
    @classmethod
    def _normalize_recipient(cls, value: str) -> str:
        return normalize_identity(value)


class MintResult(BaseModel):
    """Response payload for a successful mint."""

    recipient: str
    token_ids: list[int]
    quota_state: int
    issued_count: int


class SupplyOut(BaseModel):
    """Global supply snapshot."""

    issued_count: int
    max_supply: int
    batch_size: int
    mint_price: int
    mint_batch_price: int


class QuotaOut(BaseModel):
    """A requester's quota state, packed and decoded."""

    requester: str
    state: int
    single_count: int
    batch_used: bool
    single_mints_remaining: int
    can_single_mint: bool
    can_batch_mint: bool


class VoucherStatusOut(BaseModel):
    """Replay status of a (recipient, nonce) voucher."""

    recipient: str
    nonce: int
    consumed: bool


class TokenOwnerOut(BaseModel):
    """Owner of a minted token."""

    token_id: int
    owner: str
