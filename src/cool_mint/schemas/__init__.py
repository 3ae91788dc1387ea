"""Pydantic schemas for API request and response validation."""

from .mint import (
    BatchMintRequest,
    DirectMintRequest,
    MintResult,
    QuotaOut,
    SupplyOut,
    TokenOwnerOut,
    VoucherMintRequest,
    VoucherStatusOut,
)

__all__ = [
    "BatchMintRequest",
    "DirectMintRequest",
    "MintResult",
    "QuotaOut",
    "SupplyOut",
    "TokenOwnerOut",
    "VoucherMintRequest",
    "VoucherStatusOut",
]
