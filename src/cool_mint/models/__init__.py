"""SQLAlchemy models for the Cool Mint service."""

from .allocation import AllocationCounter, TokenOwner
from .mint_event import MintEvent
from .quota import RequesterQuotaRow
from .replay_protection import RequestNonce, VoucherRedemption

__all__ = [
    "AllocationCounter", "TokenOwner",
    "MintEvent",
    "RequesterQuotaRow",
    "RequestNonce", "VoucherRedemption",
]
