"""Exception hierarchy for mint operations.

Every mint failure is terminal for the call that raised it: the coordinator
rolls back the surrounding transaction and re-raises, so callers observe
either a fully applied mint or no state change at all.
"""

from __future__ import annotations


class MintError(RuntimeError):
    """Base exception raised for mint-related failures."""


class InvalidConfiguration(MintError):
    """Raised when the service is constructed with a missing voucher signer."""


class InsufficientPayment(MintError):
    """Raised when the attached payment is below the channel's fixed price."""

    def __init__(self, required: int, received: int) -> None:
        super().__init__(f"Payment of {received} is below the required {required}")
        self.required = required
        self.received = received


class SupplyError(MintError):
    """Base class for global supply ceiling violations."""


class SupplyExhausted(SupplyError):
    """Raised when a single allocation would exceed the supply ceiling."""


class BatchExceedsSupply(SupplyError):
    """Raised when a batch allocation would cross the supply ceiling."""


class QuotaError(MintError):
    """Base class for per-requester quota violations."""


class SingleQuotaExceeded(QuotaError):
    """Raised when a requester has no single mints left in the current window."""


class BatchQuotaExceeded(QuotaError):
    """Raised when a requester has already consumed the batch allowance."""


class AuthError(MintError):
    """Base class for voucher authorization failures."""


class ReplayedVoucher(AuthError):
    """Raised when a (recipient, nonce) voucher was already redeemed."""


class InvalidVoucherSigner(AuthError):
    """Raised when a voucher signature does not come from the configured signer."""


class LedgerError(MintError):
    """Base class for ownership ledger failures."""


class NonexistentToken(LedgerError):
    """Raised when querying the owner of a token that has not been minted."""


class TokenAlreadyAssigned(LedgerError):
    """Raised when an id is assigned twice or falls outside the supply range."""


__all__ = [
    "AuthError",
    "BatchExceedsSupply",
    "BatchQuotaExceeded",
    "InsufficientPayment",
    "InvalidConfiguration",
    "InvalidVoucherSigner",
    "LedgerError",
    "MintError",
    "NonexistentToken",
    "QuotaError",
    "ReplayedVoucher",
    "SingleQuotaExceeded",
    "SupplyError",
    "SupplyExhausted",
    "TokenAlreadyAssigned",
]
