"""Business logic services for the Cool Mint application."""

from .events import MintChannel, MintRecord, SqlMintEventSink
from .ledger import SqlOwnershipLedger
from .minting import MintCoordinator
from .replay import ReplayProtectionService
from .sequencer import AllocationSequencer
from .voucher import VoucherAuthorizer, VoucherDomain

__all__ = [
    "AllocationSequencer",
    "MintChannel",
    "MintCoordinator",
    "MintRecord",
    "ReplayProtectionService",
    "SqlMintEventSink",
    "SqlOwnershipLedger",
    "VoucherAuthorizer",
    "VoucherDomain",
]
