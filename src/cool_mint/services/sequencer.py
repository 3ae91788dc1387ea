# src/cool_mint/services/sequencer.py
"""Sequential token id allocation under a global supply ceiling."""

from __future__ import annotations

from sqlalchemy.orm import Session

from cool_mint.core.errors import BatchExceedsSupply, SupplyExhausted
from cool_mint.models import AllocationCounter
from cool_mint.services.ledger import OwnershipLedger

COUNTER_ROW_ID = 1


class AllocationSequencer:
    """Hands out token ids ``1..max_supply`` in strictly increasing order.

    The counter is shared by every mint channel. Both allocation methods
    validate against the ceiling before touching the ledger or the counter.
    """

    def __init__(self, db: Session, ledger: OwnershipLedger, max_supply: int) -> None:
        self.db = db
        self.ledger = ledger
        self.max_supply = max_supply

    def _counter(self) -> AllocationCounter:
        counter = self.db.get(AllocationCounter, COUNTER_ROW_ID)
        if counter is None:
            counter = AllocationCounter(id=COUNTER_ROW_ID, issued_count=0)
            self.db.add(counter)
        return counter

    @property
    def issued_count(self) -> int:
        counter = self.db.get(AllocationCounter, COUNTER_ROW_ID)
        return 0 if counter is None else counter.issued_count

    def ensure_single_available(self) -> None:
        """Raise SupplyExhausted if no id is left for a single mint."""
        if self.issued_count + 1 > self.max_supply:
            raise SupplyExhausted(f"All {self.max_supply} tokens have been minted")

    def ensure_batch_available(self, count: int) -> None:
        """Raise BatchExceedsSupply if ``count`` ids would cross the ceiling."""
        if self.issued_count + count > self.max_supply:
            raise BatchExceedsSupply(
                f"Batch of {count} exceeds remaining supply "
                f"({self.max_supply - self.issued_count} left)"
            )

    def allocate_one(self, owner_hex: str) -> int:
        """Assign the next id to ``owner_hex`` and return it."""
        self.ensure_single_available()
        counter = self._counter()
        token_id = counter.issued_count + 1
        self.ledger.assign(token_id, owner_hex)
        counter.issued_count = token_id
        return token_id

    def allocate_batch(self, owner_hex: str, count: int) -> list[int]:
        """Assign ``count`` contiguous ids to ``owner_hex``; all or nothing."""
        if count <= 0:
            raise ValueError("Batch size must be positive")
        self.ensure_batch_available(count)
        counter = self._counter()
        first = counter.issued_count + 1
        token_ids = list(range(first, first + count))
        for token_id in token_ids:
            self.ledger.assign(token_id, owner_hex)
        counter.issued_count += count
        return token_ids
