# src/cool_mint/services/ledger.py
"""Token ownership ledger backed by the ``token_owner`` table."""

from __future__ import annotations

from typing import Protocol

from sqlalchemy.orm import Session

from cool_mint.core.errors import NonexistentToken, TokenAlreadyAssigned
from cool_mint.models import TokenOwner


class OwnershipLedger(Protocol):
    """Records which identity holds each minted token id."""

    def assign(self, token_id: int, owner_hex: str) -> None: ...

    def owner_of(self, token_id: int) -> str: ...


class SqlOwnershipLedger:
    """Ownership ledger staged on a SQLAlchemy session.

    Assignments become durable when the caller commits the session.
    """

    def __init__(self, db: Session, max_supply: int) -> None:
        self.db = db
        self.max_supply = max_supply

    def assign(self, token_id: int, owner_hex: str) -> None:
        if not 1 <= token_id <= self.max_supply:
            raise TokenAlreadyAssigned(f"Token id {token_id} is outside 1..{self.max_supply}")
        if self.db.get(TokenOwner, token_id) is not None:
            raise TokenAlreadyAssigned(f"Token id {token_id} already has an owner")
        self.db.add(TokenOwner(token_id=token_id, owner_hex=owner_hex))

    def owner_of(self, token_id: int) -> str:
        row = self.db.get(TokenOwner, token_id)
        if row is None:
            raise NonexistentToken(f"Token {token_id} does not exist")
        return row.owner_hex
