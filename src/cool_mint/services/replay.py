"""Request replay protection for the Cool Mint API."""

from __future__ import annotations

import blake3
from sqlalchemy.orm import Session

from cool_mint.models import RequestNonce


def _nonce_hash(client_nonce: str) -> str:
    return blake3.blake3(client_nonce.encode("utf-8")).hexdigest()


class ReplayProtectionService:
    """Service preventing replay of signed caller requests."""

    def __init__(self, db: Session) -> None:
        self.db = db

    def is_replay(self, caller_hex: str, client_nonce: str) -> bool:
        """Return True if the nonce has already been used by the caller."""
        key = (caller_hex, _nonce_hash(client_nonce))
        return self.db.get(RequestNonce, key) is not None

    def register_replay(self, caller_hex: str, client_nonce: str) -> None:
        """Record a client nonce as used and commit it."""
        self.db.add(RequestNonce(caller_hex=caller_hex, nonce_hash_hex=_nonce_hash(client_nonce)))
        self.db.commit()


def get_replay_service(db: Session) -> ReplayProtectionService:
    """Return a replay protection service bound to ``db``."""
    return ReplayProtectionService(db)
