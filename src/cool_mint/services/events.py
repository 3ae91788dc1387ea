# src/cool_mint/services/events.py
"""Mint audit records and the sink that persists them."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Protocol

from sqlalchemy.orm import Session

from cool_mint.models import MintEvent

logger = logging.getLogger(__name__)


class MintChannel(Enum):
    """Allocation channel a mint went through."""

    SINGLE = "single"
    VOUCHER = "voucher"
    BATCH = "batch"


@dataclass(frozen=True)
class MintRecord:
    """Structured record emitted for every successful mint."""

    channel: MintChannel
    recipient: str
    token_ids: tuple[int, ...] = field(default_factory=tuple)
    nonce: int | None = None


class MintEventSink(Protocol):
    """Receives mint records for external observability."""

    def emit(self, record: MintRecord) -> None: ...


class SqlMintEventSink:
    """Stages mint records in the ``mint_event`` table.

    Rows share the caller's transaction, so a rolled back mint leaves no
    event behind.
    """

    def __init__(self, db: Session) -> None:
        self.db = db

    def emit(self, record: MintRecord) -> None:
        self.db.add(
            MintEvent(
                event_type=record.channel.value,
                recipient_hex=record.recipient,
                nonce=None if record.nonce is None else str(record.nonce),
                token_ids=",".join(str(token_id) for token_id in record.token_ids),
            )
        )
        logger.info(
            "Minted %s token(s) %s to %s",
            record.channel.value,
            list(record.token_ids),
            record.recipient,
        )
