# src/cool_mint/services/minting.py
"""Mint entry points composing quota, voucher and allocation rules."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager

from sqlalchemy.orm import Session

from cool_mint.core import quota
from cool_mint.core.errors import InsufficientPayment, MintError
from cool_mint.core.security import normalize_identity
from cool_mint.core.settings import Settings, settings
from cool_mint.models import RequesterQuotaRow
from cool_mint.services.events import MintChannel, MintEventSink, MintRecord, SqlMintEventSink
from cool_mint.services.ledger import OwnershipLedger, SqlOwnershipLedger
from cool_mint.services.sequencer import AllocationSequencer
from cool_mint.services.voucher import VoucherAuthorizer, get_voucher_authorizer

logger = logging.getLogger(__name__)


class MintCoordinator:
    """Runs each mint as one all-or-nothing transaction on ``db``.

    Every precondition is checked against the state read at the start of
    the call before anything is written. Any failure rolls the session
    back, so the quota row, voucher record, id counter, ownership ledger
    and event log advance together or not at all.

    Calls are not serialized here; the caller must ensure only one mint
    runs against the store at a time.
    """

    def __init__(
        self,
        db: Session,
        authorizer: VoucherAuthorizer,
        config: Settings = settings,
        ledger: OwnershipLedger | None = None,
        events: MintEventSink | None = None,
    ) -> None:
        self.db = db
        self.authorizer = authorizer
        self.config = config
        self.ledger = ledger or SqlOwnershipLedger(db, config.max_supply)
        self.events = events or SqlMintEventSink(db)
        self.sequencer = AllocationSequencer(db, self.ledger, config.max_supply)

    # --- Read surface ---------------------------------------------------------------
    def issued_count(self) -> int:
        return self.sequencer.issued_count

    def quota_state(self, requester_hex: str) -> int:
        row = self.db.get(RequesterQuotaRow, normalize_identity(requester_hex))
        return 0 if row is None else row.state

    def voucher_consumed(self, recipient_hex: str, nonce: int) -> bool:
        return self.authorizer.is_consumed(self.db, recipient_hex, nonce)

    def owner_of(self, token_id: int) -> str:
        return self.ledger.owner_of(token_id)

    # --- Entry points ---------------------------------------------------------------
    def mint_direct(self, caller_hex: str, payment: int) -> int:
        """Mint one token to ``caller_hex`` for at least ``MINT_PRICE``."""
        caller = normalize_identity(caller_hex)
        with self._transaction("single", caller):
            state = self.quota_state(caller)
            self._require_payment(payment, self.config.mint_price)
            next_state = quota.after_single_mint(state)
            self.sequencer.ensure_single_available()

            token_id = self.sequencer.allocate_one(caller)
            self._write_quota(caller, next_state)
            self.events.emit(MintRecord(MintChannel.SINGLE, caller, (token_id,)))
        return token_id

    def mint_by_voucher(
        self, caller_hex: str, recipient_hex: str, nonce: int, signature_hex: str
    ) -> int:
        """Mint one token to the voucher's recipient.

        The quota debited is the submitting caller's, not the recipient's.
        """
        caller = normalize_identity(caller_hex)
        recipient = normalize_identity(recipient_hex)
        with self._transaction("voucher", caller):
            state = self.quota_state(caller)
            self.authorizer.authorize(self.db, recipient, nonce, signature_hex)
            next_state = quota.after_single_mint(state)
            self.sequencer.ensure_single_available()

            self.authorizer.consume(self.db, recipient, nonce)
            token_id = self.sequencer.allocate_one(recipient)
            self._write_quota(caller, next_state)
            self.events.emit(MintRecord(MintChannel.VOUCHER, recipient, (token_id,), nonce))
        return token_id

    def mint_batch(self, caller_hex: str, payment: int) -> list[int]:
        """Mint ``BATCH_SIZE`` contiguous tokens to ``caller_hex``, once per requester."""
        caller = normalize_identity(caller_hex)
        batch_size = self.config.batch_size
        with self._transaction("batch", caller):
            state = self.quota_state(caller)
            self._require_payment(payment, self.config.mint_batch_price)
            next_state = quota.after_batch_mint(state)
            self.sequencer.ensure_batch_available(batch_size)

            token_ids = self.sequencer.allocate_batch(caller, batch_size)
            self._write_quota(caller, next_state)
            self.events.emit(MintRecord(MintChannel.BATCH, caller, tuple(token_ids)))
        return token_ids

    # --- Helpers --------------------------------------------------------------------
    @staticmethod
    def _require_payment(payment: int, price: int) -> None:
        if payment < price:
            raise InsufficientPayment(required=price, received=payment)

    def _write_quota(self, requester: str, state: int) -> None:
        row = self.db.get(RequesterQuotaRow, requester)
        if row is None:
            self.db.add(RequesterQuotaRow(requester_hex=requester, state=state))
        else:
            row.state = state

    @contextmanager
    def _transaction(self, channel: str, caller: str) -> Iterator[None]:
        try:
            yield
            self.db.commit()
        except MintError as exc:
            self.db.rollback()
            logger.warning(
                "Rejected %s mint for %s: %s (%s)", channel, caller, type(exc).__name__, exc
            )
            raise
        except Exception:
            self.db.rollback()
            logger.error("Unexpected failure during %s mint for %s", channel, caller, exc_info=True)
            raise


def get_mint_coordinator(db: Session) -> MintCoordinator:
    """Return a coordinator bound to ``db`` using the runtime settings."""
    return MintCoordinator(db, get_voucher_authorizer())
