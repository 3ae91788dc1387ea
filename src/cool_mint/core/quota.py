"""Requester quota rules.

A requester's mint allowance is a single packed integer::

    state = single_count + (BATCH_OFFSET if batch_used else 0)

Single mints are allowed in two windows of ``SINGLE_WINDOW`` each, one
before the batch mint and one after it. The batch mint is allowed once,
and only while no batch has been recorded (``state <= SINGLE_WINDOW``).
Reachable states are 0-3 and 6-9; 4 and 5 never occur.
"""
from __future__ import annotations

from dataclasses import dataclass

from cool_mint.core.errors import BatchQuotaExceeded, SingleQuotaExceeded

SINGLE_WINDOW = 3
BATCH_OFFSET = 6
MAX_STATE = BATCH_OFFSET + SINGLE_WINDOW
VALID_STATES = frozenset({0, 1, 2, 3, 6, 7, 8, 9})


def can_single_mint(state: int) -> bool:
    """Return True if a single mint is allowed from ``state``.

    Blocked once the pre-batch window is spent (3, before any batch) and once
    the post-batch window is spent (9).
    """
    if SINGLE_WINDOW <= state < BATCH_OFFSET:
        return False
    return state < MAX_STATE


def can_batch_mint(state: int) -> bool:
    """Return True if the one-time batch mint is still available."""
    return state <= SINGLE_WINDOW


def after_single_mint(state: int) -> int:
    """Return the state following a successful single mint."""
    if not can_single_mint(state):
        raise SingleQuotaExceeded(f"No single mints left (state={state})")
    return state + 1


def after_batch_mint(state: int) -> int:
    """Return the state following a successful batch mint."""
    if not can_batch_mint(state):
        raise BatchQuotaExceeded(f"Batch mint already used (state={state})")
    return state + BATCH_OFFSET


@dataclass(frozen=True)
class RequesterQuota:
    """Decoded view of a packed quota state."""

    single_count: int = 0
    batch_used: bool = False

    @classmethod
    def from_state(cls, state: int) -> RequesterQuota:
        if state not in VALID_STATES:
            raise ValueError(f"Invalid quota state: {state}")
        if state >= BATCH_OFFSET:
            return cls(single_count=state - BATCH_OFFSET, batch_used=True)
        return cls(single_count=state, batch_used=False)

    @property
    def state(self) -> int:
        return self.single_count + (BATCH_OFFSET if self.batch_used else 0)

    @property
    def single_mints_remaining(self) -> int:
        return SINGLE_WINDOW - self.single_count

    @property
    def can_single_mint(self) -> bool:
        return can_single_mint(self.state)

    @property
    def can_batch_mint(self) -> bool:
        return can_batch_mint(self.state)
