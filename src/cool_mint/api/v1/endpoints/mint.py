# src/cool_mint/api/v1/endpoints/mint.py
"""Mint endpoints for the Cool Mint API."""

from __future__ import annotations

from threading import Lock

from fastapi import APIRouter, HTTPException, status

from cool_mint.core.errors import MintError
from cool_mint.core.quota import RequesterQuota
from cool_mint.core.security import normalize_identity
from cool_mint.schemas.mint import (
    BatchMintRequest,
    DirectMintRequest,
    MintResult,
    QuotaOut,
    SupplyOut,
    VoucherMintRequest,
    VoucherStatusOut,
)
from cool_mint.services.minting import MintCoordinator
from cool_mint.services.signing import canonical_request_bytes

from ..dependencies import (
    CallerSignatureDep,
    CoordinatorDep,
    ReplayServiceDep,
    authenticate_request,
    mint_error_to_http,
)

router = APIRouter(prefix="/mint", tags=["mint"])

# Serializes every state-changing mint in this process.
_MINT_LOCK = Lock()


def _identity_or_422(value: str) -> str:
    try:
        return normalize_identity(value)
    except ValueError as err:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=str(err),
        ) from err


def _result(
    coordinator: MintCoordinator, caller: str, recipient: str, token_ids: list[int]
) -> MintResult:
    return MintResult(
        recipient=recipient,
        token_ids=token_ids,
        quota_state=coordinator.quota_state(caller),
        issued_count=coordinator.issued_count(),
    )


@router.post("/direct", status_code=status.HTTP_201_CREATED)
async def mint_direct(
    request: DirectMintRequest,
    signature: CallerSignatureDep,
    coordinator: CoordinatorDep,
    replay_service: ReplayServiceDep,
) -> MintResult:
    """Mint a single token to the caller at the single-unit price."""
    authenticate_request(
        replay_service=replay_service,
        caller_hex=request.caller,
        client_nonce=request.client_nonce,
        payload=canonical_request_bytes(
            "direct", request.caller, request.client_nonce, request.payment
        ),
        signature_hex=signature,
    )
    with _MINT_LOCK:
        try:
            token_id = coordinator.mint_direct(request.caller, request.payment)
        except MintError as err:
            raise mint_error_to_http(err) from err
        return _result(coordinator, request.caller, request.caller, [token_id])


@router.post("/voucher", status_code=status.HTTP_201_CREATED)
async def mint_by_voucher(
    request: VoucherMintRequest,
    signature: CallerSignatureDep,
    coordinator: CoordinatorDep,
    replay_service: ReplayServiceDep,
) -> MintResult:
    """Redeem a signed voucher, minting to the voucher's recipient."""
    authenticate_request(
        replay_service=replay_service,
        caller_hex=request.caller,
        client_nonce=request.client_nonce,
        payload=canonical_request_bytes(
            "voucher",
            request.caller,
            request.client_nonce,
            request.recipient,
            request.nonce,
            request.voucher_signature,
        ),
        signature_hex=signature,
    )
    with _MINT_LOCK:
        try:
            token_id = coordinator.mint_by_voucher(
                request.caller, request.recipient, request.nonce, request.voucher_signature
            )
        except MintError as err:
            raise mint_error_to_http(err) from err
        return _result(coordinator, request.caller, request.recipient, [token_id])


@router.post("/batch", status_code=status.HTTP_201_CREATED)
async def mint_batch(
    request: BatchMintRequest,
    signature: CallerSignatureDep,
    coordinator: CoordinatorDep,
    replay_service: ReplayServiceDep,
) -> MintResult:
    """Mint the one-time batch of contiguous tokens to the caller."""
    authenticate_request(
        replay_service=replay_service,
        caller_hex=request.caller,
        client_nonce=request.client_nonce,
        payload=canonical_request_bytes(
            "batch", request.caller, request.client_nonce, request.payment
        ),
        signature_hex=signature,
    )
    with _MINT_LOCK:
        try:
            token_ids = coordinator.mint_batch(request.caller, request.payment)
        except MintError as err:
            raise mint_error_to_http(err) from err
        return _result(coordinator, request.caller, request.caller, token_ids)


@router.get("/supply")
async def get_supply(coordinator: CoordinatorDep) -> SupplyOut:
    """Return the issued count alongside the fixed supply and prices."""
    return SupplyOut(
        issued_count=coordinator.issued_count(),
        max_supply=coordinator.config.max_supply,
        batch_size=coordinator.config.batch_size,
        mint_price=coordinator.config.mint_price,
        mint_batch_price=coordinator.config.mint_batch_price,
    )


@router.get("/quota/{requester}")
async def get_quota(requester: str, coordinator: CoordinatorDep) -> QuotaOut:
    """Return a requester's quota state."""
    requester = _identity_or_422(requester)
    state = coordinator.quota_state(requester)
    decoded = RequesterQuota.from_state(state)
    return QuotaOut(
        requester=requester,
        state=state,
        single_count=decoded.single_count,
        batch_used=decoded.batch_used,
        single_mints_remaining=decoded.single_mints_remaining,
        can_single_mint=decoded.can_single_mint,
        can_batch_mint=decoded.can_batch_mint,
    )


@router.get("/vouchers/{recipient}/{nonce}")
async def get_voucher_status(
    recipient: str, nonce: int, coordinator: CoordinatorDep
) -> VoucherStatusOut:
    """Return whether a (recipient, nonce) voucher has been redeemed."""
    recipient = _identity_or_422(recipient)
    return VoucherStatusOut(
        recipient=recipient,
        nonce=nonce,
        consumed=coordinator.voucher_consumed(recipient, nonce),
    )
