"""Shared API dependencies for caller authentication and mint services."""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends, Header, HTTPException, status
from sqlalchemy.orm import Session

from cool_mint.core.errors import (
    AuthError,
    InsufficientPayment,
    InvalidConfiguration,
    InvalidVoucherSigner,
    MintError,
    NonexistentToken,
    QuotaError,
    ReplayedVoucher,
    SupplyError,
)
from cool_mint.db.session import get_db
from cool_mint.services.minting import MintCoordinator
from cool_mint.services.replay import ReplayProtectionService, get_replay_service
from cool_mint.services.signing import verify_request_signature
from cool_mint.services.voucher import VoucherAuthorizer, get_voucher_authorizer

# Type alias for database session dependency
SessionDep = Annotated[Session, Depends(get_db)]


def get_authorizer_dep() -> VoucherAuthorizer:
    """Return the voucher authorizer for the configured signer.

    Raises:
        HTTPException: 503 when the voucher signer is not configured.
    """
    try:
        return get_voucher_authorizer()
    except InvalidConfiguration as err:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=_error_detail(err),
        ) from err


AuthorizerDep = Annotated[VoucherAuthorizer, Depends(get_authorizer_dep)]


def get_coordinator(db: SessionDep, authorizer: AuthorizerDep) -> MintCoordinator:
    """Return a mint coordinator bound to the request's session."""
    return MintCoordinator(db, authorizer)


def get_replay_service_dep(db: SessionDep) -> ReplayProtectionService:
    """Return the request replay protection service."""
    return get_replay_service(db)


CoordinatorDep = Annotated[MintCoordinator, Depends(get_coordinator)]
ReplayServiceDep = Annotated[ReplayProtectionService, Depends(get_replay_service_dep)]
CallerSignatureDep = Annotated[str, Header(alias="X-Caller-Signature")]


def authenticate_request(
    *,
    replay_service: ReplayProtectionService,
    caller_hex: str,
    client_nonce: str,
    payload: bytes,
    signature_hex: str,
) -> None:
    """Check the caller's request signature and burn its client nonce.

    Raises:
        HTTPException: 401 for a bad signature, 429 for a reused nonce.
    """
    if not verify_request_signature(caller_hex, payload, signature_hex):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid caller signature",
        )
    if replay_service.is_replay(caller_hex, client_nonce):
        raise HTTPException(
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
            detail="Request has already been processed",
        )
    replay_service.register_replay(caller_hex, client_nonce)


def _error_detail(err: MintError) -> dict[str, str]:
    return {"error": type(err).__name__, "message": str(err)}


def mint_error_to_http(err: MintError) -> HTTPException:
    """Translate a mint failure into the matching HTTP error."""
    if isinstance(err, InsufficientPayment):
        code = status.HTTP_402_PAYMENT_REQUIRED
    elif isinstance(err, QuotaError):
        code = status.HTTP_403_FORBIDDEN
    elif isinstance(err, InvalidVoucherSigner):
        code = status.HTTP_401_UNAUTHORIZED
    elif isinstance(err, (ReplayedVoucher, SupplyError)):
        code = status.HTTP_409_CONFLICT
    elif isinstance(err, NonexistentToken):
        code = status.HTTP_404_NOT_FOUND
    elif isinstance(err, AuthError):
        code = status.HTTP_401_UNAUTHORIZED
    else:
        code = status.HTTP_400_BAD_REQUEST
    return HTTPException(status_code=code, detail=_error_detail(err))
