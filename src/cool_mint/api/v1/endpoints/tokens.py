# src/cool_mint/api/v1/endpoints/tokens.py
"""Token ownership lookups."""

from __future__ import annotations

from fastapi import APIRouter

from cool_mint.core.errors import NonexistentToken
from cool_mint.schemas.mint import TokenOwnerOut

from ..dependencies import CoordinatorDep, mint_error_to_http

router = APIRouter(prefix="/tokens", tags=["tokens"])


@router.get("/{token_id}/owner")
async def get_token_owner(token_id: int, coordinator: CoordinatorDep) -> TokenOwnerOut:
    """Return the owner of a minted token."""
    try:
        owner = coordinator.owner_of(token_id)
    except NonexistentToken as err:
        raise mint_error_to_http(err) from err
    return TokenOwnerOut(token_id=token_id, owner=owner)
