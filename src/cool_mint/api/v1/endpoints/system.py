"""System and transparency endpoints for the Cool Mint API."""

from __future__ import annotations

from fastapi import APIRouter

from cool_mint.core.settings import settings

from ..dependencies import AuthorizerDep

router = APIRouter(prefix="/system", tags=["system", "transparency"])


@router.get("/config")
async def get_public_config(authorizer: AuthorizerDep) -> dict[str, object]:
    """Return a sanitized snapshot of public runtime configuration.

    Includes everything a voucher issuer or client needs to build and sign
    requests: the voucher signer, the signing domain, supply and prices.
    """
    domain = authorizer.domain
    return {
        "app": {
            "name": settings.app_name,
            "version": settings.app_version,
            "debug": settings.debug,
        },
        "voucher": {
            "signer": authorizer.signer,
            "domain": {
                "name": domain.name,
                "version": domain.version,
                "chain_id": domain.chain_id,
                "verifying_identity": domain.verifying_identity,
            },
            "domain_separator": authorizer.domain_separator.hex(),
        },
        "supply": {
            "max_supply": settings.max_supply,
            "batch_size": settings.batch_size,
        },
        "prices": {
            "mint_price": settings.mint_price,
            "mint_batch_price": settings.mint_batch_price,
        },
    }
