# src/cool_mint/main.py
"""Main entry point for the Cool Mint application."""

from __future__ import annotations

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware

from cool_mint.api.v1 import mint_router, system_router, tokens_router
from cool_mint.core.errors import InvalidConfiguration
from cool_mint.core.settings import settings
from cool_mint.services.voucher import get_voucher_authorizer

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

# Initialize FastAPI app
app = FastAPI(
    title="Cool Mint API",
    description="Capped, quota-limited token minting with signed vouchers",
    version=settings.app_version,
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=settings.cors_allow_credentials,
    allow_methods=settings.cors_allow_methods,
    allow_headers=settings.cors_allow_headers,
)

# Add GZip middleware for compression
app.add_middleware(GZipMiddleware)

# Include API routers
app.include_router(mint_router, prefix="/api/v1")
app.include_router(tokens_router, prefix="/api/v1")
app.include_router(system_router, prefix="/api/v1")


@app.on_event("startup")
async def on_startup() -> None:
    try:
        authorizer = get_voucher_authorizer()
    except InvalidConfiguration as exc:
        logger.error("Voucher minting unavailable: %s", exc)
        return
    logger.info(
        "Cool Mint ready: signer=%s chain_id=%d max_supply=%d",
        authorizer.signer,
        authorizer.domain.chain_id,
        settings.max_supply,
    )


@app.get("/health")
async def health_check() -> dict[str, str]:
    """Health check endpoint to verify the service is running."""
    return {"status": "ok"}


@app.get("/")
async def root() -> dict[str, str]:
    """Root endpoint with basic information about the API."""
    return {
        "name": "Cool Mint API",
        "version": settings.app_version,
        "description": "Capped, quota-limited token minting with signed vouchers",
        "docs": "/docs",
        "redoc": "/redoc",
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("cool_mint.main:app", host="0.0.0.0", port=8000, reload=settings.debug)
