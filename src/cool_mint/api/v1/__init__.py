# src/cool_mint/api/v1/__init__.py
"""Version 1 API endpoints."""

from .endpoints import mint_router, system_router, tokens_router

__all__ = [
    "mint_router",
    "system_router",
    "tokens_router",
]
