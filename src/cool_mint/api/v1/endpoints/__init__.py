# src/cool_mint/api/v1/endpoints/__init__.py
"""API endpoint modules for version 1."""

from .mint import router as mint_router
from .system import router as system_router
from .tokens import router as tokens_router

__all__ = [
    "mint_router",
    "system_router",
    "tokens_router",
]
