"""
Top‑level API router.

Aggregates domain routers under a unified prefix.  When new domains
are introduced, include their routers here.
"""

from fastapi import APIRouter

from .endpoints import deals

router = APIRouter()

router.include_router(deals.router, prefix="/deals", tags=["deals"])
