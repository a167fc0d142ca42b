"""
Top‑level API router.

This router aggregates the domain‑specific routers.  When new domains
are introduced, update this file to include their routers.
"""

from fastapi import APIRouter

from .endpoints import contact, health, listings

router = APIRouter()

router.include_router(listings.router, prefix="/listings", tags=["listings"])
router.include_router(contact.router, prefix="/contact", tags=["contact"])
router.include_router(health.router, tags=["health"])
