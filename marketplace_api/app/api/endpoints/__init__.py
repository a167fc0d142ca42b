"""
Endpoint modules grouped by domain.

Each module defines a ``router`` that is included by the top‑level
API router.
"""
