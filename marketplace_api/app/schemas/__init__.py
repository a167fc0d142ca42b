"""
Pydantic schema definitions for API payloads.

Each domain (listings, contact form) defines its own Pydantic models
for request and response bodies.
"""
