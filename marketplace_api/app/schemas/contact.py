"""
Pydantic schemas for the contact form.

The form is relayed verbatim: none of its fields are required and any
JSON value is accepted.  ``ContactService`` renders non‑string values
with ``str()``.
"""

from typing import Any

from pydantic import BaseModel, Field


class ContactRequest(BaseModel):
    name: Any = Field(None, examples=["Jane"])
    email: Any = Field(None, examples=["jane@example.com"])
    message: Any = Field(None, examples=["Is the lamp still available?"])


class ContactResult(BaseModel):
    success: bool = True
    message: str = "Email sent!"
