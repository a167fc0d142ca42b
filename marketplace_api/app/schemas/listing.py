"""
Pydantic schemas for marketplace listings.

``Listing`` is both the stored record and the API representation.  Its
wire and on‑disk field names are camelCase (``imageUrl``,
``createdAt``); Python code uses the snake_case attribute names.
``ListingCreate`` is intentionally permissive: presence and
truthiness of the required fields, and the numeric coercion of
``price``, are checked by ``ListingService.create_listing`` so that a
missing field produces the same 400 answer as an empty one.
"""

from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class Listing(BaseModel):
    """One marketplace item."""

    # Unknown fields found in a stored record are kept so that rewriting
    # the document does not drop them.
    model_config = ConfigDict(populate_by_name=True, extra="allow")

    id: str = Field(..., examples=["1760812345678"])
    title: str = Field(..., examples=["Lamp"])
    price: Optional[Union[int, float]] = Field(..., examples=[20])
    description: str = Field(..., examples=["IKEA"])
    contact: str = Field(..., examples=["a@b.com"])
    image_url: str = Field("", alias="imageUrl")
    likes: int = Field(0, ge=0)
    sold: bool = False
    created_at: str = Field(..., alias="createdAt", examples=["2026-10-18T12:00:00.000Z"])


class ListingCreate(BaseModel):
    """Request body for ``POST /listings``."""

    model_config = ConfigDict(populate_by_name=True)

    title: Optional[str] = None
    price: Any = None
    description: Optional[str] = None
    contact: Optional[str] = None
    image_url: Optional[str] = Field(None, alias="imageUrl")


class LikeResult(BaseModel):
    success: bool = True
    likes: int


class BuyResult(BaseModel):
    success: bool = True
    sold: bool = True


class DeleteResult(BaseModel):
    success: bool = True
    removed_id: str = Field(..., alias="removedId")

    model_config = ConfigDict(populate_by_name=True)
