"""
Listing endpoints.

These routes expose the listings board: list every listing, create a
new one, like it, mark it as sold and delete it.  They rely on
``ListingService`` for the work and only translate domain errors into
HTTP errors.  Store failures are reported with an operation specific
message; the underlying cause is logged by the store.
"""

from typing import Any, List, NoReturn

from fastapi import APIRouter, Depends, HTTPException, Path, status

from marketplace_api.app.api.deps import get_listing_service, parse_payload, request_payload
from marketplace_api.app.core.errors import MarketplaceError, StoreError
from marketplace_api.app.schemas.listing import (
    BuyResult,
    DeleteResult,
    LikeResult,
    Listing,
    ListingCreate,
)
from marketplace_api.app.services.listing_service import ListingService

router = APIRouter()


def _raise_http(exc: MarketplaceError, failure_message: str) -> NoReturn:
    if isinstance(exc, StoreError):
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=failure_message) from exc
    raise HTTPException(status_code=exc.status_code, detail=exc.message) from exc


@router.get("", response_model=List[Listing])
def list_listings(service: ListingService = Depends(get_listing_service)) -> List[Listing]:
    """Return every listing in insertion order.

    No pagination, filtering or sorting is applied.
    """
    try:
        return service.list_listings()
    except MarketplaceError as e:
        _raise_http(e, "Failed to read listings")


@router.post("", response_model=Listing, status_code=status.HTTP_201_CREATED)
def create_listing(
    payload: Any = Depends(request_payload),
    service: ListingService = Depends(get_listing_service),
) -> Listing:
    """Create a listing from a JSON body or an HTML form post.

    ``title``, ``price``, ``description`` and ``contact`` are required
    and must be non‑empty; ``imageUrl`` is optional.  The new listing
    starts with zero likes and is not sold.
    """
    data = parse_payload(ListingCreate, payload)
    try:
        return service.create_listing(data)
    except MarketplaceError as e:
        _raise_http(e, "Failed to create listing")


@router.post("/{listing_id}/like", response_model=LikeResult)
def like_listing(
    listing_id: str = Path(..., description="ID of the listing to like"),
    service: ListingService = Depends(get_listing_service),
) -> LikeResult:
    """Add one like and return the new count."""
    try:
        likes = service.like_listing(listing_id)
    except MarketplaceError as e:
        _raise_http(e, "Failed to like listing")
    return LikeResult(likes=likes)


@router.post("/{listing_id}/buy", response_model=BuyResult)
def buy_listing(
    listing_id: str = Path(..., description="ID of the listing to buy"),
    service: ListingService = Depends(get_listing_service),
) -> BuyResult:
    """Mark a listing as sold.

    Returns HTTP 400 if the listing was already sold.
    """
    try:
        service.buy_listing(listing_id)
    except MarketplaceError as e:
        _raise_http(e, "Failed to mark as sold")
    return BuyResult()


@router.delete("/{listing_id}", response_model=DeleteResult)
def delete_listing(
    listing_id: str = Path(..., description="ID of the listing to delete"),
    service: ListingService = Depends(get_listing_service),
) -> DeleteResult:
    """Delete a listing and return its id."""
    try:
        removed_id = service.delete_listing(listing_id)
    except MarketplaceError as e:
        _raise_http(e, "Failed to delete listing")
    return DeleteResult(removed_id=removed_id)
