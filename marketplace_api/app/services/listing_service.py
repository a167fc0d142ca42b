"""
Business logic for marketplace listings.

The service exposes the five listing operations: list, create, like,
buy and delete.  Every call loads the whole collection from the
``ListingStore``, works on it in memory and, for the mutating
operations, writes the whole collection back inside a store
transaction.  Nothing is cached between calls.

Lookups are linear scans for the first record with a matching id.
Required fields on creation are checked for truthiness, so an empty
string, ``0`` or ``null`` all count as missing.  A price of ``0`` is
therefore rejected, which existing clients rely on.
"""

import logging
import math
import time
from datetime import datetime, timezone
from typing import Any, List, Optional, Union

from ..core.errors import AlreadySoldError, NotFoundError, ValidationError
from ..core.store import ListingStore
from ..schemas.listing import Listing, ListingCreate


logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("title", "price", "description", "contact")


def utc_timestamp() -> str:
    """Current UTC time as ISO‑8601 with millisecond precision and a ``Z`` suffix."""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def coerce_price(value: Any) -> Union[int, float]:
    """Convert a submitted price to a number.

    Numbers pass through unchanged and numeric strings are parsed,
    preferring ``int`` when the text is integral.  Booleans, NaN,
    infinities and anything else raise ``ValidationError``.
    """
    if isinstance(value, bool):
        raise ValidationError("Price must be a number")
    if isinstance(value, (int, float)):
        number = value
    elif isinstance(value, str):
        text = value.strip()
        try:
            number = int(text)
        except ValueError:
            try:
                number = float(text)
            except ValueError:
                raise ValidationError("Price must be a number") from None
    else:
        raise ValidationError("Price must be a number")
    if isinstance(number, float) and not math.isfinite(number):
        raise ValidationError("Price must be a number")
    return number


def generate_id(listings: List[Listing], now_ms: Optional[int] = None) -> str:
    """Return a millisecond‑timestamp id not used by any listing in ``listings``."""
    candidate = now_ms if now_ms is not None else int(time.time() * 1000)
    taken = {listing.id for listing in listings}
    while str(candidate) in taken:
        candidate += 1
    return str(candidate)


def _find(listings: List[Listing], listing_id: str) -> Listing:
    for listing in listings:
        if listing.id == listing_id:
            return listing
    raise NotFoundError()


class ListingService:
    """Service for managing marketplace listings."""

    def __init__(self, store: ListingStore) -> None:
        self.store = store

    def list_listings(self) -> List[Listing]:
        """Return the full collection in stored order."""
        return self.store.read()

    def create_listing(self, data: Optional[ListingCreate]) -> Listing:
        """Validate ``data``, append a new listing and return it.

        Raises ``ValidationError`` if a required field is missing or
        falsy, or if the price is not numeric.  Validation happens
        before the store is touched, so a rejected request never
        changes the collection.
        """
        if data is None or any(not getattr(data, field) for field in REQUIRED_FIELDS):
            raise ValidationError("Missing required fields")
        price = coerce_price(data.price)

        with self.store.transaction() as listings:
            listing = Listing(
                id=generate_id(listings),
                title=data.title,
                price=price,
                description=data.description,
                contact=data.contact,
                image_url=data.image_url or "",
                likes=0,
                sold=False,
                created_at=utc_timestamp(),
            )
            listings.append(listing)
        logger.info("Created listing %s (%s)", listing.id, listing.title)
        return listing

    def like_listing(self, listing_id: str) -> int:
        """Increment the like counter of a listing and return the new count."""
        with self.store.transaction() as listings:
            listing = _find(listings, listing_id)
            listing.likes += 1
        logger.info("Listing %s liked (%s likes)", listing_id, listing.likes)
        return listing.likes

    def buy_listing(self, listing_id: str) -> Listing:
        """Mark a listing as sold.

        A listing can be sold once; a second attempt raises
        ``AlreadySoldError`` and leaves the document untouched.
        """
        with self.store.transaction() as listings:
            listing = _find(listings, listing_id)
            if listing.sold:
                raise AlreadySoldError()
            listing.sold = True
        logger.info("Listing %s marked as sold", listing_id)
        return listing

    def delete_listing(self, listing_id: str) -> str:
        """Remove a listing and return its id."""
        with self.store.transaction() as listings:
            for index, listing in enumerate(listings):
                if listing.id == listing_id:
                    break
            else:
                raise NotFoundError()
            removed = listings.pop(index)
        logger.info("Deleted listing %s", removed.id)
        return removed.id
