"""
FastAPI dependencies that hand services and request bodies to the
endpoints.

The listings store and the contact service are created once by
``create_app`` and kept on ``app.state``.  Tests may replace them
there or through ``app.dependency_overrides``.

``request_payload`` accepts both JSON and HTML form posts
(``application/x-www-form-urlencoded`` or ``multipart/form-data``), so
a plain ``<form>`` can create listings and send contact messages.
Form values arrive as strings and go through the same validation as
JSON values.
"""

import json
from typing import Any, Optional, Type, TypeVar

from fastapi import HTTPException, Request, status
from pydantic import BaseModel, ValidationError

from ..services.contact_service import ContactService
from ..services.listing_service import ListingService

FORM_CONTENT_TYPES = {"application/x-www-form-urlencoded", "multipart/form-data"}

ModelT = TypeVar("ModelT", bound=BaseModel)


def get_listing_service(request: Request) -> ListingService:
    return ListingService(request.app.state.store)


def get_contact_service(request: Request) -> ContactService:
    return request.app.state.contact_service


def _invalid_body() -> HTTPException:
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid request body")


async def request_payload(request: Request) -> Optional[Any]:
    """Return the decoded request body, or ``None`` when there is none."""
    content_type = request.headers.get("content-type", "").split(";")[0].strip().lower()
    if content_type in FORM_CONTENT_TYPES:
        form = await request.form()
        return {key: value for key, value in form.items()}
    raw = await request.body()
    if not raw.strip():
        return None
    try:
        return json.loads(raw)
    except ValueError:
        raise _invalid_body() from None


def parse_payload(model: Type[ModelT], payload: Optional[Any]) -> Optional[ModelT]:
    """Validate ``payload`` against ``model``.

    ``None`` passes through so that services can treat an absent body
    as missing fields.  Anything else that does not fit the model is a
    400 ``Invalid request body``.
    """
    if payload is None:
        return None
    if not isinstance(payload, dict):
        raise _invalid_body()
    try:
        return model.model_validate(payload)
    except ValidationError:
        raise _invalid_body() from None
