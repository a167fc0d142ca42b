"""
Contact form endpoint.

Submissions, sent as JSON or as an HTML form post, are relayed as an
email through ``ContactService``.  The form fields are not validated;
a missing body relays an empty message.  Any relay failure is
answered with HTTP 500.
"""

import logging
from typing import Any

from fastapi import APIRouter, Depends, HTTPException, status

from marketplace_api.app.api.deps import get_contact_service, parse_payload, request_payload
from marketplace_api.app.core.errors import RelayError
from marketplace_api.app.schemas.contact import ContactRequest, ContactResult
from marketplace_api.app.services.contact_service import ContactService

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("", response_model=ContactResult)
def send_contact(
    payload: Any = Depends(request_payload),
    service: ContactService = Depends(get_contact_service),
) -> ContactResult:
    """Relay a contact message to the site owner."""
    data = parse_payload(ContactRequest, payload) or ContactRequest()
    try:
        service.send_contact_message(data)
    except RelayError as e:
        logger.exception("Email error: %s", e)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=RelayError.default_message
        ) from e
    return ContactResult()
