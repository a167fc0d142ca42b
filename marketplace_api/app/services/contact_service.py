"""
Contact form relay.

Contact form submissions are forwarded as a single email through the
Resend transactional email API.  ``ResendRelay`` is a thin wrapper
around a ``requests`` session; ``ContactService`` formats the message
and turns any delivery problem into ``RelayError``.
"""

from __future__ import annotations

import html
import logging
from typing import Any, Dict, Optional

import requests

from ..core.config import Settings
from ..core.errors import RelayError
from ..schemas.contact import ContactRequest


logger = logging.getLogger(__name__)


def _text(value: Any) -> str:
    return "" if value is None else str(value)


class ResendRelay:
    """Minimal client for the Resend ``/emails`` endpoint.

    Args:
        api_key: Resend API key, sent as ``Authorization: Bearer <key>``.
        api_url: Full URL of the emails endpoint.
        timeout: Request timeout in seconds.
        session: Optional requests session.  If not supplied a session
            will be created automatically.
    """

    def __init__(
        self,
        *,
        api_key: str,
        api_url: str = "https://api.resend.com/emails",
        timeout: float = 10,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.api_key = api_key
        self.api_url = api_url
        self.timeout = timeout
        self.session = session or requests.Session()

    def send(self, *, sender: str, to: str, subject: str, html_body: str) -> Dict[str, Any]:
        """Send one email and return the decoded API response."""
        if not self.api_key:
            raise RelayError("Email relay is not configured")
        payload = {"from": sender, "to": to, "subject": subject, "html": html_body}
        headers = {"Authorization": f"Bearer {self.api_key}"}
        try:
            resp = self.session.post(self.api_url, json=payload, headers=headers, timeout=self.timeout)
            resp.raise_for_status()
        except requests.RequestException as exc:
            raise RelayError(f"Email relay request failed: {exc}") from exc
        try:
            return resp.json()
        except ValueError:
            return {}


class ContactService:
    """Format contact form submissions and hand them to the relay."""

    def __init__(self, relay: ResendRelay, *, sender: str, recipient: str) -> None:
        self.relay = relay
        self.sender = sender
        self.recipient = recipient

    @classmethod
    def from_settings(cls, app_settings: Settings, session: Optional[requests.Session] = None) -> "ContactService":
        relay = ResendRelay(
            api_key=app_settings.resend_api_key,
            api_url=app_settings.resend_api_url,
            timeout=app_settings.relay_timeout,
            session=session,
        )
        return cls(relay, sender=app_settings.contact_from, recipient=app_settings.contact_to)

    def send_contact_message(self, data: ContactRequest) -> None:
        """Relay a contact form submission as an email.

        Missing values render as empty strings and other non‑string
        values with ``str()``.  User supplied values are HTML‑escaped
        before being embedded in the message body.
        """
        name = _text(data.name)
        email = _text(data.email)
        subject = f"New message from {name}"
        body = f"<p><strong>Email:</strong> {html.escape(email)}</p><p>{html.escape(_text(data.message))}</p>"
        result = self.relay.send(sender=self.sender, to=self.recipient, subject=subject, html_body=body)
        logger.info("Relayed contact message from %s <%s> (id=%s)", name, email, result.get("id"))
