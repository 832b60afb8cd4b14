"""Minimal Mailgun messages client over its REST API."""

from __future__ import annotations

from typing import Any, Dict, Optional

import requests

from portfolio_bot.logger import get_logger

logger = get_logger(__name__)

MAILGUN_API_BASE_URL = "https://api.mailgun.net"


class MailgunClient:
    def __init__(self, api_key: str, domain: str, base_url: str = MAILGUN_API_BASE_URL, timeout: float = 30):
        self.api_key = api_key
        self.domain = domain
        # US or EU endpoint
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    @property
    def messages_url(self) -> str:
        return f"{self.base_url}/v3/{self.domain}/messages"

    def send(
        self,
        sender: str,
        to: str,
        subject: str,
        text: str,
        reply_to: Optional[str] = None,
    ) -> Dict[str, Any]:
        """
        Send one plain-text message.

        Returns Mailgun's JSON acknowledgement ({"id": ..., "message": "Queued. ..."}).
        Raises requests.HTTPError on a non-2xx response.
        """
        data = {"from": sender, "to": to, "subject": subject, "text": text}
        if reply_to:
            data["h:Reply-To"] = reply_to
        resp = requests.post(self.messages_url, auth=("api", self.api_key), data=data, timeout=self.timeout)
        resp.raise_for_status()
        ack = resp.json()
        logger.info(f"Email queued to {to}. Message ID: {ack.get('id')}")
        return ack
