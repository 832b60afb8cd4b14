"""
Contact-form and meeting-request emails.

Each submission sends two messages: a notification to the site owner and a
confirmation to the person who filled in the form.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from .mailgun_client import MailgunClient


@dataclass
class Mailer:
    client: MailgunClient
    owner_email: str
    owner_name: str

    @property
    def domain(self) -> str:
        return self.client.domain

    def send_contact_notification(self, name: str, email: str, subject: str, message: str) -> List[Dict[str, Any]]:
        owner_mail = self.client.send(
            sender=f"Portfolio Contact <postmaster@{self.domain}>",
            to=self.owner_email,
            subject=f"New Contact Form Submission: {subject}",
            text=(
                f"Name: {name}\n"
                f"Email: {email}\n"
                f"Subject: {subject}\n\n"
                f"Message:\n{message}"
            ),
            reply_to=email,
        )
        confirmation = self.client.send(
            sender=f"{self.owner_name} <postmaster@{self.domain}>",
            to=email,
            subject=f"Thank you for contacting {self.owner_name}",
            text=(
                f"Hi {name},\n\n"
                "Thank you for reaching out! I've received your message and will get back "
                "to you within 24 hours.\n\n"
                f"Best regards,\n{self.owner_name}"
            ),
        )
        return [owner_mail, confirmation]

    def send_meeting_request(
        self,
        name: str,
        email: str,
        preferred_date_time: str,
        project_description: str,
    ) -> List[Dict[str, Any]]:
        owner_mail = self.client.send(
            sender=f"Portfolio Assistant <noreply@{self.domain}>",
            to=self.owner_email,
            subject=f"New Meeting Request from {name}",
            text=f"Preferred Time: {preferred_date_time}\nEmail: {email}\nProject: {project_description}",
            reply_to=email,
        )
        first_name = self.owner_name.split()[0] if self.owner_name.split() else self.owner_name
        confirmation = self.client.send(
            sender=f"{self.owner_name} <postmaster@{self.domain}>",
            to=email,
            subject=f"Meeting Request Received - {self.owner_name}",
            text=(
                f"Hi {name},\n\n"
                f"I received your meeting request for {preferred_date_time}. "
                f"I'll confirm within 24 hours.\n\n- {first_name}"
            ),
        )
        return [owner_mail, confirmation]


def build_mailer(settings) -> Optional[Mailer]:
    """A Mailer when key, domain and owner email are all set; otherwise None."""
    if not settings.has_mailgun:
        return None
    client = MailgunClient(
        api_key=settings.MAILGUN_API_KEY,
        domain=settings.MAILGUN_DOMAIN,
        base_url=settings.MAILGUN_API_BASE_URL,
    )
    return Mailer(client=client, owner_email=settings.OWNER_EMAIL, owner_name=settings.OWNER_NAME)
