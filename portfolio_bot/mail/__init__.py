# Mail package: Mailgun client + contact / meeting notifications.

from .mailgun_client import MailgunClient
from .notifications import Mailer, build_mailer

__all__ = ["MailgunClient", "Mailer", "build_mailer"]
