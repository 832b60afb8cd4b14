import pytest
import requests

from portfolio_bot.mail import MailgunClient, Mailer, build_mailer
from portfolio_bot.mail import mailgun_client
from portfolio_bot.settings import Settings


class FakeResponse:
    def __init__(self, status=200, payload=None):
        self.status_code = status
        self._payload = payload or {"id": "<msg@mg.example.com>", "message": "Queued. Thank you."}

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} error")

    def json(self):
        return self._payload


@pytest.fixture
def posts(monkeypatch):
    sent = []

    def fake_post(url, auth=None, data=None, timeout=None):
        sent.append({"url": url, "auth": auth, "data": data, "timeout": timeout})
        return FakeResponse()

    monkeypatch.setattr(mailgun_client.requests, "post", fake_post)
    return sent


def test_send_posts_to_messages_endpoint(posts):
    client = MailgunClient(api_key="key-1", domain="mg.example.com", base_url="https://api.eu.mailgun.net/")
    ack = client.send("Me <me@mg.example.com>", "you@example.com", "Hi", "Body", reply_to="r@example.com")

    assert ack["id"] == "<msg@mg.example.com>"
    assert posts[0]["url"] == "https://api.eu.mailgun.net/v3/mg.example.com/messages"
    assert posts[0]["auth"] == ("api", "key-1")
    assert posts[0]["data"] == {
        "from": "Me <me@mg.example.com>",
        "to": "you@example.com",
        "subject": "Hi",
        "text": "Body",
        "h:Reply-To": "r@example.com",
    }


def test_http_errors_propagate(monkeypatch):
    monkeypatch.setattr(mailgun_client.requests, "post", lambda *a, **k: FakeResponse(status=401))
    client = MailgunClient(api_key="bad", domain="mg.example.com")
    with pytest.raises(requests.HTTPError):
        client.send("a@x.com", "b@x.com", "s", "t")


def test_contact_sends_owner_notification_and_confirmation(posts):
    mailer = Mailer(MailgunClient("k", "mg.example.com"), owner_email="owner@example.com", owner_name="Sankalp Singh")
    mailer.send_contact_notification("Jo", "jo@example.com", "Website", "Can you build one?\nThanks")

    assert [p["data"]["to"] for p in posts] == ["owner@example.com", "jo@example.com"]
    owner, confirm = posts[0]["data"], posts[1]["data"]
    assert owner["subject"] == "New Contact Form Submission: Website"
    assert "Can you build one?\nThanks" in owner["text"]
    assert owner["h:Reply-To"] == "jo@example.com"
    assert confirm["subject"] == "Thank you for contacting Sankalp Singh"
    assert confirm["text"].startswith("Hi Jo,")


def test_meeting_request_emails(posts):
    mailer = Mailer(MailgunClient("k", "mg.example.com"), owner_email="owner@example.com", owner_name="Sankalp Singh")
    mailer.send_meeting_request("Jo", "jo@example.com", "Friday 3pm", "A shop site")

    owner, confirm = posts[0]["data"], posts[1]["data"]
    assert owner["subject"] == "New Meeting Request from Jo"
    assert owner["text"] == "Preferred Time: Friday 3pm\nEmail: jo@example.com\nProject: A shop site"
    assert owner["from"] == "Portfolio Assistant <noreply@mg.example.com>"
    assert "Friday 3pm" in confirm["text"]
    assert confirm["text"].endswith("- Sankalp")


def test_build_mailer_needs_full_configuration():
    partial = Settings(_env_file=None, MAILGUN_API_KEY="k", MAILGUN_DOMAIN=None, OWNER_EMAIL="o@example.com")
    assert build_mailer(partial) is None

    full = Settings(_env_file=None, MAILGUN_API_KEY="k", MAILGUN_DOMAIN="mg.example.com", OWNER_EMAIL="o@example.com")
    mailer = build_mailer(full)
    assert mailer is not None
    assert mailer.domain == "mg.example.com"
    assert mailer.owner_email == "o@example.com"
