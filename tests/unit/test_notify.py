import pytest
import requests

from investment_tracker.errors import NotificationError
from investment_tracker.notify import MailgunNotifier


class FakeResponse:
    def __init__(self, status_code=200, text='{"message": "Queued. Thank you."}'):
        self.status_code = status_code
        self.text = text

    @property
    def ok(self):
        return self.status_code < 400


class FakeSession:
    def __init__(self, response=None, error=None):
        self.response = response or FakeResponse()
        self.error = error
        self.posts = []

    def post(self, url, auth=None, data=None, timeout=None):
        self.posts.append({"url": url, "auth": auth, "data": data})
        if self.error is not None:
            raise self.error
        return self.response


def _notifier(session, clock):
    return MailgunNotifier(
        domain="mg.example.com",
        api_key="key-123",
        sender="investment@mg.example.com",
        recipients=["me@example.com", "you@example.com"],
        session=session,
        clock=clock,
    )


def test_send_posts_report_to_mailgun(clock):
    session = FakeSession()

    _notifier(session, clock).send("===VTI 100.00 03-Jan-23 ===\n")

    (post,) = session.posts
    assert post["url"] == "https://api.mailgun.net/v3/mg.example.com/messages"
    assert post["auth"] == ("api", "key-123")
    assert post["data"]["subject"] == "Investment Report - 15-Mar-24"
    assert post["data"]["to"] == ["me@example.com", "you@example.com"]
    assert post["data"]["text"] == "===VTI 100.00 03-Jan-23 ===\n"


def test_rejected_message_raises_with_status(clock):
    session = FakeSession(FakeResponse(status_code=401, text="Forbidden"))

    with pytest.raises(NotificationError) as excinfo:
        _notifier(session, clock).send("report")

    assert excinfo.value.status_code == 401


def test_transport_error_raises_notification_error(clock):
    session = FakeSession(error=requests.Timeout("slow"))

    with pytest.raises(NotificationError):
        _notifier(session, clock).send("report")
