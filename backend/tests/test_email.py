"""Outbound email: mock mode and Resend delivery failures."""

import httpx

from tahoak.config import settings
from tahoak.models.enums import MagicLinkPurpose
from tahoak.services import email_service


class _Response:
    def __init__(self, status_code):
        self.status_code = status_code

    def raise_for_status(self):
        if self.status_code >= 400:
            request = httpx.Request("POST", settings.RESEND_API_URL)
            raise httpx.HTTPStatusError("boom", request=request, response=httpx.Response(self.status_code, request=request))


def test_mock_mode_without_api_key(monkeypatch):
    monkeypatch.setattr(settings, "RESEND_API_KEY", "")

    def fail(*args, **kwargs):
        raise AssertionError("no HTTP call expected in mock mode")

    monkeypatch.setattr(httpx, "post", fail)
    assert email_service.send_email("a@example.com", "Hi", "<p>Hi</p>") is True


def test_send_posts_to_resend(monkeypatch):
    monkeypatch.setattr(settings, "RESEND_API_KEY", "re_test")
    calls = []

    def fake_post(url, headers=None, json=None, timeout=None):
        calls.append({"url": url, "headers": headers, "json": json})
        return _Response(200)

    monkeypatch.setattr(httpx, "post", fake_post)
    assert email_service.send_email("a@example.com", "Hi", "<p>Hi</p>") is True
    assert calls[0]["url"] == settings.RESEND_API_URL
    assert calls[0]["headers"]["Authorization"] == "Bearer re_test"
    assert calls[0]["json"]["to"] == ["a@example.com"]


def test_http_error_returns_false(monkeypatch):
    monkeypatch.setattr(settings, "RESEND_API_KEY", "re_test")
    monkeypatch.setattr(httpx, "post", lambda *args, **kwargs: _Response(500))
    assert email_service.send_email("a@example.com", "Hi", "<p>Hi</p>") is False


def test_network_error_returns_false(monkeypatch):
    monkeypatch.setattr(settings, "RESEND_API_KEY", "re_test")

    def boom(*args, **kwargs):
        raise httpx.ConnectError("unreachable")

    monkeypatch.setattr(httpx, "post", boom)
    assert email_service.send_email("a@example.com", "Hi", "<p>Hi</p>") is False


def test_magic_link_urls(monkeypatch):
    monkeypatch.setattr(settings, "PUBLIC_BASE_URL", "https://tahoak.example/")
    assert (
        email_service.magic_link_url("abc", MagicLinkPurpose.VERIFY_SUBSCRIPTION)
        == "https://tahoak.example/subscribe/verify?token=abc"
    )
    assert (
        email_service.magic_link_url("abc", MagicLinkPurpose.CLAIM_ENTITY, "e1")
        == "https://tahoak.example/public/claim/verify?token=abc&entity_id=e1"
    )


def test_claim_notification_escapes_html(monkeypatch):
    sent = {}

    def capture(to, subject, body_html):
        sent.update(to=to, subject=subject, body=body_html)
        return True

    monkeypatch.setattr(email_service, "send_email", capture)
    assert email_service.send_claim_notification_email("admin@example.com", "<b>Cafe</b>", "x@example.com")
    assert "&lt;b&gt;Cafe&lt;/b&gt;" in sent["body"]
