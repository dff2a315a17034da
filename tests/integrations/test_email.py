"""Tests for newsletter email providers."""

import json
from unittest.mock import patch

from presswire.brands import Brand
from presswire.content.models import EmailProviderName, NewsletterSettings
from presswire.integrations.email import (
    RESEND_URL,
    SENDGRID_URL,
    EmailMessage,
    ResendProvider,
    SendGridProvider,
    SimulatedProvider,
    create_email_provider,
)
from presswire.integrations.http import HttpResponse

_MESSAGE = EmailMessage(
    to="fan@example.com",
    subject="New drop",
    html="<p>hi</p>",
    from_email="news@saucewire.com",
    from_name="SauceWire",
    reply_to="editors@saucewire.com",
)


class TestFactory:
    def test_resend_with_key(self):
        settings = NewsletterSettings(brand=Brand.SAUCEWIRE, api_key="re_123")
        assert isinstance(create_email_provider(settings), ResendProvider)

    def test_sendgrid_with_key(self):
        settings = NewsletterSettings(
            brand=Brand.SAUCEWIRE, provider=EmailProviderName.SENDGRID, api_key="SG.x"
        )
        assert isinstance(create_email_provider(settings), SendGridProvider)

    def test_no_key_simulates(self):
        settings = NewsletterSettings(brand=Brand.SAUCEWIRE)
        assert isinstance(create_email_provider(settings), SimulatedProvider)

    def test_none_provider_simulates(self):
        settings = NewsletterSettings(
            brand=Brand.SAUCEWIRE, provider=EmailProviderName.NONE, api_key="ignored"
        )
        assert isinstance(create_email_provider(settings), SimulatedProvider)


class TestProviders:
    def test_resend_payload(self):
        with patch(
            "presswire.integrations.email.post_json", return_value=HttpResponse(status=200)
        ) as mock_post:
            assert ResendProvider("re_123").send(_MESSAGE) is True

        url, payload = mock_post.call_args[0]
        assert url == RESEND_URL
        assert payload["from"] == "SauceWire <news@saucewire.com>"
        assert payload["to"] == ["fan@example.com"]
        assert payload["reply_to"] == "editors@saucewire.com"
        assert mock_post.call_args.kwargs["headers"]["Authorization"] == "Bearer re_123"

    def test_resend_rejection_is_false(self):
        with patch(
            "presswire.integrations.email.post_json",
            return_value=HttpResponse(status=422, body=b"invalid"),
        ):
            assert ResendProvider("re_123").send(_MESSAGE) is False

    def test_sendgrid_payload_and_202(self):
        with patch(
            "presswire.integrations.email.post_json", return_value=HttpResponse(status=202)
        ) as mock_post:
            assert SendGridProvider("SG.x").send(_MESSAGE) is True

        url, payload = mock_post.call_args[0]
        assert url == SENDGRID_URL
        assert payload["personalizations"] == [{"to": [{"email": "fan@example.com"}]}]
        assert json.loads(json.dumps(payload))["from"]["name"] == "SauceWire"

    def test_simulated_always_delivers(self):
        with patch("presswire.integrations.email.post_json") as mock_post:
            assert SimulatedProvider().send(_MESSAGE) is True
        mock_post.assert_not_called()
