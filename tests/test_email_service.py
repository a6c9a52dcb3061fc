import smtplib
from unittest.mock import patch

import pytest

from upi_extractor.services.email_service import API_KEY_SUBJECT, EmailService
from upi_extractor.utils.exceptions import ExternalServiceError

SMTP_PATH = "upi_extractor.services.email_service.smtplib"


def _service(**overrides):
    options = dict(
        host="smtp.example.com",
        port=465,
        username="mailer",
        password="secret",
        sender="noreply@example.com",
        use_ssl=True,
    )
    options.update(overrides)
    return EmailService(**options)


class TestEmailService:
    def test_send_api_key_over_ssl(self):
        with patch(f"{SMTP_PATH}.SMTP_SSL") as smtp_ssl:
            _service().send_api_key(name="Meera", email="meera@example.com", api_key="key_abc")

        smtp_ssl.assert_called_once_with("smtp.example.com", 465, timeout=30)
        smtp = smtp_ssl.return_value.__enter__.return_value
        smtp.login.assert_called_once_with("mailer", "secret")
        smtp.starttls.assert_not_called()

        message = smtp.send_message.call_args[0][0]
        assert message["To"] == "meera@example.com"
        assert message["From"] == "noreply@example.com"
        assert message["Subject"] == API_KEY_SUBJECT
        html = message.get_body(preferencelist=("html",)).get_content()
        assert "key_abc" in html
        assert "Welcome Meera!" in html

    def test_starttls_when_ssl_disabled(self):
        with patch(f"{SMTP_PATH}.SMTP") as smtp_plain:
            _service(port=587, use_ssl=False).send_api_key(
                name="Meera", email="meera@example.com", api_key="key_abc"
            )

        smtp = smtp_plain.return_value.__enter__.return_value
        smtp.starttls.assert_called_once()
        smtp.send_message.assert_called_once()

    def test_no_login_without_username(self):
        with patch(f"{SMTP_PATH}.SMTP_SSL") as smtp_ssl:
            _service(username="").send_api_key(name="Meera", email="meera@example.com", api_key="key_abc")

        smtp_ssl.return_value.__enter__.return_value.login.assert_not_called()

    def test_name_is_escaped_in_html(self):
        with patch(f"{SMTP_PATH}.SMTP_SSL") as smtp_ssl:
            _service().send_api_key(name="<b>Eve</b>", email="eve@example.com", api_key="key_abc")

        message = smtp_ssl.return_value.__enter__.return_value.send_message.call_args[0][0]
        html = message.get_body(preferencelist=("html",)).get_content()
        assert "<b>Eve</b>" not in html
        assert "&lt;b&gt;Eve&lt;/b&gt;" in html

    @pytest.mark.parametrize("error", [
        smtplib.SMTPAuthenticationError(535, b"bad credentials"),
        ConnectionRefusedError("connection refused"),
    ])
    def test_failures_raise_external_service_error(self, error):
        with patch(f"{SMTP_PATH}.SMTP_SSL") as smtp_ssl:
            smtp_ssl.return_value.__enter__.return_value.login.side_effect = error

            with pytest.raises(ExternalServiceError) as exc_info:
                _service().send_api_key(name="Meera", email="meera@example.com", api_key="key_abc")

        assert exc_info.value.message == "Failed to send email"
        assert exc_info.value.details["service"] == "SMTP"
