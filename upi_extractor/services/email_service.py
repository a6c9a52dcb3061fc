"""
SMTP email delivery for API key notifications.
"""
import html
import logging
import smtplib
from email.message import EmailMessage
from typing import Optional

from upi_extractor.core.config import settings
from upi_extractor.utils.exceptions import ExternalServiceError

logger = logging.getLogger(__name__)

API_KEY_SUBJECT = "Your API Key"

API_KEY_TEMPLATE = """
<h1>Welcome {name}!</h1>
<p>Your API key has been generated:</p>
<p><strong>{api_key}</strong></p>
<p>Please keep this key secure and do not share it with others.</p>
"""

API_KEY_TEXT_TEMPLATE = (
    "Welcome {name}!\n\n"
    "Your API key has been generated: {api_key}\n\n"
    "Please keep this key secure and do not share it with others.\n"
)


class EmailService:

    def __init__(
        self,
        host: Optional[str] = None,
        port: Optional[int] = None,
        username: Optional[str] = None,
        password: Optional[str] = None,
        sender: Optional[str] = None,
        use_ssl: Optional[bool] = None,
        timeout: float = 30
    ):
        self.host = host or settings.SMTP_HOST
        self.port = port or settings.SMTP_PORT
        self.username = username if username is not None else settings.SMTP_USER
        self.password = password if password is not None else settings.SMTP_PASSWORD
        self.sender = sender or settings.SMTP_FROM
        self.use_ssl = settings.SMTP_USE_SSL if use_ssl is None else use_ssl
        self.timeout = timeout

    def build_message(self, to: str, subject: str, html_body: str, text_body: str) -> EmailMessage:
        message = EmailMessage()
        message["From"] = self.sender
        message["To"] = to
        message["Subject"] = subject
        message.set_content(text_body)
        message.add_alternative(html_body, subtype="html")
        return message

    def send_email(self, to: str, subject: str, html_body: str, text_body: str) -> None:
        message = self.build_message(to, subject, html_body, text_body)
        try:
            if self.use_ssl:
                smtp = smtplib.SMTP_SSL(self.host, self.port, timeout=self.timeout)
            else:
                smtp = smtplib.SMTP(self.host, self.port, timeout=self.timeout)

            with smtp:
                if not self.use_ssl:
                    smtp.starttls()
                if self.username:
                    smtp.login(self.username, self.password or "")
                smtp.send_message(message)
        except (smtplib.SMTPException, OSError) as e:
            logger.error(f"Failed to send email to {to}: {e}")
            raise ExternalServiceError("SMTP", "Failed to send email", details={"recipient": to}) from e

        logger.info(f"Email '{subject}' sent to {to}")

    def send_api_key(self, name: str, email: str, api_key: str) -> None:
        """Deliver a newly generated API key to its owner."""
        safe_name = html.escape(name)
        self.send_email(
            to=email,
            subject=API_KEY_SUBJECT,
            html_body=API_KEY_TEMPLATE.format(name=safe_name, api_key=api_key),
            text_body=API_KEY_TEXT_TEMPLATE.format(name=name, api_key=api_key),
        )


def get_email_service() -> EmailService:
    return EmailService()
