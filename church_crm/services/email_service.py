"""Email service for password reset links (SMTP with STARTTLS)."""

import logging
import smtplib
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from email.utils import formataddr
from typing import Optional

from church_crm.config import settings

logger = logging.getLogger(__name__)


class EmailService:
    """Email service sending through a single SMTP relay."""

    def __init__(
        self,
        from_email: Optional[str] = None,
        from_name: str = "Church CRM",
        smtp_host: Optional[str] = None,
        smtp_port: int = 587,
        smtp_username: Optional[str] = None,
        smtp_password: Optional[str] = None,
    ):
        self.from_email = from_email
        self.from_name = from_name
        self.smtp_host = smtp_host
        self.smtp_port = smtp_port
        self.smtp_username = smtp_username
        self.smtp_password = smtp_password

    @property
    def is_configured(self) -> bool:
        return bool(self.smtp_host and self.from_email)

    def send_email(
        self,
        to_email: str,
        subject: str,
        plain_content: str,
        html_content: str,
    ) -> dict:
        """Send an email. Never raises; the result reports what happened."""
        if not self.is_configured:
            return {"sent": False, "error": "SMTP is not configured"}

        msg = MIMEMultipart("alternative")
        msg["Subject"] = subject
        msg["From"] = formataddr((self.from_name, self.from_email))
        msg["To"] = to_email

        msg.attach(MIMEText(plain_content, "plain"))
        msg.attach(MIMEText(html_content, "html"))

        try:
            with smtplib.SMTP(self.smtp_host, self.smtp_port) as server:
                server.starttls()
                if self.smtp_username and self.smtp_password:
                    server.login(self.smtp_username, self.smtp_password)
                server.sendmail(self.from_email, [to_email], msg.as_string())
            logger.info(f"Email sent via SMTP to {to_email}")
            return {"sent": True}
        except Exception as exc:
            logger.error(f"SMTP email error: {exc}")
            return {"sent": False, "error": str(exc)}

    def send_password_reset(self, to_email: str, reset_link: str, expires_minutes: int) -> dict:
        """Send a password reset email."""
        subject = "Reset your Church CRM password"

        plain_content = f"""A password reset was requested for your account.

Use the link below to choose a new password:
{reset_link}

This link expires in {expires_minutes} minutes and can only be used once.

If you didn't request a reset, you can safely ignore this email."""

        html_content = f"""
<!DOCTYPE html>
<html>
<head><meta charset="utf-8"></head>
<body style="font-family: Arial, sans-serif; line-height: 1.6; color: #333; max-width: 600px; margin: 0 auto; padding: 20px;">
    <p>A password reset was requested for your account.</p>
    <p style="text-align: center; margin: 30px 0;">
        <a href="{reset_link}" style="background: #2563eb; color: white; text-decoration: none; padding: 12px 32px; border-radius: 8px;">Reset password</a>
    </p>
    <p style="font-size: 14px; color: #6b7280;">
        This link expires in {expires_minutes} minutes and can only be used once.
        If you didn't request a reset, you can safely ignore this email.
    </p>
</body>
</html>"""

        return self.send_email(to_email, subject, plain_content, html_content)


# Singleton instance (initialized lazily)
_email_service: Optional[EmailService] = None


def get_email_service() -> EmailService:
    """Get or create the email service singleton."""
    global _email_service

    if _email_service is None:
        _email_service = EmailService(
            from_email=settings.email_from,
            from_name=settings.email_from_name,
            smtp_host=settings.smtp_host,
            smtp_port=settings.smtp_port,
            smtp_username=settings.smtp_username,
            smtp_password=settings.smtp_password,
        )

    return _email_service
