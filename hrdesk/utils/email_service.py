# hrdesk/utils/email_service.py
import os
import smtplib
import ssl
import logging
from email.message import EmailMessage
from typing import Optional

from hrdesk.config import Settings

log = logging.getLogger(__name__)


class MailError(RuntimeError):
    pass


# Helper to format From header
def _format_from(from_email: str, from_name: str = ""):
    if from_name:
        return f"{from_name} <{from_email}>"
    return from_email


def build_message(settings: Settings,
                  to_email: str,
                  subject: str,
                  body: str,
                  attachment_path: Optional[str] = None,
                  attachment_name: Optional[str] = None) -> EmailMessage:
    msg = EmailMessage()
    msg["From"] = _format_from(settings.email_user, settings.from_name)
    msg["To"] = to_email
    msg["Subject"] = subject

    # plain text body
    msg.set_content(body)

    # Attachment handling (assumes PDF if provided)
    if attachment_path:
        try:
            with open(attachment_path, "rb") as f:
                msg.add_attachment(
                    f.read(),
                    maintype="application",
                    subtype="pdf",
                    filename=attachment_name or os.path.basename(attachment_path),
                )
        except OSError as e:
            raise MailError(f"Attachment error: {e}") from e

    return msg


def send_email(settings: Settings,
               to_email: str,
               subject: str,
               body: str,
               attachment_path: Optional[str] = None,
               attachment_name: Optional[str] = None):
    """
    Send an email through the configured SMTP account.
    Returns True on success, raises MailError on failure.
    """
    if not settings.mail_configured:
        raise MailError("Email configuration is missing")

    msg = build_message(settings, to_email, subject, body,
                        attachment_path=attachment_path,
                        attachment_name=attachment_name)

    context = ssl.create_default_context()
    host, port, timeout = settings.smtp_host, settings.smtp_port, settings.smtp_timeout

    try:
        # If port 465 use implicit SSL
        if port == 465:
            with smtplib.SMTP_SSL(host, port, context=context, timeout=timeout) as smtp:
                smtp.login(settings.email_user, settings.email_pass)
                smtp.send_message(msg)
        else:
            with smtplib.SMTP(host, port, timeout=timeout) as smtp:
                smtp.ehlo()
                smtp.starttls(context=context)
                smtp.ehlo()
                smtp.login(settings.email_user, settings.email_pass)
                smtp.send_message(msg)

        log.info("Email sent to %s (subject: %s)", to_email, subject)
        return True

    except smtplib.SMTPAuthenticationError as e:
        log.exception("SMTP Authentication failed")
        raise MailError("SMTP Authentication failed. Check EMAIL_USER or EMAIL_PASS (use an app password).") from e
    except (smtplib.SMTPException, OSError) as e:
        log.exception("Email sending failed")
        raise MailError(f"Email sending failed: {e}") from e
