import smtplib

import pytest

from hrdesk.config import Settings
from hrdesk.utils import email_service
from hrdesk.utils.email_service import MailError, build_message, send_email


class FakeSMTP:
    instances = []
    fail_login = False

    def __init__(self, host, port, context=None, timeout=None):
        self.host, self.port, self.timeout = host, port, timeout
        self.calls = []
        self.sent = []
        FakeSMTP.instances.append(self)

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False

    def ehlo(self):
        self.calls.append("ehlo")

    def starttls(self, context=None):
        self.calls.append("starttls")

    def login(self, user, password):
        if FakeSMTP.fail_login:
            raise smtplib.SMTPAuthenticationError(535, b"bad credentials")
        self.calls.append(("login", user, password))

    def send_message(self, msg):
        self.sent.append(msg)


@pytest.fixture
def fake_smtp(monkeypatch):
    FakeSMTP.instances = []
    FakeSMTP.fail_login = False
    monkeypatch.setattr(email_service.smtplib, "SMTP", FakeSMTP)
    monkeypatch.setattr(email_service.smtplib, "SMTP_SSL", FakeSMTP)
    return FakeSMTP


def _settings(**overrides):
    values = dict(
        database_url="sqlite://",
        email_user="hr@example.com",
        email_pass="app-password",
        from_name="HR Team",
        smtp_timeout=7,
    )
    values.update(overrides)
    return Settings(**values)


def test_starttls_is_used_on_submission_port(fake_smtp):
    assert send_email(_settings(), "ravi@example.com", "Hello", "Body text") is True

    [smtp] = fake_smtp.instances
    assert (smtp.host, smtp.port, smtp.timeout) == ("smtp.gmail.com", 587, 7)
    assert smtp.calls[:3] == ["ehlo", "starttls", "ehlo"]
    assert ("login", "hr@example.com", "app-password") in smtp.calls
    [msg] = smtp.sent
    assert msg["From"] == "HR Team <hr@example.com>"
    assert msg["To"] == "ravi@example.com"


def test_implicit_ssl_on_port_465(fake_smtp):
    send_email(_settings(smtp_port=465), "ravi@example.com", "Hello", "Body")

    [smtp] = fake_smtp.instances
    assert "starttls" not in smtp.calls


def test_pdf_attachment_is_named(tmp_path):
    pdf = tmp_path / "offer_letter_3.pdf"
    pdf.write_bytes(b"%PDF-1.4")

    msg = build_message(_settings(), "ravi@example.com", "Offer", "Body",
                        attachment_path=str(pdf), attachment_name="offer_letter.pdf")

    [part] = list(msg.iter_attachments())
    assert part.get_filename() == "offer_letter.pdf"
    assert part.get_content_type() == "application/pdf"
    assert part.get_content() == b"%PDF-1.4"


def test_missing_attachment_raises_mail_error(tmp_path):
    with pytest.raises(MailError):
        build_message(_settings(), "ravi@example.com", "Offer", "Body", attachment_path=str(tmp_path / "gone.pdf"))


def test_unconfigured_account_raises_before_connecting(fake_smtp):
    with pytest.raises(MailError, match="Email configuration is missing"):
        send_email(_settings(email_pass=None), "ravi@example.com", "Hello", "Body")

    assert fake_smtp.instances == []


def test_authentication_failure_is_wrapped(fake_smtp):
    fake_smtp.fail_login = True

    with pytest.raises(MailError, match="Authentication failed"):
        send_email(_settings(), "ravi@example.com", "Hello", "Body")


def test_message_without_attachment_is_plain_text():
    msg = build_message(_settings(), "ravi@example.com", "Hello", "Body text")

    assert msg.get_content_type() == "text/plain"
    assert msg.get_content().strip() == "Body text"
    assert msg["Reply-To"] is None
