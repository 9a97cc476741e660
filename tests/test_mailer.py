from unittest.mock import MagicMock

import pytest

from core import mailer


@pytest.fixture
def config() -> mailer.MailConfig:
    return mailer.MailConfig(
        host="smtp.example.com",
        port=587,
        username="bot@example.com",
        password="pw",
        from_name="Realty Admin",
        from_address="bot@example.com",
        use_tls=True,
    )


def test_build_message_with_html_alternative(config):
    message = mailer.build_message(config, to="c@d.com", subject="Hi", text="plain", html="<p>rich</p>")

    assert message["From"] == "Realty Admin <bot@example.com>"
    assert message["To"] == "c@d.com"
    assert message.is_multipart()


def test_build_message_requires_a_body(config):
    with pytest.raises(mailer.MailerError):
        mailer.build_message(config, to="c@d.com", subject="Hi")


def test_send_is_skipped_without_host(monkeypatch):
    monkeypatch.delenv("MAIL_HOST", raising=False)

    assert mailer.send_email(to="c@d.com", subject="Hi", text="x") is False


def test_send_uses_smtp(monkeypatch):
    monkeypatch.setenv("MAIL_HOST", "smtp.example.com")
    monkeypatch.setenv("MAIL_USERNAME", "bot@example.com")
    smtp = MagicMock()
    monkeypatch.setattr(mailer.smtplib, "SMTP", smtp)

    assert mailer.send_email(to="c@d.com", subject="Hi", text="x") is True

    session = smtp.return_value.__enter__.return_value
    session.starttls.assert_called_once()
    session.send_message.assert_called_once()


def test_background_send_swallows_failures(monkeypatch):
    monkeypatch.setenv("MAIL_HOST", "smtp.example.com")
    monkeypatch.setattr(mailer.smtplib, "SMTP", MagicMock(side_effect=OSError("refused")))

    mailer.send_email_background(to="c@d.com", subject="Hi", text="x")
