"""
Outbound email over SMTP.

Configured from MAIL_* environment variables. When MAIL_HOST is unset the
mailer is disabled and sends are skipped (logged), which keeps local
development and tests free of SMTP.
"""

from __future__ import annotations

import logging
import smtplib
from dataclasses import dataclass
from email.message import EmailMessage
from email.utils import formataddr

from .config import env_bool, env_int, env_str

logger = logging.getLogger(__name__)


class MailerError(RuntimeError):
    pass


@dataclass(frozen=True)
class MailConfig:
    host: str
    port: int
    username: str
    password: str
    from_name: str
    from_address: str
    use_tls: bool


def mail_config() -> MailConfig | None:
    host = env_str("MAIL_HOST")
    if not host:
        return None
    username = env_str("MAIL_USERNAME")
    return MailConfig(
        host=host,
        port=env_int("MAIL_PORT", 587),
        username=username,
        password=env_str("MAIL_PASSWORD"),
        from_name=env_str("MAIL_FROM_NAME", "Realty Admin"),
        from_address=env_str("MAIL_FROM_ADDRESS", username),
        use_tls=env_bool("MAIL_USE_TLS", True),
    )


def build_message(
    config: MailConfig,
    *,
    to: str,
    subject: str,
    text: str | None = None,
    html: str | None = None,
) -> EmailMessage:
    if not text and not html:
        raise MailerError("Email needs a text or html body.")

    message = EmailMessage()
    message["From"] = formataddr((config.from_name, config.from_address))
    message["To"] = to
    message["Subject"] = subject
    message.set_content(text or "")
    if html:
        message.add_alternative(html, subtype="html")
    return message


def send_email(*, to: str, subject: str, text: str | None = None, html: str | None = None) -> bool:
    """
    Send one email synchronously. Returns False when mail is not configured.
    """
    config = mail_config()
    if config is None:
        logger.info("mail_skipped reason=not_configured to=%s subject=%s", to, subject)
        return False

    message = build_message(config, to=to, subject=subject, text=text, html=html)
    try:
        with smtplib.SMTP(config.host, config.port, timeout=30) as smtp:
            if config.use_tls:
                smtp.starttls()
            if config.username:
                smtp.login(config.username, config.password)
            smtp.send_message(message)
    except (smtplib.SMTPException, OSError) as exc:
        raise MailerError(f"Failed to send email to {to}.") from exc

    logger.info("mail_sent to=%s subject=%s", to, subject)
    return True


def send_email_background(*, to: str, subject: str, text: str | None = None, html: str | None = None) -> None:
    """
    BackgroundTasks entrypoint (fire-and-forget): failures are logged only.
    """
    try:
        send_email(to=to, subject=subject, text=text, html=html)
    except Exception:
        logger.exception("mail_failed to=%s subject=%s", to, subject)
