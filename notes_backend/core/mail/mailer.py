"""
Mail transports.

``LoggingMailer`` writes every message to the log and is the development
default. ``SMTPMailer`` delivers through an SMTP server; the blocking
``smtplib`` session runs in the thread pool so the event loop keeps serving
requests.
"""

from __future__ import annotations

import logging
import smtplib
from email.message import EmailMessage
from email.utils import formataddr
from typing import Protocol, runtime_checkable

from starlette.concurrency import run_in_threadpool

from notes_backend.server.core.config import MailConfig

from .messages import OutgoingMail

logger = logging.getLogger(__name__)


@runtime_checkable
class Mailer(Protocol):
    """Anything that can deliver an ``OutgoingMail``."""

    async def send(self, mail: OutgoingMail) -> None: ...


class LoggingMailer:
    """Transport that logs messages instead of sending them."""

    def __init__(self, sender: str = "no-reply@notes.local") -> None:
        self.sender = sender

    async def send(self, mail: OutgoingMail) -> None:
        logger.info(f"Mail to={mail.to} from={self.sender} subject={mail.subject!r}\n{mail.text_body}")


class SMTPMailer:
    """Transport that delivers messages through an SMTP server."""

    def __init__(self, config: MailConfig) -> None:
        self.config = config

    def build_message(self, mail: OutgoingMail) -> EmailMessage:
        message = EmailMessage()
        message["Subject"] = mail.subject
        message["From"] = formataddr((self.config.from_name, self.config.from_address))
        message["To"] = mail.to
        message.set_content(mail.text_body)
        message.add_alternative(mail.html_body, subtype="html")
        return message

    def _deliver(self, message: EmailMessage) -> None:
        with smtplib.SMTP(self.config.smtp_host, self.config.smtp_port, timeout=self.config.smtp_timeout) as smtp:
            if self.config.smtp_starttls:
                smtp.starttls()
            if self.config.smtp_username:
                smtp.login(self.config.smtp_username, self.config.smtp_password or "")
            smtp.send_message(message)

    async def send(self, mail: OutgoingMail) -> None:
        message = self.build_message(mail)
        await run_in_threadpool(self._deliver, message)
        logger.info(f"Mail sent to {mail.to}: {mail.subject!r}")


def build_mailer(config: MailConfig) -> Mailer:
    """Select the transport named by ``config.backend``."""
    if config.backend == "smtp":
        logger.info(f"Using SMTP mailer: {config.smtp_host}:{config.smtp_port}")
        return SMTPMailer(config)
    logger.info("Using logging mailer; outgoing mail is written to the log")
    return LoggingMailer(sender=config.from_address)
