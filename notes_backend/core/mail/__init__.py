"""
Outgoing mail: message composition and transports.
"""

from .mailer import LoggingMailer, Mailer, SMTPMailer, build_mailer
from .messages import OutgoingMail, reset_password_email, verification_email, welcome_email

__all__ = [
    "LoggingMailer",
    "Mailer",
    "OutgoingMail",
    "SMTPMailer",
    "build_mailer",
    "reset_password_email",
    "verification_email",
    "welcome_email",
]
