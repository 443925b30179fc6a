"""
Mail message composition.

Each composer returns an ``OutgoingMail`` with an HTML body and a plain text
alternative. User-supplied values are HTML-escaped before they are placed in
the HTML body.
"""

from __future__ import annotations

from dataclasses import dataclass
from html import escape


@dataclass(frozen=True)
class OutgoingMail:
    """A composed message ready for a transport."""

    to: str
    subject: str
    html_body: str
    text_body: str


_LAYOUT = """<!DOCTYPE html>
<html>
  <body style="font-family: Arial, sans-serif; color: #333;">
    <div style="max-width: 600px; margin: 0 auto; padding: 20px;">
      {content}
      <p>Best regards,<br>The Notes Team</p>
    </div>
  </body>
</html>
"""


def _button(url: str, label: str) -> str:
    return (
        f'<p><a href="{escape(url)}" style="display: inline-block; padding: 10px 20px; '
        f'background: #2563eb; color: #fff; text-decoration: none; border-radius: 4px;">{label}</a></p>'
    )


def verification_email(to: str, name: str, verify_url: str, expires_in: str = "24 hours") -> OutgoingMail:
    """Compose the mail asking a new user to confirm their address."""
    html = _LAYOUT.format(
        content=(
            f"<h2>Welcome, {escape(name)}!</h2>"
            "<p>Thanks for signing up. Please confirm your e-mail address to activate your account.</p>"
            f"{_button(verify_url, 'Verify e-mail')}"
            f"<p>This link expires in {expires_in}. If you did not create an account, ignore this mail.</p>"
        )
    )
    text = (
        f"Welcome, {name}!\n\n"
        "Thanks for signing up. Please confirm your e-mail address by opening the link below:\n\n"
        f"{verify_url}\n\n"
        f"This link expires in {expires_in}. If you did not create an account, ignore this mail.\n"
    )
    return OutgoingMail(to=to, subject="Email Verification", html_body=html, text_body=text)


def welcome_email(to: str, name: str) -> OutgoingMail:
    """Compose the mail sent once an address is verified."""
    html = _LAYOUT.format(
        content=(
            f"<h2>Hello, {escape(name)}!</h2>"
            "<p>Your e-mail address is verified and your account is ready to use.</p>"
        )
    )
    text = f"Hello, {name}!\n\nYour e-mail address is verified and your account is ready to use.\n"
    return OutgoingMail(to=to, subject="Welcome to Notes", html_body=html, text_body=text)


def reset_password_email(to: str, name: str, reset_url: str, expires_in: str = "30 minutes") -> OutgoingMail:
    """Compose the password reset mail."""
    html = _LAYOUT.format(
        content=(
            f"<h2>Hello, {escape(name)}</h2>"
            "<p>We received a request to reset your password.</p>"
            f"{_button(reset_url, 'Reset password')}"
            f"<p>This link expires in {expires_in}. If you did not ask for a reset, ignore this mail.</p>"
        )
    )
    text = (
        f"Hello, {name}\n\n"
        "We received a request to reset your password. Open the link below to choose a new one:\n\n"
        f"{reset_url}\n\n"
        f"This link expires in {expires_in}. If you did not ask for a reset, ignore this mail.\n"
    )
    return OutgoingMail(to=to, subject="Reset your Password", html_body=html, text_body=text)
