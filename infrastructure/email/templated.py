"""Template rendering shared by every EmailProvider backend.

Subclasses only implement ``_send``; subjects, bodies and recipients are
decided here so all backends send identical mail.
"""

import os
from typing import Optional

from jinja2 import Environment, FileSystemLoader, select_autoescape

from config import EmailSettings
from schemas.models.contact import ContactDoc
from shared.datetime_utils import utcnow
from shared.logging import get_logger

log = get_logger(__name__)

DEFAULT_TEMPLATE_DIR = os.path.join(
    os.path.dirname(os.path.dirname(os.path.dirname(__file__))),
    "templates",
    "emails",
)


class TemplatedEmailProvider:
    def __init__(
        self,
        settings: EmailSettings,
        app_name: str = "Portfolio",
        frontend_url: str = "http://localhost:3000",
        reset_ttl_minutes: int = 60,
        template_dir: str = DEFAULT_TEMPLATE_DIR,
    ) -> None:
        self._settings = settings
        self._app_name = app_name
        self._frontend_url = frontend_url.rstrip("/")
        self._reset_ttl_minutes = reset_ttl_minutes
        self._jinja = Environment(
            loader=FileSystemLoader(template_dir),
            autoescape=select_autoescape(["html", "xml"]),
        )

    async def _send(
        self,
        to_email: str,
        to_name: Optional[str],
        subject: str,
        html_body: str,
        text_body: Optional[str] = None,
        reply_to: Optional[str] = None,
    ) -> bool:
        raise NotImplementedError

    def _render(self, template_name: str, **context) -> str:
        template = self._jinja.get_template(template_name)
        return template.render(app_name=self._app_name, **context)

    async def send_password_reset_email(
        self, email: str, user_name: Optional[str], reset_url: str
    ) -> bool:
        subject = "Password Reset Request"
        html_body = self._render(
            "password_reset.html",
            user_name=user_name,
            reset_url=reset_url,
            expires_minutes=self._reset_ttl_minutes,
        )
        text_body = (
            f"Password Reset Request\n\n"
            f"Hello{f' {user_name}' if user_name else ''},\n\n"
            f"Reset your password here: {reset_url}\n\n"
            f"This link expires in {self._reset_ttl_minutes} minutes.\n"
            f"If you didn't request this, ignore this email."
        )
        return await self._send(email, user_name, subject, html_body, text_body)

    async def send_welcome_email(self, email: str, user_name: Optional[str]) -> bool:
        subject = "Welcome to Portfolio Admin Panel"
        html_body = self._render(
            "welcome.html",
            user_name=user_name or email,
            admin_url=f"{self._frontend_url}/admin",
        )
        text_body = (
            f"Welcome{f', {user_name}' if user_name else ''}!\n\n"
            f"Your admin account for {self._app_name} has been created.\n"
            f"Sign in: {self._frontend_url}/admin"
        )
        return await self._send(email, user_name, subject, html_body, text_body)

    async def send_contact_notification(self, contact: ContactDoc) -> bool:
        inbox = self._settings.email_admin_inbox
        if not inbox:
            log.warning("contact_notification_skipped", reason="admin_inbox_not_configured")
            return False
        subject = f"New Contact Form Submission: {contact.subject}"
        received_at = contact.created_at or utcnow()
        html_body = self._render(
            "contact_notification.html",
            name=contact.name,
            email=contact.email,
            phone=contact.phone,
            subject=contact.subject,
            message=contact.message,
            received_at=received_at.strftime("%Y-%m-%d %H:%M UTC"),
        )
        lines = [f"Name: {contact.name}", f"Email: {contact.email}"]
        if contact.phone:
            lines.append(f"Phone: {contact.phone}")
        lines.append(f"Subject: {contact.subject}")
        text_body = "New contact form submission\n\n" + "\n".join(lines)
        text_body += f"\n\n{contact.message}"
        return await self._send(
            inbox, None, subject, html_body, text_body, reply_to=contact.email
        )

    async def send_contact_confirmation(self, contact: ContactDoc) -> bool:
        subject = "Thank you for contacting me!"
        html_body = self._render(
            "contact_confirmation.html",
            name=contact.name,
            subject=contact.subject,
            message=contact.message,
        )
        text_body = (
            f"Dear {contact.name},\n\n"
            f"Thank you for reaching out. I have received your message "
            f"\"{contact.subject}\" and will get back to you soon."
        )
        return await self._send(contact.email, contact.name, subject, html_body, text_body)
