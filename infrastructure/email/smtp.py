"""SMTP implementation of EmailProvider.

smtplib is blocking, so delivery runs in a worker thread.
"""

import asyncio
import smtplib
from email.message import EmailMessage
from email.utils import formataddr
from typing import Optional

from config import EmailSettings, SmtpSettings
from infrastructure.email.templated import DEFAULT_TEMPLATE_DIR, TemplatedEmailProvider
from shared.logging import get_logger, mask_email

log = get_logger(__name__)


class SmtpEmailProvider(TemplatedEmailProvider):
    def __init__(
        self,
        settings: EmailSettings,
        smtp_settings: SmtpSettings,
        app_name: str = "Portfolio",
        frontend_url: str = "http://localhost:3000",
        reset_ttl_minutes: int = 60,
        template_dir: str = DEFAULT_TEMPLATE_DIR,
    ) -> None:
        super().__init__(
            settings,
            app_name=app_name,
            frontend_url=frontend_url,
            reset_ttl_minutes=reset_ttl_minutes,
            template_dir=template_dir,
        )
        self._smtp = smtp_settings

    def _build_message(
        self,
        to_email: str,
        to_name: Optional[str],
        subject: str,
        html_body: str,
        text_body: Optional[str],
        reply_to: Optional[str],
    ) -> EmailMessage:
        msg = EmailMessage()
        msg["From"] = formataddr((self._settings.email_from_name, self._settings.email_from))
        msg["To"] = formataddr((to_name, to_email)) if to_name else to_email
        msg["Subject"] = subject
        if reply_to:
            msg["Reply-To"] = reply_to
        msg.set_content(text_body or "")
        msg.add_alternative(html_body, subtype="html")
        return msg

    def _deliver(self, msg: EmailMessage) -> None:
        cfg = self._smtp
        if cfg.use_ssl:
            server: smtplib.SMTP = smtplib.SMTP_SSL(
                cfg.smtp_host, cfg.smtp_port, timeout=cfg.smtp_timeout_seconds
            )
        else:
            server = smtplib.SMTP(
                cfg.smtp_host, cfg.smtp_port, timeout=cfg.smtp_timeout_seconds
            )
        with server:
            if not cfg.use_ssl:
                server.ehlo()
                if server.has_extn("starttls"):
                    server.starttls()
                    server.ehlo()
            if cfg.smtp_user:
                server.login(cfg.smtp_user, cfg.smtp_password)
            server.send_message(msg)

    async def _send(
        self,
        to_email: str,
        to_name: Optional[str],
        subject: str,
        html_body: str,
        text_body: Optional[str] = None,
        reply_to: Optional[str] = None,
    ) -> bool:
        msg = self._build_message(to_email, to_name, subject, html_body, text_body, reply_to)
        try:
            await asyncio.to_thread(self._deliver, msg)
        except (smtplib.SMTPException, OSError) as e:
            log.error(
                "email_send_error",
                email_domain=mask_email(to_email),
                subject=subject,
                error=str(e),
                error_type=type(e).__name__,
            )
            return False
        log.info("email_sent", email_domain=mask_email(to_email), subject=subject)
        return True
