"""Select the configured EmailProvider backend."""

from typing import Optional

from config import AppSettings
from infrastructure.email.protocol import EmailProvider
from infrastructure.email.smtp import SmtpEmailProvider
from infrastructure.email.zeptomail import ZeptoMailProvider
from infrastructure.http_client import HttpClient


def build_email_provider(
    settings: AppSettings, http_client: Optional[HttpClient] = None
) -> EmailProvider:
    common = {
        "app_name": settings.app_name,
        "frontend_url": settings.frontend_url,
        "reset_ttl_minutes": settings.lockout.password_reset_ttl_seconds // 60,
    }
    if settings.email.email_backend == "zeptomail":
        return ZeptoMailProvider(
            settings.email, http_client or HttpClient(timeout=10.0), **common
        )
    return SmtpEmailProvider(settings.email, settings.smtp, **common)
