"""ZeptoMail implementation of EmailProvider (transactional HTTP API via httpx)."""

from typing import Optional

from config import EmailSettings
from infrastructure.email.templated import DEFAULT_TEMPLATE_DIR, TemplatedEmailProvider
from infrastructure.http_client import HttpClient
from shared.logging import get_logger, mask_email

log = get_logger(__name__)

_ZEPTO_API_URL = "https://api.zeptomail.in/v1.1/email"


class ZeptoMailProvider(TemplatedEmailProvider):
    def __init__(
        self,
        settings: EmailSettings,
        http_client: HttpClient,
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
        self._http = http_client

    async def _send(
        self,
        to_email: str,
        to_name: Optional[str],
        subject: str,
        html_body: str,
        text_body: Optional[str] = None,
        reply_to: Optional[str] = None,
    ) -> bool:
        if not self._settings.zepto_api_token:
            log.error("zepto_mail_send_failed", reason="token_not_configured")
            return False

        payload: dict = {
            "from": {
                "address": self._settings.email_from,
                "name": self._settings.email_from_name,
            },
            "to": [
                {
                    "email_address": {
                        "address": to_email,
                        "name": to_name or to_email,
                    }
                }
            ],
            "subject": subject,
            "htmlbody": html_body,
        }
        if text_body:
            payload["textbody"] = text_body
        if reply_to:
            payload["reply_to"] = [{"address": reply_to}]

        token = self._settings.zepto_api_token
        if not token.startswith("Zoho-enczapikey "):
            token = f"Zoho-enczapikey {token}"

        headers = {"Authorization": token, "Content-Type": "application/json"}

        try:
            response = await self._http.post(
                _ZEPTO_API_URL, json=payload, headers=headers
            )
        except Exception as e:
            log.error(
                "email_send_error",
                email_domain=mask_email(to_email),
                subject=subject,
                error=str(e),
                error_type=type(e).__name__,
            )
            return False

        if response.status_code in (200, 201, 202):
            log.info("email_sent", email_domain=mask_email(to_email), subject=subject)
            return True
        log.error(
            "email_send_failed",
            email_domain=mask_email(to_email),
            subject=subject,
            status_code=response.status_code,
            response=response.text[:200],
        )
        return False
