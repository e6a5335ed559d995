"""EmailProvider protocol. Services depend on this, not the concrete implementation."""

from typing import Optional, Protocol

from schemas.models.contact import ContactDoc


class EmailProvider(Protocol):
    async def send_password_reset_email(
        self, email: str, user_name: Optional[str], reset_url: str
    ) -> bool: ...

    async def send_welcome_email(self, email: str, user_name: Optional[str]) -> bool: ...

    async def send_contact_notification(self, contact: ContactDoc) -> bool: ...

    async def send_contact_confirmation(self, contact: ContactDoc) -> bool: ...
