"""
Contact-form submissions and their admin workflow.
"""

from __future__ import annotations

from typing import Any, Optional

from errors import NotFoundError
from infrastructure.email.protocol import EmailProvider
from repositories.base import as_object_id
from repositories.contact_repository import ContactRepository
from schemas.dto.requests.contact import ContactRequest, ListContactsQuery
from schemas.models.contact import ContactDoc
from shared.datetime_utils import start_of_day, utcnow
from shared.logging import get_logger, hash_ip, mask_email
from shared.validators import search_regex

log = get_logger(__name__)


class ContactService:
    def __init__(self, contact_repo: ContactRepository, email_provider: EmailProvider) -> None:
        self._contacts = contact_repo
        self._email = email_provider

    async def submit(
        self,
        request: ContactRequest,
        ip_address: Optional[str],
        user_agent: Optional[str],
    ) -> ContactDoc:
        """Persist a submission, then send both emails best-effort."""
        now = utcnow()
        contact = await self._contacts.insert(
            ContactDoc(
                **request.model_dump(),
                ip_address=ip_address,
                user_agent=user_agent,
                created_at=now,
                updated_at=now,
            )
        )
        log.info(
            "contact_submitted",
            contact_id=str(contact.id),
            email_domain=mask_email(contact.email),
            ip=hash_ip(ip_address),
        )

        if not await self._email.send_contact_notification(contact):
            log.warning("contact_notification_failed", contact_id=str(contact.id))
        if not await self._email.send_contact_confirmation(contact):
            log.warning("contact_confirmation_failed", contact_id=str(contact.id))
        return contact

    async def list_contacts(self, query: ListContactsQuery) -> tuple[list[ContactDoc], int]:
        mongo_query: dict[str, Any] = {}
        if query.status:
            mongo_query["status"] = query.status
        if query.search:
            pattern = search_regex(query.search)
            mongo_query["$or"] = [
                {"name": pattern},
                {"email": pattern},
                {"subject": pattern},
            ]
        skip = (query.page - 1) * query.limit
        items = await self._contacts.find_page(mongo_query, skip=skip, limit=query.limit)
        total = await self._contacts.count(mongo_query)
        return items, total

    async def get(self, contact_id: str) -> ContactDoc:
        """Fetch a message; an unread message is marked read on first view."""
        oid = as_object_id(contact_id)
        contact = await self._contacts.find_by_id(oid) if oid else None
        if contact is None:
            raise NotFoundError("Contact not found")
        if contact.status == "unread":
            contact = await self._contacts.mark_read(oid, utcnow()) or contact
        return contact

    async def update_status(self, contact_id: str, status: str) -> ContactDoc:
        oid = as_object_id(contact_id)
        contact = await self._contacts.update_status(oid, status, utcnow()) if oid else None
        if contact is None:
            raise NotFoundError("Contact not found")
        log.info("contact_status_updated", contact_id=contact_id, status=status)
        return contact

    async def bulk_update_status(self, contact_ids: list, status: str) -> int:
        modified = await self._contacts.bulk_update_status(contact_ids, status, utcnow())
        log.info("contact_bulk_status_updated", count=modified, status=status)
        return modified

    async def delete(self, contact_id: str) -> None:
        oid = as_object_id(contact_id)
        if oid is None or not await self._contacts.delete(oid):
            raise NotFoundError("Contact not found")
        log.info("contact_deleted", contact_id=contact_id)

    async def stats(self) -> dict[str, Any]:
        by_status = await self._contacts.count_by_status()
        today = await self._contacts.count({"created_at": {"$gte": start_of_day(utcnow())}})
        return {"total": sum(by_status.values()), "today": today, "by_status": by_status}
