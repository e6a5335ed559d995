"""
Contact form.

POST /api/contact                — public (strict rate limit), 201
GET  /api/contact                — admin: paginated list with filters
GET  /api/contact/stats          — admin
PUT  /api/contact/bulk/status    — admin
GET  /api/contact/{contact_id}   — admin (marks unread as read)
PUT  /api/contact/{contact_id}/status — admin
DELETE /api/contact/{contact_id} — admin
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Request, status

from dependencies import get_contact_service, rate_limit, require_admin
from schemas.dto.requests.contact import (
    BulkContactStatusRequest,
    ContactRequest,
    ContactStatusRequest,
    ListContactsQuery,
)
from schemas.dto.responses.common import MessageResponse, PaginationMeta
from schemas.dto.responses.contact import (
    BulkStatusResponse,
    ContactCreatedResponse,
    ContactListResponse,
    ContactResponse,
    ContactStatsResponse,
)
from services.contact_service import ContactService
from shared.ip_utils import get_client_ip

router = APIRouter(
    prefix="/api/contact",
    tags=["contact"],
    dependencies=[Depends(rate_limit("api"))],
)


@router.post(
    "",
    response_model=ContactCreatedResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(rate_limit("contact", "contact_rate_limit"))],
)
async def submit_contact(
    body: ContactRequest,
    request: Request,
    contact_service: ContactService = Depends(get_contact_service),
) -> ContactCreatedResponse:
    contact = await contact_service.submit(
        body,
        ip_address=get_client_ip(request) or None,
        user_agent=request.headers.get("User-Agent"),
    )
    return ContactCreatedResponse(
        message="Thank you for your message! I will get back to you soon.",
        id=str(contact.id),
        name=contact.name,
        email=contact.email,
        subject=contact.subject,
        created_at=contact.created_at,
    )


@router.get("", response_model=ContactListResponse, dependencies=[Depends(require_admin)])
async def list_contacts(
    query: ListContactsQuery = Depends(),
    contact_service: ContactService = Depends(get_contact_service),
) -> ContactListResponse:
    items, total = await contact_service.list_contacts(query)
    return ContactListResponse(
        items=[ContactResponse.from_doc(c) for c in items],
        pagination=PaginationMeta.build(query.page, query.limit, total),
    )


@router.get(
    "/stats", response_model=ContactStatsResponse, dependencies=[Depends(require_admin)]
)
async def contact_stats(
    contact_service: ContactService = Depends(get_contact_service),
) -> ContactStatsResponse:
    return ContactStatsResponse(**await contact_service.stats())


@router.put(
    "/bulk/status", response_model=BulkStatusResponse, dependencies=[Depends(require_admin)]
)
async def bulk_update_status(
    body: BulkContactStatusRequest,
    contact_service: ContactService = Depends(get_contact_service),
) -> BulkStatusResponse:
    modified = await contact_service.bulk_update_status(body.ids, body.status)
    return BulkStatusResponse(
        message=f"Updated {modified} contacts to {body.status}", modified_count=modified
    )


@router.get(
    "/{contact_id}", response_model=ContactResponse, dependencies=[Depends(require_admin)]
)
async def get_contact(
    contact_id: str,
    contact_service: ContactService = Depends(get_contact_service),
) -> ContactResponse:
    return ContactResponse.from_doc(await contact_service.get(contact_id))


@router.put(
    "/{contact_id}/status",
    response_model=ContactResponse,
    dependencies=[Depends(require_admin)],
)
async def update_contact_status(
    contact_id: str,
    body: ContactStatusRequest,
    contact_service: ContactService = Depends(get_contact_service),
) -> ContactResponse:
    return ContactResponse.from_doc(
        await contact_service.update_status(contact_id, body.status)
    )


@router.delete(
    "/{contact_id}", response_model=MessageResponse, dependencies=[Depends(require_admin)]
)
async def delete_contact(
    contact_id: str,
    contact_service: ContactService = Depends(get_contact_service),
) -> MessageResponse:
    await contact_service.delete(contact_id)
    return MessageResponse(success=True, message="Contact deleted successfully")
