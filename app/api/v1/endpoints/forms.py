"""Inbound form endpoints: public submissions, admin review."""

from uuid import UUID

from fastapi import APIRouter, Response, status

from app.dependencies import AdminPrincipal, DatabaseSession
from app.schemas.common import SuccessResponse
from app.schemas.forms import (
    CallbackCreate,
    CallbackResponse,
    ContactCreate,
    ContactResponse,
    EnquiryCreate,
    EnquiryResponse,
    ParticipantCreate,
    ParticipantResponse,
    SubscriberCreate,
    SubscriberResponse,
)
from app.services.content_service import (
    callback_store,
    contact_store,
    enquiry_store,
    participant_store,
)
from app.services.subscriber_service import SubscriberService

router = APIRouter(tags=["Forms"])


# ============================================================================
# Contact
# ============================================================================


@router.post(
    "/contact",
    response_model=ContactResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Send a contact message",
)
async def submit_contact(data: ContactCreate, db: DatabaseSession):
    """Store a contact form message."""
    return await contact_store.create(db, data.model_dump())


@router.get("/contact", response_model=list[ContactResponse], summary="List contact messages (admin)")
async def list_contacts(db: DatabaseSession, admin: AdminPrincipal):
    """Contact messages, newest first."""
    return await contact_store.list_all(db)


@router.delete("/contact/{item_id}", response_model=SuccessResponse, summary="Delete a contact message (admin)")
async def delete_contact(item_id: UUID, db: DatabaseSession, admin: AdminPrincipal):
    """Delete a contact message."""
    await contact_store.delete(db, item_id)
    return SuccessResponse()


# ============================================================================
# Callbacks
# ============================================================================


@router.post(
    "/callbacks",
    response_model=CallbackResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Request a callback",
)
async def submit_callback(data: CallbackCreate, db: DatabaseSession):
    """Store a callback request."""
    return await callback_store.create(db, data.model_dump())


@router.get("/callbacks", response_model=list[CallbackResponse], summary="List callback requests (admin)")
async def list_callbacks(db: DatabaseSession, admin: AdminPrincipal):
    """Callback requests, newest first."""
    return await callback_store.list_all(db)


@router.delete(
    "/callbacks/{item_id}",
    response_model=SuccessResponse,
    summary="Delete a callback request (admin)",
)
async def delete_callback(item_id: UUID, db: DatabaseSession, admin: AdminPrincipal):
    """Delete a callback request."""
    await callback_store.delete(db, item_id)
    return SuccessResponse()


# ============================================================================
# Product enquiries
# ============================================================================


@router.post(
    "/enquiries",
    response_model=EnquiryResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Send a product enquiry",
)
async def submit_enquiry(data: EnquiryCreate, db: DatabaseSession):
    """Store a product enquiry."""
    return await enquiry_store.create(db, data.model_dump())


@router.get("/enquiries", response_model=list[EnquiryResponse], summary="List enquiries (admin)")
async def list_enquiries(db: DatabaseSession, admin: AdminPrincipal):
    """Product enquiries, newest first."""
    return await enquiry_store.list_all(db)


@router.delete("/enquiries/{item_id}", response_model=SuccessResponse, summary="Delete an enquiry (admin)")
async def delete_enquiry(item_id: UUID, db: DatabaseSession, admin: AdminPrincipal):
    """Delete an enquiry."""
    await enquiry_store.delete(db, item_id)
    return SuccessResponse()


# ============================================================================
# Lucky draw participants
# ============================================================================


@router.post(
    "/participants",
    response_model=ParticipantResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Enter the lucky draw",
)
async def submit_participant(data: ParticipantCreate, db: DatabaseSession):
    """Register a farmer or subscriber for the lucky draw."""
    return await participant_store.create(db, data.model_dump(mode="json"))


@router.get("/participants", response_model=list[ParticipantResponse], summary="List participants (admin)")
async def list_participants(db: DatabaseSession, admin: AdminPrincipal):
    """Lucky draw participants, newest first."""
    return await participant_store.list_all(db)


@router.delete(
    "/participants/{item_id}",
    response_model=SuccessResponse,
    summary="Delete a participant (admin)",
)
async def delete_participant(item_id: UUID, db: DatabaseSession, admin: AdminPrincipal):
    """Delete a participant."""
    await participant_store.delete(db, item_id)
    return SuccessResponse()


# ============================================================================
# Newsletter
# ============================================================================


@router.post(
    "/subscribers",
    response_model=SubscriberResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Subscribe to the newsletter",
)
async def subscribe(data: SubscriberCreate, db: DatabaseSession, response: Response):
    """
    Subscribe an email address.

    Subscribing again is not an error: the address keeps one record and the
    new sign-up source is added to it (200 instead of 201).
    """
    subscriber, created = await SubscriberService(db).subscribe(data)
    if not created:
        response.status_code = status.HTTP_200_OK
    return subscriber


@router.get("/subscribers", response_model=list[SubscriberResponse], summary="List subscribers (admin)")
async def list_subscribers(db: DatabaseSession, admin: AdminPrincipal):
    """Newsletter subscribers, newest first."""
    return await SubscriberService(db).list_subscribers()


@router.delete(
    "/subscribers/{subscriber_id}",
    response_model=SuccessResponse,
    summary="Remove a subscriber (admin)",
)
async def delete_subscriber(subscriber_id: UUID, db: DatabaseSession, admin: AdminPrincipal):
    """Remove a newsletter subscriber."""
    await SubscriberService(db).delete_subscriber(subscriber_id)
    return SuccessResponse()
