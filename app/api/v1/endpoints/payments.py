"""Payment proof endpoints."""

from uuid import UUID

from fastapi import APIRouter, File, Form, UploadFile, status

from app.core.exceptions import BadRequestException
from app.core.media import read_upload
from app.dependencies import (
    AdminOrStaffPrincipal,
    AdminPrincipal,
    DatabaseSession,
    MediaUploaderDep,
)
from app.schemas.common import SuccessResponse
from app.schemas.payments import PaymentCreate, PaymentMethod, PaymentResponse, PaymentStatus
from app.services.payment_service import PaymentService

router = APIRouter(prefix="/payments", tags=["Payments"])


@router.post(
    "",
    response_model=PaymentResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Upload a payment proof",
)
async def submit_payment(
    db: DatabaseSession,
    uploader: MediaUploaderDep,
    order_number: str = Form(..., min_length=1, max_length=64),
    customer_name: str | None = Form(None, max_length=200),
    customer_phone: str | None = Form(None, max_length=20),
    amount: float | None = Form(None, ge=0),
    method: PaymentMethod = Form(PaymentMethod.UNKNOWN),
    proof: UploadFile | None = File(None),
):
    """
    Upload a payment screenshot for an order. No login required.

    The order is hidden from the staff board until the proof is approved.

    Raises:
        BadRequestException: If no proof file was sent
        MediaUploadException: If the media host fails
    """
    if proof is None or not proof.filename:
        raise BadRequestException("No proof uploaded")

    content = await read_upload(proof)
    proof_url = await uploader.upload(content, proof.filename, proof.content_type)

    data = PaymentCreate(
        order_number=order_number,
        customer_name=customer_name,
        customer_phone=customer_phone,
        amount=amount,
        method=method,
    )
    return await PaymentService(db).submit(data, proof_url)


@router.get("", response_model=list[PaymentResponse], summary="List payment proofs")
async def list_payments(db: DatabaseSession, principal: AdminOrStaffPrincipal):
    """Payment proofs, newest first."""
    return await PaymentService(db).list_payments()


@router.patch("/{payment_id}/approve", response_model=PaymentResponse, summary="Approve a payment (admin)")
async def approve_payment(payment_id: UUID, db: DatabaseSession, admin: AdminPrincipal):
    """Approve a payment proof, releasing the order to staff."""
    return await PaymentService(db).set_status(payment_id, PaymentStatus.APPROVED)


@router.patch("/{payment_id}/reject", response_model=PaymentResponse, summary="Reject a payment (admin)")
async def reject_payment(payment_id: UUID, db: DatabaseSession, admin: AdminPrincipal):
    """Reject a payment proof."""
    return await PaymentService(db).set_status(payment_id, PaymentStatus.REJECTED)


@router.delete("/{payment_id}", response_model=SuccessResponse, summary="Delete a payment (admin)")
async def delete_payment(payment_id: UUID, db: DatabaseSession, admin: AdminPrincipal):
    """Delete a payment proof record."""
    await PaymentService(db).delete_payment(payment_id)
    return SuccessResponse()
