from datetime import date
from typing import Optional
from fastapi import APIRouter, Depends, status, Query
from sqlalchemy.orm import Session

from rentalms.core.mailer import ReceiptMailer
from rentalms.database import get_db
from rentalms.dependencies import get_as_of, get_mailer
from rentalms.models.payment import PaymentStatus
from rentalms.services.payment_service import PaymentService
from rentalms.schemas.payment_schemas import (
    PaymentCreate,
    PaymentUpdate,
    PaymentCreateResponse,
    PaymentWithRelationsResponse,
    PaymentListResponse,
    UpcomingPaymentsResponse,
)

router = APIRouter()


@router.post("/", response_model=PaymentCreateResponse, status_code=status.HTTP_201_CREATED)
def create_payment(
    payment_data: PaymentCreate,
    db: Session = Depends(get_db),
    mailer: ReceiptMailer = Depends(get_mailer),
):
    """
    Record a rent payment.

    - Period is derived from the tenant's last payment (or lease start) and months_covered
    - Emails a receipt to the tenant
    - If the email fails the payment is still recorded: receipt_sent is false
      and email_error explains why
    - Returns 404 if the tenant or unit doesn't exist
    """
    service = PaymentService(db, mailer)
    result = service.record_payment(payment_data)

    response = PaymentCreateResponse.model_validate(result.payment)
    response.receipt_sent = result.receipt_sent
    response.email_error = result.email_error
    return response


@router.get("/", response_model=PaymentListResponse)
def list_payments(
    status: Optional[PaymentStatus] = Query(None, description="Filter by status"),
    tenant_id: Optional[int] = Query(None, description="Filter by tenant ID"),
    db: Session = Depends(get_db),
):
    """
    List payments with optional filters.

    - Results sorted by payment date (newest first)
    - Each payment includes tenant, unit and property
    """
    service = PaymentService(db)
    payments, total = service.get_payments(status=status, tenant_id=tenant_id)
    return PaymentListResponse(payments=payments, total=total)


@router.get("/upcoming", response_model=UpcomingPaymentsResponse)
def upcoming_payments(
    as_of: date = Depends(get_as_of),
    db: Session = Depends(get_db),
):
    """
    Upcoming and overdue rent for all active tenants.

    - next_due_date is the day after the last paid period ends (or the lease start)
    - Buckets: overdue, due this month (not overdue), due next month
    - `all` is sorted by next_due_date ascending
    """
    service = PaymentService(db)
    schedule = service.get_upcoming(as_of)
    return UpcomingPaymentsResponse(
        as_of=as_of,
        overdue=schedule.overdue,
        due_this_month=schedule.due_this_month,
        due_next_month=schedule.due_next_month,
        all=schedule.all,
    )


@router.get("/{payment_id}", response_model=PaymentWithRelationsResponse)
def get_payment(payment_id: int, db: Session = Depends(get_db)):
    """
    Get a specific payment by ID.

    - Returns 404 if payment doesn't exist
    """
    service = PaymentService(db)
    return service.get_payment(payment_id)


@router.patch("/{payment_id}", response_model=PaymentWithRelationsResponse)
def update_payment(
    payment_id: int,
    payment_data: PaymentUpdate,
    db: Session = Depends(get_db),
):
    """
    Update a payment.

    - Recomputes the period from the tenant's other payments
    - Does not re-send the receipt
    - Returns 404 if payment doesn't exist
    """
    service = PaymentService(db)
    return service.update_payment(payment_id, payment_data)


@router.delete("/{payment_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_payment(payment_id: int, db: Session = Depends(get_db)):
    """
    Delete a payment.

    - Returns 404 if payment doesn't exist
    """
    service = PaymentService(db)
    service.delete_payment(payment_id)
