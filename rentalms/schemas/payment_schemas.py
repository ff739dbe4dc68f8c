from datetime import date, datetime
from pydantic import BaseModel, Field
from typing import Optional

from rentalms.models.payment import PaymentStatus
from rentalms.schemas.update_schemas import PartialUpdate
from rentalms.schemas.tenant_schemas import TenantResponse
from rentalms.schemas.unit_schemas import UnitWithPropertyResponse


class PaymentCreate(BaseModel):
    """
    Schema for recording a rent payment.

    period_start/period_end are not accepted: they are derived from the
    tenant's previous payment (or lease start) and months_covered.
    """

    tenant_id: int = Field(..., gt=0)
    unit_id: int = Field(..., gt=0)
    amount: float = Field(..., gt=0)
    payment_date: date
    months_covered: int = Field(..., ge=1, description="Number of months this payment covers")
    payment_method: Optional[str] = Field(None, max_length=100)
    reference: Optional[str] = Field(None, max_length=255)
    notes: Optional[str] = Field(None, max_length=2000)


class PaymentUpdate(PartialUpdate):
    """Schema for updating a payment; the period is always recomputed"""

    clearable = frozenset({"payment_method", "reference", "notes"})

    tenant_id: Optional[int] = Field(None, gt=0)
    unit_id: Optional[int] = Field(None, gt=0)
    amount: Optional[float] = Field(None, gt=0)
    payment_date: Optional[date] = None
    months_covered: Optional[int] = Field(None, ge=1)
    payment_method: Optional[str] = Field(None, max_length=100)
    reference: Optional[str] = Field(None, max_length=255)
    notes: Optional[str] = Field(None, max_length=2000)


class PaymentResponse(BaseModel):
    """Schema for payment response"""

    model_config = {"from_attributes": True}

    id: int
    tenant_id: int
    unit_id: int
    amount: float
    payment_date: date
    months_covered: int
    period_start: date
    period_end: date
    payment_method: Optional[str]
    reference: Optional[str]
    notes: Optional[str]
    status: PaymentStatus
    receipt_sent: bool
    created_at: datetime
    updated_at: datetime


class PaymentWithRelationsResponse(PaymentResponse):
    """Payment including tenant, unit and property"""

    tenant: TenantResponse
    unit: UnitWithPropertyResponse


class PaymentCreateResponse(PaymentWithRelationsResponse):
    """
    Result of recording a payment.

    email_error is set when the receipt could not be sent; the payment
    itself is still recorded.
    """

    email_error: Optional[str] = None


class PaymentListResponse(BaseModel):
    """Schema for list of payments"""

    payments: list[PaymentWithRelationsResponse]
    total: int


class UpcomingPaymentResponse(BaseModel):
    """One tenant's next rent due date and its classification"""

    model_config = {"from_attributes": True}

    tenant_id: int
    tenant_name: str
    tenant_email: str
    unit_name: str
    unit_code: str
    property_name: str
    rent_amount: float
    next_due_date: date
    last_payment_date: Optional[date]
    last_payment_period_end: Optional[date]
    is_overdue: bool
    is_due_this_month: bool
    is_due_next_month: bool
    days_overdue: int


class UpcomingPaymentsResponse(BaseModel):
    """Rent schedule grouped into buckets; `all` is sorted by next_due_date"""

    model_config = {"from_attributes": True}

    as_of: date
    overdue: list[UpcomingPaymentResponse]
    due_this_month: list[UpcomingPaymentResponse]
    due_next_month: list[UpcomingPaymentResponse]
    all: list[UpcomingPaymentResponse]
