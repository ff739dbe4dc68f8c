import logging
from dataclasses import dataclass
from datetime import date
from typing import Optional
from sqlalchemy.orm import Session

from rentalms.core.exceptions import NotFoundException
from rentalms.core.mailer import ReceiptMailer
from rentalms.core.saga import SagaStep, run_saga
from rentalms.models.payment import Payment, PaymentStatus
from rentalms.models.tenant import Tenant, TenantStatus
from rentalms.repositories.payment_repository import PaymentRepository
from rentalms.repositories.tenant_repository import TenantRepository
from rentalms.repositories.unit_repository import UnitRepository
from rentalms.schemas.payment_schemas import PaymentCreate, PaymentUpdate
from rentalms.services.periods import BillingPeriod, compute_period, next_period_seed
from rentalms.services.rent_schedule import RentSchedule, project_schedule

logger = logging.getLogger(__name__)

RECEIPT_FAILED_MESSAGE = "Failed to send receipt email"


@dataclass
class PaymentRecordResult:
    """Outcome of recording a payment: the payment plus the receipt email status"""

    payment: Payment
    receipt_sent: bool
    email_error: Optional[str] = None


class PaymentService:
    """Service layer for payment recording and rent schedule logic"""

    def __init__(self, db: Session, mailer: Optional[ReceiptMailer] = None):
        self.db = db
        self.mailer = mailer or ReceiptMailer()
        self.payment_repo = PaymentRepository(db)
        self.tenant_repo = TenantRepository(db)
        self.unit_repo = UnitRepository(db)

    def _get_tenant(self, tenant_id: int) -> Tenant:
        tenant = self.tenant_repo.get_by_id(tenant_id)
        if not tenant:
            raise NotFoundException(f"Tenant {tenant_id} not found")
        return tenant

    def _ensure_unit(self, unit_id: int) -> None:
        if not self.unit_repo.get_by_id(unit_id):
            raise NotFoundException(f"Unit {unit_id} not found")

    def compute_next_period(
        self, tenant: Tenant, months_covered: int, exclude_payment_id: Optional[int] = None
    ) -> BillingPeriod:
        """
        Compute the period a new (or edited) payment covers for a tenant.

        The period starts the day after the tenant's latest other payment
        ends, or on the lease start date if there is none.
        """
        last_payment = self.payment_repo.get_latest_for_tenant(tenant.id, exclude_payment_id)
        seed = next_period_seed(
            last_payment.period_end if last_payment else None, tenant.start_date
        )
        return compute_period(seed, months_covered)

    def record_payment(self, payment_data: PaymentCreate) -> PaymentRecordResult:
        """
        Record a payment and email the tenant a receipt.

        The payment is committed before the email is attempted. A failed
        send leaves the payment in place with receipt_sent=False and
        reports the failure in the result instead of raising.

        Args:
            payment_data: Validated payment input

        Returns:
            PaymentRecordResult with the payment (relations loaded)

        Raises:
            NotFoundException: If the tenant or unit doesn't exist
        """
        tenant = self._get_tenant(payment_data.tenant_id)
        self._ensure_unit(payment_data.unit_id)

        period = self.compute_next_period(tenant, payment_data.months_covered)

        payment = Payment(
            tenant_id=payment_data.tenant_id,
            unit_id=payment_data.unit_id,
            amount=payment_data.amount,
            payment_date=payment_data.payment_date,
            months_covered=payment_data.months_covered,
            period_start=period.start,
            period_end=period.end,
            payment_method=payment_data.payment_method,
            reference=payment_data.reference,
            notes=payment_data.notes,
            status=PaymentStatus.COMPLETED,
            receipt_sent=False,
        )
        payment = self.payment_repo.create(payment)
        logger.info(
            "Payment recorded for period %s to %s",
            period.start,
            period.end,
            extra={"payment_id": payment.id, "tenant_id": tenant.id},
        )

        payment = self.payment_repo.get_by_id_with_relations(payment.id)
        mail_result = self.mailer.send_receipt(payment)

        if not mail_result.success:
            return PaymentRecordResult(
                payment=payment, receipt_sent=False, email_error=RECEIPT_FAILED_MESSAGE
            )

        saga = run_saga(
            [SagaStep("mark_receipt_sent", lambda: self._mark_receipt_sent(payment))],
            on_failure=self.db.rollback,
            payment_id=payment.id,
        )
        # The email went out either way; receipt_sent mirrors what was stored
        return PaymentRecordResult(payment=payment, receipt_sent=saga.ok)

    def _mark_receipt_sent(self, payment: Payment) -> None:
        payment.receipt_sent = True
        self.payment_repo.update(payment)

    def get_payment(self, payment_id: int) -> Payment:
        """
        Get payment by ID with tenant, unit and property.

        Raises:
            NotFoundException: If payment doesn't exist
        """
        payment = self.payment_repo.get_by_id_with_relations(payment_id)
        if not payment:
            raise NotFoundException(f"Payment {payment_id} not found")
        return payment

    def get_payments(
        self, status: Optional[PaymentStatus] = None, tenant_id: Optional[int] = None
    ) -> tuple[list[Payment], int]:
        """List payments, newest payment date first"""
        return self.payment_repo.get_with_filters(status=status, tenant_id=tenant_id)

    def update_payment(self, payment_id: int, payment_data: PaymentUpdate) -> Payment:
        """
        Update a payment and recompute its period.

        The period is recomputed from the tenant's other payments, excluding
        this one. No receipt is re-sent.

        Raises:
            NotFoundException: If payment, tenant or unit doesn't exist
        """
        payment = self.payment_repo.get_by_id(payment_id)
        if not payment:
            raise NotFoundException(f"Payment {payment_id} not found")

        changes = payment_data.changes()

        tenant = self._get_tenant(changes.get("tenant_id", payment.tenant_id))
        if "unit_id" in changes:
            self._ensure_unit(changes["unit_id"])

        for field, value in changes.items():
            setattr(payment, field, value)

        period = self.compute_next_period(
            tenant, payment.months_covered, exclude_payment_id=payment.id
        )
        payment.period_start = period.start
        payment.period_end = period.end

        self.payment_repo.update(payment)
        return self.get_payment(payment.id)

    def delete_payment(self, payment_id: int) -> None:
        """
        Delete a payment.

        Raises:
            NotFoundException: If payment doesn't exist
        """
        payment = self.payment_repo.get_by_id(payment_id)
        if not payment:
            raise NotFoundException(f"Payment {payment_id} not found")
        self.payment_repo.delete(payment)

    def get_upcoming(self, today: date) -> RentSchedule:
        """
        Rent schedule for all active tenants as of `today`.

        Recomputed on every call; nothing is cached.
        """
        tenants = self.tenant_repo.get_all(status=TenantStatus.ACTIVE, with_payments=False)
        latest = self.payment_repo.get_latest_by_tenant([t.id for t in tenants])
        return project_schedule(((t, latest.get(t.id)) for t in tenants), today)
