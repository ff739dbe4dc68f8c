from typing import Optional
from sqlalchemy import func
from sqlalchemy.orm import Session, selectinload

from rentalms.models.payment import Payment, PaymentStatus
from rentalms.models.unit import Unit


def _with_relations():
    return (
        selectinload(Payment.tenant),
        selectinload(Payment.unit).selectinload(Unit.property),
    )


class PaymentRepository:
    """Repository for Payment data access"""

    def __init__(self, db: Session):
        self.db = db

    def create(self, payment: Payment) -> Payment:
        """Create a new payment"""
        self.db.add(payment)
        self.db.commit()
        self.db.refresh(payment)
        return payment

    def get_by_id(self, payment_id: int) -> Optional[Payment]:
        """Get payment by ID"""
        return self.db.query(Payment).filter(Payment.id == payment_id).first()

    def get_by_id_with_relations(self, payment_id: int) -> Optional[Payment]:
        """Get payment with tenant, unit and property loaded (receipt and API shape)"""
        return (
            self.db.query(Payment)
            .options(*_with_relations())
            .filter(Payment.id == payment_id)
            .first()
        )

    def get_with_filters(
        self,
        status: Optional[PaymentStatus] = None,
        tenant_id: Optional[int] = None,
    ) -> tuple[list[Payment], int]:
        """
        Get payments, most recent payment date first.

        Args:
            status: Optional status filter
            tenant_id: Optional tenant filter

        Returns:
            Tuple of (payments list, total count)
        """
        query = self.db.query(Payment).options(*_with_relations())

        if status is not None:
            query = query.filter(Payment.status == status)

        if tenant_id is not None:
            query = query.filter(Payment.tenant_id == tenant_id)

        payments = query.order_by(Payment.payment_date.desc(), Payment.id.desc()).all()
        return payments, len(payments)

    def get_recent(self, limit: int) -> list[Payment]:
        """Most recent payments by payment date"""
        return (
            self.db.query(Payment)
            .options(*_with_relations())
            .order_by(Payment.payment_date.desc(), Payment.id.desc())
            .limit(limit)
            .all()
        )

    def get_latest_for_tenant(
        self, tenant_id: int, exclude_payment_id: Optional[int] = None
    ) -> Optional[Payment]:
        """
        Get the tenant's payment with the latest period_end.

        Args:
            tenant_id: Tenant ID
            exclude_payment_id: Payment to ignore (the one being edited)

        Returns:
            Payment or None if the tenant has no (other) payments
        """
        query = self.db.query(Payment).filter(Payment.tenant_id == tenant_id)
        if exclude_payment_id is not None:
            query = query.filter(Payment.id != exclude_payment_id)
        return query.order_by(Payment.period_end.desc(), Payment.id.desc()).first()

    def get_latest_by_tenant(self, tenant_ids: list[int]) -> dict[int, Payment]:
        """
        Latest payment (by period_end) for each of the given tenants.

        Returns:
            Mapping of tenant_id to Payment; tenants without payments are absent
        """
        if not tenant_ids:
            return {}

        latest = (
            self.db.query(
                Payment.tenant_id.label("tenant_id"),
                func.max(Payment.period_end).label("period_end"),
            )
            .filter(Payment.tenant_id.in_(tenant_ids))
            .group_by(Payment.tenant_id)
            .subquery()
        )
        rows = (
            self.db.query(Payment)
            .join(
                latest,
                (Payment.tenant_id == latest.c.tenant_id)
                & (Payment.period_end == latest.c.period_end),
            )
            .order_by(Payment.id)
            .all()
        )
        # Ties on period_end resolve to the highest id
        return {payment.tenant_id: payment for payment in rows}

    def update(self, payment: Payment) -> Payment:
        """Update a payment"""
        self.db.commit()
        self.db.refresh(payment)
        return payment

    def delete(self, payment: Payment) -> None:
        """Delete a payment"""
        self.db.delete(payment)
        self.db.commit()
