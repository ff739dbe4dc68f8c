from datetime import date
from enum import Enum as PyEnum
from sqlalchemy import String, Integer, Numeric, ForeignKey, Date, Text, Boolean, Enum, Index
from sqlalchemy.orm import Mapped, mapped_column, relationship
from typing import TYPE_CHECKING
from rentalms.models.base import Base, TimestampMixin

if TYPE_CHECKING:
    from rentalms.models.tenant import Tenant
    from rentalms.models.unit import Unit


class PaymentStatus(str, PyEnum):
    """Payment status; recorded payments are always completed"""

    COMPLETED = "completed"


class Payment(Base, TimestampMixin):
    """
    Rent payment made by a tenant for a unit.

    period_start/period_end are inclusive and derived by the payment
    service, never supplied by the caller. For one tenant, successive
    periods are contiguous.
    """

    __tablename__ = "payments"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    tenant_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("tenants.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    unit_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("units.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )
    amount: Mapped[float] = mapped_column(Numeric(precision=15, scale=2), nullable=False)
    payment_date: Mapped[date] = mapped_column(Date, nullable=False, index=True)
    months_covered: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    period_start: Mapped[date] = mapped_column(Date, nullable=False)
    period_end: Mapped[date] = mapped_column(Date, nullable=False)
    payment_method: Mapped[str | None] = mapped_column(String(100), nullable=True)
    reference: Mapped[str | None] = mapped_column(String(255), nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    status: Mapped[PaymentStatus] = mapped_column(
        Enum(PaymentStatus, native_enum=False), nullable=False, default=PaymentStatus.COMPLETED
    )
    receipt_sent: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    # Relationships
    tenant: Mapped["Tenant"] = relationship("Tenant", back_populates="payments")
    unit: Mapped["Unit"] = relationship("Unit", back_populates="payments")

    # Latest-period lookups per tenant
    __table_args__ = (Index("ix_payments_tenant_period_end", "tenant_id", "period_end"),)
