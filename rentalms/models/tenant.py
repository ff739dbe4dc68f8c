"""Tenant model: the person renting a unit."""

from datetime import date
from enum import Enum as PyEnum
from sqlalchemy import String, Integer, ForeignKey, Date, Enum, Index
from sqlalchemy.orm import Mapped, mapped_column, relationship
from typing import TYPE_CHECKING

from rentalms.models.base import Base, TimestampMixin

if TYPE_CHECKING:
    from rentalms.models.unit import Unit
    from rentalms.models.payment import Payment


class TenantStatus(str, PyEnum):
    """Lease status; only active tenants appear in the rent schedule"""

    ACTIVE = "active"
    INACTIVE = "inactive"


class Tenant(Base, TimestampMixin):
    """
    A person leasing a unit.

    start_date is the lease start and seeds the first billing period.
    Conceptually one active tenant per unit at a time, but this is not
    enforced by the schema.
    """

    __tablename__ = "tenants"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    unit_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("units.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False)
    phone: Mapped[str] = mapped_column(String(50), nullable=False)
    start_date: Mapped[date] = mapped_column(Date, nullable=False)
    status: Mapped[TenantStatus] = mapped_column(
        Enum(TenantStatus, native_enum=False), nullable=False, default=TenantStatus.ACTIVE
    )

    # Relationships
    unit: Mapped["Unit"] = relationship("Unit", back_populates="tenants")
    payments: Mapped[list["Payment"]] = relationship(
        "Payment",
        back_populates="tenant",
        cascade="all, delete-orphan",  # Payment history goes with the tenant
        passive_deletes=True,
    )

    __table_args__ = (Index("ix_tenants_unit_status", "unit_id", "status"),)

    def __repr__(self) -> str:
        return f"<Tenant(id={self.id}, name='{self.name}')>"
