from enum import Enum as PyEnum
from sqlalchemy import String, Integer, Numeric, ForeignKey, Enum
from sqlalchemy.orm import Mapped, mapped_column, relationship
from typing import TYPE_CHECKING
from rentalms.models.base import Base, TimestampMixin

if TYPE_CHECKING:
    from rentalms.models.property import Property
    from rentalms.models.tenant import Tenant
    from rentalms.models.payment import Payment


class UnitStatus(str, PyEnum):
    """Occupancy status of a unit"""

    VACANT = "vacant"
    OCCUPIED = "occupied"


class Unit(Base, TimestampMixin):
    """
    A rentable unit inside a property.

    Status is flipped by the tenant service (occupied on tenant creation,
    vacant once no active tenant references the unit).
    """

    __tablename__ = "units"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    property_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("properties.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )
    code: Mapped[str] = mapped_column(String(50), nullable=False)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    rent_amount: Mapped[float] = mapped_column(Numeric(precision=15, scale=2), nullable=False)
    status: Mapped[UnitStatus] = mapped_column(
        Enum(UnitStatus, native_enum=False), nullable=False, default=UnitStatus.VACANT
    )

    # Relationships
    property: Mapped["Property"] = relationship("Property", back_populates="units")
    tenants: Mapped[list["Tenant"]] = relationship(
        "Tenant", back_populates="unit", passive_deletes="all"
    )
    payments: Mapped[list["Payment"]] = relationship(
        "Payment", back_populates="unit", passive_deletes="all"
    )

    def __repr__(self) -> str:
        return f"<Unit(id={self.id}, code='{self.code}', status='{self.status}')>"
