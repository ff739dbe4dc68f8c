from sqlalchemy import String, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship
from typing import TYPE_CHECKING
from rentalms.models.base import Base, TimestampMixin

if TYPE_CHECKING:
    from rentalms.models.unit import Unit
    from rentalms.models.expense import Expense


class Property(Base, TimestampMixin):
    """
    A building or site that holds rentable units.

    Units block deletion (the store rejects it while any unit references
    the property); expenses are removed together with the property.
    """

    __tablename__ = "properties"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    code: Mapped[str] = mapped_column(String(50), nullable=False, index=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    address: Mapped[str] = mapped_column(String(500), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)

    # Relationships
    units: Mapped[list["Unit"]] = relationship(
        "Unit",
        back_populates="property",
        passive_deletes="all",  # Leave it to the FK to refuse the delete
        order_by="Unit.code",
    )
    expenses: Mapped[list["Expense"]] = relationship(
        "Expense",
        back_populates="property",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="Expense.date.desc()",
    )

    def __repr__(self) -> str:
        return f"<Property(id={self.id}, code='{self.code}')>"
