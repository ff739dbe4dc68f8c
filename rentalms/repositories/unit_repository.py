from typing import Optional
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, selectinload

from rentalms.core.exceptions import ConstraintException
from rentalms.models.unit import Unit, UnitStatus


class UnitRepository:
    """Repository for Unit data access"""

    def __init__(self, db: Session):
        self.db = db

    def get_by_id(self, unit_id: int) -> Optional[Unit]:
        """Get unit by ID"""
        return self.db.query(Unit).filter(Unit.id == unit_id).first()

    def get_by_id_with_relations(self, unit_id: int) -> Optional[Unit]:
        """Get unit with property, tenants and payments loaded"""
        return (
            self.db.query(Unit)
            .options(
                selectinload(Unit.property),
                selectinload(Unit.tenants),
                selectinload(Unit.payments),
            )
            .filter(Unit.id == unit_id)
            .first()
        )

    def get_all(self) -> list[Unit]:
        """Get all units, newest first, with property/tenants/payments loaded"""
        return (
            self.db.query(Unit)
            .options(
                selectinload(Unit.property),
                selectinload(Unit.tenants),
                selectinload(Unit.payments),
            )
            .order_by(Unit.created_at.desc(), Unit.id.desc())
            .all()
        )

    def count(self, status: Optional[UnitStatus] = None) -> int:
        """Count units, optionally only those with the given status"""
        query = self.db.query(Unit)
        if status is not None:
            query = query.filter(Unit.status == status)
        return query.count()

    def create(self, unit: Unit) -> Unit:
        """Create a new unit"""
        self.db.add(unit)
        self.db.commit()
        self.db.refresh(unit)
        return unit

    def update(self, unit: Unit) -> Unit:
        """Update a unit"""
        self.db.commit()
        self.db.refresh(unit)
        return unit

    def set_status(self, unit_id: int, status: UnitStatus) -> Unit:
        """
        Set a unit's occupancy status.

        Raises:
            LookupError: If the unit no longer exists
        """
        unit = self.get_by_id(unit_id)
        if unit is None:
            raise LookupError(f"Unit {unit_id} not found")
        unit.status = status
        return self.update(unit)

    def delete(self, unit: Unit) -> None:
        """
        Delete a unit.

        Raises:
            ConstraintException: If tenants or payments still reference the unit
        """
        try:
            self.db.delete(unit)
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            raise ConstraintException(
                f"Unit {unit.id} is still referenced by tenants or payments"
            ) from e
