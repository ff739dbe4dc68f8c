from typing import Optional
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, selectinload

from rentalms.core.exceptions import ConstraintException
from rentalms.models.property import Property
from rentalms.models.unit import Unit


class PropertyRepository:
    """Repository for Property data access"""

    def __init__(self, db: Session):
        self.db = db

    def get_by_id(self, property_id: int) -> Optional[Property]:
        """Get property by ID"""
        return self.db.query(Property).filter(Property.id == property_id).first()

    def get_by_id_with_children(self, property_id: int) -> Optional[Property]:
        """Get property with units and expenses loaded"""
        return (
            self.db.query(Property)
            .options(selectinload(Property.units), selectinload(Property.expenses))
            .filter(Property.id == property_id)
            .first()
        )

    def get_all(self) -> list[Property]:
        """
        Get all properties, newest first.

        Units (with their tenants) and expenses are eager-loaded so list
        views can report counts without extra queries.
        """
        return (
            self.db.query(Property)
            .options(
                selectinload(Property.units).selectinload(Unit.tenants),
                selectinload(Property.expenses),
            )
            .order_by(Property.created_at.desc(), Property.id.desc())
            .all()
        )

    def count(self) -> int:
        return self.db.query(Property).count()

    def create(self, property: Property) -> Property:
        """Create a new property"""
        self.db.add(property)
        self.db.commit()
        self.db.refresh(property)
        return property

    def update(self, property: Property) -> Property:
        """Update a property"""
        self.db.commit()
        self.db.refresh(property)
        return property

    def delete(self, property: Property) -> None:
        """
        Delete a property and its expenses.

        Raises:
            ConstraintException: If units still reference the property
        """
        try:
            self.db.delete(property)
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            raise ConstraintException(
                f"Property {property.id} is still referenced by units"
            ) from e
