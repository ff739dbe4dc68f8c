from sqlalchemy.orm import Session

from rentalms.core.exceptions import NotFoundException
from rentalms.models.property import Property
from rentalms.models.tenant import TenantStatus
from rentalms.repositories.property_repository import PropertyRepository
from rentalms.schemas.property_schemas import PropertyCreate, PropertyUpdate


class PropertyService:
    """Service for property business logic"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = PropertyRepository(db)

    def create_property(self, data: PropertyCreate) -> Property:
        return self.repo.create(Property(**data.model_dump()))

    def get_properties(self) -> list[dict]:
        """List properties with unit, expense and active tenant counts"""
        return [
            {
                "property": prop,
                "unit_count": len(prop.units),
                "expense_count": len(prop.expenses),
                "active_tenant_count": sum(
                    1
                    for unit in prop.units
                    for tenant in unit.tenants
                    if tenant.status == TenantStatus.ACTIVE
                ),
            }
            for prop in self.repo.get_all()
        ]

    def get_property(self, property_id: int) -> Property:
        """
        Get property with units and expenses.

        Raises:
            NotFoundException: If property not found
        """
        prop = self.repo.get_by_id_with_children(property_id)
        if not prop:
            raise NotFoundException(f"Property {property_id} not found")
        return prop

    def update_property(self, property_id: int, data: PropertyUpdate) -> Property:
        prop = self.get_property(property_id)
        for field, value in data.changes().items():
            setattr(prop, field, value)
        return self.repo.update(prop)

    def delete_property(self, property_id: int) -> None:
        """Delete property and its expenses; refused while units exist"""
        prop = self.repo.get_by_id(property_id)
        if not prop:
            raise NotFoundException(f"Property {property_id} not found")
        self.repo.delete(prop)
