from sqlalchemy.orm import Session

from rentalms.core.exceptions import NotFoundException
from rentalms.models.tenant import TenantStatus
from rentalms.models.unit import Unit
from rentalms.repositories.property_repository import PropertyRepository
from rentalms.repositories.unit_repository import UnitRepository
from rentalms.schemas.unit_schemas import UnitCreate, UnitUpdate


class UnitService:
    """Service for unit business logic"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = UnitRepository(db)
        self.property_repo = PropertyRepository(db)

    def _ensure_property(self, property_id: int) -> None:
        if not self.property_repo.get_by_id(property_id):
            raise NotFoundException(f"Property {property_id} not found")

    def create_unit(self, data: UnitCreate) -> Unit:
        """
        Create a unit in an existing property.

        Raises:
            NotFoundException: If the property doesn't exist
        """
        self._ensure_property(data.property_id)
        unit = self.repo.create(Unit(**data.model_dump()))
        return self.get_unit(unit.id)

    def get_units(self) -> list[dict]:
        """List units with tenant and payment counts"""
        return [
            {
                "unit": unit,
                "active_tenant_count": sum(
                    1 for tenant in unit.tenants if tenant.status == TenantStatus.ACTIVE
                ),
                "tenant_count": len(unit.tenants),
                "payment_count": len(unit.payments),
            }
            for unit in self.repo.get_all()
        ]

    def get_unit(self, unit_id: int) -> Unit:
        """
        Get unit with property, tenants and payments.

        Raises:
            NotFoundException: If unit not found
        """
        unit = self.repo.get_by_id_with_relations(unit_id)
        if not unit:
            raise NotFoundException(f"Unit {unit_id} not found")
        return unit

    def update_unit(self, unit_id: int, data: UnitUpdate) -> Unit:
        unit = self.get_unit(unit_id)
        changes = data.changes()
        if "property_id" in changes:
            self._ensure_property(changes["property_id"])

        for field, value in changes.items():
            setattr(unit, field, value)

        self.repo.update(unit)
        return self.get_unit(unit.id)

    def delete_unit(self, unit_id: int) -> None:
        """Delete unit; refused while tenants or payments reference it"""
        unit = self.repo.get_by_id(unit_id)
        if not unit:
            raise NotFoundException(f"Unit {unit_id} not found")
        self.repo.delete(unit)
