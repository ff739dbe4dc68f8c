import logging
from sqlalchemy.orm import Session

from rentalms.core.exceptions import NotFoundException
from rentalms.core.saga import SagaResult, SagaStep, run_saga
from rentalms.models.tenant import Tenant, TenantStatus
from rentalms.models.unit import UnitStatus
from rentalms.repositories.tenant_repository import TenantRepository
from rentalms.repositories.unit_repository import UnitRepository
from rentalms.schemas.tenant_schemas import TenantCreate, TenantUpdate

logger = logging.getLogger(__name__)


class TenantService:
    """Service layer for tenant management and unit occupancy"""

    def __init__(self, db: Session):
        self.db = db
        self.tenant_repo = TenantRepository(db)
        self.unit_repo = UnitRepository(db)

    def create_tenant(self, data: TenantCreate) -> Tenant:
        """
        Create a tenant and mark their unit as occupied.

        The occupancy update runs after the tenant is committed; if it
        fails the tenant is kept and the failure is logged.

        Args:
            data: Validated tenant input

        Returns:
            Created tenant with unit and property loaded

        Raises:
            NotFoundException: If the unit doesn't exist
        """
        if not self.unit_repo.get_by_id(data.unit_id):
            raise NotFoundException(f"Unit {data.unit_id} not found")

        tenant = self.tenant_repo.create(Tenant(**data.model_dump()))
        logger.info("Tenant created", extra={"tenant_id": tenant.id, "unit_id": tenant.unit_id})

        run_saga(
            [
                SagaStep(
                    "mark_unit_occupied",
                    lambda: self.unit_repo.set_status(data.unit_id, UnitStatus.OCCUPIED),
                )
            ],
            on_failure=self.db.rollback,
            tenant_id=tenant.id,
            unit_id=data.unit_id,
        )
        return self.get_tenant(tenant.id)

    def get_tenant(self, tenant_id: int) -> Tenant:
        """
        Get tenant with unit, property and payments.

        Raises:
            NotFoundException: If tenant doesn't exist
        """
        tenant = self.tenant_repo.get_by_id_with_relations(tenant_id)
        if not tenant:
            raise NotFoundException(f"Tenant {tenant_id} not found")
        return tenant

    def get_tenants(self) -> list[dict]:
        """
        List tenants, newest first.

        Returns:
            List of dicts with the tenant and its payment count
        """
        return [
            {"tenant": tenant, "payment_count": len(tenant.payments)}
            for tenant in self.tenant_repo.get_all()
        ]

    def update_tenant(self, tenant_id: int, data: TenantUpdate) -> Tenant:
        """
        Update tenant details (partial).

        Raises:
            NotFoundException: If tenant or new unit doesn't exist
        """
        tenant = self.get_tenant(tenant_id)
        changes = data.changes()

        if "unit_id" in changes and not self.unit_repo.get_by_id(changes["unit_id"]):
            raise NotFoundException(f"Unit {changes['unit_id']} not found")

        for field, value in changes.items():
            setattr(tenant, field, value)

        self.tenant_repo.update(tenant)
        return self.get_tenant(tenant.id)

    def delete_tenant(self, tenant_id: int) -> SagaResult:
        """
        Delete a tenant, then release the unit if nobody active remains.

        The unit check runs after the delete has committed and is not
        rolled back together with it.

        Raises:
            NotFoundException: If tenant doesn't exist
        """
        tenant = self.tenant_repo.get_by_id(tenant_id)
        if not tenant:
            raise NotFoundException(f"Tenant {tenant_id} not found")

        unit_id = tenant.unit_id
        self.tenant_repo.delete(tenant)
        logger.info("Tenant deleted", extra={"tenant_id": tenant_id, "unit_id": unit_id})

        return run_saga(
            [SagaStep("release_unit_if_vacant", lambda: self._release_unit_if_vacant(unit_id))],
            on_failure=self.db.rollback,
            tenant_id=tenant_id,
            unit_id=unit_id,
        )

    def _release_unit_if_vacant(self, unit_id: int) -> None:
        remaining = self.tenant_repo.count(status=TenantStatus.ACTIVE, unit_id=unit_id)
        if remaining == 0:
            self.unit_repo.set_status(unit_id, UnitStatus.VACANT)
