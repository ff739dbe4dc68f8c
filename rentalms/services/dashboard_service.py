from sqlalchemy.orm import Session

from rentalms.config import settings
from rentalms.models.tenant import TenantStatus
from rentalms.models.unit import UnitStatus
from rentalms.repositories.payment_repository import PaymentRepository
from rentalms.repositories.property_repository import PropertyRepository
from rentalms.repositories.tenant_repository import TenantRepository
from rentalms.repositories.unit_repository import UnitRepository


class DashboardService:
    """Read-only aggregate counts for the admin dashboard"""

    def __init__(self, db: Session):
        self.db = db
        self.property_repo = PropertyRepository(db)
        self.unit_repo = UnitRepository(db)
        self.tenant_repo = TenantRepository(db)
        self.payment_repo = PaymentRepository(db)

    def get_summary(self, recent_limit: int = settings.RECENT_PAYMENTS_LIMIT) -> dict:
        """
        Property/unit/tenant counts plus the most recent payments.

        Returns:
            Dict matching DashboardResponse
        """
        return {
            "property_count": self.property_repo.count(),
            "unit_count": self.unit_repo.count(),
            "occupied_unit_count": self.unit_repo.count(status=UnitStatus.OCCUPIED),
            "vacant_unit_count": self.unit_repo.count(status=UnitStatus.VACANT),
            "active_tenant_count": self.tenant_repo.count(status=TenantStatus.ACTIVE),
            "recent_payments": self.payment_repo.get_recent(recent_limit),
        }
