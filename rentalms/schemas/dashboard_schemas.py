from pydantic import BaseModel

from rentalms.schemas.payment_schemas import PaymentWithRelationsResponse


class DashboardResponse(BaseModel):
    """Aggregate counts and most recent payments"""

    property_count: int
    unit_count: int
    occupied_unit_count: int
    vacant_unit_count: int
    active_tenant_count: int
    recent_payments: list[PaymentWithRelationsResponse]
