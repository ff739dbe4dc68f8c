"""Detail views that nest child collections under their parent."""

from rentalms.schemas.expense_schemas import ExpenseResponse
from rentalms.schemas.payment_schemas import PaymentResponse
from rentalms.schemas.property_schemas import PropertyResponse
from rentalms.schemas.tenant_schemas import TenantResponse, TenantWithUnitResponse
from rentalms.schemas.unit_schemas import UnitResponse, UnitWithPropertyResponse


class PropertyDetailResponse(PropertyResponse):
    units: list[UnitResponse]
    expenses: list[ExpenseResponse]
    unit_count: int
    expense_count: int


class UnitDetailResponse(UnitWithPropertyResponse):
    tenants: list[TenantResponse]
    payments: list[PaymentResponse]


class TenantDetailResponse(TenantWithUnitResponse):
    payments: list[PaymentResponse]
