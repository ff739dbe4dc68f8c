# Import every model so relationship() string targets resolve on first use
from rentalms.models.base import Base
from rentalms.models.property import Property
from rentalms.models.unit import Unit, UnitStatus
from rentalms.models.tenant import Tenant, TenantStatus
from rentalms.models.payment import Payment, PaymentStatus
from rentalms.models.expense import Expense

__all__ = [
    "Base",
    "Property",
    "Unit",
    "UnitStatus",
    "Tenant",
    "TenantStatus",
    "Payment",
    "PaymentStatus",
    "Expense",
]
