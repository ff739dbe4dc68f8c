from datetime import datetime
from pydantic import BaseModel, Field
from typing import Optional

from rentalms.models.unit import UnitStatus
from rentalms.schemas.property_schemas import PropertyResponse
from rentalms.schemas.update_schemas import PartialUpdate


class UnitCreate(BaseModel):
    """Schema for creating a new unit"""

    property_id: int = Field(..., gt=0)
    code: str = Field(..., min_length=1, max_length=50)
    name: str = Field(..., min_length=1, max_length=255)
    rent_amount: float = Field(..., gt=0)
    status: UnitStatus = UnitStatus.VACANT


class UnitUpdate(PartialUpdate):
    """Schema for updating a unit (partial)"""

    property_id: Optional[int] = Field(None, gt=0)
    code: Optional[str] = Field(None, min_length=1, max_length=50)
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    rent_amount: Optional[float] = Field(None, gt=0)
    status: Optional[UnitStatus] = None


class UnitResponse(BaseModel):
    """Schema for unit response"""

    model_config = {"from_attributes": True}

    id: int
    property_id: int
    code: str
    name: str
    rent_amount: float
    status: UnitStatus
    created_at: datetime
    updated_at: datetime


class UnitWithPropertyResponse(UnitResponse):
    """Unit including its property"""

    property: PropertyResponse


class UnitListItem(UnitWithPropertyResponse):
    """Unit with aggregate counts for list views"""

    active_tenant_count: int
    tenant_count: int
    payment_count: int


class UnitListResponse(BaseModel):
    """Schema for list of units"""

    units: list[UnitListItem]
    total: int
