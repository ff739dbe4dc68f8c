from datetime import date, datetime
from pydantic import BaseModel, EmailStr, Field
from typing import Optional

from rentalms.models.tenant import TenantStatus
from rentalms.schemas.unit_schemas import UnitWithPropertyResponse
from rentalms.schemas.update_schemas import PartialUpdate


class TenantCreate(BaseModel):
    """Schema for creating a tenant and assigning them to a unit"""

    unit_id: int = Field(..., gt=0)
    name: str = Field(..., min_length=1, max_length=255)
    email: EmailStr
    phone: str = Field(..., min_length=1, max_length=50)
    start_date: date = Field(..., description="Lease start; seeds the first billing period")
    status: TenantStatus = TenantStatus.ACTIVE


class TenantUpdate(PartialUpdate):
    """Schema for updating a tenant (partial)"""

    unit_id: Optional[int] = Field(None, gt=0)
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    email: Optional[EmailStr] = None
    phone: Optional[str] = Field(None, min_length=1, max_length=50)
    start_date: Optional[date] = None
    status: Optional[TenantStatus] = None


class TenantResponse(BaseModel):
    """Tenant details response"""

    model_config = {"from_attributes": True}

    id: int
    unit_id: int
    name: str
    email: str
    phone: str
    start_date: date
    status: TenantStatus
    created_at: datetime
    updated_at: datetime


class TenantWithUnitResponse(TenantResponse):
    """Tenant including unit and property"""

    unit: UnitWithPropertyResponse


class TenantListItem(TenantWithUnitResponse):
    payment_count: int


class TenantListResponse(BaseModel):
    """Schema for list of tenants"""

    tenants: list[TenantListItem]
    total: int
