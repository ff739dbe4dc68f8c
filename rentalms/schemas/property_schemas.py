from datetime import datetime
from pydantic import BaseModel, Field
from typing import Optional

from rentalms.schemas.update_schemas import PartialUpdate


class PropertyCreate(BaseModel):
    """Schema for creating a new property"""

    code: str = Field(..., min_length=1, max_length=50)
    name: str = Field(..., min_length=1, max_length=255)
    address: str = Field(..., min_length=1, max_length=500)
    description: Optional[str] = Field(None, max_length=2000)


class PropertyUpdate(PartialUpdate):
    """Schema for updating a property (partial)"""

    clearable = frozenset({"description"})

    code: Optional[str] = Field(None, min_length=1, max_length=50)
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    address: Optional[str] = Field(None, min_length=1, max_length=500)
    description: Optional[str] = Field(None, max_length=2000)


class PropertyResponse(BaseModel):
    """Schema for property response"""

    model_config = {"from_attributes": True}

    id: int
    code: str
    name: str
    address: str
    description: Optional[str]
    created_at: datetime
    updated_at: datetime


class PropertyListItem(PropertyResponse):
    """Property with aggregate counts for list views"""

    unit_count: int
    expense_count: int
    active_tenant_count: int


class PropertyListResponse(BaseModel):
    """Schema for list of properties"""

    properties: list[PropertyListItem]
    total: int
