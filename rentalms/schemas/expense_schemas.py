import datetime as dt
from pydantic import BaseModel, Field
from typing import Optional

from rentalms.schemas.property_schemas import PropertyResponse
from rentalms.schemas.update_schemas import PartialUpdate

# Offered by the admin UI; the API accepts any non-empty category
EXPENSE_CATEGORIES = (
    "Maintenance",
    "Utilities",
    "Repairs",
    "Insurance",
    "Property Tax",
    "Management Fees",
    "Cleaning",
    "Landscaping",
    "Other",
)


class ExpenseCreate(BaseModel):
    """Schema for creating a new expense"""

    property_id: int = Field(..., gt=0)
    description: str = Field(..., min_length=1, max_length=500)
    amount: float = Field(..., gt=0)
    category: str = Field(..., min_length=1, max_length=100)
    date: dt.date
    notes: Optional[str] = Field(None, max_length=2000)


class ExpenseUpdate(PartialUpdate):
    """Schema for updating an expense (partial)"""

    clearable = frozenset({"notes"})

    property_id: Optional[int] = Field(None, gt=0)
    description: Optional[str] = Field(None, min_length=1, max_length=500)
    amount: Optional[float] = Field(None, gt=0)
    category: Optional[str] = Field(None, min_length=1, max_length=100)
    date: Optional[dt.date] = None
    notes: Optional[str] = Field(None, max_length=2000)


class ExpenseResponse(BaseModel):
    """Schema for expense response"""

    model_config = {"from_attributes": True}

    id: int
    property_id: int
    description: str
    amount: float
    category: str
    date: dt.date
    notes: Optional[str]
    created_at: dt.datetime
    updated_at: dt.datetime


class ExpenseWithPropertyResponse(ExpenseResponse):
    property: PropertyResponse


class ExpenseListResponse(BaseModel):
    """Schema for list of expenses"""

    expenses: list[ExpenseWithPropertyResponse]
    total: int
