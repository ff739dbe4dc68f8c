from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from rentalms.database import get_db
from rentalms.services.property_service import PropertyService
from rentalms.schemas.detail_schemas import PropertyDetailResponse
from rentalms.schemas.property_schemas import (
    PropertyCreate,
    PropertyUpdate,
    PropertyResponse,
    PropertyListItem,
    PropertyListResponse,
)

router = APIRouter()


@router.post("/", response_model=PropertyResponse, status_code=status.HTTP_201_CREATED)
def create_property(data: PropertyCreate, db: Session = Depends(get_db)):
    """Create a new property"""
    service = PropertyService(db)
    return service.create_property(data)


@router.get("/", response_model=PropertyListResponse)
def list_properties(db: Session = Depends(get_db)):
    """List properties (newest first) with unit, expense and active tenant counts"""
    service = PropertyService(db)
    items = [
        PropertyListItem(
            **PropertyResponse.model_validate(row["property"]).model_dump(),
            unit_count=row["unit_count"],
            expense_count=row["expense_count"],
            active_tenant_count=row["active_tenant_count"],
        )
        for row in service.get_properties()
    ]
    return PropertyListResponse(properties=items, total=len(items))


@router.get("/{property_id}", response_model=PropertyDetailResponse)
def get_property(property_id: int, db: Session = Depends(get_db)):
    """Get a property with its units and expenses"""
    service = PropertyService(db)
    prop = service.get_property(property_id)
    return PropertyDetailResponse(
        **PropertyResponse.model_validate(prop).model_dump(),
        units=prop.units,
        expenses=prop.expenses,
        unit_count=len(prop.units),
        expense_count=len(prop.expenses),
    )


@router.patch("/{property_id}", response_model=PropertyResponse)
def update_property(property_id: int, data: PropertyUpdate, db: Session = Depends(get_db)):
    """Update property details (partial)"""
    service = PropertyService(db)
    return service.update_property(property_id, data)


@router.delete("/{property_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_property(property_id: int, db: Session = Depends(get_db)):
    """
    Delete a property and its expenses.

    - Fails while units still belong to the property
    """
    service = PropertyService(db)
    service.delete_property(property_id)
