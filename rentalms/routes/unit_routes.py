from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from rentalms.database import get_db
from rentalms.services.unit_service import UnitService
from rentalms.schemas.detail_schemas import UnitDetailResponse
from rentalms.schemas.unit_schemas import (
    UnitCreate,
    UnitUpdate,
    UnitWithPropertyResponse,
    UnitListItem,
    UnitListResponse,
)

router = APIRouter()


@router.post("/", response_model=UnitWithPropertyResponse, status_code=status.HTTP_201_CREATED)
def create_unit(data: UnitCreate, db: Session = Depends(get_db)):
    """
    Create a unit.

    - Returns 404 if the property doesn't exist
    """
    service = UnitService(db)
    return service.create_unit(data)


@router.get("/", response_model=UnitListResponse)
def list_units(db: Session = Depends(get_db)):
    """List units (newest first) with property and tenant/payment counts"""
    service = UnitService(db)
    items = [
        UnitListItem(
            **UnitWithPropertyResponse.model_validate(row["unit"]).model_dump(),
            active_tenant_count=row["active_tenant_count"],
            tenant_count=row["tenant_count"],
            payment_count=row["payment_count"],
        )
        for row in service.get_units()
    ]
    return UnitListResponse(units=items, total=len(items))


@router.get("/{unit_id}", response_model=UnitDetailResponse)
def get_unit(unit_id: int, db: Session = Depends(get_db)):
    """Get a unit with its property, tenants and payments"""
    service = UnitService(db)
    return service.get_unit(unit_id)


@router.patch("/{unit_id}", response_model=UnitWithPropertyResponse)
def update_unit(unit_id: int, data: UnitUpdate, db: Session = Depends(get_db)):
    """Update unit details (partial)"""
    service = UnitService(db)
    return service.update_unit(unit_id, data)


@router.delete("/{unit_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_unit(unit_id: int, db: Session = Depends(get_db)):
    """
    Delete a unit.

    - Fails while tenants or payments still reference the unit
    """
    service = UnitService(db)
    service.delete_unit(unit_id)
