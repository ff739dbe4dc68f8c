from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from rentalms.database import get_db
from rentalms.services.tenant_service import TenantService
from rentalms.schemas.detail_schemas import TenantDetailResponse
from rentalms.schemas.tenant_schemas import (
    TenantCreate,
    TenantUpdate,
    TenantWithUnitResponse,
    TenantListItem,
    TenantListResponse,
)

router = APIRouter()


@router.post("/", response_model=TenantWithUnitResponse, status_code=status.HTTP_201_CREATED)
def create_tenant(data: TenantCreate, db: Session = Depends(get_db)):
    """
    Create a tenant and assign them to a unit.

    - Marks the unit as occupied
    - Returns 404 if the unit doesn't exist
    """
    service = TenantService(db)
    return service.create_tenant(data)


@router.get("/", response_model=TenantListResponse)
def list_tenants(db: Session = Depends(get_db)):
    """List tenants (newest first) with unit, property and payment count"""
    service = TenantService(db)
    items = [
        TenantListItem(
            **TenantWithUnitResponse.model_validate(row["tenant"]).model_dump(),
            payment_count=row["payment_count"],
        )
        for row in service.get_tenants()
    ]
    return TenantListResponse(tenants=items, total=len(items))


@router.get("/{tenant_id}", response_model=TenantDetailResponse)
def get_tenant(tenant_id: int, db: Session = Depends(get_db)):
    """Get a tenant with unit, property and payments (newest payment first)"""
    service = TenantService(db)
    tenant = service.get_tenant(tenant_id)
    response = TenantDetailResponse.model_validate(tenant)
    response.payments.sort(key=lambda p: (p.payment_date, p.id), reverse=True)
    return response


@router.patch("/{tenant_id}", response_model=TenantWithUnitResponse)
def update_tenant(tenant_id: int, data: TenantUpdate, db: Session = Depends(get_db)):
    """Update tenant details (partial)"""
    service = TenantService(db)
    return service.update_tenant(tenant_id, data)


@router.delete("/{tenant_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_tenant(tenant_id: int, db: Session = Depends(get_db)):
    """
    Delete a tenant and their payments.

    - Sets the unit back to vacant when no active tenant remains on it
    """
    service = TenantService(db)
    service.delete_tenant(tenant_id)
