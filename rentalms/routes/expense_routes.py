from typing import Optional
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from rentalms.database import get_db
from rentalms.services.expense_service import ExpenseService
from rentalms.schemas.expense_schemas import (
    ExpenseCreate,
    ExpenseUpdate,
    ExpenseWithPropertyResponse,
    ExpenseListResponse,
)

router = APIRouter()


@router.post("/", response_model=ExpenseWithPropertyResponse, status_code=status.HTTP_201_CREATED)
def create_expense(data: ExpenseCreate, db: Session = Depends(get_db)):
    """
    Record an expense against a property.

    - Returns 404 if the property doesn't exist
    """
    service = ExpenseService(db)
    return service.create_expense(data)


@router.get("/", response_model=ExpenseListResponse)
def list_expenses(
    property_id: Optional[int] = Query(None, description="Filter by property ID"),
    db: Session = Depends(get_db),
):
    """List expenses, newest date first"""
    service = ExpenseService(db)
    expenses, total = service.get_expenses(property_id=property_id)
    return ExpenseListResponse(expenses=expenses, total=total)


@router.get("/{expense_id}", response_model=ExpenseWithPropertyResponse)
def get_expense(expense_id: int, db: Session = Depends(get_db)):
    service = ExpenseService(db)
    return service.get_expense(expense_id)


@router.patch("/{expense_id}", response_model=ExpenseWithPropertyResponse)
def update_expense(expense_id: int, data: ExpenseUpdate, db: Session = Depends(get_db)):
    """Update an expense (partial)"""
    service = ExpenseService(db)
    return service.update_expense(expense_id, data)


@router.delete("/{expense_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_expense(expense_id: int, db: Session = Depends(get_db)):
    service = ExpenseService(db)
    service.delete_expense(expense_id)
