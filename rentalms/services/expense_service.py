from typing import Optional
from sqlalchemy.orm import Session

from rentalms.core.exceptions import NotFoundException
from rentalms.models.expense import Expense
from rentalms.repositories.expense_repository import ExpenseRepository
from rentalms.repositories.property_repository import PropertyRepository
from rentalms.schemas.expense_schemas import ExpenseCreate, ExpenseUpdate


class ExpenseService:
    """Service for property expenses"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = ExpenseRepository(db)
        self.property_repo = PropertyRepository(db)

    def _ensure_property(self, property_id: int) -> None:
        if not self.property_repo.get_by_id(property_id):
            raise NotFoundException(f"Property {property_id} not found")

    def create_expense(self, data: ExpenseCreate) -> Expense:
        """
        Create an expense against a property.

        Raises:
            NotFoundException: If the property doesn't exist
        """
        self._ensure_property(data.property_id)
        expense = self.repo.create(Expense(**data.model_dump()))
        return self.get_expense(expense.id)

    def get_expenses(self, property_id: Optional[int] = None) -> tuple[list[Expense], int]:
        return self.repo.get_with_filters(property_id=property_id)

    def get_expense(self, expense_id: int) -> Expense:
        expense = self.repo.get_by_id(expense_id)
        if not expense:
            raise NotFoundException(f"Expense {expense_id} not found")
        return expense

    def update_expense(self, expense_id: int, data: ExpenseUpdate) -> Expense:
        expense = self.get_expense(expense_id)
        changes = data.changes()
        if "property_id" in changes:
            self._ensure_property(changes["property_id"])

        for field, value in changes.items():
            setattr(expense, field, value)

        self.repo.update(expense)
        return self.get_expense(expense.id)

    def delete_expense(self, expense_id: int) -> None:
        expense = self.get_expense(expense_id)
        self.repo.delete(expense)
