from typing import Optional
from sqlalchemy.orm import Session, selectinload

from rentalms.models.expense import Expense


class ExpenseRepository:
    """Repository for Expense data access"""

    def __init__(self, db: Session):
        self.db = db

    def get_by_id(self, expense_id: int) -> Optional[Expense]:
        """Get expense by ID with its property loaded"""
        return (
            self.db.query(Expense)
            .options(selectinload(Expense.property))
            .filter(Expense.id == expense_id)
            .first()
        )

    def get_with_filters(self, property_id: Optional[int] = None) -> tuple[list[Expense], int]:
        """
        Get expenses, newest first.

        Args:
            property_id: Optional property filter

        Returns:
            Tuple of (expenses list, total count)
        """
        query = self.db.query(Expense).options(selectinload(Expense.property))

        if property_id is not None:
            query = query.filter(Expense.property_id == property_id)

        expenses = query.order_by(Expense.date.desc(), Expense.id.desc()).all()
        return expenses, len(expenses)

    def create(self, expense: Expense) -> Expense:
        """Create a new expense"""
        self.db.add(expense)
        self.db.commit()
        self.db.refresh(expense)
        return expense

    def update(self, expense: Expense) -> Expense:
        """Update an expense"""
        self.db.commit()
        self.db.refresh(expense)
        return expense

    def delete(self, expense: Expense) -> None:
        """Delete an expense"""
        self.db.delete(expense)
        self.db.commit()
