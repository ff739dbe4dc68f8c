"""Repository for Tenant model operations."""

from typing import Optional
from sqlalchemy.orm import Session, selectinload

from rentalms.models.tenant import Tenant, TenantStatus
from rentalms.models.unit import Unit


class TenantRepository:
    """Repository for Tenant model operations"""

    def __init__(self, db: Session):
        self.db = db

    def get_by_id(self, tenant_id: int) -> Tenant | None:
        """
        Get tenant by ID.

        Args:
            tenant_id: Tenant ID

        Returns:
            Tenant object or None if not found
        """
        return self.db.query(Tenant).filter(Tenant.id == tenant_id).first()

    def get_by_id_with_relations(self, tenant_id: int) -> Tenant | None:
        """Get tenant with unit, property and payments loaded"""
        return (
            self.db.query(Tenant)
            .options(
                selectinload(Tenant.unit).selectinload(Unit.property),
                selectinload(Tenant.payments),
            )
            .filter(Tenant.id == tenant_id)
            .first()
        )

    def get_all(
        self, status: Optional[TenantStatus] = None, with_payments: bool = True
    ) -> list[Tenant]:
        """
        Get tenants, newest first, with unit and property loaded.

        Args:
            status: Only return tenants with this status
            with_payments: Also eager-load every payment (list counts need it;
                the rent schedule looks up latest payments separately)

        Returns:
            List of Tenant objects
        """
        options = [selectinload(Tenant.unit).selectinload(Unit.property)]
        if with_payments:
            options.append(selectinload(Tenant.payments))

        query = self.db.query(Tenant).options(*options)
        if status is not None:
            query = query.filter(Tenant.status == status)
        return query.order_by(Tenant.created_at.desc(), Tenant.id.desc()).all()

    def count(self, status: Optional[TenantStatus] = None, unit_id: Optional[int] = None) -> int:
        """
        Count tenants.

        Args:
            status: Only count tenants with this status
            unit_id: Only count tenants assigned to this unit

        Returns:
            Number of matching tenants
        """
        query = self.db.query(Tenant)
        if status is not None:
            query = query.filter(Tenant.status == status)
        if unit_id is not None:
            query = query.filter(Tenant.unit_id == unit_id)
        return query.count()

    def create(self, tenant: Tenant) -> Tenant:
        """
        Create a new tenant.

        Args:
            tenant: Tenant object to create

        Returns:
            Created Tenant object with ID populated
        """
        self.db.add(tenant)
        self.db.commit()
        self.db.refresh(tenant)
        return tenant

    def update(self, tenant: Tenant) -> Tenant:
        """
        Update an existing tenant.

        Args:
            tenant: Tenant object with updated fields

        Returns:
            Updated Tenant object
        """
        self.db.commit()
        self.db.refresh(tenant)
        return tenant

    def delete(self, tenant: Tenant) -> None:
        """
        Delete a tenant.

        WARNING: This will cascade delete all payments recorded for the tenant.

        Args:
            tenant: Tenant object to delete
        """
        self.db.delete(tenant)
        self.db.commit()
