"""
Rent schedule projection: who owes rent, and when.

Everything here is a pure function of stored tenant/payment data and the
`today` passed in by the caller; nothing reads the clock.
"""

from dataclasses import dataclass, field
from datetime import date
from typing import Iterable, Optional

from dateutil.relativedelta import relativedelta

from rentalms.models.payment import Payment
from rentalms.models.tenant import Tenant, TenantStatus
from rentalms.services.periods import next_period_seed


@dataclass(frozen=True)
class RentDueStatus:
    """Due-date classification of a single tenant relative to `today`"""

    next_due_date: date
    is_overdue: bool
    is_due_this_month: bool
    is_due_next_month: bool
    days_overdue: int


@dataclass(frozen=True)
class UpcomingPayment:
    """One row of the upcoming/overdue rent schedule"""

    tenant_id: int
    tenant_name: str
    tenant_email: str
    unit_name: str
    unit_code: str
    property_name: str
    rent_amount: float
    next_due_date: date
    last_payment_date: Optional[date]
    last_payment_period_end: Optional[date]
    is_overdue: bool
    is_due_this_month: bool
    is_due_next_month: bool
    days_overdue: int


@dataclass
class RentSchedule:
    """Projection grouped into buckets; `all` is sorted by next due date"""

    overdue: list[UpcomingPayment] = field(default_factory=list)
    due_this_month: list[UpcomingPayment] = field(default_factory=list)
    due_next_month: list[UpcomingPayment] = field(default_factory=list)
    all: list[UpcomingPayment] = field(default_factory=list)


def _same_month(d: date, reference: date) -> bool:
    return d.year == reference.year and d.month == reference.month


def classify_due_date(lease_start: date, last_period_end: Optional[date], today: date) -> RentDueStatus:
    next_due = next_period_seed(last_period_end, lease_start)
    is_overdue = next_due < today

    return RentDueStatus(
        next_due_date=next_due,
        is_overdue=is_overdue,
        is_due_this_month=_same_month(next_due, today),
        is_due_next_month=_same_month(next_due, today + relativedelta(months=1)),
        days_overdue=(today - next_due).days if is_overdue else 0,
    )


def project_tenant(tenant: Tenant, last_payment: Optional[Payment], today: date) -> UpcomingPayment:
    """
    Project the next due date for one tenant.

    Args:
        tenant: Tenant with unit and unit.property loaded
        last_payment: Tenant's payment with the latest period_end, if any
        today: Reference date for overdue/month classification
    """
    status = classify_due_date(
        tenant.start_date,
        last_payment.period_end if last_payment else None,
        today,
    )
    unit = tenant.unit

    return UpcomingPayment(
        tenant_id=tenant.id,
        tenant_name=tenant.name,
        tenant_email=tenant.email,
        unit_name=unit.name,
        unit_code=unit.code,
        property_name=unit.property.name,
        rent_amount=float(unit.rent_amount),
        next_due_date=status.next_due_date,
        last_payment_date=last_payment.payment_date if last_payment else None,
        last_payment_period_end=last_payment.period_end if last_payment else None,
        is_overdue=status.is_overdue,
        is_due_this_month=status.is_due_this_month,
        is_due_next_month=status.is_due_next_month,
        days_overdue=status.days_overdue,
    )


def project_schedule(
    tenants: Iterable[tuple[Tenant, Optional[Payment]]], today: date
) -> RentSchedule:
    """
    Build the rent schedule for (tenant, latest payment) pairs.

    Inactive tenants are skipped. Overdue tenants are excluded from the
    due-this-month bucket.
    """
    rows = [
        project_tenant(tenant, last_payment, today)
        for tenant, last_payment in tenants
        if tenant.status == TenantStatus.ACTIVE
    ]
    rows.sort(key=lambda row: (row.next_due_date, row.tenant_id))

    return RentSchedule(
        overdue=[row for row in rows if row.is_overdue],
        due_this_month=[row for row in rows if row.is_due_this_month and not row.is_overdue],
        due_next_month=[row for row in rows if row.is_due_next_month],
        all=rows,
    )
