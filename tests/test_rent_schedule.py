"""
Tests for the rent schedule projection.

The pure functions are exercised with lightweight model instances; the
endpoint tests go through the API with an explicit as_of date.
"""

import pytest
from datetime import date

from rentalms.models.payment import Payment
from rentalms.models.property import Property
from rentalms.models.tenant import Tenant, TenantStatus
from rentalms.models.unit import Unit
from rentalms.services.rent_schedule import classify_due_date, project_schedule, project_tenant

from conftest import payment_payload


def make_tenant(tenant_id=1, start_date=date(2024, 1, 15), status=TenantStatus.ACTIVE):
    prop = Property(id=1, code="SUN", name="Sunset Apartments", address="12 Palm Road")
    unit = Unit(id=tenant_id, property_id=1, code=f"A{tenant_id}", name=f"Apartment {tenant_id}",
                rent_amount=1200)
    unit.property = prop
    tenant = Tenant(
        id=tenant_id,
        unit_id=unit.id,
        name=f"Tenant {tenant_id}",
        email=f"t{tenant_id}@example.com",
        phone="555-0100",
        start_date=start_date,
        status=status,
    )
    tenant.unit = unit
    return tenant


def make_payment(tenant, period_end, payment_date=None):
    return Payment(
        tenant_id=tenant.id,
        unit_id=tenant.unit_id,
        amount=1200,
        payment_date=payment_date or period_end,
        months_covered=1,
        period_start=period_end,
        period_end=period_end,
    )


class TestClassifyDueDate:
    """Tests for due-date classification"""

    def test_scenario_c_overdue(self):
        """Paid through 2024-04-14, checked on 2024-04-20"""
        status = classify_due_date(date(2024, 1, 15), date(2024, 4, 14), date(2024, 4, 20))

        assert status.next_due_date == date(2024, 4, 15)
        assert status.is_overdue is True
        assert status.days_overdue == 5
        assert status.is_due_this_month is True
        assert status.is_due_next_month is False

    def test_lease_starting_today_is_due_not_overdue(self):
        today = date(2024, 6, 10)
        status = classify_due_date(today, None, today)

        assert status.next_due_date == today
        assert status.is_overdue is False
        assert status.days_overdue == 0
        assert status.is_due_this_month is True

    def test_due_next_month(self):
        status = classify_due_date(date(2024, 1, 15), date(2024, 5, 14), date(2024, 4, 20))

        assert status.next_due_date == date(2024, 5, 15)
        assert status.is_overdue is False
        assert status.is_due_this_month is False
        assert status.is_due_next_month is True

    def test_next_month_wraps_year(self):
        status = classify_due_date(date(2023, 1, 1), date(2023, 12, 31), date(2023, 12, 5))

        assert status.next_due_date == date(2024, 1, 1)
        assert status.is_due_next_month is True

    def test_far_future_due_date_in_no_bucket(self):
        status = classify_due_date(date(2024, 1, 15), date(2024, 12, 14), date(2024, 4, 20))

        assert not status.is_overdue
        assert not status.is_due_this_month
        assert not status.is_due_next_month

    def test_overdue_from_previous_month(self):
        status = classify_due_date(date(2024, 1, 15), date(2024, 2, 14), date(2024, 4, 1))

        assert status.is_overdue is True
        assert status.is_due_this_month is False
        assert status.days_overdue == (date(2024, 4, 1) - date(2024, 2, 15)).days


class TestProjectSchedule:
    """Tests for grouping and sorting the projection"""

    def test_project_tenant_carries_unit_and_property(self):
        tenant = make_tenant()
        payment = make_payment(tenant, date(2024, 2, 14), payment_date=date(2024, 1, 16))

        row = project_tenant(tenant, payment, date(2024, 2, 1))

        assert row.tenant_name == "Tenant 1"
        assert row.unit_code == "A1"
        assert row.property_name == "Sunset Apartments"
        assert row.rent_amount == 1200.0
        assert row.last_payment_date == date(2024, 1, 16)
        assert row.last_payment_period_end == date(2024, 2, 14)
        assert row.next_due_date == date(2024, 2, 15)

    def test_buckets_and_sorting(self):
        today = date(2024, 4, 20)
        overdue = make_tenant(1)
        this_month = make_tenant(2)
        next_month = make_tenant(3)
        no_payments = make_tenant(4, start_date=date(2024, 4, 25))

        schedule = project_schedule(
            [
                (next_month, make_payment(next_month, date(2024, 5, 9))),
                (overdue, make_payment(overdue, date(2024, 4, 14))),
                (no_payments, None),
                (this_month, make_payment(this_month, date(2024, 4, 21))),
            ],
            today,
        )

        assert [r.tenant_id for r in schedule.all] == [1, 2, 4, 3]
        assert [r.tenant_id for r in schedule.overdue] == [1]
        assert [r.tenant_id for r in schedule.due_this_month] == [2, 4]
        assert [r.tenant_id for r in schedule.due_next_month] == [3]

    def test_inactive_tenants_excluded(self):
        inactive = make_tenant(1, status=TenantStatus.INACTIVE)
        schedule = project_schedule([(inactive, None)], date(2024, 4, 20))

        assert schedule.all == []
        assert schedule.overdue == []

    def test_projection_is_repeatable(self):
        """Same inputs and same reference date give identical results"""
        tenant = make_tenant()
        pairs = [(tenant, make_payment(tenant, date(2024, 4, 14)))]

        first = project_schedule(pairs, date(2024, 4, 20))
        second = project_schedule(pairs, date(2024, 4, 20))

        assert first == second


class TestUpcomingEndpoint:
    """Tests for GET /api/payments/upcoming"""

    def test_empty_schedule(self, client):
        response = client.get("/api/payments/upcoming", params={"as_of": "2024-04-20"})

        assert response.status_code == 200
        data = response.json()
        assert data["as_of"] == "2024-04-20"
        assert data["all"] == []
        assert data["overdue"] == []

    def test_defaults_to_today(self, client):
        response = client.get("/api/payments/upcoming")

        assert response.status_code == 200
        assert response.json()["as_of"] == str(date.today())

    def test_overdue_after_two_payments(self, client, tenant_id, unit_id):
        """Scenarios A-C: paid through 2024-04-14, overdue on 2024-04-20"""
        client.post("/api/payments", json=payment_payload(tenant_id, unit_id, months=1))
        client.post(
            "/api/payments",
            json=payment_payload(tenant_id, unit_id, months=2, payment_date="2024-02-15"),
        )

        response = client.get("/api/payments/upcoming", params={"as_of": "2024-04-20"})

        assert response.status_code == 200
        data = response.json()
        assert len(data["overdue"]) == 1
        row = data["overdue"][0]
        assert row["tenant_id"] == tenant_id
        assert row["next_due_date"] == "2024-04-15"
        assert row["last_payment_period_end"] == "2024-04-14"
        assert row["last_payment_date"] == "2024-02-15"
        assert row["days_overdue"] == 5
        assert row["property_name"] == "Sunset Apartments"
        assert row["rent_amount"] == 1200.00
        # Overdue rows never appear in the due-this-month bucket
        assert data["due_this_month"] == []

    def test_tenant_without_payments_due_on_lease_start(self, client, tenant_id):
        response = client.get("/api/payments/upcoming", params={"as_of": "2024-01-15"})

        row = response.json()["all"][0]
        assert row["next_due_date"] == "2024-01-15"
        assert row["is_overdue"] is False
        assert row["is_due_this_month"] is True
        assert row["last_payment_date"] is None

    def test_inactive_tenant_not_listed(self, client, tenant_id):
        client.patch(f"/api/tenants/{tenant_id}", json={"status": "inactive"})

        response = client.get("/api/payments/upcoming", params={"as_of": "2024-04-20"})

        assert response.json()["all"] == []

    def test_invalid_as_of(self, client):
        response = client.get("/api/payments/upcoming", params={"as_of": "not-a-date"})

        assert response.status_code == 400
