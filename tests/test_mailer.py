from datetime import date
from decimal import Decimal
from unittest.mock import AsyncMock

import pytest
from fastapi_mail.errors import ConnectionErrors

from rentalms.config import Settings
from rentalms.core.formatting import format_currency, format_long_date
from rentalms.core.mailer import RECEIPT_SUBJECT, ReceiptMailer, receipt_context, receipt_number
from rentalms.models.payment import Payment
from rentalms.models.property import Property
from rentalms.models.tenant import Tenant
from rentalms.models.unit import Unit

from conftest import html_body


def make_payment(**overrides) -> Payment:
    """Transient payment with tenant, unit and property attached"""
    prop = Property(id=1, code="SUN", name="Sunset Apartments", address="12 Palm Road")
    unit = Unit(id=2, property_id=1, code="A1", name="Apartment 1", rent_amount=Decimal("1200"))
    unit.property = prop
    tenant = Tenant(id=3, unit_id=2, name="Jane Doe", email="jane@example.com", phone="555-0100",
                    start_date=date(2024, 1, 15))
    fields = {
        "id": 42,
        "tenant_id": 3,
        "unit_id": 2,
        "amount": Decimal("1200.00"),
        "payment_date": date(2024, 1, 15),
        "months_covered": 1,
        "period_start": date(2024, 1, 15),
        "period_end": date(2024, 2, 14),
        "reference": None,
    }
    fields.update(overrides)
    payment = Payment(**fields)
    payment.tenant = tenant
    payment.unit = unit
    return payment


class TestFormatting:
    @pytest.mark.parametrize(
        "amount, currency, expected",
        [
            (1500, "USD", "$1,500.00"),
            (Decimal("1200.5"), "USD", "$1,200.50"),
            (0, "USD", "$0.00"),
            (99.999, "GBP", "£100.00"),
            (1500000, "UGX", "UGX 1,500,000"),
            (-25, "usd", "-$25.00"),
        ],
    )
    def test_format_currency(self, amount, currency, expected):
        assert format_currency(amount, currency) == expected

    def test_format_long_date(self):
        assert format_long_date(date(2024, 1, 15)) == "January 15, 2024"
        assert format_long_date(date(2023, 12, 1)) == "December 1, 2023"


class TestReceiptRendering:
    def render(self, payment, **overrides) -> str:
        config = Settings(**overrides)
        return ReceiptMailer(config).render(payment)

    def test_render_receipt_fields(self):
        html = self.render(make_payment())

        assert "Dear Jane Doe," in html
        assert "<span>42</span>" in html
        assert "Sunset Apartments" in html
        assert "Apartment 1 (A1)" in html
        assert "January 15, 2024 - February 14, 2024" in html
        assert "1 month(s)" in html
        assert "$1,200.00" in html

    def test_reference_used_as_receipt_number(self):
        payment = make_payment(reference="TRX-9")

        assert receipt_number(payment) == "TRX-9"
        assert receipt_number(make_payment()) == "42"
        assert receipt_context(payment)["receipt_number"] == "TRX-9"

    def test_fields_are_escaped(self):
        payment = make_payment()
        payment.tenant.name = "<script>alert(1)</script>"

        html = self.render(payment)

        assert "<script>" not in html
        assert "&lt;script&gt;" in html

    def test_currency_setting(self):
        html = self.render(make_payment(amount=Decimal("1500000")), CURRENCY="UGX")

        assert "UGX 1,500,000" in html


class TestReceiptMailer:
    def make_mailer(self, **overrides) -> ReceiptMailer:
        config = Settings(
            SMTP_HOST="mail.test", SMTP_PORT=2525, SMTP_FROM="rent@example.com", **overrides
        )
        return ReceiptMailer(config)

    def test_connection_config(self):
        conf = self.make_mailer(SMTP_USE_TLS=True, SMTP_USER="bot", SMTP_PASSWORD="pw").conf

        assert conf.MAIL_SERVER == "mail.test"
        assert conf.MAIL_PORT == 2525
        assert conf.MAIL_FROM == "rent@example.com"
        assert conf.MAIL_STARTTLS is True
        assert conf.USE_CREDENTIALS is True
        assert conf.MAIL_USERNAME == "bot"

    def test_no_credentials_without_user(self):
        conf = self.make_mailer().conf

        assert conf.USE_CREDENTIALS is False
        assert conf.MAIL_STARTTLS is False
        assert conf.SUPPRESS_SEND == 0

    def test_build_message(self):
        message = self.make_mailer().build_message(make_payment())

        assert message.subject == RECEIPT_SUBJECT
        assert [r.email for r in message.recipients] == ["jane@example.com"]
        assert message.template_body["tenant_name"] == "Jane Doe"

    def test_send_receipt_success(self):
        mailer = self.make_mailer(SMTP_SUPPRESS_SEND=True)

        with mailer.fm.record_messages() as outbox:
            result = mailer.send_receipt(make_payment())

        assert result.success
        assert result.error is None
        assert len(outbox) == 1
        assert outbox[0]["Subject"] == RECEIPT_SUBJECT
        assert "rent@example.com" in outbox[0]["From"]
        assert "Apartment 1 (A1)" in html_body(outbox[0])

    def test_send_receipt_failure_never_raises(self):
        mailer = self.make_mailer()
        mailer.fm.send_message = AsyncMock(
            side_effect=ConnectionErrors("Exception raised 421 Service not available")
        )

        result = mailer.send_receipt(make_payment())

        assert not result.success
        assert "Service not available" in result.error

    def test_render_failure_is_reported(self):
        payment = make_payment()
        payment.unit.property = None

        mailer = self.make_mailer()
        mailer.fm.send_message = AsyncMock()

        result = mailer.send_receipt(payment)

        assert not result.success
        mailer.fm.send_message.assert_not_awaited()
