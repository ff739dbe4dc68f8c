"""
Payment receipt emails.

ReceiptMailer renders templates/receipt.html for a recorded payment and
sends it through fastapi-mail. Delivery problems never propagate:
send_receipt always returns a MailResult, and the payment workflow decides
what to do with it.
"""

import asyncio
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from fastapi_mail import ConnectionConfig, FastMail, MessageSchema, MessageType

from rentalms.config import Settings, settings as default_settings
from rentalms.core.formatting import format_currency, format_long_date
from rentalms.models.payment import Payment

logger = logging.getLogger(__name__)

RECEIPT_SUBJECT = "Payment Receipt - Rental Management System"
RECEIPT_TEMPLATE = "receipt.html"
TEMPLATE_FOLDER = Path(__file__).resolve().parent.parent / "templates"


@dataclass(frozen=True)
class MailResult:
    success: bool
    error: Optional[str] = None


def build_connection_config(config: Settings) -> ConnectionConfig:
    """Map application SMTP settings onto fastapi-mail's connection config"""
    return ConnectionConfig(
        MAIL_USERNAME=config.SMTP_USER or "",
        MAIL_PASSWORD=config.SMTP_PASSWORD or "",
        MAIL_FROM=config.SMTP_FROM,
        MAIL_PORT=config.SMTP_PORT,
        MAIL_SERVER=config.SMTP_HOST,
        MAIL_STARTTLS=config.SMTP_USE_TLS,
        MAIL_SSL_TLS=False,
        USE_CREDENTIALS=bool(config.SMTP_USER),
        VALIDATE_CERTS=True,
        TIMEOUT=config.SMTP_TIMEOUT,
        SUPPRESS_SEND=1 if config.SMTP_SUPPRESS_SEND else 0,
        TEMPLATE_FOLDER=TEMPLATE_FOLDER,
    )


def receipt_number(payment: Payment) -> str:
    """Caller-supplied reference, falling back to the payment id"""
    return payment.reference or str(payment.id)


def receipt_context(payment: Payment, currency: str = "USD") -> dict:
    """
    Template variables for a payment receipt.

    The payment must have tenant, unit and unit.property loaded.
    """
    unit = payment.unit
    return {
        "tenant_name": payment.tenant.name,
        "receipt_number": receipt_number(payment),
        "payment_date": format_long_date(payment.payment_date),
        "property_name": unit.property.name,
        "unit_name": unit.name,
        "unit_code": unit.code,
        "period_start": format_long_date(payment.period_start),
        "period_end": format_long_date(payment.period_end),
        "months_covered": payment.months_covered,
        "amount": format_currency(payment.amount, currency),
    }


class ReceiptMailer:
    """Sends payment receipts over SMTP"""

    def __init__(self, config: Settings = default_settings):
        self.config = config
        self.conf = build_connection_config(config)
        self.fm = FastMail(self.conf)

    def render(self, payment: Payment) -> str:
        """Receipt HTML exactly as it is sent"""
        template = self.conf.template_engine().get_template(RECEIPT_TEMPLATE)
        return template.render(**receipt_context(payment, self.config.CURRENCY))

    def build_message(self, payment: Payment) -> MessageSchema:
        return MessageSchema(
            subject=RECEIPT_SUBJECT,
            recipients=[payment.tenant.email],
            template_body=receipt_context(payment, self.config.CURRENCY),
            subtype=MessageType.html,
        )

    def send_receipt(self, payment: Payment) -> MailResult:
        """
        Email a receipt for `payment` to its tenant.

        Called from sync request handlers running in the threadpool, so the
        send runs on its own event loop.

        Returns:
            MailResult(success=True) once the SMTP server accepted the message,
            otherwise MailResult(success=False, error=...). Never raises.
        """
        try:
            message = self.build_message(payment)
            asyncio.run(self.fm.send_message(message, template_name=RECEIPT_TEMPLATE))
        except Exception as e:
            logger.warning(
                "Failed to send receipt email: %s",
                e,
                exc_info=True,
                extra={"payment_id": payment.id, "tenant_id": payment.tenant_id},
            )
            return MailResult(success=False, error=str(e) or e.__class__.__name__)

        logger.info(
            "Receipt email sent",
            extra={"payment_id": payment.id, "tenant_id": payment.tenant_id},
        )
        return MailResult(success=True)
