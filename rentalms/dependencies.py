from datetime import date
from typing import Optional

from fastapi import Query

from rentalms.core.mailer import ReceiptMailer

_mailer = ReceiptMailer()


def get_mailer() -> ReceiptMailer:
    """
    FastAPI dependency providing the receipt mail transport.

    Tests override this with a mailer that has sending suppressed.
    """
    return _mailer


def get_as_of(
    as_of: Optional[date] = Query(
        None, description="Reference date for due/overdue classification (defaults to today)"
    ),
) -> date:
    """Reference date for rent schedule calculations"""
    return as_of or date.today()
