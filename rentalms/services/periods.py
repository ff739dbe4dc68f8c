"""
Billing period arithmetic.

A payment covering N months starts on its seed date and ends the day
before the seed date advanced by N calendar months. Month addition uses
relativedelta, which clamps to the last day of shorter months
(Jan 31 + 1 month == Feb 28/29).
"""

from dataclasses import dataclass
from datetime import date, timedelta
from typing import Optional

from dateutil.relativedelta import relativedelta

from rentalms.core.exceptions import ValidationException

ONE_DAY = timedelta(days=1)


@dataclass(frozen=True)
class BillingPeriod:
    """Inclusive date range covered by one payment"""

    start: date
    end: date


def compute_period(seed: date, months_covered: int) -> BillingPeriod:
    """
    Compute the billing period starting on `seed` and spanning `months_covered` months.

    Raises:
        ValidationException: If months_covered is less than 1
    """
    if months_covered < 1:
        raise ValidationException("Months covered must be at least 1")

    end = seed + relativedelta(months=months_covered) - ONE_DAY
    return BillingPeriod(start=seed, end=end)


def next_period_seed(last_period_end: Optional[date], lease_start: date) -> date:
    """Day after the previous period ended, or the lease start for a first payment"""
    if last_period_end is None:
        return lease_start
    return last_period_end + ONE_DAY
