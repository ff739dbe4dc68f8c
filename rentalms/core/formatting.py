from datetime import date
from decimal import Decimal

# Currencies rendered with a symbol and cents; anything else gets the ISO
# code prefix and whole units (e.g. "UGX 1,500,000").
_SYMBOLS = {
    "USD": "$",
    "EUR": "€",
    "GBP": "£",
}


def format_currency(amount: float | Decimal | str, currency: str = "USD") -> str:
    """Format an amount for display, e.g. format_currency(1500) -> '$1,500.00'"""
    value = Decimal(str(amount))
    code = currency.upper()
    symbol = _SYMBOLS.get(code)
    if symbol is not None:
        sign = "-" if value < 0 else ""
        return f"{sign}{symbol}{abs(value):,.2f}"
    return f"{code} {value:,.0f}"


def format_long_date(value: date) -> str:
    """Long US date, e.g. 'January 15, 2024'"""
    return f"{value:%B} {value.day}, {value.year}"
