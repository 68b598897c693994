"""Display formatting for amounts and share counts (en-US conventions)."""

from decimal import Decimal, ROUND_HALF_UP
from typing import Union

Number = Union[Decimal, int, float]


def format_currency(amount: Number) -> str:
    """Format as US dollars with two decimals: 1234.5 -> '$1,234.50'."""
    value = Decimal(str(amount)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
    sign = "-" if value < 0 else ""
    return f"{sign}${abs(value):,.2f}"


def format_number(num: Number) -> str:
    """Group thousands: 1199998 -> '1,199,998'. Fractional digits are kept as given."""
    value = Decimal(str(num))
    if value == value.to_integral_value():
        return f"{int(value):,}"
    return f"{value:,}"
