"""
Display formatters
Pure functions, en-US conventions. No shared formatter state.
"""

from datetime import date, datetime
from decimal import Decimal, ROUND_HALF_UP
from enum import Enum

from app.config import settings
from app.domain.errors import InvalidDiscountKindError


class DiscountCodeType(str, Enum):
    """How a discount code amount is interpreted"""
    PERCENTAGE = "PERCENTAGE"
    FIXED = "FIXED"


def _trim_fraction(text: str) -> str:
    if "." not in text:
        return text
    return text.rstrip("0").rstrip(".")


def _round(value, places: int) -> Decimal:
    exponent = Decimal(1).scaleb(-places)
    return Decimal(str(value)).quantize(exponent, rounding=ROUND_HALF_UP)


def format_currency(amount, symbol: str | None = None) -> str:
    """
    Format an amount in major units, e.g. 1234.5 -> "$1,234.5".

    At most two fraction digits are shown and trailing zeros are dropped.
    """
    symbol = settings.CURRENCY_SYMBOL if symbol is None else symbol
    value = _round(amount, 2)
    sign = "-" if value < 0 else ""
    return f"{sign}{symbol}{_trim_fraction(f'{abs(value):,.2f}')}"


def format_number(amount) -> str:
    """Group thousands, at most three fraction digits."""
    return _trim_fraction(f"{_round(amount, 3):,.3f}")


def format_percent(fraction) -> str:
    """0.15 -> "15%"."""
    return f"{_round(Decimal(str(fraction)) * 100, 0):,.0f}%"


def format_discount_code(discount_amount, discount_type: DiscountCodeType) -> str:
    """
    Render a discount code amount.

    PERCENTAGE amounts are whole percents (15 -> "15%"),
    FIXED amounts are currency in major units.

    Raises:
        InvalidDiscountKindError: If discount_type is not a known kind
    """
    match discount_type:
        case DiscountCodeType.PERCENTAGE:
            return format_percent(Decimal(str(discount_amount)) / 100)
        case DiscountCodeType.FIXED:
            return format_currency(discount_amount)
        case other:
            raise InvalidDiscountKindError(f"Invalid discount code type: {other}")


def format_date(value: date | datetime) -> str:
    """Medium calendar date, e.g. "Jan 5, 2024"."""
    return f"{value:%b} {value.day}, {value.year}"


def format_date_time(value: datetime) -> str:
    """Medium date with short time, e.g. "Jan 5, 2024, 3:04 PM"."""
    hour = value.hour % 12 or 12
    meridiem = "AM" if value.hour < 12 else "PM"
    return f"{format_date(value)}, {hour}:{value.minute:02d} {meridiem}"
