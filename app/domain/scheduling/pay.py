"""Staff pay derived from a contract's hourly rate"""

from decimal import ROUND_HALF_UP, Decimal
from typing import Optional, Union

Number = Union[Decimal, int, float, str]

CENT = Decimal("0.01")


def to_decimal(value: Optional[Number]) -> Optional[Decimal]:
    if value is None:
        return None
    if isinstance(value, Decimal):
        return value
    # str() keeps floats like 15.1 from turning into 15.0999999...
    return Decimal(str(value))


def estimate(hourly_rate: Optional[Number], duration_minutes: int) -> Optional[Decimal]:
    """Pay for one job: hourly_rate * duration in hours, rounded half-up to the cent.

    Returns None when the contract has no hourly rate.
    """
    rate = to_decimal(hourly_rate)
    if rate is None:
        return None
    return (rate * Decimal(duration_minutes) / Decimal(60)).quantize(CENT, rounding=ROUND_HALF_UP)


def resolve_pay(
    override: Optional[Number], hourly_rate: Optional[Number], duration_minutes: int
) -> Optional[Decimal]:
    """An explicit pay amount always wins unchanged; the estimate only fills its absence"""
    if override is not None:
        return to_decimal(override)
    return estimate(hourly_rate, duration_minutes)
