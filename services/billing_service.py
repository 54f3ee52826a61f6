# services/billing_service.py

"""
Utility + rent bill calculation for one room / booking / reading pair.

Pure function of its inputs: no I/O, no shared state, no validation.
Negative rates or readings propagate arithmetically; callers are expected
to validate persisted data before calling.
"""

import calendar
import math
from datetime import date, datetime, time, timedelta
from typing import Iterable, Optional, Union

from models.billing import AdditionalCharge, BillSummary, Booking, MeterReading, Room
from models.enums import BookingType


LATE_FEE_PER_DAY = 100
ONE_DAY = timedelta(days=1)


def _as_datetime(value: Union[date, datetime]) -> datetime:
    if isinstance(value, datetime):
        return value
    return datetime.combine(value, time())


def _due_date(billing_date: datetime, rent_due_day: int) -> datetime:
    # Day 31 in a 30-day month (or 29-31 in February) falls on the last day.
    last_day = calendar.monthrange(billing_date.year, billing_date.month)[1]
    return billing_date.replace(day=max(1, min(int(rent_due_day), last_day)))


def calculate_late_fee(
    billing_date: Union[date, datetime],
    rent_due_day: int,
    late_fee_per_day: float = LATE_FEE_PER_DAY,
) -> float:
    """
    Per-day penalty when billing_date is strictly after the due day of the
    same month. Billing on the due day itself costs nothing.
    """
    billed_at = _as_datetime(billing_date)
    diff = billed_at - _due_date(billed_at, rent_due_day)
    if diff <= timedelta(0):
        return 0
    days_late = math.ceil(diff / ONE_DAY)
    return days_late * late_fee_per_day


def calculate_bill(
    room: Room,
    previous: MeterReading,
    current: MeterReading,
    booking: Booking,
    billing_date: Union[date, datetime],
    rent_due_day: Optional[int] = None,
    additional_charges: Optional[Iterable[AdditionalCharge]] = None,
    late_fee_per_day: float = LATE_FEE_PER_DAY,
) -> BillSummary:
    # A reading lower than the previous one (meter reset, out-of-order entry)
    # counts as zero usage.
    water_usage = max(0, current.water_meter - previous.water_meter)
    electric_usage = max(0, current.electric_meter - previous.electric_meter)

    water_cost = water_usage * room.water_rate
    electric_cost = electric_usage * room.electric_rate

    is_monthly = booking.booking_type == BookingType.monthly.value
    base_rent = room.rate_monthly if is_monthly else room.rate_daily

    late_fee = 0
    if is_monthly and rent_due_day is not None:
        late_fee = calculate_late_fee(billing_date, rent_due_day, late_fee_per_day)

    additional_total = sum(c.amount for c in additional_charges or ())

    total = base_rent + water_cost + electric_cost + late_fee + additional_total

    return BillSummary(
        water_usage=water_usage,
        electric_usage=electric_usage,
        water_cost=water_cost,
        electric_cost=electric_cost,
        base_rent=base_rent,
        late_fee=late_fee,
        additional_total=additional_total,
        total=total,
    )
