# models/billing.py

from typing import List, Optional
from datetime import date, datetime
from pydantic import BaseModel, Field

from models.enums import BookingStatus, RoomStatus


# ===============================================================
# INPUT SNAPSHOTS (read from the rooms / meter_readings / bookings tables)
# ===============================================================

class Room(BaseModel):
    """Per-unit and per-period prices for a room."""
    water_rate: float
    electric_rate: float
    rate_daily: float
    rate_monthly: float

    id: Optional[str] = None
    number: Optional[str] = None
    status: Optional[RoomStatus] = None
    common_fee: Optional[float] = None


class MeterReading(BaseModel):
    """Cumulative water / electric counters at a point in time."""
    water_meter: float
    electric_meter: float

    id: Optional[str] = None
    room_id: Optional[str] = None
    reading_date: Optional[date] = None


class Booking(BaseModel):
    # "monthly" selects the monthly rate; anything else is billed daily
    booking_type: str

    id: Optional[str] = None
    room_id: Optional[str] = None
    tenant_id: Optional[str] = None
    status: Optional[BookingStatus] = None


class AdditionalCharge(BaseModel):
    description: Optional[str] = None
    amount: float


# ===============================================================
# API PAYLOADS
# ===============================================================

class BillCalculateRequest(BaseModel):
    """Inline payload for POST /billing/calculate."""
    room: Room
    previous: MeterReading
    current: MeterReading
    booking: Booking
    billing_date: datetime
    rent_due_day: Optional[int] = Field(None, ge=1, le=31)
    additional_charges: List[AdditionalCharge] = []


class RoomBillRequest(BaseModel):
    """Payload for POST /billing/rooms/{room_id}; records are loaded from Supabase."""
    booking_id: str
    billing_date: Optional[datetime] = None
    rent_due_day: Optional[int] = Field(None, ge=1, le=31)
    additional_charges: List[AdditionalCharge] = []


# ===============================================================
# OUTPUT
# ===============================================================

class BillSummary(BaseModel):
    water_usage: float
    electric_usage: float
    water_cost: float
    electric_cost: float
    base_rent: float
    late_fee: float
    additional_total: float = 0
    total: float
