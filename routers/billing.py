# routers/billing.py

from datetime import datetime

from fastapi import APIRouter, Depends, HTTPException

from dependencies.auth import requires_permission
from core.config import settings
from core.logging_config import get_logger
from core.repository import BOOKINGS, METER_READINGS, ROOMS, SupabaseRepository
from models.billing import (
    BillCalculateRequest,
    BillSummary,
    Booking,
    MeterReading,
    Room,
    RoomBillRequest,
)
from models.enums import BookingStatus
from services.billing_service import calculate_bill

logger = get_logger("billing")

router = APIRouter(
    prefix="/billing",
    tags=["Billing"],
    dependencies=[Depends(requires_permission("billing:read"))],
)


# -------------------------------------------------------------
# POST /billing/calculate — everything supplied inline
# -------------------------------------------------------------
@router.post("/calculate", response_model=BillSummary)
def calculate(payload: BillCalculateRequest):
    return calculate_bill(
        room=payload.room,
        previous=payload.previous,
        current=payload.current,
        booking=payload.booking,
        billing_date=payload.billing_date,
        rent_due_day=payload.rent_due_day,
        additional_charges=payload.additional_charges,
        late_fee_per_day=settings.LATE_FEE_PER_DAY,
    )


# -------------------------------------------------------------
# POST /billing/rooms/{room_id} — load room, readings, booking
# -------------------------------------------------------------
@router.post("/rooms/{room_id}", response_model=BillSummary)
def calculate_for_room(room_id: str, payload: RoomBillRequest):
    room_row = SupabaseRepository(ROOMS).get(room_id)
    if not room_row:
        raise HTTPException(404, "Room not found")

    booking_row = SupabaseRepository(BOOKINGS).get(payload.booking_id)
    if not booking_row:
        raise HTTPException(404, "Booking not found")
    if booking_row.get("room_id") and booking_row["room_id"] != room_id:
        raise HTTPException(400, "Booking does not belong to this room")

    readings = SupabaseRepository(METER_READINGS).list(
        {"room_id": room_id},
        order_by="reading_date",
        desc=True,
        limit=2,
    )
    if len(readings) < 2:
        raise HTTPException(
            400, "At least two meter readings are required to bill this room"
        )

    current, previous = readings[0], readings[1]

    try:
        room = Room(**room_row)
        booking = Booking(**booking_row)
        current_reading = MeterReading(**current)
        previous_reading = MeterReading(**previous)
    except ValueError as e:
        logger.error(f"Malformed billing records for room {room_id}: {e}")
        raise HTTPException(500, "Stored room, booking or meter data is malformed")

    if booking.status == BookingStatus.cancelled:
        raise HTTPException(400, "Cannot bill a cancelled booking")

    summary = calculate_bill(
        room=room,
        previous=previous_reading,
        current=current_reading,
        booking=booking,
        billing_date=payload.billing_date or datetime.now(),
        rent_due_day=payload.rent_due_day,
        additional_charges=payload.additional_charges,
        late_fee_per_day=settings.LATE_FEE_PER_DAY,
    )

    logger.info(f"Bill for room {room_id} / booking {payload.booking_id}: total={summary.total}")
    return summary
