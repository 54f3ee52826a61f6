from enum import Enum


class BaseStrEnum(str, Enum):
    """
    Base enum that serializes cleanly to a string
    and provides a .list() method for UI dropdowns.
    """

    def __str__(self):
        return str(self.value)

    @classmethod
    def list(cls):
        return [item.value for item in cls]


# -----------------------------------------------------
# BOOKING TYPE
# -----------------------------------------------------
class BookingType(BaseStrEnum):
    """Selects which rent rate applies to a booking."""

    daily = "daily"
    monthly = "monthly"


# -----------------------------------------------------
# BOOKING STATUS
# -----------------------------------------------------
class BookingStatus(BaseStrEnum):
    """Booking lifecycle state."""

    pending = "pending"
    confirmed = "confirmed"
    checked_in = "checked_in"
    checked_out = "checked_out"
    cancelled = "cancelled"


# -----------------------------------------------------
# ROOM STATUS
# -----------------------------------------------------
class RoomStatus(BaseStrEnum):
    available = "available"
    occupied = "occupied"
    maintenance = "maintenance"
    reserved = "reserved"
