# -------------------------
# Enums
# -------------------------
from .enums import (
    BaseStrEnum,
    BookingStatus,
    BookingType,
    RoomStatus,
)

# -------------------------
# Billing Models
# -------------------------
from .billing import (
    AdditionalCharge,
    BillCalculateRequest,
    BillSummary,
    Booking,
    MeterReading,
    Room,
    RoomBillRequest,
)

# -------------------------
# User / Session Models (Supabase Auth)
# -------------------------
from .user import (
    RoleInfo,
    RoleUpdate,
    RouteAccessRead,
    SessionRead,
    UserRead,
)

__all__ = [
    # enums
    "BaseStrEnum",
    "BookingStatus",
    "BookingType",
    "RoomStatus",

    # billing
    "AdditionalCharge",
    "BillCalculateRequest",
    "BillSummary",
    "Booking",
    "MeterReading",
    "Room",
    "RoomBillRequest",

    # users
    "RoleInfo",
    "RoleUpdate",
    "RouteAccessRead",
    "SessionRead",
    "UserRead",
]
