# core/permissions.py

from dataclasses import dataclass
from typing import Tuple

from models.enums import BaseStrEnum
from core.roles import Role, require_all_roles


# ============================================
# PERMISSION TOKENS (resource:verb)
# ============================================
class Permission(BaseStrEnum):
    # Users
    users_read = "users:read"
    users_create = "users:create"
    users_update = "users:update"
    users_delete = "users:delete"

    # Own profile
    profile_read = "profile:read"
    profile_update = "profile:update"

    # Dashboards
    dashboard_admin = "dashboard:admin"
    dashboard_support = "dashboard:support"
    dashboard_user = "dashboard:user"

    # Settings
    settings_read = "settings:read"
    settings_update = "settings:update"

    # Reports
    reports_read = "reports:read"
    reports_create = "reports:create"
    reports_delete = "reports:delete"

    # Rooms
    rooms_read = "rooms:read"
    rooms_create = "rooms:create"
    rooms_update = "rooms:update"
    rooms_delete = "rooms:delete"

    # Bookings
    bookings_read = "bookings:read"
    bookings_create = "bookings:create"
    bookings_update = "bookings:update"
    bookings_delete = "bookings:delete"

    # Meter readings / billing
    meter_readings_read = "meter_readings:read"
    meter_readings_create = "meter_readings:create"
    billing_read = "billing:read"


ALL_PERMISSIONS = frozenset(Permission)


# ============================================
# PERMISSION GROUPS
# ============================================
PERMISSION_GROUPS = {
    "USER_MANAGEMENT": (
        Permission.users_read,
        Permission.users_create,
        Permission.users_update,
        Permission.users_delete,
    ),
    "PROFILE_MANAGEMENT": (
        Permission.profile_read,
        Permission.profile_update,
    ),
    "DASHBOARD_ACCESS": (
        Permission.dashboard_admin,
        Permission.dashboard_support,
        Permission.dashboard_user,
    ),
    "SETTINGS_MANAGEMENT": (
        Permission.settings_read,
        Permission.settings_update,
    ),
    "REPORTS_MANAGEMENT": (
        Permission.reports_read,
        Permission.reports_create,
        Permission.reports_delete,
    ),
    "ROOM_MANAGEMENT": (
        Permission.rooms_read,
        Permission.rooms_create,
        Permission.rooms_update,
        Permission.rooms_delete,
    ),
    "BOOKING_MANAGEMENT": (
        Permission.bookings_read,
        Permission.bookings_create,
        Permission.bookings_update,
        Permission.bookings_delete,
    ),
    "METER_READINGS": (
        Permission.meter_readings_read,
        Permission.meter_readings_create,
        Permission.billing_read,
    ),
}


# ============================================
# CENTRALIZED ROLE → PERMISSIONS MAP
# ============================================
ROLE_PERMISSIONS = {

    # =====================================================
    # ADMIN — full access to everything
    # =====================================================
    Role.admin: ALL_PERMISSIONS,

    # =====================================================
    # SUPPORT — assists tenants, runs bookings & readings
    # =====================================================
    Role.support: frozenset({
        Permission.users_read, Permission.users_update,
        Permission.profile_read, Permission.profile_update,
        Permission.dashboard_support, Permission.dashboard_user,
        Permission.settings_read,
        Permission.reports_read,
        Permission.rooms_read,
        Permission.bookings_read, Permission.bookings_create, Permission.bookings_update,
        Permission.meter_readings_read, Permission.meter_readings_create,
        Permission.billing_read,
    }),

    # =====================================================
    # USER (tenant) — own profile, rooms, own bookings
    # =====================================================
    Role.user: frozenset({
        Permission.profile_read, Permission.profile_update,
        Permission.dashboard_user,
        Permission.rooms_read,
        Permission.bookings_read, Permission.bookings_create,
    }),
}


# ============================================
# PROTECTED ROUTES
# ============================================
@dataclass(frozen=True)
class ProtectedRoute:
    path_prefix: str
    allowed_roles: Tuple[Role, ...]
    required_permissions: Tuple[Permission, ...] = ()


# First match wins: more specific prefixes MUST come before their parents.
PROTECTED_ROUTES: Tuple[ProtectedRoute, ...] = (
    ProtectedRoute("/admin/users", (Role.admin,), (Permission.users_read,)),
    ProtectedRoute(
        "/admin/settings",
        (Role.admin,),
        (Permission.settings_read, Permission.settings_update),
    ),
    ProtectedRoute("/admin/rooms", (Role.admin,), (Permission.rooms_update,)),
    ProtectedRoute("/admin", (Role.admin,), (Permission.dashboard_admin,)),
    ProtectedRoute(
        "/support",
        (Role.admin, Role.support),
        (Permission.dashboard_support,),
    ),
    ProtectedRoute(
        "/dashboard",
        (Role.admin, Role.support, Role.user),
        (Permission.dashboard_user,),
    ),
    ProtectedRoute(
        "/profile",
        (Role.admin, Role.support, Role.user),
        (Permission.profile_read,),
    ),
    ProtectedRoute(
        "/reports",
        (Role.admin, Role.support),
        (Permission.reports_read,),
    ),
    ProtectedRoute(
        "/meter-readings",
        (Role.admin, Role.support),
        (Permission.meter_readings_read,),
    ),
    ProtectedRoute(
        "/rooms",
        (Role.admin, Role.support, Role.user),
        (Permission.rooms_read,),
    ),
    ProtectedRoute(
        "/bookings",
        (Role.admin, Role.support, Role.user),
        (Permission.bookings_read,),
    ),
    ProtectedRoute(
        "/tenants",
        (Role.admin, Role.support),
        (Permission.users_read,),
    ),
)

# No auth required
PUBLIC_ROUTES = ("/", "/about", "/contact", "/terms", "/privacy")

# Redirect to the landing page when already logged in
AUTH_ROUTES = ("/login", "/register", "/forgot-password", "/reset-password")


require_all_roles(ROLE_PERMISSIONS, "ROLE_PERMISSIONS")
