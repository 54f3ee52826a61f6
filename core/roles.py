# core/roles.py

from typing import Mapping, Optional

from models.enums import BaseStrEnum


# ============================================
# SYSTEM ROLES
# ============================================
class Role(BaseStrEnum):
    """Closed set of system roles, stored in Supabase user_metadata."""

    admin = "admin"
    support = "support"
    user = "user"


# Default role for new users
DEFAULT_USER_ROLE = Role.user


def require_all_roles(table: Mapping, name: str) -> None:
    """
    Import-time guard: every role-keyed table must cover every Role.
    """
    missing = [r.value for r in Role if r not in table]
    if missing:
        raise RuntimeError(f"{name} is missing entries for roles: {', '.join(missing)}")


def parse_role(value) -> Optional[Role]:
    """
    Coerce a raw role value (str / Role / anything) into a Role.
    Returns None for anything unrecognized; callers treat None as
    'no privileges'.
    """
    if isinstance(value, Role):
        return value
    if not isinstance(value, str):
        return None
    try:
        return Role(value.strip().lower())
    except ValueError:
        return None


# ============================================
# ROLE HIERARCHY (higher number = more privileges)
# ============================================
ROLE_HIERARCHY = {
    Role.admin: 3,
    Role.support: 2,
    Role.user: 1,
}


# ============================================
# POST-LOGIN LANDING PAGES
# ============================================
ROLE_REDIRECTS = {
    Role.admin: "/admin",
    Role.support: "/support",
    Role.user: "/dashboard",
}

LOGIN_PATH = "/login"


# ============================================
# DISPLAY DESCRIPTIONS (en / th)
# ============================================
ROLE_DESCRIPTIONS = {
    Role.admin: {
        "en": "Administrator - Full access including room and booking management",
        "th": "ผู้ดูแลระบบ - สามารถเข้าถึงและจัดการทุกส่วนของระบบรวมถึงจัดการห้องพักและการจอง",
    },
    Role.support: {
        "en": "Support Team - Can assist tenants, manage bookings, and view reports",
        "th": "ทีมสนับสนุน - สามารถช่วยเหลือลูกค้า จัดการการจอง และดูรายงาน",
    },
    Role.user: {
        "en": "Tenant - Can book rooms, manage profile, and view booking history",
        "th": "ผู้เช่า - สามารถจองห้องพัก จัดการโปรไฟล์ และดูประวัติการจอง",
    },
}


require_all_roles(ROLE_HIERARCHY, "ROLE_HIERARCHY")
require_all_roles(ROLE_REDIRECTS, "ROLE_REDIRECTS")
require_all_roles(ROLE_DESCRIPTIONS, "ROLE_DESCRIPTIONS")
