# core/permission_helpers.py

"""
Pure RBAC decisions over the static tables in core.roles / core.permissions.

Every function here accepts a raw role (a Role or a plain string straight
out of user_metadata) and fails closed: an unknown or malformed role,
permission or path yields the least-privileged answer instead of raising.
"""

from typing import FrozenSet, Iterable, Optional

from core.permissions import (
    AUTH_ROUTES,
    PROTECTED_ROUTES,
    PUBLIC_ROUTES,
    ROLE_PERMISSIONS,
    Permission,
    ProtectedRoute,
)
from core.roles import LOGIN_PATH, ROLE_HIERARCHY, ROLE_REDIRECTS, Role, parse_role


def _parse_permission(value) -> Optional[Permission]:
    if isinstance(value, Permission):
        return value
    if not isinstance(value, str):
        return None
    try:
        return Permission(value)
    except ValueError:
        return None


def _is_clean_path(path) -> bool:
    # Absolute, no query/fragment, no "." / ".." / empty segments ("/" itself is fine)
    if not isinstance(path, str) or not path.startswith("/"):
        return False
    if "?" in path or "#" in path or "\\" in path:
        return False
    if path == "/":
        return True
    return all(seg not in ("", ".", "..") for seg in path[1:].split("/"))


def _as_permission_list(permissions):
    if isinstance(permissions, (list, tuple, set, frozenset)):
        return permissions
    return None


def _matches_prefix(path: str, prefix: str) -> bool:
    # "/admin" matches "/admin" and "/admin/..." but not "/administrator"
    if prefix == "/":
        return path == "/"
    return path == prefix or path.startswith(prefix.rstrip("/") + "/")


# -----------------------------------------------------
# Permission lookups
# -----------------------------------------------------
def get_permissions(role) -> FrozenSet[Permission]:
    """Return the role's permission set (empty for unknown roles)."""
    parsed = parse_role(role)
    if parsed is None:
        return frozenset()
    return ROLE_PERMISSIONS[parsed]


def has_permission(role, permission) -> bool:
    parsed = _parse_permission(permission)
    if parsed is None:
        return False
    return parsed in get_permissions(role)


def has_any_permission(role, permissions: Iterable) -> bool:
    """True if at least one permission is granted. Empty input → False."""
    items = _as_permission_list(permissions)
    if items is None:
        return False
    return any(has_permission(role, p) for p in items)


def has_all_permissions(role, permissions: Iterable) -> bool:
    """
    True if every permission is granted.

    Empty list → True (vacuous truth) for a known role. Callers that guard
    on an optional permission list must not pass an empty list expecting a
    denial. A missing (None) or non-collection list, or an unknown role,
    is always False.
    """
    items = _as_permission_list(permissions)
    if items is None or parse_role(role) is None:
        return False
    return all(has_permission(role, p) for p in items)


# -----------------------------------------------------
# Route access
# -----------------------------------------------------
def find_protected_route(path: str) -> Optional[ProtectedRoute]:
    """First declared protected route whose prefix matches `path`."""
    if not _is_clean_path(path):
        return None
    for route in PROTECTED_ROUTES:
        if _matches_prefix(path, route.path_prefix):
            return route
    return None


def is_public_route(path: str) -> bool:
    if not _is_clean_path(path):
        return False
    return any(_matches_prefix(path, public) for public in PUBLIC_ROUTES)


def is_auth_route(path: str) -> bool:
    if not _is_clean_path(path):
        return False
    return any(_matches_prefix(path, auth) for auth in AUTH_ROUTES)


def can_access_route(role, path: str) -> bool:
    # "/about/../admin" would otherwise match the public "/about" prefix
    if not _is_clean_path(path):
        return False

    route = find_protected_route(path)
    if route is None:
        return is_public_route(path)

    parsed = parse_role(role)
    if parsed is None or parsed not in route.allowed_roles:
        return False

    if route.required_permissions:
        return has_all_permissions(parsed, route.required_permissions)

    return True


# -----------------------------------------------------
# Role hierarchy
# -----------------------------------------------------
def get_role_hierarchy_level(role) -> int:
    parsed = parse_role(role)
    if parsed is None:
        return 0
    return ROLE_HIERARCHY[parsed]


def can_manage_role(acting_role, target_role) -> bool:
    """Strictly-greater rule: nobody manages a peer, a superior, or themselves."""
    return get_role_hierarchy_level(acting_role) > get_role_hierarchy_level(target_role)


def get_role_redirect(role) -> str:
    """Post-login landing page. Not a security decision."""
    parsed = parse_role(role)
    if parsed is None:
        return LOGIN_PATH
    return ROLE_REDIRECTS[parsed]


# ============================================================
# ROOM RENTAL BUSINESS RULES
# ============================================================
STAFF_ROLES = (Role.admin, Role.support)


def can_manage_rooms(role) -> bool:
    return has_permission(role, Permission.rooms_update)


def can_manage_bookings(role) -> bool:
    return parse_role(role) in STAFF_ROLES


def can_view_all_bookings(role) -> bool:
    return parse_role(role) in STAFF_ROLES


def can_create_booking(role) -> bool:
    return has_permission(role, Permission.bookings_create)


def can_cancel_booking(role, is_own_booking: bool) -> bool:
    parsed = parse_role(role)
    if parsed is None:
        return False
    return parsed in STAFF_ROLES or is_own_booking is True


def can_update_room(role) -> bool:
    return parse_role(role) == Role.admin


def can_view_reports(role) -> bool:
    return has_permission(role, Permission.reports_read)
