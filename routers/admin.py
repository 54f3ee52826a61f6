# routers/admin.py

from fastapi import APIRouter, Depends, HTTPException

from dependencies.auth import (
    CurrentUser,
    requires_permission,
)
from core.logging_config import get_logger, logger
from core.permission_helpers import (
    can_manage_role,
    get_permissions,
    get_role_hierarchy_level,
    get_role_redirect,
)
from core.roles import DEFAULT_USER_ROLE, ROLE_DESCRIPTIONS, Role, parse_role
from core.supabase_client import get_supabase_client
from models.user import RoleInfo, RoleUpdate, UserRead

audit_logger = get_logger("audit")

router = APIRouter(
    prefix="/admin",
    tags=["Admin"],
)


# -----------------------------------------------------
# Normalize Supabase list_users() result
# -----------------------------------------------------
def extract_user_list(result):
    if isinstance(result, list):
        return result
    if isinstance(result, dict) and "users" in result:
        return result["users"]
    users_attr = getattr(result, "users", None)
    if users_attr is not None:
        return users_attr
    return []


def to_user_read(u) -> UserRead:
    meta = u.user_metadata or {}
    return UserRead(
        id=u.id,
        email=u.email,
        full_name=meta.get("full_name"),
        phone=meta.get("phone"),
        role=meta.get("role") or DEFAULT_USER_ROLE.value,
        created_at=getattr(u, "created_at", None),
    )


# -----------------------------------------------------
# Helper: Validate role change
# -----------------------------------------------------
def validate_role_change(requestor: CurrentUser, target_user_id: str, current_role: str, desired_role: str):
    """
    - desired role must exist
    - nobody changes their own role
    - requestor must outrank the target's current role
    - requestor may not grant a role above their own
    """
    desired = parse_role(desired_role)
    if desired is None:
        raise HTTPException(400, f"Invalid role: {desired_role}")

    if requestor.id == target_user_id:
        raise HTTPException(403, "You cannot change your own role.")

    if not can_manage_role(requestor.role, current_role):
        raise HTTPException(
            403, f"Role '{requestor.role}' cannot manage users with role '{current_role}'."
        )

    if get_role_hierarchy_level(desired) > get_role_hierarchy_level(requestor.role):
        raise HTTPException(
            403, f"Role '{requestor.role}' cannot assign role '{desired.value}'."
        )

    return desired


# -----------------------------------------------------
# GET /admin/roles
# -----------------------------------------------------
@router.get(
    "/roles",
    summary="Admin: List roles",
    response_model=list[RoleInfo],
    dependencies=[Depends(requires_permission("users:read"))],
)
def list_roles():
    return [
        RoleInfo(
            role=r.value,
            level=get_role_hierarchy_level(r),
            permissions=sorted(p.value for p in get_permissions(r)),
            redirect_to=get_role_redirect(r),
            description=ROLE_DESCRIPTIONS[r],
        )
        for r in Role
    ]


# -----------------------------------------------------
# GET /admin/users
# -----------------------------------------------------
@router.get(
    "/users",
    summary="Admin: List users",
    dependencies=[Depends(requires_permission("users:read"))],
)
def list_users(role: str | None = None):
    role_filter = parse_role(role) if role else None
    if role and role_filter is None:
        raise HTTPException(400, f"Invalid role filter: {role}")

    client = get_supabase_client()
    if not client:
        raise HTTPException(500, "Supabase client not configured")

    try:
        users = extract_user_list(client.auth.admin.list_users())
    except Exception as e:
        logger.error(f"Supabase list users failed: {e}")
        raise HTTPException(500, f"Supabase list users failed: {e}")

    results = [to_user_read(u) for u in users]
    if role_filter:
        results = [u for u in results if parse_role(u.role) is role_filter]

    results.sort(key=lambda x: str(x.created_at or ""), reverse=True)

    return {"success": True, "data": [u.model_dump() for u in results]}


# -----------------------------------------------------
# PATCH /admin/users/{user_id}/role
# -----------------------------------------------------
@router.patch(
    "/users/{user_id}/role",
    summary="Admin: Change a user's role",
)
def update_user_role(
    user_id: str,
    payload: RoleUpdate,
    current_user: CurrentUser = Depends(requires_permission("users:update")),
):
    client = get_supabase_client()
    if not client:
        raise HTTPException(500, "Supabase client not configured")

    try:
        resp = client.auth.admin.get_user_by_id(user_id)
    except Exception as e:
        raise HTTPException(500, f"Supabase read error: {e}")

    if not resp or not resp.user:
        raise HTTPException(404, "User not found")

    current_meta = resp.user.user_metadata or {}
    current_role = current_meta.get("role") or DEFAULT_USER_ROLE.value

    new_role = validate_role_change(current_user, user_id, current_role, payload.role)

    try:
        updated = client.auth.admin.update_user_by_id(
            user_id,
            {"user_metadata": {**current_meta, "role": new_role.value}},
        )
    except Exception as e:
        logger.error(f"Role update failed for {user_id}: {e}")
        raise HTTPException(500, f"Supabase update error: {e}")

    audit_logger.info(
        f"Role change: {current_user.id} ({current_user.role}) set {user_id} "
        f"{current_role} → {new_role.value}"
    )

    return {"success": True, "data": to_user_read(updated.user).model_dump()}
