from typing import List, Optional
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from pydantic import BaseModel

from core.logging_config import logger
from core.permission_helpers import get_permissions, has_permission
from core.roles import DEFAULT_USER_ROLE
from core.supabase_client import get_supabase_client


bearer_scheme = HTTPBearer()


# ============================================================
# Current User (the per-request session)
# ============================================================
class CurrentUser(BaseModel):
    id: str
    email: str
    # Raw role string from user_metadata; unknown values carry no permissions
    role: str

    full_name: Optional[str] = None
    phone: Optional[str] = None

    @property
    def permissions(self) -> List[str]:
        return sorted(p.value for p in get_permissions(self.role))


def user_from_supabase(auth_user) -> CurrentUser:
    """Build a CurrentUser from a Supabase Auth user object."""
    metadata = getattr(auth_user, "user_metadata", None) or {}

    role = metadata.get("role")
    if not role:
        role = DEFAULT_USER_ROLE.value

    return CurrentUser(
        id=auth_user.id,
        email=auth_user.email or "",
        role=str(role),
        full_name=metadata.get("full_name"),
        phone=metadata.get("phone"),
    )


# ============================================================
# AUTH DECODING (Supabase: validates JWT + reads metadata)
# ============================================================
def get_current_user(
    credentials: HTTPAuthorizationCredentials = Depends(bearer_scheme),
) -> CurrentUser:

    token = credentials.credentials

    unauthorized = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Invalid or expired authentication token",
        headers={"WWW-Authenticate": "Bearer"},
    )

    client = get_supabase_client()
    if not client:
        raise HTTPException(500, "Supabase client not configured")

    try:
        auth_resp = client.auth.get_user(token)
    except Exception as e:
        logger.warning(f"Token verification failed: {e}")
        raise unauthorized

    if not auth_resp or not auth_resp.user or not auth_resp.user.email:
        raise unauthorized

    return user_from_supabase(auth_resp.user)


# ============================================================
# PERMISSION CHECK
# ============================================================
def requires_permission(permission: str):
    """
    Usage:
        @router.post("/", dependencies=[Depends(requires_permission("bookings:create"))])
    """

    def dependency(current_user: CurrentUser = Depends(get_current_user)):
        if not has_permission(current_user.role, permission):
            logger.warning(
                f"Permission denied: user={current_user.id} role={current_user.role} needs {permission}"
            )
            raise HTTPException(
                status_code=403,
                detail=f"Insufficient permissions: '{permission}' required",
            )
        return current_user

    return dependency


# ============================================================
# OPTIONAL AUTHENTICATION (for hybrid endpoints)
# ============================================================
def get_optional_auth(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(HTTPBearer(auto_error=False)),
) -> Optional[CurrentUser]:
    """
    Returns CurrentUser if a valid token is provided, None otherwise.
    """
    if not credentials:
        return None

    try:
        return get_current_user(credentials)
    except HTTPException:
        return None
