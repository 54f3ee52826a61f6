# routers/auth.py

from typing import Optional

from fastapi import APIRouter, Depends, Query

from core.permission_helpers import (
    can_access_route,
    get_role_redirect,
    is_auth_route,
)
from core.roles import LOGIN_PATH
from dependencies.auth import CurrentUser, get_current_user, get_optional_auth
from models.user import RouteAccessRead, SessionRead


router = APIRouter(
    prefix="/auth",
    tags=["Auth"],
)


# -----------------------------------------------------
# GET /auth/session
# Who am I + what may I do
# -----------------------------------------------------
@router.get("/session", response_model=SessionRead, summary="Current session")
def read_session(current_user: CurrentUser = Depends(get_current_user)):
    return SessionRead(
        user_id=current_user.id,
        email=current_user.email,
        role=current_user.role,
        permissions=current_user.permissions,
        redirect_to=get_role_redirect(current_user.role),
    )


# -----------------------------------------------------
# GET /auth/route-access?path=/admin/users
# Used by the frontend route guard
# -----------------------------------------------------
@router.get("/route-access", response_model=RouteAccessRead, summary="Route guard decision")
def route_access(
    path: str = Query(..., description="Frontend path to check, e.g. /admin/users"),
    current_user: Optional[CurrentUser] = Depends(get_optional_auth),
):
    """
    Decide whether the caller may open a frontend path.

    - Anonymous visitors may only reach public routes and the auth pages.
    - Logged-in users hitting an auth page (login / register) are sent
      to their landing page.
    - Otherwise the RBAC route table decides; a denial points back to the
      user's landing page.
    """
    if current_user is None:
        allowed = is_auth_route(path) or can_access_route(None, path)
        return RouteAccessRead(
            path=path,
            allowed=allowed,
            redirect_to=None if allowed else LOGIN_PATH,
        )

    landing = get_role_redirect(current_user.role)

    if is_auth_route(path):
        # Unknown roles land on /login; let them stay there
        if landing == LOGIN_PATH:
            return RouteAccessRead(path=path, allowed=True)
        return RouteAccessRead(path=path, allowed=False, redirect_to=landing)

    allowed = can_access_route(current_user.role, path)
    return RouteAccessRead(
        path=path,
        allowed=allowed,
        redirect_to=None if allowed else landing,
    )
