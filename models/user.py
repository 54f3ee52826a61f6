# models/user.py

from typing import List, Optional
from datetime import datetime
from pydantic import BaseModel


# ===============================================================
# SUPABASE AUTH USER MODELS
# ===============================================================

class UserRead(BaseModel):
    """
    A Supabase Auth user, flattened from auth.users.user_metadata.
    """
    id: str
    email: Optional[str] = None
    full_name: Optional[str] = None
    phone: Optional[str] = None
    role: str
    created_at: Optional[datetime] = None


class RoleUpdate(BaseModel):
    """Admin / support request to change another user's role."""
    role: str


class SessionRead(BaseModel):
    """What the frontend needs to gate pages for the logged-in user."""
    user_id: str
    email: str
    role: str
    permissions: List[str]
    redirect_to: str


class RouteAccessRead(BaseModel):
    path: str
    allowed: bool
    # Where a guard should send the visitor when `allowed` is False,
    # or where to bounce a logged-in visitor away from an auth route.
    redirect_to: Optional[str] = None


class RoleInfo(BaseModel):
    role: str
    level: int
    permissions: List[str]
    redirect_to: str
    description: dict
