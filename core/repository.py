# core/repository.py

from typing import Any, Dict, List, Optional

from fastapi import HTTPException

from core.errors import handle_supabase_error
from core.supabase_client import get_supabase_client


# =================================================================
#  ENTITY TABLES
# =================================================================
ROOMS = "rooms"
BOOKINGS = "bookings"
METER_READINGS = "meter_readings"
TENANTS = "tenants"


def clean_payload(data: dict) -> dict:
    """
    Prepare a row for insert/update:
    - strip string whitespace
    - empty strings → None
    """
    clean = {}
    for k, v in data.items():
        if isinstance(v, str):
            v = v.strip() or None
        clean[k] = v
    return clean


class SupabaseRepository:
    """
    get / list / create / update / delete over one Supabase table.

    The billing and RBAC core never import this; routers load records here
    and hand plain models to the core.
    """

    def __init__(self, table: str, client=None):
        self.table = table
        self._client = client

    @property
    def client(self):
        client = self._client or get_supabase_client()
        if client is None:
            raise HTTPException(500, "Supabase client not configured")
        return client

    # -------------------------------------------------------------
    # READ
    # -------------------------------------------------------------
    def get(self, record_id: str) -> Optional[Dict[str, Any]]:
        try:
            result = (
                self.client.table(self.table)
                .select("*")
                .eq("id", record_id)
                .limit(1)
                .execute()
            )
        except HTTPException:
            raise
        except Exception as e:
            raise handle_supabase_error(e, f"Failed to fetch from {self.table}")

        return result.data[0] if result.data else None

    def list(
        self,
        filters: Optional[dict] = None,
        *,
        order_by: Optional[str] = None,
        desc: bool = False,
        limit: Optional[int] = None,
    ) -> List[Dict[str, Any]]:
        try:
            query = self.client.table(self.table).select("*")
            for key, val in (filters or {}).items():
                query = query.eq(key, val)
            if order_by:
                query = query.order(order_by, desc=desc)
            if limit:
                query = query.limit(limit)
            result = query.execute()
        except HTTPException:
            raise
        except Exception as e:
            raise handle_supabase_error(e, f"Failed to list {self.table}")

        return result.data or []

    # -------------------------------------------------------------
    # WRITE
    # -------------------------------------------------------------
    def create(self, data: dict) -> Optional[Dict[str, Any]]:
        try:
            result = (
                self.client.table(self.table)
                .insert(clean_payload(data), returning="representation")
                .execute()
            )
        except HTTPException:
            raise
        except Exception as e:
            raise handle_supabase_error(e, f"Failed to insert into {self.table}")

        return result.data[0] if result.data else None

    def update(self, record_id: str, data: dict) -> Optional[Dict[str, Any]]:
        try:
            result = (
                self.client.table(self.table)
                .update(clean_payload(data), returning="representation")
                .eq("id", record_id)
                .execute()
            )
        except HTTPException:
            raise
        except Exception as e:
            raise handle_supabase_error(e, f"Failed to update {self.table}")

        return result.data[0] if result.data else None

    def delete(self, record_id: str) -> bool:
        try:
            result = (
                self.client.table(self.table)
                .delete()
                .eq("id", record_id)
                .execute()
            )
        except HTTPException:
            raise
        except Exception as e:
            raise handle_supabase_error(e, f"Failed to delete from {self.table}")

        return bool(result.data)
