# tests/test_repository.py

"""
Tests for the Supabase table repository.
"""

from unittest.mock import Mock, patch

import pytest
from fastapi import HTTPException

from core.repository import TENANTS, SupabaseRepository, clean_payload


def chain(rows=None):
    """Mock a PostgREST builder where every call returns itself."""
    query = Mock()
    for method in ("select", "insert", "update", "delete", "eq", "order", "limit"):
        getattr(query, method).return_value = query
    query.execute.return_value = Mock(data=rows if rows is not None else [])
    return query


@pytest.fixture
def tenants_table():
    return chain()


@pytest.fixture
def repo(tenants_table):
    client = Mock()
    client.table.return_value = tenants_table
    return SupabaseRepository(TENANTS, client=client)


def test_clean_payload_strips_and_nulls_blanks():
    cleaned = clean_payload({"full_name": "  Somchai ", "phone": "   ", "email": "", "deposit": 0})

    assert cleaned == {"full_name": "Somchai", "phone": None, "email": None, "deposit": 0}


def test_create_sends_cleaned_row(repo, tenants_table):
    tenants_table.execute.return_value = Mock(data=[{"id": "t-1", "full_name": "Somchai"}])

    row = repo.create({"full_name": " Somchai ", "phone": ""})

    assert row == {"id": "t-1", "full_name": "Somchai"}
    tenants_table.insert.assert_called_once_with(
        {"full_name": "Somchai", "phone": None}, returning="representation"
    )
    repo.client.table.assert_called_with("tenants")


def test_update_targets_record_id(repo, tenants_table):
    tenants_table.execute.return_value = Mock(data=[{"id": "t-1", "phone": "0812345678"}])

    row = repo.update("t-1", {"phone": "0812345678 "})

    assert row["phone"] == "0812345678"
    tenants_table.update.assert_called_once_with({"phone": "0812345678"}, returning="representation")
    tenants_table.eq.assert_called_once_with("id", "t-1")


def test_update_missing_record_returns_none(repo, tenants_table):
    assert repo.update("nope", {"phone": "1"}) is None


def test_delete_reports_whether_a_row_went(repo, tenants_table):
    tenants_table.execute.return_value = Mock(data=[{"id": "t-1"}])
    assert repo.delete("t-1") is True

    tenants_table.execute.return_value = Mock(data=[])
    assert repo.delete("t-2") is False


def test_list_applies_filters_order_and_limit(repo, tenants_table):
    tenants_table.execute.return_value = Mock(data=[{"id": "t-2"}, {"id": "t-1"}])

    rows = repo.list({"room_id": "room-1"}, order_by="created_at", desc=True, limit=2)

    assert [r["id"] for r in rows] == ["t-2", "t-1"]
    tenants_table.eq.assert_called_once_with("room_id", "room-1")
    tenants_table.order.assert_called_once_with("created_at", desc=True)
    tenants_table.limit.assert_called_once_with(2)


def test_duplicate_insert_maps_to_400(repo, tenants_table):
    tenants_table.execute.side_effect = Exception(
        'duplicate key value violates unique constraint "tenants_email_key"'
    )

    with pytest.raises(HTTPException) as exc:
        repo.create({"email": "a@example.com"})

    assert exc.value.status_code == 400
    assert "already exists" in exc.value.detail


def test_foreign_key_update_maps_to_400(repo, tenants_table):
    tenants_table.execute.side_effect = Exception("violates foreign key constraint")

    with pytest.raises(HTTPException) as exc:
        repo.update("t-1", {"room_id": "ghost"})

    assert exc.value.status_code == 400


def test_generic_delete_failure_maps_to_500(repo, tenants_table):
    tenants_table.execute.side_effect = Exception("connection reset")

    with pytest.raises(HTTPException) as exc:
        repo.delete("t-1")

    assert exc.value.status_code == 500


def test_missing_client_is_a_500():
    with patch("core.repository.get_supabase_client", return_value=None):
        with pytest.raises(HTTPException) as exc:
            SupabaseRepository(TENANTS).get("t-1")

    assert exc.value.status_code == 500
