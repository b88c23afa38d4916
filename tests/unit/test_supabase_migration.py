import re
from pathlib import Path

import pytest

from storefront.config import BASE_DIR

MIGRATION = BASE_DIR / "supabase" / "migrations" / "0001_checkout.sql"


@pytest.fixture(scope="module")
def sql() -> str:
    return re.sub(r"\s+", " ", Path(MIGRATION).read_text(encoding="utf-8").lower())

@pytest.mark.parametrize("table", ["users", "payments"])
def test_tables_have_row_level_security(sql, table):
    assert f"alter table public.{table} enable row level security;" in sql

def test_tables_not_granted_to_client_roles(sql):
    assert "revoke all on table public.users, public.payments from anon, authenticated;" in sql

def test_fulfill_checkout_reserved_to_service_role(sql):
    assert "revoke all on function public.fulfill_checkout(jsonb, integer, text, text, text, text) from public, anon, authenticated;" in sql
    assert "grant execute on function public.fulfill_checkout(jsonb, integer, text, text, text, text) to service_role;" in sql
    assert "grant execute on function public.fulfill_checkout(jsonb, integer, text, text, text, text) to anon" not in sql

def test_security_definer_pins_search_path(sql):
    assert "security definer set search_path = public" in sql
