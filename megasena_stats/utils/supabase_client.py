"""
megasena_stats/utils/supabase_client.py
Supabase wrapper for the draw store.
"""
from __future__ import annotations

from typing import Any

from supabase import Client, create_client

from megasena_stats.utils.config import SUPABASE_DRAWS_TABLE, SUPABASE_KEY, SUPABASE_URL
from megasena_stats.utils.logger import get_logger

log = get_logger("supabase")

_client: Client | None = None


def get_client() -> Client:
    global _client
    if _client is None:
        if not SUPABASE_URL or not SUPABASE_KEY:
            raise RuntimeError("SUPABASE_URL and SUPABASE_KEY must be set to use the draw store.")
        _client = create_client(SUPABASE_URL, SUPABASE_KEY)
    return _client


def _batches(records: list[Any], batch_size: int):
    batch_size = max(1, batch_size)
    for start in range(0, len(records), batch_size):
        yield records[start:start + batch_size]


# ── draws ─────────────────────────────────────────────────────────

def list_draws(order: str = "-draw_number", limit: int = 5000) -> list[dict]:
    """
    List draws sorted by `order` ("-column" for descending), capped at `limit`.
    """
    db = get_client()
    desc = order.startswith("-")
    column = order.lstrip("-+") or "draw_number"
    resp = (
        db.table(SUPABASE_DRAWS_TABLE)
        .select("*")
        .order(column, desc=desc)
        .limit(limit)
        .execute()
    )
    return resp.data or []


def bulk_create_draws(records: list[dict[str, Any]], batch_size: int = 100) -> int:
    """
    Insert records in sequential batches. Returns rows written.
    Existing draws are never overwritten: a conflicting batch raises.
    """
    db = get_client()
    written = 0
    for batch in _batches(records, batch_size):
        resp = db.table(SUPABASE_DRAWS_TABLE).insert(batch).execute()
        written += len(resp.data or batch)
        log.debug(f"Inserted batch of {len(batch)} draws ({written}/{len(records)})")
    return written


def delete_draw(draw_id: Any) -> None:
    db = get_client()
    db.table(SUPABASE_DRAWS_TABLE).delete().eq("id", draw_id).execute()


def delete_all_draws(limit: int = 5000, batch_size: int = 100) -> int:
    """Delete every listed draw one by one, fetching ids in batches."""
    deleted = 0
    rows = list_draws(limit=limit)
    for batch in _batches(rows, batch_size):
        for row in batch:
            delete_draw(row["id"])
            deleted += 1
        log.info(f"Deleted {deleted}/{len(rows)} draws")
    return deleted
