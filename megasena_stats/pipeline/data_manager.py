"""
megasena_stats/pipeline/data_manager.py
Move draws between CSV text and the draw store.
"""
from __future__ import annotations

from datetime import date

from megasena_stats.ingestion.csv_parser import parse_csv
from megasena_stats.models.types import Draw, valid_draws
from megasena_stats.utils import supabase_client as db
from megasena_stats.utils.config import get_number_range, get_pick_count, get_store_limits
from megasena_stats.utils.logger import get_logger

log = get_logger("pipeline.data")


def load_draws(limit: int | None = None) -> list[Draw]:
    """Fetch the newest `limit` draws (by draw number) and drop malformed rows."""
    list_limit, _ = get_store_limits()
    rows = db.list_draws(order="-draw_number", limit=limit or list_limit)
    draws = valid_draws(rows, get_number_range(), get_pick_count())
    if len(draws) != len(rows):
        log.warning(f"Ignored {len(rows) - len(draws)} malformed rows from the draw store")
    log.info(f"Loaded {len(draws)} draws")
    return draws


def import_draws(draws: list[Draw], batch_size: int | None = None, dry_run: bool = False) -> dict:
    """Write draws in sequential batches; a failed batch is logged and counted."""
    _, default_batch = get_store_limits()
    batch_size = max(1, batch_size or default_batch)
    records = [d.to_record() for d in draws]

    imported = 0
    failed = 0
    for start in range(0, len(records), batch_size):
        batch = records[start:start + batch_size]
        if dry_run:
            log.info(f"[DRY RUN] Would insert {len(batch)} draws "
                     f"(#{batch[0]['draw_number']} … #{batch[-1]['draw_number']})")
            imported += len(batch)
            continue
        try:
            imported += db.bulk_create_draws(batch, batch_size=batch_size)
        except Exception as exc:
            log.error(f"Insert failed for batch starting at row {start}: {exc}")
            failed += len(batch)

    log.info(f"[DONE] parsed={len(records)}, imported={imported}, failed={failed}")
    return {"parsed": len(records), "imported": imported, "failed": failed}


def import_csv(text: str, batch_size: int | None = None, dry_run: bool = False, today: date | None = None) -> dict:
    draws = parse_csv(text, today=today)
    if not draws:
        log.warning("No valid draws found in the CSV input.")
        return {"parsed": 0, "imported": 0, "failed": 0, "success": False}
    result = import_draws(draws, batch_size=batch_size, dry_run=dry_run)
    result["success"] = result["failed"] == 0
    return result


def clear_draws() -> int:
    list_limit, batch_size = get_store_limits()
    deleted = db.delete_all_draws(limit=list_limit, batch_size=batch_size)
    log.info(f"Removed {deleted} draws from the store")
    return deleted
