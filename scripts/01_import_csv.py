"""
scripts/01_import_csv.py
Load historical draws from a CSV file or URL into the draw store.
"""
from __future__ import annotations

import argparse
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from megasena_stats.ingestion.csv_parser import load_csv_source
from megasena_stats.pipeline.data_manager import clear_draws, import_csv
from megasena_stats.utils.logger import get_logger

log = get_logger("import_csv")


def main():
    parser = argparse.ArgumentParser(description="Import Mega-Sena results from CSV")
    parser.add_argument("source", help="Path or http(s) URL of the CSV file")
    parser.add_argument("--batch-size", type=int, default=None, help="Rows per store request (default from config)")
    parser.add_argument("--clear", action="store_true", help="Delete existing draws before importing")
    parser.add_argument("--dry-run", action="store_true", help="Parse only, no DB writes")
    args = parser.parse_args()

    text = load_csv_source(args.source)

    if args.clear and not args.dry_run:
        clear_draws()

    result = import_csv(text, batch_size=args.batch_size, dry_run=args.dry_run)
    if not result["success"]:
        log.error(f"Import finished with problems: {result}")
        sys.exit(1)
    log.info(f"{result['imported']} draws imported")


if __name__ == "__main__":
    main()
