"""
scripts/03_generate_combinations.py
Suggest combinations from the stored history.
"""
from __future__ import annotations

import argparse
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from megasena_stats.ingestion.csv_parser import load_csv_source, parse_csv
from megasena_stats.pipeline.combination_service import GeneratorOptions, generate_combinations
from megasena_stats.utils.logger import get_logger

log = get_logger("generate")


def _split(value: str) -> tuple[int, int]:
    a, b = value.split("/")
    return int(a), int(b)


def _numbers(value: str) -> list[int]:
    return [int(v) for v in value.split(",") if v.strip()]


def main():
    parser = argparse.ArgumentParser(description="Generate suggested combinations")
    parser.add_argument("--method", choices=["balanced", "montecarlo", "overdue"], default="balanced")
    parser.add_argument("--count", type=int, default=5, help="Combinations to generate (1-10)")
    parser.add_argument("--even-odd", type=_split, default=(3, 3), help="e.g. 3/3")
    parser.add_argument("--low-high", type=_split, default=(3, 3), help="e.g. 3/3")
    parser.add_argument("--sum-range", type=int, nargs=2, default=[150, 220], metavar=("MIN", "MAX"))
    parser.add_argument("--exclude", type=_numbers, default=[], help="Comma separated numbers")
    parser.add_argument("--prefer", type=_numbers, default=[], help="Comma separated numbers")
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--csv", default=None, help="Use a CSV file/URL instead of the draw store")
    args = parser.parse_args()

    draws = parse_csv(load_csv_source(args.csv)) if args.csv else None
    options = GeneratorOptions(
        method=args.method,
        count=args.count,
        even_odd=args.even_odd,
        low_high=args.low_high,
        sum_range=tuple(args.sum_range),
        exclude_numbers=args.exclude,
        prefer_numbers=args.prefer,
        seed=args.seed,
    )

    for combo in generate_combinations(draws, options):
        nums = " - ".join(f"{n:02d}" for n in combo["numbers"])
        log.info(f"#{combo['id']} {nums} | {combo['label']} | sum={combo['sum']} "
                 f"even={combo['even_count']} low={combo['low_count']} {combo['metadata']}")


if __name__ == "__main__":
    main()
