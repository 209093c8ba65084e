"""
scripts/02_statistics_report.py
Print the statistics summary for the stored history.
"""
from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from rich.console import Console
from rich.table import Table

from megasena_stats.ingestion.csv_parser import load_csv_source, parse_csv
from megasena_stats.pipeline.statistics_report import build_report
from megasena_stats.utils.logger import get_logger

log = get_logger("statistics_report")
console = Console()


def _table(title: str, columns: list[str], rows: list[list]) -> Table:
    table = Table(title=title)
    for col in columns:
        table.add_column(col)
    for row in rows:
        table.add_row(*(str(v) for v in row))
    return table


def render(report: dict) -> None:
    cov = report["coverage"]
    console.print(f"[bold]Draws:[/bold] {report['total_draws']}  "
                  f"[bold]Numbers seen:[/bold] {cov['numbers_seen']}/{cov['numbers_possible']}")
    if cov["latest_draw"]:
        console.print(f"First: #{cov['first_draw']['draw_number']} ({cov['first_draw']['draw_date']})  "
                      f"Latest: #{cov['latest_draw']['draw_number']} ({cov['latest_draw']['draw_date']})")

    hot = report["hot_cold"]["hot"]
    cold = report["hot_cold"]["cold"]
    console.print(_table(
        "Hot / cold numbers",
        ["Hot", "Count", "Cold", "Count"],
        [[h["number"], h["count"], c["number"], c["count"]] for h, c in zip(hot, cold)],
    ))
    console.print(_table("Even / odd", ["Split", "Draws"], sorted(report["even_odd"].items())))
    console.print(_table("Low / high", ["Split", "Draws"], sorted(report["low_high"].items())))
    console.print(_table("Decades", ["Range", "Numbers"], list(report["decades"]["decades"].items())))
    console.print(_table("Consecutive pairs", ["Pairs", "Draws"], list(report["consecutive"].items())))

    sums = report["sums"]
    console.print(f"Sum min={sums['min']} max={sums['max']} avg={sums['avg']:.1f}")
    console.print(_table("Sum histogram", ["Range", "Draws"], list(report["sum_histogram"].items())))

    overdue = sorted(
        ((n, g) for n, g in report["gaps"].items() if g["is_overdue"]),
        key=lambda item: item[1]["current_gap"] / item[1]["average_gap"],
        reverse=True,
    )
    console.print(_table(
        "Overdue numbers",
        ["Number", "Current gap", "Average gap", "Max gap"],
        [[n, g["current_gap"], f"{g['average_gap']:.1f}", g["max_gap"]] for n, g in overdue],
    ))


def main():
    parser = argparse.ArgumentParser(description="Mega-Sena statistics report")
    parser.add_argument("--csv", default=None, help="Analyse a CSV file/URL instead of the draw store")
    parser.add_argument("--json", action="store_true", help="Print the raw report as JSON")
    args = parser.parse_args()

    draws = parse_csv(load_csv_source(args.csv)) if args.csv else None
    report = build_report(draws)

    if args.json:
        print(json.dumps(report, indent=2, ensure_ascii=False))
    else:
        render(report)


if __name__ == "__main__":
    main()
