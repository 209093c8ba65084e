"""
megasena_stats/ingestion/csv_parser.py
Parse historical results pasted or exported as CSV text.

Accepted rows (separated by comma, semicolon or tab):
    2800;25/01/2025;04;12;23;34;45;58      draw number, date, 6 numbers
    04,12,23,34,45,58                      6 numbers only
Header lines mentioning "concurso" or "data" are skipped.
"""
from __future__ import annotations

import random
import re
import time
from datetime import date
from pathlib import Path

import requests

from megasena_stats.models.types import NUMBER_RANGE, PICK_COUNT, Draw
from megasena_stats.utils.logger import get_logger

log = get_logger("ingestion.csv")

_SEPARATORS = re.compile(r"[,;\t]+")
_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")
_HEADER_WORDS = ("concurso", "data")

# (pattern, day-first?)
_DATE_FORMATS = [
    (re.compile(r"(\d{2})/(\d{2})/(\d{4})"), True),   # DD/MM/YYYY
    (re.compile(r"(\d{4})-(\d{2})-(\d{2})"), False),  # YYYY-MM-DD
    (re.compile(r"(\d{2})-(\d{2})-(\d{4})"), True),   # DD-MM-YYYY
]


def _parse_int(text: str) -> int | None:
    match = _LEADING_INT.match(text)
    return int(match.group(1)) if match else None


def normalize_date(text: str, today: date | None = None) -> date:
    """Parse the supported date formats; anything else becomes today."""
    today = today or date.today()
    for pattern, day_first in _DATE_FORMATS:
        match = pattern.search(text or "")
        if not match:
            continue
        a, b, c = (int(g) for g in match.groups())
        try:
            return date(c, b, a) if day_first else date(a, b, c)
        except ValueError:
            log.debug(f"Impossible date {text!r}, using today")
            return today
    return today


def _parse_numbers(fields: list[str]) -> tuple[int, ...] | None:
    lo, hi = NUMBER_RANGE
    numbers = [n for n in (_parse_int(f) for f in fields) if n is not None and lo <= n <= hi]
    if len(numbers) != PICK_COUNT or len(set(numbers)) != PICK_COUNT:
        return None
    return tuple(sorted(numbers))


def parse_csv(text: str, today: date | None = None) -> list[Draw]:
    """Return every row that yields a valid draw; other rows are dropped."""
    today = today or date.today()
    draws: list[Draw] = []
    dropped = 0

    for idx, raw_line in enumerate((text or "").strip().split("\n")):
        line = raw_line.strip()
        lowered = line.lower()
        if not line or any(word in lowered for word in _HEADER_WORDS):
            continue

        parts = _SEPARATORS.split(line)
        if len(parts) >= PICK_COUNT + 1:
            draw_number = _parse_int(parts[0])
            numbers = _parse_numbers(parts[2:2 + PICK_COUNT])
            if draw_number is None or numbers is None:
                dropped += 1
                continue
            draws.append(Draw(draw_number, normalize_date(parts[1], today), numbers))
        elif len(parts) >= PICK_COUNT:
            numbers = _parse_numbers(parts[:PICK_COUNT])
            if numbers is None:
                dropped += 1
                continue
            draws.append(Draw(idx + 1, today, numbers))
        else:
            dropped += 1

    log.info(f"Parsed {len(draws)} draws ({dropped} rows dropped)")
    return draws


def _fetch(url: str, max_retries: int = 3, timeout: int = 15) -> str | None:
    """GET with retry + exponential backoff."""
    for attempt in range(1, max_retries + 1):
        try:
            log.debug(f"GET {url} (attempt {attempt})")
            resp = requests.get(url, timeout=timeout)
            resp.raise_for_status()
            return resp.text
        except requests.RequestException as exc:
            log.warning(f"Request failed (attempt {attempt}/{max_retries}): {exc}")
            if attempt < max_retries:
                time.sleep(2 ** attempt + random.uniform(0, 1))
    log.error(f"All {max_retries} attempts failed for {url}")
    return None


def load_csv_source(location: str) -> str:
    """Read CSV text from a local file or an http(s) URL."""
    if location.startswith(("http://", "https://")):
        text = _fetch(location)
        if text is None:
            raise RuntimeError(f"Could not download {location}")
        return text
    return Path(location).read_text(encoding="utf-8-sig")
