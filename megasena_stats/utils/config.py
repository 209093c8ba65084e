"""
megasena_stats/utils/config.py
Load env vars and the analysis parameter JSON file.
"""
import json
import os
from pathlib import Path
from typing import Any

from dotenv import load_dotenv

load_dotenv()

ROOT = Path(__file__).parent.parent.parent
CONFIG_DIR = Path(os.getenv("MEGASENA_CONFIG_DIR", ROOT / "config"))
ANALYSIS_CONFIG_FILE = "analysis_params.json"

# ── Supabase ──────────────────────────────────────────────────────
SUPABASE_URL: str = os.getenv("SUPABASE_URL", "")
SUPABASE_KEY: str = os.getenv("SUPABASE_KEY", "")
SUPABASE_DRAWS_TABLE: str = os.getenv("SUPABASE_DRAWS_TABLE", "draws")

# ── Presentation ──────────────────────────────────────────────────
METHOD_LABELS: dict[str, str] = {
    "monte_carlo": "Monte Carlo",
    "balanced": "Balanced Constraints",
    "balanced_fallback": "Random (constraints too strict)",
    "overdue": "Gap Analysis (Overdue)",
}

_config_cache: dict[str, Any] = {}


def get_analysis_config() -> dict[str, Any]:
    """Load and cache the analysis parameter JSON."""
    if ANALYSIS_CONFIG_FILE in _config_cache:
        return _config_cache[ANALYSIS_CONFIG_FILE]
    path = CONFIG_DIR / ANALYSIS_CONFIG_FILE
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")
    with open(path, "r", encoding="utf-8") as f:
        config = json.load(f)
    _config_cache[ANALYSIS_CONFIG_FILE] = config
    return config


def get_number_range() -> tuple[int, int]:
    lo, hi = get_analysis_config()["number_range"]
    return lo, hi


def get_pick_count() -> int:
    return get_analysis_config().get("pick_count", 6)


def get_low_high_split() -> int:
    """Highest number still counted as 'low' (30 for 1–60)."""
    return get_analysis_config().get("low_high_split", 30)


def get_sum_bin_sizes() -> dict[str, int]:
    """Return {'summary': 30, 'histogram': 15} style bin sizes."""
    return dict(get_analysis_config().get("sum_bin_sizes", {"summary": 30, "histogram": 15}))


def get_store_limits() -> tuple[int, int]:
    """Return (list_limit, batch_size) for the draw store."""
    store = get_analysis_config().get("store", {})
    return store.get("list_limit", 5000), store.get("batch_size", 100)


def get_section(name: str) -> dict[str, Any]:
    """Return a nested parameter block such as 'monte_carlo' or 'balanced'."""
    return dict(get_analysis_config().get(name, {}))
