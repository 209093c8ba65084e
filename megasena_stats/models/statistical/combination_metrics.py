"""
megasena_stats/models/statistical/combination_metrics.py
Descriptive metrics for a single combination.
"""
from __future__ import annotations

from collections import Counter
from collections.abc import Sequence

import numpy as np


def calculate_entropy(numbers: Sequence[int]) -> float:
    """Shannon entropy (bits) of the value distribution in `numbers`."""
    if not numbers:
        return 0.0
    counts = np.array(list(Counter(numbers).values()), dtype=float)
    p = counts / counts.sum()
    return float(-(p * np.log2(p)).sum())


def calculate_variance(combo: Sequence[int]) -> float:
    """Population variance of the combination's numbers."""
    if not combo:
        return 0.0
    return float(np.var(combo))


def describe_combination(numbers: Sequence[int], low_high_split: int = 30) -> dict:
    return {
        "sum": int(sum(numbers)),
        "even_count": sum(1 for n in numbers if n % 2 == 0),
        "low_count": sum(1 for n in numbers if n <= low_high_split),
        "variance": round(calculate_variance(numbers), 2),
    }
