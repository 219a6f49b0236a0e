"""
Israel Lotto - Draw Pattern Analysis

Shape statistics of the main numbers in each draw: odd/even split,
low/high split, sum of the six numbers and decade spread. Complements the
per-number statistics of ``lotto_ai.stats``.
"""
from collections import Counter
from typing import Sequence

import numpy as np
import pandas as pd
from scipy import stats

from lotto_ai.config import MAIN_COUNT, MAIN_MAX
from lotto_ai.errors import InvalidInputError
from lotto_ai.loader import NUM_COLS, records_to_frame
from lotto_ai.stats import DrawRecord


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _require(draws: Sequence[DrawRecord]) -> pd.DataFrame:
    if not draws:
        raise InvalidInputError("No draws provided")
    return records_to_frame(draws)


def _split_summary(dist: Counter, total: int, labels) -> dict:
    """Fill missing splits, add percentages and a tidy DataFrame."""
    for k in range(MAIN_COUNT + 1):
        dist.setdefault((k, MAIN_COUNT - k), 0)

    pcts = {k: round(100.0 * v / total, 2) for k, v in dist.items()}
    most_common = max(sorted(dist), key=dist.get)
    rarest = min(sorted(dist), key=dist.get)

    records = [{labels[0]: k[0], labels[1]: k[1], "count": v, "pct": pcts[k]}
               for k, v in sorted(dist.items())]

    return {
        "distribution": dict(sorted(dist.items())),
        "percentages": pcts,
        "most_common": most_common,
        "rarest": rarest,
        "dataframe": pd.DataFrame(records),
    }


# ===================================================================
# 1. Odd / Even Distribution
# ===================================================================

def odd_even_distribution(draws: Sequence[DrawRecord]) -> dict:
    """
    Frequency of each odd/even split (6/0 through 0/6).

    Returns
    -------
    dict with keys:
        distribution : dict {(odd, even): count}
        percentages  : dict {(odd, even): pct}
        most_common  : (odd, even)
        rarest       : (odd, even)
        even_ratio   : share of even numbers among all drawn main numbers
        dataframe    : pd.DataFrame
    """
    df = _require(draws)
    values = df[NUM_COLS].to_numpy()
    odd_per_draw = (values % 2 == 1).sum(axis=1)

    dist = Counter((int(o), MAIN_COUNT - int(o)) for o in odd_per_draw)
    result = _split_summary(dist, len(df), ("odd", "even"))
    result["even_ratio"] = round(float((values % 2 == 0).mean()), 4)
    return result


# ===================================================================
# 2. Low / High Distribution
# ===================================================================

def high_low_distribution(draws: Sequence[DrawRecord], max_number: int = MAIN_MAX) -> dict:
    """
    Low = 1..max_number // 2 (1-18 for Lotto 37), High = the rest.
    Same structure as the odd/even analysis, keyed by (low, high).
    """
    df = _require(draws)
    low_bound = max_number // 2
    values = df[NUM_COLS].to_numpy()
    low_per_draw = (values <= low_bound).sum(axis=1)

    dist = Counter((int(lo), MAIN_COUNT - int(lo)) for lo in low_per_draw)
    result = _split_summary(dist, len(df), ("low", "high"))
    result["low_bound"] = low_bound
    return result


# ===================================================================
# 3. Sum Range Analysis
# ===================================================================

def sum_range_analysis(draws: Sequence[DrawRecord]) -> dict:
    """
    Sum of the 6 main numbers per draw.
    Statistics: mean, median, mode, std, min, max, skewness, kurtosis.
    Central zone covering ~70 % of draws and a tighter 50 % zone.

    Returns
    -------
    dict with keys:
        stats        : dict of descriptive stats
        zone_70      : (low, high) covering central 70 %
        zone_50      : (low, high) covering central 50 %
        sums_series  : pd.Series of per-draw sums
    """
    df = _require(draws)
    sums = df[NUM_COLS].sum(axis=1).astype(int)

    mode_result = stats.mode(sums, keepdims=True)
    mode_val = int(mode_result.mode[0])

    # skew/kurtosis are NaN for fewer than 3-4 draws
    descriptive = {
        "mean": round(float(sums.mean()), 2),
        "median": float(sums.median()),
        "mode": mode_val,
        "std": round(float(sums.std(ddof=0)), 2),
        "min": int(sums.min()),
        "max": int(sums.max()),
        "skewness": round(float(stats.skew(sums)), 4) if len(sums) > 2 else 0.0,
        "kurtosis": round(float(stats.kurtosis(sums)), 4) if len(sums) > 3 else 0.0,
    }

    p15, p25, p75, p85 = np.percentile(sums, [15, 25, 75, 85])
    zone_70 = (int(np.floor(p15)), int(np.ceil(p85)))
    zone_50 = (int(np.floor(p25)), int(np.ceil(p75)))

    return {
        "stats": descriptive,
        "zone_70": zone_70,
        "zone_50": zone_50,
        "sums_series": sums,
    }


# ===================================================================
# 4. Decade Group Spread
# ===================================================================

def decade_spread(draws: Sequence[DrawRecord], max_number: int = MAIN_MAX) -> dict:
    """
    Groups: 1-9, 10-19, 20-29, ... up to max_number.

    Returns
    -------
    dict with keys:
        group_counts        : dict {label: count across all draws}
        most_common_spread  : tuple of per-group counts seen most often
        spread_counts       : Counter {spread tuple: draws}
    """
    df = _require(draws)
    n_groups = max_number // 10 + 1
    labels = []
    for g in range(n_groups):
        lo = max(1, g * 10)
        hi = min(max_number, g * 10 + 9)
        labels.append(f"{lo}-{hi}")

    group_totals = [0] * n_groups
    spread_counter: Counter = Counter()
    for row in df[NUM_COLS].itertuples(index=False):
        spread = [0] * n_groups
        for n in row:
            spread[int(n) // 10] += 1
        for g, c in enumerate(spread):
            group_totals[g] += c
        spread_counter[tuple(spread)] += 1

    most_common_spread = spread_counter.most_common(1)[0][0]

    return {
        "group_counts": dict(zip(labels, group_totals)),
        "most_common_spread": most_common_spread,
        "spread_counts": spread_counter,
    }


# ===================================================================
# Master Runner
# ===================================================================

def pattern_summary(draws: Sequence[DrawRecord], max_number: int = MAIN_MAX) -> dict:
    """Run every pattern analysis and return a dict of all results."""
    return {
        "odd_even": odd_even_distribution(draws),
        "high_low": high_low_distribution(draws, max_number),
        "sum_range": sum_range_analysis(draws),
        "decade_spread": decade_spread(draws, max_number),
    }
