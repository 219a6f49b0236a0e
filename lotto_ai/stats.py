"""
Israel Lotto - Statistics Engine

Turns an ordered collection of historical draws into an immutable
``StatsDigest``: per-number frequencies (full history and a recent window),
hot/cold rankings, overdue tracking, pair co-occurrence and a chi-square
deviation score against a uniform draw model.

Draws are expected newest first (index 0 = most recent draw).

The theoretical baseline treats every draw as 6 independent picks with
p = 6 / max_number per number. The real process samples without
replacement, so expected/sd/chi-square are reference values from an
approximation, not an exact hypergeometric model.
"""
import math
from collections import Counter
from dataclasses import dataclass, field
from itertools import combinations
from types import MappingProxyType
from typing import Dict, Iterable, Mapping, Optional, Sequence, Tuple, Union

import numpy as np
import pandas as pd

from lotto_ai.config import MAIN_COUNT, MAIN_MAX, STRONG_MAX
from lotto_ai.errors import ConfigurationError, InvalidInputError

Recency = Union[int, float]
UNSEEN = math.inf


# ---------------------------------------------------------------------------
# Records
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class DrawRecord:
    """One historical draw."""
    sequence_id: int
    main_numbers: Tuple[int, ...]
    strong_number: int
    date: Optional[str] = None

    def __post_init__(self):
        object.__setattr__(self, "main_numbers", tuple(self.main_numbers))


@dataclass(frozen=True)
class StatsConfig:
    """Tunable engine parameters."""
    max_number: int = MAIN_MAX
    strong_max: int = STRONG_MAX
    recent_window_size: int = 200
    top_pair_count: int = 15
    include_pairs: bool = True
    include_unseen_overdue: bool = True

    def validate(self):
        for name in ("max_number", "strong_max", "recent_window_size", "top_pair_count"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise ConfigurationError(f"{name} must be an integer, got {value!r}")
        if self.max_number < MAIN_COUNT:
            raise ConfigurationError(
                f"max_number must be at least {MAIN_COUNT}, got {self.max_number}")
        if self.strong_max < 1:
            raise ConfigurationError(f"strong_max must be positive, got {self.strong_max}")
        if self.top_pair_count < 0:
            raise ConfigurationError(
                f"top_pair_count must not be negative, got {self.top_pair_count}")


@dataclass(frozen=True)
class NumberStat:
    number: int
    count: int
    pct: float
    z: float = 0.0
    recency: Recency = UNSEEN


@dataclass(frozen=True)
class PairStat:
    a: int
    b: int
    count: int


@dataclass(frozen=True)
class StatsDigest:
    """Result of ``compute``. Never mutated after construction."""
    total_draws: int
    window_size: int
    max_number: int
    strong_max: int
    frequency_all: Mapping[int, int]
    frequency_recent: Mapping[int, int]
    recency: Mapping[int, Recency]
    z_scores: Mapping[int, float]
    expected_per_number: float
    std_dev_per_number: float
    chi_square: float
    degrees_of_freedom: int
    hot_all: Tuple[NumberStat, ...]
    cold_all: Tuple[NumberStat, ...]
    hot_recent: Tuple[NumberStat, ...]
    cold_recent: Tuple[NumberStat, ...]
    overdue: Tuple[NumberStat, ...]
    top_pairs: Tuple[PairStat, ...]
    frequency_strong: Mapping[int, int]
    recency_strong: Mapping[int, Recency]
    expected_per_strong: float
    chi_square_strong: float
    hot_strong: Tuple[NumberStat, ...]
    cold_strong: Tuple[NumberStat, ...]
    latest: DrawRecord = field(compare=False)

    @property
    def degrees_of_freedom_strong(self) -> int:
        return self.strong_max - 1

    def frequency_frame(self) -> pd.DataFrame:
        """One row per main number, ordered by number."""
        records = []
        for num in range(1, self.max_number + 1):
            records.append({
                "number": num,
                "count": self.frequency_all[num],
                "pct": round(100.0 * self.frequency_all[num] / (self.total_draws * MAIN_COUNT), 4),
                "z": round(self.z_scores[num], 4),
                "recency": self.recency[num],
                "recent_count": self.frequency_recent[num],
            })
        return pd.DataFrame(records)

    def to_dict(self) -> dict:
        """JSON-safe rendering; infinite recency becomes ``None``."""
        def stat(s):
            return {"num": s.number, "count": s.count, "pct": round(s.pct, 4),
                    "z": round(s.z, 4), "overdue": _json_recency(s.recency)}

        return {
            "meta": {
                "totalDraws": self.total_draws,
                "windowSize": self.window_size,
                "maxNumber": self.max_number,
                "expectedPerNumber": self.expected_per_number,
                "sdPerNumber": self.std_dev_per_number,
                "chiSquare": self.chi_square,
                "df": self.degrees_of_freedom,
                "chiSquareStrong": self.chi_square_strong,
                "dfStrong": self.degrees_of_freedom_strong,
            },
            "frequency": {
                "all": {str(k): v for k, v in self.frequency_all.items()},
                "recent": {str(k): v for k, v in self.frequency_recent.items()},
                "strong": {str(k): v for k, v in self.frequency_strong.items()},
            },
            "highlights": {
                "hotAll": [stat(s) for s in self.hot_all],
                "coldAll": [stat(s) for s in self.cold_all],
                "hotRecent": [stat(s) for s in self.hot_recent],
                "coldRecent": [stat(s) for s in self.cold_recent],
                "overdue": [stat(s) for s in self.overdue],
                "hotStrong": [stat(s) for s in self.hot_strong],
                "coldStrong": [stat(s) for s in self.cold_strong],
                "topPairs": [{"a": p.a, "b": p.b, "count": p.count} for p in self.top_pairs],
            },
            "latest": {
                "drawId": self.latest.sequence_id,
                "date": self.latest.date,
                "main": list(self.latest.main_numbers),
                "strong": self.latest.strong_number,
            },
        }


def _json_recency(value: Recency) -> Optional[int]:
    return None if math.isinf(value) else int(value)


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------

def _is_int(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def draw_problem(main_numbers: Sequence[int], strong_number: int,
                 max_number: int = MAIN_MAX, strong_max: int = STRONG_MAX) -> Optional[str]:
    """Describe why a draw breaks the record invariants, or ``None`` if it is valid."""
    if len(main_numbers) != MAIN_COUNT:
        return f"expected {MAIN_COUNT} main numbers, got {len(main_numbers)}"
    not_ints = [n for n in main_numbers if not _is_int(n)]
    if not_ints:
        return f"main numbers must be integers, got {not_ints!r}"
    if not _is_int(strong_number):
        return f"strong number must be an integer, got {strong_number!r}"
    if len(set(main_numbers)) != MAIN_COUNT:
        return f"duplicate main numbers {sorted(main_numbers)}"
    out_of_range = [n for n in main_numbers if not 1 <= n <= max_number]
    if out_of_range:
        return f"main numbers out of range 1-{max_number}: {out_of_range}"
    if not 1 <= strong_number <= strong_max:
        return f"strong number {strong_number} out of range 1-{strong_max}"
    return None


def _check_draws(draws: Sequence[DrawRecord], config: StatsConfig):
    for draw in draws:
        problem = draw_problem(draw.main_numbers, draw.strong_number,
                               config.max_number, config.strong_max)
        if problem:
            raise InvalidInputError(f"Draw #{draw.sequence_id}: {problem}")


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def uniform_baseline(total_draws: int, picks: int, pool: int) -> Tuple[float, float]:
    """Expected count and binomial SD per number for ``picks`` uniform picks out of ``pool``."""
    p = picks / pool
    expected = total_draws * picks / pool
    sd = math.sqrt(total_draws * p * (1 - p))
    return expected, sd


def chi_square_score(observed: Iterable[int], expected: float) -> float:
    """Sum of (observed - expected)^2 / expected. A deviation score, not a p-value."""
    obs = np.asarray(list(observed), dtype=float)
    return float(np.sum((obs - expected) ** 2) / expected)


def _rank_hot(items: Iterable[NumberStat]) -> Tuple[NumberStat, ...]:
    return tuple(sorted(items, key=lambda s: (-s.count, s.number)))


def _rank_cold(items: Iterable[NumberStat]) -> Tuple[NumberStat, ...]:
    return tuple(sorted(items, key=lambda s: (s.count, s.number)))


def _rank_overdue(items: Iterable[NumberStat], include_unseen: bool) -> Tuple[NumberStat, ...]:
    pool = [s for s in items if include_unseen or not math.isinf(s.recency)]
    return tuple(sorted(pool, key=lambda s: (-s.recency, s.number)))


def _full_counts(counter: Counter, upper: int) -> Dict[int, int]:
    return {n: counter.get(n, 0) for n in range(1, upper + 1)}


# ===================================================================
# Engine
# ===================================================================

def compute(draws: Sequence[DrawRecord], config: Optional[StatsConfig] = None) -> StatsDigest:
    """
    Build a ``StatsDigest`` from draws ordered newest first.

    Parameters
    ----------
    draws : sequence of DrawRecord
        Non-empty, newest first.
    config : StatsConfig, optional
        Engine parameters; defaults when omitted. ``recent_window_size`` is
        clamped to [1, len(draws)].

    Raises
    ------
    InvalidInputError
        ``draws`` is empty or a record breaks the draw invariants.
    ConfigurationError
        ``config`` is out of bounds.
    """
    config = config or StatsConfig()
    config.validate()

    draws = list(draws)
    total = len(draws)
    if not total:
        raise InvalidInputError("No draws provided")
    _check_draws(draws, config)

    window = max(1, min(config.recent_window_size, total))

    # --- Single pass over all draws ---
    main_counter: Counter = Counter()
    recent_counter: Counter = Counter()
    strong_counter: Counter = Counter()
    pair_counter: Counter = Counter()
    last_seen: Dict[int, int] = {}
    last_seen_strong: Dict[int, int] = {}

    for idx, draw in enumerate(draws):
        for num in draw.main_numbers:
            main_counter[num] += 1
            if idx < window:
                recent_counter[num] += 1
            last_seen.setdefault(num, idx)
        strong_counter[draw.strong_number] += 1
        last_seen_strong.setdefault(draw.strong_number, idx)

        if config.include_pairs:
            for pair in combinations(sorted(draw.main_numbers), 2):
                pair_counter[pair] += 1

    freq_all = _full_counts(main_counter, config.max_number)
    freq_recent = _full_counts(recent_counter, config.max_number)
    freq_strong = _full_counts(strong_counter, config.strong_max)
    recency = {n: last_seen.get(n, UNSEEN) for n in freq_all}
    recency_strong = {n: last_seen_strong.get(n, UNSEEN) for n in freq_strong}

    # --- Theoretical baseline and chi-square ---
    expected, sd = uniform_baseline(total, MAIN_COUNT, config.max_number)
    z_scores = {n: (c - expected) / sd if sd > 0 else 0.0 for n, c in freq_all.items()}
    chi_square = chi_square_score(freq_all.values(), expected)

    expected_strong, sd_strong = uniform_baseline(total, 1, config.strong_max)
    chi_square_strong = chi_square_score(freq_strong.values(), expected_strong)

    # --- Rankings ---
    all_slots = total * MAIN_COUNT
    recent_slots = window * MAIN_COUNT
    stats_all = [
        NumberStat(n, c, 100.0 * c / all_slots, z_scores[n], recency[n])
        for n, c in freq_all.items()
    ]
    stats_recent = [
        NumberStat(n, c, 100.0 * c / recent_slots, 0.0, recency[n])
        for n, c in freq_recent.items()
    ]
    stats_strong = [
        NumberStat(n, c, 100.0 * c / total,
                   (c - expected_strong) / sd_strong if sd_strong > 0 else 0.0,
                   recency_strong[n])
        for n, c in freq_strong.items()
    ]

    top_pairs: Tuple[PairStat, ...] = ()
    if config.include_pairs:
        ranked_pairs = sorted(pair_counter.items(),
                              key=lambda kv: (-kv[1], kv[0][0], kv[0][1]))
        top_pairs = tuple(PairStat(a, b, count)
                          for (a, b), count in ranked_pairs[:config.top_pair_count])

    return StatsDigest(
        total_draws=total,
        window_size=window,
        max_number=config.max_number,
        strong_max=config.strong_max,
        frequency_all=MappingProxyType(freq_all),
        frequency_recent=MappingProxyType(freq_recent),
        recency=MappingProxyType(recency),
        z_scores=MappingProxyType(z_scores),
        expected_per_number=expected,
        std_dev_per_number=sd,
        chi_square=chi_square,
        degrees_of_freedom=config.max_number - 1,
        hot_all=_rank_hot(stats_all),
        cold_all=_rank_cold(stats_all),
        hot_recent=_rank_hot(stats_recent),
        cold_recent=_rank_cold(stats_recent),
        overdue=_rank_overdue(stats_all, config.include_unseen_overdue),
        top_pairs=top_pairs,
        frequency_strong=MappingProxyType(freq_strong),
        recency_strong=MappingProxyType(recency_strong),
        expected_per_strong=expected_strong,
        chi_square_strong=chi_square_strong,
        hot_strong=_rank_hot(stats_strong),
        cold_strong=_rank_cold(stats_strong),
        latest=draws[0],
    )
