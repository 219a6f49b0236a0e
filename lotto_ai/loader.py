"""
Israel Lotto Draw History - CSV Loader

Reads the flat draw history file (data/lotto.csv). Accepted layout, with or
without a header row:

    drawId,date,n1,n2,n3,n4,n5,n6,strong[,extra columns ignored]

Rows that are short, non-numeric or break the draw invariants are skipped
and reported. ``load_draws`` returns records newest first, the order the
statistics engine expects.
"""
import csv
import io
import os
import warnings
from typing import Iterable, List, Optional, Sequence, Union

import pandas as pd

from lotto_ai.config import CSV_COLUMNS, CSV_PATH, MAIN_COUNT, MAIN_MAX, STRONG_MAX
from lotto_ai.errors import DataSourceError
from lotto_ai.stats import DrawRecord, draw_problem

NUM_COLS = [f"num{i}" for i in range(1, MAIN_COUNT + 1)]
MIN_FIELDS = 3 + MAIN_COUNT

Source = Union[str, os.PathLike, io.TextIOBase]


def validate_draw(draw_id, date, numbers, strong,
                  max_number: int = MAIN_MAX, strong_max: int = STRONG_MAX) -> Optional[DrawRecord]:
    """Normalize raw draw values into a ``DrawRecord``; ``None`` when anything is off."""
    try:
        parsed_id = int(draw_id)
        parsed_numbers = [int(n) for n in numbers]
        parsed_strong = int(strong)
    except (TypeError, ValueError):
        return None

    if parsed_id <= 0:
        return None
    if draw_problem(parsed_numbers, parsed_strong, max_number, strong_max):
        return None

    date_str = str(date).strip() if date is not None else None
    return DrawRecord(parsed_id, tuple(parsed_numbers), parsed_strong, date_str or None)


def _is_header(row: Sequence[str]) -> bool:
    try:
        int(row[0].strip())
    except (ValueError, IndexError):
        return True
    return False


def _read_rows(source: Source) -> List[List[str]]:
    if isinstance(source, io.TextIOBase):
        return [row for row in csv.reader(source) if any(c.strip() for c in row)]
    with open(source, "r", encoding="utf-8-sig", newline="") as f:
        return [row for row in csv.reader(f) if any(c.strip() for c in row)]


def parse_csv(source: Source, max_number: int = MAIN_MAX,
              strong_max: int = STRONG_MAX) -> List[DrawRecord]:
    """
    Parse a draw history CSV into records sorted by draw id ascending.

    Duplicate draw ids keep their first occurrence.
    """
    rows = _read_rows(source)
    if rows and _is_header(rows[0]):
        rows = rows[1:]

    records = {}
    skipped = 0
    for row in rows:
        cells = [c.strip() for c in row]
        if len(cells) < MIN_FIELDS:
            skipped += 1
            continue
        record = validate_draw(cells[0], cells[1], cells[2:2 + MAIN_COUNT],
                               cells[2 + MAIN_COUNT], max_number, strong_max)
        if record is None:
            skipped += 1
            continue
        records.setdefault(record.sequence_id, record)

    if skipped:
        warnings.warn(f"Skipped {skipped} invalid draw row(s) while parsing draw history")

    return [records[k] for k in sorted(records)]


def load_draws(path: Optional[Source] = None, last_n: Optional[int] = None,
               max_number: int = MAIN_MAX, strong_max: int = STRONG_MAX,
               min_draws: int = 1) -> List[DrawRecord]:
    """
    Load the newest ``last_n`` draws (all when ``None``), newest first.

    Raises
    ------
    DataSourceError
        File missing, or fewer than ``min_draws`` valid rows.
    """
    path = path if path is not None else CSV_PATH
    if not isinstance(path, io.TextIOBase) and not os.path.exists(path):
        raise DataSourceError(f"Missing CSV file: {path}. Make sure the draw history exists.")

    records = parse_csv(path, max_number, strong_max)
    print(f"[Loader] Parsed {len(records)} draws from {path}")
    if last_n is not None:
        records = records[-last_n:] if last_n > 0 else []

    if len(records) < max(min_draws, 1):
        raise DataSourceError(
            f"CSV parsed but has too few rows ({len(records)}). Check file format and --last.")
    return list(reversed(records))


def records_to_frame(draws: Iterable[DrawRecord]) -> pd.DataFrame:
    """Tabular view with the canonical CSV columns, in the given order."""
    rows = []
    for d in draws:
        row = {"draw_id": d.sequence_id, "date": d.date or ""}
        row.update({col: n for col, n in zip(NUM_COLS, d.main_numbers)})
        row["strong"] = d.strong_number
        rows.append(row)
    return pd.DataFrame(rows, columns=CSV_COLUMNS)


def merge_draws(existing: Iterable[DrawRecord], new: Iterable[DrawRecord]) -> List[DrawRecord]:
    """Union keyed by draw id, ascending. Existing records win over new ones."""
    merged = {d.sequence_id: d for d in new}
    merged.update({d.sequence_id: d for d in existing})
    return [merged[k] for k in sorted(merged)]


def save_draws(draws: Iterable[DrawRecord], path: Optional[str] = None) -> str:
    """Write draws to CSV sorted by draw id ascending, with the canonical header."""
    path = path or CSV_PATH
    directory = os.path.dirname(path)
    if directory:
        os.makedirs(directory, exist_ok=True)
    df = records_to_frame(sorted(draws, key=lambda d: d.sequence_id))
    df.to_csv(path, index=False)
    return path
