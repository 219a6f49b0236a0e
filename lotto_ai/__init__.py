"""
Lotto Weekly AI

Modules:
- stats: statistics engine (frequencies, hot/cold, overdue, pairs, chi-square)
- patterns: odd/even, low/high, sum range and decade spread of draws
- loader: CSV draw history reading and writing
- scraper: results page scraper
- report: Markdown and Telegram HTML rendering of a digest
- gemini: Gemini summary with model fallback
- telegram: Telegram Bot API delivery
- schedule: Monday/Friday morning report window
"""

from .errors import (
    ConfigurationError,
    DataSourceError,
    InvalidInputError,
    LottoError,
    NotifierError,
    SummaryError,
)
from .stats import DrawRecord, NumberStat, PairStat, StatsConfig, StatsDigest, compute

__version__ = "1.0.0"

__all__ = [
    "compute",
    "DrawRecord",
    "NumberStat",
    "PairStat",
    "StatsConfig",
    "StatsDigest",
    "LottoError",
    "InvalidInputError",
    "ConfigurationError",
    "DataSourceError",
    "SummaryError",
    "NotifierError",
]
