"""
Exception types raised across the Lotto Weekly AI package.
"""


class LottoError(Exception):
    """Base class for every error raised by this package."""


class InvalidInputError(LottoError, ValueError):
    """Empty draw collection, or a draw record violating the draw invariants."""


class ConfigurationError(LottoError, ValueError):
    """Engine parameters out of sensible bounds."""


class DataSourceError(LottoError):
    """Draw history could not be read (missing file, too few rows)."""


class SummaryError(LottoError):
    """The Gemini text endpoint returned an error or an unusable response."""


class NotifierError(LottoError):
    """Telegram rejected a message or could not be reached."""
