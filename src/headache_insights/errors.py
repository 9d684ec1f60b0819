"""Exception types raised outside the pure insight engine."""


class HeadacheInsightsError(Exception):
    """Base class for package errors."""


class RecordLoadError(HeadacheInsightsError):
    """Raised when an entry export cannot be read as health records."""
