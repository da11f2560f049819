"""Exception classes for Toll Analytics."""


class TollAnalyticsError(Exception):
    """Base exception for Toll Analytics."""
    pass


class FormatError(TollAnalyticsError, ValueError):
    """Upload cannot be turned into toll records (bad type, no header, no amount column)."""
    pass
