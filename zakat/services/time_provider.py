"""Time provider abstraction for testable staleness checks.

All timestamps in this module are timezone-aware UTC datetimes.
"""
from datetime import datetime, timezone
from typing import Optional


class TimeProvider:
    """Provides the current time, allowing tests to freeze it.

    Usage:
        # Production: uses real UTC time
        provider = TimeProvider()
        now = provider.now()

        # Testing: freeze to a specific instant
        provider = TimeProvider(frozen_now=datetime(2026, 1, 15, tzinfo=timezone.utc))
        now = provider.now()  # Always returns 2026-01-15T00:00:00+00:00
    """

    _instance: Optional['TimeProvider'] = None

    def __init__(self, frozen_now: Optional[datetime] = None):
        """Initialize TimeProvider.

        Args:
            frozen_now: If provided, now() always returns this instant.
                        Naive datetimes are treated as UTC.
        """
        if frozen_now is not None and frozen_now.tzinfo is None:
            frozen_now = frozen_now.replace(tzinfo=timezone.utc)
        self._frozen_now = frozen_now

    def now(self) -> datetime:
        """Get current UTC time, or the frozen instant if set."""
        if self._frozen_now is not None:
            return self._frozen_now
        return datetime.now(timezone.utc)

    @classmethod
    def get_default(cls) -> 'TimeProvider':
        """Get the default TimeProvider instance (singleton for production)."""
        if cls._instance is None:
            cls._instance = TimeProvider()
        return cls._instance

    @classmethod
    def set_default(cls, provider: 'TimeProvider') -> None:
        """Set the default TimeProvider (for testing)."""
        cls._instance = provider

    @classmethod
    def reset_default(cls) -> None:
        """Reset to production TimeProvider."""
        cls._instance = None


def get_now(time_provider: Optional[TimeProvider] = None) -> datetime:
    """Convenience function to get the current UTC time."""
    if time_provider is None:
        time_provider = TimeProvider.get_default()
    return time_provider.now()
