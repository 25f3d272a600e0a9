"""Domain port for fetching a meter's complete previous-month daily series."""

from __future__ import annotations

from typing import Awaitable, Callable, Optional, Protocol, Sequence

from runrate.domain.entities.consumption import DailyTotal

# Bound to one meter: (year, month) -> daily series, or None when unavailable.
PriorPeriodFetch = Callable[[int, int], Awaitable[Optional[Sequence[DailyTotal]]]]


class IPriorPeriodLoader(Protocol):
    """Loads the daily totals of a meter for a whole month."""

    async def load(
        self, year: int, month: int, meter_id: str
    ) -> Optional[Sequence[DailyTotal]]:
        """Return every daily total available for the month, or None.

        Implementations return None (never raise) when the month has no
        data for the meter. Transport failures may raise; callers treat
        them the same as None.
        """
        ...

    def invalidate(self) -> None:
        """Drop any cached results."""
        ...
