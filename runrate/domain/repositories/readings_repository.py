"""
Readings Repository Interface

Abstracts where raw meter readings live (MongoDB, CSV files) from the
use cases that roll them up and project them.
"""

from abc import ABC, abstractmethod
from typing import List, Optional, Tuple

from runrate.domain.entities.consumption import AvailablePeriod, MeterReading


class IReadingsRepository(ABC):
    """Interface for readings repository implementations."""

    @abstractmethod
    async def find_month(
        self, year: int, month: int, meter_id: Optional[str] = None
    ) -> List[MeterReading]:
        """
        Return every reading of the month, ascending by timestamp.

        Args:
            year: Calendar year
            month: Calendar month (1-12)
            meter_id: Restrict to one meter when given

        Raises:
            ReadingsSourceError: When the source cannot be queried
        """
        pass

    @abstractmethod
    async def find_latest_period(self) -> Optional[Tuple[int, int]]:
        """Return (year, month) of the most recent reading, or None when empty."""
        pass

    @abstractmethod
    async def find_available_periods(self) -> List[AvailablePeriod]:
        """List months holding readings, most recent first."""
        pass
