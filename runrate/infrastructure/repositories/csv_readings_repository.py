"""
CSV Readings Repository - Infrastructure Layer

Reads one CSV file per day named ``YYYY-MM-DD.csv`` with the columns
``meter_id, timestamp, energy_consumed_kwh``. The timestamp format is
``YYYY-MM-DD HH:MM:SS``.
"""

from __future__ import annotations

import asyncio
import csv
import re
from collections import Counter
from datetime import date
from pathlib import Path
from typing import List, Optional, Tuple

import structlog

from runrate.domain.entities.consumption import AvailablePeriod, MeterReading
from runrate.domain.entities.errors import ReadingsSourceError
from runrate.domain.repositories.readings_repository import IReadingsRepository
from runrate.domain.services.period_calendar import days_in_month
from runrate.infrastructure.repositories.readings_mapper import to_reading

logger = structlog.get_logger(__name__)

FILE_PATTERN = re.compile(r"^(\d{4})-(\d{2})-(\d{2})\.csv$")


class CsvReadingsRepository(IReadingsRepository):
    """Readings repository backed by a directory of daily CSV files."""

    def __init__(self, directory: str) -> None:
        self.directory = Path(directory)

    def _daily_files(self) -> List[Tuple[date, Path]]:
        if not self.directory.is_dir():
            raise ReadingsSourceError(
                f"Readings directory not found: {self.directory}",
                {"directory": str(self.directory)},
            )

        files: List[Tuple[date, Path]] = []
        for path in self.directory.iterdir():
            match = FILE_PATTERN.match(path.name)
            if not match or not path.is_file():
                continue
            try:
                day = date(int(match[1]), int(match[2]), int(match[3]))
            except ValueError:
                continue
            files.append((day, path))
        return sorted(files)

    def _read_file(self, path: Path) -> List[MeterReading]:
        readings: List[MeterReading] = []
        try:
            with path.open(newline="", encoding="utf-8") as handle:
                for row in csv.DictReader(handle):
                    reading = to_reading(row)
                    if reading is not None:
                        readings.append(reading)
        except (OSError, UnicodeDecodeError, csv.Error) as e:
            raise ReadingsSourceError(
                f"Failed to read {path.name}: {e}", {"file": str(path)}
            ) from e
        return readings

    def _load_month(
        self, year: int, month: int, meter_id: Optional[str]
    ) -> List[MeterReading]:
        readings: List[MeterReading] = []
        for day, path in self._daily_files():
            if day.year != year or day.month != month:
                continue
            readings.extend(
                reading
                for reading in self._read_file(path)
                if meter_id is None or reading.meter_id == meter_id
            )
        readings.sort(key=lambda reading: reading.timestamp)
        return readings

    async def find_month(
        self, year: int, month: int, meter_id: Optional[str] = None
    ) -> List[MeterReading]:
        days_in_month(year, month)
        readings = await asyncio.to_thread(self._load_month, year, month, meter_id)
        logger.debug(
            "readings.csv.loaded",
            period=f"{year}-{month:02d}",
            meter_id=meter_id,
            records=len(readings),
        )
        return readings

    async def find_latest_period(self) -> Optional[Tuple[int, int]]:
        files = await asyncio.to_thread(self._daily_files)
        if not files:
            return None
        latest, _ = files[-1]
        return latest.year, latest.month

    def _count_periods(self) -> List[AvailablePeriod]:
        counts: Counter = Counter()
        for day, path in self._daily_files():
            counts[(day.year, day.month)] += len(self._read_file(path))
        return [
            AvailablePeriod(year=year, month=month, records=records)
            for (year, month), records in sorted(counts.items(), reverse=True)
        ]

    async def find_available_periods(self) -> List[AvailablePeriod]:
        return await asyncio.to_thread(self._count_periods)
