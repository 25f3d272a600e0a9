"""Domain entities for meter readings and their hourly/daily roll-ups."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime


@dataclass(frozen=True, slots=True)
class MeterReading:
    """A single raw sub-daily reading reported by a meter."""

    meter_id: str
    timestamp: datetime
    energy_consumed_kwh: float


@dataclass(frozen=True, slots=True)
class HourlyTotal:
    """Energy consumed by one meter during one clock hour."""

    date: date
    hour: int
    energy_kwh: float
    readings_count: int = 0


@dataclass(frozen=True, slots=True)
class DailyTotal:
    """Energy consumed by one meter during one calendar day."""

    date: date
    energy_kwh: float
    hours_count: int = 0


@dataclass(frozen=True, slots=True)
class AvailablePeriod:
    """A month present in the readings source."""

    year: int
    month: int
    records: int
