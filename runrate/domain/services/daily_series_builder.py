"""Roll raw meter readings up into hourly and daily totals."""

from __future__ import annotations

from collections import defaultdict
from datetime import date
from typing import Dict, Iterable, List, Tuple

from runrate.domain.entities.consumption import DailyTotal, HourlyTotal, MeterReading


def group_by_meter(readings: Iterable[MeterReading]) -> Dict[str, List[MeterReading]]:
    """Split readings per meter; keys come back in sorted meter-id order."""
    grouped: Dict[str, List[MeterReading]] = defaultdict(list)
    for reading in readings:
        grouped[reading.meter_id].append(reading)
    return {meter_id: grouped[meter_id] for meter_id in sorted(grouped)}


def build_hourly_totals(readings: Iterable[MeterReading]) -> List[HourlyTotal]:
    """Sum readings per (date, hour), ascending."""
    energy: Dict[Tuple[date, int], float] = defaultdict(float)
    counts: Dict[Tuple[date, int], int] = defaultdict(int)

    for reading in readings:
        key = (reading.timestamp.date(), reading.timestamp.hour)
        energy[key] += reading.energy_consumed_kwh
        counts[key] += 1

    return [
        HourlyTotal(
            date=key[0],
            hour=key[1],
            energy_kwh=energy[key],
            readings_count=counts[key],
        )
        for key in sorted(energy)
    ]


def build_daily_totals(hourly: Iterable[HourlyTotal]) -> List[DailyTotal]:
    """Sum hourly totals per date, ascending."""
    energy: Dict[date, float] = defaultdict(float)
    hours: Dict[date, int] = defaultdict(int)

    for entry in hourly:
        energy[entry.date] += entry.energy_kwh
        hours[entry.date] += 1

    return [
        DailyTotal(date=day, energy_kwh=energy[day], hours_count=hours[day])
        for day in sorted(energy)
    ]
