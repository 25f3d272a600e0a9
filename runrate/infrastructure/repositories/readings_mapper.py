"""Conversion of raw source rows (Mongo documents, CSV rows) into readings."""

from __future__ import annotations

import math
from datetime import datetime
from typing import Any, Mapping, Optional

from runrate.domain.entities.consumption import MeterReading

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


def parse_timestamp(value: Any) -> Optional[datetime]:
    if isinstance(value, datetime):
        return value
    if not isinstance(value, str):
        return None
    text = value.strip()
    try:
        return datetime.strptime(text, TIMESTAMP_FORMAT)
    except ValueError:
        pass
    try:
        return datetime.fromisoformat(text)
    except ValueError:
        return None


def parse_energy(value: Any) -> float:
    """Non-numeric energy values count as zero."""
    try:
        energy = float(value)
    except (TypeError, ValueError):
        return 0.0
    if not math.isfinite(energy):
        return 0.0
    return energy


def to_reading(row: Mapping[str, Any]) -> Optional[MeterReading]:
    """Build a reading from a row, or None when meter id or timestamp is unusable."""
    meter_id = row.get("meter_id")
    timestamp = parse_timestamp(row.get("timestamp"))
    if meter_id in (None, "") or timestamp is None:
        return None
    return MeterReading(
        meter_id=str(meter_id).strip(),
        timestamp=timestamp,
        energy_consumed_kwh=parse_energy(row.get("energy_consumed_kwh")),
    )
