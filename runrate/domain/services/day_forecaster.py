"""Hour-to-day run-rate projection for the latest day of a meter's series."""

from __future__ import annotations

import math
from typing import Sequence

from runrate.domain.entities.consumption import HourlyTotal
from runrate.domain.entities.errors import InsufficientDataError
from runrate.domain.entities.prediction import DayPrediction
from runrate.domain.services.run_rate_projector import project

HOURS_PER_DAY = 24


def predict_today(
    hourly: Sequence[HourlyTotal],
    min_hours_required: int = 3,
    rolling_window_hours: int = 6,
) -> DayPrediction:
    """
    Project the latest day in ``hourly`` to a 24-hour total.

    Two projections are returned: the plain run-rate over every observed
    hour, and a rolling one that only uses the most recent hours so a spike
    early in the day weighs less.

    Raises:
        InsufficientDataError: fewer than ``min_hours_required`` hours
            overall or on the latest day.
    """
    if len(hourly) < min_hours_required:
        raise InsufficientDataError(
            f"Need at least {min_hours_required} hours of data. "
            f"Currently have {len(hourly)} hour(s).",
            found=len(hourly),
            required=min_hours_required,
        )

    today = hourly[-1].date
    today_hours = [entry for entry in hourly if entry.date == today]
    hours_passed = len(today_hours)

    if hours_passed < min_hours_required:
        raise InsufficientDataError(
            f"Need at least {min_hours_required} hours of today's data. "
            f"Currently have {hours_passed} hour(s).",
            found=hours_passed,
            required=min_hours_required,
        )

    total = math.fsum(entry.energy_kwh for entry in today_hours)
    if hours_passed >= HOURS_PER_DAY:
        basic = total
    else:
        basic = project(total, hours_passed, HOURS_PER_DAY)

    window = min(rolling_window_hours, hours_passed)
    recent = today_hours[-window:]
    recent_rate = math.fsum(entry.energy_kwh for entry in recent) / window

    return DayPrediction(
        date=today,
        hours_passed=hours_passed,
        total_energy=total,
        basic_prediction=basic,
        rolling_prediction=recent_rate * HOURS_PER_DAY,
        rolling_window_used=window,
        average_hourly_rate=total / hours_passed,
        recent_hourly_rate=recent_rate,
    )
