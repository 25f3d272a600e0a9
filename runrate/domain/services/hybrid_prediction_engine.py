"""
Hybrid Prediction Engine - Domain Service

Projects a meter's monthly consumption from its daily series. With enough
current-month days the month is projected from its own run-rate
("standard"). With fewer days the current average is blended with the
previous month's average ("hybrid"); when the previous month is missing or
too sparse the engine falls back to the current run-rate and labels the
result "standard_fallback".

Data-sufficiency outcomes are expressed as results, with the single
exception of ``InsufficientDataError`` when no current-month day exists.
"""

from __future__ import annotations

import asyncio
import math
from typing import Optional, Sequence, Tuple

from runrate.domain.entities.consumption import DailyTotal
from runrate.domain.entities.errors import InsufficientDataError, InvalidPeriodError
from runrate.domain.entities.prediction import (
    BlendWeights,
    FallbackMonthPrediction,
    HybridDetail,
    HybridMonthPrediction,
    HybridPolicy,
    MonthPrediction,
    PeriodDescriptor,
    StandardMonthPrediction,
)
from runrate.domain.ports.prior_period_loader import PriorPeriodFetch
from runrate.domain.services.confidence_scorer import score_confidence
from runrate.domain.services.period_calendar import (
    days_in_month,
    previous_period,
    validate_day,
)
from runrate.domain.services.run_rate_projector import project
from runrate.shared import get_logger

logger = get_logger(__name__)

FALLBACK_REASON = "previous period data unavailable"


class HybridPredictionEngine:
    """Decides between standard and hybrid projection for one meter."""

    def __init__(self, policy: Optional[HybridPolicy] = None) -> None:
        self.policy = policy or HybridPolicy()

    async def predict_month(
        self,
        series: Sequence[DailyTotal],
        period: Optional[PeriodDescriptor] = None,
        load_prior_period: Optional[PriorPeriodFetch] = None,
        meter_id: Optional[str] = None,
    ) -> MonthPrediction:
        """
        Predict the full-month total for one meter.

        Args:
            series: The meter's daily totals, ascending by date, any months.
            period: Target month and optional cutoff day. Defaults to the
                month of the latest entry in ``series``.
            load_prior_period: Awaitable fetch of the previous month's daily
                series for this meter. Only called in hybrid mode.
            meter_id: Used for logging and copied into the result.

        Raises:
            InsufficientDataError: No usable day in the target month.
            InvalidPeriodError: Malformed period descriptor.
        """
        period = period or PeriodDescriptor()
        required = self.policy.min_days_required

        if len(series) < required:
            raise InsufficientDataError(
                f"Need at least {required} day(s) of data. "
                f"Currently have {len(series)} day(s).",
                found=len(series),
                required=required,
            )

        year, month = self._resolve_period(series, period)
        cutoff_day = period.cutoff_day
        if cutoff_day is not None:
            validate_day(year, month, cutoff_day)

        current = [
            entry
            for entry in series
            if entry.date.year == year
            and entry.date.month == month
            and (cutoff_day is None or entry.date.day <= cutoff_day)
        ]
        if len(current) < required:
            raise InsufficientDataError(
                f"Need at least {required} day(s) of data for {year}-{month:02d}. "
                f"Currently have {len(current)} day(s).",
                found=len(current),
                required=required,
                details={"year": year, "month": month},
            )

        total_current = math.fsum(entry.energy_kwh for entry in current)
        days_observed = len(current)
        period_days = days_in_month(year, month)
        avg_current = total_current / days_observed

        effective_day_limit = cutoff_day if cutoff_day is not None else days_observed
        percent_complete = min(100.0, effective_day_limit / period_days * 100)
        is_complete = effective_day_limit >= period_days

        common = dict(
            meter_id=meter_id,
            year=year,
            month=month,
            cutoff_day=cutoff_day,
            days_observed=days_observed,
            days_in_period=period_days,
            total_current=total_current,
            average_daily_rate=avg_current,
            percent_complete=percent_complete,
            is_complete=is_complete,
        )

        use_hybrid = (
            days_observed < self.policy.hybrid_threshold_days and not is_complete
        )
        if not use_hybrid:
            if is_complete:
                predicted = total_current
            else:
                predicted = project(total_current, days_observed, period_days)
            return StandardMonthPrediction(
                predicted_total=predicted,
                confidence=score_confidence(days_observed, period_days, False, False),
                **common,
            )

        prev_year, prev_month = previous_period(year, month)
        previous = await self._load_prior(
            load_prior_period, prev_year, prev_month, meter_id
        )

        if previous is None:
            logger.info(
                "prediction.hybrid.fallback",
                meter_id=meter_id,
                period=f"{year}-{month:02d}",
                days_observed=days_observed,
            )
            return FallbackMonthPrediction(
                predicted_total=avg_current * period_days,
                confidence=score_confidence(days_observed, period_days, False, False),
                reason=FALLBACK_REASON,
                warning=(
                    f"Prediction based on only {days_observed} day(s) "
                    "of current month data"
                ),
                **common,
            )

        total_previous = math.fsum(entry.energy_kwh for entry in previous)
        days_previous = len(previous)
        avg_previous = total_previous / days_previous

        weight_current = self.policy.current_weight(days_observed)
        weight_previous = 1.0 - weight_current

        avg_hybrid = avg_current * weight_current + avg_previous * weight_previous
        remaining_days = max(period_days - days_observed, 0)
        predicted = total_current + avg_hybrid * remaining_days

        logger.info(
            "prediction.hybrid.applied",
            meter_id=meter_id,
            period=f"{year}-{month:02d}",
            days_observed=days_observed,
            weight_current=weight_current,
        )

        return HybridMonthPrediction(
            predicted_total=predicted,
            confidence=score_confidence(days_observed, period_days, True, True),
            hybrid=HybridDetail(
                previous_year=prev_year,
                previous_month=prev_month,
                previous_total=total_previous,
                previous_days=days_previous,
                previous_average=avg_previous,
                current_total=total_current,
                current_days=days_observed,
                current_average=avg_current,
                weights=BlendWeights(current=weight_current, previous=weight_previous),
                blended_average=avg_hybrid,
            ),
            **common,
        )

    @staticmethod
    def _resolve_period(
        series: Sequence[DailyTotal], period: PeriodDescriptor
    ) -> Tuple[int, int]:
        if period.year is None and period.month is None:
            latest = series[-1].date
            return latest.year, latest.month
        if period.year is None or period.month is None:
            raise InvalidPeriodError("Year and month must be provided together")
        days_in_month(period.year, period.month)
        return period.year, period.month

    async def _load_prior(
        self,
        load_prior_period: Optional[PriorPeriodFetch],
        year: int,
        month: int,
        meter_id: Optional[str],
    ) -> Optional[Sequence[DailyTotal]]:
        """Fetch the previous month, returning None when it cannot be used."""
        if load_prior_period is None:
            return None

        try:
            entries = await load_prior_period(year, month)
        except asyncio.CancelledError:
            raise
        except Exception as exc:
            logger.warning(
                "prior_period.load_failed",
                meter_id=meter_id,
                period=f"{year}-{month:02d}",
                error=str(exc),
            )
            return None

        if not entries:
            logger.info(
                "prior_period.unavailable",
                meter_id=meter_id,
                period=f"{year}-{month:02d}",
            )
            return None

        distinct_days = len({entry.date for entry in entries})
        minimum = self.policy.prior_completeness_ratio * days_in_month(year, month)
        if distinct_days < minimum:
            logger.warning(
                "prior_period.incomplete",
                meter_id=meter_id,
                period=f"{year}-{month:02d}",
                days_found=distinct_days,
                days_required=math.ceil(minimum),
            )
            return None

        return entries
