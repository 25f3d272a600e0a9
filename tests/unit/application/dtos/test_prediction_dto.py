from __future__ import annotations

from datetime import date

import pytest
from pydantic import ValidationError

from runrate.application.dtos.prediction_dto import (
    DayPredictionDTO,
    MeterPredictionDTO,
    MonthPredictionDTO,
    PredictionFailureDTO,
)
from runrate.domain.entities.prediction import (
    BlendWeights,
    Confidence,
    ConfidenceLevel,
    DayPrediction,
    FallbackMonthPrediction,
    HybridDetail,
    HybridMonthPrediction,
    StandardMonthPrediction,
)

COMMON = dict(
    meter_id="M1",
    year=2025,
    month=1,
    cutoff_day=None,
    days_in_period=31,
    average_daily_rate=85.0,
)


def _hybrid() -> HybridMonthPrediction:
    return HybridMonthPrediction(
        days_observed=1,
        total_current=85.0,
        predicted_total=4000.0,
        percent_complete=100 / 31,
        is_complete=False,
        confidence=Confidence(
            ConfidenceLevel.LOW_HYBRID,
            45,
            "Hybrid prediction",
            enhancement="Using previous period data",
        ),
        hybrid=HybridDetail(
            previous_year=2024,
            previous_month=12,
            previous_total=4650.0,
            previous_days=31,
            previous_average=150.0,
            current_total=85.0,
            current_days=1,
            current_average=85.0,
            weights=BlendWeights(current=0.3, previous=0.7),
            blended_average=130.5,
        ),
        **COMMON,
    )


def test_hybrid_month_serializes_in_camel_case() -> None:
    payload = MonthPredictionDTO.from_domain(_hybrid()).model_dump(
        mode="json", by_alias=True
    )

    assert payload["success"] is True
    assert payload["meterId"] == "M1"
    assert payload["daysPassedMonth"] == 1
    assert payload["daysInCurrentMonth"] == 31
    assert payload["predictedMonthKwh"] == 4000.0
    assert payload["percentMonthComplete"] == 3.23
    assert payload["valueSource"] == "projection"
    assert payload["predictionMode"] == "hybrid"
    assert payload["hybrid"]["mode"] == "hybrid"
    assert payload["hybrid"]["previousMonth"]["avgDaily"] == 150.0
    assert payload["hybrid"]["weights"] == {"current": 0.3, "previous": 0.7}
    assert payload["hybrid"]["hybridAvgDaily"] == 130.5
    assert payload["confidence"]["level"] == "low_hybrid"
    assert payload["confidence"]["enhancement"] == "Using previous period data"


def test_fallback_month_carries_reason() -> None:
    prediction = FallbackMonthPrediction(
        days_observed=1,
        total_current=85.0,
        predicted_total=2635.0,
        percent_complete=100 / 31,
        is_complete=False,
        confidence=Confidence(ConfidenceLevel.VERY_LOW, 25, "Very limited data"),
        reason="previous period data unavailable",
        warning="Prediction based on only 1 day(s) of current month data",
        **COMMON,
    )

    payload = MonthPredictionDTO.from_domain(prediction).model_dump(by_alias=True)

    assert payload["predictionMode"] == "standard_fallback"
    assert payload["hybrid"]["reason"] == "previous period data unavailable"
    assert payload["hybrid"]["mode"] == "standard_fallback"


def test_standard_month_rounds_values_and_omits_hybrid() -> None:
    prediction = StandardMonthPrediction(
        days_observed=31,
        total_current=3100.4567,
        predicted_total=3100.4567,
        percent_complete=100.0,
        is_complete=True,
        confidence=Confidence(ConfidenceLevel.EXACT, 100, "Month complete"),
        **{**COMMON, "average_daily_rate": 100.01471},
    )

    dto = MonthPredictionDTO.from_domain(prediction)

    assert dto.hybrid is None
    assert dto.predicted_month_kwh == 3100.46
    assert dto.total_energy_month == dto.predicted_month_kwh
    assert dto.average_daily_rate == 100.01
    assert dto.model_dump(by_alias=True)["valueSource"] == "actual"


def test_percent_complete_is_bounded() -> None:
    with pytest.raises(ValidationError):
        MonthPredictionDTO.from_domain(
            StandardMonthPrediction(
                days_observed=3,
                total_current=30.0,
                predicted_total=310.0,
                percent_complete=120.0,
                is_complete=False,
                confidence=Confidence(ConfidenceLevel.VERY_LOW, 25, "Limited"),
                **COMMON,
            )
        )


def test_day_prediction_from_domain() -> None:
    dto = DayPredictionDTO.from_domain(
        DayPrediction(
            date=date(2025, 1, 1),
            hours_passed=5,
            total_energy=10.004,
            basic_prediction=48.0192,
            rolling_prediction=48.0,
            rolling_window_used=5,
            average_hourly_rate=2.0008,
            recent_hourly_rate=2.0,
        )
    )

    payload = dto.model_dump(mode="json", by_alias=True)
    assert payload["date"] == "2025-01-01"
    assert payload["hoursPassedToday"] == 5
    assert payload["totalEnergyToday"] == 10.0
    assert payload["basicPrediction"] == 48.02


def test_meter_prediction_accepts_failures() -> None:
    failure = PredictionFailureDTO(message="Need at least 3 hours", found=2, required=3)
    dto = MeterPredictionDTO(
        meter_id="M1",
        hours_processed=2,
        today=failure,
        month=MonthPredictionDTO.from_domain(_hybrid()),
    )

    payload = dto.model_dump(by_alias=True)
    assert payload["hoursProcessed"] == 2
    assert payload["today"] == {
        "success": False,
        "message": "Need at least 3 hours",
        "found": 2,
        "required": 3,
    }
    assert payload["month"]["success"] is True
