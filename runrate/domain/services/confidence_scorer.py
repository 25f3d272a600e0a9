"""
Confidence Scorer - Domain Service

Maps the amount of data behind a monthly prediction to a discrete
confidence level. Percent complete is recomputed from the observed days,
ignoring any cutoff day, so the score reflects actual data density.
"""

from __future__ import annotations

from runrate.domain.entities.prediction import Confidence, ConfidenceLevel

HYBRID_ENHANCEMENT = "Blended with the previous month's daily average"
PREVIOUS_DATA_WARNING = (
    "Previous month data unavailable; prediction relies on very few days"
)


def score_confidence(
    days_observed: int,
    days_in_period: int,
    is_hybrid: bool,
    has_prior_data: bool,
) -> Confidence:
    """Return the confidence for a prediction; every input maps to one level."""
    percent_complete = days_observed / days_in_period * 100

    if percent_complete >= 100:
        return Confidence(
            level=ConfidenceLevel.EXACT,
            score=100,
            description="Month complete, value is the actual consumption",
        )
    if percent_complete >= 80:
        return Confidence(
            level=ConfidenceLevel.VERY_HIGH,
            score=90,
            description="Based on at least 80% of the month",
        )
    if percent_complete >= 50:
        return Confidence(
            level=ConfidenceLevel.HIGH,
            score=80,
            description="Based on at least half of the month",
        )
    if percent_complete >= 25:
        return Confidence(
            level=ConfidenceLevel.MEDIUM,
            score=65,
            description="Based on at least a quarter of the month",
        )

    if is_hybrid and has_prior_data:
        if days_observed == 2:
            return Confidence(
                level=ConfidenceLevel.MEDIUM_HYBRID,
                score=55,
                description="Two days of data blended with the previous month",
                enhancement=HYBRID_ENHANCEMENT,
            )
        return Confidence(
            level=ConfidenceLevel.LOW_HYBRID,
            score=45,
            description="One day of data blended with the previous month",
            enhancement=HYBRID_ENHANCEMENT,
        )

    if days_observed == 2:
        return Confidence(
            level=ConfidenceLevel.LOW,
            score=35,
            description="Only two days of data",
            warning=PREVIOUS_DATA_WARNING,
        )
    return Confidence(
        level=ConfidenceLevel.VERY_LOW,
        score=25,
        description="Very limited data for this month",
        warning=PREVIOUS_DATA_WARNING,
    )
