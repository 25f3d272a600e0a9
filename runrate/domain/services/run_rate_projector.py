"""Run-rate projection: average per observed unit times units in the period."""

from __future__ import annotations


def project(observed_total: float, units_observed: int, units_in_period: int) -> float:
    """
    Linearly extrapolate a partial-period total to the whole period.

    Callers holding a complete period should use the observed total itself
    instead of calling this, so that "actual" values stay bit-identical.

    Raises:
        ValueError: if ``units_observed`` is not positive or exceeds
            ``units_in_period``.
    """
    if units_observed <= 0:
        raise ValueError("units_observed must be positive")
    if units_in_period < units_observed:
        raise ValueError("units_in_period must be >= units_observed")
    return (observed_total / units_observed) * units_in_period
