from datetime import datetime

import pytest

from runrate.infrastructure.repositories.readings_mapper import (
    parse_energy,
    parse_timestamp,
    to_reading,
)


@pytest.mark.parametrize(
    "value, expected",
    [
        ("2025-01-31 10:00:00", datetime(2025, 1, 31, 10)),
        (" 2025-01-31T10:30:00 ", datetime(2025, 1, 31, 10, 30)),
        (datetime(2025, 1, 1), datetime(2025, 1, 1)),
        ("31/01/2025", None),
        (None, None),
        (1738317600, None),
    ],
)
def test_parse_timestamp(value, expected) -> None:
    assert parse_timestamp(value) == expected


@pytest.mark.parametrize(
    "value, expected",
    [("1.25", 1.25), (3, 3.0), ("", 0.0), (None, 0.0), ("nan", 0.0), ("inf", 0.0)],
)
def test_parse_energy(value, expected) -> None:
    assert parse_energy(value) == expected


def test_to_reading_strips_meter_id() -> None:
    reading = to_reading(
        {
            "meter_id": " M1 ",
            "timestamp": "2025-01-01 00:00:00",
            "energy_consumed_kwh": "2",
        }
    )

    assert reading is not None
    assert reading.meter_id == "M1"
    assert reading.energy_consumed_kwh == 2.0


def test_to_reading_rejects_rows_without_identity() -> None:
    assert to_reading({"timestamp": "2025-01-01 00:00:00"}) is None
    assert to_reading({"meter_id": "M1", "timestamp": "garbage"}) is None
