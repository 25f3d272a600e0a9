from __future__ import annotations

import asyncio
from datetime import date

import pytest

from runrate.domain.entities.errors import ReadingsSourceError
from runrate.infrastructure.repositories.csv_readings_repository import (
    CsvReadingsRepository,
)
from runrate.infrastructure.services.prior_period_loader import (
    ReadingsPriorPeriodLoader,
)
from runrate.shared.ttl_cache import TTLCache
from tests.conftest import StubReadingsRepository, month_readings


class _SlowRepository(StubReadingsRepository):
    async def find_month(self, year, month, meter_id=None):
        await asyncio.sleep(1)
        return await super().find_month(year, month, meter_id)


def _loader(repository, ttl=300, timeout=5.0) -> ReadingsPriorPeriodLoader:
    return ReadingsPriorPeriodLoader(
        repository, TTLCache(ttl_seconds=ttl), timeout_seconds=timeout
    )


@pytest.mark.asyncio
async def test_load_builds_daily_series_for_meter() -> None:
    readings = month_readings("M1", 2024, 12, range(1, 32), kwh_per_hour=2.0)
    readings += month_readings("M2", 2024, 12, range(1, 5))
    repository = StubReadingsRepository(readings)

    series = await _loader(repository).load(2024, 12, meter_id="M1")

    assert series is not None
    assert len(series) == 31
    assert series[0].date == date(2024, 12, 1)
    assert series[0].energy_kwh == pytest.approx(48.0)
    assert repository.calls == [("find_month", (2024, 12, None))]


@pytest.mark.asyncio
async def test_month_is_read_once_for_every_meter() -> None:
    repository = StubReadingsRepository(month_readings("M1", 2024, 12, range(1, 20)))
    loader = _loader(repository)

    first = await loader.load(2024, 12, meter_id="M1")
    second = await loader.load(2024, 12, meter_id="M1")
    missing = await loader.load(2024, 12, meter_id="M2")

    assert first == second
    assert missing is None
    assert repository.load_count == 1


@pytest.mark.asyncio
async def test_concurrent_meters_share_one_source_read() -> None:
    meter_ids = [f"M{index:02d}" for index in range(20)]
    readings = []
    for meter_id in meter_ids:
        readings += month_readings(meter_id, 2024, 12, range(1, 32))
    repository = StubReadingsRepository(readings)
    loader = _loader(repository)

    results = await asyncio.gather(
        *(loader.load(2024, 12, meter_id=meter_id) for meter_id in meter_ids)
    )

    assert all(series is not None and len(series) == 31 for series in results)
    assert repository.calls == [("find_month", (2024, 12, None))]


@pytest.mark.asyncio
async def test_other_months_are_loaded_separately() -> None:
    readings = month_readings("M1", 2024, 11, [1]) + month_readings("M1", 2024, 12, [1])
    repository = StubReadingsRepository(readings)
    loader = _loader(repository)

    await loader.load(2024, 11, meter_id="M1")
    await loader.load(2024, 12, meter_id="M1")

    assert repository.load_count == 2


@pytest.mark.asyncio
async def test_empty_month_is_cached_as_unavailable() -> None:
    repository = StubReadingsRepository()
    loader = _loader(repository)

    assert await loader.load(2024, 12, meter_id="M1") is None
    assert await loader.load(2024, 12, meter_id="M1") is None
    assert repository.load_count == 1


@pytest.mark.asyncio
async def test_invalidate_forces_reload() -> None:
    repository = StubReadingsRepository(month_readings("M1", 2024, 12, [1]))
    loader = _loader(repository)

    await loader.load(2024, 12, meter_id="M1")
    loader.invalidate()
    await loader.load(2024, 12, meter_id="M1")

    assert repository.load_count == 2


@pytest.mark.asyncio
async def test_zero_ttl_disables_cache() -> None:
    repository = StubReadingsRepository(month_readings("M1", 2024, 12, [1]))
    loader = _loader(repository, ttl=0)

    await loader.load(2024, 12, meter_id="M1")
    await loader.load(2024, 12, meter_id="M1")

    assert repository.load_count == 2


@pytest.mark.asyncio
async def test_slow_source_times_out_as_unavailable() -> None:
    repository = _SlowRepository(month_readings("M1", 2024, 12, [1]))

    assert await _loader(repository, timeout=0.01).load(2024, 12, "M1") is None


@pytest.mark.asyncio
async def test_source_errors_propagate(failing_source_error) -> None:
    repository = StubReadingsRepository(fail_with=failing_source_error)

    with pytest.raises(ReadingsSourceError):
        await _loader(repository).load(2024, 12, meter_id="M1")


@pytest.mark.asyncio
async def test_csv_month_files_are_parsed_once(tmp_path, monkeypatch) -> None:
    meter_ids = [f"M{index:02d}" for index in range(20)]
    for day in range(1, 32):
        rows = "".join(
            f"{meter_id},2024-12-{day:02d} 12:00:00,1.0\n" for meter_id in meter_ids
        )
        (tmp_path / f"2024-12-{day:02d}.csv").write_text(
            "meter_id,timestamp,energy_consumed_kwh\n" + rows, encoding="utf-8"
        )
    repository = CsvReadingsRepository(str(tmp_path))
    parsed = []
    read_file = repository._read_file

    def counting_read(path):
        parsed.append(path.name)
        return read_file(path)

    monkeypatch.setattr(repository, "_read_file", counting_read)
    loader = _loader(repository)

    results = await asyncio.gather(
        *(loader.load(2024, 12, meter_id=meter_id) for meter_id in meter_ids)
    )

    assert all(len(series) == 31 for series in results)
    assert len(parsed) == 31
