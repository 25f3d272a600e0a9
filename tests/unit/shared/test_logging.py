from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from runrate.shared.consts import EnumEnvironment, EnumLogLevel
from runrate.shared.logging import (
    configure_logging,
    get_logger,
    update_logging_from_settings,
)


def test_configure_logging_sets_root_handlers(tmp_path) -> None:
    log_file = tmp_path / "runrate.log"
    configure_logging(level="DEBUG", file_path=str(log_file), environment="development")

    root = logging.getLogger()
    assert root.level == logging.DEBUG
    assert any(isinstance(handler, logging.FileHandler) for handler in root.handlers)

    logger = get_logger(__name__)
    logger.info("prediction.test", meter_id="M1")
    for handler in root.handlers:
        handler.flush()

    assert "prediction.test" in log_file.read_text(encoding="utf-8")


def test_production_environment_writes_json(tmp_path) -> None:
    log_file = tmp_path / "runrate.json.log"
    configure_logging(level="INFO", file_path=str(log_file), environment="production")

    get_logger("runrate.test").info("forecast.generated", meters=2)
    for handler in logging.getLogger().handlers:
        handler.flush()

    lines = log_file.read_text(encoding="utf-8").splitlines()
    assert any('"event": "forecast.generated"' in line for line in lines)


def test_unknown_level_defaults_to_info() -> None:
    configure_logging(level="CHATTY", environment="development")

    assert logging.getLogger().level == logging.INFO


@dataclass
class _LoggingSettings:
    level: EnumLogLevel = EnumLogLevel.WARNING
    file_path: Optional[str] = None


@dataclass
class _Settings:
    logging: _LoggingSettings
    environment: EnumEnvironment = EnumEnvironment.PRODUCTION


def test_update_logging_from_settings_applies_configuration() -> None:
    settings = _Settings(logging=_LoggingSettings(level=EnumLogLevel.ERROR))

    update_logging_from_settings(settings)

    root_logger = logging.getLogger()
    assert root_logger.level == logging.ERROR
