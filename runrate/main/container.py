"""
Dependency container injection module - Main Layer

Composition root wiring the readings source, the prediction services and
the use cases together with the application settings.
"""

from contextlib import asynccontextmanager
from typing import Any

from dependency_injector import containers, providers

from runrate.application.models import SystemInfo
from runrate.application.use_cases.forecast_use_cases import (
    ClearForecastCacheUseCase,
    GetAvailableMonthsUseCase,
    NextMonthForecastUseCase,
)
from runrate.application.use_cases.health_use_cases import (
    GetApplicationInfoUseCase,
    GetHealthStatusUseCase,
)
from runrate.application.use_cases.predict_meters_use_case import (
    PredictMetersUseCase,
)
from runrate.domain.entities.prediction import HybridPolicy
from runrate.domain.services.hybrid_prediction_engine import HybridPredictionEngine
from runrate.domain.services.next_month_forecaster import (
    EnsembleWeights,
    NextMonthForecaster,
)
from runrate.infrastructure.database import MongoDatabase
from runrate.infrastructure.repositories import (
    CsvReadingsRepository,
    MongoReadingsRepository,
)
from runrate.infrastructure.services import (
    HealthCheckService,
    ReadingsPriorPeriodLoader,
)
from runrate.shared import EnumDataBackend, TTLCache, get_logger

from .config import AppSettings

logger = get_logger(__name__)


def _enum_value(value: Any) -> str:
    return value.value if hasattr(value, "value") else str(value)


class AppContainer(containers.DeclarativeContainer):
    """Composition Root using dependency-injector."""

    wiring_config = containers.WiringConfiguration(
        packages=["..presentation", "..application"]
    )

    # Settings
    config = providers.Configuration()

    backend = providers.Callable(_enum_value, config.source.backend)

    # Infrastructure
    mongo_database = providers.Singleton(
        MongoDatabase,
        mongo_uri=config.database.mongo_uri,
        db_name=config.database.database_name,
    )

    readings_repository = providers.Selector(
        backend,
        mongo=providers.Singleton(
            MongoReadingsRepository,
            mongo_database=mongo_database,
            collection_name=config.database.readings_collection,
        ),
        csv=providers.Singleton(
            CsvReadingsRepository,
            directory=config.source.csv_directory,
        ),
    )

    prior_period_cache = providers.Singleton(
        TTLCache,
        ttl_seconds=config.prediction.prior_period_cache_ttl_seconds,
    )

    prior_period_loader = providers.Singleton(
        ReadingsPriorPeriodLoader,
        readings_repository=readings_repository,
        cache=prior_period_cache,
        timeout_seconds=config.prediction.prior_period_timeout_seconds,
    )

    forecast_cache = providers.Singleton(
        TTLCache,
        ttl_seconds=config.prediction.forecast_cache_ttl_seconds,
    )

    health_check_service = providers.Singleton(
        HealthCheckService,
        backend=backend,
        mongo_database=providers.Selector(
            backend,
            mongo=mongo_database,
            csv=providers.Object(None),
        ),
        csv_directory=config.source.csv_directory,
        caches=providers.Dict(
            prior_period=prior_period_cache,
            forecast=forecast_cache,
        ),
    )

    # Domain services
    hybrid_policy = providers.Singleton(
        HybridPolicy,
        hybrid_threshold_days=config.prediction.hybrid_threshold_days,
        weight_table=config.prediction.weight_table,
        default_current_weight=config.prediction.default_current_weight,
        prior_completeness_ratio=config.prediction.prior_completeness_ratio,
        min_days_required=config.prediction.min_days_required,
    )

    prediction_engine = providers.Singleton(
        HybridPredictionEngine,
        policy=hybrid_policy,
    )

    next_month_forecaster = providers.Singleton(
        NextMonthForecaster,
        weights=providers.Singleton(
            EnsembleWeights,
            simple_average=config.prediction.forecast_weight_simple,
            recent_trend=config.prediction.forecast_weight_recent,
            day_of_week=config.prediction.forecast_weight_day_of_week,
        ),
        recent_days=config.prediction.forecast_recent_days,
    )

    # Application (use cases)
    predict_meters_use_case = providers.Factory(
        PredictMetersUseCase,
        readings_repository=readings_repository,
        prior_period_loader=prior_period_loader,
        engine=prediction_engine,
        min_hours_required=config.prediction.min_hours_required,
        rolling_window_hours=config.prediction.rolling_window_hours,
    )

    next_month_forecast_use_case = providers.Factory(
        NextMonthForecastUseCase,
        readings_repository=readings_repository,
        forecaster=next_month_forecaster,
        cache=forecast_cache,
    )

    clear_forecast_cache_use_case = providers.Factory(
        ClearForecastCacheUseCase,
        forecast_cache=forecast_cache,
        prior_period_loader=prior_period_loader,
    )

    get_available_months_use_case = providers.Factory(
        GetAvailableMonthsUseCase,
        readings_repository=readings_repository,
    )

    system_info = providers.Singleton(
        SystemInfo,
        title=config.app.title,
        description=config.app.description,
        version=config.app.version,
        environment=providers.Callable(_enum_value, config.environment),
        git_commit=config.app.git_commit,
        build_time=config.app.build_time,
        data_backend=backend,
        mongo_uri=config.database.mongo_uri,
        database_name=config.database.database_name,
        csv_directory=config.source.csv_directory,
        hybrid_threshold_days=config.prediction.hybrid_threshold_days,
    )

    get_health_status_use_case = providers.Factory(
        GetHealthStatusUseCase,
        health_check_service=health_check_service,
    )

    get_application_info_use_case = providers.Factory(
        GetApplicationInfoUseCase,
        health_check_service=health_check_service,
        system_info=system_info,
    )


# -------------------------
# Global Container Instance
# -------------------------
_app_container: AppContainer | None = None


def init_container(settings: AppSettings) -> AppContainer:
    """Initialize global container with application settings."""

    global _app_container

    container = AppContainer()
    container.config.from_pydantic(settings)
    _app_container = container
    return container


def get_container() -> AppContainer:
    """Get the initialized global container."""

    if _app_container is None:
        raise RuntimeError("Container has not been initialized yet")

    return _app_container


@asynccontextmanager
async def app_lifespan():
    """
    Lifecycle management for the readings source.

    With the Mongo backend the readings indexes are created on startup and
    the client is closed on shutdown. The CSV backend holds no resources.
    """
    container = get_container()
    uses_mongo = container.backend() == EnumDataBackend.MONGO.value
    mongo_database = container.mongo_database() if uses_mongo else None

    try:
        if mongo_database is not None:
            logger.info("container.mongo.ensure_indexes")
            await mongo_database.create_indexes(
                container.config.database.readings_collection()
            )

        logger.info("container.resources.initialized", backend=container.backend())
        yield container

    finally:
        if mongo_database is not None:
            logger.info("container.mongo.close")
            mongo_database.close()

        logger.info("container.resources.shutdown")
