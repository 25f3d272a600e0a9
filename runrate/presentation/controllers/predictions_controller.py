"""
Presentation Layer - Predictions Controller

Endpoints returning day/month projections per meter, the next-month
forecast and the list of months held by the readings source.
"""

from typing import Optional

import structlog
from dependency_injector.wiring import Provide, inject
from fastapi import APIRouter, Depends, Query, Response, status
from fastapi.responses import JSONResponse

from runrate.application.dtos.forecast_dto import (
    AvailableMonthsDTO,
    NextMonthForecastDTO,
)
from runrate.application.dtos.prediction_dto import (
    ErrorResponseDTO,
    PredictionsResponseDTO,
)
from runrate.application.use_cases.forecast_use_cases import (
    ClearForecastCacheUseCase,
    GetAvailableMonthsUseCase,
    NextMonthForecastUseCase,
)
from runrate.application.use_cases.predict_meters_use_case import (
    PredictMetersUseCase,
)
from runrate.domain.entities.errors import (
    DomainError,
    FuturePeriodError,
    InvalidPeriodError,
    NoReadingsError,
    ReadingsSourceError,
)
from runrate.main.container import AppContainer

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/api", tags=["Predictions"])

ERROR_STATUS = {
    FuturePeriodError: status.HTTP_400_BAD_REQUEST,
    InvalidPeriodError: status.HTTP_400_BAD_REQUEST,
    NoReadingsError: status.HTTP_404_NOT_FOUND,
    ReadingsSourceError: status.HTTP_502_BAD_GATEWAY,
}

ERROR_RESPONSES = {
    400: {"model": ErrorResponseDTO, "description": "Invalid or future period"},
    404: {"model": ErrorResponseDTO, "description": "No readings available"},
    502: {"model": ErrorResponseDTO, "description": "Readings source failure"},
}


def _error_response(exc: DomainError) -> JSONResponse:
    status_code = ERROR_STATUS.get(type(exc), status.HTTP_400_BAD_REQUEST)
    body = ErrorResponseDTO(code=exc.code, message=exc.message, details=exc.details)
    return JSONResponse(status_code=status_code, content=body.model_dump(mode="json"))


def _internal_error() -> JSONResponse:
    body = ErrorResponseDTO(code="INTERNAL_ERROR", message="Internal server error")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content=body.model_dump()
    )


@router.get(
    "/predict",
    response_model=PredictionsResponseDTO,
    responses=ERROR_RESPONSES,
    summary="Predict today and the month for every meter",
    description="""
    Project each meter's consumption for its latest day and for the whole
    month. Without parameters the latest month holding readings is used.
    `year` and `month` must be given together; `day` limits the data to the
    days up to and including it. Months with fewer than three days of data
    are blended with the previous month when it is available.
    """,
)
@inject
async def predict(
    year: Optional[int] = Query(default=None, description="Calendar year"),
    month: Optional[int] = Query(default=None, description="Calendar month (1-12)"),
    day: Optional[int] = Query(default=None, description="Cutoff day of month"),
    predict_use_case: PredictMetersUseCase = Depends(
        Provide[AppContainer.predict_meters_use_case]
    ),
):
    try:
        return await predict_use_case.execute(year=year, month=month, day=day)
    except DomainError as exc:
        logger.info("prediction.rejected", code=exc.code, message=exc.message)
        return _error_response(exc)
    except Exception as exc:
        logger.error(
            "prediction.unexpected_error",
            year=year,
            month=month,
            day=day,
            error=str(exc),
            exc_info=exc,
        )
        return _internal_error()


@router.get(
    "/forecast/next-month",
    response_model=NextMonthForecastDTO,
    responses=ERROR_RESPONSES,
    summary="Forecast the month after a source month",
)
@inject
async def forecast_next_month(
    year: Optional[int] = Query(default=None, description="Source year"),
    month: Optional[int] = Query(default=None, description="Source month (1-12)"),
    forecast_use_case: NextMonthForecastUseCase = Depends(
        Provide[AppContainer.next_month_forecast_use_case]
    ),
):
    try:
        return await forecast_use_case.execute(year=year, month=month)
    except DomainError as exc:
        logger.info("forecast.rejected", code=exc.code, message=exc.message)
        return _error_response(exc)
    except Exception as exc:
        logger.error(
            "forecast.unexpected_error",
            year=year,
            month=month,
            error=str(exc),
            exc_info=exc,
        )
        return _internal_error()


@router.delete(
    "/forecast/cache",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Clear cached forecasts and previous-month series",
)
@inject
async def clear_forecast_cache(
    clear_cache_use_case: ClearForecastCacheUseCase = Depends(
        Provide[AppContainer.clear_forecast_cache_use_case]
    ),
) -> Response:
    clear_cache_use_case.execute()
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get(
    "/months",
    response_model=AvailableMonthsDTO,
    responses={502: ERROR_RESPONSES[502]},
    summary="List the months held by the readings source",
)
@inject
async def list_months(
    months_use_case: GetAvailableMonthsUseCase = Depends(
        Provide[AppContainer.get_available_months_use_case]
    ),
):
    try:
        return await months_use_case.execute()
    except DomainError as exc:
        return _error_response(exc)
