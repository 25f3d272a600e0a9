"""
Presentation Layer - System Controller

Operational endpoints. /health answers 503 while the readings source is
down.
"""

from dependency_injector.wiring import Provide, inject
from fastapi import APIRouter, Depends, Request, Response, status
from fastapi.responses import JSONResponse

from runrate.application.dtos.health_dto import ApplicationInfoDTO, SystemHealthDTO
from runrate.application.dtos.prediction_dto import ErrorResponseDTO
from runrate.application.use_cases.health_use_cases import (
    GetApplicationInfoUseCase,
    GetHealthStatusUseCase,
)
from runrate.domain.entities.health import ServiceStatus
from runrate.main.container import AppContainer
from runrate.shared import get_logger

logger = get_logger(__name__)

router = APIRouter(tags=["System"])


def _probe_failed(code: str, message: str, status_code: int) -> JSONResponse:
    body = ErrorResponseDTO(code=code, message=message)
    return JSONResponse(status_code=status_code, content=body.model_dump())


@router.get(
    "/health",
    response_model=SystemHealthDTO,
    responses={
        503: {
            "model": SystemHealthDTO,
            "description": "Readings source down or health probe failed",
        }
    },
)
@inject
async def health(
    response: Response,
    health_use_case: GetHealthStatusUseCase = Depends(
        Provide[AppContainer.get_health_status_use_case]
    ),
):
    """Report the readings source status and cache usage."""
    try:
        health_status = await health_use_case.execute()
    except Exception as exc:
        logger.error("health.probe_failed", error=str(exc), exc_info=exc)
        return _probe_failed(
            "HEALTH_CHECK_FAILED",
            "Unable to probe the readings source",
            status.HTTP_503_SERVICE_UNAVAILABLE,
        )

    if health_status.status is ServiceStatus.DOWN:
        logger.warning(
            "health.source_down",
            backend=health_status.source.backend,
            reason=health_status.source.message,
        )
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    return health_status


@router.get("/info", response_model=ApplicationInfoDTO)
@inject
async def info(
    request: Request,
    info_use_case: GetApplicationInfoUseCase = Depends(
        Provide[AppContainer.get_application_info_use_case]
    ),
):
    started_at = getattr(request.app.state, "started_at", None)
    try:
        return await info_use_case.execute(started_at)
    except Exception as exc:
        logger.error("info.failed", error=str(exc), exc_info=exc)
        return _probe_failed(
            "INTERNAL_ERROR",
            "Unable to retrieve application info",
            status.HTTP_500_INTERNAL_SERVER_ERROR,
        )
