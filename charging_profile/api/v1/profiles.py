import time
from typing import List

from fastapi import APIRouter, Depends
from loguru import logger

from charging_profile.api.dependencies import get_charging_profile_service
from charging_profile.core.exceptions import (
    invalid_request_exception,
    schedule_failed_exception,
)
from charging_profile.monitoring.metrics import MetricsCollector
from charging_profile.schemas import ChargeRequest, ChargeResponse, ChargingSchedule
from charging_profile.services.charging_profile import ChargingProfileService

router = APIRouter()


def _calculate(
    endpoint: str, request: ChargeRequest, service: ChargingProfileService
) -> ChargeResponse:
    validation = service.validate_request(request)
    if not validation.success:
        MetricsCollector.record_request(endpoint, "invalid")
        raise invalid_request_exception(validation.message)

    start_time = time.perf_counter()
    try:
        response = service.calculate_schedule(request)
    except Exception as e:
        MetricsCollector.record_request(endpoint, "error")
        logger.exception(f"Error calculating charging schedule: {e}")
        raise schedule_failed_exception()

    MetricsCollector.record_schedule(
        time.perf_counter() - start_time,
        response.actual_charging_percentage_at_leaving_time,
        len(response.charging_schedules),
    )
    MetricsCollector.record_request(endpoint, "ok")
    return response


@router.post("/charging-profile", response_model=List[ChargingSchedule])
def generate_charging_profile(
    request: ChargeRequest,
    service: ChargingProfileService = Depends(get_charging_profile_service),
):
    return _calculate("charging-profile", request, service).charging_schedules


@router.post("/charging-profile/summary", response_model=ChargeResponse)
def generate_charging_profile_summary(
    request: ChargeRequest,
    service: ChargingProfileService = Depends(get_charging_profile_service),
):
    return _calculate("charging-profile/summary", request, service)
