from functools import lru_cache

from fastapi import Depends

from charging_profile.config.settings import Settings
from charging_profile.services.charging_profile import ChargingProfileService
from charging_profile.services.schedule import ScheduleBuilder
from charging_profile.services.validation import ChargeRequestValidator


@lru_cache()
def get_settings() -> Settings:
    return Settings()


def get_validator() -> ChargeRequestValidator:
    return ChargeRequestValidator()


def get_schedule_builder() -> ScheduleBuilder:
    return ScheduleBuilder()


def get_charging_profile_service(
    validator: ChargeRequestValidator = Depends(get_validator),
    schedule_builder: ScheduleBuilder = Depends(get_schedule_builder),
) -> ChargingProfileService:
    return ChargingProfileService(validator, schedule_builder)
