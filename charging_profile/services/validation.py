from loguru import logger

from charging_profile.core.exceptions import TimeOfDayParseError
from charging_profile.core.time_windows import (
    parse_leaving_time_of_day,
    parse_starting_time,
    parse_tariff_time_of_day,
)
from charging_profile.schemas import ChargeRequest, ValidationResult

VALIDATION_SUCCESSFUL = "Validation successful."


def _parses(parser, value) -> bool:
    try:
        parser(value)
    except TimeOfDayParseError:
        return False
    return True


def _failed(message: str) -> ValidationResult:
    logger.info(f"Charge request rejected: {message}")
    return ValidationResult(success=False, message=message)


class ChargeRequestValidator:
    """Checks a charge request before any schedule is calculated.

    Checks run in a fixed order and the first failing one decides the
    message. Nothing is raised for bad input.
    """

    def validate(self, request: ChargeRequest) -> ValidationResult:
        if not _parses(parse_starting_time, request.starting_time):
            return _failed("Starting time must be provided and valid.")

        car_data = request.car_data
        if car_data is None:
            return _failed("Car Data must be provided.")

        if car_data.battery_capacity <= 0:
            return _failed("Battery capacity must be greater than zero.")

        if not 0 <= car_data.current_battery_level <= car_data.battery_capacity:
            return _failed("Current battery level must be within valid range.")

        if car_data.charge_power <= 0:
            return _failed("Charge power must be greater than zero.")

        user_settings = request.user_settings
        if user_settings is None:
            return _failed("User Settings must be provided.")

        if not 0 <= user_settings.desired_state_of_charge <= 100:
            return _failed("Desired state of charge must be between 0 and 100.")

        if not 0 <= user_settings.direct_charging_percentage <= 100:
            return _failed("Direct charging percentage must be between 0 and 100.")

        if not user_settings.tariffs:
            return _failed("At least one tariff must be provided.")

        if not all(
            _parses(parse_tariff_time_of_day, t.start_time)
            for t in user_settings.tariffs
        ):
            return _failed("Tariff StartTimes must be provided and valid.")

        if not all(
            _parses(parse_tariff_time_of_day, t.end_time) for t in user_settings.tariffs
        ):
            return _failed("Tariff EndTimes must be provided and valid.")

        if not _parses(parse_leaving_time_of_day, user_settings.leaving_time):
            return _failed("Leaving time must be provided and valid.")

        return ValidationResult(success=True, message=VALIDATION_SUCCESSFUL)
