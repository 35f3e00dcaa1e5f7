from charging_profile.schemas import ChargeRequest, ChargeResponse, ValidationResult
from charging_profile.services.schedule import ScheduleBuilder
from charging_profile.services.validation import ChargeRequestValidator


class ChargingProfileService:
    def __init__(
        self,
        validator: ChargeRequestValidator,
        schedule_builder: ScheduleBuilder,
    ):
        self.validator = validator
        self.schedule_builder = schedule_builder

    def validate_request(self, request: ChargeRequest) -> ValidationResult:
        return self.validator.validate(request)

    def calculate_schedule(self, request: ChargeRequest) -> ChargeResponse:
        return self.schedule_builder.build(request)
