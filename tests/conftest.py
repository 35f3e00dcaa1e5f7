import copy
from datetime import datetime, timezone

import pytest
from fastapi.testclient import TestClient

from charging_profile.schemas import EXAMPLE_REQUEST, ChargeRequest
from charging_profile.services.charging_profile import ChargingProfileService
from charging_profile.services.schedule import ScheduleBuilder
from charging_profile.services.validation import ChargeRequestValidator


def utc(*args) -> datetime:
    return datetime(*args, tzinfo=timezone.utc)


def assert_contiguous(schedules, start: datetime, end: datetime):
    assert schedules, "schedule must not be empty"
    assert schedules[0].start_time == start
    assert schedules[-1].end_time == end
    for previous, current in zip(schedules, schedules[1:]):
        assert previous.end_time == current.start_time
    for interval in schedules:
        assert interval.end_time >= interval.start_time


@pytest.fixture
def payload() -> dict:
    """Mutable copy of the documented example request."""
    return copy.deepcopy(EXAMPLE_REQUEST)


@pytest.fixture
def make_request():
    def _make(
        starting_time="2024-06-30T08:00:00Z",
        leaving_time="07:00",
        desired=100,
        direct=0,
        capacity=100,
        level=0,
        power=10,
        tariffs=(("8:00", "13:15", 0.25),),
    ) -> ChargeRequest:
        return ChargeRequest.model_validate(
            {
                "startingTime": starting_time,
                "userSettings": {
                    "desiredStateOfCharge": desired,
                    "leavingTime": leaving_time,
                    "directChargingPercentage": direct,
                    "tariffs": [
                        {"startTime": s, "endTime": e, "energyPrice": p}
                        for s, e, p in tariffs
                    ],
                },
                "carData": {
                    "chargePower": power,
                    "batteryCapacity": capacity,
                    "currentBatteryLevel": level,
                },
            }
        )

    return _make


@pytest.fixture
def validator() -> ChargeRequestValidator:
    return ChargeRequestValidator()


@pytest.fixture
def builder() -> ScheduleBuilder:
    return ScheduleBuilder()


@pytest.fixture
def service(validator, builder) -> ChargingProfileService:
    return ChargingProfileService(validator, builder)


@pytest.fixture
def api_client():
    from charging_profile.main import app

    with TestClient(app) as client:
        yield client
    app.dependency_overrides.clear()


def pytest_configure(config):
    config.addinivalue_line("markers", "integration: mark test as integration test")
