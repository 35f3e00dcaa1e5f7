from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

EXAMPLE_REQUEST = {
    "startingTime": "2024-06-30T08:00:00Z",
    "userSettings": {
        "desiredStateOfCharge": 100,
        "leavingTime": "07:00",
        "directChargingPercentage": 20,
        "tariffs": [
            {"startTime": "19:15", "endTime": "10:00", "energyPrice": 0.22},
            {"startTime": "13:15", "endTime": "19:15", "energyPrice": 0.35},
            {"startTime": "08:00", "endTime": "13:15", "energyPrice": 0.25},
        ],
    },
    "carData": {
        "chargePower": 10,
        "batteryCapacity": 220,
        "currentBatteryLevel": 0,
    },
}


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class RequestModel(CamelModel):
    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, frozen=True
    )


class Tariff(RequestModel):
    start_time: Optional[str] = None
    end_time: Optional[str] = None
    energy_price: Decimal = Field(Decimal(0), ge=0)


class UserSettings(RequestModel):
    desired_state_of_charge: int = 0
    leaving_time: Optional[str] = None
    direct_charging_percentage: int = 0
    tariffs: List[Tariff] = Field(default_factory=list)


class CarData(RequestModel):
    battery_capacity: Decimal = Decimal(0)
    current_battery_level: Decimal = Decimal(0)
    charge_power: Decimal = Decimal(0)


class ChargeRequest(RequestModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        json_schema_extra={"example": EXAMPLE_REQUEST},
    )

    starting_time: Optional[str] = None
    user_settings: Optional[UserSettings] = None
    car_data: Optional[CarData] = None


class ChargingSchedule(CamelModel):
    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, frozen=True
    )

    start_time: datetime
    end_time: datetime
    is_charging: bool


class ChargeResponse(CamelModel):
    actual_charging_percentage_at_leaving_time: int
    charging_schedules: List[ChargingSchedule] = Field(default_factory=list)


class ValidationResult(BaseModel):
    success: bool
    message: str


class HealthResponse(BaseModel):
    ok: bool = True
