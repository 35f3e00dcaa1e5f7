from fastapi import HTTPException


class ChargingProfileException(Exception):
    pass


class TimeOfDayParseError(ChargingProfileException, ValueError):
    def __init__(self, value, expected: str):
        self.value = value
        self.expected = expected
        super().__init__(f"Cannot parse {value!r}, expected {expected}")


def invalid_request_exception(reason: str):
    return HTTPException(status_code=400, detail=reason)


def schedule_failed_exception():
    return HTTPException(status_code=500, detail="Failed to calculate charging schedule")
