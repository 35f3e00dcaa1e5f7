from datetime import datetime
from decimal import ROUND_HALF_EVEN, Decimal
from typing import Iterable, List, Optional, Tuple

from loguru import logger

from charging_profile.core.time_windows import (
    add_hours,
    hours_between,
    parse_starting_time,
    resolve_leaving_time,
    resolve_tariff_window,
)
from charging_profile.schemas import (
    ChargeRequest,
    ChargeResponse,
    ChargingSchedule,
    Tariff,
)

HUNDRED = Decimal(100)


def fill_gaps(
    charging: Iterable[ChargingSchedule], cursor: datetime, leaving_time: datetime
) -> List[ChargingSchedule]:
    """Insert non-charging intervals into every uncovered span.

    ``charging`` must already be sorted by start time. Existing intervals are
    kept as they are.
    """
    filled: List[ChargingSchedule] = []

    for interval in charging:
        if cursor < interval.start_time:
            filled.append(
                ChargingSchedule(
                    start_time=cursor, end_time=interval.start_time, is_charging=False
                )
            )
        filled.append(interval)
        cursor = max(cursor, interval.end_time)

    if cursor < leaving_time:
        filled.append(
            ChargingSchedule(start_time=cursor, end_time=leaving_time, is_charging=False)
        )

    return filled


def first_uncovered_span(
    window_start: datetime, window_end: datetime, covered: List[ChargingSchedule]
) -> Optional[Tuple[datetime, datetime]]:
    """Earliest part of a window not taken by an already emitted interval.

    A tariff yields a single interval, so when the window is split by
    earlier intervals only its first free span is used.
    """
    start = window_start
    for interval in sorted(covered, key=lambda interval: interval.start_time):
        if interval.end_time <= start:
            continue
        if interval.start_time > start:
            break
        start = interval.end_time

    if start >= window_end:
        return None

    end = window_end
    for interval in covered:
        if start < interval.start_time < end:
            end = interval.start_time
    return start, end


def to_percentage(level: Decimal, capacity: Decimal) -> int:
    ratio = level / capacity * HUNDRED
    return int(ratio.quantize(Decimal(1), rounding=ROUND_HALF_EVEN))


class ScheduleBuilder:
    """Builds the charging timeline between starting and leaving time.

    The battery is first topped up to the direct charging level regardless of
    price. The rest of the need is spread over the cheapest tariff windows,
    each used at most once, and the uncovered spans are filled with
    non-charging intervals.
    """

    def build(self, request: ChargeRequest) -> ChargeResponse:
        user_settings = request.user_settings
        car_data = request.car_data

        starting_time = parse_starting_time(request.starting_time)
        leaving_time = resolve_leaving_time(user_settings.leaving_time, starting_time)

        capacity = car_data.battery_capacity
        charge_power = car_data.charge_power
        level = car_data.current_battery_level

        direct_pct = Decimal(user_settings.direct_charging_percentage)
        desired_pct = Decimal(user_settings.desired_state_of_charge)
        min_direct_level = capacity * direct_pct / HUNDRED
        desired_level = capacity * desired_pct / HUNDRED

        logger.debug(
            f"Building schedule {starting_time.isoformat()} -> {leaving_time.isoformat()}, "
            f"level={level}, direct={min_direct_level}, desired={desired_level}"
        )

        charging: List[ChargingSchedule] = []
        cursor = starting_time

        if level < min_direct_level:
            interval, level = self._direct_charge(
                starting_time, leaving_time, level, min_direct_level, charge_power
            )
            charging.append(interval)
            cursor = interval.end_time

        hours_needed = (desired_level - level) / charge_power
        if hours_needed > 0:
            intervals, level = self._allocate_tariffs(
                user_settings.tariffs,
                cursor,
                leaving_time,
                level,
                hours_needed,
                charge_power,
            )
            charging.extend(intervals)

        charging.sort(key=lambda interval: interval.start_time)
        schedules = fill_gaps(charging, cursor, leaving_time)
        percentage = to_percentage(level, capacity)

        logger.info(
            f"Charging schedule built: intervals={len(schedules)}, "
            f"charging={len(charging)}, percentage={percentage}"
        )

        return ChargeResponse(
            actual_charging_percentage_at_leaving_time=percentage,
            charging_schedules=schedules,
        )

    @staticmethod
    def _direct_charge(
        starting_time: datetime,
        leaving_time: datetime,
        level: Decimal,
        min_direct_level: Decimal,
        charge_power: Decimal,
    ) -> Tuple[ChargingSchedule, Decimal]:
        hours = (min_direct_level - level) / charge_power
        available_hours = hours_between(starting_time, leaving_time)

        # compare in hours first; the unclamped end may not be a valid datetime
        if hours >= available_hours:
            end_time = leaving_time
            level += available_hours * charge_power
            logger.debug(f"Direct charge cut short by leaving time, level={level}")
        else:
            end_time = add_hours(starting_time, hours)
            level = min_direct_level

        interval = ChargingSchedule(
            start_time=starting_time, end_time=end_time, is_charging=True
        )
        return interval, level

    @staticmethod
    def _allocate_tariffs(
        tariffs: Iterable[Tariff],
        cursor: datetime,
        leaving_time: datetime,
        level: Decimal,
        hours_needed: Decimal,
        charge_power: Decimal,
    ) -> Tuple[List[ChargingSchedule], Decimal]:
        # every window is anchored to the same cursor, so resolve them once
        candidates = []
        for index, tariff in enumerate(tariffs):
            window_start, window_end = resolve_tariff_window(
                tariff.start_time, tariff.end_time, cursor
            )
            candidates.append((tariff.energy_price, window_start, index, window_end))
        # cheapest first; equal prices go to the earlier window, then input order
        candidates.sort()

        intervals: List[ChargingSchedule] = []
        hours_left = hours_needed

        for price, window_start, _, window_end in candidates:
            if hours_left <= 0:
                break

            span = first_uncovered_span(window_start, window_end, intervals)
            if span is None:
                logger.debug(
                    f"Tariff window {window_start.isoformat()} already covered, skipped"
                )
                continue
            window_start, window_end = span

            charge_hours = min(hours_left, hours_between(window_start, window_end))
            charge_end = add_hours(window_start, charge_hours)

            if charge_end > leaving_time:
                charge_end = leaving_time
                charge_hours = hours_between(window_start, charge_end)

            if charge_hours <= 0:
                logger.debug(
                    f"Tariff window {window_start.isoformat()} starts after leaving time, skipped"
                )
                continue

            intervals.append(
                ChargingSchedule(
                    start_time=window_start, end_time=charge_end, is_charging=True
                )
            )
            level += charge_hours * charge_power
            hours_left -= charge_hours

            logger.debug(
                f"Charging at {price} from {window_start.isoformat()} "
                f"to {charge_end.isoformat()}, hours_left={hours_left}"
            )

        return intervals, level
