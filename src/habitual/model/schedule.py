# SPDX-License-Identifier: MIT

from typing import Literal, TypedDict

import pendulum

ScheduleType = Literal["daily", "weekly", "interval"]
SCHEDULE_TYPES: tuple[ScheduleType, ...] = ("daily", "weekly", "interval")


class DailySchedule(TypedDict):
    schedule_type: Literal["daily"]


class WeeklySchedule(TypedDict):
    schedule_type: Literal["weekly"]
    dow_mask: int  # Monday=1 ... Sunday=64


class IntervalSchedule(TypedDict):
    schedule_type: Literal["interval"]
    interval_days: int
    start_date: pendulum.Date  # Anchor for the modular day count


type ScheduleDefinition = DailySchedule | WeeklySchedule | IntervalSchedule
