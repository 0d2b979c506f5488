# SPDX-License-Identifier: MIT

import logging
from typing import Optional, TypedDict

import pendulum

from habitual import events
from habitual.color import get_random_color
from habitual.events import EVENT_BUS, ChangeEvent
from habitual.model.entity_id import EntityId
from habitual.model.habit import HABIT_TYPES, Habit, HabitType, Reminder
from habitual.model.schedule import ScheduleDefinition
from habitual.repository.configuration import CONFIGURATION_REPO
from habitual.repository.entry import ENTRY_REPO
from habitual.repository.habit import HABIT_REPO
from habitual.repository.hidden_marker import HIDDEN_MARKER_REPO
from habitual.service.schedule import (
    ScheduleValidationError,
    make_schedule,
    reanchor_schedule,
)
from habitual.template.habit import get_habit_template
from habitual.time import now_utc, today

logger = logging.getLogger(__name__)

# Habit types that measure something and so need a target
MEASURED_HABIT_TYPES: tuple[HabitType, ...] = ("count", "quantity", "duration")


class ValidationIssue(TypedDict):
    field: str
    message: str


class HabitValidationError(Exception):
    """Raised when a habit fails validation. Carries every issue found."""

    def __init__(self, issues: list[ValidationIssue]) -> None:
        self.issues = issues
        super().__init__("; ".join(issue["message"] for issue in issues))

    @property
    def first_message(self) -> str:
        return self.issues[0]["message"]


def validate_habit(habit: Habit) -> list[ValidationIssue]:
    """
    Collect every problem with a habit record, in form order.

    - name is required
    - count, quantity and duration habits need a target
    - a target, when given, must be positive
    - the end date must come after the start date
    - a weekly schedule needs at least one day
    - an interval schedule needs a positive number of days
    """
    issues: list[ValidationIssue] = []

    if not habit["name"].strip():
        issues.append({"field": "name", "message": "Please enter a habit name"})

    if habit["habit_type"] not in HABIT_TYPES:
        issues.append(
            {
                "field": "habit_type",
                "message": f"Habit type must be one of {', '.join(HABIT_TYPES)}",
            }
        )

    if habit["habit_type"] in MEASURED_HABIT_TYPES and not habit["target_value"]:
        issues.append(
            {
                "field": "target_value",
                "message": "Please set a target value for this habit type",
            }
        )

    if habit["target_value"] is not None and habit["target_value"] <= 0:
        issues.append(
            {"field": "target_value", "message": "Target value must be greater than 0"}
        )

    if habit["end_date"] is not None and habit["end_date"] <= habit["start_date"]:
        issues.append(
            {"field": "end_date", "message": "End date must be after start date"}
        )

    schedule = habit["schedule"]
    if schedule["schedule_type"] == "weekly" and not schedule.get("dow_mask"):
        issues.append(
            {"field": "dow_mask", "message": "Please select at least one day"}
        )
    if schedule["schedule_type"] == "interval" and (
        not schedule.get("interval_days") or schedule["interval_days"] <= 0
    ):
        issues.append(
            {
                "field": "interval_days",
                "message": "Interval must be a positive number of days",
            }
        )

    return issues


def build_schedule(
    schedule_type: str,
    anchor: pendulum.Date,
    dow_mask: Optional[int] = None,
    interval_days: Optional[int] = None,
) -> ScheduleDefinition:
    """Build a schedule from form fields, reporting problems as validation issues."""
    try:
        return make_schedule(schedule_type, anchor, dow_mask, interval_days)
    except ScheduleValidationError as e:
        raise HabitValidationError([{"field": "schedule", "message": str(e)}]) from e


def create_habit(
    name: str,
    habit_type: HabitType = "boolean",
    target_value: Optional[float] = None,
    unit: Optional[str] = None,
    description: Optional[str] = None,
    color: Optional[str] = None,
    icon: Optional[str] = None,
    start_date: Optional[pendulum.Date] = None,
    end_date: Optional[pendulum.Date] = None,
    schedule_type: str = "daily",
    dow_mask: Optional[int] = None,
    interval_days: Optional[int] = None,
    reminders: Optional[list[Reminder]] = None,
) -> EntityId:
    habit = get_habit_template()
    habit["name"] = name.strip()
    habit["habit_type"] = habit_type
    habit["target_value"] = target_value
    habit["unit"] = unit
    habit["description"] = description
    habit["icon"] = icon
    habit["start_date"] = start_date if start_date is not None else today()
    habit["end_date"] = end_date
    habit["reminders"] = reminders if reminders is not None else []

    if color is None and CONFIGURATION_REPO.get_config()["random_color_for_habits"]:
        color = get_random_color()
    habit["color"] = color

    habit["schedule"] = build_schedule(
        schedule_type, habit["start_date"], dow_mask, interval_days
    )

    issues = validate_habit(habit)
    if issues:
        raise HabitValidationError(issues)

    habit_id = HABIT_REPO.save_new_habit(habit)
    logger.info(
        "created habit",
        extra={"_json_habit_id": habit_id, "_json_schedule": habit["schedule"]},
    )
    EVENT_BUS.publish(ChangeEvent(events.HABIT_CREATED, habit_id=habit_id))
    return habit_id


def modify_habit(
    habit_id: EntityId,
    name: Optional[str] = None,
    description: Optional[str] = None,
    habit_type: Optional[HabitType] = None,
    target_value: Optional[float] = None,
    unit: Optional[str] = None,
    color: Optional[str] = None,
    icon: Optional[str] = None,
    start_date: Optional[pendulum.Date] = None,
    end_date: Optional[pendulum.Date] = None,
    schedule: Optional[ScheduleDefinition] = None,
    reminders: Optional[list[Reminder]] = None,
    remove_description: bool = False,
    remove_target_value: bool = False,
    remove_unit: bool = False,
    remove_color: bool = False,
    remove_icon: bool = False,
    remove_end_date: bool = False,
) -> None:
    """
    Change a habit in place.

    The result is validated as a whole before anything is written, so a
    rejected change leaves the stored habit untouched.
    """
    proposed = HABIT_REPO.get_habit(habit_id)
    if name is not None:
        proposed["name"] = name.strip()
        name = proposed["name"]
    if habit_type is not None:
        proposed["habit_type"] = habit_type
    if target_value is not None:
        proposed["target_value"] = target_value
    if remove_target_value:
        proposed["target_value"] = None
    if start_date is not None:
        proposed["start_date"] = start_date
    if end_date is not None:
        proposed["end_date"] = end_date
    if remove_end_date:
        proposed["end_date"] = None
    if schedule is not None:
        proposed["schedule"] = schedule

    # Interval schedules always count from the habit's own start date
    if schedule is not None or start_date is not None:
        schedule = reanchor_schedule(proposed["schedule"], proposed["start_date"])

    issues = validate_habit(proposed)
    if issues:
        raise HabitValidationError(issues)

    HABIT_REPO.modify_habit(
        habit_id,
        name=name,
        description=description,
        habit_type=habit_type,
        target_value=target_value,
        unit=unit,
        color=color,
        icon=icon,
        start_date=start_date,
        end_date=end_date,
        schedule=schedule,
        reminders=reminders,
        remove_description=remove_description,
        remove_target_value=remove_target_value,
        remove_unit=remove_unit,
        remove_color=remove_color,
        remove_icon=remove_icon,
        remove_end_date=remove_end_date,
    )
    EVENT_BUS.publish(ChangeEvent(events.HABIT_UPDATED, habit_id=habit_id))


def archive_habit(habit_id: EntityId) -> None:
    HABIT_REPO.modify_habit(habit_id, archived=now_utc())
    EVENT_BUS.publish(ChangeEvent(events.HABIT_ARCHIVED, habit_id=habit_id))


def unarchive_habit(habit_id: EntityId) -> None:
    HABIT_REPO.modify_habit(habit_id, remove_archived=True)
    EVENT_BUS.publish(ChangeEvent(events.HABIT_UNARCHIVED, habit_id=habit_id))


def delete_habit(habit_id: EntityId) -> None:
    """Remove a habit for good, along with its entries and hidden markers."""
    HABIT_REPO.delete_habit(habit_id)
    entries_deleted = ENTRY_REPO.delete_entries_for_habit(habit_id)
    markers_deleted = HIDDEN_MARKER_REPO.delete_markers_for_habit(habit_id)
    logger.info(
        "deleted habit",
        extra={
            "_json_habit_id": habit_id,
            "_json_entries_deleted": entries_deleted,
            "_json_markers_deleted": markers_deleted,
        },
    )
    EVENT_BUS.publish(
        ChangeEvent(
            events.HABIT_DELETED,
            habit_id=habit_id,
            payload={
                "entries_deleted": entries_deleted,
                "markers_deleted": markers_deleted,
            },
        )
    )
