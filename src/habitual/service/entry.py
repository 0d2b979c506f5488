# SPDX-License-Identifier: MIT

import datetime
import logging
import math
from typing import Optional

from habitual import events
from habitual.events import EVENT_BUS, ChangeEvent
from habitual.model.entity_id import EntityId
from habitual.model.entry import HabitEntry
from habitual.model.habit import Habit
from habitual.repository.entry import ENTRY_REPO
from habitual.repository.habit import HABIT_REPO
from habitual.repository.hidden_marker import HIDDEN_MARKER_REPO
from habitual.time import to_date

logger = logging.getLogger(__name__)


class EntryValidationError(Exception):
    """Raised when entry validation fails."""

    pass


def parse_entry_value(habit: Habit, raw_value: str) -> Optional[float]:
    """
    Turn user input into a stored value.

    Boolean habits accept yes/no words as well as numbers. Zero means the
    entry is cleared, so it comes back as None.
    """
    text = raw_value.strip().lower()
    if habit["habit_type"] == "boolean" and text in ("y", "yes", "done", "true"):
        return 1.0
    if habit["habit_type"] == "boolean" and text in ("n", "no", "false"):
        return None

    try:
        value = float(text)
    except ValueError as e:
        raise EntryValidationError(
            f"Value must be a number, got '{raw_value}'"
        ) from e

    validate_entry_value(habit, value)
    return None if value == 0 else value


def validate_entry_value(habit: Habit, value: Optional[float]) -> bool:
    """
    Validate a value against the habit it is recorded for.

    - None clears the entry and is always allowed
    - values must be finite and not negative
    - boolean habits only take 0 or 1

    Returns True if valid, raises EntryValidationError if not.
    """
    if value is None:
        return True
    if math.isnan(value) or math.isinf(value):
        raise EntryValidationError("Value must be a finite number")
    if value < 0:
        raise EntryValidationError("Value cannot be negative")
    if habit["habit_type"] == "boolean" and value not in (0, 1):
        raise EntryValidationError(
            f"Habit '{habit['name']}' is yes/no; record 1 for done or 0 to clear"
        )
    return True


def record_value(
    habit_id: EntityId,
    date: datetime.date,
    value: Optional[float],
    note: Optional[str] = None,
) -> Optional[EntityId]:
    """
    Set the value of a habit on a date. None or 0 clears the entry.

    Hidden habits take no values for that date; unhide first.
    """
    habit = HABIT_REPO.get_habit(habit_id)
    day = to_date(date)

    if HIDDEN_MARKER_REPO.is_hidden(habit_id, day):
        raise EntryValidationError(
            f"Habit '{habit['name']}' is hidden on {day.isoformat()}; unhide it first"
        )

    validate_entry_value(habit, value)
    if value == 0:
        value = None

    if value is None:
        clear_value(habit_id, day)
        return None

    entry_id = ENTRY_REPO.set_entry_value(habit_id, day, value, note)
    logger.info(
        "recorded value",
        extra={"_json_habit_id": habit_id, "_json_date": day, "_json_value": value},
    )
    EVENT_BUS.publish(
        ChangeEvent(
            events.ENTRY_RECORDED, habit_id=habit_id, date=day, payload={"value": value}
        )
    )
    return entry_id


def clear_value(habit_id: EntityId, date: datetime.date) -> bool:
    day = to_date(date)
    cleared = ENTRY_REPO.clear_entry(habit_id, day)
    if cleared:
        EVENT_BUS.publish(ChangeEvent(events.ENTRY_CLEARED, habit_id=habit_id, date=day))
    return cleared


def is_entry_empty(entry: Optional[HabitEntry]) -> bool:
    return entry is None or not entry["value"]


def is_target_met(habit: Habit, value: Optional[float]) -> bool:
    """
    Whether a recorded value completes the habit for its day.

    Yes/no habits are complete on any positive value; the others need the
    target, or at least one unit when no target is set.
    """
    current = value or 0
    if habit["habit_type"] == "boolean":
        return current > 0
    return current >= (habit["target_value"] or 1)


def _format_number(value: float) -> str:
    return str(int(value)) if float(value).is_integer() else f"{value:g}"


def format_duration(minutes: float) -> str:
    hours, remainder = divmod(int(minutes), 60)
    return f"{hours}h {remainder}m"


def format_progress(habit: Habit, value: Optional[float]) -> str:
    """Short progress label, e.g. '3/8 glasses' or '0h 45m / 1h 0m'."""
    current = value or 0
    if habit["habit_type"] == "boolean":
        return "done" if current > 0 else "-"
    if habit["habit_type"] == "duration":
        progress = format_duration(current)
        if habit["target_value"]:
            progress += f" / {format_duration(habit['target_value'])}"
        return progress

    progress = _format_number(current)
    if habit["target_value"]:
        progress += f"/{_format_number(habit['target_value'])}"
    if habit["unit"]:
        progress += f" {habit['unit']}"
    return progress


def format_target(habit: Habit) -> Optional[str]:
    if habit["target_value"] is None:
        return None
    if habit["habit_type"] == "duration":
        return format_duration(habit["target_value"])
    target = _format_number(habit["target_value"])
    return f"{target} {habit['unit']}" if habit["unit"] else target
