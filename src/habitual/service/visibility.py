# SPDX-License-Identifier: MIT

"""
Per-date visibility of habits.

A habit shows up on a date when it is not archived, has no hidden marker
for that date, and its schedule is due. Hiding is an overlay on top of the
schedule and never changes it.
"""

import datetime
import logging
from typing import Literal, TypeVar

from habitual import events
from habitual.events import EVENT_BUS, ChangeEvent
from habitual.model.entity_id import EntityId
from habitual.model.habit import Habit
from habitual.repository.entry import ENTRY_REPO
from habitual.repository.habit import HABIT_REPO, HabitNotFoundError
from habitual.repository.hidden_marker import HIDDEN_MARKER_REPO
from habitual.service.recurrence import is_habit_active_on
from habitual.time import to_date

logger = logging.getLogger(__name__)

VisibilityState = Literal["pending", "done", "hidden"]

H = TypeVar("H", bound=Habit)


def _name_order(habit: Habit) -> tuple[str, str]:
    return (habit["name"], habit["id"] or "")


def filter_visible(
    habits: list[H],
    hidden_habit_ids: set[EntityId],
    target_date: datetime.date,
) -> list[H]:
    """Habits shown on target_date, ordered by name with ties broken by id."""
    visible = [
        habit
        for habit in habits
        if habit["archived"] is None
        and habit["id"] not in hidden_habit_ids
        and is_habit_active_on(habit, target_date)
    ]
    return sorted(visible, key=_name_order)


def visible_habits_on(target_date: datetime.date) -> list[Habit]:
    day = to_date(target_date)
    return filter_visible(
        HABIT_REPO.get_all_habits(),
        HIDDEN_MARKER_REPO.get_hidden_habit_ids(day),
        day,
    )


def hide(habit_id: EntityId, date: datetime.date) -> bool:
    """
    Hide a habit for one date.

    Any value recorded for that habit on that date is deleted first. Hiding
    a day means giving up on it, so the progress goes too, and unhiding
    later brings the habit back as pending rather than done.

    Returns whether a new marker was created; hiding twice is a no-op.
    """
    if not HABIT_REPO.habit_exists(habit_id):
        raise HabitNotFoundError(f"No habit with id {habit_id}")

    day = to_date(date)
    if ENTRY_REPO.clear_entry(habit_id, day):
        EVENT_BUS.publish(ChangeEvent(events.ENTRY_CLEARED, habit_id=habit_id, date=day))

    created = HIDDEN_MARKER_REPO.set_hidden_marker(habit_id, day)
    if created:
        logger.info(
            "hid habit", extra={"_json_habit_id": habit_id, "_json_date": day}
        )
        EVENT_BUS.publish(ChangeEvent(events.HABIT_HIDDEN, habit_id=habit_id, date=day))
    return created


def unhide(habit_id: EntityId, date: datetime.date) -> bool:
    """Remove the hidden marker, if any. The discarded value is not restored."""
    day = to_date(date)
    removed = HIDDEN_MARKER_REPO.clear_hidden_marker(habit_id, day)
    if removed:
        EVENT_BUS.publish(
            ChangeEvent(events.HABIT_UNHIDDEN, habit_id=habit_id, date=day)
        )
    return removed


def unhide_all(date: datetime.date) -> int:
    """Remove every hidden marker on a date and return how many there were."""
    day = to_date(date)
    count = HIDDEN_MARKER_REPO.clear_all_hidden_markers(day)
    if count == 0:
        return 0

    logger.info(
        "unhid all habits", extra={"_json_date": day, "_json_count": count}
    )
    EVENT_BUS.publish(
        ChangeEvent(events.HIDDEN_CLEARED, date=day, payload={"count": count})
    )
    return count


def hidden_habits_on(date: datetime.date) -> list[Habit]:
    """Non-archived habits hidden on a date, in name order."""
    hidden_ids = HIDDEN_MARKER_REPO.get_hidden_habit_ids(to_date(date))
    return sorted(
        [habit for habit in HABIT_REPO.get_all_habits() if habit["id"] in hidden_ids],
        key=_name_order,
    )


def hidden_count_on(date: datetime.date) -> int:
    return len(hidden_habits_on(date))


def visibility_state(habit_id: EntityId, date: datetime.date) -> VisibilityState:
    day = to_date(date)
    if HIDDEN_MARKER_REPO.is_hidden(habit_id, day):
        return "hidden"
    entry = ENTRY_REPO.get_entry_for(habit_id, day)
    if entry is None or not entry["value"]:
        return "pending"
    return "done"
