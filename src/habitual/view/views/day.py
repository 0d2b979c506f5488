# SPDX-License-Identifier: MIT

import datetime
from typing import Optional, cast

from rich import box
from rich.console import Console
from rich.table import Table

from habitual.color import DONE_COLOR, HIDDEN_COLOR, PENDING_COLOR
from habitual.model.entity_id import EntityId
from habitual.model.entry import HabitEntry
from habitual.model.habit import Habit
from habitual.repository.id_map import ID_MAP_REPO
from habitual.service.category import categorize, category_color
from habitual.service.entry import format_progress, is_target_met
from habitual.service.reminder import reminders_on
from habitual.service.schedule_format import format_reminder_time
from habitual.time import date_to_display_str, to_date
from habitual.view.views.header import header


def day_view(
    date: datetime.date,
    habits: list[Habit],
    entries: list[HabitEntry],
    hidden_count: int = 0,
) -> None:
    """
    Habits due on a date with their progress.

    id  habit          category  status   progress      reminders
    ──────────────────────────────────────────────────────────────
    1   Drink Water    daily     pending  3/8 glasses   9:00 AM
    2   Workout        weekly    done     0h 50m / ...
    """
    day = to_date(date)
    header(date_to_display_str(day))

    values: dict[EntityId, Optional[float]] = {
        entry["habit_id"]: entry["value"] for entry in entries
    }

    day_table = Table(box=box.SIMPLE)
    day_table.add_column("id")
    day_table.add_column("habit")
    day_table.add_column("category")
    day_table.add_column("status")
    day_table.add_column("progress")
    day_table.add_column("reminders")

    for habit in habits:
        habit_id = cast(EntityId, habit["id"])
        value = values.get(habit_id)

        if value:
            status_str = f"[{DONE_COLOR}]done[/{DONE_COLOR}]"
            if not is_target_met(habit, value):
                status_str = f"[{PENDING_COLOR}]partial[/{PENDING_COLOR}]"
        else:
            status_str = f"[{PENDING_COLOR}]pending[/{PENDING_COLOR}]"

        category = categorize(habit["schedule"])
        color = category_color(category)
        name = habit["name"]
        if habit["color"]:
            name = f"[{habit['color']}]{name}[/{habit['color']}]"

        day_table.add_row(
            str(ID_MAP_REPO.associate_id("habits", habit_id)),
            name,
            f"[{color}]{category}[/{color}]",
            status_str,
            format_progress(habit, value),
            ", ".join(
                format_reminder_time(reminder["minutes_after_midnight"])
                for reminder in reminders_on(habit, day)
            ),
        )

    console = Console()
    if len(habits) == 0:
        console.print(" Nothing due.")
    else:
        console.print(day_table)
    if hidden_count > 0:
        console.print(
            f"[{HIDDEN_COLOR}] {hidden_count} hidden "
            f"(habitual unhide-all {day.isoformat()})[/{HIDDEN_COLOR}]"
        )


def hidden_view(date: datetime.date, habits: list[Habit]) -> None:
    day = to_date(date)
    header(f"hidden {date_to_display_str(day)}")

    hidden_table = Table(box=box.SIMPLE)
    hidden_table.add_column("id")
    hidden_table.add_column("habit")

    for habit in habits:
        hidden_table.add_row(
            str(ID_MAP_REPO.associate_id("habits", cast(EntityId, habit["id"]))),
            f"[{HIDDEN_COLOR}]{habit['name']}[/{HIDDEN_COLOR}]",
        )

    console = Console()
    console.print(hidden_table)
