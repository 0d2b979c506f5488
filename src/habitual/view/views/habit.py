# SPDX-License-Identifier: MIT

import datetime
from typing import Optional, cast

from rich import box
from rich.console import Console
from rich.table import Table

from habitual.model.entity_id import EntityId
from habitual.model.entry import HabitEntry
from habitual.model.habit import Habit
from habitual.repository.id_map import ID_MAP_REPO
from habitual.service.category import categorize, category_color
from habitual.service.entry import format_target, is_target_met
from habitual.service.recurrence import (
    active_dates_between,
    is_habit_active_on,
    next_active_date,
)
from habitual.service.schedule_format import (
    format_days_of_week,
    format_reminder_time,
    format_schedule,
    schedule_helper_text,
)
from habitual.time import (
    date_to_display_str,
    date_to_display_str_optional,
    datetime_to_display_local_date_str_optional,
    to_date,
)
from habitual.view.views.header import header


def _colored(habit: Habit, value: str) -> str:
    if habit["color"] is None or habit["color"] == "":
        return value
    return f"[{habit['color']}]{value}[/{habit['color']}]"


def _target(habit: Habit) -> str:
    return format_target(habit) or ""


def habits_view(
    report_name: str,
    habits: list[Habit],
    columns: list[str] = ["id", "name", "type", "schedule", "category", "target"],
    use_color: bool = True,
) -> None:
    """Display list of habits in a table."""
    header(report_name)

    habits_table = Table(box=box.SIMPLE)
    for column in columns:
        habits_table.add_column(column)

    for habit in habits:
        row = []
        for column in columns:
            column_value = ""
            if column == "id":
                column_value = str(
                    ID_MAP_REPO.associate_id("habits", cast(EntityId, habit["id"]))
                )
            elif column == "name":
                column_value = habit["name"]
            elif column == "type":
                column_value = habit["habit_type"]
            elif column == "schedule":
                column_value = format_schedule(habit["schedule"])
            elif column == "category":
                category = categorize(habit["schedule"])
                color = category_color(category)
                row.append(f"[{color}]{category}[/{color}]")
                continue
            elif column == "target":
                column_value = _target(habit)
            elif column == "archived":
                column_value = "yes" if habit["archived"] is not None else ""

            if use_color:
                column_value = _colored(habit, column_value)
            row.append(column_value)
        habits_table.add_row(*row)

    console = Console()
    console.print(habits_table)


def single_habit_view(habit: Habit, on_date: Optional[datetime.date] = None) -> None:
    """Display detailed view of a single habit."""
    header("habit")

    habit_table = Table(box=box.SIMPLE)
    habit_table.add_column("property")
    habit_table.add_column("value")

    category = categorize(habit["schedule"])
    color = category_color(category)

    habit_table.add_row(
        "id", str(ID_MAP_REPO.associate_id("habits", cast(EntityId, habit["id"])))
    )
    habit_table.add_row("name", _colored(habit, habit["name"]))
    habit_table.add_row("description", habit["description"] or "")
    habit_table.add_row("type", habit["habit_type"])
    habit_table.add_row("target", _target(habit))
    habit_table.add_row("unit", habit["unit"] or "")
    habit_table.add_row("schedule", format_schedule(habit["schedule"]))
    helper_text = schedule_helper_text(habit["schedule"])
    if helper_text:
        habit_table.add_row("", f"[bright_black]{helper_text}[/bright_black]")
    habit_table.add_row("category", f"[{color}]{category}[/{color}]")
    habit_table.add_row("start", date_to_display_str(habit["start_date"]))
    habit_table.add_row("end", date_to_display_str_optional(habit["end_date"]) or "")

    if on_date is not None:
        habit_table.add_row(
            "due", "yes" if is_habit_active_on(habit, on_date) else "no"
        )
        next_date = next_active_date(habit, on_date)
        habit_table.add_row(
            "next due", date_to_display_str(next_date) if next_date else ""
        )

    reminders = [
        f"{format_reminder_time(reminder['minutes_after_midnight'])} "
        f"({format_days_of_week(reminder['dow_mask'])})"
        + ("" if reminder["enabled"] else " [bright_black]off[/bright_black]")
        for reminder in habit["reminders"]
    ]
    habit_table.add_row("reminders", "\n".join(reminders))
    habit_table.add_row("color", habit["color"] or "")
    habit_table.add_row("icon", habit["icon"] or "")
    habit_table.add_row(
        "archived", datetime_to_display_local_date_str_optional(habit["archived"])
    )
    habit_table.add_row(
        "updated", datetime_to_display_local_date_str_optional(habit["updated"])
    )

    console = Console()
    console.print(habit_table)


def week_view(
    habits: list[Habit],
    entries: list[HabitEntry],
    start_date: datetime.date,
) -> None:
    """
    Seven-day strip starting at start_date.

    Habit          Mon 03  Tue 04  Wed 05 ...
    ───────────────────────────────────────
    Drink Water    X       o       o
    Workout        X       .       ~

    X target met, ~ some progress, o due, . not due
    """
    header("week")

    first_day = to_date(start_date)
    days = [first_day.add(days=offset) for offset in range(7)]

    week_table = Table(box=box.SIMPLE)
    week_table.add_column("id")
    week_table.add_column("habit")
    for day in days:
        week_table.add_column(day.format("ddd DD"), justify="center")

    values: dict[tuple[EntityId, datetime.date], Optional[float]] = {
        (entry["habit_id"], entry["date"]): entry["value"] for entry in entries
    }

    for habit in habits:
        habit_id = cast(EntityId, habit["id"])
        due_days = set(active_dates_between(habit, days[0], days[-1]))
        row = [
            str(ID_MAP_REPO.associate_id("habits", habit_id)),
            _colored(habit, habit["name"]),
        ]
        for day in days:
            value = values.get((habit_id, day))
            if is_target_met(habit, value):
                cell = "[green]X[/green]"
            elif value:
                cell = "[yellow]~[/yellow]"
            elif day in due_days:
                cell = "o"
            else:
                cell = "[bright_black].[/bright_black]"
            row.append(cell)
        week_table.add_row(*row)

    console = Console()
    console.print(week_table)
    console.print(
        "[bright_black] X target met  ~ some progress  o due  . not due[/bright_black]"
    )
