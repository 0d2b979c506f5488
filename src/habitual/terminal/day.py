# SPDX-License-Identifier: MIT

"""Day-level commands: what is due, recording values, and hiding habits."""

from typing import Annotated, Optional

import pendulum
import typer
from rich.console import Console

from habitual.id_map import clear_id_map_if_required
from habitual.repository.entry import ENTRY_REPO
from habitual.repository.habit import HABIT_REPO
from habitual.service.entry import (
    EntryValidationError,
    clear_value,
    format_progress,
    parse_entry_value,
    record_value,
)
from habitual.service.visibility import (
    hidden_count_on,
    hidden_habits_on,
    hide,
    unhide,
    unhide_all,
    visible_habits_on,
)
from habitual.terminal.habit import real_habit_id
from habitual.terminal.parse import parse_date, parse_id_list
from habitual.time import date_to_display_str, today
from habitual.view.views import day as day_view

DateOption = Annotated[
    Optional[pendulum.Date],
    typer.Option("--date", "-d", parser=parse_date, help="Day (default: today)"),
]


def today_command(
    date: Annotated[
        Optional[pendulum.Date],
        typer.Argument(parser=parse_date, help="Day to show (default: today)"),
    ] = None,
) -> None:
    """Show the habits due on a day."""
    clear_id_map_if_required()

    day = date if date is not None else today()
    day_view.day_view(
        day,
        visible_habits_on(day),
        ENTRY_REPO.get_entries_on(day),
        hidden_count_on(day),
    )


def log(
    id: int,
    value: Annotated[
        str,
        typer.Argument(help="Amount to record; yes/no for yes/no habits, 0 clears"),
    ] = "yes",
    date: DateOption = None,
    note: Annotated[Optional[str], typer.Option("--note", "-n")] = None,
) -> None:
    """Record a value for a habit on a day."""
    day = date if date is not None else today()
    habit_id = real_habit_id(id)
    habit = HABIT_REPO.get_habit(habit_id)

    try:
        record_value(habit_id, day, parse_entry_value(habit, value), note)
    except EntryValidationError as e:
        typer.echo(str(e))
        raise typer.Exit(1)

    entry = ENTRY_REPO.get_entry_for(habit_id, day)
    progress = format_progress(habit, entry["value"] if entry is not None else None)
    typer.echo(f"{habit['name']} on {date_to_display_str(day)}: {progress}")


def clear(id: str, date: DateOption = None) -> None:
    """Clear the recorded value of habits on a day."""
    day = date if date is not None else today()
    for synthetic_id in parse_id_list(id):
        habit_id = real_habit_id(synthetic_id)
        name = HABIT_REPO.get_habit(habit_id)["name"]
        if clear_value(habit_id, day):
            typer.echo(f"Cleared {name} on {date_to_display_str(day)}")
        else:
            typer.echo(f"Nothing recorded for {name} on {date_to_display_str(day)}")


def hide_command(id: str, date: DateOption = None) -> None:
    """
    Hide habits for one day.

    Whatever was recorded for that day is discarded.
    """
    day = date if date is not None else today()
    for synthetic_id in parse_id_list(id):
        habit_id = real_habit_id(synthetic_id)
        name = HABIT_REPO.get_habit(habit_id)["name"]
        if hide(habit_id, day):
            typer.echo(f"Hid {name} on {date_to_display_str(day)}")
        else:
            typer.echo(f"{name} is already hidden on {date_to_display_str(day)}")


def unhide_command(id: str, date: DateOption = None) -> None:
    """Show hidden habits again on a day."""
    day = date if date is not None else today()
    for synthetic_id in parse_id_list(id):
        habit_id = real_habit_id(synthetic_id)
        name = HABIT_REPO.get_habit(habit_id)["name"]
        if unhide(habit_id, day):
            typer.echo(f"Unhid {name} on {date_to_display_str(day)}")
        else:
            typer.echo(f"{name} is not hidden on {date_to_display_str(day)}")


def unhide_all_command(date: DateOption = None) -> None:
    """Show every hidden habit again on a day."""
    day = date if date is not None else today()
    count = unhide_all(day)

    console = Console()
    if count == 0:
        console.print(f"No hidden habits on {date_to_display_str(day)}")
    else:
        console.print(
            f"Unhid {count} habit{'s' if count != 1 else ''} on {date_to_display_str(day)}"
        )


def hidden(date: DateOption = None) -> None:
    """List the habits hidden on a day."""
    clear_id_map_if_required()

    day = date if date is not None else today()
    day_view.hidden_view(day, hidden_habits_on(day))
