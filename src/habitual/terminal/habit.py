# SPDX-License-Identifier: MIT

from typing import Annotated, Optional, cast

import pendulum
import typer

from habitual.id_map import clear_id_map_if_required
from habitual.model.entity_id import EntityId
from habitual.model.habit import HABIT_TYPES, Habit, HabitType, Reminder
from habitual.model.schedule import SCHEDULE_TYPES, ScheduleDefinition
from habitual.repository.entry import ENTRY_REPO
from habitual.repository.habit import HABIT_REPO
from habitual.repository.id_map import ID_MAP_REPO
from habitual.service.category import CATEGORIES, filter_by_category
from habitual.service.day_of_week import EVERY_DAY
from habitual.service.habit import (
    HabitValidationError,
    archive_habit,
    build_schedule,
    create_habit,
    delete_habit,
    modify_habit,
    unarchive_habit,
)
from habitual.service.reminder import ReminderValidationError, make_reminder
from habitual.service.schedule import schedule_dow_mask
from habitual.terminal.custom_typer import AliasedTyperGroup
from habitual.terminal.parse import parse_date, parse_days, parse_id_list, parse_reminder
from habitual.time import today
from habitual.view.views import habit as habit_view

app = typer.Typer(cls=AliasedTyperGroup, no_args_is_help=True)


def real_habit_id(synthetic_id: int) -> EntityId:
    try:
        return ID_MAP_REPO.get_real_id("habits", synthetic_id)
    except KeyError:
        typer.echo(
            f"Unknown habit id: {synthetic_id}. List habits first to get current ids."
        )
        raise typer.Exit(1)


def echo_validation_error(e: HabitValidationError) -> None:
    for issue in e.issues:
        typer.echo(f"{issue['field']}: {issue['message']}")


def _check_habit_type(habit_type: Optional[str]) -> Optional[HabitType]:
    if habit_type is not None and habit_type not in HABIT_TYPES:
        typer.echo(
            f"Invalid habit type: {habit_type}. Valid options: {', '.join(HABIT_TYPES)}"
        )
        raise typer.Exit(1)
    return habit_type  # type: ignore[return-value]


def _build_reminders(times: Optional[list[str]], days: Optional[str]) -> list[Reminder]:
    if not times:
        return []
    dow_mask = parse_days(days)
    reminders = []
    for time_str in times:
        minutes = cast(int, parse_reminder(time_str))
        try:
            reminders.append(
                make_reminder(minutes, dow_mask if dow_mask is not None else EVERY_DAY)
            )
        except ReminderValidationError as e:
            raise typer.BadParameter(str(e))
    return reminders


def _schedule_change(
    habit: Habit,
    schedule_type: Optional[str],
    days: Optional[int],
    every: Optional[int],
    start_date: Optional[pendulum.Date],
) -> Optional[ScheduleDefinition]:
    """Work out the new schedule from whichever schedule options were given."""
    if schedule_type is None and days is None and every is None:
        return None

    current = habit["schedule"]
    if schedule_type is None:
        if days is not None:
            schedule_type = "weekly"
        elif every is not None:
            schedule_type = "interval"
        else:
            schedule_type = current["schedule_type"]

    if days is None and schedule_type == "weekly":
        days = schedule_dow_mask(current)
    if every is None and current["schedule_type"] == "interval":
        every = current["interval_days"]

    anchor = start_date if start_date is not None else habit["start_date"]
    return build_schedule(schedule_type, anchor, days, every)


@app.command("add, a", no_args_is_help=True)
def add(
    name: str,
    habit_type: Annotated[
        str,
        typer.Option("--type", "-t", help=", ".join(HABIT_TYPES)),
    ] = "boolean",
    target: Annotated[
        Optional[float],
        typer.Option(
            "--target",
            "-tg",
            help="Target per day; minutes for duration habits",
        ),
    ] = None,
    unit: Annotated[Optional[str], typer.Option("--unit", "-u")] = None,
    description: Annotated[
        Optional[str],
        typer.Option("--description", "-d"),
    ] = None,
    schedule_type: Annotated[
        str,
        typer.Option("--schedule", "-s", help=", ".join(SCHEDULE_TYPES)),
    ] = "daily",
    days: Annotated[
        Optional[str],
        typer.Option(
            "--days",
            help="Days for weekly habits: mon,wed,fri / weekdays / weekends",
        ),
    ] = None,
    every: Annotated[
        Optional[int],
        typer.Option("--every", "-e", help="Interval in days for interval habits"),
    ] = None,
    start: Annotated[
        Optional[pendulum.Date],
        typer.Option("--start", parser=parse_date, help="First day (default: today)"),
    ] = None,
    end: Annotated[
        Optional[pendulum.Date],
        typer.Option("--end", parser=parse_date, help="Last day (inclusive)"),
    ] = None,
    reminders: Annotated[
        Optional[list[str]],
        typer.Option(
            "--reminder",
            "-r",
            help="Reminder time such as 07:30 (accepts multiple)",
        ),
    ] = None,
    reminder_days: Annotated[
        Optional[str],
        typer.Option("--reminder-days", help="Days the reminders apply to"),
    ] = None,
    color: Annotated[Optional[str], typer.Option("--color", "-col")] = None,
    icon: Annotated[Optional[str], typer.Option("--icon")] = None,
) -> None:
    """Create a new habit."""
    checked_type = _check_habit_type(habit_type)

    # Days or an interval imply the schedule type
    if schedule_type == "daily" and days is not None:
        schedule_type = "weekly"
    elif schedule_type == "daily" and every is not None:
        schedule_type = "interval"

    try:
        habit_id = create_habit(
            name=name,
            habit_type=checked_type or "boolean",
            target_value=target,
            unit=unit,
            description=description,
            color=color,
            icon=icon,
            start_date=start,
            end_date=end,
            schedule_type=schedule_type,
            dow_mask=parse_days(days),
            interval_days=every,
            reminders=_build_reminders(reminders, reminder_days),
        )
    except HabitValidationError as e:
        echo_validation_error(e)
        raise typer.Exit(1)

    habit_view.single_habit_view(HABIT_REPO.get_habit(habit_id), today())


@app.command("modify, m", no_args_is_help=True)
def modify(
    id: str,
    name: Annotated[Optional[str], typer.Option("--name", "-n")] = None,
    description: Annotated[Optional[str], typer.Option("--description", "-d")] = None,
    habit_type: Annotated[
        Optional[str],
        typer.Option("--type", "-t", help=", ".join(HABIT_TYPES)),
    ] = None,
    target: Annotated[Optional[float], typer.Option("--target", "-tg")] = None,
    unit: Annotated[Optional[str], typer.Option("--unit", "-u")] = None,
    schedule_type: Annotated[
        Optional[str],
        typer.Option("--schedule", "-s", help=", ".join(SCHEDULE_TYPES)),
    ] = None,
    days: Annotated[Optional[str], typer.Option("--days")] = None,
    every: Annotated[Optional[int], typer.Option("--every", "-e")] = None,
    start: Annotated[
        Optional[pendulum.Date],
        typer.Option("--start", parser=parse_date),
    ] = None,
    end: Annotated[
        Optional[pendulum.Date],
        typer.Option("--end", parser=parse_date),
    ] = None,
    reminders: Annotated[
        Optional[list[str]],
        typer.Option("--reminder", "-r", help="Replaces all reminders"),
    ] = None,
    reminder_days: Annotated[Optional[str], typer.Option("--reminder-days")] = None,
    color: Annotated[Optional[str], typer.Option("--color", "-col")] = None,
    icon: Annotated[Optional[str], typer.Option("--icon")] = None,
    remove_description: Annotated[
        bool, typer.Option("--remove-description", "-rd")
    ] = False,
    remove_target: Annotated[bool, typer.Option("--remove-target", "-rtg")] = False,
    remove_unit: Annotated[bool, typer.Option("--remove-unit", "-ru")] = False,
    remove_end: Annotated[bool, typer.Option("--remove-end", "-re")] = False,
    remove_reminders: Annotated[
        bool, typer.Option("--remove-reminders", "-rr")
    ] = False,
    remove_color: Annotated[bool, typer.Option("--remove-color", "-rcol")] = False,
    remove_icon: Annotated[bool, typer.Option("--remove-icon", "-ri")] = False,
) -> None:
    """Modify one or more habits."""
    checked_type = _check_habit_type(habit_type)
    dow_mask = parse_days(days)

    new_reminders: Optional[list[Reminder]] = None
    if reminders:
        new_reminders = _build_reminders(reminders, reminder_days)
    elif remove_reminders:
        new_reminders = []

    modified_habits = []
    for synthetic_id in parse_id_list(id):
        habit_id = real_habit_id(synthetic_id)
        habit = HABIT_REPO.get_habit(habit_id)

        try:
            modify_habit(
                habit_id,
                name=name,
                description=description,
                habit_type=checked_type,
                target_value=target,
                unit=unit,
                color=color,
                icon=icon,
                start_date=start,
                end_date=end,
                schedule=_schedule_change(habit, schedule_type, dow_mask, every, start),
                reminders=new_reminders,
                remove_description=remove_description,
                remove_target_value=remove_target,
                remove_unit=remove_unit,
                remove_color=remove_color,
                remove_icon=remove_icon,
                remove_end_date=remove_end,
            )
        except HabitValidationError as e:
            typer.echo(f"Habit {synthetic_id} ({habit['name']}) not modified:")
            echo_validation_error(e)
            raise typer.Exit(1)

        modified_habits.append(HABIT_REPO.get_habit(habit_id))

    for habit in modified_habits:
        habit_view.single_habit_view(habit, today())


@app.command("archive, ar", no_args_is_help=True)
def archive(id: str) -> None:
    """Archive a habit (keeps history, hides from day views)."""
    for synthetic_id in parse_id_list(id):
        habit_id = real_habit_id(synthetic_id)
        archive_habit(habit_id)
        habit_view.single_habit_view(HABIT_REPO.get_habit(habit_id))


@app.command("unarchive, ua", no_args_is_help=True)
def unarchive(id: str) -> None:
    """Unarchive a habit."""
    for synthetic_id in parse_id_list(id):
        habit_id = real_habit_id(synthetic_id)
        unarchive_habit(habit_id)
        habit_view.single_habit_view(HABIT_REPO.get_habit(habit_id))


@app.command("delete, d", no_args_is_help=True)
def delete(
    id: str,
    yes: Annotated[
        bool, typer.Option("--yes", "-y", help="Skip the confirmation prompt")
    ] = False,
) -> None:
    """Permanently delete habits with their entries and hidden days."""
    habit_ids = [real_habit_id(synthetic_id) for synthetic_id in parse_id_list(id)]
    names = [HABIT_REPO.get_habit(habit_id)["name"] for habit_id in habit_ids]

    if not yes:
        typer.confirm(
            f"Delete {', '.join(names)} and all recorded values?", abort=True
        )

    for habit_id, name in zip(habit_ids, names):
        delete_habit(habit_id)
        typer.echo(f"Deleted habit: {name}")


@app.command("list, ls")
def list_habits(
    category: Annotated[
        str,
        typer.Option("--category", "-c", help="all, " + ", ".join(CATEGORIES)),
    ] = "all",
    archived: Annotated[
        bool, typer.Option("--archived", "-a", help="Include archived habits")
    ] = False,
) -> None:
    """List habits, optionally filtered by schedule category."""
    clear_id_map_if_required()
    habits = HABIT_REPO.get_all_habits(include_archived=archived)
    try:
        habits = filter_by_category(habits, category)
    except ValueError as e:
        typer.echo(str(e))
        raise typer.Exit(1)

    habits = sorted(habits, key=lambda habit: habit["name"].lower())
    columns = ["id", "name", "type", "schedule", "category", "target"]
    if archived:
        columns.append("archived")
    habit_view.habits_view(f"habits ({category})", habits, columns)


@app.command("show, s", no_args_is_help=True)
def show(
    id: int,
    date: Annotated[
        Optional[pendulum.Date],
        typer.Option("--date", "-d", parser=parse_date, help="Day to check (default: today)"),
    ] = None,
) -> None:
    """Show one habit and whether it is due on a day."""
    habit = HABIT_REPO.get_habit(real_habit_id(id))
    habit_view.single_habit_view(habit, date if date is not None else today())


@app.command("week, w")
def week(
    start: Annotated[
        Optional[pendulum.Date],
        typer.Argument(parser=parse_date, help="First day (default: this Monday)"),
    ] = None,
) -> None:
    """Seven-day strip of due days and recorded progress."""
    clear_id_map_if_required()
    start_date = start if start is not None else today().start_of("week")
    habits = sorted(
        HABIT_REPO.get_all_habits(), key=lambda habit: habit["name"].lower()
    )
    entries = [
        entry
        for offset in range(7)
        for entry in ENTRY_REPO.get_entries_on(start_date.add(days=offset))
    ]
    habit_view.week_view(habits, entries, start_date)
