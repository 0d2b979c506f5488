# SPDX-License-Identifier: MIT

from typing import Annotated, Optional

import pendulum
import typer

from habitual.id_map import clear_id_map_if_required
from habitual.model.entity_id import EntityId
from habitual.model.habit import HABIT_TYPES
from habitual.repository.habit import HABIT_REPO
from habitual.repository.id_map import ID_MAP_REPO
from habitual.repository.preset import PRESET_REPO
from habitual.service.day_of_week import EVERY_DAY
from habitual.service.habit import HabitValidationError
from habitual.service.preset import (
    PresetValidationError,
    apply_preset,
    create_preset,
    delete_preset,
    preset_from_habit,
)
from habitual.terminal.custom_typer import AliasedTyperGroup
from habitual.terminal.habit import echo_validation_error, real_habit_id
from habitual.terminal.parse import parse_date, parse_days
from habitual.time import today
from habitual.view.views import habit as habit_view
from habitual.view.views import preset as preset_view

app = typer.Typer(cls=AliasedTyperGroup, no_args_is_help=True)


def real_preset_id(synthetic_id: int) -> EntityId:
    try:
        return ID_MAP_REPO.get_real_id("presets", synthetic_id)
    except KeyError:
        typer.echo(
            f"Unknown preset id: {synthetic_id}. List presets first to get current ids."
        )
        raise typer.Exit(1)


@app.command("list, ls")
def list_presets() -> None:
    """List built-in and custom presets."""
    clear_id_map_if_required()
    preset_view.presets_view(PRESET_REPO.get_all_presets())


@app.command("add, a", no_args_is_help=True)
def add(
    name: Annotated[Optional[str], typer.Argument()] = None,
    from_habit: Annotated[
        Optional[int],
        typer.Option("--from-habit", "-fh", help="Copy the settings of a habit"),
    ] = None,
    habit_type: Annotated[
        str,
        typer.Option("--type", "-t", help=", ".join(HABIT_TYPES)),
    ] = "boolean",
    target: Annotated[Optional[float], typer.Option("--target", "-tg")] = None,
    unit: Annotated[Optional[str], typer.Option("--unit", "-u")] = None,
    description: Annotated[Optional[str], typer.Option("--description", "-d")] = None,
    days: Annotated[Optional[str], typer.Option("--days")] = None,
    color: Annotated[Optional[str], typer.Option("--color", "-col")] = None,
    icon: Annotated[Optional[str], typer.Option("--icon")] = None,
) -> None:
    """Save a custom preset, from options or from an existing habit."""
    try:
        if from_habit is not None:
            preset_id = preset_from_habit(real_habit_id(from_habit))
        else:
            if habit_type not in HABIT_TYPES:
                typer.echo(
                    f"Invalid habit type: {habit_type}. "
                    f"Valid options: {', '.join(HABIT_TYPES)}"
                )
                raise typer.Exit(1)
            dow_mask = parse_days(days)
            preset_id = create_preset(
                name=name or "",
                habit_type=habit_type,  # type: ignore[arg-type]
                default_target=target,
                unit=unit,
                description=description,
                default_dow_mask=dow_mask if dow_mask is not None else EVERY_DAY,
                default_color=color,
                default_icon=icon,
            )
    except PresetValidationError as e:
        typer.echo(str(e))
        raise typer.Exit(1)

    typer.echo(f"Saved preset: {PRESET_REPO.get_preset(preset_id)['name']}")


@app.command("apply, ap", no_args_is_help=True)
def apply(
    id: int,
    name: Annotated[
        Optional[str], typer.Option("--name", "-n", help="Name for the new habit")
    ] = None,
    start: Annotated[
        Optional[pendulum.Date],
        typer.Option("--start", parser=parse_date),
    ] = None,
) -> None:
    """Create a habit from a preset."""
    try:
        habit_id = apply_preset(real_preset_id(id), name=name, start_date=start)
    except HabitValidationError as e:
        echo_validation_error(e)
        raise typer.Exit(1)

    habit_view.single_habit_view(HABIT_REPO.get_habit(habit_id), today())


@app.command("delete, d", no_args_is_help=True)
def delete(id: int) -> None:
    """Delete a custom preset."""
    preset_id = real_preset_id(id)
    name = PRESET_REPO.get_preset(preset_id)["name"]
    try:
        delete_preset(preset_id)
    except PresetValidationError as e:
        typer.echo(str(e))
        raise typer.Exit(1)
    typer.echo(f"Deleted preset: {name}")
