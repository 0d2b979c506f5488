# SPDX-License-Identifier: MIT

import logging
from typing import Annotated, Optional

import typer

from habitual import state as app_state
from habitual.terminal import configuration, day, habit, preset
from habitual.terminal.custom_typer import OrderedAliasedTyperGroup
from habitual.view import state as view_state

app = typer.Typer(
    cls=OrderedAliasedTyperGroup,
    help="habitual - Habit tracking in the CLI",
    no_args_is_help=True,
)
app.command(name="today, td")(day.today_command)
app.command(name="log, l", no_args_is_help=True)(day.log)
app.command(name="clear, cl", no_args_is_help=True)(day.clear)
app.command(name="hide, h", no_args_is_help=True)(day.hide_command)
app.command(name="unhide, uh", no_args_is_help=True)(day.unhide_command)
app.command(name="unhide-all, uha")(day.unhide_all_command)
app.command(name="hidden, hd")(day.hidden)
app.add_typer(habit.app, name="habit, hb")
app.add_typer(preset.app, name="preset, p")
app.add_typer(configuration.app, name="config, c")


@app.callback()
def main_callback(
    no_header: Annotated[
        bool,
        typer.Option(
            "--no-header",
            "-nh",
            help="Suppress header output in views",
        ),
    ] = False,
    clear_ids: Annotated[
        Optional[bool],
        typer.Option(
            "--clear-ids/--no-clear-ids",
            help="Clear the ID map before views (overrides the config for this run)",
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-V", help="Print informational log messages"),
    ] = False,
) -> None:
    """
    habitual - Habit tracking in the CLI

    Global options that apply to all commands.
    """
    if no_header:
        view_state.set_show_header(False)
    if clear_ids is not None:
        app_state.set_clear_ids(clear_ids)
    if verbose:
        for handler in logging.getLogger("habitual").handlers:
            handler.setLevel(logging.INFO)


def run() -> None:
    app()
