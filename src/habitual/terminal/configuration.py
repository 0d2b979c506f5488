# SPDX-License-Identifier: MIT

import logging
from typing import Annotated, Optional

import pendulum
import typer
from rich.console import Console
from rich.table import Table

from habitual import configuration
from habitual.configuration import Configuration
from habitual.repository.configuration import CONFIGURATION_REPO
from habitual.terminal.custom_typer import AliasedTyperGroup

app = typer.Typer(cls=AliasedTyperGroup, no_args_is_help=True)

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


def _enabled(value: bool) -> str:
    return "✓ Enabled" if value else "✗ Disabled"


def _config_table(config: Configuration, title: Optional[str] = None) -> Table:
    table = Table(title=title)
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="magenta")

    table.add_row("show_header", _enabled(config["show_header"]))
    table.add_row("timezone", config["timezone"])
    table.add_row("clear_ids_on_view", _enabled(config["clear_ids_on_view"]))
    table.add_row(
        "random_color_for_habits", _enabled(config["random_color_for_habits"])
    )
    table.add_row("log_level", config.get("log_level", "INFO"))
    table.add_row("data_path", str(configuration.DATA_PATH))
    table.add_row("log_path", str(configuration.LOG_PATH))
    return table


@app.command("view, v")
def view() -> None:
    """Display current configuration settings."""
    config = CONFIGURATION_REPO.get_config()

    console = Console()
    console.print(_config_table(config))

    yaml_library_type = "untested"
    try:
        from yaml import CDumper as Dumper  # noqa: F401
        from yaml import CLoader as Loader  # noqa: F401

        yaml_library_type = "C"
    except ImportError:
        yaml_library_type = "Python"

    console.print()
    console.print(f"YAML Library Type: {yaml_library_type}")


@app.command("set, s", no_args_is_help=True)
def set(
    show_header: Annotated[
        Optional[bool],
        typer.Option(
            "--show-header/--no-show-header",
            help="Show the header above views",
        ),
    ] = None,
    timezone: Annotated[
        Optional[str],
        typer.Option(
            "--timezone",
            help="Timezone that decides which calendar day it is ('local' or e.g. Europe/Paris)",
        ),
    ] = None,
    data_path: Annotated[
        Optional[str],
        typer.Option(
            "--data-path",
            help="Directory path for storing data files",
        ),
    ] = None,
    remove_data_path: Annotated[
        bool,
        typer.Option(
            "--remove-data-path",
            help="Reset data path to the platform default",
        ),
    ] = False,
    clear_ids_on_view: Annotated[
        Optional[bool],
        typer.Option(
            "--clear-ids-on-view/--no-clear-ids-on-view",
            help="Enable/disable automatic clearing of ID map before view commands",
        ),
    ] = None,
    random_color_for_habits: Annotated[
        Optional[bool],
        typer.Option(
            "--random-color-for-habits/--no-random-color-for-habits",
            help="Enable/disable random colors for new habits",
        ),
    ] = None,
    log_level: Annotated[
        Optional[str],
        typer.Option("--log-level", help=", ".join(LOG_LEVELS)),
    ] = None,
) -> None:
    """
    Update configuration settings.
    """
    if timezone is not None and timezone != "local":
        try:
            pendulum.timezone(timezone)
        except (ValueError, KeyError):
            raise typer.BadParameter(f"Unknown timezone: '{timezone}'")
    if log_level is not None:
        log_level = log_level.upper()
        if log_level not in LOG_LEVELS:
            raise typer.BadParameter(
                f"Invalid log level: {log_level}. Valid options: {', '.join(LOG_LEVELS)}"
            )

    CONFIGURATION_REPO.update_config(
        show_header=show_header,
        data_path=data_path,
        remove_data_path=remove_data_path,
        timezone=timezone,
        clear_ids_on_view=clear_ids_on_view,
        random_color_for_habits=random_color_for_habits,
        log_level=log_level,
    )
    logging.getLogger(__name__).info("configuration updated")

    console = Console()
    console.print("[green]Configuration updated successfully![/green]\n")
    console.print(
        _config_table(CONFIGURATION_REPO.get_config(), title="Updated Configuration")
    )
