# SPDX-License-Identifier: MIT

from typing import cast

from rich import box
from rich.console import Console
from rich.table import Table

from habitual.model.entity_id import EntityId
from habitual.model.preset import Preset
from habitual.repository.id_map import ID_MAP_REPO
from habitual.service.schedule_format import format_days_of_week
from habitual.view.views.header import header


def presets_view(presets: list[Preset]) -> None:
    """Presets grouped by category, built-ins first."""
    header("presets")

    presets_table = Table(box=box.SIMPLE)
    presets_table.add_column("id")
    presets_table.add_column("category")
    presets_table.add_column("name")
    presets_table.add_column("type")
    presets_table.add_column("target")
    presets_table.add_column("days")

    previous_category = None
    for preset in presets:
        category = preset["category"] if preset["category"] != previous_category else ""
        previous_category = preset["category"]

        target = ""
        if preset["default_target"] is not None:
            target = f"{preset['default_target']:g}"
            if preset["unit"]:
                target += f" {preset['unit']}"

        name = preset["name"]
        if preset["default_color"]:
            name = f"[{preset['default_color']}]{name}[/{preset['default_color']}]"

        presets_table.add_row(
            str(ID_MAP_REPO.associate_id("presets", cast(EntityId, preset["id"]))),
            category,
            name,
            preset["habit_type"],
            target,
            format_days_of_week(preset["default_dow_mask"]),
        )

    console = Console()
    console.print(presets_table)
