# SPDX-License-Identifier: MIT

import random

# Color for archived habits and hidden rows
MUTED_COLOR = "bright_black"

# Status colors in the day view
DONE_COLOR = "green"
PENDING_COLOR = "yellow"
HIDDEN_COLOR = MUTED_COLOR


def get_random_color() -> str:
    """Return a random color from the Rich color palette.

    These colors are chosen for good visibility in terminal displays.
    """
    colors = [
        "red",
        "green",
        "yellow",
        "blue",
        "magenta",
        "cyan",
        "bright_red",
        "bright_green",
        "bright_yellow",
        "bright_blue",
        "bright_magenta",
        "bright_cyan",
        "dark_orange",
        "purple",
        "deep_pink",
        "spring_green",
        "dark_violet",
        "gold",
        "orange",
        "pink",
    ]
    return random.choice(colors)
