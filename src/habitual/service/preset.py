# SPDX-License-Identifier: MIT

import logging
from typing import Optional

import pendulum

from habitual import events
from habitual.events import EVENT_BUS, ChangeEvent
from habitual.model.entity_id import EntityId
from habitual.model.habit import HabitType
from habitual.repository.habit import HABIT_REPO
from habitual.repository.preset import PRESET_REPO
from habitual.service.day_of_week import EVERY_DAY, is_valid_mask
from habitual.service.habit import create_habit
from habitual.service.schedule import schedule_dow_mask
from habitual.template.preset import get_preset_template

logger = logging.getLogger(__name__)

CUSTOM_CATEGORY = "custom"

# name, description, type, target, unit, dow mask, color, icon, category
type PresetRow = tuple[
    str, str, HabitType, Optional[float], Optional[str], int, str, str, str
]

DEFAULT_PRESETS: list[PresetRow] = [
    # Health & Wellness
    ("Drink Water", "Stay hydrated throughout the day", "count", 8, "glasses", 127, "#4FC3F7", "water", "health"),
    ("Take Vitamins", "Daily vitamin supplements", "boolean", None, None, 127, "#FF9800", "medical", "health"),
    ("Sleep 8 Hours", "Get adequate sleep for recovery", "duration", 480, "minutes", 127, "#9C27B0", "moon", "health"),
    ("Brush Teeth", "Maintain oral hygiene", "count", 2, "times", 127, "#00BCD4", "medical", "health"),
    # Fitness & Exercise
    ("Daily Walk", "Take a walk for physical activity", "duration", 30, "minutes", 127, "#4CAF50", "walk", "fitness"),
    ("Workout", "Exercise or gym session", "duration", 45, "minutes", 62, "#FF5722", "barbell", "fitness"),
    ("Push-ups", "Daily push-up exercise", "count", 20, "reps", 127, "#795548", "fitness", "fitness"),
    ("Steps Goal", "Daily step count target", "count", 10000, "steps", 127, "#2196F3", "walk", "fitness"),
    # Productivity
    ("Read Books", "Daily reading habit", "duration", 30, "minutes", 127, "#8BC34A", "book", "productivity"),
    ("Journal Writing", "Daily journaling or reflection", "boolean", None, None, 127, "#607D8B", "book", "productivity"),
    ("Deep Work Session", "Focused work without distractions", "duration", 90, "minutes", 62, "#3F51B5", "eye", "productivity"),
    # Mindfulness & Mental Health
    ("Meditation", "Daily mindfulness meditation", "duration", 10, "minutes", 127, "#9C27B0", "leaf", "mindfulness"),
    ("Gratitude Practice", "Write down things you are grateful for", "count", 3, "items", 127, "#FF9800", "heart", "mindfulness"),
    # Social & Relationships
    ("Call Family/Friends", "Connect with loved ones", "boolean", None, None, 85, "#E91E63", "call", "social"),
    ("Date Night", "Quality time with partner", "boolean", None, None, 32, "#E91E63", "heart", "social"),
    # Learning & Skills
    ("Practice Instrument", "Music practice session", "duration", 30, "minutes", 127, "#9C27B0", "musical-notes", "learning"),
    ("Code Practice", "Programming or coding practice", "duration", 60, "minutes", 62, "#4CAF50", "code-slash", "learning"),
    # Household & Organization
    ("Make Bed", "Start the day by making your bed", "boolean", None, None, 127, "#8BC34A", "bed", "household"),
    ("Meal Prep", "Prepare meals in advance", "boolean", None, None, 65, "#4CAF50", "restaurant", "household"),
]  # fmt: skip


class PresetValidationError(Exception):
    pass


def seed_default_presets() -> int:
    """Store the built-in presets if none exist yet. Returns how many were added."""
    if PRESET_REPO.get_all_presets():
        return 0

    for name, description, habit_type, target, unit, mask, color, icon, category in (
        DEFAULT_PRESETS
    ):
        preset = get_preset_template()
        preset["name"] = name
        preset["description"] = description
        preset["habit_type"] = habit_type
        preset["default_target"] = target
        preset["unit"] = unit
        preset["default_dow_mask"] = mask
        preset["default_color"] = color
        preset["default_icon"] = icon
        preset["category"] = category
        PRESET_REPO.save_new_preset(preset)

    logger.info("seeded default presets", extra={"_json_count": len(DEFAULT_PRESETS)})
    return len(DEFAULT_PRESETS)


def create_preset(
    name: str,
    habit_type: HabitType = "boolean",
    default_target: Optional[float] = None,
    unit: Optional[str] = None,
    description: Optional[str] = None,
    default_dow_mask: int = EVERY_DAY,
    default_color: Optional[str] = None,
    default_icon: Optional[str] = None,
) -> EntityId:
    if not name.strip():
        raise PresetValidationError("Please enter a habit name first")
    if not is_valid_mask(default_dow_mask):
        raise PresetValidationError("Please select at least one day")

    preset = get_preset_template()
    preset["name"] = name.strip()
    preset["description"] = description
    preset["habit_type"] = habit_type
    preset["default_target"] = default_target
    preset["unit"] = unit
    preset["default_dow_mask"] = default_dow_mask
    preset["default_color"] = default_color
    preset["default_icon"] = default_icon
    preset["category"] = CUSTOM_CATEGORY

    preset_id = PRESET_REPO.save_new_preset(preset)
    EVENT_BUS.publish(
        ChangeEvent(events.PRESET_CREATED, payload={"preset_id": preset_id})
    )
    return preset_id


def preset_from_habit(habit_id: EntityId) -> EntityId:
    """Save an existing habit's settings as a custom preset."""
    habit = HABIT_REPO.get_habit(habit_id)
    return create_preset(
        name=habit["name"],
        habit_type=habit["habit_type"],
        default_target=habit["target_value"],
        unit=habit["unit"],
        description=habit["description"],
        default_dow_mask=schedule_dow_mask(habit["schedule"]),
        default_color=habit["color"],
        default_icon=habit["icon"],
    )


def apply_preset(
    preset_id: EntityId,
    name: Optional[str] = None,
    start_date: Optional[pendulum.Date] = None,
) -> EntityId:
    """
    Create a habit from a preset.

    A preset covering every day becomes a daily habit, anything narrower a
    weekly one.
    """
    preset = PRESET_REPO.get_preset(preset_id)
    dow_mask = preset["default_dow_mask"] or EVERY_DAY
    schedule_type = "daily" if dow_mask == EVERY_DAY else "weekly"

    return create_habit(
        name=name if name is not None else preset["name"],
        habit_type=preset["habit_type"],
        target_value=preset["default_target"],
        unit=preset["unit"],
        description=preset["description"],
        color=preset["default_color"],
        icon=preset["default_icon"],
        start_date=start_date,
        schedule_type=schedule_type,
        dow_mask=dow_mask if schedule_type == "weekly" else None,
    )


def delete_preset(preset_id: EntityId) -> None:
    preset = PRESET_REPO.get_preset(preset_id)
    if preset["category"] != CUSTOM_CATEGORY:
        raise PresetValidationError(
            f"'{preset['name']}' is a built-in preset and cannot be deleted"
        )
    PRESET_REPO.delete_preset(preset_id)
    EVENT_BUS.publish(
        ChangeEvent(events.PRESET_DELETED, payload={"preset_id": preset_id})
    )
