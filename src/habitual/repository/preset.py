# SPDX-License-Identifier: MIT

from copy import deepcopy
from typing import Any, Optional, cast

from yaml import dump, load

try:
    from yaml import CDumper as Dumper  # noqa: F401
    from yaml import CLoader as Loader
except ImportError:
    from yaml import Dumper, Loader  # type: ignore[assignment]

from habitual import configuration, time
from habitual.model.entity_id import EntityId, generate_entity_id
from habitual.model.preset import Preset


class PresetNotFoundError(LookupError):
    pass


class PresetRepository:
    def __init__(self) -> None:
        self._presets: Optional[list[Preset]] = None
        self.is_dirty = False
        self._dirty_ids: set[str] = set()
        self._deleted_ids: set[str] = set()

    @property
    def presets(self) -> list[Preset]:
        if self._presets is None:
            self.__load_data()
        if self._presets is None:
            raise ValueError()
        return self._presets

    def __load_data(self) -> None:
        self._presets = []
        for file_path in configuration.DATA_PRESETS_DIR.iterdir():
            if file_path.suffix != ".yaml" or file_path.name == ".gitkeep":
                continue
            raw_preset = load(file_path.read_text(), Loader=Loader)
            if raw_preset is not None:
                self._presets.append(
                    self.__convert_preset_for_deserialization(raw_preset)
                )

    def __save_data(self) -> None:
        # Write dirty entities
        for preset in self.presets:
            if preset["id"] in self._dirty_ids:
                serializable_preset = self.__convert_preset_for_serialization(
                    deepcopy(preset)
                )
                file_path = configuration.DATA_PRESETS_DIR / f"{preset['id']}.yaml"
                file_path.write_text(dump(serializable_preset, Dumper=Dumper))

        # Remove hard-deleted entity files
        for entity_id in self._deleted_ids:
            file_path = configuration.DATA_PRESETS_DIR / f"{entity_id}.yaml"
            if file_path.exists():
                file_path.unlink()

        self._dirty_ids.clear()
        self._deleted_ids.clear()

    def flush(self) -> bool:
        if self._presets is not None and self.is_dirty:
            self.__save_data()
            self.is_dirty = False
            return True
        return False

    def __convert_preset_for_serialization(self, preset: Preset) -> dict[str, Any]:
        serializable_preset = cast(dict[str, Any], preset)
        serializable_preset["created"] = time.datetime_to_iso_str(
            serializable_preset["created"]
        )
        return serializable_preset

    def __convert_preset_for_deserialization(self, preset: dict[str, Any]) -> Preset:
        deserializable_preset = preset
        deserializable_preset["created"] = time.datetime_from_str(
            deserializable_preset["created"]
        )
        return cast(Preset, deserializable_preset)

    def save_new_preset(self, preset: Preset) -> EntityId:
        self.is_dirty = True

        preset["id"] = generate_entity_id()

        self.presets.append(preset)
        self._dirty_ids.add(preset["id"])

        return preset["id"]

    def delete_preset(self, id: EntityId) -> None:
        preset = self.get_preset(id)

        self.is_dirty = True
        self._presets = [p for p in self.presets if p["id"] != preset["id"]]
        self._dirty_ids.discard(id)
        self._deleted_ids.add(id)

    def get_preset(self, id: EntityId) -> Preset:
        for preset in self.presets:
            if preset["id"] == id:
                return deepcopy(preset)
        raise PresetNotFoundError(f"No preset with id {id}")

    def get_all_presets(self) -> list[Preset]:
        # Built-ins first, then the user's own, each alphabetical
        return deepcopy(
            sorted(
                self.presets,
                key=lambda preset: (
                    preset["category"] == "custom",
                    preset["category"],
                    preset["name"].lower(),
                ),
            )
        )


PRESET_REPO = PresetRepository()
