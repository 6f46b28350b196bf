from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Mapping, Union

import yaml

from sevenwonders.core.board import LevelSpec, StartRow, VariantConfig
from sevenwonders.core.state import PlayerColor
from sevenwonders.validation import VariantConfigError, validate_variant_config

_TOP_LEVEL_KEYS = {"name", "levels", "starting_rows", "victory_threshold", "min_pieces", "first_player"}
_LEVEL_KEYS = {"size", "layout", "victory"}
_START_KEYS = {"color", "level", "row"}


def _check_keys(section: str, data: Mapping[str, Any], allowed: set) -> None:
    if not isinstance(data, Mapping):
        raise VariantConfigError(f"{section} must be a mapping, got {type(data).__name__}")
    unknown = set(data) - allowed
    if unknown:
        raise VariantConfigError(f"{section}: unknown keys {sorted(unknown)}")


def _parse_color(value: Any) -> PlayerColor:
    try:
        return PlayerColor[str(value).upper()]
    except KeyError as exc:
        raise VariantConfigError(f"unknown player colour {value!r}") from exc


def _parse_int(section: str, value: Any) -> int:
    if isinstance(value, bool):
        raise VariantConfigError(f"{section} must be an integer, got {value!r}")
    try:
        return int(value)
    except (TypeError, ValueError) as exc:
        raise VariantConfigError(f"{section} must be an integer, got {value!r}") from exc


def _parse_level(index: int, data: Mapping[str, Any]) -> LevelSpec:
    _check_keys(f"levels[{index}]", data, _LEVEL_KEYS)
    if "size" not in data:
        raise VariantConfigError(f"levels[{index}]: size is required")
    victory = data.get("victory", "none")
    if not isinstance(victory, str):
        try:
            victory = tuple((int(row), int(col)) for row, col in victory)
        except (TypeError, ValueError) as exc:
            raise VariantConfigError(f"levels[{index}]: victory cells must be [row, col] pairs") from exc
    return LevelSpec(size=data["size"], layout=data.get("layout", "rim"), victory=victory)


def _parse_start(index: int, data: Mapping[str, Any]) -> StartRow:
    _check_keys(f"starting_rows[{index}]", data, _START_KEYS)
    missing = _START_KEYS - set(data)
    if missing:
        raise VariantConfigError(f"starting_rows[{index}]: missing {sorted(missing)}")
    return StartRow(
        _parse_color(data["color"]),
        level=_parse_int(f"starting_rows[{index}].level", data["level"]),
        row=_parse_int(f"starting_rows[{index}].row", data["row"]),
    )


def variant_from_dict(data: Mapping[str, Any]) -> VariantConfig:
    _check_keys("variant", data, _TOP_LEVEL_KEYS)
    if "levels" not in data or not isinstance(data["levels"], list):
        raise VariantConfigError("variant: levels must be a list")
    config = VariantConfig(
        name=str(data.get("name", "custom")),
        levels=tuple(_parse_level(i, level) for i, level in enumerate(data["levels"])),
        starting_rows=tuple(_parse_start(i, start) for i, start in enumerate(data.get("starting_rows", []))),
        victory_threshold=_parse_int("victory_threshold", data.get("victory_threshold", 4)),
        min_pieces=_parse_int("min_pieces", data.get("min_pieces", 4)),
        first_player=_parse_color(data.get("first_player", "white")),
    )
    validate_variant_config(config)
    return config


def variant_to_dict(config: VariantConfig) -> Dict[str, Any]:
    levels = []
    for spec in config.levels:
        victory = spec.victory if isinstance(spec.victory, str) else [list(cell) for cell in spec.victory]
        levels.append({"size": spec.size, "layout": spec.layout, "victory": victory})
    return {
        "name": config.name,
        "levels": levels,
        "starting_rows": [
            {"color": start.color.name.lower(), "level": start.level, "row": start.row}
            for start in config.starting_rows
        ],
        "victory_threshold": config.victory_threshold,
        "min_pieces": config.min_pieces,
        "first_player": config.first_player.name.lower(),
    }


def load_variant_config(path: Union[str, Path]) -> VariantConfig:
    path = Path(path)
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:
        raise VariantConfigError(f"{path} is not valid YAML: {exc}") from exc
    if data is None:
        raise VariantConfigError(f"{path} is empty")
    return variant_from_dict(data)
