from __future__ import annotations

from typing import TYPE_CHECKING, Set, Tuple

if TYPE_CHECKING:
    from sevenwonders.core.board import LevelSpec, VariantConfig

_LAYOUTS = {"rim", "full"}
_VICTORY_KEYWORDS = {"none", "corners", "all"}


class VariantConfigError(ValueError):
    pass


def _cell_playable(spec: "LevelSpec", row: int, col: int) -> bool:
    if not (0 <= row < spec.size and 0 <= col < spec.size):
        return False
    if spec.layout == "full":
        return True
    last = spec.size - 1
    return row in (0, last) or col in (0, last)


def _check_level(index: int, spec: "LevelSpec", reference_size: int) -> None:
    if not isinstance(spec.size, int) or spec.size <= 0:
        raise VariantConfigError(f"level {index}: size must be a positive integer, got {spec.size!r}")
    if (reference_size - spec.size) % 2 != 0:
        raise VariantConfigError(
            f"level {index}: size {spec.size} cannot be centred on reference size {reference_size}"
        )
    if spec.layout not in _LAYOUTS:
        raise VariantConfigError(f"level {index}: unknown layout {spec.layout!r}")
    if isinstance(spec.victory, str):
        if spec.victory not in _VICTORY_KEYWORDS:
            raise VariantConfigError(f"level {index}: unknown victory keyword {spec.victory!r}")
        if spec.victory == "corners" and not all(
            _cell_playable(spec, r, c) for r in (0, spec.size - 1) for c in (0, spec.size - 1)
        ):
            raise VariantConfigError(f"level {index}: corner victory fields must be playable")
        return
    for cell in spec.victory:
        if len(cell) != 2:
            raise VariantConfigError(f"level {index}: victory cell {cell!r} must be (row, col)")
        if not _cell_playable(spec, int(cell[0]), int(cell[1])):
            raise VariantConfigError(f"level {index}: victory cell {tuple(cell)} is not playable")


def validate_variant_config(config: "VariantConfig") -> None:
    if not config.levels:
        raise VariantConfigError("variant must define at least one level")
    sizes = [level.size for level in config.levels]
    if any(not isinstance(size, int) or size <= 0 for size in sizes):
        raise VariantConfigError(f"level sizes must be positive integers, got {sizes}")
    reference_size = max(sizes)
    for index, spec in enumerate(config.levels):
        _check_level(index, spec, reference_size)
    for lower, upper in zip(sizes, sizes[1:]):
        if upper > lower:
            raise VariantConfigError(f"level sizes must not grow towards the top, got {sizes}")

    seen: Set[Tuple[int, int]] = set()
    for start in config.starting_rows:
        if not 0 <= start.level < len(config.levels):
            raise VariantConfigError(f"starting row refers to missing level {start.level}")
        spec = config.levels[start.level]
        if not any(_cell_playable(spec, start.row, c) for c in range(spec.size)):
            raise VariantConfigError(
                f"starting row {start.row} on level {start.level} has no playable cells"
            )
        key = (start.level, start.row)
        if key in seen:
            raise VariantConfigError(f"starting row {start.row} on level {start.level} listed twice")
        seen.add(key)

    if config.victory_threshold < 1:
        raise VariantConfigError("victory_threshold must be at least 1")
    if config.min_pieces < 1:
        raise VariantConfigError("min_pieces must be at least 1")
