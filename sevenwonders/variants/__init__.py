"""Built-in game variants and YAML variant loading."""

from typing import Dict, List

from sevenwonders.core.board import VariantConfig
from sevenwonders.core.presets import PYRAMID

from .loader import load_variant_config, variant_from_dict, variant_to_dict

_REGISTRY: Dict[str, VariantConfig] = {PYRAMID.name: PYRAMID}


def available_variants() -> List[str]:
    return sorted(_REGISTRY)


def get_variant(name: str) -> VariantConfig:
    try:
        return _REGISTRY[name.lower()]
    except KeyError as exc:
        raise KeyError(f"Unknown variant {name!r}; available: {available_variants()}") from exc


__all__ = [
    "PYRAMID",
    "available_variants",
    "get_variant",
    "load_variant_config",
    "variant_from_dict",
    "variant_to_dict",
]
