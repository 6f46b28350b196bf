from .config_checks import VariantConfigError, validate_variant_config

__all__ = ["VariantConfigError", "validate_variant_config"]
