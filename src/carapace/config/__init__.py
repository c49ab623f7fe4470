"""Configuration loading, schema, and defaults."""

from carapace.config.loader import ConfigError, load_config
from carapace.config.schema import CarapaceConfig, Severity, VALID_RULESETS

__all__ = [
    "CarapaceConfig",
    "ConfigError",
    "Severity",
    "VALID_RULESETS",
    "load_config",
]
