"""Configuration loading and validation for seedconn."""

from seedconn.config.defaults import SeedConnectivityConfig
from seedconn.config.loader import load_config_file, config_from_dict
from seedconn.config.validator import ConfigValidator

__all__ = [
    "SeedConnectivityConfig",
    "load_config_file",
    "config_from_dict",
    "ConfigValidator",
]
