"""Configuration management components."""

from .config_manager import (
    ConfigManager,
    ConfigOption,
    TransformConfig,
    CONFIG_DEF,
    get_config_manager,
    reset_config_manager
)
from .processing_defaults import ProcessingDefaults

__all__ = [
    'ConfigManager',
    'ConfigOption',
    'TransformConfig',
    'CONFIG_DEF',
    'ProcessingDefaults',
    'get_config_manager',
    'reset_config_manager'
]
