"""
Configuration management for the XML-to-JSON transform.

A transform is configured by three properties, the same ones a message
pipeline host passes in:

- keys: path expressions, as a list or a comma-separated string (required)
- keys.delimiter.regex: regex splitting lookup paths into field names (default ".")
- xml.map.key: output map key holding the original payload (default "_xml_data_")

TransformConfig can be built from host properties, from environment
variables, or from a JSON/YAML file through ConfigManager.
"""

import os
import json
import logging
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Union

import yaml

from ..exceptions import ConfigurationError
from .processing_defaults import ProcessingDefaults


logger = logging.getLogger(__name__)

LIST_SEPARATOR = re.compile(r"\s*,\s*")


@dataclass(frozen=True)
class ConfigOption:
    """Definition of one configuration property as reported to the host."""
    name: str
    type: str
    default: Any
    importance: str
    documentation: str
    required: bool = False


CONFIG_DEF = (
    ConfigOption(
        name=ProcessingDefaults.XML_MAP_KEY_CONFIG,
        type="string",
        default=ProcessingDefaults.XML_MAP_KEY,
        importance="medium",
        documentation="Key in the resulting map that holds the original XML."
    ),
    ConfigOption(
        name=ProcessingDefaults.KEYS_CONFIG,
        type="list",
        default=None,
        importance="high",
        documentation="Path expressions of the values to extract from the XML. "
                      "Format: '<key-path>[<alias>][<filter-regex>][<extract-regex>]'",
        required=True
    ),
    ConfigOption(
        name=ProcessingDefaults.KEYS_DELIMITER_CONFIG,
        type="string",
        default=ProcessingDefaults.KEYS_DELIMITER,
        importance="high",
        documentation="Regex separating nested field names in a key path."
    ),
)


def parse_list_value(value: Union[str, List[str], None]) -> List[str]:
    """
    Normalize a list property.
    
    Strings are split on commas with surrounding whitespace trimmed, the way
    list-typed properties are written in connector configuration files.
    
    Args:
        value: List, comma-separated string, or None
        
    Returns:
        List of non-empty strings
    """
    if value is None:
        return []
    if isinstance(value, str):
        value = LIST_SEPARATOR.split(value.strip())
    elif not isinstance(value, (list, tuple)):
        raise ConfigurationError(f"Expected a list or comma-separated string, got {type(value).__name__}")
    return [item for item in value if item != '']


@dataclass
class TransformConfig:
    """
    Validated transform configuration.
    
    Attributes:
        path_expressions: Path expressions evaluated in order for every document
        delimiter: Regex separating field names in lookup paths
        xml_data_key: Output map key holding the original XML payload
    """
    path_expressions: List[str] = field(default_factory=list)
    delimiter: str = ProcessingDefaults.KEYS_DELIMITER
    xml_data_key: str = ProcessingDefaults.XML_MAP_KEY
    
    def __post_init__(self):
        """Validate the configuration and normalize path_expressions to a list."""
        self.path_expressions = parse_list_value(self.path_expressions)
        
        errors = []
        if not self.path_expressions:
            errors.append(f"'{ProcessingDefaults.KEYS_CONFIG}' must contain at least one path expression")
        elif not all(isinstance(expression, str) for expression in self.path_expressions):
            errors.append(f"'{ProcessingDefaults.KEYS_CONFIG}' must contain only strings")
        
        if not isinstance(self.delimiter, str):
            errors.append(f"'{ProcessingDefaults.KEYS_DELIMITER_CONFIG}' must be a string")
        else:
            try:
                re.compile(self.delimiter)
            except re.error as e:
                errors.append(f"'{ProcessingDefaults.KEYS_DELIMITER_CONFIG}' is not a valid regex: {e}")
        
        if not isinstance(self.xml_data_key, str) or not self.xml_data_key:
            errors.append(f"'{ProcessingDefaults.XML_MAP_KEY_CONFIG}' must be a non-empty string")
        
        if errors:
            raise ConfigurationError(f"Configuration validation failed: {'; '.join(errors)}")
        
        if self.delimiter == '.':
            logger.warning("Key delimiter regex '.' matches any character; use '\\.' to split on literal dots")
    
    @classmethod
    def from_properties(cls, props: Mapping[str, Any]) -> 'TransformConfig':
        """
        Create configuration from host properties.
        
        Args:
            props: Property mapping using the keys / keys.delimiter.regex / xml.map.key names
            
        Returns:
            Validated TransformConfig
            
        Raises:
            ConfigurationError: If 'keys' is missing or any value is invalid
        """
        if ProcessingDefaults.KEYS_CONFIG not in props:
            raise ConfigurationError(
                f"Missing required configuration \"{ProcessingDefaults.KEYS_CONFIG}\" which has no default value."
            )
        return cls(
            path_expressions=props[ProcessingDefaults.KEYS_CONFIG],
            delimiter=props.get(ProcessingDefaults.KEYS_DELIMITER_CONFIG, ProcessingDefaults.KEYS_DELIMITER),
            xml_data_key=props.get(ProcessingDefaults.XML_MAP_KEY_CONFIG, ProcessingDefaults.XML_MAP_KEY)
        )
    
    @classmethod
    def from_environment(cls) -> 'TransformConfig':
        """Create configuration from XML_TRANSFORMER_* environment variables."""
        return cls(
            path_expressions=os.environ.get('XML_TRANSFORMER_KEYS', ''),
            delimiter=os.environ.get('XML_TRANSFORMER_KEYS_DELIMITER_REGEX', ProcessingDefaults.KEYS_DELIMITER),
            xml_data_key=os.environ.get('XML_TRANSFORMER_XML_MAP_KEY', ProcessingDefaults.XML_MAP_KEY)
        )
    
    def to_properties(self) -> Dict[str, Any]:
        """Return the configuration as host properties."""
        return {
            ProcessingDefaults.KEYS_CONFIG: list(self.path_expressions),
            ProcessingDefaults.KEYS_DELIMITER_CONFIG: self.delimiter,
            ProcessingDefaults.XML_MAP_KEY_CONFIG: self.xml_data_key
        }


class ConfigManager:
    """
    Loads transform configuration from files and the environment.

    Configuration files are JSON or YAML documents holding the three
    properties at the top level. Loaded files are cached by path.
    """
    
    def __init__(self, base_config_path: Optional[Union[str, Path]] = None):
        """
        Initialize the configuration manager.
        
        Args:
            base_config_path: Base path for relative configuration file paths.
                If None, uses XML_TRANSFORMER_CONFIG_PATH or the current directory.
        """
        self.logger = logging.getLogger(__name__)
        if base_config_path is None:
            base_config_path = os.environ.get('XML_TRANSFORMER_CONFIG_PATH', Path.cwd())
        self.base_config_path = Path(base_config_path)
        self._config_cache: Dict[str, TransformConfig] = {}
        
        self.logger.debug(f"ConfigManager initialized with base path: {self.base_config_path}")
    
    def load_transform_config(self, config_path: Union[str, Path]) -> TransformConfig:
        """
        Load transform configuration from a JSON or YAML file, with caching.
        
        Args:
            config_path: Path to the configuration file, relative to the base path or absolute
            
        Returns:
            Validated TransformConfig
            
        Raises:
            ConfigurationError: If the file is missing, unreadable, of an unsupported
                format, or holds an invalid configuration
        """
        cache_key = str(config_path)
        if cache_key in self._config_cache:
            self.logger.debug(f"Returning cached transform config for {cache_key}")
            return self._config_cache[cache_key]
        
        full_path = self.base_config_path / config_path
        if not full_path.exists():
            raise ConfigurationError(f"Configuration file not found: {full_path}")
        
        suffix = full_path.suffix.lower()
        if suffix not in ('.json', '.yaml', '.yml'):
            raise ConfigurationError(f"Unsupported file format: {full_path.suffix}")
        
        try:
            with open(full_path, 'r', encoding='utf-8') as file:
                if suffix == '.json':
                    config_data = json.load(file)
                else:
                    config_data = yaml.safe_load(file)
        except (json.JSONDecodeError, yaml.YAMLError) as e:
            raise ConfigurationError(f"Failed to parse configuration file {full_path}: {e}")
        except OSError as e:
            raise ConfigurationError(f"Failed to read configuration file {full_path}: {e}")
        
        if not isinstance(config_data, dict):
            raise ConfigurationError(f"Configuration file {full_path} must contain a mapping")
        
        config = TransformConfig.from_properties(config_data)
        self._config_cache[cache_key] = config
        
        self.logger.info(f"Loaded transform config from {full_path}")
        return config
    
    def get_transform_config(self, config_path: Optional[Union[str, Path]] = None) -> TransformConfig:
        """
        Get transform configuration from a file, falling back to the environment.
        
        Args:
            config_path: Optional configuration file. If None, XML_TRANSFORMER_CONFIG_FILE
                is used when set, otherwise the XML_TRANSFORMER_* variables.
        """
        config_path = config_path or os.environ.get('XML_TRANSFORMER_CONFIG_FILE')
        if config_path:
            return self.load_transform_config(config_path)
        return TransformConfig.from_environment()
    
    def get_configuration_summary(self, config: TransformConfig) -> Dict[str, Any]:
        """
        Summarize a configuration for logging.
        
        Returns:
            Dictionary containing configuration summary
        """
        return {
            'base_config_path': str(self.base_config_path),
            'path_expressions': list(config.path_expressions),
            'path_expression_count': len(config.path_expressions),
            'delimiter': config.delimiter,
            'xml_data_key': config.xml_data_key
        }
    
    def clear_cache(self) -> None:
        """Clear all cached configurations."""
        self._config_cache.clear()
        self.logger.info("Configuration cache cleared")


# Global configuration manager instance
_global_config_manager: Optional[ConfigManager] = None


def get_config_manager(base_config_path: Optional[Union[str, Path]] = None) -> ConfigManager:
    """
    Get the global configuration manager instance.
    
    Args:
        base_config_path: Base path for configuration files. Only used on first call.
        
    Returns:
        Global ConfigManager instance
    """
    global _global_config_manager
    
    if _global_config_manager is None:
        _global_config_manager = ConfigManager(base_config_path)
    
    return _global_config_manager


def reset_config_manager() -> None:
    """Reset the global configuration manager instance."""
    global _global_config_manager
    _global_config_manager = None
