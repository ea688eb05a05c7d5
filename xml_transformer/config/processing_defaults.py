"""
Centralized configuration defaults for the XML-to-JSON transform.

These values are used when a host, environment or config file does not
override them. CLI arguments can override these defaults at runtime.
"""


class ProcessingDefaults:
    """
    Centralized operational configuration for the transform.
    
    All values are defaults that can be overridden via configuration:
    - xml_transformer --delimiter '\\.' --xml-map-key blob
    - xml_transformer --log-level DEBUG
    """
    
    # Configuration property names understood by the transform
    KEYS_CONFIG = "keys"
    KEYS_DELIMITER_CONFIG = "keys.delimiter.regex"
    XML_MAP_KEY_CONFIG = "xml.map.key"
    
    # Path navigation
    KEYS_DELIMITER = "."  # Regex used to split lookup paths
    
    # Output map
    XML_MAP_KEY = "_xml_data_"  # Key holding the original XML payload
    CREATED_KEY = "created"
    CREATED_FORMAT = "%Y-%m-%d %H:%M:%S"
    
    # XML prolog removed before parsing
    HEADER_REGEX = r"<\?xml[^>]*\?>"
    
    # Logging
    LOG_LEVEL = "WARNING"  # Default logging level (CRITICAL, ERROR, WARNING, INFO, DEBUG)
    
    @classmethod
    def to_dict(cls) -> dict:
        """
        Export all defaults as a dictionary.
        
        Returns:
            Dictionary of all ProcessingDefaults class attributes.
        """
        return {
            key: getattr(cls, key)
            for key in dir(cls)
            if not key.startswith('_') and key.isupper()
        }
    
    @classmethod
    def log_summary(cls, logger=None):
        """
        Log a summary of all operational defaults.
        
        Args:
            logger: Optional logger instance. If None, prints to stdout.
        """
        config_dict = cls.to_dict()
        summary = "\n".join([f"  {key}: {value}" for key, value in sorted(config_dict.items())])
        message = f"Processing Configuration Defaults:\n{summary}"
        
        if logger:
            logger.info(message)
        else:
            print(message)
