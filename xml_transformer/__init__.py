"""
XML-to-JSON Record Transform

Converts semi-structured XML payloads into flat key/value maps ready for JSON
serialization, selecting nested values with a small path-expression language
that supports aliases, regex filtering and regex substring extraction.
"""

__version__ = "1.0.0"

# Import core models and components for easy access
from .models import (
    NodeKind,
    PathSpec,
    Record,
    RecordSlot,
    ProcessingResult,
    node_kind
)

from .interfaces import (
    XMLParserInterface,
    RecordAccessorInterface,
    BatchProcessorInterface
)

from .exceptions import (
    XMLTransformError,
    XMLParsingError,
    ConfigurationError
)

from .config import TransformConfig, ProcessingDefaults
from .parsing import XMLParser, parse_path_expression, parse_path_expressions
from .mapping import ExtractionPipeline, navigate, post_process, transform
from .processing import XmlToJson, SequentialProcessor

__all__ = [
    # Core models
    "NodeKind",
    "PathSpec",
    "Record",
    "RecordSlot",
    "ProcessingResult",
    "node_kind",
    
    # Interfaces
    "XMLParserInterface",
    "RecordAccessorInterface",
    "BatchProcessorInterface",
    
    # Exceptions
    "XMLTransformError",
    "XMLParsingError",
    "ConfigurationError",
    
    # Components
    "TransformConfig",
    "ProcessingDefaults",
    "XMLParser",
    "parse_path_expression",
    "parse_path_expressions",
    "ExtractionPipeline",
    "navigate",
    "post_process",
    "transform",
    "XmlToJson",
    "SequentialProcessor"
]
