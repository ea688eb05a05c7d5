"""
Extraction pipeline: XML payload in, flat output map out.

For each document the pipeline strips the XML prolog, parses the rest into a
document tree and evaluates every configured path expression against it in
configuration order. The output map holds one entry per output id (a later
expression wins over an earlier one with the same id), the original payload
and a creation timestamp.
"""

import logging
import re
from datetime import datetime
from typing import Any, Dict, Iterable, Optional, Tuple

from ..config.processing_defaults import ProcessingDefaults
from ..exceptions import ConfigurationError, XMLParsingError
from ..interfaces import XMLParserInterface
from ..models import PathSpec
from ..parsing.path_spec_parser import parse_path_expressions
from ..parsing.xml_parser import XMLParser
from .path_navigator import navigate
from .value_processor import post_process


HEADER_PATTERN = re.compile(ProcessingDefaults.HEADER_REGEX)


class ExtractionPipeline:
    """
    Converts XML payloads into output maps for a fixed set of path expressions.

    Path expressions and the delimiter are parsed and compiled once, here.
    Nothing is mutated by transform(), so one pipeline can serve concurrent
    callers.
    """
    
    def __init__(self,
                 path_expressions: Iterable[str],
                 delimiter: str = ProcessingDefaults.KEYS_DELIMITER,
                 xml_data_key: str = ProcessingDefaults.XML_MAP_KEY,
                 parser: Optional[XMLParserInterface] = None):
        """
        Initialize the pipeline.
        
        Args:
            path_expressions: Configured path expressions, evaluated in order
            delimiter: Regex separating field names in lookup paths
            xml_data_key: Output map key holding the original XML payload
            parser: XML-to-tree parser; defaults to the lxml-based XMLParser
            
        Raises:
            ConfigurationError: If the delimiter is not a valid regex
        """
        self.logger = logging.getLogger(__name__)
        self.path_specs: Tuple[PathSpec, ...] = tuple(parse_path_expressions(path_expressions))
        try:
            self.delimiter = re.compile(delimiter)
        except re.error as e:
            raise ConfigurationError(f"Invalid key delimiter regex {delimiter!r}: {e}")
        self.xml_data_key = xml_data_key
        self.parser = parser or XMLParser()
        
        self.logger.debug(f"ExtractionPipeline initialized with {len(self.path_specs)} path expressions")
    
    @classmethod
    def from_config(cls, config, parser: Optional[XMLParserInterface] = None) -> 'ExtractionPipeline':
        """Build a pipeline from a TransformConfig."""
        return cls(
            path_expressions=config.path_expressions,
            delimiter=config.delimiter,
            xml_data_key=config.xml_data_key,
            parser=parser
        )
    
    def transform(self, raw_xml: Any) -> Dict[str, Any]:
        """
        Convert one XML payload into an output map.
        
        Args:
            raw_xml: XML payload
            
        Returns:
            Output map with one entry per output id, the original payload and "created"
            
        Raises:
            XMLParsingError: If the payload is not a string or cannot be parsed
        """
        tree = self.parse_document(raw_xml)
        
        output: Dict[str, Any] = {}
        for spec in self.path_specs:
            output[spec.output_id] = self.extract(tree, spec)
        output[self.xml_data_key] = raw_xml
        output[ProcessingDefaults.CREATED_KEY] = datetime.now().strftime(ProcessingDefaults.CREATED_FORMAT)
        
        return output
    
    def extract(self, tree: Any, spec: PathSpec) -> Any:
        """Navigate to one path expression's value and post-process it."""
        value = navigate(tree, spec.lookup_path, self.delimiter)
        return post_process(value, spec.filter_pattern, spec.extract_pattern)
    
    def parse_document(self, raw_xml: Any) -> Any:
        """
        Strip the XML prolog and parse the payload into a document tree.
        
        Raises:
            XMLParsingError: For any failure of the parser, with the parser's message
        """
        if not isinstance(raw_xml, str):
            raise XMLParsingError(f"XML payload must be a string, got {type(raw_xml).__name__}")
        
        data = HEADER_PATTERN.sub('', raw_xml)
        try:
            return self.parser.parse_to_tree(data)
        except XMLParsingError:
            raise
        except Exception as e:
            self.logger.error(f"XML parser failed: {e}")
            raise XMLParsingError(str(e), raw_xml) from e


def transform(raw_xml: Any,
              path_expressions: Iterable[str],
              delimiter: str = ProcessingDefaults.KEYS_DELIMITER,
              raw_payload_key: str = ProcessingDefaults.XML_MAP_KEY) -> Dict[str, Any]:
    """
    Convert one XML payload without keeping a pipeline around.
    
    Args:
        raw_xml: XML payload
        path_expressions: Path expressions, evaluated in order
        delimiter: Regex separating field names in lookup paths
        raw_payload_key: Output map key holding the original XML payload
        
    Returns:
        Output map
    """
    return ExtractionPipeline(path_expressions, delimiter, raw_payload_key).transform(raw_xml)
