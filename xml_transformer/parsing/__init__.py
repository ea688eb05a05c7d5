"""XML parsing and path expression parsing components."""

from .xml_parser import XMLParser
from .path_spec_parser import parse_path_expression, parse_path_expressions

__all__ = ['XMLParser', 'parse_path_expression', 'parse_path_expressions']
