"""
Parser for configured path expressions.

A path expression names where a value lives in the document tree and how to
post-process it:

    lookup.path[<alias>][<filter-regex>][<extract-regex>]

The bracket groups are positional. The first is the output alias, the second
a whole-string filter and the third a substring extract pattern, so a filter
can only be given after an alias. Parsing never fails: missing groups fall
back to defaults and a regex that does not compile is dropped with a warning.
"""

import logging
import re
from typing import Iterable, List, Optional

from ..models import PathSpec


logger = logging.getLogger(__name__)

PATH_EXPRESSION_PATTERN = re.compile(r"(^[^<]*)(?:<([^>]+)>)?(?:<([^>]+)>)?(?:<([^>]+)>)?")


def parse_path_expression(expression: str) -> PathSpec:
    """
    Parse one path expression into a PathSpec.
    
    Args:
        expression: Configured path expression string
        
    Returns:
        PathSpec whose output_id falls back to the lookup path when no alias is given
    """
    match = PATH_EXPRESSION_PATTERN.match(expression)
    if match is None:
        return PathSpec(expression=expression, lookup_path=expression, output_id=expression)
    
    lookup_path, alias, filter_regex, extract_regex = match.groups()
    
    return PathSpec(
        expression=expression,
        lookup_path=lookup_path,
        output_id=alias or lookup_path,
        filter_pattern=_compile_optional(filter_regex, expression, "filter"),
        extract_pattern=_compile_optional(extract_regex, expression, "extract")
    )


def parse_path_expressions(expressions: Iterable[str]) -> List[PathSpec]:
    """Parse configured path expressions, preserving their order."""
    return [parse_path_expression(expression) for expression in expressions]


def _compile_optional(regex: Optional[str], expression: str, role: str) -> Optional[re.Pattern]:
    if regex is None:
        return None
    try:
        return re.compile(regex)
    except re.error as e:
        logger.warning(f"Ignoring invalid {role} regex {regex!r} in path expression {expression!r}: {e}")
        return None
