"""
Post-processing of navigated values: filter, then extract, then deduplicate.

Filtering keeps list entries that match the filter regex as a whole string.
Extraction replaces each entry with the first substring matching the extract
regex. Both only apply to lists and both return new lists, leaving the input
untouched. Values that are not lists pass through unchanged.
"""

import re
from typing import Any, Iterable, List, Optional, Union

from ..models import NodeKind, node_kind


PatternLike = Union[str, re.Pattern]


def unique_in_order(values: Iterable[str]) -> List[str]:
    """Drop repeated values, keeping the first occurrence of each."""
    return list(dict.fromkeys(values))


def filter_values(values: List[Any], filter_pattern: PatternLike) -> List[str]:
    """
    Keep the string entries that fully match filter_pattern.
    
    Args:
        values: List of navigated values
        filter_pattern: Regex that must match an entry from start to end
        
    Returns:
        New deduplicated list of matching strings
    """
    pattern = re.compile(filter_pattern)
    return unique_in_order(
        value for value in values
        if isinstance(value, str) and pattern.fullmatch(value)
    )


def extract_values(values: List[str], extract_pattern: PatternLike) -> List[str]:
    """
    Replace each string with the first match of extract_pattern found in it.
    
    Args:
        values: List of strings
        extract_pattern: Regex searched anywhere in each string
        
    Returns:
        New deduplicated list of matched substrings; strings without a match are dropped
    """
    pattern = re.compile(extract_pattern)
    matches = (pattern.search(value) for value in values)
    return unique_in_order(match.group() for match in matches if match is not None)


def post_process(value: Any,
                 filter_pattern: Optional[PatternLike] = None,
                 extract_pattern: Optional[PatternLike] = None) -> Any:
    """
    Apply the optional filter and extract steps to a navigated value.
    
    Args:
        value: Result of path navigation
        filter_pattern: Optional whole-string filter for list values
        extract_pattern: Optional substring pattern for lists made only of strings
        
    Returns:
        Processed value
    """
    if filter_pattern is not None and node_kind(value) is NodeKind.SEQUENCE:
        value = filter_values(value, filter_pattern)
    
    if (extract_pattern is not None
            and node_kind(value) is NodeKind.SEQUENCE
            and all(isinstance(item, str) for item in value)):
        value = extract_values(value, extract_pattern)
    
    return value
