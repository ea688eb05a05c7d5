"""
Walks a document tree along a delimiter-separated lookup path.

Navigation never raises. Whenever a step cannot be taken (missing key, or a
scalar where a mapping was expected) the walk stops and a fresh empty dict is
returned as the not-found result.
"""

import re
from typing import Any, List, Union

from ..models import NodeKind, node_kind


def split_lookup_path(lookup_path: str, delimiter: Union[str, re.Pattern]) -> List[str]:
    """
    Split a lookup path on a delimiter regex.

    Trailing empty field names are discarded and a zero-width match at the
    start does not produce a leading empty name. Interior empty names
    (consecutive delimiters) are kept and looked up literally. A path with no
    delimiter match is returned whole.

    Args:
        lookup_path: Path such as "Customers.Customer.ContactName"
        delimiter: Regex (string or compiled) separating field names
        
    Returns:
        Ordered list of field names
    """
    pattern = re.compile(delimiter)
    parts = []
    start = 0
    for match in pattern.finditer(lookup_path):
        if match.end() == 0:
            continue
        parts.append(lookup_path[start:match.start()])
        start = match.end()
    
    if not parts:
        return [lookup_path]
    
    parts.append(lookup_path[start:])
    while parts and parts[-1] == '':
        parts.pop()
    return parts


def navigate(tree: Any, lookup_path: str, delimiter: Union[str, re.Pattern]) -> Any:
    """
    Locate the value at lookup_path in tree.

    A step applied to a list is projected over every dict element of the list,
    skipping non-dict elements and elements without the field. The projection
    goes one level deep: lists found inside the elements are kept as elements.
    
    Args:
        tree: Document tree (dicts, lists, strings)
        lookup_path: Delimiter-separated field names
        delimiter: Regex separating the field names
        
    Returns:
        The located value, a list when the path fanned out over a list, or an
        empty dict when any step is missing
    """
    current = tree
    for field_name in split_lookup_path(lookup_path, delimiter):
        kind = node_kind(current)
        if kind is NodeKind.SEQUENCE:
            current = [
                element[field_name]
                for element in current
                if node_kind(element) is NodeKind.MAPPING and element.get(field_name) is not None
            ]
        elif kind is NodeKind.MAPPING:
            current = current.get(field_name)
            if current is None:
                return {}
        else:
            return {}
    return current
