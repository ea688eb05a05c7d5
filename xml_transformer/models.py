"""
Core data models for the XML-to-JSON record transform.

This module defines the document-node tagging used by navigation and
post-processing, the parsed path specification, the host record envelope and
the batch processing result.
"""

import re
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Dict, List, Optional


class NodeKind(Enum):
    """Variants of a document tree node."""
    MAPPING = "mapping"
    SEQUENCE = "sequence"
    SCALAR = "scalar"
    EMPTY = "empty"


def node_kind(node: Any) -> NodeKind:
    """
    Classify a document tree node.

    Trees are plain dicts, lists and strings so that output maps serialize to
    JSON directly. An empty dict is the not-found sentinel and is reported as
    EMPTY, as is None. Non-string leaves (numbers, booleans) count as scalars.
    """
    if node is None:
        return NodeKind.EMPTY
    if isinstance(node, dict):
        return NodeKind.MAPPING if node else NodeKind.EMPTY
    if isinstance(node, list):
        return NodeKind.SEQUENCE
    return NodeKind.SCALAR


@dataclass(frozen=True)
class PathSpec:
    """
    Parsed form of one configured path expression.

    Attributes:
        expression: The configured string this spec was parsed from
        lookup_path: Delimiter-separated field names locating the value in the tree
        output_id: Key under which the result is stored in the output map
        filter_pattern: Optional whole-string filter applied to list values
        extract_pattern: Optional substring pattern applied to string list values
    """
    expression: str
    lookup_path: str
    output_id: str
    filter_pattern: Optional[re.Pattern] = None
    extract_pattern: Optional[re.Pattern] = None


class RecordSlot(Enum):
    """Which side of a record carries the XML payload."""
    KEY = "key"
    VALUE = "value"


@dataclass(frozen=True)
class Record:
    """
    Minimal message record envelope as seen by the transform.

    Attributes:
        topic: Topic the record belongs to
        kafka_partition: Partition number, if known
        key_schema: Schema describing the key, if any
        key: Record key
        value_schema: Schema describing the value, if any
        value: Record value
        timestamp: Record timestamp in epoch milliseconds, if any
    """
    topic: Optional[str] = None
    kafka_partition: Optional[int] = None
    key_schema: Any = None
    key: Any = None
    value_schema: Any = None
    value: Any = None
    timestamp: Optional[int] = None

    def new_record(self, **changes) -> 'Record':
        """Return a copy of this record with the given fields replaced."""
        return replace(self, **changes)


@dataclass
class ProcessingResult:
    """
    Results from a batch processing operation.
    
    Attributes:
        records_processed: Total number of documents processed
        records_successful: Number of documents converted to output maps
        records_failed: Number of documents that failed to parse
        processing_time_seconds: Total processing time
        errors: List of error messages encountered
        outputs: Output maps of the successful documents, in input order
        performance_metrics: Dictionary of performance metrics
    """
    records_processed: int = 0
    records_successful: int = 0
    records_failed: int = 0
    processing_time_seconds: float = 0.0
    errors: List[str] = field(default_factory=list)
    outputs: List[Dict[str, Any]] = field(default_factory=list)
    performance_metrics: Dict[str, Any] = field(default_factory=dict)
    
    @property
    def success_rate(self) -> float:
        """Calculate the success rate as a percentage."""
        if self.records_processed == 0:
            return 0.0
        return (self.records_successful / self.records_processed) * 100.0
