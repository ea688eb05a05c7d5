"""
Abstract interfaces for the XML-to-JSON record transform.

This module defines the contracts between the extraction engine and its
collaborators so that parsers, record accessors and batch processors can be
swapped independently.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Tuple

from .models import ProcessingResult, Record


class XMLParserInterface(ABC):
    """Abstract interface for XML-to-tree parsing components."""
    
    @abstractmethod
    def parse_to_tree(self, xml_content: str) -> Any:
        """
        Parse XML content into a document tree of dicts, lists and strings.
        
        Args:
            xml_content: Raw XML content as string
            
        Returns:
            Document tree rooted at a single-key mapping for the root element
            
        Raises:
            XMLParsingError: If XML is malformed or cannot be parsed
        """
        pass


class RecordAccessorInterface(ABC):
    """Reads the XML payload from one slot of a record and writes the result back to it."""
    
    @abstractmethod
    def operating_value(self, record: Record) -> Any:
        """
        Return the payload the transform operates on.
        
        Args:
            record: Incoming record
            
        Returns:
            The raw payload held in this accessor's slot
        """
        pass
    
    @abstractmethod
    def new_record(self, record: Record, updated_schema: Any, updated_value: Any) -> Record:
        """
        Build a new record with the updated payload installed in this accessor's slot.
        
        Args:
            record: Original record
            updated_schema: Schema for the updated slot
            updated_value: Value for the updated slot
            
        Returns:
            New record; the other slot, topic, partition and timestamp are unchanged
        """
        pass


class BatchProcessorInterface(ABC):
    """Abstract interface for batch XML processing strategies."""
    
    @abstractmethod
    def process_documents(self, documents: List[Tuple[str, str]]) -> ProcessingResult:
        """
        Transform a batch of XML documents.
        
        Args:
            documents: List of (source_id, xml_content) tuples to process
            
        Returns:
            ProcessingResult with metrics and output maps
        """
        pass
