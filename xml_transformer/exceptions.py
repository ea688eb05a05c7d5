"""
Custom exceptions for the XML-to-JSON record transform.

Only two conditions ever surface to the caller: an XML payload that cannot be
parsed, and a transform that is configured incorrectly. Everything else
(missing paths, regexes that match nothing, malformed path expressions) is
resolved to an empty result instead of an error.
"""


class XMLTransformError(Exception):
    """Base exception for all XML transform related errors."""
    
    def __init__(self, message: str, source_record_id: str = None):
        """
        Initialize XML transform error.
        
        Args:
            message: Error description
            source_record_id: Optional identifier of the source record that caused the error
        """
        super().__init__(message)
        self.source_record_id = source_record_id


class XMLParsingError(XMLTransformError, ValueError):
    """
    Raised when an XML payload cannot be turned into a document tree.

    Subclasses ValueError: a payload that does not parse is a bad argument to
    the transform, and hosts that only know about ValueError still catch it.
    """
    
    def __init__(self, message: str, xml_content=None, source_record_id: str = None):
        """
        Initialize XML parsing error.
        
        Args:
            message: Error description (the underlying parser's message)
            xml_content: Optional payload that failed to parse (truncated for logging)
            source_record_id: Optional identifier of the source record
        """
        super().__init__(message, source_record_id)
        if isinstance(xml_content, str) and len(xml_content) > 500:
            xml_content = xml_content[:500] + "..."
        self.xml_content = xml_content


class ConfigurationError(XMLTransformError):
    """Exception raised when transform configuration is invalid or missing."""
    pass
