"""
Per-record transform for message pipelines.

XmlToJson reads an XML payload from either the key or the value of a record,
converts it with the extraction pipeline and returns a new record with the
output map installed in the same slot. The other slot, topic, partition and
timestamp are carried over unchanged.
"""

import logging
from typing import Any, Mapping, Optional, Tuple, Union

from ..config.config_manager import CONFIG_DEF, ConfigOption, TransformConfig
from ..exceptions import ConfigurationError
from ..interfaces import RecordAccessorInterface
from ..mapping.extraction_pipeline import ExtractionPipeline
from ..models import Record, RecordSlot


class KeySlotAccessor(RecordAccessorInterface):
    """Operates on the record key."""
    
    def operating_value(self, record: Record) -> Any:
        return record.key
    
    def new_record(self, record: Record, updated_schema: Any, updated_value: Any) -> Record:
        return record.new_record(key_schema=updated_schema, key=updated_value)


class ValueSlotAccessor(RecordAccessorInterface):
    """Operates on the record value."""
    
    def operating_value(self, record: Record) -> Any:
        return record.value
    
    def new_record(self, record: Record, updated_schema: Any, updated_value: Any) -> Record:
        return record.new_record(value_schema=updated_schema, value=updated_value)


_ACCESSORS = {
    RecordSlot.KEY: KeySlotAccessor(),
    RecordSlot.VALUE: ValueSlotAccessor()
}


def accessor_for(slot: Union[RecordSlot, str]) -> RecordAccessorInterface:
    """Return the accessor for a record slot ("key" or "value")."""
    return _ACCESSORS[RecordSlot(slot)]


class XmlToJson:
    """
    Generate a JSON-ready map from an XML blob using configured XML field keys.

    Usage:
        xform = XmlToJson(RecordSlot.VALUE)
        xform.configure({"keys": ["Customers.Customer.ContactName<ContactName>"],
                         "keys.delimiter.regex": "\\\\.",
                         "xml.map.key": "blob"})
        new_record = xform.apply(record)

    A configured instance holds only immutable state and may be shared by
    worker threads.
    """
    
    OVERVIEW_DOC = "Generate JSON from an XML blob using configured XML field keys"
    PURPOSE = "extracting and converting xml payload to JSON"
    
    def __init__(self, slot: Union[RecordSlot, str] = RecordSlot.VALUE):
        """
        Initialize the transform.
        
        Args:
            slot: Record slot holding the XML payload and receiving the output map
        """
        self.logger = logging.getLogger(__name__)
        self.slot = RecordSlot(slot)
        self.accessor = accessor_for(self.slot)
        self.transform_config: Optional[TransformConfig] = None
        self.pipeline: Optional[ExtractionPipeline] = None
    
    def config(self) -> Tuple[ConfigOption, ...]:
        """Return the configuration definition the host validates properties against."""
        return CONFIG_DEF
    
    def configure(self, props: Mapping[str, Any]) -> None:
        """
        Initialize the transform with the provided configuration.
        
        Raises:
            ConfigurationError: If the properties are missing or invalid
        """
        self.transform_config = TransformConfig.from_properties(props)
        self.pipeline = ExtractionPipeline.from_config(self.transform_config)
        self.logger.info(
            f"XmlToJson configured on record {self.slot.value} with "
            f"{len(self.transform_config.path_expressions)} path expressions"
        )
    
    def operating_value(self, record: Record) -> Any:
        """Return the payload this transform reads from the record."""
        return self.accessor.operating_value(record)
    
    def apply(self, record: Record) -> Record:
        """
        Transform one record.
        
        Returns:
            New record with the output map (and no schema) in the configured slot
            
        Raises:
            ConfigurationError: If configure() has not been called
            XMLParsingError: If the payload is not parseable XML
        """
        if self.pipeline is None:
            raise ConfigurationError(f"XmlToJson must be configured before {self.PURPOSE}")
        
        output = self.pipeline.transform(self.operating_value(record))
        return self.accessor.new_record(record, None, output)
    
    def close(self) -> None:
        """Called when the transform is no longer needed. No resources are held."""
        pass
