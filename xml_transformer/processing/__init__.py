"""Record-level and batch processing components."""

from .record_transform import XmlToJson, KeySlotAccessor, ValueSlotAccessor, accessor_for
from .sequential_processor import SequentialProcessor

__all__ = ['XmlToJson', 'KeySlotAccessor', 'ValueSlotAccessor', 'accessor_for', 'SequentialProcessor']
