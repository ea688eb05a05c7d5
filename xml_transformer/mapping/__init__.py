"""Path navigation, value post-processing and the extraction pipeline."""

from .path_navigator import navigate, split_lookup_path
from .value_processor import post_process, filter_values, extract_values, unique_in_order
from .extraction_pipeline import ExtractionPipeline, transform

__all__ = [
    'navigate',
    'split_lookup_path',
    'post_process',
    'filter_values',
    'extract_values',
    'unique_in_order',
    'ExtractionPipeline',
    'transform'
]
