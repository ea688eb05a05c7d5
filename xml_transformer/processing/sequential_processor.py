"""
Sequential XML Processor - single-threaded conversion of a batch of documents.

Used by the CLI to convert files. A document that fails to parse is recorded
in the result and the rest of the batch is still processed.
"""

import logging
import time
from typing import List, Tuple

import psutil

from ..exceptions import XMLParsingError
from ..interfaces import BatchProcessorInterface
from ..mapping.extraction_pipeline import ExtractionPipeline
from ..models import ProcessingResult


class SequentialProcessor(BatchProcessorInterface):
    """
    Converts XML documents one at a time in the current process.

    Besides counts and timing, the result's performance_metrics report the
    peak resident memory of the process observed during the batch.
    """
    
    def __init__(self, pipeline: ExtractionPipeline):
        """
        Initialize the sequential processor.
        
        Args:
            pipeline: Configured extraction pipeline applied to every document
        """
        self.logger = logging.getLogger(__name__)
        self.pipeline = pipeline
        self._process = psutil.Process()
    
    def process_documents(self, documents: List[Tuple[str, str]]) -> ProcessingResult:
        """
        Convert a batch of XML documents.
        
        Args:
            documents: List of (source_id, xml_content) tuples
            
        Returns:
            ProcessingResult with output maps of the successful documents
        """
        result = ProcessingResult()
        if not documents:
            return result
        
        start_time = time.time()
        peak_memory = self._process.memory_info().rss
        self.logger.info(f"Starting sequential processing of {len(documents)} XML documents")
        
        for sequence, (source_id, xml_content) in enumerate(documents, 1):
            result.records_processed += 1
            try:
                output = self.pipeline.transform(xml_content)
            except XMLParsingError as e:
                self.logger.warning(f"Sequence {sequence}, Source {source_id}: XML parsing failed: {e}")
                result.errors.append(f"{source_id}: {e}")
                result.records_failed += 1
                continue
            
            result.outputs.append(output)
            result.records_successful += 1
            peak_memory = max(peak_memory, self._process.memory_info().rss)
            self.logger.debug(f"Sequence {sequence}, Source {source_id}: converted ({len(output)} keys)")
        
        result.processing_time_seconds = time.time() - start_time
        result.performance_metrics = {
            'peak_memory_mb': round(peak_memory / (1024 * 1024), 2),
            'records_per_second': (
                result.records_processed / result.processing_time_seconds
                if result.processing_time_seconds > 0 else 0.0
            )
        }
        
        self.logger.info(
            f"Sequential processing complete - "
            f"Success: {result.records_successful}, Failed: {result.records_failed}, "
            f"Time: {result.processing_time_seconds:.2f}s"
        )
        
        return result
