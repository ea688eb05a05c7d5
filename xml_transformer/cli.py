"""
Command-line interface for the XML-to-JSON transform.

Converts XML files (or standard input) into JSON Lines, one output map per
document, using path expressions given on the command line, in a JSON/YAML
configuration file, or in XML_TRANSFORMER_* environment variables.
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional, Tuple

from .config.config_manager import TransformConfig, get_config_manager
from .config.processing_defaults import ProcessingDefaults
from .exceptions import ConfigurationError
from .mapping.extraction_pipeline import ExtractionPipeline
from .processing.sequential_processor import SequentialProcessor


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the xml_transformer command."""
    parser = argparse.ArgumentParser(description="Convert XML documents into flat JSON maps")
    parser.add_argument("files", nargs="*",
                        help="XML files to convert (reads one document from stdin when omitted)")
    parser.add_argument("--keys", action="append",
                        help="Path expression to extract; repeat for several "
                             "(format: '<key-path>[<alias>][<filter-regex>][<extract-regex>]')")
    parser.add_argument("--delimiter", default=None,
                        help=f"Regex separating nested key names (default: '{ProcessingDefaults.KEYS_DELIMITER}')")
    parser.add_argument("--xml-map-key", default=None,
                        help=f"Output key holding the original XML (default: '{ProcessingDefaults.XML_MAP_KEY}')")
    parser.add_argument("--config", help="JSON or YAML file with keys / keys.delimiter.regex / xml.map.key")
    parser.add_argument("--output", help="Write JSON Lines to this file instead of stdout")
    parser.add_argument("--log-level", default=ProcessingDefaults.LOG_LEVEL,
                        choices=["CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"],
                        help="Logging level")
    return parser


def resolve_config(args: argparse.Namespace) -> TransformConfig:
    """
    Combine the configuration file (or environment) with command-line overrides.
    
    Raises:
        ConfigurationError: If no path expressions are configured or a value is invalid
    """
    if args.keys:
        base = {ProcessingDefaults.KEYS_CONFIG: args.keys}
        if args.config:
            base = {**get_config_manager().load_transform_config(args.config).to_properties(), **base}
    else:
        base = get_config_manager().get_transform_config(args.config).to_properties()
    
    if args.delimiter is not None:
        base[ProcessingDefaults.KEYS_DELIMITER_CONFIG] = args.delimiter
    if args.xml_map_key is not None:
        base[ProcessingDefaults.XML_MAP_KEY_CONFIG] = args.xml_map_key
    
    return TransformConfig.from_properties(base)


def read_documents(files: List[str]) -> Tuple[List[Tuple[str, str]], List[str]]:
    """
    Read (source_id, xml_content) pairs from files, or from stdin when no files are given.
    
    Returns:
        Tuple of the documents read and the errors of files that could not be read
    """
    if not files:
        return [("<stdin>", sys.stdin.read())], []
    
    documents, errors = [], []
    for path in files:
        try:
            documents.append((path, Path(path).read_text(encoding='utf-8')))
        except (OSError, UnicodeDecodeError) as e:
            errors.append(f"{path}: {e}")
    return documents, errors


def main(args: Optional[list] = None) -> int:
    """
    Main entry point for the CLI application.
    
    Args:
        args: Optional command line arguments (defaults to sys.argv)
        
    Returns:
        Exit code (0 when every document converted, 1 otherwise)
    """
    if args is None:
        args = sys.argv[1:]
    options = build_parser().parse_args(args)
    
    # Set up logging without reconfiguring root if already configured
    root_logger = logging.getLogger()
    if not root_logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s'))
        root_logger.addHandler(handler)
        root_logger.setLevel(getattr(logging, options.log_level))
    logging.getLogger('xml_transformer').setLevel(getattr(logging, options.log_level))
    logger = logging.getLogger(__name__)
    
    if options.log_level == "DEBUG":
        ProcessingDefaults.log_summary(logger)
    
    try:
        config = resolve_config(options)
    except ConfigurationError as e:
        logger.error(f"Failed to start conversion: {e}")
        return 1
    
    logger.info(f"Configuration: {get_config_manager().get_configuration_summary(config)}")
    pipeline = ExtractionPipeline.from_config(config)
    documents, read_errors = read_documents(options.files)
    result = SequentialProcessor(pipeline).process_documents(documents)
    
    lines = [json.dumps(output, ensure_ascii=False) for output in result.outputs]
    if options.output:
        Path(options.output).write_text(''.join(line + '\n' for line in lines), encoding='utf-8')
    else:
        for line in lines:
            sys.stdout.write(line + '\n')
    
    for error in read_errors + result.errors:
        logger.error(error)
    logger.info(f"Converted {result.records_successful} of {result.records_processed + len(read_errors)} documents "
                f"({len(read_errors)} unreadable)")
    
    return 0 if result.records_failed == 0 and not read_errors else 1


if __name__ == "__main__":
    sys.exit(main())
