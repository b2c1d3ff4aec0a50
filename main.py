#!/usr/bin/env python3
"""
Purchase Order Extraction System - Main Entry Point.

Command-line and programmatic access to the extraction engine. Each
input file is loaded by the InputHandler (PDF text layer or spreadsheet
grid), parsed into a ParseResult and written out as JSON.

Usage:
    Command Line:
        python main.py --input customer_po.pdf --output results.json
        python main.py --input ./orders/ --output ./outputs/results.json
        python main.py --input drawings.xlsx --mode drawings

    Python:
        from main import run_extraction
        results = run_extraction("customer_po.pdf")

Author: ML Engineering Team
Version: 1.0.0
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

# Add project root to path for imports
PROJECT_ROOT = Path(__file__).parent
sys.path.insert(0, str(PROJECT_ROOT))

# Import project modules
from config import ConfigurationManager
from po_extraction.utils.exceptions import ConfigurationError, InputError
from po_extraction.utils.logger import get_logger, setup_logger_from_config

MODES = ('po', 'drawings')


def parse_arguments(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """
    Parse command-line arguments.

    Returns:
        Parsed argument namespace.
    """
    parser = argparse.ArgumentParser(
        description="Purchase Order Extraction System",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    Process a single purchase order:
        python main.py --input customer_po.pdf --output results.json

    Process a directory:
        python main.py --input ./orders/ --output ./outputs/results.json

    Parse a drawing register:
        python main.py --input drawings.xlsx --mode drawings
        """
    )

    # Input/Output arguments
    parser.add_argument(
        "--input", "-i",
        type=str,
        required=True,
        help="Input file or directory containing purchase orders"
    )

    parser.add_argument(
        "--output", "-o",
        type=str,
        default="outputs/extraction_results.json",
        help="Output JSON file (default: outputs/extraction_results.json)"
    )

    # Processing options
    parser.add_argument(
        "--mode", "-m",
        choices=MODES,
        default="po",
        help="'po' for purchase orders, 'drawings' for drawing registers"
    )

    parser.add_argument(
        "--config", "-c",
        type=str,
        default=None,
        help="Path to custom configuration file"
    )

    parser.add_argument(
        "--recursive", "-r",
        action="store_true",
        help="Search input directories recursively"
    )

    # Logging options
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging"
    )

    parser.add_argument(
        "--quiet", "-q",
        action="store_true",
        help="Only log warnings and errors"
    )

    return parser.parse_args(argv)


def initialize_system(args: argparse.Namespace) -> ConfigurationManager:
    """
    Initialize the extraction system with configuration and logging.

    Args:
        args: Parsed command-line arguments.

    Returns:
        Initialized configuration manager.
    """
    # Load configuration
    ConfigurationManager.reset()
    config = ConfigurationManager(args.config)

    # Setup logging
    logger = setup_logger_from_config()

    level = None
    if args.debug:
        level = logging.DEBUG
    elif args.quiet:
        level = logging.WARNING
    if level is not None:
        logger.setLevel(level)
        for handler in logger.handlers:
            handler.setLevel(level)

    logger.info("=" * 60)
    logger.info("PURCHASE ORDER EXTRACTION SYSTEM")
    logger.info("=" * 60)
    logger.info(f"Version: {config.get('project.version', '1.0.0')}")
    logger.info(f"Input: {args.input}")
    logger.info(f"Output: {args.output}")
    logger.info(f"Mode: {args.mode}")

    return config


def collect_inputs(input_path: str, recursive: bool = False) -> List[Path]:
    """
    Resolve the input argument to the list of files to process.

    Raises:
        DocumentNotFoundError: If the input path does not exist.
        UnsupportedFileTypeError: If a single input file is not supported.
    """
    from po_extraction.input_handler import InputHandler

    handler = InputHandler()
    path = Path(input_path)
    if path.is_dir():
        return handler.collect_files(path, recursive=recursive)
    return [handler.validate_file(path)]


def run_extraction(
    input_path: str,
    output_path: Optional[str] = None,
    mode: str = "po",
    recursive: bool = False
) -> List[Dict[str, Any]]:
    """
    Run the extraction pipeline over a file or directory.

    Files that cannot be read are logged and skipped; the remaining
    results are returned (and written to ``output_path`` when given).

    Args:
        input_path: Path to input file or directory.
        output_path: Optional JSON output path.
        mode: 'po' for purchase orders, 'drawings' for drawing registers.
        recursive: Whether to search subdirectories.

    Returns:
        One dictionary per processed file.

    Example:
        >>> results = run_extraction("orders/", "outputs/results.json")
        >>> results[0]["header"]["poNumber"]
        "4500012345"
    """
    logger = get_logger(__name__)

    # Import pipeline components
    from po_extraction.extraction import PurchaseOrderExtractor
    from po_extraction.extraction.parse_result import GridDocument
    from po_extraction.input_handler import InputHandler

    input_handler = InputHandler()
    extractor = PurchaseOrderExtractor()

    files_to_process = collect_inputs(input_path, recursive)
    logger.info(f"Processing {len(files_to_process)} files...")

    results: List[Dict[str, Any]] = []
    for file_path in files_to_process:
        logger.info(f"Processing: {file_path.name}")

        try:
            document = input_handler.load(file_path)
        except InputError as e:
            logger.error(f"Skipping {file_path.name}: {e}")
            continue

        if mode == "drawings":
            if not isinstance(document, GridDocument):
                logger.warning(f"Skipping {file_path.name}: drawing registers must be spreadsheets")
                continue
            records = extractor.parse_drawings(document)
            results.append({
                'source': str(file_path),
                'drawings': [record.to_dict() for record in records],
            })
            logger.info(f"  Extracted: {len(records)} drawings")
            continue

        if isinstance(document, GridDocument):
            result = extractor.parse_grid(document)
        else:
            result = extractor.parse_text(document)

        record = {'source': str(file_path)}
        record.update(result.to_dict())
        results.append(record)

    if output_path:
        write_results(results, output_path)
        logger.info(f"JSON output: {output_path}")

    return results


def write_results(results: List[Dict[str, Any]], output_path: str) -> Path:
    """Write results as a JSON array, creating parent directories."""
    from po_extraction.extraction.parse_result import json_default

    path = Path(output_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, 'w', encoding='utf-8') as f:
        json.dump(results, f, indent=2, ensure_ascii=False, default=json_default)
    return path


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main function - entry point for command-line execution.

    Returns:
        Exit code (0 for success, non-zero for errors).
    """
    try:
        # Parse command-line arguments
        args = parse_arguments(argv)

        # Initialize system
        initialize_system(args)
        logger = get_logger(__name__)

        # Run extraction
        results = run_extraction(
            input_path=args.input,
            output_path=args.output,
            mode=args.mode,
            recursive=args.recursive
        )

        if not results:
            logger.error("No files could be processed")
            return 1

        logger.info("=" * 60)
        logger.info(f"Extraction complete. Processed {len(results)} files.")
        logger.info("=" * 60)

        return 0

    except (ConfigurationError, InputError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    except KeyboardInterrupt:
        print("\nOperation cancelled by user")
        return 130


if __name__ == "__main__":
    sys.exit(main())
