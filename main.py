#!/usr/bin/env python3
"""
Shipping Label Extraction Engine - Main Entry Point.

Development driver for the label extraction engine. It reads single-page
label PDFs, runs them through the batch extractor and writes the records
as JSON.

Usage:
    Command Line:
        python main.py --input label.pdf
        python main.py --input ./labels/ --output outputs/labels.json --workers 3

    Python:
        from main import run_extraction
        records = run_extraction("labels/")

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
from label_extraction.utils.logger import LOGGER_NAMESPACE, setup_logger_from_config, get_logger
from label_extraction.utils.helpers import ensure_directory

SUPPORTED_EXTENSIONS = {'.pdf'}


def parse_arguments(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """
    Parse command-line arguments.

    Returns:
        Parsed argument namespace.
    """
    parser = argparse.ArgumentParser(
        description="Shipping Label Extraction Engine",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    Process a single label:
        python main.py --input label.pdf

    Process a directory of label pages:
        python main.py --input ./labels/ --output outputs/labels.json --workers 4
        """
    )

    parser.add_argument(
        "--input", "-i",
        type=str,
        required=True,
        help="Label PDF (one page per label) or directory of label PDFs"
    )

    parser.add_argument(
        "--output", "-o",
        type=str,
        default=None,
        help="JSON output file (default: print to stdout)"
    )

    parser.add_argument(
        "--config", "-c",
        type=str,
        default=None,
        help="Path to custom configuration file"
    )

    parser.add_argument(
        "--workers", "-w",
        type=int,
        default=None,
        help="Pages processed concurrently (default: extraction.max_workers)"
    )

    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging"
    )

    return parser.parse_args(argv)


def initialize_system(args: argparse.Namespace) -> ConfigurationManager:
    """
    Initialize the engine with configuration and logging.

    Args:
        args: Parsed command-line arguments.

    Returns:
        Initialized configuration manager.
    """
    if args.config:
        ConfigurationManager.reset()
    config = ConfigurationManager(args.config)

    logger = setup_logger_from_config()
    if args.debug:
        logging.getLogger(LOGGER_NAMESPACE).setLevel(logging.DEBUG)

    logger.info("=" * 60)
    logger.info("SHIPPING LABEL EXTRACTION ENGINE")
    logger.info("=" * 60)
    logger.info(f"Version: {config.get('project.version', '1.0.0')}")
    logger.info(f"Input: {args.input}")

    return config


def collect_inputs(input_path: str) -> List[Path]:
    """
    Resolve the input argument into a sorted list of PDF files.

    Raises:
        FileNotFoundError: If the input path doesn't exist.
        ValueError: If a single file is not a PDF.
    """
    logger = get_logger(__name__)
    path = Path(input_path)

    if not path.exists():
        raise FileNotFoundError(f"Input path not found: {path}")

    if path.is_file():
        if path.suffix.lower() not in SUPPORTED_EXTENSIONS:
            raise ValueError(f"Unsupported file type: {path.suffix}")
        return [path]

    files = sorted(p for p in path.iterdir() if p.suffix.lower() in SUPPORTED_EXTENSIONS)
    if not files:
        logger.warning(f"No label PDFs found in: {path}")
    else:
        logger.info(f"Found {len(files)} label files")
    return files


def run_extraction(
    input_path: str,
    max_workers: Optional[int] = None
) -> List[Dict[str, Any]]:
    """
    Run the label extraction engine over files.

    Args:
        input_path: Label PDF or directory of label PDFs.
        max_workers: Concurrent pages, None for the configured default.

    Returns:
        One dictionary per file with the source name and its record.

    Example:
        >>> results = run_extraction("labels/")
        >>> for r in results:
        ...     print(r['source_file'], r['record']['order_number'])
    """
    from label_extraction.extraction import LabelExtractor

    logger = get_logger(__name__)
    files = collect_inputs(input_path)

    extractor = LabelExtractor(max_workers=max_workers)
    records = extractor.extract_batch(
        (f.read_bytes() for f in files),
        max_workers,
        labels=[f.name for f in files]
    )

    results = []
    for file_path, record in zip(files, records):
        if record.is_empty:
            logger.warning(f"{file_path.name}: nothing extracted, needs review")
        results.append({'source_file': file_path.name, 'record': record.to_dict()})

    return results


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main function - entry point for command-line execution.

    Returns:
        Exit code (0 for success, non-zero for errors).
    """
    try:
        args = parse_arguments(argv)
        initialize_system(args)
        logger = get_logger(__name__)

        results = run_extraction(args.input, args.workers)
        payload = json.dumps(results, indent=2, ensure_ascii=False)

        if args.output:
            output_path = Path(args.output)
            ensure_directory(output_path.parent)
            output_path.write_text(payload, encoding='utf-8')
            logger.info(f"Wrote {len(results)} records to {output_path}")
        else:
            print(payload)

        logger.info("=" * 60)
        logger.info(f"Extraction complete. Processed {len(results)} labels.")
        logger.info("=" * 60)
        return 0

    except (FileNotFoundError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    except KeyboardInterrupt:
        print("\nOperation cancelled by user")
        return 130


if __name__ == "__main__":
    sys.exit(main())
