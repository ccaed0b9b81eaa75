"""
Module: cli

Purpose:
    ``audit-report`` command: load an audit JSON file and export it as a
    PDF report.

Key Functions:
    - main(): Entry point, returns the process exit code

Exit codes:
    0  Report written (warnings are printed)
    1  Export failed (generic message printed, error kind logged)
    2  Input file unreadable or invalid arguments

Dependencies:
    - argparse (std)
    - core.utils.serialization: load_document
    - report.controller: export_report
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from audit_toolkit import __version__
from audit_toolkit.core.utils import LoaderError, load_document
from audit_toolkit.report import ExportConfig, ExportError, LayoutConfig, export_report

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_EXPORT_FAILED = 1
EXIT_BAD_INPUT = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="audit-report",
        description="Export an audit checklist as a paginated PDF report",
    )
    parser.add_argument("audit_json", type=Path, help="Path to the audit JSON file")
    parser.add_argument(
        "-o", "--output-dir", type=Path, default=Path.cwd(),
        help="Directory to write the PDF to (default: current directory)",
    )
    parser.add_argument(
        "--pack-sections", action="store_true",
        help="Let a section continue on the previous section's last page",
    )
    parser.add_argument("--quality", type=int, default=80, help="JPEG quality for images (1-95)")
    parser.add_argument("--workers", type=int, default=4, help="Image processing threads")
    parser.add_argument("-v", "--verbose", action="count", default=0, help="More logging (-vv for debug)")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def _configure_logging(verbosity: int) -> None:
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity >= 2:
        level = logging.DEBUG
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")


def main(argv: Optional[List[str]] = None) -> int:
    """
    Run the command.

    Args:
        argv: Arguments without the program name (defaults to sys.argv)

    Returns:
        Process exit code
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    _configure_logging(args.verbose)

    try:
        config = ExportConfig(
            output_dir=args.output_dir,
            layout=LayoutConfig(section_page_breaks=not args.pack_sections),
            image_quality=args.quality,
            max_workers=args.workers,
        )
    except ValueError as e:
        print(f"Invalid option: {e}", file=sys.stderr)
        return EXIT_BAD_INPUT

    try:
        document = load_document(args.audit_json)
    except LoaderError as e:
        print(f"Could not read {args.audit_json}: {e}", file=sys.stderr)
        return EXIT_BAD_INPUT

    try:
        result = export_report(document, config)
    except ExportError as e:
        logger.error(f"Export failed ({e.kind.value}): {e}")
        print(e.user_message, file=sys.stderr)
        return EXIT_EXPORT_FAILED

    print(result.message)
    print(f"Saved to {result.output_path} ({result.page_count} pages)")
    for warning in result.warnings:
        print(f"Warning: {warning}")

    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
