"""
Module: report.controller

Purpose:
    Orchestrate the complete report export pipeline.
    Images → Compose → Paginate → Link → Render → Write

Key Functions:
    - export_report(): Main entry point for exporting a report
    - report_filename(): Output file name for a document

Key Classes:
    - ExportResult: Complete export result
    - ExportError: Exception for fatal export failures

Dependencies:
    - report.images: Image processing
    - report.layout: Composition and pagination
    - report.output: Linking and PDF rendering

Used By:
    - audit_toolkit.cli: Command line entry point
"""

from __future__ import annotations

import io
import logging
import os
import re
import tempfile
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional

from reportlab.pdfgen.canvas import Canvas

from audit_toolkit.core.models import Document

from .config import ExportConfig
from .errors import ErrorKind, ExportWarning, ReportError, SerializationError
from .images import ImageProcessor, process_images
from .layout import TextMeasurer, compose_document, paginate
from .layout.models import ReportLayout
from .output import TocLink, link_sections, page_size, render_report, unlisted_section_warnings

logger = logging.getLogger(__name__)

USER_ERROR_MESSAGE = "Unable to create the report. Please try again."


class ExportError(Exception):
    """
    Fatal error during the export pipeline.

    Attributes:
        kind: Diagnostic category (MEASUREMENT_FAILED or SERIALIZATION_FAILED)
        user_message: Generic message safe to show to the person exporting
    """

    user_message = USER_ERROR_MESSAGE

    def __init__(self, message: str, kind: ErrorKind) -> None:
        super().__init__(message)
        self.kind = kind


@dataclass(frozen=True)
class ExportResult:
    """
    Complete export result (immutable).

    Attributes:
        output_path: Path to the generated PDF
        page_count: Total pages including cover and contents
        section_pages: Section id -> page where its content begins
        warnings: Non-fatal problems (undecodable images, overflows,
            sections left off the contents page)
        elapsed: Export duration in seconds

    Example:
        >>> result = export_report(document, config)
        >>> print(result.message)
        PDF generated successfully: Audit-Report-example-com-2024-05-01.pdf
    """

    output_path: Path
    page_count: int
    section_pages: Dict[str, int]
    warnings: tuple[ExportWarning, ...]
    elapsed: float

    @property
    def message(self) -> str:
        """User-facing confirmation naming the saved file."""
        return f"PDF generated successfully: {self.output_path.name}"


def export_report(document: Document, config: Optional[ExportConfig] = None) -> ExportResult:
    """
    Export a document as a paginated PDF report.

    Pipeline:
    1. Decode and fit item images (parallel)
    2. Compose one Block per item
    3. Paginate blocks onto content pages
    4. Link contents cards to section pages
    5. Render cover, contents and content pages in memory
    6. Write the PDF atomically

    Undecodable images and oversized cards are reported as warnings on
    the result. Any other failure raises ExportError and no file is
    written.

    Args:
        document: Audit document to export
        config: Export configuration (defaults if omitted)

    Returns:
        ExportResult with path, page count and warnings

    Raises:
        ExportError: If measurement, rendering or writing fails

    Example:
        >>> result = export_report(document, ExportConfig(output_dir=Path("out")))
        >>> result.page_count
        3
    """
    config = config or ExportConfig()
    start_time = time.perf_counter()
    warnings: List[ExportWarning] = []

    logger.info(
        f"Starting export of {document.total_items} items "
        f"in {len(document.sections)} sections"
    )

    try:
        measurer = TextMeasurer(config.font_files)

        # 1. Images
        processor = ImageProcessor(
            max_width=config.image_max_width,
            max_height=config.image_max_height,
            quality=config.image_quality,
        )
        images, image_warnings = process_images(document, processor, max_workers=config.max_workers)
        warnings.extend(image_warnings)

        # 2-3. Layout
        groups = compose_document(document, images, measurer, config.layout)
        layout = paginate(groups, config.layout)
        warnings.extend(layout.warnings)

        # 4. Links
        links = link_sections(document.sections, layout.section_pages, config.layout)
        warnings.extend(unlisted_section_warnings(document.sections, config.layout))

        # 5-6. Render and write
        output_path = config.output_dir / report_filename(document, config.file_prefix)
        pdf_bytes = _render_pdf(document, layout, links, measurer, config)
        _write_atomic(output_path, pdf_bytes)
    except ReportError as e:
        logger.error(f"Export failed [{e.kind.value}]: {e}")
        raise ExportError(str(e), e.kind) from e

    elapsed = time.perf_counter() - start_time
    logger.info(
        f"Wrote {layout.total_pages} pages to {output_path} in {elapsed:.2f}s "
        f"({len(warnings)} warnings)"
    )

    return ExportResult(
        output_path=output_path,
        page_count=layout.total_pages,
        section_pages=dict(layout.section_pages),
        warnings=tuple(warnings),
        elapsed=elapsed,
    )


def report_filename(document: Document, prefix: str = "Audit-Report") -> str:
    """
    File name for a document's report.

    Non-alphanumeric characters become ``-``; empty parts are left out.

    Example:
        >>> report_filename(Document(subject="https://example.com", date="2024-05-01"))
        'Audit-Report-https---example-com-2024-05-01.pdf'
    """
    parts = [_sanitize(part) for part in (prefix, document.subject, document.date)]
    return "-".join(part for part in parts if part) + ".pdf"


def _sanitize(value: str) -> str:
    return re.sub(r"[^a-zA-Z0-9]", "-", value.strip())


def _render_pdf(
    document: Document,
    layout: ReportLayout,
    links: List[TocLink],
    measurer: TextMeasurer,
    config: ExportConfig,
) -> bytes:
    """
    Render the whole report into memory.

    Invariant mode fixes the creation date and document id so the same
    input always gives the same bytes.

    Raises:
        SerializationError: If reportlab fails to draw or serialize
    """
    buf = io.BytesIO()
    try:
        c = Canvas(buf, pagesize=page_size(config.layout), invariant=1)
        title = config.report_title
        if document.subject:
            title = f"{title} - {document.subject}"
        c.setTitle(title)
        c.setAuthor(document.author)
        c.setSubject(document.subject)
        render_report(c, document, layout, links, config, measurer=measurer)
        c.save()
    except ReportError:
        raise
    except Exception as e:
        raise SerializationError(f"Could not render PDF: {e}") from e
    return buf.getvalue()


def _write_atomic(path: Path, data: bytes) -> None:
    """
    Write data to path via a temporary file in the same directory.

    Raises:
        SerializationError: If the directory or file cannot be written
    """
    temp_path: Optional[Path] = None
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with tempfile.NamedTemporaryFile(
            mode="wb",
            suffix=".pdf.tmp",
            dir=path.parent,
            delete=False,
        ) as f:
            temp_path = Path(f.name)
            f.write(data)
            f.flush()
            os.fsync(f.fileno())

        # replace() overwrites an existing report on all platforms
        temp_path.replace(path)
    except OSError as e:
        if temp_path is not None:
            temp_path.unlink(missing_ok=True)
        raise SerializationError(f"Could not write {path}: {e}") from e
    logger.debug(f"Wrote {len(data)} bytes to {path}")
