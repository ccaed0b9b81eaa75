"""
Module: report.output.renderer

Purpose:
    Render a paginated report to a reportlab canvas. The cover and
    contents pages come first, then each content Page becomes one PDF
    page with its cards drawn at their placed offsets.

Key Functions:
    - render_report(): Main rendering function

Dependencies:
    - reportlab: PDF drawing
    - report.layout.models: ReportLayout, PlacedBlock
    - report.output.cover: Cover and contents pages

Used By:
    - report.controller: Pipeline orchestration
"""

from __future__ import annotations

import io
import logging
from typing import Dict, Optional, Sequence, Tuple

from reportlab.lib.utils import ImageReader
from reportlab.pdfgen.canvas import Canvas

from audit_toolkit import __version__
from audit_toolkit.core.models import Document, Section

from ..config import ExportConfig
from ..layout.config import LayoutConfig
from ..layout.models import Page, PlacedBlock, ReportLayout
from ..layout.text import TextMeasurer
from ..styles import STATUS_STYLES, Colors
from .cover import draw_cover, draw_toc
from .drawing import draw_box, draw_lines, draw_text, page_height_pt, px_to_pt, transform_y
from .navigation import TocLink, page_destination

logger = logging.getLogger(__name__)

# Space between the running header banner and the first card
HEADER_GAP = 16
HEADER_TEXT_INSET = 20
CALLOUT_RADIUS = 8


def generator_text() -> str:
    """Footer credit with the current version number."""
    return f"Generated with Audit Toolkit v{__version__}"


def render_report(
    c: Canvas,
    document: Document,
    layout: ReportLayout,
    links: Sequence[TocLink],
    config: ExportConfig,
    *,
    measurer: Optional[TextMeasurer] = None,
) -> None:
    """
    Draw every page of the report onto the canvas.

    Pages are emitted in order: cover, contents, then content pages.
    Footers use ``layout.total_pages``, which is final because
    pagination has completed before rendering starts. The caller saves
    the canvas.

    Args:
        c: ReportLab canvas sized to the layout page
        document: Audit document
        layout: Pagination output
        links: Contents links from link_sections()
        config: Export configuration
        measurer: Text measurer (a new one is created if omitted)

    Example:
        >>> c = Canvas(buf, pagesize=page_size(config.layout), invariant=1)
        >>> render_report(c, doc, layout, links, config)
        >>> c.save()
    """
    if measurer is None:
        measurer = TextMeasurer(config.font_files)

    draw_cover(c, document, measurer, config)
    c.showPage()

    draw_toc(c, document, links, measurer, config)
    c.showPage()

    numbering = _section_numbering(document)
    for page in layout.pages:
        _render_page(c, page, numbering, layout.total_pages, document.subject, measurer, config)
        c.showPage()

    logger.info(f"Rendered {layout.total_pages} pages ({layout.page_count} content pages)")


def page_size(config: LayoutConfig) -> Tuple[float, float]:
    """Page size in points for the canvas."""
    return (px_to_pt(config.page_width, config.dpi), page_height_pt(config))


def _section_numbering(document: Document) -> Dict[str, Tuple[int, Section]]:
    return {section.id: (i + 1, section) for i, section in enumerate(document.sections)}


def _render_page(
    c: Canvas,
    page: Page,
    numbering: Dict[str, Tuple[int, Section]],
    total_pages: int,
    subject: str,
    measurer: TextMeasurer,
    config: ExportConfig,
) -> None:
    """
    Render a single content page to the canvas.

    Args:
        c: ReportLab canvas
        page: Page with placements
        numbering: Section id -> (1-based number, Section)
        total_pages: Page count for the footer
        subject: Subject identifier for the footer
        measurer: Text measurer
        config: Export configuration
    """
    layout = config.layout
    c.bookmarkPage(page_destination(page.number))

    number, section = numbering[page.section_id]
    _draw_running_header(c, number, section.title, measurer, layout)

    for placement in page.placements:
        _draw_card(c, placement, layout)

    _draw_footer(c, page.number, total_pages, subject, layout)

    logger.debug(f"Page {page.number}: {page.placement_count} cards")


def _draw_running_header(
    c: Canvas,
    number: int,
    title: str,
    measurer: TextMeasurer,
    layout: LayoutConfig,
) -> None:
    """Draw the section banner: two-digit section number and title."""
    font = layout.header_font
    banner_height = layout.running_header_height - HEADER_GAP
    draw_box(
        c, layout,
        layout.margin_left, layout.margin_top, layout.available_width, banner_height,
        fill=Colors.HEADER_BACKGROUND, radius=10,
    )

    text_width = layout.available_width - 2 * HEADER_TEXT_INSET
    lines = measurer.wrap(f"{number:02d}  {title}", text_width, font)
    text = lines[0] if lines else ""
    if len(lines) > 1:
        text = f"{text}..."

    top = layout.margin_top + (banner_height - font.leading) / 2
    draw_text(c, layout, text, layout.margin_left + HEADER_TEXT_INSET, top, font, Colors.TEXT_ON_DARK)
    draw_box(
        c, layout,
        layout.margin_left + HEADER_TEXT_INSET, layout.margin_top + banner_height - 4,
        60, 4,
        fill=Colors.ACCENT,
    )


def _draw_card(c: Canvas, placement: PlacedBlock, layout: LayoutConfig) -> None:
    """
    Draw a single item card at its placed offset.

    Every sub-region is drawn at the offset stored on the Block, so the
    card occupies exactly the measured height.

    Args:
        c: ReportLab canvas
        placement: Block with page offset
        layout: Layout configuration
    """
    block = placement.block
    style = STATUS_STYLES[block.status]
    top = placement.top
    x = layout.margin_left
    inner_x = x + layout.card_padding

    # Card and accent strip
    draw_box(
        c, layout, x, top, layout.available_width, block.height,
        fill=Colors.CARD_BACKGROUND, stroke=Colors.CARD_BORDER, radius=layout.card_radius,
    )
    draw_box(c, layout, x, top, layout.available_width, layout.accent_height, fill=style.border)

    draw_lines(c, layout, block.title_lines, inner_x, top + block.title_top,
               layout.title_font, Colors.TEXT_PRIMARY)
    draw_lines(c, layout, block.description_lines, inner_x, top + block.description_top,
               layout.description_font, Colors.TEXT_BODY)

    # Status badge
    badge_top = top + block.badge_top
    draw_box(
        c, layout, inner_x, badge_top, block.badge_width, layout.badge_height,
        fill=style.background, stroke=style.border, radius=layout.badge_height / 2,
    )
    draw_text(
        c, layout, block.badge_label,
        inner_x, badge_top + (layout.badge_height - layout.badge_font.leading) / 2,
        layout.badge_font, style.text,
        align="center", width=block.badge_width,
    )

    if block.has_explanation:
        _draw_callout(c, placement, layout)

    if block.has_image:
        _draw_image(c, placement, layout)


def _draw_callout(c: Canvas, placement: PlacedBlock, layout: LayoutConfig) -> None:
    """Draw the tinted explanation box with its accent bar and heading."""
    block = placement.block
    style = STATUS_STYLES[block.status]
    inner_x = layout.margin_left + layout.card_padding
    callout_top = placement.top + block.callout_top

    draw_box(
        c, layout, inner_x, callout_top, layout.card_inner_width, block.callout_height,
        fill=Colors.CALLOUT_BACKGROUND, radius=CALLOUT_RADIUS,
    )
    draw_box(
        c, layout, inner_x, callout_top, layout.callout_bar_width, block.callout_height,
        fill=style.border,
    )

    text_x = inner_x + layout.callout_bar_width + layout.callout_padding
    heading_top = callout_top + layout.callout_padding
    draw_text(c, layout, block.explanation_heading, text_x, heading_top,
              layout.heading_font, Colors.TEXT_PRIMARY)

    lines_top = heading_top + round(layout.heading_font.leading) + layout.heading_gap
    draw_lines(c, layout, block.explanation_lines, text_x, lines_top,
               layout.explanation_font, Colors.TEXT_BODY)


def _draw_image(c: Canvas, placement: PlacedBlock, layout: LayoutConfig) -> None:
    """Draw the item's screenshot in its reserved box, left aligned."""
    block = placement.block
    dpi = layout.dpi
    x_pt = px_to_pt(layout.margin_left + layout.card_padding, dpi)
    y_pt = transform_y(
        page_height_pt=page_height_pt(layout),
        y_px_top=placement.top + block.image_top,
        height_px=block.image_height,
        dpi=dpi,
    )

    reader = ImageReader(io.BytesIO(block.image.payload))
    c.drawImage(
        reader,
        x_pt,
        y_pt,
        width=px_to_pt(block.image_width, dpi),
        height=px_to_pt(block.image_height, dpi),
        preserveAspectRatio=True,
        anchor="nw",
    )


def _draw_footer(
    c: Canvas,
    page_number: int,
    total_pages: int,
    subject: str,
    layout: LayoutConfig,
) -> None:
    """
    Draw the footer in the bottom margin.

    Left: page number. Centre: subject identifier. Right: generator credit.

    Args:
        c: ReportLab canvas
        page_number: Number of this page
        total_pages: Final page count
        subject: Subject identifier (may be empty)
        layout: Layout configuration
    """
    font = layout.footer_font
    rule_top = layout.content_bottom + 12
    draw_box(c, layout, layout.margin_left, rule_top, layout.available_width, 1,
             fill=Colors.CARD_BORDER)

    top = rule_top + (layout.page_height - rule_top - font.leading) / 2
    x = layout.margin_left
    width = layout.available_width
    draw_text(c, layout, f"Page {page_number} of {total_pages}", x, top, font, Colors.TEXT_FOOTER)
    if subject:
        draw_text(c, layout, subject, x, top, font, Colors.TEXT_FOOTER, align="center", width=width)
    draw_text(c, layout, generator_text(), x, top, font, Colors.TEXT_FOOTER,
              align="right", width=width)
