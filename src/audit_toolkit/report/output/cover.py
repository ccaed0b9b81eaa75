"""
Module: report.output.cover

Purpose:
    Draw the two fixed pages that open every report: the cover summary
    (page 1) and the clickable table of contents (page 2).

Key Functions:
    - draw_cover(): Title, audit metadata, pass rate and item totals
    - draw_toc(): Contents grid with one card per section

Dependencies:
    - reportlab: Canvas links
    - report.output.drawing: Pixel-space primitives
    - report.output.navigation: Card geometry shared with links

Used By:
    - report.output.renderer: render_report()
"""

from __future__ import annotations

import logging
from typing import Sequence

from reportlab.pdfgen.canvas import Canvas

from audit_toolkit.core.models import Document

from ..config import ExportConfig
from ..layout.text import FontSpec, TextMeasurer
from ..styles import Colors
from .drawing import draw_box, draw_lines, draw_text, page_height_pt, px_to_pt
from .navigation import TocLink, toc_cell_rect

logger = logging.getLogger(__name__)

NOT_SPECIFIED = "Not specified"

# Cover fonts
COVER_TITLE_FONT = FontSpec("Helvetica-Bold", 36, 44)
COVER_SUBTITLE_FONT = FontSpec("Helvetica", 24, 32)
COVER_LABEL_FONT = FontSpec("Helvetica-Bold", 14, 20)
COVER_VALUE_FONT = FontSpec("Helvetica-Bold", 18, 24)
COVER_RATE_FONT = FontSpec("Helvetica-Bold", 24, 30)
STAT_VALUE_FONT = FontSpec("Helvetica-Bold", 28, 34)
STAT_LABEL_FONT = FontSpec("Helvetica", 12, 16)
COVER_NOTE_FONT = FontSpec("Helvetica", 14, 20)

# Contents fonts
TOC_HEADING_FONT = FontSpec("Helvetica-Bold", 32, 40)
TOC_NUMBER_FONT = FontSpec("Helvetica-Bold", 12, 28)
TOC_TITLE_FONT = FontSpec("Helvetica-Bold", 14, 18)
TOC_DESCRIPTION_FONT = FontSpec("Helvetica", 11, 14)
TOC_COUNT_FONT = FontSpec("Helvetica-Bold", 10, 22)

# Cover geometry
COVER_INSET = 20
COVER_TITLE_TOP = 250
DETAILS_TOP = 420
DETAILS_HEIGHT = 230
DETAILS_PADDING = 36
STATS_TOP = 690
STATS_HEIGHT = 100
STATS_GAP = 20

# Contents card geometry
TOC_HEADING_TOP = 70
TOC_RULE_WIDTH = 100
TOC_CARD_PADDING = 18
TOC_NUMBER_SIZE = 28
TOC_PILL_HEIGHT = 22
TOC_PILL_PADDING_X = 10


def _or_default(value: str) -> str:
    return value.strip() or NOT_SPECIFIED


def item_count_label(count: int) -> str:
    """Item count shown on a contents card, e.g. "3 Items"."""
    return f"{count} Item" if count == 1 else f"{count} Items"


def draw_cover(
    c: Canvas,
    document: Document,
    measurer: TextMeasurer,
    config: ExportConfig,
) -> None:
    """
    Draw the cover summary on the current canvas page.

    Shows report title, subject, author, date and pass rate, followed by
    Total / Completed / Passed / Failed counts. A document with nothing
    completed shows zero counts and a 0% pass rate.

    Args:
        c: ReportLab canvas positioned on page 1
        document: Audit document
        measurer: Text measurer for wrapping long values
        config: Export configuration
    """
    layout = config.layout
    width = layout.page_width

    draw_box(c, layout, 0, 0, width, layout.page_height, fill=Colors.COVER_BACKGROUND)
    draw_box(
        c, layout,
        COVER_INSET, COVER_INSET,
        width - 2 * COVER_INSET, layout.page_height - 2 * COVER_INSET,
        stroke=Colors.ACCENT, radius=20, line_width=2,
    )

    # Title block
    title_lines = measurer.wrap(config.report_title, layout.available_width, COVER_TITLE_FONT)
    y = COVER_TITLE_TOP
    for line in title_lines:
        draw_text(c, layout, line, 0, y, COVER_TITLE_FONT, Colors.TEXT_ON_DARK,
                  align="center", width=width)
        y += COVER_TITLE_FONT.leading
    draw_text(c, layout, config.report_subtitle, 0, y + 16, COVER_SUBTITLE_FONT, Colors.ACCENT,
              align="center", width=width)

    # Details panel: 2x2 grid
    panel_x = layout.margin_left
    panel_width = layout.available_width
    draw_box(
        c, layout, panel_x, DETAILS_TOP, panel_width, DETAILS_HEIGHT,
        fill=Colors.COVER_PANEL, stroke=Colors.ACCENT, radius=20,
    )
    column_width = (panel_width - 3 * DETAILS_PADDING) / 2
    row_height = (DETAILS_HEIGHT - 2 * DETAILS_PADDING) / 2
    details = [
        ("Website", _or_default(document.subject)),
        ("Prepared by", _or_default(document.author)),
        ("Date", _or_default(document.date)),
    ]
    for index, (label, value) in enumerate(details):
        row, column = divmod(index, 2)
        x = panel_x + DETAILS_PADDING + column * (column_width + DETAILS_PADDING)
        top = DETAILS_TOP + DETAILS_PADDING + row * row_height
        draw_text(c, layout, label, x, top, COVER_LABEL_FONT, Colors.ACCENT)
        value_lines = measurer.wrap(value, column_width, COVER_VALUE_FONT)[:2]
        draw_lines(c, layout, value_lines, x, top + COVER_LABEL_FONT.leading + 4,
                   COVER_VALUE_FONT, Colors.TEXT_ON_DARK)

    rate_x = panel_x + 2 * DETAILS_PADDING + column_width
    rate_top = DETAILS_TOP + DETAILS_PADDING + row_height
    draw_text(c, layout, "Pass Rate", rate_x, rate_top, COVER_LABEL_FONT, Colors.ACCENT)
    draw_text(c, layout, f"{document.pass_rate}%", rate_x, rate_top + COVER_LABEL_FONT.leading + 4,
              COVER_RATE_FONT, Colors.ACCENT)

    # Statistics row
    stats = [
        ("Total Items", document.total_items, Colors.ACCENT),
        ("Completed", document.completed_items, Colors.ACCENT),
        ("Passed", document.passed_items, Colors.STAT_PASSED),
        ("Failed", document.failed_items, Colors.STAT_FAILED),
    ]
    stat_width = (panel_width - (len(stats) - 1) * STATS_GAP) / len(stats)
    for index, (label, value, color) in enumerate(stats):
        x = panel_x + index * (stat_width + STATS_GAP)
        draw_box(c, layout, x, STATS_TOP, stat_width, STATS_HEIGHT,
                 fill=Colors.COVER_PANEL, stroke=color, radius=12)
        draw_text(c, layout, str(value), x, STATS_TOP + 18, STAT_VALUE_FONT, color,
                  align="center", width=stat_width)
        draw_text(c, layout, label, x, STATS_TOP + 18 + STAT_VALUE_FONT.leading + 4,
                  STAT_LABEL_FONT, Colors.TEXT_ON_DARK, align="center", width=stat_width)

    note = (
        f"{document.completion_rate}% of items reviewed"
        f" | {document.optional_items} optional"
    )
    draw_text(c, layout, note, 0, STATS_TOP + STATS_HEIGHT + 30, COVER_NOTE_FONT,
              Colors.TEXT_ON_DARK, align="center", width=width)

    logger.debug(
        f"Drew cover: {document.total_items} items, pass rate {document.pass_rate}%"
    )


def draw_toc(
    c: Canvas,
    document: Document,
    links: Sequence[TocLink],
    measurer: TextMeasurer,
    config: ExportConfig,
) -> None:
    """
    Draw the table of contents on the current canvas page.

    Every section gets a card (number, title, description, item count)
    at toc_cell_rect(index); sections with a TocLink get a clickable
    link over exactly that card.

    Args:
        c: ReportLab canvas positioned on page 2
        document: Audit document
        links: Links from link_sections()
        measurer: Text measurer for wrapping card text
        config: Export configuration
    """
    layout = config.layout
    width = layout.page_width

    draw_box(c, layout, 0, 0, width, layout.page_height, fill=Colors.TOC_BACKGROUND)
    draw_text(c, layout, "Table of Contents", 0, TOC_HEADING_TOP, TOC_HEADING_FONT,
              Colors.TEXT_PRIMARY, align="center", width=width)
    draw_box(
        c, layout,
        (width - TOC_RULE_WIDTH) / 2, TOC_HEADING_TOP + TOC_HEADING_FONT.leading + 12,
        TOC_RULE_WIDTH, 3,
        fill=Colors.ACCENT,
    )

    capacity = layout.toc_capacity
    sections = document.sections
    if len(sections) > capacity:
        logger.debug(f"Contents page holds {capacity} sections, {len(sections) - capacity} not drawn")

    for index, section in enumerate(sections[:capacity]):
        _draw_toc_card(c, index, section.title, section.description, section.item_count,
                       measurer, config)

    _add_links(c, links, config)


def _draw_toc_card(
    c: Canvas,
    index: int,
    title: str,
    description: str,
    item_count: int,
    measurer: TextMeasurer,
    config: ExportConfig,
) -> None:
    layout = config.layout
    x, y, width, height = toc_cell_rect(index, layout)

    draw_box(c, layout, x, y, width, height,
             fill=Colors.CARD_BACKGROUND, stroke=Colors.CARD_BORDER, radius=12)
    draw_box(c, layout, x, y, width, 3, fill=Colors.ACCENT)

    # Two-digit number
    number_x = x + TOC_CARD_PADDING
    number_y = y + TOC_CARD_PADDING
    draw_box(c, layout, number_x, number_y, TOC_NUMBER_SIZE, TOC_NUMBER_SIZE,
             fill=Colors.ACCENT, radius=6)
    draw_text(c, layout, f"{index + 1:02d}", number_x, number_y, TOC_NUMBER_FONT,
              Colors.TEXT_PRIMARY, align="center", width=TOC_NUMBER_SIZE)

    # Count pill, bottom right
    label = item_count_label(item_count)
    pill_width = measurer.width(label, TOC_COUNT_FONT) + 2 * TOC_PILL_PADDING_X
    pill_x = x + width - TOC_CARD_PADDING - pill_width
    pill_top = y + height - 12 - TOC_PILL_HEIGHT
    draw_box(c, layout, pill_x, pill_top, pill_width, TOC_PILL_HEIGHT,
             fill=Colors.ACCENT_TINT, stroke=Colors.ACCENT, radius=TOC_PILL_HEIGHT / 2)
    draw_text(c, layout, label, pill_x, pill_top, TOC_COUNT_FONT, Colors.ACCENT_TEXT,
              align="center", width=pill_width)

    # Title and description beside the number
    text_x = number_x + TOC_NUMBER_SIZE + 10
    text_width = x + width - TOC_CARD_PADDING - text_x
    title_lines = measurer.wrap(title, text_width, TOC_TITLE_FONT)[:2]
    draw_lines(c, layout, title_lines, text_x, number_y, TOC_TITLE_FONT, Colors.TEXT_PRIMARY)

    description_top = number_y + len(title_lines) * TOC_TITLE_FONT.leading + 4
    room = pill_top - 4 - description_top
    max_lines = max(0, int(room // TOC_DESCRIPTION_FONT.leading))
    description_lines = measurer.wrap(description, text_width, TOC_DESCRIPTION_FONT)
    if len(description_lines) > max_lines:
        description_lines = description_lines[:max_lines]
        if description_lines:
            description_lines[-1] = description_lines[-1].rstrip(".") + "..."
    draw_lines(c, layout, description_lines, text_x, description_top,
               TOC_DESCRIPTION_FONT, Colors.TEXT_SECONDARY)


def _add_links(c: Canvas, links: Sequence[TocLink], config: ExportConfig) -> None:
    """Attach a link annotation over each linked contents card."""
    layout = config.layout
    dpi = layout.dpi
    height_pt = page_height_pt(layout)

    for link in links:
        x1 = px_to_pt(link.x, dpi)
        x2 = px_to_pt(link.x + link.width, dpi)
        y2 = height_pt - px_to_pt(link.y, dpi)
        y1 = height_pt - px_to_pt(link.y + link.height, dpi)
        c.linkAbsolute(
            link.section_id,
            link.destination,
            Rect=(x1, y1, x2, y2),
            thickness=0,
        )
