"""
Module: report.output.drawing

Purpose:
    Canvas primitives shared by the cover, contents and content pages.
    Callers work in layout pixels with a top-left origin; these helpers
    convert to PDF points with reportlab's bottom-left origin.

Key Functions:
    - px_to_pt(): Layout pixels to PDF points
    - transform_y(): Top-down pixel Y to bottom-up PDF Y
    - draw_box(): Filled and/or outlined (rounded) rectangle
    - draw_text(): One line of text in a line box
    - draw_lines(): Pre-wrapped lines, one per line box

Dependencies:
    - reportlab: Canvas and colours

Used By:
    - report.output.renderer
    - report.output.cover
"""

from __future__ import annotations

from typing import Iterable, Optional

from reportlab.lib.colors import HexColor
from reportlab.pdfgen.canvas import Canvas

from ..layout.config import LayoutConfig
from ..layout.text import FontSpec

# Share of the font size between the baseline and the top of capitals
CAP_HEIGHT_RATIO = 0.7


def px_to_pt(px: float, dpi: int) -> float:
    """
    Convert layout pixels to PDF points.

    PDF points are 1/72 inch.

    Args:
        px: Pixel value
        dpi: Layout pixels per inch

    Returns:
        Value in PDF points
    """
    return px * 72.0 / dpi


def transform_y(
    page_height_pt: float,
    y_px_top: float,
    height_px: float,
    dpi: int,
) -> float:
    """
    Convert top-down pixel Y coordinate to bottom-up PDF Y.

    Args:
        page_height_pt: Page height in points
        y_px_top: Y position from top in pixels (absolute)
        height_px: Height of element in pixels
        dpi: Layout pixels per inch

    Returns:
        Y position of the element's bottom edge, in points from page bottom
    """
    y_pt_from_top = px_to_pt(y_px_top, dpi)
    height_pt = px_to_pt(height_px, dpi)
    return page_height_pt - y_pt_from_top - height_pt


def page_height_pt(config: LayoutConfig) -> float:
    return px_to_pt(config.page_height, config.dpi)


def draw_box(
    c: Canvas,
    config: LayoutConfig,
    x: float,
    top: float,
    width: float,
    height: float,
    *,
    fill: Optional[str] = None,
    stroke: Optional[str] = None,
    radius: float = 0,
    line_width: float = 1,
) -> None:
    """
    Draw a rectangle given in layout pixels.

    Args:
        c: ReportLab canvas
        config: Layout configuration (page height, dpi)
        x: Left edge in pixels
        top: Top edge in pixels from page top
        width: Width in pixels
        height: Height in pixels
        fill: Fill colour as hex, None for no fill
        stroke: Outline colour as hex, None for no outline
        radius: Corner radius in pixels (0 = square corners)
        line_width: Outline width in pixels
    """
    dpi = config.dpi
    x_pt = px_to_pt(x, dpi)
    y_pt = transform_y(page_height_pt(config), top, height, dpi)
    width_pt = px_to_pt(width, dpi)
    height_pt = px_to_pt(height, dpi)

    c.saveState()
    if fill is not None:
        c.setFillColor(HexColor(fill))
    if stroke is not None:
        c.setStrokeColor(HexColor(stroke))
        c.setLineWidth(px_to_pt(line_width, dpi))

    do_stroke = int(stroke is not None)
    do_fill = int(fill is not None)
    if radius > 0:
        radius_pt = min(px_to_pt(radius, dpi), width_pt / 2, height_pt / 2)
        c.roundRect(x_pt, y_pt, width_pt, height_pt, radius_pt, stroke=do_stroke, fill=do_fill)
    else:
        c.rect(x_pt, y_pt, width_pt, height_pt, stroke=do_stroke, fill=do_fill)
    c.restoreState()


def draw_text(
    c: Canvas,
    config: LayoutConfig,
    text: str,
    x: float,
    top: float,
    font: FontSpec,
    color: str,
    *,
    align: str = "left",
    width: float = 0.0,
) -> None:
    """
    Draw one line of text whose line box starts at ``top``.

    Capitals are centred vertically inside the line box.

    Args:
        c: ReportLab canvas
        config: Layout configuration
        text: Text to draw (a single line)
        x: Left edge of the line box in pixels
        top: Top of the line box in pixels
        font: Font to draw with (sizes in pixels)
        color: Text colour as hex
        align: "left", "center" or "right" within ``width``
        width: Line box width, used for center/right alignment
    """
    dpi = config.dpi
    baseline = top + (font.leading + font.size * CAP_HEIGHT_RATIO) / 2
    y_pt = page_height_pt(config) - px_to_pt(baseline, dpi)

    c.saveState()
    c.setFont(font.name, px_to_pt(font.size, dpi))
    c.setFillColor(HexColor(color))
    if align == "center":
        c.drawCentredString(px_to_pt(x + width / 2, dpi), y_pt, text)
    elif align == "right":
        c.drawRightString(px_to_pt(x + width, dpi), y_pt, text)
    else:
        c.drawString(px_to_pt(x, dpi), y_pt, text)
    c.restoreState()


def draw_lines(
    c: Canvas,
    config: LayoutConfig,
    lines: Iterable[str],
    x: float,
    top: float,
    font: FontSpec,
    color: str,
) -> None:
    """Draw pre-wrapped lines, one line box per ``font.leading``."""
    for i, line in enumerate(lines):
        if line:
            draw_text(c, config, line, x, top + i * font.leading, font, color)
