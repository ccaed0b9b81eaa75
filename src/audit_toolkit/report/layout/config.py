"""
Module: report.layout.config

Purpose:
    Configuration for the report layout engine.
    Defines page dimensions, margins, card geometry, fonts and the
    table of contents grid. All lengths are layout pixels at ``dpi``.

Key Classes:
    - LayoutConfig: Immutable layout configuration

Dependencies:
    - dataclasses (std)
    - report.layout.text: FontSpec

Used By:
    - report.layout.composer: Block geometry
    - report.layout.paginator: Page arrangement
    - report.output: Drawing and link geometry
"""

from __future__ import annotations

from dataclasses import dataclass, field

from .text import FontSpec


# A4 at 96 DPI, the size the checklist form previews reports at
DEFAULT_PAGE_WIDTH_PX = 794
DEFAULT_PAGE_HEIGHT_PX = 1123
DEFAULT_DPI = 96


@dataclass(frozen=True)
class LayoutConfig:
    """
    Configuration for report layout (immutable).

    Attributes:
        page_width: Page width in pixels
        page_height: Page height in pixels
        dpi: Pixels per inch, used to convert to PDF points
        margin_top: Space above the running header
        margin_bottom: Space below content, holds the footer
        margin_left: Left page margin
        margin_right: Right page margin
        running_header_height: Section banner at the top of content pages
        block_gap: Vertical space between consecutive cards
        card_padding: Inner padding of a card
        card_radius: Corner radius of cards and callouts
        accent_height: Coloured strip along the top edge of a card
        title_gap: Space below the title lines
        description_gap: Space below the description lines
        badge_height: Height of the status badge row
        badge_padding_x: Horizontal padding inside the badge
        callout_margin: Space between badge and explanation callout
        callout_padding: Inner padding of the explanation callout
        callout_bar_width: Accent bar on the callout's left edge
        heading_gap: Space between callout heading and notes
        image_margin: Space above an item's image
        toc_top: Top of the first table of contents row
        toc_columns: Number of table of contents columns
        toc_cell_height: Height of one table of contents card
        toc_row_gap: Vertical gap between table of contents rows
        toc_column_gap: Horizontal gap between table of contents columns
        first_content_page: Page number of the first content page
        section_page_breaks: Start every section on a fresh page. When
            False, sections share pages and the running header names only
            the section of the page's first card, so a section that begins
            mid-page has no banner on that page.

    Example:
        >>> config = LayoutConfig()
        >>> config.content_height
        963  # 1123 - 40 - 64 - 56
    """

    # Page dimensions
    page_width: int = DEFAULT_PAGE_WIDTH_PX
    page_height: int = DEFAULT_PAGE_HEIGHT_PX
    dpi: int = DEFAULT_DPI

    # Margins
    margin_top: int = 40
    margin_bottom: int = 56
    margin_left: int = 60
    margin_right: int = 60
    running_header_height: int = 64

    # Cards
    block_gap: int = 16
    card_padding: int = 24
    card_radius: int = 12
    accent_height: int = 4
    title_gap: int = 12
    description_gap: int = 16
    badge_height: int = 30
    badge_padding_x: int = 14
    callout_margin: int = 16
    callout_padding: int = 18
    callout_bar_width: int = 4
    heading_gap: int = 8
    image_margin: int = 16

    # Fonts
    title_font: FontSpec = field(default_factory=lambda: FontSpec("Helvetica-Bold", 18, 25))
    description_font: FontSpec = field(default_factory=lambda: FontSpec("Helvetica", 14, 22))
    badge_font: FontSpec = field(default_factory=lambda: FontSpec("Helvetica-Bold", 12, 16))
    heading_font: FontSpec = field(default_factory=lambda: FontSpec("Helvetica-Bold", 14, 20))
    explanation_font: FontSpec = field(default_factory=lambda: FontSpec("Helvetica", 14, 22))
    header_font: FontSpec = field(default_factory=lambda: FontSpec("Helvetica-Bold", 16, 20))
    footer_font: FontSpec = field(default_factory=lambda: FontSpec("Helvetica", 9, 12))

    # Table of contents grid
    toc_top: int = 170
    toc_columns: int = 2
    toc_cell_height: int = 100
    toc_row_gap: int = 18
    toc_column_gap: int = 18

    # Pagination
    first_content_page: int = 3
    section_page_breaks: bool = True

    def __post_init__(self) -> None:
        """Validate configuration on construction."""
        if self.page_width <= 0:
            raise ValueError(f"page_width must be positive: {self.page_width}")
        if self.page_height <= 0:
            raise ValueError(f"page_height must be positive: {self.page_height}")
        if self.dpi <= 0:
            raise ValueError(f"dpi must be positive: {self.dpi}")
        if self.available_width <= 0:
            raise ValueError("Margins exceed page width")
        if self.content_height <= 0:
            raise ValueError("Margins exceed page height")
        if self.callout_text_width <= 0:
            raise ValueError("Card padding leaves no room for text")
        if self.toc_columns < 1:
            raise ValueError(f"toc_columns must be at least 1: {self.toc_columns}")
        if self.first_content_page < 1:
            raise ValueError(f"first_content_page must be at least 1: {self.first_content_page}")

    @property
    def available_width(self) -> int:
        """Width available for content (excluding margins)."""
        return self.page_width - self.margin_left - self.margin_right

    @property
    def content_top(self) -> int:
        """Y offset where the first card on a content page starts."""
        return self.margin_top + self.running_header_height

    @property
    def content_bottom(self) -> int:
        """Y offset that no card may extend past (unless it overflows)."""
        return self.page_height - self.margin_bottom

    @property
    def content_height(self) -> int:
        """Height available for cards on one content page."""
        return self.content_bottom - self.content_top

    @property
    def card_inner_width(self) -> int:
        """Width available inside a card's padding."""
        return self.available_width - 2 * self.card_padding

    @property
    def callout_text_width(self) -> int:
        """Width available for explanation text inside the callout."""
        return self.card_inner_width - 2 * self.callout_padding - self.callout_bar_width

    @property
    def toc_cell_width(self) -> float:
        """Width of one table of contents card."""
        gaps = (self.toc_columns - 1) * self.toc_column_gap
        return (self.available_width - gaps) / self.toc_columns

    @property
    def toc_capacity(self) -> int:
        """Number of table of contents entries that fit on the page."""
        usable = self.content_bottom - self.toc_top + self.toc_row_gap
        rows = max(0, usable // (self.toc_cell_height + self.toc_row_gap))
        return rows * self.toc_columns
