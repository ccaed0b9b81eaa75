"""
Module: report.layout.models

Purpose:
    Data models for report layout.
    Immutable dataclasses representing blocks, placements and pages.

Key Classes:
    - Block: Measured card for one item, with pre-wrapped text
    - SectionBlocks: A section and its blocks, input to pagination
    - PlacedBlock: Block positioned on a page
    - Page: Complete content page layout
    - ReportLayout: Pagination output with section->page map

Dependencies:
    - dataclasses (std)
    - report.images: ResolvedImage

Used By:
    - report.layout.composer: Creates Blocks
    - report.layout.paginator: Creates Pages and ReportLayout
    - report.output.renderer: Draws PlacedBlocks
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterator, Optional

from audit_toolkit.core.models import Section, Status

from ..errors import ExportWarning
from ..images import ResolvedImage


@dataclass(frozen=True)
class Block:
    """
    Measured card for one item (immutable).

    All ``*_top`` offsets are relative to the top edge of the card. The
    renderer draws at exactly these offsets and draws the stored lines
    verbatim, so a card always occupies the height measured here.

    Attributes:
        item_id: Item identifier
        section_id: Owning section identifier
        status: Item status (selects badge treatment)
        height: Total card height in pixels
        title_lines: Wrapped title
        description_lines: Wrapped description
        badge_label: Text inside the status badge
        badge_width: Badge width including padding
        explanation_heading: Callout heading, None without explanation
        explanation_lines: Wrapped notes (empty without explanation)
        image: Resolved screenshot, None without image
        image_width: Display width of the image
        image_height: Display height of the image
        title_top: Offset of the first title line box
        description_top: Offset of the first description line box
        badge_top: Offset of the badge
        callout_top: Offset of the explanation callout
        callout_height: Height of the explanation callout
        image_top: Offset of the image
    """

    item_id: str
    section_id: str
    status: Status
    height: int
    title_lines: tuple[str, ...]
    description_lines: tuple[str, ...]
    badge_label: str
    badge_width: float
    title_top: int
    description_top: int
    badge_top: int
    explanation_heading: Optional[str] = None
    explanation_lines: tuple[str, ...] = ()
    callout_top: int = 0
    callout_height: int = 0
    image: Optional[ResolvedImage] = field(default=None, repr=False)
    image_width: float = 0.0
    image_height: int = 0
    image_top: int = 0

    @property
    def has_explanation(self) -> bool:
        return self.explanation_heading is not None

    @property
    def has_image(self) -> bool:
        return self.image is not None


@dataclass(frozen=True)
class SectionBlocks:
    """
    A section with its composed blocks, in item order.

    Attributes:
        section: Source section
        blocks: One Block per item
    """

    section: Section
    blocks: tuple[Block, ...]


@dataclass(frozen=True)
class PlacedBlock:
    """
    A block positioned on a page.

    Attributes:
        block: The Block to draw
        page: Page number (1-indexed, cover is page 1)
        top: Y offset from page top (in pixels)

    Example:
        >>> placed = PlacedBlock(block, page=3, top=104)
        >>> placed.bottom
        404  # top + block.height
    """

    block: Block
    page: int
    top: int

    @property
    def bottom(self) -> int:
        """Bottom Y coordinate (top + height)."""
        return self.top + self.block.height


@dataclass(frozen=True)
class Page:
    """
    Complete layout plan for a single content page.

    Attributes:
        number: Page number (1-indexed)
        section_id: Section named in the running header
        placements: PlacedBlocks in top-to-bottom order
        height_used: Vertical space used below the content top
    """

    number: int
    section_id: str
    placements: tuple[PlacedBlock, ...]
    height_used: int

    @property
    def placement_count(self) -> int:
        """Number of blocks on this page."""
        return len(self.placements)

    @property
    def is_empty(self) -> bool:
        return len(self.placements) == 0


@dataclass(frozen=True)
class ReportLayout:
    """
    Final pagination output with diagnostics.

    Attributes:
        pages: Content pages in order
        section_pages: Section id -> page number of its first block
        warnings: LAYOUT_OVERFLOW warnings
        first_content_page: Page number of the first content page

    Example:
        >>> layout = paginate(sections, LayoutConfig())
        >>> layout.total_pages
        5  # cover + contents + 3 content pages
    """

    pages: tuple[Page, ...]
    section_pages: Dict[str, int] = field(default_factory=dict)
    warnings: tuple[ExportWarning, ...] = ()
    first_content_page: int = 3

    @property
    def page_count(self) -> int:
        """Number of content pages."""
        return len(self.pages)

    @property
    def total_pages(self) -> int:
        """Number of pages in the document including cover and contents."""
        return self.first_content_page - 1 + self.page_count

    @property
    def total_placements(self) -> int:
        """Total number of blocks across all pages."""
        return sum(p.placement_count for p in self.pages)

    def iter_placements(self) -> Iterator[PlacedBlock]:
        """Yield every PlacedBlock in document order."""
        for page in self.pages:
            yield from page.placements
