"""
Module: report.output.navigation

Purpose:
    Table of contents geometry and links. Runs after pagination, when
    the section->page map is final.

Key Classes:
    - TocLink: Clickable contents card targeting a content page

Key Functions:
    - toc_cell_rect(): Rectangle of the Nth contents card
    - link_sections(): Build TocLinks from the section->page map
    - page_destination(): Named PDF destination of a page
    - unlisted_section_warnings(): Warnings for sections past the grid capacity

Dependencies:
    - report.layout.config: Contents grid constants

Used By:
    - report.output.cover: Draws cards at toc_cell_rect
    - report.output.renderer: Registers page destinations
    - report.controller: Link phase
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Mapping, Sequence, Tuple

from audit_toolkit.core.models import Section

from ..errors import ErrorKind, ExportWarning
from ..layout.config import LayoutConfig

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TocLink:
    """
    Clickable contents card (immutable).

    Rectangle is in layout pixels with a top-left origin.

    Attributes:
        section_id: Section the card describes
        x: Left edge
        y: Top edge
        width: Card width
        height: Card height
        target_page: Page number the link jumps to
    """

    section_id: str
    x: float
    y: float
    width: float
    height: float
    target_page: int

    @property
    def destination(self) -> str:
        """Named destination of the target page."""
        return page_destination(self.target_page)


def page_destination(page_number: int) -> str:
    """Name under which a page is registered as a PDF destination."""
    return f"page-{page_number}"


def toc_cell_rect(index: int, config: LayoutConfig) -> Tuple[float, float, float, float]:
    """
    Rectangle of the contents card at a position in the grid.

    Cards fill rows left to right in section order.

    Args:
        index: Zero-based section index
        config: Layout configuration

    Returns:
        (x, y, width, height) in layout pixels, top-left origin
    """
    row, column = divmod(index, config.toc_columns)
    width = config.toc_cell_width
    x = config.margin_left + column * (width + config.toc_column_gap)
    y = config.toc_top + row * (config.toc_cell_height + config.toc_row_gap)
    return (x, y, width, config.toc_cell_height)


def link_sections(
    sections: Sequence[Section],
    section_pages: Mapping[str, int],
    config: LayoutConfig,
) -> List[TocLink]:
    """
    Create one link per section that has content.

    Sections without an entry in section_pages (no items) and sections
    beyond the contents grid's capacity get no link.

    Args:
        sections: Sections in document order
        section_pages: Section id -> page of its first block
        config: Layout configuration

    Returns:
        TocLinks in section order
    """
    links: List[TocLink] = []
    capacity = config.toc_capacity

    for index, section in enumerate(sections):
        target = section_pages.get(section.id)
        if target is None:
            logger.debug(f"Section {section.id} has no content page, no link")
            continue
        if index >= capacity:
            logger.debug(f"Section {section.id} is past the contents grid, no link")
            continue

        x, y, width, height = toc_cell_rect(index, config)
        links.append(TocLink(
            section_id=section.id,
            x=x,
            y=y,
            width=width,
            height=height,
            target_page=target,
        ))

    logger.debug(f"Linked {len(links)}/{len(sections)} contents cards")
    return links


def unlisted_section_warnings(
    sections: Sequence[Section],
    config: LayoutConfig,
) -> List[ExportWarning]:
    """
    One warning per section that gets no contents card.

    The contents page holds ``config.toc_capacity`` cards; later sections
    still have their content pages but cannot be reached from page 2.

    Args:
        sections: Sections in document order
        config: Layout configuration

    Returns:
        LAYOUT_OVERFLOW warnings in section order (empty if all fit)
    """
    capacity = config.toc_capacity
    warnings: List[ExportWarning] = []
    for section in sections[capacity:]:
        message = (
            f"Section '{section.title}' does not fit on the contents page "
            f"({capacity} entries) and has no contents card or link"
        )
        logger.warning(message)
        warnings.append(ExportWarning(ErrorKind.LAYOUT_OVERFLOW, message))
    return warnings
