"""
Module: report.layout.paginator

Purpose:
    Arrange blocks onto content pages using simple space-based placement.
    Blocks are atomic: a card is never split across pages.

Key Functions:
    - paginate(): Main pagination function

Algorithm:
    1. Optionally start a fresh page for each section
    2. For each block, check if it fits below the current offset
    3. If not, start a new page (unless the current page is still empty)
    4. Place the block and advance by its height plus the block gap

Dependencies:
    - report.layout.models: SectionBlocks, PlacedBlock, Page, ReportLayout
    - report.layout.config: LayoutConfig

Used By:
    - report.controller: Export pipeline
"""

from __future__ import annotations

import logging
from typing import Dict, List

from ..errors import ErrorKind, ExportWarning
from .config import LayoutConfig
from .models import Page, PlacedBlock, ReportLayout, SectionBlocks

logger = logging.getLogger(__name__)


def paginate(
    sections: List[SectionBlocks],
    config: LayoutConfig,
) -> ReportLayout:
    """
    Place every block on a content page.

    Rules:
    1. With ``section_page_breaks`` each non-empty section starts on a
       fresh page; otherwise it continues on the current page when its
       first block fits.
    2. A block that would cross the content bottom moves to a new page.
    3. A block taller than a whole page is placed alone and reported as
       a LAYOUT_OVERFLOW warning.

    Args:
        sections: Composed blocks grouped by section, in document order
        config: Layout configuration

    Returns:
        ReportLayout with pages, section->page map and warnings
    """
    pages: List[Page] = []
    warnings: List[ExportWarning] = []
    section_pages: Dict[str, int] = {}

    current: List[PlacedBlock] = []
    current_section = ""
    offset = config.content_top
    page_number = config.first_content_page

    def close_page() -> None:
        nonlocal current, offset, page_number
        pages.append(Page(
            number=page_number,
            section_id=current_section,
            placements=tuple(current),
            height_used=current[-1].bottom - config.content_top,
        ))
        page_number += 1
        current = []
        offset = config.content_top

    for group in sections:
        if not group.blocks:
            logger.debug(f"Section {group.section.id} has no items, skipping")
            continue

        if config.section_page_breaks and current:
            close_page()

        for block in group.blocks:
            if current and offset + block.height > config.content_bottom:
                close_page()

            if not current:
                current_section = block.section_id

            if block.height > config.content_height:
                logger.warning(
                    f"Block {block.item_id} overflows page {page_number}: "
                    f"{block.height}px needed, {config.content_height}px available"
                )
                warnings.append(ExportWarning(
                    kind=ErrorKind.LAYOUT_OVERFLOW,
                    message=(
                        f"Item '{block.item_id}' is taller than a page "
                        f"({block.height}px > {config.content_height}px) and runs past the page bottom"
                    ),
                    item_id=block.item_id,
                ))

            placed = PlacedBlock(block=block, page=page_number, top=offset)
            current.append(placed)
            section_pages.setdefault(group.section.id, page_number)
            offset = placed.bottom + config.block_gap

    if current:
        close_page()

    total = sum(p.placement_count for p in pages)
    logger.info(f"Paginated {total} blocks onto {len(pages)} content pages")

    return ReportLayout(
        pages=tuple(pages),
        section_pages=section_pages,
        warnings=tuple(warnings),
        first_content_page=config.first_content_page,
    )
