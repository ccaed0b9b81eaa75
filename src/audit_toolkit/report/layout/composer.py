"""
Module: report.layout.composer

Purpose:
    Compose measured Blocks from checklist items.
    Wraps every text run, sizes the status badge, fits the image into the
    card and records where each sub-region sits inside the card.

Key Functions:
    - compose_block(): Create the Block for a single item
    - compose_document(): Create Blocks for every item, grouped by section

Block anatomy (top to bottom)::

    card padding (accent strip drawn inside it)
    title lines                 + title gap
    description lines           + description gap
    status badge
    [callout margin + explanation callout]
    [image margin + image]
    card padding

Dependencies:
    - report.layout.text: TextMeasurer
    - report.images: ResolvedImage, fit_within
    - report.styles: STATUS_STYLES

Used By:
    - report.layout.paginator: Page layout
    - report.controller: Export pipeline
"""

from __future__ import annotations

import logging
import math
from typing import List, Mapping, Optional

from audit_toolkit.core.models import Document, Item

from ..images import ResolvedImage, fit_within
from ..styles import STATUS_STYLES
from .config import LayoutConfig
from .models import Block, SectionBlocks
from .text import TextMeasurer

logger = logging.getLogger(__name__)


def compose_block(
    item: Item,
    section_id: str,
    image: Optional[ResolvedImage],
    measurer: TextMeasurer,
    config: LayoutConfig,
) -> Block:
    """
    Measure the card for one item.

    Pure with respect to its inputs: the same item, image, fonts and
    config always give the same Block.

    Args:
        item: Checklist item to lay out
        section_id: Id of the section owning the item
        image: Resolved image for the item, or None
        measurer: Text measurer for wrapping
        config: Layout configuration

    Returns:
        Block with height, wrapped lines and sub-region offsets

    Raises:
        MeasurementError: If a configured font has no metrics
    """
    style = STATUS_STYLES[item.status]
    inner_width = config.card_inner_width

    y = config.card_padding

    title_lines = measurer.wrap(item.title, inner_width, config.title_font)
    title_top = y
    y += measurer.text_height(title_lines, config.title_font)
    if title_lines:
        y += config.title_gap

    description_lines = measurer.wrap(item.description, inner_width, config.description_font)
    description_top = y
    y += measurer.text_height(description_lines, config.description_font)
    if description_lines:
        y += config.description_gap

    badge_top = y
    y += config.badge_height
    badge_width = measurer.width(style.label, config.badge_font) + 2 * config.badge_padding_x

    explanation_heading = None
    explanation_lines: List[str] = []
    callout_top = 0
    callout_height = 0
    if item.has_explanation:
        explanation_heading = style.callout_heading
        explanation_lines = measurer.wrap(
            item.explanation, config.callout_text_width, config.explanation_font
        )
        y += config.callout_margin
        callout_top = y
        callout_height = (
            2 * config.callout_padding
            + round(config.heading_font.leading)
            + config.heading_gap
            + measurer.text_height(explanation_lines, config.explanation_font)
        )
        y += callout_height

    image_width = 0.0
    image_height = 0
    image_top = 0
    if image is not None:
        scale = fit_within(image.width, image.height, inner_width, math.inf)
        image_width = image.width * scale
        image_height = math.ceil(image.height * scale)
        y += config.image_margin
        image_top = y
        y += image_height

    y += config.card_padding

    return Block(
        item_id=item.id,
        section_id=section_id,
        status=item.status,
        height=y,
        title_lines=tuple(title_lines),
        description_lines=tuple(description_lines),
        badge_label=style.label,
        badge_width=badge_width,
        title_top=title_top,
        description_top=description_top,
        badge_top=badge_top,
        explanation_heading=explanation_heading,
        explanation_lines=tuple(explanation_lines),
        callout_top=callout_top,
        callout_height=callout_height,
        image=image,
        image_width=image_width,
        image_height=image_height,
        image_top=image_top,
    )


def compose_document(
    document: Document,
    images: Mapping[str, ResolvedImage],
    measurer: TextMeasurer,
    config: LayoutConfig,
) -> List[SectionBlocks]:
    """
    Create Blocks for every item of a document.

    Args:
        document: Document to lay out
        images: Resolved images keyed by item id (missing = no image)
        measurer: Text measurer for wrapping
        config: Layout configuration

    Returns:
        One SectionBlocks per section, in document order

    Example:
        >>> groups = compose_document(doc, images, TextMeasurer(), LayoutConfig())
        >>> sum(len(g.blocks) for g in groups) == doc.total_items
        True
    """
    groups: List[SectionBlocks] = []
    for section in document.sections:
        blocks = tuple(
            compose_block(item, section.id, images.get(item.id), measurer, config)
            for item in section.items
        )
        groups.append(SectionBlocks(section=section, blocks=blocks))

    total = sum(len(g.blocks) for g in groups)
    logger.info(f"Composed {total} blocks from {len(groups)} sections")

    return groups
