"""
Module: report.layout

Purpose:
    Card measurement and pagination for audit reports.
    Converts checklist items into positioned content pages.

Key Functions:
    - compose_document(): Measure every item into a Block
    - paginate(): Arrange blocks onto pages

Key Classes:
    - LayoutConfig: Configuration for page layout
    - TextMeasurer: Font-metric word wrapping
    - Block: Measured card for one item
    - ReportLayout: Pages plus section->page map

Dependencies:
    - reportlab: Font metrics
    - report.images: ResolvedImage

Used By:
    - report.controller: Export pipeline
    - report.output: Drawing
"""

from .text import FontSpec, TextMeasurer
from .config import LayoutConfig
from .models import Block, SectionBlocks, PlacedBlock, Page, ReportLayout
from .composer import compose_block, compose_document
from .paginator import paginate

__all__ = [
    # Config
    "LayoutConfig",
    "FontSpec",
    "TextMeasurer",
    # Models
    "Block",
    "SectionBlocks",
    "PlacedBlock",
    "Page",
    "ReportLayout",
    # Functions
    "compose_block",
    "compose_document",
    "paginate",
]
