"""
Module: report.output

Purpose:
    PDF drawing for audit reports: cover, contents with links and
    content pages with running headers and footers.

Key Functions:
    - render_report(): Draw all pages onto a canvas
    - link_sections(): Contents links from the section->page map
    - toc_cell_rect(): Contents card geometry
    - unlisted_section_warnings(): Sections left off the contents page

Dependencies:
    - reportlab: PDF generation

Used By:
    - report.controller: Export pipeline
"""

from .navigation import (
    TocLink,
    link_sections,
    page_destination,
    toc_cell_rect,
    unlisted_section_warnings,
)
from .renderer import page_size, render_report

__all__ = [
    "TocLink",
    "link_sections",
    "page_destination",
    "toc_cell_rect",
    "unlisted_section_warnings",
    "page_size",
    "render_report",
]
