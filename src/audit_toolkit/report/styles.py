"""
Module: report.styles

Purpose:
    Colour palette and the status treatment table. Every status-dependent
    visual (badge label, badge colours, card accent, callout heading) is
    looked up here; nothing else branches on Status for styling.

Key Classes:
    - Colors: Report palette (hex strings)
    - StatusStyle: Visual treatment for one Status

Key Constants:
    - STATUS_STYLES: Status -> StatusStyle

Used By:
    - report.layout.composer: Badge label and callout heading
    - report.output.renderer: Card and badge drawing
"""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping

from audit_toolkit.core.models import Status


class Colors:
    # Brand
    ACCENT = "#F2CA05"
    ACCENT_DARK = "#E6B400"
    ACCENT_TINT = "#FEF8D6"
    ACCENT_TEXT = "#B45309"

    # Surfaces
    COVER_BACKGROUND = "#2F2F2F"
    COVER_PANEL = "#3A3A32"
    PAGE_BACKGROUND = "#FFFFFF"
    TOC_BACKGROUND = "#F8F9FA"
    CARD_BACKGROUND = "#FFFFFF"
    CARD_BORDER = "#E2E8F0"
    CALLOUT_BACKGROUND = "#F8FAFC"
    HEADER_BACKGROUND = "#363636"

    # Text
    TEXT_PRIMARY = "#1E293B"
    TEXT_SECONDARY = "#64748B"
    TEXT_BODY = "#475569"
    TEXT_ON_DARK = "#FFFFFF"
    TEXT_FOOTER = "#666666"

    # Statistics
    STAT_PASSED = "#22C55E"
    STAT_FAILED = "#EF4444"


@dataclass(frozen=True)
class StatusStyle:
    """
    Visual treatment for one status.

    Attributes:
        label: Badge text
        background: Badge fill
        text: Badge text colour
        border: Badge outline and card accent colour
        callout_heading: Heading drawn above the item's notes
    """

    label: str
    background: str
    text: str
    border: str
    callout_heading: str


STATUS_STYLES: Mapping[Status, StatusStyle] = MappingProxyType({
    Status.PASS: StatusStyle(
        label="PASS",
        background="#DCFCE7",
        text="#166534",
        border="#22C55E",
        callout_heading="Notes",
    ),
    Status.FAIL: StatusStyle(
        label="FAIL",
        background="#FEF2F2",
        text="#DC2626",
        border="#EF4444",
        callout_heading="Issue & Recommendations",
    ),
    Status.OPTIONAL: StatusStyle(
        label="OPTIONAL",
        background="#FFF3CD",
        text="#856404",
        border="#F2CA05",
        callout_heading="Optional Notes",
    ),
    Status.PENDING: StatusStyle(
        label="PENDING",
        background="#F1F5F9",
        text="#64748B",
        border="#CBD5E1",
        callout_heading="Notes",
    ),
})
