"""
Module: document

Purpose:
    Provides the Document dataclass - the complete audit handed to the
    report engine. Aggregate counts are always calculated from the items,
    never stored.

Key Classes:
    - Document: Ordered sections plus audit metadata (immutable)

Dependencies:
    - dataclasses (std)
    - functools (std)
    - .sections.Section, .sections.Item
    - .status.Status

Used By:
    - core.utils.serialization: JSON loading
    - report.controller: Export pipeline
    - report.output.cover: Cover summary
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import cached_property
from typing import Iterator, Optional

from .sections import Item, Section
from .status import Status


def _percent(part: int, whole: int) -> int:
    """Whole-number percentage, rounding halves up."""
    if whole <= 0:
        return 0
    return (part * 200 + whole) // (whole * 2)


@dataclass(frozen=True)
class Document:
    """
    Complete audit ready for export (immutable).

    Attributes:
        sections: Sections in display order
        author: Name of the person who prepared the audit
        date: Audit date as an ISO string like "2024-05-01"
        subject: What was audited, e.g. a website URL

    Invariants:
        - Section ids are unique
        - Item ids are unique across all sections
        - Counts are always calculated from items

    Example:
        >>> doc = Document(sections=(section,), author="Sam", date="2024-05-01",
        ...                subject="https://example.com")
        >>> doc.pass_rate
        50
    """

    sections: tuple[Section, ...] = ()
    author: str = ""
    date: str = ""
    subject: str = ""

    def __post_init__(self) -> None:
        """Validate identifiers on construction."""
        if not isinstance(self.sections, tuple):
            object.__setattr__(self, "sections", tuple(self.sections))

        section_ids: set[str] = set()
        item_ids: set[str] = set()
        for section in self.sections:
            if section.id in section_ids:
                raise ValueError(f"Duplicate section id: {section.id}")
            section_ids.add(section.id)
            for item in section.items:
                if item.id in item_ids:
                    raise ValueError(f"Duplicate item id: {item.id}")
                item_ids.add(item.id)

    def iter_items(self) -> Iterator[Item]:
        """Yield every item in document order."""
        for section in self.sections:
            yield from section.items

    def get_section(self, section_id: str) -> Optional[Section]:
        """Find a section by id."""
        return next((s for s in self.sections if s.id == section_id), None)

    # ─────────────────────────────────────────────────────────────────────────
    # Aggregates
    # ─────────────────────────────────────────────────────────────────────────

    @cached_property
    def total_items(self) -> int:
        return sum(section.item_count for section in self.sections)

    @cached_property
    def completed_items(self) -> int:
        return sum(section.completed_count for section in self.sections)

    @cached_property
    def passed_items(self) -> int:
        return self._count(Status.PASS)

    @cached_property
    def failed_items(self) -> int:
        return self._count(Status.FAIL)

    @cached_property
    def optional_items(self) -> int:
        return self._count(Status.OPTIONAL)

    @property
    def pass_rate(self) -> int:
        """Percentage of completed items that passed (0 if none completed)."""
        return _percent(self.passed_items, self.completed_items)

    @property
    def completion_rate(self) -> int:
        """Percentage of all items that carry a judgment."""
        return _percent(self.completed_items, self.total_items)

    def _count(self, status: Status) -> int:
        return sum(1 for item in self.iter_items() if item.status is status)
