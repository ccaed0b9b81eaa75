"""
Module: sections

Purpose:
    Provides the Item and Section dataclasses. An Item is one checklist
    entry with its judgment, optional notes and optional screenshot; a
    Section groups Items under a title.

Key Classes:
    - Item: Single checklist entry (immutable)
    - Section: Titled, ordered group of Items (immutable)

Dependencies:
    - dataclasses (std)
    - .status.Status

Used By:
    - core.models.document.Document
    - report.layout.composer: Block composition
    - report.images.processor: Batch image resolution
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from .status import Status


def _require_text(owner: str, **fields: object) -> None:
    """Raise ValueError unless every field value is a str."""
    for name, value in fields.items():
        if not isinstance(value, str):
            raise ValueError(f"{owner}: {name} must be a string, got {type(value).__name__}")


@dataclass(frozen=True)
class Item:
    """
    Checklist entry (immutable).

    Status changes happen in the checklist form before a Document is
    handed to the report engine; the engine only reads Items.

    Attributes:
        id: Identifier, unique within the Document
        title: Short statement being checked
        description: One-line guidance shown under the title
        status: Judgment recorded for this item
        explanation: Free-text notes (blank text is treated as absent)
        image: Raw screenshot bytes, opaque until the image phase

    Example:
        >>> item = Item("hp-1", "Clear value proposition", "Visitors get it", Status.PASS)
        >>> item.has_explanation
        False
    """

    id: str
    title: str
    description: str = ""
    status: Status = Status.PENDING
    explanation: Optional[str] = None
    image: Optional[bytes] = field(default=None, repr=False)

    def __post_init__(self) -> None:
        """Validate item on construction."""
        if not isinstance(self.id, str) or not self.id:
            raise ValueError(f"Item id must be a non-empty string, got {self.id!r}")
        _require_text(f"Item {self.id}", title=self.title, description=self.description)
        if self.explanation is not None:
            _require_text(f"Item {self.id}", explanation=self.explanation)
        if not isinstance(self.status, Status):
            raise ValueError(f"Invalid status for item {self.id}: {self.status!r}")
        if self.image is not None and not isinstance(self.image, bytes):
            raise ValueError(
                f"Item {self.id}: image must be bytes, got {type(self.image).__name__}"
            )

    @property
    def has_explanation(self) -> bool:
        """True if the item carries non-blank notes."""
        return bool(self.explanation and self.explanation.strip())

    @property
    def has_image(self) -> bool:
        """True if the item carries screenshot bytes."""
        return bool(self.image)


@dataclass(frozen=True)
class Section:
    """
    Titled group of checklist items (immutable).

    Attributes:
        id: Identifier, unique within the Document
        title: Section heading
        description: Short summary shown on the table of contents
        items: Items in display order
    """

    id: str
    title: str
    description: str = ""
    items: tuple[Item, ...] = ()

    def __post_init__(self) -> None:
        """Validate section on construction."""
        if not isinstance(self.id, str) or not self.id:
            raise ValueError(f"Section id must be a non-empty string, got {self.id!r}")
        _require_text(f"Section {self.id}", title=self.title, description=self.description)
        # Accept lists from callers but store a tuple
        if not isinstance(self.items, tuple):
            object.__setattr__(self, "items", tuple(self.items))

    @property
    def item_count(self) -> int:
        """Number of items in this section."""
        return len(self.items)

    @property
    def completed_count(self) -> int:
        """Number of items that carry a judgment."""
        return sum(1 for item in self.items if item.status.is_completed)
