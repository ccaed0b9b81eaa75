"""
Module: status

Purpose:
    Provides the Status enum - the judgment recorded for one checklist item.

Key Classes:
    - Status: pass / fail / optional / pending

Dependencies:
    - enum (std)

Used By:
    - core.models.sections.Item
    - core.models.document.Document (aggregate counts)
    - report.styles: Badge treatment table
"""

from __future__ import annotations

from enum import Enum
from typing import Optional


class Status(str, Enum):
    """
    Judgment recorded for a checklist item.

    PENDING means the item has not been judged yet. Serialized audits
    written by the checklist form store this as ``null``.

    Example:
        >>> Status.parse("fail")
        <Status.FAIL: 'fail'>
        >>> Status.parse(None)
        <Status.PENDING: 'pending'>
    """

    PASS = "pass"
    FAIL = "fail"
    OPTIONAL = "optional"
    PENDING = "pending"

    @property
    def is_completed(self) -> bool:
        """True once the item carries a judgment."""
        return self is not Status.PENDING

    @classmethod
    def parse(cls, value: Optional[str]) -> Status:
        """
        Parse a stored status value.

        Args:
            value: Status string, or None for an unjudged item

        Returns:
            Matching Status

        Raises:
            ValueError: If value is not a known status
        """
        if value is None or value == "":
            return cls.PENDING
        if not isinstance(value, str):
            raise ValueError(f"Invalid status: {value!r}")
        try:
            return cls(value.strip().lower())
        except ValueError:
            raise ValueError(f"Invalid status: {value!r}") from None
