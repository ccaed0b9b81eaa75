"""
Core Models Package

Immutable, validated data models describing an audit.

All models in this package are frozen dataclasses. A Document is built
once per export request and is never mutated while a report is rendered,
so every stage of the report pipeline can read it without copying.
"""

from .status import Status
from .sections import Item, Section
from .document import Document

__all__ = [
    "Status",
    "Item",
    "Section",
    "Document",
]
