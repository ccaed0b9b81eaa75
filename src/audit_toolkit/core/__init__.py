"""
Audit Toolkit Core Package

Shared data models and utilities for the audit report engine.

- ``models``: Document, Section, Item, Status
- ``utils.serialization``: Loading audits from JSON
"""

from .models import Document, Item, Section, Status

__all__ = [
    "Document",
    "Item",
    "Section",
    "Status",
]
