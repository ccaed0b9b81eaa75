"""Utilities shared by the audit toolkit."""

from .serialization import LoaderError, document_from_dict, load_document

__all__ = [
    "LoaderError",
    "document_from_dict",
    "load_document",
]
