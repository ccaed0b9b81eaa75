"""
Module: report.errors

Purpose:
    Error kinds raised and collected while exporting a report.
    Fatal kinds abort the export before any file exists; non-fatal kinds
    are collected as ExportWarnings on a successful result.

Key Classes:
    - ErrorKind: Diagnostic category of a failure
    - ReportError: Base exception carrying an ErrorKind
    - ImageDecodeError: Image payload is not a readable raster (non-fatal)
    - MeasurementError: Font metrics unavailable (fatal)
    - SerializationError: PDF could not be produced or written (fatal)
    - ExportWarning: Non-fatal problem attached to an export result

Used By:
    - report.images.processor
    - report.layout.text, report.layout.paginator
    - report.controller
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class ErrorKind(str, Enum):
    """Diagnostic category of an export failure or warning."""

    DECODE_FAILED = "DecodeFailed"
    MEASUREMENT_FAILED = "MeasurementFailed"
    LAYOUT_OVERFLOW = "LayoutOverflow"
    SERIALIZATION_FAILED = "SerializationFailed"

    @property
    def is_fatal(self) -> bool:
        return self in (ErrorKind.MEASUREMENT_FAILED, ErrorKind.SERIALIZATION_FAILED)


class ReportError(Exception):
    """Base class for report engine errors."""

    kind: ErrorKind


class ImageDecodeError(ReportError):
    """Image bytes could not be decoded as a raster image."""

    kind = ErrorKind.DECODE_FAILED


class MeasurementError(ReportError):
    """Text could not be measured (missing font or metrics)."""

    kind = ErrorKind.MEASUREMENT_FAILED


class SerializationError(ReportError):
    """The PDF could not be rendered or written."""

    kind = ErrorKind.SERIALIZATION_FAILED


@dataclass(frozen=True)
class ExportWarning:
    """
    Non-fatal problem recorded during an export.

    Attributes:
        kind: DECODE_FAILED or LAYOUT_OVERFLOW
        message: Human-readable detail for diagnostics
        item_id: Item the warning concerns, if any
    """

    kind: ErrorKind
    message: str
    item_id: Optional[str] = None

    def __str__(self) -> str:
        return f"[{self.kind.value}] {self.message}"
