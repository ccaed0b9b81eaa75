"""
Audit report engine.

Turns a Document into a paginated PDF: cover summary, clickable table
of contents and one card per checklist item.

- ``controller``: export_report() pipeline
- ``images``: Screenshot decoding and fitting
- ``layout``: Card measurement and pagination
- ``output``: PDF drawing and contents links
"""

from .config import ExportConfig
from .controller import ExportError, ExportResult, export_report, report_filename
from .errors import ErrorKind, ExportWarning, ReportError
from .layout import LayoutConfig

__all__ = [
    "ExportConfig",
    "LayoutConfig",
    "ExportError",
    "ExportResult",
    "export_report",
    "report_filename",
    "ErrorKind",
    "ExportWarning",
    "ReportError",
]
