"""
Module: report.config

Purpose:
    Configuration dataclass for the report export pipeline. Immutable
    configuration with validation on construction.

Key Classes:
    - ExportConfig: Main configuration for exporting a report

Dependencies:
    - dataclasses (std)
    - pathlib (std)
    - report.layout.config: LayoutConfig

Used By:
    - report.controller: Export pipeline
    - report.output: Cover text and footer
    - cli: Command line options
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict

from .images.processor import (
    DEFAULT_MAX_HEIGHT,
    DEFAULT_MAX_WIDTH,
    DEFAULT_MAX_WORKERS,
    DEFAULT_QUALITY,
)
from .layout.config import LayoutConfig


@dataclass(frozen=True)
class ExportConfig:
    """
    Configuration for exporting a report (immutable).

    Attributes:
        output_dir: Directory the PDF is written to
        layout: Page geometry and fonts
        image_max_width: Bounding box width for embedded images
        image_max_height: Bounding box height for embedded images
        image_quality: JPEG quality for embedded images (1-95)
        max_workers: Thread pool size for image processing
        file_prefix: First part of the generated file name
        report_title: Title on the cover page
        report_subtitle: Subtitle on the cover page
        font_files: Extra TrueType fonts, font name -> .ttf path

    Example:
        >>> config = ExportConfig(
        ...     output_dir=Path("reports"),
        ...     layout=LayoutConfig(section_page_breaks=False),
        ... )
    """

    # Output
    output_dir: Path = field(default_factory=Path.cwd)
    file_prefix: str = "Audit-Report"

    # Layout
    layout: LayoutConfig = field(default_factory=LayoutConfig)
    font_files: Dict[str, Path] = field(default_factory=dict)

    # Images
    image_max_width: int = DEFAULT_MAX_WIDTH
    image_max_height: int = DEFAULT_MAX_HEIGHT
    image_quality: int = DEFAULT_QUALITY
    max_workers: int = DEFAULT_MAX_WORKERS

    # Cover
    report_title: str = "Conversion Rate Optimization"
    report_subtitle: str = "Analysis Report"

    def __post_init__(self) -> None:
        """Validate configuration on construction."""
        object.__setattr__(self, "output_dir", Path(self.output_dir))
        if self.image_max_width <= 0 or self.image_max_height <= 0:
            raise ValueError(
                f"Image limits must be positive: {self.image_max_width}x{self.image_max_height}"
            )
        if not 1 <= self.image_quality <= 95:
            raise ValueError(f"image_quality must be between 1 and 95: {self.image_quality}")
        if self.max_workers < 1:
            raise ValueError(f"max_workers must be at least 1: {self.max_workers}")
        if not self.file_prefix.strip():
            raise ValueError("file_prefix must not be empty")
