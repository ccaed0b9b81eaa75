"""
Module: report.layout.text

Purpose:
    Greedy word wrapping against real font metrics. The lines produced
    here are stored on each Block and drawn verbatim by the renderer, so
    measured height and drawn height cannot disagree.

Key Classes:
    - FontSpec: Font name, size and line height (layout pixels)
    - TextMeasurer: Width measurement and word wrapping

Dependencies:
    - reportlab.pdfbase: Font metrics and TrueType registration

Used By:
    - report.layout.composer: Block heights
    - report.output.cover: Table of contents card text
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

from reportlab.pdfbase import pdfmetrics
from reportlab.pdfbase.ttfonts import TTFont

from ..errors import MeasurementError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FontSpec:
    """
    Font used for one kind of text (immutable).

    Sizes are in layout pixels; the renderer converts them to points.

    Attributes:
        name: Registered reportlab font name, e.g. "Helvetica-Bold"
        size: Font size
        leading: Distance between consecutive baselines
    """

    name: str
    size: float
    leading: float

    def __post_init__(self) -> None:
        if self.size <= 0:
            raise ValueError(f"Font size must be positive: {self.size}")
        if self.leading < self.size:
            raise ValueError(f"Leading {self.leading} smaller than font size {self.size}")


class TextMeasurer:
    """
    Measures and wraps text using reportlab font metrics.

    The 14 standard PDF fonts are always available. Additional TrueType
    fonts can be supplied as ``{font_name: path_to_ttf}`` and are
    registered on construction.

    Example:
        >>> measurer = TextMeasurer()
        >>> measurer.wrap("a few short words", 60, FontSpec("Helvetica", 14, 22))
        ['a few', 'short', 'words']
    """

    def __init__(self, font_files: Optional[Mapping[str, Path]] = None) -> None:
        """
        Initialize measurer.

        Args:
            font_files: Optional TrueType fonts to register by name

        Raises:
            MeasurementError: If a font file cannot be registered
        """
        self._known_fonts: set[str] = set()
        for name, path in (font_files or {}).items():
            self._register_ttf(name, Path(path))

    def _register_ttf(self, name: str, path: Path) -> None:
        try:
            pdfmetrics.registerFont(TTFont(name, str(path)))
        except Exception as e:
            raise MeasurementError(f"Could not register font {name} from {path}: {e}") from e
        self._known_fonts.add(name)
        logger.debug(f"Registered TrueType font {name} from {path}")

    def ensure_font(self, font_name: str) -> None:
        """
        Check that metrics exist for a font.

        Raises:
            MeasurementError: If the font is not registered or known
        """
        if font_name in self._known_fonts:
            return
        try:
            pdfmetrics.getFont(font_name)
        except Exception as e:
            raise MeasurementError(f"No metrics for font {font_name!r}") from e
        self._known_fonts.add(font_name)

    def width(self, text: str, font: FontSpec) -> float:
        """Width of a single line of text in layout pixels."""
        self.ensure_font(font.name)
        try:
            return pdfmetrics.stringWidth(text, font.name, font.size)
        except Exception as e:
            raise MeasurementError(f"Could not measure text in {font.name}: {e}") from e

    def wrap(self, text: Optional[str], max_width: float, font: FontSpec) -> list[str]:
        """
        Wrap text into lines no wider than max_width.

        Words are accumulated greedily. A single word wider than max_width
        is kept whole on its own line. Newlines in the text always start
        a new line.

        Args:
            text: Text to wrap (None or blank gives no lines)
            max_width: Maximum line width in layout pixels
            font: Font used for measuring

        Returns:
            Wrapped lines in order

        Raises:
            MeasurementError: If the font has no metrics
        """
        if not text or not text.strip():
            return []
        self.ensure_font(font.name)
        if max_width <= 0:
            raise MeasurementError(f"Cannot wrap text into width {max_width}")

        lines: list[str] = []
        for paragraph in text.strip().splitlines():
            words = paragraph.split()
            if not words:
                lines.append("")
                continue

            current = words[0]
            for word in words[1:]:
                candidate = f"{current} {word}"
                if self.width(candidate, font) <= max_width:
                    current = candidate
                else:
                    lines.append(current)
                    current = word
            lines.append(current)

        return lines

    @staticmethod
    def text_height(lines: list[str], font: FontSpec) -> int:
        """Height taken by wrapped lines."""
        return round(len(lines) * font.leading)
