"""
Module: report.images.processor

Purpose:
    Decode item screenshots, cap their size and re-encode them as JPEG
    for embedding. Runs as a batch phase before layout so that layout
    stays a pure function of (Item, ResolvedImage).

Key Classes:
    - ResolvedImage: Decoded, size-capped image ready for embedding
    - ImageProcessor: Decode + aspect-fit + re-encode

Key Functions:
    - fit_within(): Uniform scale factor for a bounding box
    - process_images(): Resolve every item image in a thread pool

Dependencies:
    - PIL: Decoding, EXIF orientation, resizing, JPEG encoding
    - concurrent.futures: Parallel processing

Used By:
    - report.controller: Image phase of the export
    - report.layout.composer: Image display size
"""

from __future__ import annotations

import io
import logging
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Dict, List, Tuple

from PIL import Image, ImageOps, UnidentifiedImageError

from audit_toolkit.core.models import Document

from ..errors import ErrorKind, ExportWarning, ImageDecodeError

logger = logging.getLogger(__name__)

# Defaults
DEFAULT_MAX_WIDTH = 600
DEFAULT_MAX_HEIGHT = 400
DEFAULT_QUALITY = 80
DEFAULT_MAX_WORKERS = 4


@dataclass(frozen=True)
class ResolvedImage:
    """
    Image decoded and fitted for embedding (immutable).

    Attributes:
        source_width: Intrinsic width in pixels (after EXIF orientation)
        source_height: Intrinsic height in pixels
        width: Fitted width (exact, same aspect ratio as source)
        height: Fitted height (exact, same aspect ratio as source)
        encoded_width: Pixel width of the JPEG payload
        encoded_height: Pixel height of the JPEG payload
        payload: JPEG bytes

    Example:
        >>> img = ImageProcessor().process(png_bytes)  # 1200x800 source
        >>> (img.width, img.height)
        (600.0, 400.0)
    """

    source_width: int
    source_height: int
    width: float
    height: float
    encoded_width: int
    encoded_height: int
    payload: bytes = field(repr=False)

    @property
    def aspect_ratio(self) -> float:
        """Width divided by height of the fitted image."""
        return self.width / self.height


def fit_within(
    width: float,
    height: float,
    max_width: float,
    max_height: float,
) -> float:
    """
    Uniform scale factor that fits a box inside max_width x max_height.

    Never upscales: boxes already inside the limits get 1.0.

    Args:
        width: Source width (positive)
        height: Source height (positive)
        max_width: Bounding box width
        max_height: Bounding box height

    Returns:
        Scale factor in (0, 1]
    """
    return min(max_width / width, max_height / height, 1.0)


class ImageProcessor:
    """
    Decodes raw image bytes into ResolvedImages.

    Quality is a fixed setting: it bounds output size while keeping
    screenshots legible, and does not depend on image content.

    Attributes:
        max_width: Maximum fitted width
        max_height: Maximum fitted height
        quality: JPEG quality (1-95)
    """

    def __init__(
        self,
        max_width: int = DEFAULT_MAX_WIDTH,
        max_height: int = DEFAULT_MAX_HEIGHT,
        quality: int = DEFAULT_QUALITY,
    ) -> None:
        if max_width <= 0 or max_height <= 0:
            raise ValueError(f"Image limits must be positive: {max_width}x{max_height}")
        if not 1 <= quality <= 95:
            raise ValueError(f"JPEG quality must be between 1 and 95: {quality}")
        self.max_width = max_width
        self.max_height = max_height
        self.quality = quality

    def process(self, raw: bytes) -> ResolvedImage:
        """
        Decode, fit and re-encode an image.

        Args:
            raw: Image file bytes (PNG, JPEG, GIF, WebP...)

        Returns:
            ResolvedImage with fitted dimensions and JPEG payload

        Raises:
            ImageDecodeError: If raw is not a readable raster image
        """
        if not raw:
            raise ImageDecodeError("Image payload is empty")

        try:
            with Image.open(io.BytesIO(raw)) as source:
                source.load()
                img = ImageOps.exif_transpose(source)
        except (UnidentifiedImageError, Image.DecompressionBombError) as e:
            raise ImageDecodeError(f"Not a recognizable image: {e}") from e
        except (OSError, EOFError, ValueError, SyntaxError) as e:
            raise ImageDecodeError(f"Image data is corrupt: {e}") from e

        src_width, src_height = img.size
        if src_width <= 0 or src_height <= 0:
            raise ImageDecodeError(f"Image has no pixels: {src_width}x{src_height}")

        scale = fit_within(src_width, src_height, self.max_width, self.max_height)
        width = src_width * scale
        height = src_height * scale
        encoded_size = (max(1, round(width)), max(1, round(height)))

        buf = io.BytesIO()
        try:
            img = _flatten(img)
            if encoded_size != img.size:
                img = img.resize(encoded_size, Image.Resampling.LANCZOS)
            img.save(buf, format="JPEG", quality=self.quality, optimize=True)
        except (OSError, ValueError) as e:
            raise ImageDecodeError(f"Image could not be re-encoded: {e}") from e

        logger.debug(
            f"Resolved image {src_width}x{src_height} -> "
            f"{encoded_size[0]}x{encoded_size[1]} ({buf.tell()} bytes)"
        )

        return ResolvedImage(
            source_width=src_width,
            source_height=src_height,
            width=width,
            height=height,
            encoded_width=encoded_size[0],
            encoded_height=encoded_size[1],
            payload=buf.getvalue(),
        )


def _flatten(img: Image.Image) -> Image.Image:
    """Convert to RGB, compositing any transparency onto white."""
    if img.mode == "RGB":
        return img
    if img.mode in ("RGBA", "LA") or (img.mode == "P" and "transparency" in img.info):
        rgba = img.convert("RGBA")
        background = Image.new("RGB", rgba.size, "white")
        background.paste(rgba, mask=rgba.getchannel("A"))
        return background
    return img.convert("RGB")


def process_images(
    document: Document,
    processor: ImageProcessor,
    *,
    max_workers: int = DEFAULT_MAX_WORKERS,
) -> Tuple[Dict[str, ResolvedImage], List[ExportWarning]]:
    """
    Resolve every item image in the document.

    Images are processed in parallel; results are keyed by item id and
    warnings are reported in document order, so completion order never
    leaks into the report.

    Args:
        document: Document whose item images to resolve
        processor: Processor to apply
        max_workers: Thread pool size

    Returns:
        Tuple of:
        - Dict mapping item_id -> ResolvedImage (failed items absent)
        - DECODE_FAILED warnings for items whose image was unreadable
    """
    pending = [item for item in document.iter_items() if item.has_image]
    if not pending:
        return {}, []

    futures: Dict[str, Future] = {}
    with ThreadPoolExecutor(max_workers=max(1, max_workers)) as executor:
        for item in pending:
            futures[item.id] = executor.submit(processor.process, item.image)

    # Executor has exited: every future has settled
    images: Dict[str, ResolvedImage] = {}
    warnings: List[ExportWarning] = []
    for item in pending:
        try:
            images[item.id] = futures[item.id].result()
        except ImageDecodeError as e:
            logger.warning(f"Item {item.id}: image omitted ({e})")
            warnings.append(ExportWarning(
                kind=ErrorKind.DECODE_FAILED,
                message=f"Image for item '{item.id}' could not be decoded and was omitted: {e}",
                item_id=item.id,
            ))

    logger.info(f"Resolved {len(images)}/{len(pending)} item images")
    return images, warnings
