"""
Module: report.images

Purpose:
    Image phase of the export. Decodes item screenshots, caps their
    size and re-encodes them for embedding.

Key Classes:
    - ImageProcessor: Decode + aspect-fit + JPEG re-encode
    - ResolvedImage: Fitted image ready for layout

Key Functions:
    - process_images(): Resolve all item images in parallel
    - fit_within(): Bounding-box scale factor

Dependencies:
    - PIL: Image manipulation

Used By:
    - report.controller: Export pipeline
    - report.layout: Block composition
"""

from .processor import (
    ImageProcessor,
    ResolvedImage,
    fit_within,
    process_images,
)

__all__ = [
    "ImageProcessor",
    "ResolvedImage",
    "fit_within",
    "process_images",
]
