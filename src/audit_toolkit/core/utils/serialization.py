"""
Serialization Utilities

Builds Document models from the JSON audit files written by the checklist
form.

Accepted shape::

    {
      "auditData": {"preparedBy": "...", "date": "2024-05-01", "websiteUrl": "..."},
      "sections": [
        {"id": "homepage", "title": "...", "description": "...",
         "items": [{"id": "hp-1", "title": "...", "description": "...",
                    "status": "fail", "explanation": "...",
                    "image": "screens/hp-1.png"}]}
      ]
    }

Metadata may also sit at the top level, and ``author``/``subject`` are
accepted as aliases of ``preparedBy``/``websiteUrl``. ``status`` may be
``null`` (pending). ``image`` is a path relative to the JSON file or an
inline ``data:`` URI.
"""

from __future__ import annotations

import base64
import binascii
import json
import logging
from pathlib import Path
from typing import Any, Optional

from ..models import Document, Item, Section, Status

logger = logging.getLogger(__name__)


class LoaderError(Exception):
    """Raised when an audit file cannot be turned into a Document."""
    pass


def load_document(path: Path) -> Document:
    """
    Load a Document from a JSON audit file.

    Args:
        path: Path to the audit JSON file

    Returns:
        Document instance

    Raises:
        LoaderError: If the file is missing, not JSON, or malformed
    """
    path = Path(path)
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except FileNotFoundError as e:
        raise LoaderError(f"Audit file not found: {path}") from e
    except OSError as e:
        raise LoaderError(f"Could not read audit file {path}: {e}") from e
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise LoaderError(f"Audit file is not valid JSON: {path}: {e}") from e

    return document_from_dict(data, base_path=path.parent)


def document_from_dict(
    data: dict[str, Any],
    *,
    base_path: Optional[Path] = None,
) -> Document:
    """
    Deserialize a Document from a dictionary.

    Args:
        data: Dictionary from JSON
        base_path: Directory that relative image paths are resolved against

    Returns:
        Document instance

    Raises:
        LoaderError: If required fields are missing or values are invalid
    """
    if not isinstance(data, dict):
        raise LoaderError(f"Audit data must be an object, got {type(data).__name__}")

    meta = data.get("auditData") or data
    if not isinstance(meta, dict):
        raise LoaderError(f"'auditData' must be an object, got {type(meta).__name__}")
    sections_data = data.get("sections")
    if not isinstance(sections_data, list):
        raise LoaderError("Audit data has no 'sections' list")

    try:
        sections = tuple(
            _section_from_dict(section, base_path) for section in sections_data
        )
        return Document(
            sections=sections,
            author=str(meta.get("preparedBy", meta.get("author", "")) or ""),
            date=str(meta.get("date", "") or ""),
            subject=str(meta.get("websiteUrl", meta.get("subject", "")) or ""),
        )
    except (AttributeError, KeyError, TypeError, ValueError) as e:
        raise LoaderError(f"Invalid audit data: {e}") from e


def _section_from_dict(data: dict[str, Any], base_path: Optional[Path]) -> Section:
    return Section(
        id=data["id"],
        title=data["title"],
        description=data.get("description", ""),
        items=tuple(_item_from_dict(item, base_path) for item in data.get("items", [])),
    )


def _item_from_dict(data: dict[str, Any], base_path: Optional[Path]) -> Item:
    return Item(
        id=data["id"],
        title=data["title"],
        description=data.get("description", ""),
        status=Status.parse(data.get("status")),
        explanation=data.get("explanation") or None,
        image=_read_image(data.get("image"), data["id"], base_path),
    )


def _read_image(ref: Optional[str], item_id: str, base_path: Optional[Path]) -> Optional[bytes]:
    """
    Resolve an item's image reference to raw bytes.

    Missing files are logged and treated as no image; the checklist form
    may reference screenshots that were never copied alongside the audit.
    """
    if not ref:
        return None
    if not isinstance(ref, str):
        raise ValueError(f"Item {item_id}: image must be a path or data URI, got {type(ref).__name__}")

    if ref.startswith("data:"):
        _, _, encoded = ref.partition(",")
        try:
            return base64.b64decode(encoded, validate=True)
        except (binascii.Error, ValueError):
            logger.warning(f"Item {item_id}: image data URI is not valid base64")
            return None

    image_path = Path(ref)
    if base_path is not None and not image_path.is_absolute():
        image_path = base_path / image_path

    try:
        return image_path.read_bytes()
    except OSError as e:
        logger.warning(f"Item {item_id}: could not read image {image_path}: {e}")
        return None
