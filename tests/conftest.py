import io
import sys
from pathlib import Path

import pytest
from PIL import Image

# Add src to sys.path so we can import audit_toolkit
SRC_PATH = Path(__file__).resolve().parent.parent / "src"
if SRC_PATH.as_posix() not in sys.path:
    sys.path.insert(0, SRC_PATH.as_posix())

from audit_toolkit.core.models import Document, Item, Section, Status  # noqa: E402


def encode_image(width: int, height: int, mode: str = "RGB", fmt: str = "PNG", color="steelblue") -> bytes:
    """Encode a solid-colour image."""
    img = Image.new(mode, (width, height), color=color)
    buf = io.BytesIO()
    img.save(buf, format=fmt)
    return buf.getvalue()


# Common test fixtures
@pytest.fixture
def png_factory():
    """Factory producing PNG bytes of a given size."""
    return encode_image


@pytest.fixture
def sample_png() -> bytes:
    """A 1200x800 PNG (larger than the default 600x400 cap)."""
    return encode_image(1200, 800)


@pytest.fixture
def item_factory():
    """Factory to create items with sensible defaults."""
    counter = {"n": 0}

    def _create(
        status: Status = Status.PASS,
        title: str = "Headline states the offer",
        description: str = "The main headline explains what is offered and to whom.",
        explanation=None,
        image=None,
        item_id=None,
    ) -> Item:
        counter["n"] += 1
        return Item(
            id=item_id or f"item-{counter['n']}",
            title=title,
            description=description,
            status=status,
            explanation=explanation,
            image=image,
        )

    return _create


@pytest.fixture
def document_factory(item_factory):
    """
    Factory to create documents.

    ``layout`` is a list of item counts per section, or of item lists.
    """

    def _create(layout=(1,), subject="https://example.com", author="Jane Auditor", date="2024-05-01"):
        sections = []
        for index, entry in enumerate(layout):
            items = [item_factory() for _ in range(entry)] if isinstance(entry, int) else list(entry)
            sections.append(Section(
                id=f"section-{index + 1}",
                title=f"Section {index + 1}",
                description=f"Checks for section {index + 1}",
                items=tuple(items),
            ))
        return Document(sections=tuple(sections), author=author, date=date, subject=subject)

    return _create
