"""
Tests for image decoding, fitting and the parallel batch phase.
"""

import io
import time
from unittest.mock import patch

import pytest
from PIL import Image

from audit_toolkit.core.models import Document, Item, Section
from audit_toolkit.report.errors import ErrorKind, ImageDecodeError
from audit_toolkit.report.images import ImageProcessor, ResolvedImage, fit_within, process_images


class TestFitWithin:
    """Tests for the bounding-box scale factor."""

    def test_when_larger_than_box_then_scales_down(self):
        assert fit_within(1200, 800, 600, 400) == pytest.approx(0.5)

    def test_when_smaller_than_box_then_never_upscales(self):
        assert fit_within(100, 50, 600, 400) == 1.0

    def test_when_tall_then_height_limits(self):
        assert fit_within(300, 1600, 600, 400) == pytest.approx(0.25)


class TestImageProcessor:
    """Tests for ImageProcessor.process."""

    def test_when_large_image_then_fits_cap_and_keeps_ratio(self, png_factory):
        # Arrange
        processor = ImageProcessor(max_width=600, max_height=400)

        # Act
        result = processor.process(png_factory(1200, 800))

        # Assert
        assert (result.source_width, result.source_height) == (1200, 800)
        assert (result.width, result.height) == (600.0, 400.0)
        assert (result.encoded_width, result.encoded_height) == (600, 400)

    def test_when_small_image_then_not_upscaled(self, png_factory):
        result = ImageProcessor().process(png_factory(120, 80))
        assert (result.width, result.height) == (120, 80)
        assert (result.encoded_width, result.encoded_height) == (120, 80)

    @pytest.mark.parametrize("size", [(1, 900), (900, 1), (1, 1), (2000, 3), (3, 2000), (601, 401)])
    def test_aspect_ratio_preserved_for_extreme_shapes(self, png_factory, size):
        # Arrange
        width, height = size

        # Act
        result = ImageProcessor().process(png_factory(width, height))

        # Assert
        assert result.width <= 600 and result.height <= 400
        assert result.aspect_ratio == pytest.approx(width / height)
        assert result.encoded_width >= 1 and result.encoded_height >= 1

    def test_payload_is_jpeg_of_encoded_size(self, png_factory):
        result = ImageProcessor().process(png_factory(1000, 1000))
        with Image.open(io.BytesIO(result.payload)) as img:
            assert img.format == "JPEG"
            assert img.size == (result.encoded_width, result.encoded_height)

    def test_when_transparent_then_flattened_to_rgb(self, png_factory):
        raw = png_factory(40, 40, mode="RGBA", color=(255, 0, 0, 0))
        result = ImageProcessor().process(raw)
        with Image.open(io.BytesIO(result.payload)) as img:
            assert img.mode == "RGB"
            r, g, b = img.getpixel((20, 20))
            assert min(r, g, b) > 240  # white background

    def test_when_bytes_not_an_image_then_raises_decode_error(self):
        with pytest.raises(ImageDecodeError) as exc_info:
            ImageProcessor().process(b"definitely not an image")
        assert exc_info.value.kind is ErrorKind.DECODE_FAILED

    def test_when_truncated_then_raises_decode_error(self, png_factory):
        raw = png_factory(300, 300)
        with pytest.raises(ImageDecodeError):
            ImageProcessor().process(raw[: len(raw) // 3])

    def test_when_empty_then_raises_decode_error(self):
        with pytest.raises(ImageDecodeError):
            ImageProcessor().process(b"")

    @pytest.mark.parametrize("error", [OSError("encoder error -2"), ValueError("bad mode")])
    def test_when_reencode_fails_then_raises_decode_error(self, png_factory, error):
        # Arrange
        raw = png_factory(800, 600)

        # Act
        with patch("PIL.Image.Image.save", side_effect=error):
            with pytest.raises(ImageDecodeError, match="re-encoded") as exc_info:
                ImageProcessor().process(raw)

        # Assert
        assert exc_info.value.__cause__ is error

    def test_when_resize_fails_then_only_that_item_degrades(self, png_factory):
        # Arrange
        doc = Document(sections=(Section(id="s", title="S", items=(
            Item(id="big", title="Big", image=png_factory(1200, 900)),
            Item(id="small", title="Small", image=png_factory(40, 30)),
        )),))

        # Act: only images larger than the cap are resized
        with patch("PIL.Image.Image.resize", side_effect=OSError("out of memory")):
            images, warnings = process_images(doc, ImageProcessor(), max_workers=2)

        # Assert
        assert list(images) == ["small"]
        assert [w.item_id for w in warnings] == ["big"]
        assert warnings[0].kind is ErrorKind.DECODE_FAILED

    def test_when_exif_rotated_then_uses_displayed_orientation(self):
        # Arrange: 200x100 stored, orientation 6 = rotate 90 degrees on display
        img = Image.new("RGB", (200, 100), "white")
        exif = Image.Exif()
        exif[0x0112] = 6
        buf = io.BytesIO()
        img.save(buf, format="JPEG", exif=exif)

        # Act
        result = ImageProcessor().process(buf.getvalue())

        # Assert
        assert (result.source_width, result.source_height) == (100, 200)

    @pytest.mark.parametrize("kwargs", [
        {"max_width": 0},
        {"max_height": -1},
        {"quality": 0},
        {"quality": 100},
    ])
    def test_invalid_settings_raise(self, kwargs):
        with pytest.raises(ValueError):
            ImageProcessor(**kwargs)


class TestProcessImages:
    """Tests for the batch phase."""

    def test_when_no_images_then_empty_results(self, document_factory):
        images, warnings = process_images(document_factory(layout=(3,)), ImageProcessor())
        assert images == {}
        assert warnings == []

    def test_results_keyed_by_item_and_failures_become_warnings(self, png_factory):
        # Arrange
        doc = Document(sections=(
            Section(id="s", title="S", items=(
                Item(id="a", title="A", image=png_factory(800, 800)),
                Item(id="b", title="B", image=b"garbage"),
                Item(id="c", title="C"),
                Item(id="d", title="D", image=png_factory(50, 20)),
            )),
        ))

        # Act
        images, warnings = process_images(doc, ImageProcessor(), max_workers=3)

        # Assert
        assert set(images) == {"a", "d"}
        assert isinstance(images["a"], ResolvedImage)
        assert len(warnings) == 1
        assert warnings[0].kind is ErrorKind.DECODE_FAILED
        assert warnings[0].item_id == "b"

    def test_warnings_follow_document_order_not_completion_order(self):
        # Arrange: the first item fails last
        doc = Document(sections=(
            Section(id="s", title="S", items=tuple(
                Item(id=f"i{n}", title="T", image=f"bad{n}".encode()) for n in range(4)
            )),
        ))
        processor = ImageProcessor()

        def slow_first(raw):
            if raw == b"bad0":
                time.sleep(0.05)
            raise ImageDecodeError("bad")

        # Act
        with patch.object(processor, "process", side_effect=slow_first):
            _, warnings = process_images(doc, processor, max_workers=4)

        # Assert
        assert [w.item_id for w in warnings] == ["i0", "i1", "i2", "i3"]
