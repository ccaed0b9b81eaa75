"""
Unit tests for Block composition.

Heights below use the default LayoutConfig: card padding 24, title
leading 25 + gap 12, description leading 22 + gap 16, badge 30,
callout margin 16 + padding 2x18 + heading 20 + gap 8, image margin 16.
"""

import pytest

from audit_toolkit.core.models import Status
from audit_toolkit.report.images import ResolvedImage
from audit_toolkit.report.layout import LayoutConfig, TextMeasurer, compose_block, compose_document
from audit_toolkit.report.styles import STATUS_STYLES

MINIMAL_HEIGHT = 24 + 25 + 12 + 22 + 16 + 30 + 24
CALLOUT_EXTRA = 16 + 36 + 20 + 8 + 22


def _image(width, height):
    return ResolvedImage(
        source_width=int(width),
        source_height=int(height),
        width=float(width),
        height=float(height),
        encoded_width=int(width),
        encoded_height=int(height),
        payload=b"",
    )


@pytest.fixture
def config():
    return LayoutConfig()


@pytest.fixture
def measurer():
    return TextMeasurer()


class TestComposeBlockCombinations:
    """All four explanation x image combinations."""

    def test_minimal_block_is_title_description_badge(self, item_factory, measurer, config):
        # Arrange
        item = item_factory(Status.PASS)

        # Act
        block = compose_block(item, "s1", None, measurer, config)

        # Assert
        assert block.height == MINIMAL_HEIGHT
        assert block.title_lines == ("Headline states the offer",)
        assert len(block.description_lines) == 1
        assert not block.has_explanation
        assert not block.has_image
        assert (block.title_top, block.description_top, block.badge_top) == (24, 61, 99)

    def test_with_explanation_only(self, item_factory, measurer, config):
        item = item_factory(Status.FAIL, explanation="Move the CTA above the fold.")

        block = compose_block(item, "s1", None, measurer, config)

        assert block.height == MINIMAL_HEIGHT + CALLOUT_EXTRA
        assert block.explanation_heading == "Issue & Recommendations"
        assert block.explanation_lines == ("Move the CTA above the fold.",)
        assert block.callout_top == 145
        assert block.callout_height == 36 + 20 + 8 + 22

    def test_with_image_only(self, item_factory, measurer, config):
        block = compose_block(item_factory(), "s1", _image(600, 400), measurer, config)

        assert block.height == MINIMAL_HEIGHT + 16 + 400
        assert block.image_top == 145
        assert (block.image_width, block.image_height) == (600.0, 400)

    def test_with_explanation_and_image(self, item_factory, measurer, config):
        item = item_factory(Status.OPTIONAL, explanation="Consider adding reviews.")

        block = compose_block(item, "s1", _image(600, 400), measurer, config)

        assert block.height == MINIMAL_HEIGHT + CALLOUT_EXTRA + 16 + 400
        assert block.explanation_heading == "Optional Notes"
        assert block.image_top == 145 + (36 + 20 + 8 + 22) + 16
        assert block.image_top + block.image_height + config.card_padding == block.height


class TestComposeBlockDetails:
    def test_blank_explanation_gives_no_callout(self, item_factory, measurer, config):
        block = compose_block(item_factory(explanation="   "), "s1", None, measurer, config)
        assert block.height == MINIMAL_HEIGHT
        assert block.explanation_heading is None

    def test_image_wider_than_card_is_fitted_and_rounded_up(self, item_factory, measurer, config):
        # Arrange: 939 wide -> scaled by 626/939, height 101 -> 67.33
        image = _image(939, 101)

        # Act
        block = compose_block(item_factory(), "s1", image, measurer, config)

        # Assert
        assert block.image_width == pytest.approx(626)
        assert block.image_height == 68
        assert block.height == MINIMAL_HEIGHT + 16 + 68

    def test_empty_description_adds_no_gap(self, item_factory, measurer, config):
        block = compose_block(item_factory(description=""), "s1", None, measurer, config)
        assert block.description_lines == ()
        assert block.height == MINIMAL_HEIGHT - 22 - 16

    def test_long_explanation_wraps_inside_callout(self, item_factory, measurer, config):
        # Arrange
        explanation = "The form asks for too many fields before checkout. " * 10

        # Act
        block = compose_block(item_factory(explanation=explanation), "s1", None, measurer, config)

        # Assert
        lines = len(block.explanation_lines)
        assert lines > 1
        for line in block.explanation_lines:
            assert measurer.width(line, config.explanation_font) <= config.callout_text_width
        assert block.callout_height == 36 + 20 + 8 + lines * 22

    @pytest.mark.parametrize("status", list(Status))
    def test_badge_from_status_table(self, item_factory, measurer, config, status):
        block = compose_block(item_factory(status), "s1", None, measurer, config)

        style = STATUS_STYLES[status]
        expected_width = measurer.width(style.label, config.badge_font) + 2 * config.badge_padding_x
        assert block.badge_label == style.label
        assert block.badge_width == pytest.approx(expected_width)
        assert block.status is status

    def test_same_input_same_block(self, item_factory, measurer, config):
        item = item_factory(explanation="Notes " * 30)
        assert compose_block(item, "s", None, measurer, config) == compose_block(item, "s", None, measurer, config)


class TestComposeDocument:
    def test_one_block_per_item_grouped_by_section(self, document_factory, measurer, config):
        # Arrange
        doc = document_factory(layout=(2, 0, 3))

        # Act
        groups = compose_document(doc, {}, measurer, config)

        # Assert
        assert [len(g.blocks) for g in groups] == [2, 0, 3]
        assert [g.section.id for g in groups] == ["section-1", "section-2", "section-3"]
        assert all(b.section_id == "section-3" for b in groups[2].blocks)
        assert [b.item_id for g in groups for b in g.blocks] == [i.id for i in doc.iter_items()]

    def test_images_looked_up_by_item_id(self, document_factory, measurer, config):
        doc = document_factory(layout=(2,))
        target = doc.sections[0].items[1].id

        groups = compose_document(doc, {target: _image(100, 50)}, measurer, config)

        assert not groups[0].blocks[0].has_image
        assert groups[0].blocks[1].has_image
