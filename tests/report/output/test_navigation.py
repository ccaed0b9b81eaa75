"""
Tests for contents grid geometry and section links.
"""

import pytest

from audit_toolkit.core.models import Section
from audit_toolkit.report.layout import LayoutConfig
from audit_toolkit.report.errors import ErrorKind
from audit_toolkit.report.output import (
    TocLink,
    link_sections,
    page_destination,
    toc_cell_rect,
    unlisted_section_warnings,
)


@pytest.fixture
def config():
    return LayoutConfig()


def _sections(n):
    return [Section(id=f"s{i}", title=f"Section {i}") for i in range(n)]


class TestTocCellRect:
    def test_first_row_fills_left_to_right(self, config):
        width = config.toc_cell_width
        assert toc_cell_rect(0, config) == (60, 170, width, 100)
        assert toc_cell_rect(1, config) == (60 + width + 18, 170, width, 100)

    def test_rows_advance_by_height_and_gap(self, config):
        _, y, _, _ = toc_cell_rect(4, config)
        assert y == 170 + 2 * (100 + 18)

    def test_cells_stay_inside_content_area(self, config):
        for index in range(config.toc_capacity):
            x, y, width, height = toc_cell_rect(index, config)
            assert x + width <= config.page_width - config.margin_right + 1e-6
            assert y + height <= config.content_bottom


class TestLinkSections:
    def test_one_link_per_mapped_section(self, config):
        # Arrange
        sections = _sections(3)
        section_pages = {"s0": 3, "s1": 4, "s2": 6}

        # Act
        links = link_sections(sections, section_pages, config)

        # Assert
        assert [link.section_id for link in links] == ["s0", "s1", "s2"]
        assert [link.target_page for link in links] == [3, 4, 6]

    def test_link_rect_matches_drawn_card(self, config):
        links = link_sections(_sections(5), {f"s{i}": 3 + i for i in range(5)}, config)

        for index, link in enumerate(links):
            assert (link.x, link.y, link.width, link.height) == toc_cell_rect(index, config)

    def test_unmapped_section_keeps_grid_position_for_others(self, config):
        # Arrange: s1 is empty, so it has no page
        links = link_sections(_sections(3), {"s0": 3, "s2": 4}, config)

        # Assert: s2 still sits in the third cell
        assert [link.section_id for link in links] == ["s0", "s2"]
        assert (links[1].x, links[1].y) == toc_cell_rect(2, config)[:2]

    def test_sections_beyond_capacity_get_no_link(self, config):
        count = config.toc_capacity + 2
        links = link_sections(_sections(count), {f"s{i}": 3 + i for i in range(count)}, config)
        assert len(links) == config.toc_capacity

    def test_destination_names_target_page(self):
        link = TocLink("s0", 0, 0, 10, 10, target_page=5)
        assert link.destination == page_destination(5) == "page-5"


class TestUnlistedSectionWarnings:
    def test_when_all_sections_fit_then_no_warnings(self, config):
        assert unlisted_section_warnings(_sections(config.toc_capacity), config) == []

    def test_one_warning_per_section_past_capacity(self, config):
        # Arrange
        sections = _sections(config.toc_capacity + 2)

        # Act
        warnings = unlisted_section_warnings(sections, config)

        # Assert
        assert [w.kind for w in warnings] == [ErrorKind.LAYOUT_OVERFLOW] * 2
        assert "Section 14" in warnings[0].message
        assert "Section 15" in warnings[1].message
        assert all(w.item_id is None for w in warnings)
