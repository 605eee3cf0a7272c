"""Tests for pi.edit.geometry and pi.edit.viewport."""

from __future__ import annotations

import pytest

from pi.edit.geometry import Location, Position, Size
from pi.edit.viewport import Viewport


# ---------------------------------------------------------------------------
# Location.to_position
# ---------------------------------------------------------------------------


class TestToPosition:
    def test_origin_offset(self) -> None:
        assert Location(3, 5).to_position(Location()) == Position(5, 3)

    def test_subtracts_offset(self) -> None:
        assert Location(12, 7).to_position(Location(3, 2)) == Position(5, 9)

    def test_saturates_at_zero(self) -> None:
        assert Location(1, 1).to_position(Location(4, 6)) == Position(0, 0)

    def test_defaults(self) -> None:
        assert Location() == Location(0, 0)
        assert Size() == Size(0, 0)


# ---------------------------------------------------------------------------
# Viewport scrolling
# ---------------------------------------------------------------------------


def clean_viewport(width: int = 10, height: int = 5) -> Viewport:
    viewport = Viewport(Size(width, height))
    viewport.mark_clean()
    return viewport


class TestScrollIntoView:
    def test_new_viewport_needs_render(self) -> None:
        assert Viewport(Size(10, 5)).needs_render

    def test_visible_location_does_not_scroll(self) -> None:
        viewport = clean_viewport()
        viewport.scroll_location_into_view(Location(4, 9))
        assert viewport.scroll_offset == Location()
        assert not viewport.needs_render

    def test_scroll_down_by_minimum(self) -> None:
        viewport = clean_viewport()
        viewport.scroll_location_into_view(Location(5, 0))
        assert viewport.scroll_offset == Location(1, 0)
        assert viewport.needs_render

    def test_scroll_up_to_target_row(self) -> None:
        viewport = clean_viewport()
        viewport.scroll_location_into_view(Location(20, 0))
        viewport.mark_clean()
        viewport.scroll_location_into_view(Location(7, 0))
        assert viewport.scroll_offset == Location(7, 0)
        assert viewport.needs_render

    def test_scroll_right_and_left(self) -> None:
        viewport = clean_viewport()
        viewport.scroll_location_into_view(Location(0, 14))
        assert viewport.scroll_offset == Location(0, 5)
        viewport.scroll_location_into_view(Location(0, 2))
        assert viewport.scroll_offset == Location(0, 2)

    @pytest.mark.parametrize(
        "location",
        [Location(0, 0), Location(9, 3), Location(40, 40), Location(2, 25), Location(17, 0)],
    )
    def test_location_is_visible_afterwards(self, location: Location) -> None:
        viewport = clean_viewport()
        viewport.scroll_location_into_view(location)
        position = viewport.caret_position(location)
        assert 0 <= position.x < viewport.size.width
        assert 0 <= position.y < viewport.size.height

    def test_zero_height_leaves_rows_alone(self) -> None:
        viewport = clean_viewport(width=10, height=0)
        viewport.scroll_location_into_view(Location(30, 0))
        assert viewport.scroll_offset == Location()

    def test_resize_rescrolls_and_marks_dirty(self) -> None:
        viewport = clean_viewport()
        viewport.resize(Size(10, 2), Location(4, 0))
        assert viewport.size == Size(10, 2)
        assert viewport.scroll_offset == Location(3, 0)
        assert viewport.needs_render

    def test_resize_to_same_size_still_marks_dirty(self) -> None:
        viewport = clean_viewport()
        viewport.resize(Size(10, 5), Location())
        assert viewport.needs_render
