from __future__ import annotations

import pytest

from winplace.geometry import NULL_RECT, Rect
from winplace.models import Display
from winplace.screens import Direction, UsableScreens

LEFT = Display("DP-1", Rect(0, 0, 1920, 1080), Rect(0, 30, 1920, 1050))
RIGHT = Display("DP-2", Rect(1920, 0, 2560, 1440))
BELOW = Display("HDMI-A-1", Rect(0, 1080, 1920, 1080))
PORTRAIT = Display("DP-3", Rect(-1080, 0, 1080, 1920))


def _names(screens: UsableScreens) -> list[str]:
    return [d.name for d in screens.ordered_screens]


def test_order_does_not_depend_on_enumeration_order() -> None:
    a = UsableScreens([RIGHT, LEFT, PORTRAIT])
    b = UsableScreens([PORTRAIT, RIGHT, LEFT])

    assert _names(a) == ["DP-3", "DP-1", "DP-2"]
    assert _names(a) == _names(b)


def test_order_breaks_ties_by_y_then_name() -> None:
    upper = Display("Z-upper", Rect(0, -1080, 1920, 1080))
    twin_a = Display("A", Rect(0, 0, 100, 100))
    twin_b = Display("B", Rect(0, 0, 100, 100))

    screens = UsableScreens([twin_b, LEFT, twin_a, upper])

    assert _names(screens) == ["Z-upper", "A", "B", "DP-1"]


def test_empty_display_set_is_rejected() -> None:
    with pytest.raises(ValueError):
        UsableScreens([])


def test_unknown_current_display_is_rejected() -> None:
    with pytest.raises(ValueError):
        UsableScreens([LEFT], RIGHT)


def test_single_display_has_no_neighbours() -> None:
    screens = UsableScreens([LEFT])

    assert screens.num_screens == 1
    assert screens.adjacent_screens is None


def test_adjacent_screens_wrap_around() -> None:
    screens = UsableScreens([LEFT, RIGHT, PORTRAIT], LEFT)

    adjacent = screens.adjacent_screens
    assert adjacent.next == RIGHT
    assert adjacent.prev == PORTRAIT

    last = screens.with_current(RIGHT).adjacent_screens
    assert last.next == PORTRAIT
    assert last.prev == LEFT


def test_for_window_picks_display_with_largest_overlap() -> None:
    # 200px on DP-1, 600px on DP-2
    screens = UsableScreens.for_window(Rect(1720, 100, 800, 600), [LEFT, RIGHT])

    assert screens.current_screen == RIGHT


def test_for_window_off_screen_uses_nearest_display() -> None:
    screens = UsableScreens.for_window(Rect(5000, 200, 300, 300), [LEFT, RIGHT])

    assert screens.current_screen == RIGHT


def test_for_window_null_rect_falls_back_to_first() -> None:
    screens = UsableScreens.for_window(NULL_RECT, [RIGHT, LEFT])

    assert screens.current_screen == LEFT


def test_visible_frame_includes_edge_gap() -> None:
    screens = UsableScreens([LEFT], padding=10)

    assert screens.frame_of_current_screen == Rect(0, 0, 1920, 1080)
    assert screens.visible_frame_of_current_screen == Rect(10, 40, 1900, 1030)
    assert screens.adjusted_visible_frame(RIGHT) == Rect(1930, 10, 2540, 1420)


def test_negative_padding_is_ignored() -> None:
    screens = UsableScreens([LEFT], padding=-5)

    assert screens.padding == 0.0
    assert screens.visible_frame_of_current_screen == LEFT.visible_frame


@pytest.mark.parametrize(
    ("current", "direction", "expected"),
    [
        (LEFT, Direction.RIGHT, RIGHT),
        (LEFT, Direction.DOWN, BELOW),
        (LEFT, Direction.LEFT, None),
        (LEFT, Direction.UP, None),
        (RIGHT, Direction.LEFT, LEFT),
        (BELOW, Direction.UP, LEFT),
    ],
)
def test_screen_in_direction(current: Display, direction: Direction, expected: Display | None) -> None:
    screens = UsableScreens([LEFT, RIGHT, BELOW], current)

    assert screens.screen_in_direction(direction) == expected


def test_screen_in_direction_prefers_overlapping_neighbour() -> None:
    # Both lie to the right; only "near" shares rows with DP-1.
    far_off = Display("DP-9", Rect(1920, 2000, 800, 600))
    near = Display("DP-8", Rect(2400, 0, 800, 600))
    screens = UsableScreens([LEFT, far_off, near], LEFT)

    assert screens.screen_in_direction(Direction.RIGHT) == near


def test_for_window_keeps_padding_on_resolved_display() -> None:
    screens = UsableScreens.for_window(Rect(2000, 100, 800, 600), [LEFT, RIGHT], padding=5)

    assert screens.current_screen == RIGHT
    assert screens.visible_frame_of_current_screen == Rect(1925, 5, 2550, 1430)
