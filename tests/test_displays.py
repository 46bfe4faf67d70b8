from __future__ import annotations

import pytest

from winplace.geometry import Rect, centered_within
from winplace.models import Display, Window, WindowAction
from winplace.registry import calculate
from winplace.screens import UsableScreens

LEFT = Display("DP-1", Rect(0, 0, 1920, 1080), Rect(0, 40, 1920, 1040))
RIGHT = Display("DP-2", Rect(1920, 0, 2560, 1440))
BELOW = Display("HDMI-A-1", Rect(0, 1080, 1920, 1080))


def _calc(rect: Rect, displays: list[Display], action: WindowAction, *, padding: float = 0.0):
    screens = UsableScreens.for_window(rect, displays, padding=padding)
    return calculate(Window("w", rect), screens, action)


# ── Next / previous display ──────────────────────────────────────────────

@pytest.mark.parametrize("action", [WindowAction.NEXT_DISPLAY, WindowAction.PREVIOUS_DISPLAY])
def test_single_display_has_nowhere_to_go(action: WindowAction) -> None:
    assert _calc(Rect(100, 100, 800, 600), [LEFT], action) is None


def test_next_display_centres_window_on_neighbour() -> None:
    result = _calc(Rect(100, 100, 800, 600), [LEFT, RIGHT], WindowAction.NEXT_DISPLAY)

    assert result.screen == RIGHT
    assert result.rect == Rect(2800, 420, 800, 600)
    assert result.resulting_action == WindowAction.NEXT_DISPLAY
    assert centered_within(result.rect, RIGHT.visible_frame)


def test_next_then_previous_returns_to_original_display() -> None:
    displays = [RIGHT, LEFT]
    there = _calc(Rect(100, 100, 800, 600), displays, WindowAction.NEXT_DISPLAY)

    back = _calc(there.rect, displays, WindowAction.PREVIOUS_DISPLAY)

    assert there.screen == RIGHT
    assert back.screen == LEFT
    assert centered_within(back.rect, LEFT.visible_frame)


def test_display_cycling_wraps_in_layout_order() -> None:
    far_right = Display("DP-3", Rect(4480, 0, 1920, 1080))
    displays = [far_right, LEFT, RIGHT]

    from_last = _calc(Rect(5000, 100, 800, 600), displays, WindowAction.NEXT_DISPLAY)
    from_first = _calc(Rect(100, 100, 800, 600), displays, WindowAction.PREVIOUS_DISPLAY)

    assert from_last.screen == LEFT
    assert from_first.screen == far_right


def test_oversized_window_fills_target_display() -> None:
    result = _calc(Rect(1920, 0, 2560, 1440), [LEFT, RIGHT], WindowAction.NEXT_DISPLAY)

    assert result.screen == LEFT
    assert result.rect == LEFT.visible_frame


def test_next_display_applies_edge_gap() -> None:
    result = _calc(Rect(1920, 0, 2560, 1440), [LEFT, RIGHT], WindowAction.NEXT_DISPLAY, padding=8)

    assert result.rect == Rect(8, 48, 1904, 1024)


# ── Move across displays ─────────────────────────────────────────────────

def test_move_right_approaches_edge_then_crosses() -> None:
    displays = [LEFT, RIGHT]

    clamped = _calc(Rect(1100, 100, 800, 600), displays, WindowAction.MOVE_RIGHT)
    crossed = _calc(clamped.rect, displays, WindowAction.MOVE_RIGHT)

    assert clamped.screen == LEFT
    assert clamped.rect == Rect(1120, 100, 800, 600)
    assert crossed.screen == RIGHT
    assert crossed.rect == Rect(1920, 60, 800, 600)


def test_move_left_enters_at_facing_edge() -> None:
    result = _calc(Rect(1920, 500, 800, 600), [LEFT, RIGHT], WindowAction.MOVE_LEFT)

    assert result.screen == LEFT
    assert result.rect == Rect(1120, 480, 800, 600)


def test_move_down_to_display_below() -> None:
    result = _calc(Rect(300, 480, 800, 600), [LEFT, RIGHT, BELOW], WindowAction.MOVE_DOWN)

    assert result.screen == BELOW
    assert result.rect == Rect(300, 1080, 800, 600)


def test_move_shrinks_window_larger_than_target() -> None:
    small = Display("eDP-1", Rect(1920, 0, 1280, 800))

    result = _calc(Rect(0, 40, 1920, 1040), [LEFT, small], WindowAction.MOVE_RIGHT)

    assert result.screen == small
    assert result.rect == Rect(1920, 0, 1280, 800)


def test_move_without_display_beyond_edge() -> None:
    assert _calc(Rect(3680, 100, 800, 600), [LEFT, RIGHT], WindowAction.MOVE_RIGHT) is None
    assert _calc(Rect(0, 100, 800, 600), [LEFT, RIGHT], WindowAction.MOVE_LEFT) is None
