from __future__ import annotations

import logging
import math

import pytest

from winplace.calculation import WindowCalculation
from winplace.geometry import Rect
from winplace.models import Display, Window, WindowAction
from winplace.registry import CALCULATIONS_BY_ACTION, UNSUPPORTED_ACTIONS, calculate, calculation_for
from winplace.screens import UsableScreens

DISPLAY = Display("DP-1", Rect(0, 0, 1920, 1080), Rect(0, 40, 1920, 1040))
SUPPORTED = [a for a in WindowAction if a not in UNSUPPORTED_ACTIONS]
_DISPLAY_ACTIONS = {WindowAction.NEXT_DISPLAY, WindowAction.PREVIOUS_DISPLAY}


def test_every_action_is_either_mapped_or_unsupported() -> None:
    for action in WindowAction:
        mapped = action in CALCULATIONS_BY_ACTION
        assert mapped != (action in UNSUPPORTED_ACTIONS), action
        if mapped:
            assert isinstance(calculation_for(action), WindowCalculation)


def test_restore_is_left_to_the_caller(caplog: pytest.LogCaptureFixture) -> None:
    screens = UsableScreens([DISPLAY])

    with caplog.at_level(logging.INFO, logger="winplace.registry"):
        result = calculate(Window("w", Rect(0, 0, 100, 100)), screens, WindowAction.RESTORE)

    assert result is None
    assert calculation_for(WindowAction.RESTORE) is None
    assert "restore" in caplog.text


def test_registry_is_read_only() -> None:
    with pytest.raises(TypeError):
        CALCULATIONS_BY_ACTION[WindowAction.RESTORE] = WindowCalculation()


@pytest.mark.parametrize(
    ("a", "b"),
    [
        (WindowAction.LEFT_HALF, WindowAction.RIGHT_HALF),
        (WindowAction.TOP_LEFT, WindowAction.BOTTOM_RIGHT),
        (WindowAction.LARGER, WindowAction.SMALLER),
        (WindowAction.MOVE_LEFT, WindowAction.MOVE_DOWN),
        (WindowAction.NEXT_DISPLAY, WindowAction.PREVIOUS_DISPLAY),
        (WindowAction.FIRST_FOURTH, WindowAction.LAST_FOURTH),
    ],
)
def test_related_actions_share_a_calculation(a: WindowAction, b: WindowAction) -> None:
    assert calculation_for(a) is calculation_for(b)


@pytest.mark.parametrize("action", SUPPORTED, ids=lambda a: a.value)
def test_every_action_stays_inside_usable_frame(action: WindowAction) -> None:
    screens = UsableScreens([DISPLAY])

    result = calculate(Window("w", Rect(500, 300, 800, 500)), screens, action)

    if action in _DISPLAY_ACTIONS:
        assert result is None
        return
    assert result.screen == DISPLAY
    assert result.resulting_action == action
    assert DISPLAY.visible_frame.contains(result.rect)


@pytest.mark.parametrize("action", SUPPORTED, ids=lambda a: a.value)
@pytest.mark.parametrize(
    "window",
    [Rect(0, 0, 100, 100), Rect(0, 0, -5, math.nan), Rect(-50, -50, 0, 0)],
)
def test_degenerate_inputs_give_finite_results(action: WindowAction, window: Rect) -> None:
    screens = UsableScreens([Display("ghost", Rect(0, 0, 0, 0))])

    result = calculate(Window("w", window), screens, action)

    if result is None:
        return
    rect = result.rect
    assert all(math.isfinite(v) for v in rect.to_tuple())
    assert rect.width >= 0
    assert rect.height >= 0
