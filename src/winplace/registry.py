"""Action -> strategy table and the engine entry point."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from types import MappingProxyType

from .calculation import WindowCalculation, WindowCalculationParameters, WindowCalculationResult
from .models import DEFAULT_SETTINGS, CalculationSettings, RectangleAction, Window, WindowAction
from .screens import UsableScreens
from .strategies import (
    AlmostMaximizeCalculation,
    CenterCalculation,
    CenterHalfCalculation,
    ChangeSizeCalculation,
    CornerCalculation,
    FourthsCalculation,
    LeftRightHalfCalculation,
    MaximizeCalculation,
    MaximizeHeightCalculation,
    MoveCalculation,
    NextPrevDisplayCalculation,
    SixthsCalculation,
    ThirdsCalculation,
    TopBottomHalfCalculation,
    TwoThirdsCalculation,
)

log = logging.getLogger(__name__)

# Restoring needs the frame from before the first command, which only the
# caller keeps.
UNSUPPORTED_ACTIONS: frozenset[WindowAction] = frozenset({WindowAction.RESTORE})


def _build_registry() -> Mapping[WindowAction, WindowCalculation]:
    left_right_half = LeftRightHalfCalculation()
    top_bottom_half = TopBottomHalfCalculation()
    corner = CornerCalculation()
    change_size = ChangeSizeCalculation()
    move = MoveCalculation()
    next_prev_display = NextPrevDisplayCalculation()
    thirds = ThirdsCalculation()
    two_thirds = TwoThirdsCalculation()
    fourths = FourthsCalculation()
    sixths = SixthsCalculation()

    table: dict[WindowAction, WindowCalculation] = {
        WindowAction.LEFT_HALF: left_right_half,
        WindowAction.RIGHT_HALF: left_right_half,
        WindowAction.TOP_HALF: top_bottom_half,
        WindowAction.BOTTOM_HALF: top_bottom_half,
        WindowAction.CENTER_HALF: CenterHalfCalculation(),
        WindowAction.TOP_LEFT: corner,
        WindowAction.TOP_RIGHT: corner,
        WindowAction.BOTTOM_LEFT: corner,
        WindowAction.BOTTOM_RIGHT: corner,
        WindowAction.CENTER: CenterCalculation(),
        WindowAction.MAXIMIZE: MaximizeCalculation(),
        WindowAction.MAXIMIZE_HEIGHT: MaximizeHeightCalculation(),
        WindowAction.ALMOST_MAXIMIZE: AlmostMaximizeCalculation(),
        WindowAction.LARGER: change_size,
        WindowAction.SMALLER: change_size,
        WindowAction.MOVE_LEFT: move,
        WindowAction.MOVE_RIGHT: move,
        WindowAction.MOVE_UP: move,
        WindowAction.MOVE_DOWN: move,
        WindowAction.NEXT_DISPLAY: next_prev_display,
        WindowAction.PREVIOUS_DISPLAY: next_prev_display,
        WindowAction.FIRST_THIRD: thirds,
        WindowAction.CENTER_THIRD: thirds,
        WindowAction.LAST_THIRD: thirds,
        WindowAction.FIRST_TWO_THIRDS: two_thirds,
        WindowAction.LAST_TWO_THIRDS: two_thirds,
        WindowAction.FIRST_FOURTH: fourths,
        WindowAction.SECOND_FOURTH: fourths,
        WindowAction.THIRD_FOURTH: fourths,
        WindowAction.LAST_FOURTH: fourths,
        WindowAction.TOP_LEFT_SIXTH: sixths,
        WindowAction.TOP_CENTER_SIXTH: sixths,
        WindowAction.TOP_RIGHT_SIXTH: sixths,
        WindowAction.BOTTOM_LEFT_SIXTH: sixths,
        WindowAction.BOTTOM_CENTER_SIXTH: sixths,
        WindowAction.BOTTOM_RIGHT_SIXTH: sixths,
    }

    missing = set(WindowAction) - set(table) - UNSUPPORTED_ACTIONS
    if missing:
        names = ", ".join(sorted(a.value for a in missing))
        raise RuntimeError(f"No calculation registered for: {names}")
    overlap = set(table) & UNSUPPORTED_ACTIONS
    if overlap:
        names = ", ".join(sorted(a.value for a in overlap))
        raise RuntimeError(f"Actions marked unsupported but registered: {names}")

    return MappingProxyType(table)


CALCULATIONS_BY_ACTION: Mapping[WindowAction, WindowCalculation] = _build_registry()


def calculation_for(action: WindowAction) -> WindowCalculation | None:
    """Strategy for *action*, or None for an unsupported action."""
    return CALCULATIONS_BY_ACTION.get(action)


def calculate(
    window: Window,
    usable_screens: UsableScreens,
    action: WindowAction,
    last_action: RectangleAction | None = None,
    settings: CalculationSettings = DEFAULT_SETTINGS,
) -> WindowCalculationResult | None:
    """Decide where *window* goes for *action*.

    Returns None when the action does not apply (single display, window
    already at the last edge, unsupported action).  The caller stores
    ``result.to_last_action()`` and passes it back on the next call for the
    same window.
    """
    calculation = calculation_for(action)
    if calculation is None:
        log.info("No calculation for action %s", action.value)
        return None

    params = WindowCalculationParameters(
        window=window,
        usable_screens=usable_screens,
        action=action,
        last_action=last_action,
        settings=settings,
    )
    return calculation.calculate(params)
