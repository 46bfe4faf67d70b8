"""Calculation contract shared by every placement strategy.

A strategy works on a rectangle expressed in the same logical coordinates
as the usable frame it is handed.  ``calculate_rect`` is the pure core;
``calculate`` pairs its rectangle with the display it belongs to and turns
the ``NULL_RECT`` sentinel into ``None`` ("nothing to do").
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass

from .geometry import NULL_RECT, Rect, normalize_rect
from .models import (
    DEFAULT_SETTINGS,
    CalculationSettings,
    Display,
    RectangleAction,
    SubWindowAction,
    Window,
    WindowAction,
)
from .screens import UsableScreens

log = logging.getLogger(__name__)


# ── Parameters and results ───────────────────────────────────────────────

@dataclass(frozen=True)
class RectCalculationParameters:
    window: Window
    visible_frame: Rect
    action: WindowAction
    last_action: RectangleAction | None = None
    repeated: bool = False
    settings: CalculationSettings = DEFAULT_SETTINGS


@dataclass(frozen=True)
class WindowCalculationParameters:
    window: Window
    usable_screens: UsableScreens
    action: WindowAction
    last_action: RectangleAction | None = None
    settings: CalculationSettings = DEFAULT_SETTINGS

    def as_rect_params(
        self,
        visible_frame: Rect | None = None,
        action: WindowAction | None = None,
    ) -> RectCalculationParameters:
        """Reduce to the parameters a rect calculation needs.

        *visible_frame* defaults to the usable frame of the current display,
        *action* to the requested one.
        """
        params = self if action is None else self.with_action(action)
        return RectCalculationParameters(
            window=params.window,
            visible_frame=(
                visible_frame
                if visible_frame is not None
                else params.usable_screens.visible_frame_of_current_screen
            ),
            action=params.action,
            last_action=params.last_action,
            repeated=is_repeated_command(params),
            settings=params.settings,
        )

    def with_action(self, action: WindowAction) -> WindowCalculationParameters:
        return WindowCalculationParameters(
            window=self.window,
            usable_screens=self.usable_screens,
            action=action,
            last_action=self.last_action,
            settings=self.settings,
        )


@dataclass(frozen=True)
class RectResult:
    rect: Rect
    sub_action: SubWindowAction | None = None


@dataclass(frozen=True)
class WindowCalculationResult:
    rect: Rect
    screen: Display
    resulting_action: WindowAction
    resulting_sub_action: SubWindowAction | None = None

    def to_last_action(self) -> RectangleAction:
        """The record to hand back as ``last_action`` on the next call for this window."""
        return RectangleAction(
            action=self.resulting_action,
            rect=self.rect,
            screen=self.screen,
            sub_action=self.resulting_sub_action,
        )


# ── Repeated commands ────────────────────────────────────────────────────

def is_repeated_command(params: WindowCalculationParameters) -> bool:
    """True if the window still sits exactly where the same action last put it.

    The recorded rect is first moved from the frame of the display it was
    produced on into the frame of the current display.  The comparison is
    exact: any manual move or resize since then resets the cycle.
    """
    last = params.last_action
    if last is None or last.action != params.action:
        return False
    normalized = normalize_rect(
        last.rect,
        last.screen.frame,
        params.usable_screens.frame_of_current_screen,
    )
    return normalized == params.window.rect


def cycle_index(params: RectCalculationParameters, states: Sequence[SubWindowAction]) -> int:
    """Index into *states* this press lands on.

    A fresh command starts at 0; a repeated one continues after the
    recorded sub-action, wrapping around.
    """
    if not params.repeated or params.last_action is None:
        return 0
    last_sub = params.last_action.sub_action
    if last_sub not in states:
        return 0
    index = (states.index(last_sub) + 1) % len(states)
    log.debug("Repeated %s: cycling from %s to %s",
              params.action.value, last_sub.value, states[index].value)
    return index


@dataclass(frozen=True)
class FractionCycle:
    """Fractions a repeated command steps through, in press order."""

    fractions: tuple[float, ...]

    def select(
        self,
        params: RectCalculationParameters,
        states: Sequence[SubWindowAction],
    ) -> tuple[float, SubWindowAction]:
        """Pick the fraction for this press and the sub-action recording it.

        *states* names each fraction, in the same order.
        """
        if len(states) != len(self.fractions):
            raise ValueError("Every fraction needs exactly one state")
        index = cycle_index(params, states)
        return self.fractions[index], states[index]


# Halves start at 1/2, then 2/3, then 1/3.  The order is long-standing
# behaviour users rely on; keep it.
IN_THIRDS = FractionCycle((1 / 2.0, 2 / 3.0, 1 / 3.0))


# ── Base calculation ─────────────────────────────────────────────────────

class WindowCalculation:
    """Base strategy: maps a request to a rectangle on the current display."""

    def calculate(self, params: WindowCalculationParameters) -> WindowCalculationResult | None:
        rect_result = self.calculate_rect(params.as_rect_params())
        if rect_result.rect.is_null:
            return None
        return WindowCalculationResult(
            rect=rect_result.rect,
            screen=params.usable_screens.current_screen,
            resulting_action=params.action,
            resulting_sub_action=rect_result.sub_action,
        )

    def calculate_rect(self, params: RectCalculationParameters) -> RectResult:
        return RectResult(NULL_RECT)
