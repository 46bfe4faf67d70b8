"""Placement strategies, one per action family."""

from __future__ import annotations

import logging
import math
from typing import ClassVar

from .calculation import (
    IN_THIRDS,
    FractionCycle,
    RectCalculationParameters,
    RectResult,
    WindowCalculation,
    WindowCalculationParameters,
    WindowCalculationResult,
    cycle_index,
)
from .geometry import Rect, fits_within, is_landscape
from .models import SubWindowAction, WindowAction
from .screens import Direction

log = logging.getLogger(__name__)


def _round_half_up(value: float) -> float:
    return float(math.floor(value + 0.5))


def _cell(
    frame: Rect,
    col: int,
    row: int,
    cols: int,
    rows: int,
    col_span: int = 1,
    row_span: int = 1,
) -> Rect:
    """Cell of a *cols* x *rows* grid laid over *frame*.

    Neighbouring cells share their boundary values exactly.
    """
    x0 = frame.min_x + frame.width * col / cols
    x1 = frame.min_x + frame.width * (col + col_span) / cols
    y0 = frame.min_y + frame.height * row / rows
    y1 = frame.min_y + frame.height * (row + row_span) / rows
    return Rect(x0, y0, x1 - x0, y1 - y0)


def _clamp_origin(x: float, y: float, width: float, height: float, frame: Rect) -> tuple[float, float]:
    """Pull an origin back so the rect stays inside *frame* (top-left wins if it can't)."""
    x = max(frame.min_x, min(x, frame.max_x - width))
    y = max(frame.min_y, min(y, frame.max_y - height))
    return x, y


def _rotate(states: tuple[SubWindowAction, ...], start: int) -> tuple[SubWindowAction, ...]:
    return states[start:] + states[:start]


# ── Halves and corners ───────────────────────────────────────────────────

class LeftRightHalfCalculation(WindowCalculation):
    """Left or right part of the usable frame; repeats step 1/2 -> 2/3 -> 1/3."""

    cycle: ClassVar[FractionCycle] = IN_THIRDS
    _STATES: ClassVar[dict[WindowAction, tuple[SubWindowAction, ...]]] = {
        WindowAction.LEFT_HALF: (
            SubWindowAction.LEFT_HALF,
            SubWindowAction.LEFT_TWO_THIRDS,
            SubWindowAction.LEFT_THIRD,
        ),
        WindowAction.RIGHT_HALF: (
            SubWindowAction.RIGHT_HALF,
            SubWindowAction.RIGHT_TWO_THIRDS,
            SubWindowAction.RIGHT_THIRD,
        ),
    }

    def calculate_rect(self, params: RectCalculationParameters) -> RectResult:
        frame = params.visible_frame
        fraction, sub_action = self.cycle.select(params, self._STATES[params.action])
        # Both sides derive the split from min_x so opposite halves meet exactly
        if params.action == WindowAction.LEFT_HALF:
            split = frame.min_x + frame.width * fraction
            x, width = frame.min_x, split - frame.min_x
        else:
            split = frame.min_x + frame.width * (1.0 - fraction)
            x, width = split, frame.max_x - split
        return RectResult(Rect(x, frame.min_y, width, frame.height), sub_action)


class TopBottomHalfCalculation(WindowCalculation):
    """Top or bottom part of the usable frame; repeats step 1/2 -> 2/3 -> 1/3."""

    cycle: ClassVar[FractionCycle] = IN_THIRDS
    _STATES: ClassVar[dict[WindowAction, tuple[SubWindowAction, ...]]] = {
        WindowAction.TOP_HALF: (
            SubWindowAction.TOP_HALF,
            SubWindowAction.TOP_TWO_THIRDS,
            SubWindowAction.TOP_THIRD,
        ),
        WindowAction.BOTTOM_HALF: (
            SubWindowAction.BOTTOM_HALF,
            SubWindowAction.BOTTOM_TWO_THIRDS,
            SubWindowAction.BOTTOM_THIRD,
        ),
    }

    def calculate_rect(self, params: RectCalculationParameters) -> RectResult:
        frame = params.visible_frame
        fraction, sub_action = self.cycle.select(params, self._STATES[params.action])
        if params.action == WindowAction.TOP_HALF:
            split = frame.min_y + frame.height * fraction
            y, height = frame.min_y, split - frame.min_y
        else:
            split = frame.min_y + frame.height * (1.0 - fraction)
            y, height = split, frame.max_y - split
        return RectResult(Rect(frame.min_x, y, frame.width, height), sub_action)


class CornerCalculation(WindowCalculation):
    _LEFT = (WindowAction.TOP_LEFT, WindowAction.BOTTOM_LEFT)
    _TOP = (WindowAction.TOP_LEFT, WindowAction.TOP_RIGHT)

    def calculate_rect(self, params: RectCalculationParameters) -> RectResult:
        frame = params.visible_frame
        col = 0 if params.action in self._LEFT else 1
        row = 0 if params.action in self._TOP else 1
        return RectResult(_cell(frame, col, row, 2, 2))


class CenterHalfCalculation(WindowCalculation):
    """Middle half of the usable frame along its long axis."""

    def calculate_rect(self, params: RectCalculationParameters) -> RectResult:
        frame = params.visible_frame
        if is_landscape(frame):
            width = frame.width / 2.0
            return RectResult(Rect(frame.min_x + width / 2.0, frame.min_y, width, frame.height))
        height = frame.height / 2.0
        return RectResult(Rect(frame.min_x, frame.min_y + height / 2.0, frame.width, height))


# ── Center and maximize ──────────────────────────────────────────────────

class CenterCalculation(WindowCalculation):

    def calculate_rect(self, params: RectCalculationParameters) -> RectResult:
        frame = params.visible_frame
        window = params.window.rect

        if fits_within(window, frame):
            x = _round_half_up((frame.width - window.width) / 2.0) + frame.min_x
            y = _round_half_up((frame.height - window.height) / 2.0) + frame.min_y
            return RectResult(Rect(x, y, window.width, window.height))
        return RectResult(frame)


class MaximizeCalculation(WindowCalculation):

    def calculate_rect(self, params: RectCalculationParameters) -> RectResult:
        return RectResult(params.visible_frame)


class MaximizeHeightCalculation(WindowCalculation):

    def calculate_rect(self, params: RectCalculationParameters) -> RectResult:
        frame = params.visible_frame
        window = params.window.rect
        return RectResult(Rect(window.x, frame.min_y, window.width, frame.height))


class AlmostMaximizeCalculation(WindowCalculation):

    def calculate_rect(self, params: RectCalculationParameters) -> RectResult:
        frame = params.visible_frame
        settings = params.settings
        width = frame.width * settings.almost_maximize_width
        height = frame.height * settings.almost_maximize_height
        x = frame.min_x + _round_half_up((frame.width - width) / 2.0)
        y = frame.min_y + _round_half_up((frame.height - height) / 2.0)
        return RectResult(Rect(x, y, width, height))


# ── Resize and move ──────────────────────────────────────────────────────

class ChangeSizeCalculation(WindowCalculation):
    """Grow or shrink around the window centre, long side first.

    The long side changes by ``size_step``; the short side follows
    proportionally so the aspect ratio holds until a clamp kicks in.
    """

    def calculate_rect(self, params: RectCalculationParameters) -> RectResult:
        frame = params.visible_frame
        window = params.window.rect
        settings = params.settings
        larger = params.action == WindowAction.LARGER
        step = settings.size_step if larger else -settings.size_step

        if is_landscape(window):
            dw = step
            dh = step * window.height / window.width
        elif window.height > 0:
            dh = step
            dw = step * window.width / window.height
        else:
            dw = dh = step

        width = window.width + dw
        height = window.height + dh
        if not larger:
            width = max(width, min(settings.min_window_width, frame.width))
            height = max(height, min(settings.min_window_height, frame.height))
        width = max(0.0, min(width, frame.width))
        height = max(0.0, min(height, frame.height))

        x, y = _clamp_origin(
            window.mid_x - width / 2.0,
            window.mid_y - height / 2.0,
            width,
            height,
            frame,
        )
        return RectResult(Rect(x, y, width, height))


_MOVE_DIRECTIONS: dict[WindowAction, Direction] = {
    WindowAction.MOVE_LEFT: Direction.LEFT,
    WindowAction.MOVE_RIGHT: Direction.RIGHT,
    WindowAction.MOVE_UP: Direction.UP,
    WindowAction.MOVE_DOWN: Direction.DOWN,
}


def _at_edge(window: Rect, frame: Rect, direction: Direction) -> bool:
    if direction == Direction.LEFT:
        return window.min_x <= frame.min_x
    if direction == Direction.RIGHT:
        return window.max_x >= frame.max_x
    if direction == Direction.UP:
        return window.min_y <= frame.min_y
    return window.max_y >= frame.max_y


class MoveCalculation(WindowCalculation):
    """Translate by ``move_step`` inside the usable frame.

    A window already touching the edge it is moved towards crosses to the
    display beyond that edge, entering at the facing edge.
    """

    def calculate(self, params: WindowCalculationParameters) -> WindowCalculationResult | None:
        direction = _MOVE_DIRECTIONS[params.action]
        screens = params.usable_screens
        rect_params = params.as_rect_params()
        window = params.window.rect

        if not _at_edge(window, rect_params.visible_frame, direction):
            return WindowCalculationResult(
                rect=self.calculate_rect(rect_params).rect,
                screen=screens.current_screen,
                resulting_action=params.action,
            )

        target = screens.screen_in_direction(direction)
        if target is None:
            log.debug("%s: no display beyond the %s edge of %s",
                      params.action.value, direction.value, screens.current_screen.name)
            return None

        rect = _enter_frame(
            window,
            rect_params.visible_frame,
            screens.adjusted_visible_frame(target),
            direction,
        )
        return WindowCalculationResult(rect=rect, screen=target, resulting_action=params.action)

    def calculate_rect(self, params: RectCalculationParameters) -> RectResult:
        frame = params.visible_frame
        window = params.window.rect
        step = params.settings.move_step
        direction = _MOVE_DIRECTIONS[params.action]

        dx = {Direction.LEFT: -step, Direction.RIGHT: step}.get(direction, 0.0)
        dy = {Direction.UP: -step, Direction.DOWN: step}.get(direction, 0.0)
        x, y = _clamp_origin(window.x + dx, window.y + dy, window.width, window.height, frame)
        return RectResult(Rect(x, y, window.width, window.height))


def _enter_frame(window: Rect, source: Rect, target: Rect, direction: Direction) -> Rect:
    """Place *window* at the edge of *target* facing *source*.

    The offset along the other axis is carried over from *source*.
    """
    width = min(window.width, target.width)
    height = min(window.height, target.height)
    if direction in (Direction.LEFT, Direction.RIGHT):
        x = target.min_x if direction == Direction.RIGHT else target.max_x - width
        y = target.min_y + (window.min_y - source.min_y)
    else:
        y = target.min_y if direction == Direction.DOWN else target.max_y - height
        x = target.min_x + (window.min_x - source.min_x)
    x, y = _clamp_origin(x, y, width, height, target)
    return Rect(x, y, width, height)


# ── Displays ─────────────────────────────────────────────────────────────

class NextPrevDisplayCalculation(WindowCalculation):

    def __init__(self) -> None:
        self.center_calculation = CenterCalculation()

    def calculate(self, params: WindowCalculationParameters) -> WindowCalculationResult | None:
        screens = params.usable_screens
        adjacent = screens.adjacent_screens
        if screens.num_screens <= 1 or adjacent is None:
            log.debug("%s: only one usable display", params.action.value)
            return None

        if params.action == WindowAction.NEXT_DISPLAY:
            screen = adjacent.next
        elif params.action == WindowAction.PREVIOUS_DISPLAY:
            screen = adjacent.prev
        else:
            return None

        rect_params = params.as_rect_params(visible_frame=screens.adjusted_visible_frame(screen))
        rect_result = self.calculate_rect(rect_params)
        return WindowCalculationResult(rect=rect_result.rect, screen=screen, resulting_action=params.action)

    def calculate_rect(self, params: RectCalculationParameters) -> RectResult:
        return self.center_calculation.calculate_rect(params)


# ── Thirds, fourths, sixths ──────────────────────────────────────────────

class _SlicesCalculation(WindowCalculation):
    """Slices along the long axis of the usable frame.

    Slice boundaries sit at multiples of ``1 / divisions``; each slice covers
    ``span`` divisions.  Every action starts on its own slice and a repeat
    moves on to the next one, wrapping around.
    """

    divisions: ClassVar[int]
    span: ClassVar[int] = 1
    start_positions: ClassVar[dict[WindowAction, int]]
    landscape_states: ClassVar[tuple[SubWindowAction, ...]]
    portrait_states: ClassVar[tuple[SubWindowAction, ...]]

    def calculate_rect(self, params: RectCalculationParameters) -> RectResult:
        frame = params.visible_frame
        landscape = is_landscape(frame)
        states = self.landscape_states if landscape else self.portrait_states
        ordered = _rotate(states, self.start_positions[params.action])
        sub_action = ordered[cycle_index(params, ordered)]
        position = states.index(sub_action)

        if landscape:
            rect = _cell(frame, position, 0, self.divisions, 1, col_span=self.span)
        else:
            rect = _cell(frame, 0, position, 1, self.divisions, row_span=self.span)
        return RectResult(rect, sub_action)


class ThirdsCalculation(_SlicesCalculation):
    divisions = 3
    start_positions = {
        WindowAction.FIRST_THIRD: 0,
        WindowAction.CENTER_THIRD: 1,
        WindowAction.LAST_THIRD: 2,
    }
    landscape_states = (
        SubWindowAction.LEFT_THIRD,
        SubWindowAction.CENTER_VERTICAL_THIRD,
        SubWindowAction.RIGHT_THIRD,
    )
    portrait_states = (
        SubWindowAction.TOP_THIRD,
        SubWindowAction.CENTER_HORIZONTAL_THIRD,
        SubWindowAction.BOTTOM_THIRD,
    )


class TwoThirdsCalculation(_SlicesCalculation):
    divisions = 3
    span = 2
    start_positions = {
        WindowAction.FIRST_TWO_THIRDS: 0,
        WindowAction.LAST_TWO_THIRDS: 1,
    }
    landscape_states = (
        SubWindowAction.LEFT_TWO_THIRDS,
        SubWindowAction.RIGHT_TWO_THIRDS,
    )
    portrait_states = (
        SubWindowAction.TOP_TWO_THIRDS,
        SubWindowAction.BOTTOM_TWO_THIRDS,
    )


class FourthsCalculation(_SlicesCalculation):
    divisions = 4
    start_positions = {
        WindowAction.FIRST_FOURTH: 0,
        WindowAction.SECOND_FOURTH: 1,
        WindowAction.THIRD_FOURTH: 2,
        WindowAction.LAST_FOURTH: 3,
    }
    landscape_states = (
        SubWindowAction.LEFT_FOURTH,
        SubWindowAction.CENTER_LEFT_FOURTH,
        SubWindowAction.CENTER_RIGHT_FOURTH,
        SubWindowAction.RIGHT_FOURTH,
    )
    portrait_states = (
        SubWindowAction.TOP_FOURTH,
        SubWindowAction.CENTER_TOP_FOURTH,
        SubWindowAction.CENTER_BOTTOM_FOURTH,
        SubWindowAction.BOTTOM_FOURTH,
    )


class SixthsCalculation(WindowCalculation):
    """3x2 grid on landscape frames, 2x3 on portrait ones.

    Cells are numbered row-major; each action takes the cell with its own
    number and a repeat moves on to the next cell.
    """

    _POSITIONS: ClassVar[dict[WindowAction, int]] = {
        WindowAction.TOP_LEFT_SIXTH: 0,
        WindowAction.TOP_CENTER_SIXTH: 1,
        WindowAction.TOP_RIGHT_SIXTH: 2,
        WindowAction.BOTTOM_LEFT_SIXTH: 3,
        WindowAction.BOTTOM_CENTER_SIXTH: 4,
        WindowAction.BOTTOM_RIGHT_SIXTH: 5,
    }
    _LANDSCAPE: ClassVar[tuple[SubWindowAction, ...]] = (
        SubWindowAction.TOP_LEFT_SIXTH,
        SubWindowAction.TOP_CENTER_SIXTH,
        SubWindowAction.TOP_RIGHT_SIXTH,
        SubWindowAction.BOTTOM_LEFT_SIXTH,
        SubWindowAction.BOTTOM_CENTER_SIXTH,
        SubWindowAction.BOTTOM_RIGHT_SIXTH,
    )
    _PORTRAIT: ClassVar[tuple[SubWindowAction, ...]] = (
        SubWindowAction.LEFT_TOP_SIXTH,
        SubWindowAction.RIGHT_TOP_SIXTH,
        SubWindowAction.LEFT_CENTER_SIXTH,
        SubWindowAction.RIGHT_CENTER_SIXTH,
        SubWindowAction.LEFT_BOTTOM_SIXTH,
        SubWindowAction.RIGHT_BOTTOM_SIXTH,
    )

    def calculate_rect(self, params: RectCalculationParameters) -> RectResult:
        frame = params.visible_frame
        if is_landscape(frame):
            states, cols, rows = self._LANDSCAPE, 3, 2
        else:
            states, cols, rows = self._PORTRAIT, 2, 3
        ordered = _rotate(states, self._POSITIONS[params.action])
        sub_action = ordered[cycle_index(params, ordered)]
        position = states.index(sub_action)
        row, col = divmod(position, cols)
        return RectResult(_cell(frame, col, row, cols, rows), sub_action)
