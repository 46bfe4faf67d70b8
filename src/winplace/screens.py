"""Display set resolver: current display, adjacency and usable frames."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum

from .geometry import Point, Rect
from .models import Display


class Direction(Enum):
    LEFT = "left"
    RIGHT = "right"
    UP = "up"
    DOWN = "down"


@dataclass(frozen=True)
class AdjacentScreens:
    next: Display
    prev: Display


class UsableScreens:
    """Snapshot of the connected displays and which one holds the window.

    Displays are kept in a stable left-to-right, top-to-bottom order so
    next/previous cycling does not depend on how the caller enumerated them.
    """

    def __init__(
        self,
        displays: Iterable[Display],
        current: Display | None = None,
        *,
        padding: float = 0.0,
    ) -> None:
        ordered = sorted(displays, key=lambda d: d.sort_key)
        if not ordered:
            raise ValueError("At least one display is required")
        self._screens: tuple[Display, ...] = tuple(ordered)
        self._padding = max(0.0, padding)
        if current is None:
            self._current_index = 0
        else:
            self._current_index = self._index_of(current)

    @classmethod
    def for_window(
        cls,
        rect: Rect,
        displays: Iterable[Display],
        *,
        padding: float = 0.0,
    ) -> UsableScreens:
        """Resolve the display holding *rect*.

        The display sharing the largest area with the window wins; a window
        entirely off-screen goes to the display whose centre is nearest.
        """
        screens = cls(displays, padding=padding)
        if rect.is_null:
            return screens
        best = max(screens._screens, key=lambda d: rect.intersection(d.frame).area)
        if rect.intersection(best.frame).area <= 0.0:
            centre = Point(rect.mid_x, rect.mid_y)
            best = min(screens._screens, key=lambda d: _distance_sq(centre, d.frame))
        return screens.with_current(best)

    def _index_of(self, screen: Display) -> int:
        for i, candidate in enumerate(self._screens):
            if candidate.name == screen.name:
                return i
        raise ValueError(f"Display {screen.name!r} is not part of the display set")

    @property
    def ordered_screens(self) -> tuple[Display, ...]:
        return self._screens

    @property
    def padding(self) -> float:
        return self._padding

    @property
    def num_screens(self) -> int:
        return len(self._screens)

    @property
    def current_screen(self) -> Display:
        return self._screens[self._current_index]

    @property
    def frame_of_current_screen(self) -> Rect:
        return self.current_screen.frame

    @property
    def visible_frame_of_current_screen(self) -> Rect:
        return self.adjusted_visible_frame(self.current_screen)

    @property
    def adjacent_screens(self) -> AdjacentScreens | None:
        """Next and previous display in order, wrapping; None with a single display."""
        count = len(self._screens)
        if count <= 1:
            return None
        i = self._current_index
        return AdjacentScreens(
            next=self._screens[(i + 1) % count],
            prev=self._screens[(i - 1) % count],
        )

    def adjusted_visible_frame(self, screen: Display) -> Rect:
        """Visible frame of *screen* with the edge gap applied on every side."""
        return screen.visible_frame.inset(self._padding, self._padding)

    def with_current(self, screen: Display) -> UsableScreens:
        """Same display set with *screen* as the current one."""
        return UsableScreens(self._screens, screen, padding=self._padding)

    def screen_in_direction(self, direction: Direction) -> Display | None:
        """Nearest display lying entirely on the *direction* side of the current one."""
        current = self.current_screen.frame
        candidates: list[tuple[int, float, float, str, Display]] = []
        for screen in self._screens:
            if screen.name == self.current_screen.name:
                continue
            frame = screen.frame
            if direction == Direction.RIGHT:
                gap = frame.min_x - current.max_x
                overlap = _overlap(frame.min_y, frame.max_y, current.min_y, current.max_y)
                offset = abs(frame.mid_y - current.mid_y)
            elif direction == Direction.LEFT:
                gap = current.min_x - frame.max_x
                overlap = _overlap(frame.min_y, frame.max_y, current.min_y, current.max_y)
                offset = abs(frame.mid_y - current.mid_y)
            elif direction == Direction.DOWN:
                gap = frame.min_y - current.max_y
                overlap = _overlap(frame.min_x, frame.max_x, current.min_x, current.max_x)
                offset = abs(frame.mid_x - current.mid_x)
            else:
                gap = current.min_y - frame.max_y
                overlap = _overlap(frame.min_x, frame.max_x, current.min_x, current.max_x)
                offset = abs(frame.mid_x - current.mid_x)
            if gap < 0:
                continue
            candidates.append((0 if overlap > 0 else 1, gap, offset, screen.name, screen))

        if not candidates:
            return None
        candidates.sort(key=lambda c: c[:4])
        return candidates[0][4]


def _overlap(a_min: float, a_max: float, b_min: float, b_max: float) -> float:
    return min(a_max, b_max) - max(a_min, b_min)


def _distance_sq(point: Point, frame: Rect) -> float:
    return (point.x - frame.mid_x) ** 2 + (point.y - frame.mid_y) ** 2
