"""Geometry primitives: Point, Size, Rect and comparison helpers."""

from __future__ import annotations

import math
from dataclasses import dataclass


@dataclass(frozen=True)
class Point:
    x: float = 0.0
    y: float = 0.0


@dataclass(frozen=True)
class Size:
    width: float = 0.0
    height: float = 0.0


# ── Rect ─────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class Rect:
    """Axis-aligned rectangle in logical screen units (top-left origin, y down)."""

    x: float = 0.0
    y: float = 0.0
    width: float = 0.0
    height: float = 0.0

    def __post_init__(self) -> None:
        # Externally mutated windows can report negative or NaN sizes;
        # collapse them to zero so every Rect stays valid.
        if not self.width >= 0.0:
            object.__setattr__(self, "width", 0.0)
        if not self.height >= 0.0:
            object.__setattr__(self, "height", 0.0)

    @property
    def is_null(self) -> bool:
        """True for the "no result" sentinel."""
        return math.isinf(self.x) or math.isinf(self.y)

    @property
    def is_empty(self) -> bool:
        return self.is_null or self.width == 0.0 or self.height == 0.0

    @property
    def min_x(self) -> float:
        return self.x

    @property
    def min_y(self) -> float:
        return self.y

    @property
    def max_x(self) -> float:
        return self.x + self.width

    @property
    def max_y(self) -> float:
        return self.y + self.height

    @property
    def mid_x(self) -> float:
        return self.x + self.width / 2.0

    @property
    def mid_y(self) -> float:
        return self.y + self.height / 2.0

    @property
    def origin(self) -> Point:
        return Point(self.x, self.y)

    @property
    def size(self) -> Size:
        return Size(self.width, self.height)

    @property
    def area(self) -> float:
        if self.is_null:
            return 0.0
        return self.width * self.height

    def contains(self, other: Rect) -> bool:
        """True if *other* lies entirely inside this rect (edges inclusive)."""
        if self.is_null or other.is_null:
            return False
        return (
            other.min_x >= self.min_x
            and other.min_y >= self.min_y
            and other.max_x <= self.max_x
            and other.max_y <= self.max_y
        )

    def intersection(self, other: Rect) -> Rect:
        """Overlapping area of both rects, or NULL_RECT when they are disjoint."""
        if self.is_null or other.is_null:
            return NULL_RECT
        left = max(self.min_x, other.min_x)
        top = max(self.min_y, other.min_y)
        right = min(self.max_x, other.max_x)
        bottom = min(self.max_y, other.max_y)
        if right < left or bottom < top:
            return NULL_RECT
        return Rect(left, top, right - left, bottom - top)

    def union(self, other: Rect) -> Rect:
        """Smallest rect containing both."""
        if self.is_null:
            return other
        if other.is_null:
            return self
        left = min(self.min_x, other.min_x)
        top = min(self.min_y, other.min_y)
        right = max(self.max_x, other.max_x)
        bottom = max(self.max_y, other.max_y)
        return Rect(left, top, right - left, bottom - top)

    def offset(self, dx: float, dy: float) -> Rect:
        if self.is_null:
            return self
        return Rect(self.x + dx, self.y + dy, self.width, self.height)

    def inset(self, dx: float, dy: float) -> Rect:
        """Shrink by *dx* on the left and right and *dy* on the top and bottom.

        Insets larger than the rect collapse it to a zero-size rect at its centre.
        """
        if self.is_null:
            return self
        dx = min(dx, self.width / 2.0)
        dy = min(dy, self.height / 2.0)
        return Rect(self.x + dx, self.y + dy, self.width - 2 * dx, self.height - 2 * dy)

    def to_tuple(self) -> tuple[float, float, float, float]:
        return self.x, self.y, self.width, self.height

    def to_dict(self) -> dict:
        """Serialize to a JSON-friendly dict."""
        return {"x": self.x, "y": self.y, "width": self.width, "height": self.height}

    @classmethod
    def from_dict(cls, d: dict) -> Rect:
        """Deserialize from a dict."""
        return cls(
            float(d["x"]), float(d["y"]),
            float(d["width"]), float(d["height"]),
        )

    @classmethod
    def parse(cls, text: str) -> Rect:
        """Parse ``"x,y,width,height"`` (the form taken on the command line)."""
        parts = [p.strip() for p in text.split(",")]
        if len(parts) != 4:
            raise ValueError(f"Expected x,y,width,height, got {text!r}")
        x, y, w, h = (float(p) for p in parts)
        return cls(x, y, w, h)


NULL_RECT = Rect(math.inf, math.inf, 0.0, 0.0)


# ── Helpers ──────────────────────────────────────────────────────────────

def fits_within(a: Rect, b: Rect) -> bool:
    """True if *a* is no wider and no taller than *b*."""
    return a.width <= b.width and a.height <= b.height


def centered_within(a: Rect, b: Rect) -> bool:
    """True if *b* contains *a* and their centres are at most one unit apart on each axis."""
    centered_x = abs(b.mid_x - a.mid_x) <= 1.0
    centered_y = abs(b.mid_y - a.mid_y) <= 1.0
    return b.contains(a) and centered_x and centered_y


def is_landscape(r: Rect) -> bool:
    return r.width > r.height


def normalize_rect(rect: Rect, from_frame: Rect, to_frame: Rect) -> Rect:
    """Re-express *rect*, recorded against *from_frame*, relative to *to_frame*.

    The rect keeps its offset from the frame origin; only the origin moves.
    """
    return rect.offset(to_frame.x - from_frame.x, to_frame.y - from_frame.y)
