"""Data models: WindowAction, Window, Display, RectangleAction, CalculationSettings."""

from __future__ import annotations

from collections.abc import Hashable
from dataclasses import asdict, dataclass, fields
from enum import Enum

from .geometry import Rect


# ── Enums ────────────────────────────────────────────────────────────────

class WindowAction(Enum):
    LEFT_HALF = "left-half"
    RIGHT_HALF = "right-half"
    TOP_HALF = "top-half"
    BOTTOM_HALF = "bottom-half"
    CENTER_HALF = "center-half"
    TOP_LEFT = "top-left"
    TOP_RIGHT = "top-right"
    BOTTOM_LEFT = "bottom-left"
    BOTTOM_RIGHT = "bottom-right"
    CENTER = "center"
    MAXIMIZE = "maximize"
    MAXIMIZE_HEIGHT = "maximize-height"
    ALMOST_MAXIMIZE = "almost-maximize"
    LARGER = "larger"
    SMALLER = "smaller"
    MOVE_LEFT = "move-left"
    MOVE_RIGHT = "move-right"
    MOVE_UP = "move-up"
    MOVE_DOWN = "move-down"
    NEXT_DISPLAY = "next-display"
    PREVIOUS_DISPLAY = "previous-display"
    FIRST_THIRD = "first-third"
    CENTER_THIRD = "center-third"
    LAST_THIRD = "last-third"
    FIRST_TWO_THIRDS = "first-two-thirds"
    LAST_TWO_THIRDS = "last-two-thirds"
    FIRST_FOURTH = "first-fourth"
    SECOND_FOURTH = "second-fourth"
    THIRD_FOURTH = "third-fourth"
    LAST_FOURTH = "last-fourth"
    TOP_LEFT_SIXTH = "top-left-sixth"
    TOP_CENTER_SIXTH = "top-center-sixth"
    TOP_RIGHT_SIXTH = "top-right-sixth"
    BOTTOM_LEFT_SIXTH = "bottom-left-sixth"
    BOTTOM_CENTER_SIXTH = "bottom-center-sixth"
    BOTTOM_RIGHT_SIXTH = "bottom-right-sixth"
    RESTORE = "restore"

    @property
    def label(self) -> str:
        return self.value.replace("-", " ").capitalize()


class SubWindowAction(Enum):
    # Halves stepping through 1/2 -> 2/3 -> 1/3
    LEFT_HALF = "left-half"
    LEFT_TWO_THIRDS = "left-two-thirds"
    LEFT_THIRD = "left-third"
    RIGHT_HALF = "right-half"
    RIGHT_TWO_THIRDS = "right-two-thirds"
    RIGHT_THIRD = "right-third"
    TOP_HALF = "top-half"
    TOP_TWO_THIRDS = "top-two-thirds"
    TOP_THIRD = "top-third"
    BOTTOM_HALF = "bottom-half"
    BOTTOM_TWO_THIRDS = "bottom-two-thirds"
    BOTTOM_THIRD = "bottom-third"

    # Thirds positions
    CENTER_VERTICAL_THIRD = "center-vertical-third"
    CENTER_HORIZONTAL_THIRD = "center-horizontal-third"

    # Fourths
    LEFT_FOURTH = "left-fourth"
    CENTER_LEFT_FOURTH = "center-left-fourth"
    CENTER_RIGHT_FOURTH = "center-right-fourth"
    RIGHT_FOURTH = "right-fourth"
    TOP_FOURTH = "top-fourth"
    CENTER_TOP_FOURTH = "center-top-fourth"
    CENTER_BOTTOM_FOURTH = "center-bottom-fourth"
    BOTTOM_FOURTH = "bottom-fourth"

    # Sixths, landscape (3 columns x 2 rows)
    TOP_LEFT_SIXTH = "top-left-sixth"
    TOP_CENTER_SIXTH = "top-center-sixth"
    TOP_RIGHT_SIXTH = "top-right-sixth"
    BOTTOM_LEFT_SIXTH = "bottom-left-sixth"
    BOTTOM_CENTER_SIXTH = "bottom-center-sixth"
    BOTTOM_RIGHT_SIXTH = "bottom-right-sixth"

    # Sixths, portrait (2 columns x 3 rows)
    LEFT_TOP_SIXTH = "left-top-sixth"
    RIGHT_TOP_SIXTH = "right-top-sixth"
    LEFT_CENTER_SIXTH = "left-center-sixth"
    RIGHT_CENTER_SIXTH = "right-center-sixth"
    LEFT_BOTTOM_SIXTH = "left-bottom-sixth"
    RIGHT_BOTTOM_SIXTH = "right-bottom-sixth"


class Transform(Enum):
    NORMAL = 0
    ROTATE_90 = 1
    ROTATE_180 = 2
    ROTATE_270 = 3
    FLIPPED = 4
    FLIPPED_90 = 5
    FLIPPED_180 = 6
    FLIPPED_270 = 7

    @property
    def is_rotated(self) -> bool:
        """True if width/height are swapped (90° or 270° variants)."""
        return self.value in (1, 3, 5, 7)


# ── Window ───────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class Window:
    id: Hashable
    rect: Rect


# ── Display ──────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class Display:
    """One connected output with its full frame and usable (visible) frame."""

    name: str                            # e.g. "DP-1", "eDP-1"
    frame: Rect
    visible_frame: Rect | None = None    # frame minus bars/panels; defaults to frame
    description: str = ""
    scale: float = 1.0

    def __post_init__(self) -> None:
        if self.visible_frame is None:
            object.__setattr__(self, "visible_frame", self.frame)

    @property
    def sort_key(self) -> tuple[float, float, str]:
        """Left-to-right, then top-to-bottom, then by connector name."""
        return self.frame.x, self.frame.y, self.name

    def to_dict(self) -> dict:
        """Serialize to a JSON-friendly dict."""
        return {
            "name": self.name,
            "description": self.description,
            "scale": self.scale,
            "frame": self.frame.to_dict(),
            "visible_frame": self.visible_frame.to_dict(),
        }

    @classmethod
    def from_dict(cls, d: dict) -> Display:
        """Deserialize from a dict."""
        frame = Rect.from_dict(d["frame"])
        visible = d.get("visible_frame")
        return cls(
            name=d.get("name", ""),
            frame=frame,
            visible_frame=Rect.from_dict(visible) if visible else frame,
            description=d.get("description", ""),
            scale=float(d.get("scale", 1.0)),
        )

    @classmethod
    def from_hyprctl(cls, data: dict) -> Display:
        """Create from one entry of ``hyprctl monitors -j``.

        Hyprland reports the mode in physical pixels and the position in
        logical pixels; the frame is converted to logical units using the
        scale and rotation.  ``reserved`` holds the runtime insets claimed
        by bars and panels as ``[left, top, right, bottom]``.
        """
        width = data.get("width", 1920)
        height = data.get("height", 1080)
        if Transform(data.get("transform", 0)).is_rotated:
            width, height = height, width
        scale = data.get("scale", 1.0) or 1.0

        frame = Rect(
            float(data.get("x", 0)),
            float(data.get("y", 0)),
            width / scale,
            height / scale,
        )

        reserved = list(data.get("reserved") or [0, 0, 0, 0])
        reserved += [0] * (4 - len(reserved))
        left, top, right, bottom = (float(v) for v in reserved[:4])
        visible = Rect(
            frame.x + left,
            frame.y + top,
            frame.width - left - right,
            frame.height - top - bottom,
        )

        return cls(
            name=data.get("name", ""),
            frame=frame,
            visible_frame=visible,
            description=data.get("description", ""),
            scale=scale,
        )

    @classmethod
    def from_sway_output(cls, data: dict, workspaces: list[dict] | None = None) -> Display:
        """Create from ``swaymsg -t get_outputs`` JSON.

        Sway already reports ``rect`` in logical pixels.  The usable frame is
        the rect of the workspace visible on this output, which excludes bars.
        """
        rect = data.get("rect", {})
        frame = Rect(
            float(rect.get("x", 0)),
            float(rect.get("y", 0)),
            float(rect.get("width", 0)),
            float(rect.get("height", 0)),
        )

        visible = frame
        name = data.get("name", "")
        for ws in workspaces or []:
            if ws.get("output") == name and ws.get("visible"):
                ws_rect = ws.get("rect", {})
                visible = Rect(
                    float(ws_rect.get("x", frame.x)),
                    float(ws_rect.get("y", frame.y)),
                    float(ws_rect.get("width", frame.width)),
                    float(ws_rect.get("height", frame.height)),
                )
                break

        # Sway has no 'description' field; build one from its parts
        make = data.get("make", "")
        model = data.get("model", "")
        serial = data.get("serial", "")
        description = f"{make} {model} {serial}".strip()

        raw_scale = data.get("scale", 1.0)
        return cls(
            name=name,
            frame=frame,
            visible_frame=visible,
            description=description,
            scale=raw_scale if raw_scale > 0 else 1.0,
        )


# ── RectangleAction ──────────────────────────────────────────────────────

@dataclass(frozen=True)
class RectangleAction:
    """Record of the last placement applied to a window.

    Produced by one calculation and handed back verbatim with the next one.
    """

    action: WindowAction
    rect: Rect
    screen: Display
    sub_action: SubWindowAction | None = None

    def to_dict(self) -> dict:
        """Serialize to a JSON-friendly dict."""
        return {
            "action": self.action.value,
            "sub_action": self.sub_action.value if self.sub_action else None,
            "rect": self.rect.to_dict(),
            "screen": self.screen.to_dict(),
        }

    @classmethod
    def from_dict(cls, d: dict) -> RectangleAction:
        """Deserialize from a dict."""
        sub = d.get("sub_action")
        return cls(
            action=WindowAction(d["action"]),
            rect=Rect.from_dict(d["rect"]),
            screen=Display.from_dict(d["screen"]),
            sub_action=SubWindowAction(sub) if sub else None,
        )


# ── CalculationSettings ──────────────────────────────────────────────────

@dataclass(frozen=True)
class CalculationSettings:
    # Floor for "smaller"
    min_window_width: float = 200.0
    min_window_height: float = 150.0

    # Step sizes, in logical pixels
    size_step: float = 30.0
    move_step: float = 50.0

    # Fraction of the usable frame filled by "almost-maximize"
    almost_maximize_width: float = 0.9
    almost_maximize_height: float = 0.9

    # Padding applied inside every usable frame
    screen_edge_gap: float = 0.0

    def __post_init__(self) -> None:
        for name in ("min_window_width", "min_window_height", "size_step",
                     "move_step", "screen_edge_gap"):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} must not be negative")
        for name in ("almost_maximize_width", "almost_maximize_height"):
            value = getattr(self, name)
            if not 0.0 < value <= 1.0:
                raise ValueError(f"{name} must be within (0, 1], got {value}")

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, d: dict) -> CalculationSettings:
        known = {f.name for f in fields(cls)}
        return cls(**{k: float(v) for k, v in d.items() if k in known})


DEFAULT_SETTINGS = CalculationSettings()
