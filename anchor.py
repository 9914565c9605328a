"""Anchored canvas resizing: where old content lands in a resized canvas."""

from enum import Enum

from canvas import Canvas
from commands import Resize


class Align(Enum):
    LOW = "low"
    MID = "mid"
    HIGH = "high"


class Anchor(Enum):
    """Nine alignment policies, stored as (horizontal, vertical) alignment."""

    TOP_LEFT = (Align.LOW, Align.LOW)
    TOP = (Align.MID, Align.LOW)
    TOP_RIGHT = (Align.HIGH, Align.LOW)
    LEFT = (Align.LOW, Align.MID)
    CENTER = (Align.MID, Align.MID)
    RIGHT = (Align.HIGH, Align.MID)
    BOTTOM_LEFT = (Align.LOW, Align.HIGH)
    BOTTOM = (Align.MID, Align.HIGH)
    BOTTOM_RIGHT = (Align.HIGH, Align.HIGH)

    @property
    def x(self) -> Align:
        return self.value[0]

    @property
    def y(self) -> Align:
        return self.value[1]

    @classmethod
    def parse(cls, name: str) -> "Anchor":
        """Look up an anchor by name, e.g. "top_left" or "center"."""
        try:
            return cls[name.strip().upper().replace("-", "_").replace(" ", "_")]
        except KeyError:
            raise ValueError(f"Unknown anchor: {name}") from None


def _align_axis(target: int, origin: int, align: Align) -> tuple[int, int]:
    """Return (copy_start, paste) along one axis.

    Shrinking crops the old content, growing pads the new canvas; a single
    axis never does both.
    """
    if align is Align.LOW:
        return 0, 0
    if align is Align.HIGH:
        offset = abs(origin - target)
    else:
        offset = abs(origin - target) // 2
    if target < origin:
        return offset, 0
    return 0, offset


def resolve_anchor(old_width: int, old_height: int, new_width: int, new_height: int,
                   anchor: Anchor) -> tuple[int, int, int, int]:
    """Return (copy_start_x, copy_start_y, paste_x, paste_y) for a resize."""
    copy_start_x, paste_x = _align_axis(new_width, old_width, anchor.x)
    copy_start_y, paste_y = _align_axis(new_height, old_height, anchor.y)
    return copy_start_x, copy_start_y, paste_x, paste_y


def resize_command(canvas: Canvas, width: int, height: int,
                   anchor: Anchor = Anchor.TOP_LEFT) -> Resize:
    """Build a Resize command taking `canvas` to `width` x `height`."""
    if width < 1 or height < 1:
        raise ValueError(f"Canvas size must be at least 1x1, got {width}x{height}")
    return Resize(width, height, *resolve_anchor(canvas.width, canvas.height,
                                                 width, height, anchor))
