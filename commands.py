"""Replayable edit commands and how they apply to a canvas."""

from dataclasses import dataclass, field

import numpy as np

from canvas import Canvas, TileState


@dataclass(frozen=True)
class Point:
    value: TileState | None
    x: int
    y: int


@dataclass(frozen=True, eq=False)
class RegionFill:
    """Paint every cell where `mask[y, x]` is set.

    The mask is computed once, when the command is built, and shaped like
    the canvas at that moment. Commands replay in the order they were
    created, so the canvas has the same shape whenever this one is applied.
    """
    value: TileState | None
    mask: np.ndarray = field(repr=False)
    seed_x: int = 0
    seed_y: int = 0

    def __post_init__(self):
        mask = np.array(self.mask, dtype=bool)
        mask.setflags(write=False)
        object.__setattr__(self, "mask", mask)

    def __eq__(self, other):
        if not isinstance(other, RegionFill):
            return NotImplemented
        return (self.value == other.value
                and self.seed_x == other.seed_x and self.seed_y == other.seed_y
                and np.array_equal(self.mask, other.mask))


@dataclass(frozen=True)
class RectFill:
    """Paint the rectangle spanned by two corners, given in any order."""
    value: TileState | None
    x0: int
    y0: int
    x1: int
    y1: int


@dataclass(frozen=True)
class Resize:
    width: int
    height: int
    copy_start_x: int
    copy_start_y: int
    paste_x: int
    paste_y: int


Command = Point | RegionFill | RectFill | Resize


def apply_command(command: Command, canvas: Canvas):
    """Apply one command to `canvas` in place."""
    match command:
        case Point(value, x, y):
            canvas.set(x, y, value)
        case RegionFill():
            for y, x in np.argwhere(command.mask):
                canvas.set(int(x), int(y), command.value)
        case RectFill(value, x0, y0, x1, y1):
            x0, x1 = min(x0, x1), max(x0, x1)
            y0, y1 = min(y0, y1), max(y0, y1)
            for y in range(y0, y1 + 1):
                for x in range(x0, x1 + 1):
                    canvas.set(x, y, value)
        case Resize(width, height, copy_start_x, copy_start_y, paste_x, paste_y):
            canvas.resize(width, height, copy_start_x, copy_start_y, paste_x, paste_y)
        case _:
            raise TypeError(f"Not a command: {command!r}")


def apply_commands(commands, canvas: Canvas):
    for command in commands:
        apply_command(command, canvas)
