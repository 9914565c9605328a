"""Pen state: turns pointer presses on the canvas into edit commands."""

from dataclasses import dataclass
from enum import Enum

from canvas import Canvas, Color, TileState
from commands import Command, Point, RectFill, RegionFill
from config import PEN_BC, PEN_FC
from flood import flood_mask


class Tool(Enum):
    PENCIL = "pencil"
    ERASER = "eraser"
    FILL = "fill"
    RECT_FILLED = "rect_filled"


@dataclass
class PenState:
    idx: int = 0
    fc: Color = PEN_FC
    bc: Color = PEN_BC
    tool: Tool = Tool.PENCIL
    start_xy: tuple[int, int] | None = None

    def swap_colors(self):
        self.fc, self.bc = self.bc, self.fc

    def tile(self, swap: bool = False) -> TileState | None:
        """The tile this pen paints; `swap` paints with the colours exchanged."""
        if self.tool is Tool.ERASER:
            return None
        if swap:
            return TileState(self.idx, self.bc, self.fc)
        return TileState(self.idx, self.fc, self.bc)

    def command_at(self, canvas: Canvas, x: int, y: int, swap: bool = False) -> Command:
        """Build the command for a press on cell (x, y) of the rendered canvas."""
        value = self.tile(swap)
        if self.tool is Tool.FILL:
            return RegionFill(value, flood_mask(canvas, x, y), x, y)
        if self.tool is Tool.RECT_FILLED:
            # A press without a drag fills the single cell.
            return RectFill(value, x, y, x, y)
        return Point(value, x, y)

    # --- Rectangle tool drag ---

    def begin_rect(self, x: int, y: int):
        self.start_xy = (x, y)

    def end_rect(self, x: int, y: int, swap: bool = False) -> RectFill | None:
        if self.start_xy is None:
            return None
        x0, y0 = self.start_xy
        self.start_xy = None
        return RectFill(self.tile(swap), x0, y0, x, y)

    def cancel_rect(self):
        self.start_xy = None
