"""Editing session: base canvas, edit history and pen, driven by action dicts."""

import logging

from anchor import Anchor, resize_command
from canvas import Canvas
from commands import Point, RectFill, RegionFill
from flood import flood_mask
from history import History
from pen import PenState, Tool

logger = logging.getLogger(__name__)


class Editor:
    def __init__(self, width: int, height: int):
        _check_size(width, height)
        self.canvas = Canvas.with_size(width, height)
        self.history = History()
        self.pen = PenState()

    def rendered(self) -> Canvas:
        """The canvas as the user sees it: base plus every logged edit."""
        return self.history.render(self.canvas)

    def execute(self, cmd: dict):
        action = cmd.get("action")
        method = getattr(self, f"_do_{action}", None)
        if method is None:
            raise ValueError(f"Unknown action: {action}")
        method(cmd)

    def new_canvas(self, width: int, height: int):
        _check_size(width, height)
        self.canvas = Canvas.with_size(width, height)
        self.history.clear()
        logger.info("New %dx%d canvas", width, height)

    def commit(self):
        """Bake the edit log into the base canvas and start a fresh history."""
        self.canvas = self.rendered()
        self.history.clear()
        logger.info("Committed edits into %dx%d canvas",
                    self.canvas.width, self.canvas.height)

    def _check_xy(self, canvas: Canvas, x: int, y: int):
        if not (0 <= x < canvas.width and 0 <= y < canvas.height):
            raise ValueError(
                f"Cell ({x}, {y}) is outside the {canvas.width}x{canvas.height} canvas")

    # --- Pen operations (not logged) ---

    def _do_set_pen(self, cmd: dict):
        if "idx" in cmd:
            self.pen.idx = cmd["idx"]
        if "fc" in cmd:
            self.pen.fc = tuple(cmd["fc"])
        if "bc" in cmd:
            self.pen.bc = tuple(cmd["bc"])

    def _do_set_tool(self, cmd: dict):
        self.pen.tool = Tool(cmd["tool"])
        self.pen.start_xy = None

    def _do_swap_colors(self, cmd: dict):
        self.pen.swap_colors()

    # --- Edits (pushed onto the history) ---

    def _do_paint(self, cmd: dict):
        canvas = self.rendered()
        x, y = cmd["x"], cmd["y"]
        self._check_xy(canvas, x, y)
        swap = cmd.get("swap", False)
        if self.pen.tool is Tool.FILL and canvas.get(x, y) == self.pen.tile(swap):
            return
        self.history.push(self.pen.command_at(canvas, x, y, swap))

    def _do_erase(self, cmd: dict):
        x, y = cmd["x"], cmd["y"]
        self._check_xy(self.rendered(), x, y)
        self.history.push(Point(None, x, y))

    def _do_fill_region(self, cmd: dict):
        canvas = self.rendered()
        x, y = cmd["x"], cmd["y"]
        self._check_xy(canvas, x, y)
        value = self.pen.tile(cmd.get("swap", False))
        # Filling a region with its own value changes nothing.
        if canvas.get(x, y) == value:
            return
        self.history.push(RegionFill(value, flood_mask(canvas, x, y), x, y))

    def _do_fill_rect(self, cmd: dict):
        canvas = self.rendered()
        self._check_xy(canvas, cmd["x0"], cmd["y0"])
        self._check_xy(canvas, cmd["x1"], cmd["y1"])
        value = self.pen.tile(cmd.get("swap", False))
        self.history.push(RectFill(value, cmd["x0"], cmd["y0"], cmd["x1"], cmd["y1"]))

    def _do_rect_begin(self, cmd: dict):
        self._check_xy(self.rendered(), cmd["x"], cmd["y"])
        self.pen.begin_rect(cmd["x"], cmd["y"])

    def _do_rect_end(self, cmd: dict):
        self._check_xy(self.rendered(), cmd["x"], cmd["y"])
        command = self.pen.end_rect(cmd["x"], cmd["y"], cmd.get("swap", False))
        if command is not None:
            self.history.push(command)

    def _do_rect_cancel(self, cmd: dict):
        self.pen.cancel_rect()

    def _do_resize(self, cmd: dict):
        anchor = Anchor.parse(cmd.get("anchor", "top_left"))
        self.history.push(
            resize_command(self.rendered(), cmd["width"], cmd["height"], anchor))

    def _do_undo(self, cmd: dict):
        self.history.undo()

    def _do_redo(self, cmd: dict):
        self.history.redo()

    def _do_new_canvas(self, cmd: dict):
        self.new_canvas(cmd["width"], cmd["height"])

    def _do_commit(self, cmd: dict):
        self.commit()

    # --- Read-only operations ---

    def get_cells(self, x: int = 0, y: int = 0,
                  w: int | None = None, h: int | None = None) -> list[list[dict | None]]:
        """Return tiles as JSON-ready rows for the given region of the rendered canvas."""
        canvas = self.rendered()
        if w is None:
            w = canvas.width - x
        if h is None:
            h = canvas.height - y
        # Clamp to canvas bounds
        x = max(0, min(x, canvas.width - 1))
        y = max(0, min(y, canvas.height - 1))
        w = min(w, canvas.width - x)
        h = min(h, canvas.height - y)

        rows = []
        for row in range(y, y + h):
            r_list = []
            for col in range(x, x + w):
                tile = canvas.get(col, row)
                r_list.append(None if tile is None else tile.to_json())
            rows.append(r_list)
        return rows

    def info(self) -> dict:
        canvas = self.rendered()
        return {
            "width": canvas.width,
            "height": canvas.height,
            "tool": self.pen.tool.value,
            "pen": {"idx": self.pen.idx, "fc": list(self.pen.fc), "bc": list(self.pen.bc)},
            "undo_steps": len(self.history),
            "redo_steps": len(self.history.redo_stack),
        }


def _check_size(width: int, height: int):
    if width < 1 or height < 1:
        raise ValueError(f"Canvas size must be at least 1x1, got {width}x{height}")
