"""MCP tool definitions. Pushes editing actions onto a thread-safe queue."""

import json
import queue
import threading
from typing import Optional
from mcp.server.fastmcp import FastMCP

from anchor import Anchor
from config import MAX_CANVAS_SIZE
from pen import Tool


def clamp(value: int, lo: int, hi: int) -> int:
    return max(lo, min(hi, value))


def _rgba(r: int, g: int, b: int, a: int = 255) -> list[int]:
    return [clamp(r, 0, 255), clamp(g, 0, 255), clamp(b, 0, 255), clamp(a, 0, 255)]


def create_mcp_server(command_queue: queue.Queue) -> FastMCP:
    mcp = FastMCP("tilepaint-mcp")

    def _request_response(cmd: dict, timeout: float = 5.0):
        """Send a command to the main thread and wait for a response."""
        event = threading.Event()
        result: dict = {}
        cmd["_event"] = event
        cmd["_result"] = result
        command_queue.put(cmd)
        if not event.wait(timeout):
            raise TimeoutError("Main thread did not respond in time")
        if "error" in result:
            raise RuntimeError(result["error"])
        return result["data"]

    @mcp.tool()
    def get_canvas_info() -> str:
        """Get canvas dimensions, the current pen and tool, and undo/redo depth."""
        return json.dumps(_request_response({"action": "get_info"}))

    @mcp.tool()
    def set_pen(idx: int, fg_r: int, fg_g: int, fg_b: int,
                bg_r: int, bg_g: int, bg_b: int) -> str:
        """Set the pen glyph index (0-255) and its foreground/background colours (RGB, each 0-255)."""
        idx = clamp(idx, 0, 255)
        fc = _rgba(fg_r, fg_g, fg_b)
        bc = _rgba(bg_r, bg_g, bg_b)
        command_queue.put({"action": "set_pen", "idx": idx, "fc": fc, "bc": bc})
        return f"Pen set to glyph {idx}, fg rgb({fc[0]}, {fc[1]}, {fc[2]}), bg rgb({bc[0]}, {bc[1]}, {bc[2]})"

    @mcp.tool()
    def set_tool(tool: str) -> str:
        """Select the pointer tool: pencil, eraser, fill or rect_filled."""
        try:
            Tool(tool)
        except ValueError:
            return f"Unknown tool '{tool}'. Use one of: {', '.join(t.value for t in Tool)}"
        command_queue.put({"action": "set_tool", "tool": tool})
        return f"Tool set to {tool}"

    @mcp.tool()
    def swap_colors() -> str:
        """Exchange the pen's foreground and background colours."""
        command_queue.put({"action": "swap_colors"})
        return "Pen colours swapped"

    @mcp.tool()
    def paint_cell(x: int, y: int, swap: bool = False) -> str:
        """Apply the current tool at cell (x, y). swap=True paints with fg/bg exchanged."""
        command_queue.put({"action": "paint", "x": x, "y": y, "swap": swap})
        return f"Painted cell ({x}, {y})"

    @mcp.tool()
    def erase_cell(x: int, y: int) -> str:
        """Clear cell (x, y) back to empty."""
        command_queue.put({"action": "erase", "x": x, "y": y})
        return f"Erased cell ({x}, {y})"

    @mcp.tool()
    def fill_region(x: int, y: int, swap: bool = False) -> str:
        """Bucket-fill the connected region of identical cells containing (x, y) with the pen tile."""
        command_queue.put({"action": "fill_region", "x": x, "y": y, "swap": swap})
        return f"Flood filled at ({x}, {y})"

    @mcp.tool()
    def fill_rect(x0: int, y0: int, x1: int, y1: int, swap: bool = False) -> str:
        """Fill the rectangle between corners (x0, y0) and (x1, y1), inclusive, with the pen tile."""
        command_queue.put({
            "action": "fill_rect",
            "x0": x0, "y0": y0, "x1": x1, "y1": y1, "swap": swap,
        })
        return f"Filled rectangle ({x0}, {y0})-({x1}, {y1})"

    @mcp.tool()
    def resize_canvas(width: int, height: int, anchor: str = "top_left") -> str:
        """Resize the canvas (undoable). anchor picks where existing content stays:
        top_left, top, top_right, left, center, right, bottom_left, bottom, bottom_right."""
        try:
            Anchor.parse(anchor)
        except ValueError as e:
            return str(e)
        width = clamp(width, 1, MAX_CANVAS_SIZE)
        height = clamp(height, 1, MAX_CANVAS_SIZE)
        command_queue.put({"action": "resize", "width": width, "height": height,
                           "anchor": anchor})
        return f"Resized canvas to {width}x{height} anchored {anchor}"

    @mcp.tool()
    def undo() -> str:
        """Undo the last edit."""
        command_queue.put({"action": "undo"})
        return "Undo performed"

    @mcp.tool()
    def redo() -> str:
        """Redo the last undone edit."""
        command_queue.put({"action": "redo"})
        return "Redo performed"

    @mcp.tool()
    def new_canvas(width: int, height: int) -> str:
        """Start a new empty canvas. Discards the undo history."""
        width = clamp(width, 1, MAX_CANVAS_SIZE)
        height = clamp(height, 1, MAX_CANVAS_SIZE)
        command_queue.put({"action": "new_canvas", "width": width, "height": height})
        return f"New {width}x{height} canvas"

    @mcp.tool()
    def commit_canvas() -> str:
        """Bake all edits into the canvas. Discards the undo history."""
        command_queue.put({"action": "commit"})
        return "Edits committed"

    @mcp.tool()
    def get_canvas_cells(x: Optional[int] = None, y: Optional[int] = None,
                         width: Optional[int] = None, height: Optional[int] = None) -> str:
        """Return canvas tiles as a JSON 2D array (row-major). Each entry is null for an
        empty cell or {"idx", "fc", "bc"} with RGBA colours.

        All parameters are optional. Omit them to get the full canvas."""
        cmd: dict = {"action": "get_cells"}
        if x is not None:
            cmd["x"] = x
        if y is not None:
            cmd["y"] = y
        if width is not None:
            cmd["w"] = width
        if height is not None:
            cmd["h"] = height
        return json.dumps(_request_response(cmd))

    return mcp
