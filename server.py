"""Entry point: starts MCP server thread + pygame main loop."""

import os
# Suppress pygame welcome message before importing — it prints to stdout
# which would corrupt the MCP stdio JSON-RPC stream.
os.environ["PYGAME_HIDE_SUPPORT_PROMPT"] = "1"

import sys
import queue
import logging
import threading

import pygame
import config
from canvas import Canvas
from editor import Editor
from pen import Tool
from tools import create_mcp_server

logger = logging.getLogger(__name__)

TOOL_KEYS = {
    pygame.K_1: Tool.PENCIL,
    pygame.K_2: Tool.ERASER,
    pygame.K_3: Tool.FILL,
    pygame.K_4: Tool.RECT_FILLED,
}


def run_mcp_server(mcp_server):
    """Target for the daemon thread — runs the MCP stdio server."""
    mcp_server.run(transport="stdio")


def _handle_request(cmd: dict, editor: Editor):
    """Process a request/response command from the MCP tool thread."""
    event: threading.Event = cmd["_event"]
    result: dict = cmd["_result"]
    action = cmd.get("action")
    try:
        if action == "get_cells":
            result["data"] = editor.get_cells(
                cmd.get("x", 0), cmd.get("y", 0),
                cmd.get("w"), cmd.get("h"),
            )
        elif action == "get_info":
            result["data"] = editor.info()
        else:
            result["error"] = f"Unknown request action: {action}"
    except Exception as e:
        logger.exception("Request %s failed", action)
        result["error"] = str(e)
    finally:
        event.set()


def _execute(editor: Editor, cmd: dict):
    try:
        editor.execute(cmd)
    except Exception:
        logger.exception("Command error: %s", cmd.get("action"))


def _window_size(canvas: Canvas) -> tuple[int, int]:
    return (max(canvas.width * config.TILE_SIZE, 240),
            canvas.height * config.TILE_SIZE + config.TOOLBAR_H)


def _cell_at(pos, canvas: Canvas):
    """Map a window position to a canvas cell, or None off the canvas."""
    x = pos[0] // config.TILE_SIZE
    y = (pos[1] - config.TOOLBAR_H) // config.TILE_SIZE
    if pos[1] < config.TOOLBAR_H or not (0 <= x < canvas.width and 0 <= y < canvas.height):
        return None
    return x, y


def _button_action(tool: Tool, pressed: bool, button: int, cell) -> dict | None:
    """Map a pointer button press or release to an editor action.

    Pencil and eraser paint from the held-button state each frame instead.
    """
    if button not in (1, 3):
        return None
    swap = button == 3
    if tool is Tool.RECT_FILLED:
        if cell is None:
            # Released off the canvas: drop the drag.
            return None if pressed else {"action": "rect_cancel"}
        if pressed:
            return {"action": "rect_begin", "x": cell[0], "y": cell[1]}
        return {"action": "rect_end", "x": cell[0], "y": cell[1], "swap": swap}
    if tool is Tool.FILL and pressed and cell is not None:
        # Fills read the rendered canvas, so they fire once per press.
        return {"action": "paint", "x": cell[0], "y": cell[1], "swap": swap}
    return None


class TileRenderer:
    """Draws a canvas as coloured squares with the glyph index as a character."""

    def __init__(self, font: pygame.font.Font):
        self.font = font
        self._glyphs: dict[tuple, pygame.Surface] = {}

    def _glyph(self, idx: int, fc: tuple):
        if not 32 <= idx < 127:
            return None
        key = (idx, fc)
        if key not in self._glyphs:
            self._glyphs[key] = self.font.render(chr(idx), True, fc[:3])
        return self._glyphs[key]

    def draw(self, screen: pygame.Surface, canvas: Canvas):
        size = config.TILE_SIZE
        for y, row in enumerate(canvas.rows()):
            for x, tile in enumerate(row):
                rect = pygame.Rect(x * size, config.TOOLBAR_H + y * size, size, size)
                if tile is None:
                    grey = config.EMPTY_LIGHT if (x + y) % 2 == 0 else config.EMPTY_DARK
                    pygame.draw.rect(screen, grey, rect)
                    continue
                pygame.draw.rect(screen, tile.bc[:3], rect)
                glyph = self._glyph(tile.idx, tile.fc)
                if glyph is not None:
                    screen.blit(glyph, glyph.get_rect(center=rect.center))


def _draw_button(screen, font, rect: pygame.Rect, text: str, mouse_pos, enabled: bool = True):
    btn_color = config.TB_BTN_HOVER if enabled and rect.collidepoint(mouse_pos) else config.TB_BTN
    pygame.draw.rect(screen, btn_color, rect, border_radius=4)
    pygame.draw.rect(screen, config.TB_TEXT, rect, width=1, border_radius=4)
    label = font.render(text, True, config.TB_TEXT if enabled else config.TB_BTN_HOVER)
    screen.blit(label, label.get_rect(center=rect.center))


def main():
    logging.basicConfig(
        stream=sys.stderr,
        level=config.LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    # Shared command queue between MCP thread and pygame main thread
    command_queue = queue.Queue()

    # Create MCP server with tool definitions
    mcp_server = create_mcp_server(command_queue)

    # Start MCP server in a background daemon thread
    mcp_thread = threading.Thread(target=run_mcp_server, args=(mcp_server,), daemon=True)
    mcp_thread.start()

    # Initialize pygame on the main thread
    pygame.init()
    editor = Editor(config.CANVAS_WIDTH, config.CANVAS_HEIGHT)
    window_size = _window_size(editor.canvas)
    screen = pygame.display.set_mode(window_size)
    pygame.display.set_caption("Tile Paint MCP")
    clock = pygame.time.Clock()

    font = pygame.font.SysFont(None, 24)
    renderer = TileRenderer(pygame.font.SysFont(None, config.TILE_SIZE + 2))
    undo_btn_rect = pygame.Rect(10, 8, 70, 26)
    redo_btn_rect = pygame.Rect(90, 8, 70, 26)

    # Pointer hits are mapped against the canvas drawn on the previous frame.
    rendered = editor.rendered()
    running = True
    while running:
        mouse_pos = pygame.mouse.get_pos()
        cell = _cell_at(mouse_pos, rendered)

        # Handle pygame events
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False
            elif event.type == pygame.KEYDOWN:
                ctrl = event.mod & pygame.KMOD_CTRL
                if ctrl and event.key == pygame.K_z:
                    _execute(editor, {"action": "undo"})
                elif ctrl and event.key == pygame.K_y:
                    _execute(editor, {"action": "redo"})
                elif event.key == pygame.K_x:
                    _execute(editor, {"action": "swap_colors"})
                elif event.key in TOOL_KEYS:
                    _execute(editor, {"action": "set_tool", "tool": TOOL_KEYS[event.key].value})
            elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                if undo_btn_rect.collidepoint(event.pos):
                    _execute(editor, {"action": "undo"})
                elif redo_btn_rect.collidepoint(event.pos):
                    _execute(editor, {"action": "redo"})
            if event.type in (pygame.MOUSEBUTTONDOWN, pygame.MOUSEBUTTONUP):
                action = _button_action(editor.pen.tool, event.type == pygame.MOUSEBUTTONDOWN,
                                        event.button, cell)
                if action is not None:
                    _execute(editor, action)

        # Pointer painting: a held button paints every frame; the history
        # drops repeats of the same edit.
        if cell is not None and editor.pen.tool in (Tool.PENCIL, Tool.ERASER):
            primary, _, secondary = pygame.mouse.get_pressed()
            if primary or secondary:
                _execute(editor, {"action": "paint", "x": cell[0], "y": cell[1],
                                  "swap": not primary})

        # Drain all pending commands from the queue
        while True:
            try:
                cmd = command_queue.get_nowait()
            except queue.Empty:
                break

            # Request/response bridge commands have an _event key
            if "_event" in cmd:
                _handle_request(cmd, editor)
            else:
                _execute(editor, cmd)

        # --- Render ---
        rendered = editor.rendered()
        if _window_size(rendered) != window_size:
            window_size = _window_size(rendered)
            screen = pygame.display.set_mode(window_size)

        # Toolbar
        screen.fill(config.TB_BG)
        _draw_button(screen, font, undo_btn_rect, "Undo", mouse_pos, editor.history.can_undo())
        _draw_button(screen, font, redo_btn_rect, "Redo", mouse_pos, editor.history.can_redo())
        status = font.render(f"{editor.pen.tool.value}  glyph {editor.pen.idx}", True, config.TB_TEXT)
        screen.blit(status, (175, 12))

        # Canvas (offset below toolbar)
        renderer.draw(screen, rendered)

        # Rectangle drag preview
        if editor.pen.start_xy is not None and cell is not None:
            (x0, y0), (x1, y1) = editor.pen.start_xy, cell
            size = config.TILE_SIZE
            preview = pygame.Rect(min(x0, x1) * size, config.TOOLBAR_H + min(y0, y1) * size,
                                  (abs(x1 - x0) + 1) * size, (abs(y1 - y0) + 1) * size)
            pygame.draw.rect(screen, editor.pen.fc[:3], preview, width=2)

        pygame.display.flip()
        clock.tick(config.FPS)

    pygame.quit()


if __name__ == "__main__":
    main()
