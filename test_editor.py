"""Tests for the editing session."""

import pytest

from canvas import TileState
from editor import Editor
from pen import Tool

RED = (255, 0, 0, 255)
BLUE = (0, 0, 255, 255)


@pytest.fixture
def editor() -> Editor:
    editor = Editor(4, 4)
    editor.execute({"action": "set_pen", "idx": 65, "fc": list(RED), "bc": list(BLUE)})
    return editor


class TestExecute:
    """Tests for action dispatch."""

    def test_unknown_action(self, editor: Editor) -> None:
        with pytest.raises(ValueError, match="Unknown action"):
            editor.execute({"action": "explode"})

    def test_missing_field(self, editor: Editor) -> None:
        with pytest.raises(KeyError):
            editor.execute({"action": "paint", "x": 1})

    def test_set_pen(self, editor: Editor) -> None:
        assert editor.pen.tile() == TileState(65, RED, BLUE)

    def test_paint_and_undo(self, editor: Editor) -> None:
        editor.execute({"action": "paint", "x": 1, "y": 2})
        assert editor.rendered().get(1, 2) == TileState(65, RED, BLUE)
        editor.execute({"action": "undo"})
        assert editor.rendered().get(1, 2) is None
        editor.execute({"action": "redo"})
        assert editor.rendered().get(1, 2) == TileState(65, RED, BLUE)

    def test_paint_swapped(self, editor: Editor) -> None:
        editor.execute({"action": "paint", "x": 0, "y": 0, "swap": True})
        assert editor.rendered().get(0, 0) == TileState(65, BLUE, RED)

    def test_paint_outside_canvas(self, editor: Editor) -> None:
        with pytest.raises(ValueError, match="outside"):
            editor.execute({"action": "paint", "x": 4, "y": 0})
        assert len(editor.history) == 0

    def test_stationary_drag_logs_once(self, editor: Editor) -> None:
        for _ in range(5):
            editor.execute({"action": "paint", "x": 2, "y": 2})
        assert len(editor.history) == 1

    def test_erase(self, editor: Editor) -> None:
        editor.execute({"action": "paint", "x": 0, "y": 0})
        editor.execute({"action": "erase", "x": 0, "y": 0})
        assert editor.rendered().get(0, 0) is None

    def test_fill_region(self, editor: Editor) -> None:
        editor.execute({"action": "fill_rect", "x0": 0, "y0": 1, "x1": 3, "y1": 1})
        editor.execute({"action": "set_pen", "idx": 66})
        editor.execute({"action": "fill_region", "x": 0, "y": 0})
        canvas = editor.rendered()
        assert all(canvas.get(x, 0) == TileState(66, RED, BLUE) for x in range(4))
        assert all(canvas.get(x, 1) == TileState(65, RED, BLUE) for x in range(4))
        assert all(canvas.get(x, 2) is None for x in range(4))

    def test_tool_paint_fill(self, editor: Editor) -> None:
        editor.execute({"action": "set_tool", "tool": "fill"})
        assert editor.pen.tool is Tool.FILL
        editor.execute({"action": "paint", "x": 3, "y": 3})
        canvas = editor.rendered()
        assert all(tile == TileState(65, RED, BLUE) for tile in canvas.cells)

    def test_rect_drag(self, editor: Editor) -> None:
        editor.execute({"action": "set_tool", "tool": "rect_filled"})
        editor.execute({"action": "rect_begin", "x": 2, "y": 2})
        editor.execute({"action": "rect_end", "x": 1, "y": 3})
        canvas = editor.rendered()
        painted = {(x, y) for y in range(4) for x in range(4) if canvas.get(x, y) is not None}
        assert painted == {(1, 2), (2, 2), (1, 3), (2, 3)}

    def test_held_fill_logs_once(self) -> None:
        """Repeated fills at one seed add a single history entry."""
        editor = Editor(3, 1)
        editor.execute({"action": "set_pen", "idx": 65, "fc": list(RED), "bc": list(BLUE)})
        editor.execute({"action": "paint", "x": 2, "y": 0})
        before = editor.rendered()
        editor.execute({"action": "set_tool", "tool": "fill"})
        for _ in range(3):
            editor.execute({"action": "paint", "x": 0, "y": 0})
        assert len(editor.history) == 2
        assert editor.rendered().cells == [TileState(65, RED, BLUE)] * 3
        editor.execute({"action": "undo"})
        assert editor.rendered() == before

    def test_fill_region_with_own_value_is_dropped(self, editor: Editor) -> None:
        editor.execute({"action": "fill_region", "x": 0, "y": 0})
        editor.execute({"action": "fill_region", "x": 3, "y": 3})
        assert len(editor.history) == 1

    def test_rect_cancel(self, editor: Editor) -> None:
        editor.execute({"action": "set_tool", "tool": "rect_filled"})
        editor.execute({"action": "rect_begin", "x": 1, "y": 1})
        editor.execute({"action": "rect_cancel"})
        assert editor.pen.start_xy is None
        editor.execute({"action": "rect_end", "x": 2, "y": 2})
        assert len(editor.history) == 0

    def test_swap_colors(self, editor: Editor) -> None:
        editor.execute({"action": "swap_colors"})
        assert (editor.pen.fc, editor.pen.bc) == (BLUE, RED)


class TestCanvasLifecycle:
    """Tests for resizing, committing and replacing the canvas."""

    def test_resize_is_undoable(self, editor: Editor) -> None:
        editor.execute({"action": "paint", "x": 3, "y": 3})
        editor.execute({"action": "resize", "width": 2, "height": 2, "anchor": "bottom_right"})
        canvas = editor.rendered()
        assert (canvas.width, canvas.height) == (2, 2)
        assert canvas.get(1, 1) == TileState(65, RED, BLUE)
        editor.execute({"action": "undo"})
        assert editor.rendered().width == 4

    def test_resize_center(self, editor: Editor) -> None:
        editor.execute({"action": "paint", "x": 0, "y": 0})
        editor.execute({"action": "resize", "width": 6, "height": 6, "anchor": "center"})
        assert editor.rendered().get(1, 1) == TileState(65, RED, BLUE)

    def test_resize_rejects_zero(self, editor: Editor) -> None:
        with pytest.raises(ValueError):
            editor.execute({"action": "resize", "width": 0, "height": 3})

    def test_commit(self, editor: Editor) -> None:
        editor.execute({"action": "paint", "x": 1, "y": 1})
        editor.execute({"action": "commit"})
        assert len(editor.history) == 0
        assert editor.canvas.get(1, 1) == TileState(65, RED, BLUE)
        editor.execute({"action": "undo"})
        assert editor.rendered().get(1, 1) == TileState(65, RED, BLUE)

    def test_new_canvas_clears_history(self, editor: Editor) -> None:
        editor.execute({"action": "paint", "x": 1, "y": 1})
        editor.execute({"action": "new_canvas", "width": 3, "height": 2})
        canvas = editor.rendered()
        assert (canvas.width, canvas.height) == (3, 2)
        assert canvas.cells == [None] * 6
        assert not editor.history.can_undo()

    def test_editor_rejects_zero_size(self) -> None:
        with pytest.raises(ValueError):
            Editor(0, 4)

    def test_new_canvas_rejects_zero(self, editor: Editor) -> None:
        with pytest.raises(ValueError):
            editor.new_canvas(0, 5)


class TestQueries:
    """Tests for read-only queries."""

    def test_get_cells(self, editor: Editor) -> None:
        editor.execute({"action": "paint", "x": 1, "y": 0})
        rows = editor.get_cells(0, 0, 2, 1)
        assert rows == [[None, {"idx": 65, "fc": list(RED), "bc": list(BLUE)}]]

    def test_get_cells_clamps(self, editor: Editor) -> None:
        rows = editor.get_cells(2, 3, 10, 10)
        assert len(rows) == 1
        assert len(rows[0]) == 2

    def test_info(self, editor: Editor) -> None:
        editor.execute({"action": "paint", "x": 1, "y": 0})
        editor.execute({"action": "paint", "x": 2, "y": 0})
        editor.execute({"action": "undo"})
        info = editor.info()
        assert info["width"] == 4
        assert info["tool"] == "pencil"
        assert info["undo_steps"] == 1
        assert info["redo_steps"] == 1
