"""Tile canvas: a row-major grid of optional tiles."""

from dataclasses import dataclass


Color = tuple[int, int, int, int]


@dataclass(frozen=True)
class TileState:
    """One painted cell: a glyph index drawn in `fc` over `bc`."""
    idx: int = 0
    fc: Color = (255, 255, 255, 255)
    bc: Color = (0, 0, 0, 255)

    def to_json(self) -> dict:
        return {"idx": self.idx, "fc": list(self.fc), "bc": list(self.bc)}


class Canvas:
    def __init__(self, width: int, height: int, cells: list | None = None):
        self.width = width
        self.height = height
        if cells is None:
            cells = [None] * (width * height)
        self.cells: list[TileState | None] = cells

    @classmethod
    def with_size(cls, width: int, height: int) -> "Canvas":
        return cls(width, height)

    # Coordinates are not checked against the canvas bounds; an index past
    # the end of `cells` raises IndexError.

    def get(self, x: int, y: int) -> TileState | None:
        return self.cells[y * self.width + x]

    def set(self, x: int, y: int, value: TileState | None):
        self.cells[y * self.width + x] = value

    def copy(self) -> "Canvas":
        return Canvas(self.width, self.height, list(self.cells))

    def resize(self, width: int, height: int, copy_start_x: int, copy_start_y: int,
               paste_x: int, paste_y: int):
        """Replace the content with a `width` x `height` grid.

        The block starting at (copy_start_x, copy_start_y) in the old grid is
        pasted at (paste_x, paste_y) in the new one, clipped to whichever of
        the two grids runs out first. Everything else is empty.
        """
        new = Canvas.with_size(width, height)
        rows = min(height - paste_y, self.height - copy_start_y)
        cols = min(width - paste_x, self.width - copy_start_x)
        for dy in range(rows):
            for dx in range(cols):
                new.set(paste_x + dx, paste_y + dy,
                        self.get(copy_start_x + dx, copy_start_y + dy))
        self.width, self.height, self.cells = new.width, new.height, new.cells

    def rows(self):
        """Yield each row as a list, top to bottom."""
        for y in range(self.height):
            start = y * self.width
            yield self.cells[start:start + self.width]

    def __eq__(self, other):
        if not isinstance(other, Canvas):
            return NotImplemented
        return (self.width == other.width and self.height == other.height
                and self.cells == other.cells)

    def __repr__(self):
        return f"Canvas({self.width}x{self.height})"
