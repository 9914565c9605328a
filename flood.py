"""Region flood fill over a tile canvas."""

import numpy as np

from canvas import Canvas


def flood_mask(canvas: Canvas, x: int, y: int) -> np.ndarray:
    """Return a (height, width) bool mask of the region containing (x, y).

    The region is every cell reachable from the seed through 4-neighbours
    holding a value equal to the seed's. Two empty cells count as equal.
    """
    mask = np.zeros((canvas.height, canvas.width), dtype=bool)
    target = canvas.get(x, y)
    end_x = canvas.width - 1
    end_y = canvas.height - 1

    # Explicit stack, so region size never hits the recursion limit.
    stack = [(x, y)]
    while stack:
        cx, cy = stack.pop()
        mask[cy, cx] = True
        if cx > 0 and not mask[cy, cx - 1] and canvas.get(cx - 1, cy) == target:
            stack.append((cx - 1, cy))
        if cx < end_x and not mask[cy, cx + 1] and canvas.get(cx + 1, cy) == target:
            stack.append((cx + 1, cy))
        if cy > 0 and not mask[cy - 1, cx] and canvas.get(cx, cy - 1) == target:
            stack.append((cx, cy - 1))
        if cy < end_y and not mask[cy + 1, cx] and canvas.get(cx, cy + 1) == target:
            stack.append((cx, cy + 1))

    return mask
