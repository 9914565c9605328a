"""
Global constants shared across modules.
"""
import os

# Canvas ---------------------------------------------------------------
CANVAS_WIDTH  = int(os.environ.get("TILEPAINT_WIDTH", 32))
CANVAS_HEIGHT = int(os.environ.get("TILEPAINT_HEIGHT", 24))
MAX_CANVAS_SIZE = 256

# History batch size: a checkpoint is materialized every GAP commands.
HISTORY_GAP = 16

# Window ---------------------------------------------------------------
TILE_SIZE = 20
TOOLBAR_H = 40
FPS       = 30

# Toolbar colours
TB_BG        = (220, 220, 220)
TB_BTN       = (180, 180, 180)
TB_BTN_HOVER = (160, 160, 160)
TB_TEXT      = (30, 30, 30)

# Empty cells are drawn as a checkerboard of these two greys
EMPTY_LIGHT = (160, 160, 160)
EMPTY_DARK  = (96, 96, 96)

# Default pen
PEN_FC = (255, 255, 255, 255)
PEN_BC = (0, 0, 0, 255)

# Logging --------------------------------------------------------------
LOG_LEVEL = os.environ.get("TILEPAINT_LOG_LEVEL", "INFO")
