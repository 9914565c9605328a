"""Edit history: a replayable command log with undo, redo and checkpoints."""

import logging

from canvas import Canvas
from commands import Command, apply_commands
from config import HISTORY_GAP

logger = logging.getLogger(__name__)


class History:
    """Ordered log of applied commands plus a redo stack.

    The canvas shown to the user is the base canvas with every logged command
    replayed on top. To keep that cheap, the first `checkpoint_boundary * GAP`
    commands are kept pre-applied in a checkpoint canvas, so a render replays
    at most GAP - 1 commands.
    """

    GAP = HISTORY_GAP

    def __init__(self):
        self._edit_log: list[Command] = []
        self._redo_stack: list[Command] = []
        self._checkpoint: Canvas | None = None
        self._checkpoint_boundary = 0

    @property
    def edit_log(self) -> tuple:
        return tuple(self._edit_log)

    @property
    def redo_stack(self) -> tuple:
        return tuple(self._redo_stack)

    @property
    def checkpoint_boundary(self) -> int:
        return self._checkpoint_boundary

    def __len__(self):
        return len(self._edit_log)

    def can_undo(self) -> bool:
        return bool(self._edit_log)

    def can_redo(self) -> bool:
        return bool(self._redo_stack)

    def push(self, command: Command):
        """Log a command, unless it repeats the last one."""
        if self._edit_log and self._edit_log[-1] == command:
            return
        self._edit_log.append(command)
        self._redo_stack.clear()

    def undo(self) -> bool:
        if not self._edit_log:
            return False
        self._redo_stack.append(self._edit_log.pop())
        # The checkpoint only ever holds a prefix of the log; once the log is
        # shorter than that prefix it has to be rebuilt from the base.
        if len(self._edit_log) // self.GAP < self._checkpoint_boundary:
            logger.debug("Checkpoint at %d commands invalidated",
                         self._checkpoint_boundary * self.GAP)
            self._checkpoint = None
            self._checkpoint_boundary = 0
        return True

    def redo(self) -> bool:
        if not self._redo_stack:
            return False
        self._edit_log.append(self._redo_stack.pop())
        return True

    def render(self, base: Canvas) -> Canvas:
        """Return a new canvas: `base` with the whole log replayed on top."""
        if self._checkpoint is None:
            self._checkpoint = base.copy()

        boundary = len(self._edit_log) // self.GAP
        if boundary > self._checkpoint_boundary:
            start = self._checkpoint_boundary * self.GAP
            end = boundary * self.GAP
            apply_commands(self._edit_log[start:end], self._checkpoint)
            logger.debug("Checkpoint advanced over commands %d..%d", start, end)
            self._checkpoint_boundary = boundary

        canvas = self._checkpoint.copy()
        apply_commands(self._edit_log[self._checkpoint_boundary * self.GAP:], canvas)
        return canvas

    def clear(self):
        self._edit_log.clear()
        self._redo_stack.clear()
        self._checkpoint = None
        self._checkpoint_boundary = 0
