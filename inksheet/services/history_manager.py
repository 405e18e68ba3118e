# history_manager.py
"""Snapshot-based undo/redo for a sheet.

Every change notification (re)starts a short single-shot timer; when it
fires the whole item set is serialized and pushed if it differs from the
last snapshot. Restores and bulk operations hold a suppression guard so
their intermediate mutations never reach the stack; a bulk operation
captures exactly once when its guard is released.
"""
from __future__ import annotations

import logging
from contextlib import contextmanager
from enum import Enum, auto
from typing import TYPE_CHECKING, List, Optional

from PySide6.QtCore import QObject, QTimer, Signal

from inksheet.config import HISTORY_DEBOUNCE_MS, MAX_HISTORY

if TYPE_CHECKING:
    from inksheet.models.sheet_surface import SheetSurface
    from inksheet.services.snapshot_serializer import SnapshotSerializer

logger = logging.getLogger(__name__)


class HistoryRestoreError(RuntimeError):
    """A snapshot could not be restored; the sheet and both stacks are unchanged."""


class HistoryState(Enum):
    IDLE = auto()
    PENDING_CAPTURE = auto()
    RESTORING = auto()


class HistoryManager(QObject):
    history_changed = Signal(bool, bool)  # can_undo, can_redo

    def __init__(self,
        surface: "SheetSurface",
        serializer: "SnapshotSerializer",
        max_history: int = MAX_HISTORY,
        debounce_ms: int = HISTORY_DEBOUNCE_MS,
        parent: Optional[QObject] = None,
    ):
        super().__init__(parent)
        if max_history < 1:
            raise ValueError("max_history must be at least 1")
        self._surface = surface
        self._serializer = serializer
        self._max_history = max_history
        self._undo_stack: List[str] = []
        self._redo_stack: List[str] = []
        self._suppress_depth = 0

        self._timer = QTimer(self)
        self._timer.setSingleShot(True)
        self._timer.setInterval(debounce_ms)
        self._timer.timeout.connect(self._on_timeout)

        surface.changed.connect(self.notify_change)

    # ---------- State ----------

    @property
    def state(self) -> HistoryState:
        if self._suppress_depth:
            return HistoryState.RESTORING
        if self._timer.isActive():
            return HistoryState.PENDING_CAPTURE
        return HistoryState.IDLE

    @property
    def is_restoring(self) -> bool:
        return self._suppress_depth > 0

    @property
    def can_undo(self) -> bool:
        return len(self._undo_stack) > 1

    @property
    def can_redo(self) -> bool:
        return bool(self._redo_stack)

    @property
    def undo_depth(self) -> int:
        return len(self._undo_stack)

    @property
    def redo_depth(self) -> int:
        return len(self._redo_stack)

    @property
    def undo_stack(self) -> List[str]:
        return list(self._undo_stack)

    @property
    def redo_stack(self) -> List[str]:
        return list(self._redo_stack)

    @property
    def current(self) -> Optional[str]:
        return self._undo_stack[-1] if self._undo_stack else None

    # ---------- Capture ----------

    def initialize(self) -> None:
        """Record the starting state so the stack is never empty."""
        self.clear()
        self.capture_now()

    def clear(self) -> None:
        self._timer.stop()
        self._undo_stack.clear()
        self._redo_stack.clear()
        self._emit_changed()

    def notify_change(self) -> None:
        if self._suppress_depth:
            return
        # start() on an active timer restarts it: the last change wins
        self._timer.start()

    def _on_timeout(self) -> None:
        self.capture_now()

    def capture_now(self) -> bool:
        """Push the current scene if it differs from the top. Returns True if pushed."""
        if self._suppress_depth:
            return False
        self._timer.stop()
        snapshot = self._serializer.serialize(self._surface.list_items())
        if self._undo_stack and self._undo_stack[-1] == snapshot:
            return False

        self._undo_stack.append(snapshot)
        if len(self._undo_stack) > self._max_history:
            del self._undo_stack[0]
        self._redo_stack.clear()
        logger.debug("[History] captured snapshot %d/%d", len(self._undo_stack), self._max_history)
        self._emit_changed()
        return True

    @contextmanager
    def suppressed(self, capture: bool = True):
        """
        Hold off captures for the duration of a bulk operation.

        Nested use is fine; only leaving the outermost block captures, and
        it does so exactly once.
        """
        self._suppress_depth += 1
        self._timer.stop()
        try:
            yield self
        finally:
            self._suppress_depth -= 1
            if capture and not self._suppress_depth:
                self.capture_now()

    # ---------- Undo / redo ----------

    def _flush_pending(self) -> None:
        # an edit still waiting on the debounce becomes its own step first
        if self._timer.isActive():
            self.capture_now()

    def undo(self) -> bool:
        self._flush_pending()
        if len(self._undo_stack) <= 1:
            return False
        current = self._undo_stack.pop()
        self._redo_stack.append(current)
        try:
            self.restore(self._undo_stack[-1])
        except HistoryRestoreError:
            self._redo_stack.pop()
            self._undo_stack.append(current)
            raise
        finally:
            self._emit_changed()
        return True

    def redo(self) -> bool:
        self._flush_pending()
        if not self._redo_stack:
            return False
        snapshot = self._redo_stack.pop()
        self._undo_stack.append(snapshot)
        try:
            self.restore(snapshot)
        except HistoryRestoreError:
            self._undo_stack.pop()
            self._redo_stack.append(snapshot)
            raise
        finally:
            self._emit_changed()
        return True

    def restore(self, snapshot: str) -> None:
        """Replace the sheet's items with ``snapshot`` without recording a step."""
        with self.suppressed(capture=False):
            try:
                items = self._serializer.deserialize(snapshot)
            except Exception as e:
                logger.error("[History] restore failed: %s", e)
                raise HistoryRestoreError(f"Could not restore snapshot: {e}") from e
            self._surface.replace_items(items)
            self._surface.create_bleed_area()

    def _emit_changed(self):
        self.history_changed.emit(self.can_undo, self.can_redo)
