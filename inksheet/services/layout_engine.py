# layout_engine.py
from __future__ import annotations

import logging
from typing import Iterable, List, Optional

from PySide6.QtCore import QObject, QRectF, Signal, Slot

from inksheet.config import DUPLICATION_OFFSET, STATUS_TIMEOUT_MS
from inksheet.models.sheet_item import SheetElement
from inksheet.models.sheet_surface import SheetSurface
from inksheet.services import fill_manager, reflow_manager
from inksheet.services.fill_manager import CloneFn, FillResult
from inksheet.services.history_manager import HistoryManager, HistoryRestoreError
from inksheet.services.placement_engine import arrange_on_surface, compute_safe_area
from inksheet.services.sheet_settings import SheetSettings
from inksheet.services.snapshot_serializer import SnapshotSerializer

logger = logging.getLogger(__name__)


class FillError(RuntimeError):
    """Raised when a fill is requested while another one is still running."""


class LayoutEngine(QObject):
    """
    Owns the placement, fill, reflow and history logic for one sheet.

    UI code calls the methods here and listens to ``status_message`` for
    user-facing notices. Bulk operations (fill, reflow, duplicate, delete,
    clear) are recorded as a single undo step each.
    """
    status_message = Signal(str, str, int)  # message, level, timeout_ms

    def __init__(self,
        surface: SheetSurface,
        settings: Optional[SheetSettings] = None,
        serializer: Optional[SnapshotSerializer] = None,
        parent: Optional[QObject] = None,
    ):
        super().__init__(parent)
        self.surface = surface
        self.settings = settings or SheetSettings()
        self.serializer = serializer or SnapshotSerializer()
        self.history = HistoryManager(
            surface,
            self.serializer,
            max_history=self.settings.max_history,
            debounce_ms=self.settings.debounce_ms,
            parent=self,
        )
        self._filling = False

        surface.orientation_changed.connect(self._on_orientation_changed)
        self.history.initialize()

    # ---------- Geometry ----------

    def safe_area(self) -> QRectF:
        width, height = self.surface.safe_area_dimensions()
        return compute_safe_area(width, height, self.surface.bleed, self.settings.padding)

    @property
    def gutter(self) -> float:
        return self.settings.gutter

    @property
    def is_filling(self) -> bool:
        return self._filling

    # ---------- Single items ----------

    def arrange(self, item: SheetElement) -> bool:
        return arrange_on_surface(item, self.surface, self.safe_area(), self.gutter)

    def add_item(self, item: SheetElement) -> bool:
        """Put a new item on the sheet and move it into free space."""
        self.surface.add_item(item)
        placed = self.arrange(item)
        if not placed:
            self._status("No free space for the new item; it was centered on the sheet.", "warning")
        return placed

    # ---------- Bulk operations ----------

    async def fill_sheet(self, clone_fn: Optional[CloneFn] = None) -> Optional[FillResult]:
        if self._filling:
            raise FillError("A fill is already in progress.")
        if not self.surface.list_items():
            self._status("Please add some items first!", "warning")
            return None

        self._filling = True
        try:
            with self.history.suppressed():
                result = await fill_manager.fill_sheet(
                    self.surface, self.safe_area(), self.gutter, clone_fn)
        finally:
            self._filling = False

        if result.total_failure:
            self._status("No items could be arranged within the safe area.", "error")
        elif result.failed_originals:
            self._status(f"{len(result.failed_originals)} item(s) could not be placed.", "warning")
        else:
            self._status(f"Sheet filled: {result.clones_placed} copies added.", "info")
        return result

    def reflow(self) -> int:
        with self.history.suppressed():
            moved = reflow_manager.reflow(self.surface, self.safe_area(), self.gutter)
        return moved

    async def duplicate(self, items: Iterable[SheetElement]) -> List[SheetElement]:
        """Clone ``items`` next to themselves (shifted, not re-arranged)."""
        clones = []
        with self.history.suppressed():
            for item in list(items):
                try:
                    clone = await item.clone_async()
                except Exception:
                    logger.exception("[Layout] error duplicating %r", item)
                    continue
                clone.move_by(DUPLICATION_OFFSET, DUPLICATION_OFFSET)
                self.surface.add_item(clone)
                clones.append(clone)
        return clones

    def delete(self, items: Iterable[SheetElement]) -> int:
        items = [it for it in items if it in self.surface]
        if not items:
            return 0
        with self.history.suppressed():
            for item in items:
                self.surface.remove_item(item)
        return len(items)

    def clear(self) -> int:
        return self.delete(self.surface.list_items())

    def bring_forward(self, item: SheetElement) -> None:
        self.surface.bring_forward(item)

    def send_backward(self, item: SheetElement) -> None:
        self.surface.send_backward(item)

    def set_landscape(self, landscape: bool) -> None:
        self.surface.set_landscape(landscape)

    # ---------- History ----------

    def undo(self) -> bool:
        try:
            return self.history.undo()
        except HistoryRestoreError as e:
            self._status(str(e), "error")
            return False

    def redo(self) -> bool:
        try:
            return self.history.redo()
        except HistoryRestoreError as e:
            self._status(str(e), "error")
            return False

    # ---------- Internals ----------

    @Slot(bool)
    def _on_orientation_changed(self, landscape: bool):
        logger.info("[Layout] orientation changed (landscape=%s); reflowing", landscape)
        moved = self.reflow()
        if moved:
            self._status(f"Reflowed {moved} item(s) into the safe area.", "info")

    def _status(self, message: str, level: str = "info"):
        if level == "warning":
            logger.warning("[Layout] %s", message)
        elif level == "error":
            logger.error("[Layout] %s", message)
        else:
            logger.info("[Layout] %s", message)
        self.status_message.emit(message, level, STATUS_TIMEOUT_MS)
