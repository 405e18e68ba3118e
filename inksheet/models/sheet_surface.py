# sheet_surface.py
from __future__ import annotations

from typing import Iterable, List, Optional, Tuple

from PySide6.QtCore import QObject, Signal

from inksheet.config import (BLEED_AREA, BLEED_OVERLAY, BLEED_PX, CUSTOM_PAGE_SIZE, DEFAULT_PAGE_SIZE,
                             PRINT_DPI)
from inksheet.models.sheet_item import BleedDecoration, SheetElement, SheetItem
from inksheet.utils.rect_helpers import rect_from_edges
from inksheet.utils.unit_converter import page_size_px


class SheetSurface(QObject):
    """
    The print sheet: an ordered item list (back to front) plus the bleed
    decorations that are always present on top of it.

    Every add/remove/modify/reorder fires the matching fine-grained signal
    followed by ``changed``; the history manager listens to ``changed``.
    """
    item_added = Signal(object)
    item_removed = Signal(object)
    item_modified = Signal(object)
    changed = Signal()
    geometry_changed = Signal(float, float)  # width, height in px
    orientation_changed = Signal(bool)       # is_landscape

    def __init__(self,
        page_size: str = DEFAULT_PAGE_SIZE,
        landscape: bool = True,
        dpi: int = PRINT_DPI,
        bleed: float = BLEED_PX,
        parent: Optional[QObject] = None,
    ):
        super().__init__(parent)
        self._page_size = page_size
        self._dpi = dpi
        self._bleed = float(bleed)
        self._landscape = landscape
        size = page_size_px(page_size, landscape, dpi)
        self._width = size.width()
        self._height = size.height()
        self._items: List[SheetElement] = []
        self._decorations: List[BleedDecoration] = []
        self.create_bleed_area()

    @classmethod
    def with_size(cls, width: float, height: float, bleed: float = 0.0,
                  page_size: str = CUSTOM_PAGE_SIZE,
                  dpi: int = PRINT_DPI,
                  landscape: Optional[bool] = None,
                  parent: Optional[QObject] = None) -> "SheetSurface":
        """A surface of explicit px size, labelled ``Custom`` unless told otherwise."""
        if width <= 0 or height <= 0:
            raise ValueError(f"Sheet size must be positive, got {width}x{height}")
        surface = cls(dpi=dpi, bleed=bleed, parent=parent)
        surface._page_size = page_size
        surface._landscape = width >= height if landscape is None else landscape
        surface._width = float(width)
        surface._height = float(height)
        surface.create_bleed_area()
        return surface

    # ---------- Dimensions ----------

    @property
    def width(self) -> float:
        return self._width

    @property
    def height(self) -> float:
        return self._height

    @property
    def bleed(self) -> float:
        return self._bleed

    @property
    def dpi(self) -> int:
        return self._dpi

    @property
    def page_size(self) -> str:
        return self._page_size

    @property
    def is_landscape(self) -> bool:
        return self._landscape

    def safe_area_dimensions(self) -> Tuple[float, float]:
        return self._width, self._height

    def set_landscape(self, landscape: bool) -> None:
        """Flip orientation by swapping width and height."""
        if landscape == self._landscape:
            return
        self._landscape = landscape
        self._width, self._height = self._height, self._width
        self.create_bleed_area()
        self.geometry_changed.emit(self._width, self._height)
        self.orientation_changed.emit(landscape)

    # ---------- Items ----------

    def list_items(self) -> List[SheetElement]:
        return list(self._items)

    def __len__(self):
        return len(self._items)

    def __contains__(self, item) -> bool:
        return any(it is item for it in self._items)

    def add_item(self, item: SheetElement) -> None:
        if not isinstance(item, SheetItem):
            raise TypeError(f"{item!r} is not a sheet item")
        if item in self:
            raise ValueError(f"{item!r} is already on the sheet")
        item.item_changed.connect(self._on_item_changed)
        self._items.append(item)
        self.item_added.emit(item)
        self.changed.emit()

    def remove_item(self, item: SheetElement) -> None:
        if item not in self:
            return
        self._items = [it for it in self._items if it is not item]
        item.item_changed.disconnect(self._on_item_changed)
        self.item_removed.emit(item)
        self.changed.emit()

    def replace_items(self, items: Iterable[SheetElement]) -> None:
        """Swap the whole item set in one go (used by restore)."""
        items = list(items)
        bad = [it for it in items if not isinstance(it, SheetItem)]
        if bad:
            raise TypeError(f"not sheet items: {bad!r}")
        for old in self._items:
            old.item_changed.disconnect(self._on_item_changed)
        self._items = items
        for new in self._items:
            new.item_changed.connect(self._on_item_changed)
        self.changed.emit()

    def bring_forward(self, item: SheetElement) -> None:
        self._shift(item, 1)

    def send_backward(self, item: SheetElement) -> None:
        self._shift(item, -1)

    def _shift(self, item, step):
        idx = next((i for i, it in enumerate(self._items) if it is item), None)
        if idx is None:
            return
        target = idx + step
        if not 0 <= target < len(self._items):
            return
        self._items[idx], self._items[target] = self._items[target], self._items[idx]
        self.item_modified.emit(item)
        self.changed.emit()

    def _on_item_changed(self, item):
        self.item_modified.emit(item)
        self.changed.emit()

    # ---------- Decorations ----------

    @property
    def decorations(self) -> List[BleedDecoration]:
        return list(self._decorations)

    def all_objects(self) -> list:
        """Items back to front, then decorations, which always render on top."""
        return [*self._items, *self._decorations]

    def create_bleed_area(self) -> None:
        """(Re)build the four bleed overlay bands and the bleed guide outline."""
        w, h, b = self._width, self._height, self._bleed
        self._decorations = [
            BleedDecoration(BLEED_OVERLAY, rect_from_edges(0, 0, w, b)),
            BleedDecoration(BLEED_OVERLAY, rect_from_edges(0, h - b, w, h)),
            BleedDecoration(BLEED_OVERLAY, rect_from_edges(0, b, b, h - b)),
            BleedDecoration(BLEED_OVERLAY, rect_from_edges(w - b, b, w, h - b)),
            BleedDecoration(BLEED_AREA, rect_from_edges(b, b, w - b, h - b)),
        ]
