# placement_engine.py
"""Greedy top-left placement of a single item into free sheet space.

This is a heuristic, not an optimal packer: the item goes into the first
free rectangle (in reading order) that is large enough, flush against that
rectangle's top-left corner. When nothing fits the item is centered on the
safe area and may overlap other items; the caller is told via the boolean
result.
"""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Iterable, Optional

from PySide6.QtCore import QRectF

from inksheet.services.free_space import compute_free_space
from inksheet.utils.rect_helpers import is_degenerate, rect_from_edges

if TYPE_CHECKING:
    from inksheet.models.sheet_item import SheetItem
    from inksheet.models.sheet_surface import SheetSurface

logger = logging.getLogger(__name__)


def compute_safe_area(width: float, height: float, bleed: float, padding: float) -> QRectF:
    """Sheet rect inset by bleed + padding. May come back inverted on tiny sheets."""
    inset = bleed + padding
    return rect_from_edges(inset, inset, width - inset, height - inset)


def find_slot(width: float, height: float, safe_area: QRectF,
              occupied: Iterable[QRectF], gutter: float) -> Optional[QRectF]:
    """First free rect, ordered by (top, left), that fits a width x height footprint."""
    free_rects = compute_free_space(safe_area, occupied, gutter)
    free_rects.sort(key=lambda r: (r.top(), r.left()))
    for rect in free_rects:
        if rect.width() >= width and rect.height() >= height:
            return rect
    return None


def place_item(item: "SheetItem", safe_area: QRectF, other_items: Iterable["SheetItem"], gutter: float) -> bool:
    """
    Move ``item`` into free space inside ``safe_area``.

    Returns True when the item landed in a free slot, False when the
    centered fallback was used (possibly overlapping other items).
    """
    center = safe_area.center()
    if is_degenerate(safe_area):
        # the inset is symmetric, so the safe area center is the sheet midpoint
        item.set_position(center.x(), center.y())
        return False

    box = item.bounding_box()
    width, height = box.width(), box.height()
    occupied = [other.bounding_box() for other in other_items if other is not item]

    slot = find_slot(width, height, safe_area, occupied, gutter)
    if slot is not None:
        item.set_position(slot.left() + width / 2, slot.top() + height / 2)
        logger.debug("[Placement] %r placed in slot %s", item, slot)
        return True

    item.set_position(center.x(), center.y())
    logger.debug("[Placement] no slot for %r (%.0fx%.0f); centered", item, width, height)
    return False


def arrange_on_surface(item: "SheetItem", surface: "SheetSurface", safe_area: QRectF, gutter: float) -> bool:
    """Place ``item`` against every other item currently on ``surface``."""
    return place_item(item, safe_area, surface.list_items(), gutter)
