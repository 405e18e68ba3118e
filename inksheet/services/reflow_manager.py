# reflow_manager.py
from __future__ import annotations

import logging
from typing import TYPE_CHECKING, List, Tuple

from PySide6.QtCore import QRectF

from inksheet.services.placement_engine import arrange_on_surface
from inksheet.utils.rect_helpers import contains, is_degenerate

if TYPE_CHECKING:
    from inksheet.models.sheet_item import SheetItem
    from inksheet.models.sheet_surface import SheetSurface

logger = logging.getLogger(__name__)


def partition_by_safe_area(items, safe_area: QRectF) -> Tuple[List["SheetItem"], List["SheetItem"]]:
    """Split items into (in bounds, out of bounds) by bounding-box containment."""
    inside, outside = [], []
    for item in items:
        (inside if contains(safe_area, item.bounding_box()) else outside).append(item)
    return inside, outside


def reflow(surface: "SheetSurface", safe_area: QRectF, gutter: float) -> int:
    """
    Re-place every item that is no longer fully inside ``safe_area``.

    Displaced items are taken off the sheet first and then put back one at
    a time, each placed against the in-bounds items plus the ones already
    re-placed. Items that find no slot stay at the centered fallback.

    Returns the number of items that were repositioned.
    """
    if is_degenerate(safe_area):
        logger.warning("[Reflow] safe area %s is degenerate; nothing to reflow into", safe_area)
        return 0

    _inside, outside = partition_by_safe_area(surface.list_items(), safe_area)
    if not outside:
        return 0

    before = {id(item): item.bounding_box() for item in outside}
    for item in outside:
        surface.remove_item(item)

    failed = []
    for item in outside:
        surface.add_item(item)
        if not arrange_on_surface(item, surface, safe_area, gutter):
            failed.append(item)

    # An oversized item parked at the fallback center on a previous pass
    # does not move again, so it is not counted twice.
    moved = sum(1 for item in outside if item.bounding_box() != before[id(item)])
    logger.info("[Reflow] reflowed %d item(s) into the safe area", moved)
    if failed:
        logger.warning("[Reflow] %d item(s) could not be repositioned within the safe area", len(failed))
    return moved
