# fill_manager.py
from __future__ import annotations

import inspect
import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Awaitable, Callable, List, Optional, Union

from PySide6.QtCore import QRectF

from inksheet.services.placement_engine import arrange_on_surface
from inksheet.utils.rect_helpers import is_degenerate

if TYPE_CHECKING:
    from inksheet.models.sheet_item import SheetItem
    from inksheet.models.sheet_surface import SheetSurface

logger = logging.getLogger(__name__)

CloneFn = Callable[["SheetItem"], Union["SheetItem", Awaitable["SheetItem"]]]


@dataclass
class FillResult:
    """Outcome of one fill request."""
    placed_originals: List[Any] = field(default_factory=list)
    failed_originals: List[Any] = field(default_factory=list)
    clones_placed: int = 0
    rounds: int = 0

    @property
    def total_failure(self) -> bool:
        return not self.placed_originals

    @property
    def remaining_unplaced(self) -> List[Any]:
        return self.failed_originals


async def _default_clone(item: "SheetItem") -> "SheetItem":
    return await item.clone_async()


async def _resolve_clone(clone_fn: CloneFn, item: "SheetItem") -> "SheetItem":
    result = clone_fn(item)
    if inspect.isawaitable(result):
        result = await result
    return result


async def fill_sheet(surface: "SheetSurface", safe_area: QRectF, gutter: float,
                     clone_fn: Optional[CloneFn] = None) -> FillResult:
    """
    Re-arrange every item on ``surface``, then tile clones of the items that
    fit until a full round places nothing more.

    Only the originals that found a slot act as clone anchors; generated
    clones are never cloned themselves. Each clone is placed, or removed
    again, in the same synchronous step that follows its ``await``, so no
    other scene mutation can slip in between the placement decision and
    its commit.
    """
    clone_fn = clone_fn or _default_clone
    result = FillResult()

    originals = surface.list_items()
    for item in originals:
        surface.remove_item(item)

    for item in originals:
        surface.add_item(item)
        box = item.bounding_box()
        if is_degenerate(box):
            # an empty footprint could be "placed" forever
            result.failed_originals.append(item)
            continue
        if arrange_on_surface(item, surface, safe_area, gutter):
            result.placed_originals.append(item)
        else:
            result.failed_originals.append(item)

    if result.failed_originals:
        logger.warning("[Fill] %d original(s) could not be arranged within the safe area",
                       len(result.failed_originals))
    if not result.placed_originals:
        logger.warning("[Fill] no items could be arranged within the safe area")
        return result

    anchors = list(result.placed_originals)
    while anchors:
        placed_this_round = 0
        result.rounds += 1
        for base in list(anchors):
            try:
                clone = await _resolve_clone(clone_fn, base)
            except Exception:
                logger.exception("[Fill] error cloning %r", base)
                continue

            # The scene may have changed while we were suspended.
            if base not in surface:
                logger.info("[Fill] anchor %r left the sheet; dropping it", base)
                anchors.remove(base)
                continue

            try:
                surface.add_item(clone)
                placed = arrange_on_surface(clone, surface, safe_area, gutter)
            except Exception:
                logger.exception("[Fill] error placing clone of %r; discarding it", base)
                placed = False
            if placed:
                placed_this_round += 1
            else:
                surface.remove_item(clone)

        result.clones_placed += placed_this_round
        if placed_this_round == 0:
            break

    logger.info("[Fill] %d clone(s) placed in %d round(s)", result.clones_placed, result.rounds)
    return result
