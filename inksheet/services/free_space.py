# free_space.py
import logging
from typing import Iterable, List

from PySide6.QtCore import QRectF

from inksheet.utils.rect_helpers import clamp, expanded, is_degenerate, prune, subtract

logger = logging.getLogger(__name__)


def compute_free_space(safe_area: QRectF, occupied_boxes: Iterable[QRectF], gutter: float) -> List[QRectF]:
    """Return the unoccupied rectangles of ``safe_area``.

    Each occupied box is grown by ``gutter`` on every side, clipped to the
    safe area and cut out of every free rectangle. The list is rebuilt from
    scratch on every call; nothing is cached between placements.

    A degenerate safe area yields an empty list ("no slot available").
    """
    if is_degenerate(safe_area):
        return []

    free_rects = [QRectF(safe_area)]
    for box in occupied_boxes:
        blocker = clamp(expanded(box, gutter), safe_area)
        if blocker is None:
            continue
        free_rects = [piece for rect in free_rects for piece in subtract(rect, blocker)]

    free_rects = prune(free_rects)
    logger.debug("[Placement] %d free rect(s) in safe area", len(free_rects))
    return free_rects
