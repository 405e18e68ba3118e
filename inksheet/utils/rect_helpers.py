"""Axis-aligned rectangle helpers used by the placement code.

All rectangles are ``QRectF`` in sheet-local px. They are built from their
edges (``rect_from_edges``) so ``left()/top()/right()/bottom()`` read back
exactly what was put in. An *inverted* rectangle (right <= left or
bottom <= top) is considered degenerate and is never returned by the
helpers below except by ``rect_from_edges`` itself.
"""
from typing import Iterable, List, Optional

from PySide6.QtCore import QPointF, QRectF

from inksheet.config import MIN_SLIVER


def rect_from_edges(left: float, top: float, right: float, bottom: float) -> QRectF:
    return QRectF(QPointF(left, top), QPointF(right, bottom))


def is_degenerate(rect: Optional[QRectF]) -> bool:
    return rect is None or rect.width() <= 0 or rect.height() <= 0


def expanded(rect: QRectF, margin: float) -> QRectF:
    return rect.adjusted(-margin, -margin, margin, margin)


def contains(outer: QRectF, inner: QRectF) -> bool:
    """Edge-inclusive containment; touching edges count as inside."""
    return (outer.left() <= inner.left() and outer.top() <= inner.top()
            and outer.right() >= inner.right() and outer.bottom() >= inner.bottom())


def intersect(a: QRectF, b: QRectF) -> Optional[QRectF]:
    rect = rect_from_edges(
        max(a.left(), b.left()),
        max(a.top(), b.top()),
        min(a.right(), b.right()),
        min(a.bottom(), b.bottom()),
    )
    return None if is_degenerate(rect) else rect


def clamp(rect: QRectF, bounds: QRectF) -> Optional[QRectF]:
    """Clip ``rect`` to ``bounds``; None if nothing with positive area is left."""
    return intersect(rect, bounds)


def subtract(free: QRectF, blocker: QRectF) -> List[QRectF]:
    """
    Guillotine subtraction of ``blocker`` from ``free``.

    free:    (0, 0)-(100, 100)
    blocker: (30, 30)-(70, 70)
    returns: top    (0, 0)-(100, 30)
             bottom (0, 70)-(100, 100)
             left   (0, 30)-(30, 70)
             right  (70, 30)-(100, 70)

    Top and bottom bands span the full width of ``free``; left and right
    bands only cover the blocker's vertical extent. Bands whose width or
    height is at most MIN_SLIVER are dropped.
    """
    overlap = intersect(free, blocker)
    if overlap is None:
        return [free]

    pieces = []
    if free.top() < overlap.top():
        pieces.append(rect_from_edges(free.left(), free.top(), free.right(), overlap.top()))
    if overlap.bottom() < free.bottom():
        pieces.append(rect_from_edges(free.left(), overlap.bottom(), free.right(), free.bottom()))
    if free.left() < overlap.left():
        pieces.append(rect_from_edges(free.left(), overlap.top(), overlap.left(), overlap.bottom()))
    if overlap.right() < free.right():
        pieces.append(rect_from_edges(overlap.right(), overlap.top(), free.right(), overlap.bottom()))

    return [r for r in pieces if r.width() > MIN_SLIVER and r.height() > MIN_SLIVER]


def prune(rects: Iterable[QRectF]) -> List[QRectF]:
    """Drop every rectangle fully contained in another one.

    Of several identical rectangles only the first is kept.
    """
    rects = list(rects)
    kept = []
    for i, rect in enumerate(rects):
        swallowed = False
        for j, other in enumerate(rects):
            if i == j or not contains(other, rect):
                continue
            # identical pair: the earlier one survives
            if contains(rect, other) and i < j:
                continue
            swallowed = True
            break
        if not swallowed:
            kept.append(rect)
    return kept
