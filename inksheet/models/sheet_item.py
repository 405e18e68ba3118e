# sheet_item.py
from __future__ import annotations

import asyncio
import copy
from typing import Any, Dict, Optional, Protocol, runtime_checkable

from PySide6.QtCore import QObject, QPointF, QRectF, Signal
from PySide6.QtGui import QTransform

from inksheet.config import DECORATION_NAMES, ITEM_KINDS
from inksheet.utils.proto_helpers import KIND_PREFIXES, issue_pid, kind_of


@runtime_checkable
class SheetItem(Protocol):
    """What the sheet and the placement code need from a placeable item.

    ``item_changed`` is a signal carrying the item; the sheet listens to it
    to report modifications.
    """
    item_changed: Any

    def bounding_box(self) -> QRectF: ...

    def set_position(self, cx: float, cy: float) -> None: ...

    async def clone_async(self) -> "SheetItem": ...


class SheetElement(QObject):
    """
    An image, text block or vector symbol sitting on the sheet.

    Geometry is stored as an unscaled size, a per-axis scale, a rotation in
    degrees and the scene position of the element's center. The bounding
    box is the axis-aligned box of the transformed element, which is what
    placement and containment tests look at.

    ``payload`` is opaque to the layout code (image data URL, text and font,
    svg source...). It is deep-copied on construction and clone, and carried
    through snapshots.
    """
    item_changed = Signal(object)

    def __init__(self,
        kind: str,
        width: float,
        height: float,
        pid: Optional[str] = None,
        scale_x: float = 1.0,
        scale_y: float = 1.0,
        rotation: float = 0.0,
        center: Optional[QPointF] = None,
        payload: Optional[Dict[str, Any]] = None,
        name: Optional[str] = None,
        parent: Optional[QObject] = None,
    ):
        super().__init__(parent)
        if kind not in ITEM_KINDS:
            raise ValueError(f"Unknown item kind {kind!r}; expected one of {ITEM_KINDS}")
        if width < 0 or height < 0:
            raise ValueError(f"Item size must be non-negative, got {width}x{height}")
        self._kind = kind
        self._pid = pid or issue_pid(KIND_PREFIXES[kind])
        if kind_of(self._pid) != kind:
            raise ValueError(f"pid {self._pid!r} does not match kind {kind!r}")
        self._name = name or kind.title()
        self._width = float(width)
        self._height = float(height)
        self._scale_x = float(scale_x)
        self._scale_y = float(scale_y)
        self._rotation = float(rotation)
        self._center = QPointF(center) if center is not None else QPointF(0.0, 0.0)
        self._payload = copy.deepcopy(payload or {})

    def __repr__(self):
        return (f"<SheetElement {self._pid} {self.scaled_width:.0f}x{self.scaled_height:.0f}"
                f" @({self._center.x():.0f}, {self._center.y():.0f})>")

    @property
    def pid(self) -> str:
        return self._pid

    @property
    def kind(self) -> str:
        return self._kind

    @property
    def name(self) -> str:
        return self._name

    @property
    def payload(self) -> Dict[str, Any]:
        return self._payload

    @property
    def center(self) -> QPointF:
        return QPointF(self._center)

    @property
    def rotation(self) -> float:
        return self._rotation

    @rotation.setter
    def rotation(self, degrees: float):
        degrees = float(degrees) % 360
        if degrees != self._rotation:
            self._rotation = degrees
            self.item_changed.emit(self)

    @property
    def scaled_width(self) -> float:
        return self._width * abs(self._scale_x)

    @property
    def scaled_height(self) -> float:
        return self._height * abs(self._scale_y)

    def scale(self, factor: float) -> None:
        """Uniformly scale the element (replaces any previous scale)."""
        if factor <= 0:
            raise ValueError("Scale factor must be positive.")
        self._scale_x = self._scale_y = float(factor)
        self.item_changed.emit(self)

    def scale_to_width(self, width: float) -> None:
        if self._width > 0:
            self.scale(width / self._width)

    def bounding_box(self) -> QRectF:
        local = QRectF(-self._width / 2, -self._height / 2, self._width, self._height)
        t = QTransform()
        t.translate(self._center.x(), self._center.y())
        t.rotate(self._rotation)
        t.scale(self._scale_x, self._scale_y)
        return t.mapRect(local)

    def set_position(self, cx: float, cy: float) -> None:
        new_center = QPointF(cx, cy)
        if new_center != self._center:
            self._center = new_center
            self.item_changed.emit(self)

    def move_by(self, dx: float, dy: float) -> None:
        self.set_position(self._center.x() + dx, self._center.y() + dy)

    def clone(self) -> "SheetElement":
        return SheetElement(
            kind=self._kind,
            width=self._width,
            height=self._height,
            scale_x=self._scale_x,
            scale_y=self._scale_y,
            rotation=self._rotation,
            center=self._center,
            payload=self._payload,
            name=self._name,
        )

    async def clone_async(self) -> "SheetElement":
        # Decoding image/svg payloads is asynchronous in a GUI; yield once so
        # callers always see a real suspension point.
        await asyncio.sleep(0)
        return self.clone()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "pid": self._pid,
            "kind": self._kind,
            "name": self._name,
            "width": self._width,
            "height": self._height,
            "scale_x": self._scale_x,
            "scale_y": self._scale_y,
            "rotation": self._rotation,
            "center": [self._center.x(), self._center.y()],
            "payload": self._payload,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SheetElement":
        cx, cy = data.get("center", (0.0, 0.0))
        return cls(
            kind=data["kind"],
            width=data["width"],
            height=data["height"],
            pid=data.get("pid"),
            scale_x=data.get("scale_x", 1.0),
            scale_y=data.get("scale_y", 1.0),
            rotation=data.get("rotation", 0.0),
            center=QPointF(cx, cy),
            payload=data.get("payload") or {},
            name=data.get("name"),
        )


class BleedDecoration:
    """A bleed overlay band or the bleed guide outline. Never placed, never saved."""

    def __init__(self, name: str, rect: QRectF):
        if name not in DECORATION_NAMES:
            raise ValueError(f"Unknown decoration {name!r}")
        self.name = name
        self.rect = QRectF(rect)

    def __repr__(self):
        return f"<BleedDecoration {self.name} {self.rect}>"
