# snapshot_serializer.py
from __future__ import annotations

import json
from pathlib import Path
from typing import Iterable, List, Optional, Union

from inksheet.config import BLEED_PX, CUSTOM_PAGE_SIZE, DEFAULT_PAGE_SIZE, PRINT_DPI, SNAPSHOT_VERSION
from inksheet.models.sheet_item import SheetElement
from inksheet.models.sheet_surface import SheetSurface
from inksheet.utils.unit_converter import page_size_px
from inksheet.utils.validator import SchemaValidator


class SnapshotError(ValueError):
    """Raised when a snapshot or saved sheet cannot be decoded."""


class SnapshotSerializer:
    """
    Turns the item set into the history/snapshot string and back.

    The string is compact JSON with keys in insertion order, so two
    snapshots of the same scene compare equal as strings.
    """

    def __init__(self, validator: Optional[SchemaValidator] = None):
        self._validator = validator or SchemaValidator()

    def serialize(self, items: Iterable[SheetElement]) -> str:
        data = {
            "version": SNAPSHOT_VERSION,
            "objects": [item.to_dict() for item in items],
        }
        return json.dumps(data, separators=(",", ":"))

    def deserialize(self, text: str) -> List[SheetElement]:
        try:
            data = json.loads(text)
        except (TypeError, json.JSONDecodeError) as e:
            raise SnapshotError(f"Snapshot is not valid JSON: {e}") from e
        ok, message = self._validator.validate(data, "sheet_snapshot.json")
        if not ok:
            raise SnapshotError(message)
        if data["version"] > SNAPSHOT_VERSION:
            raise SnapshotError(f"Snapshot version {data['version']} is newer than supported ({SNAPSHOT_VERSION})")
        try:
            return [SheetElement.from_dict(obj) for obj in data["objects"]]
        except ValueError as e:
            raise SnapshotError(str(e)) from e

    # ---------- Sheet files ----------

    def dump_sheet(self, surface: SheetSurface) -> dict:
        return {
            "page_size": surface.page_size,
            "landscape": surface.is_landscape,
            "dpi": surface.dpi,
            "width": surface.width,
            "height": surface.height,
            "bleed": surface.bleed,
            "snapshot": self.serialize(surface.list_items()),
        }

    def save_sheet(self, path: Union[str, Path], surface: SheetSurface) -> None:
        with open(path, "w", encoding="utf-8") as f:
            json.dump(self.dump_sheet(surface), f, indent=2)

    def load_sheet(self, path: Union[str, Path]) -> SheetSurface:
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (UnicodeDecodeError, json.JSONDecodeError) as e:
            raise SnapshotError(f"{path}: not valid JSON: {e}") from e
        ok, message = self._validator.validate(data, "sheet_file.json")
        if not ok:
            raise SnapshotError(f"{path}: {message}")
        items = self.deserialize(data["snapshot"])

        page_size = data.get("page_size", DEFAULT_PAGE_SIZE)
        dpi = data.get("dpi", PRINT_DPI)
        bleed = data.get("bleed", BLEED_PX)
        try:
            if page_size != CUSTOM_PAGE_SIZE:
                # unknown page names are rejected even when a size is stored
                page_size_px(page_size, data["landscape"], dpi)
            if "width" in data and "height" in data:
                surface = SheetSurface.with_size(
                    data["width"], data["height"],
                    bleed=bleed,
                    page_size=page_size,
                    dpi=dpi,
                    landscape=data["landscape"],
                )
            elif page_size == CUSTOM_PAGE_SIZE:
                raise ValueError("a custom-size sheet must store width and height")
            else:
                surface = SheetSurface(page_size=page_size, landscape=data["landscape"],
                                       dpi=dpi, bleed=bleed)
        except ValueError as e:
            raise SnapshotError(f"{path}: {e}") from e
        surface.replace_items(items)
        return surface
