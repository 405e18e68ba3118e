#!/usr/bin/env python3
import argparse
import asyncio
import logging
import sys
from pathlib import Path

from PySide6.QtCore import QCoreApplication

from inksheet.config import PLACEMENT_GUTTER, PLACEMENT_PADDING
from inksheet.services.layout_engine import LayoutEngine
from inksheet.services.sheet_settings import SheetSettings
from inksheet.services.snapshot_serializer import SnapshotError, SnapshotSerializer
from inksheet.utils.unit_converter import format_dimension, parse_dimension

logger = logging.getLogger("inksheet")

# --- Helpers ---------------------------------------------------------------

def _norm(p: Path) -> Path:
    """Normalize a Path: expand ~ and resolve to absolute (non-strict)."""
    return p.expanduser().resolve()

def _die(msg: str, code: int = 2):
    print(f"Error: {msg}", file=sys.stderr)
    sys.exit(code)


# --- Argparse --------------------------------------------------------------

def build_parser():
    p = argparse.ArgumentParser(
        prog="inksheet",
        description="Arrange, reflow and fill a saved print sheet without a GUI"
    )
    p.add_argument("sheet", help="saved sheet file (JSON)")

    orient = p.add_mutually_exclusive_group()
    orient.add_argument("--landscape", dest="landscape", action="store_true", default=None,
                        help="Switch the sheet to landscape (reflows displaced items)")
    orient.add_argument("--portrait", dest="landscape", action="store_false",
                        help="Switch the sheet to portrait (reflows displaced items)")

    p.add_argument("--fill", "-f", action="store_true",
                   help="Tile copies of the sheet's items until no more fit")
    p.add_argument("--padding", type=parse_dimension, default=PLACEMENT_PADDING,
                   help='Clearance inside the bleed, e.g. "2mm" or "24px" (default: %(default)s px)')
    p.add_argument("--gutter", type=parse_dimension, default=PLACEMENT_GUTTER,
                   help='Gap kept between items, e.g. "1mm" (default: %(default)s px)')
    p.add_argument("--export", "-e", dest="export_path",
                   help="Where to write the result (defaults to overwriting SHEET)")
    p.add_argument("--verbose", "-v", action="count", default=0,
                   help="More logging (-v info, -vv debug)")
    return p


# --- Main ------------------------------------------------------------------

def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    level = logging.WARNING - 10 * min(args.verbose, 2)
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")

    # Qt timers need an application object, even headless
    _app = QCoreApplication.instance() or QCoreApplication(sys.argv[:1])

    sheet_path = _norm(Path(args.sheet))
    if not sheet_path.is_file():
        _die(f"sheet does not exist or is not a file: {args.sheet}")
    export_path = _norm(Path(args.export_path)) if args.export_path else sheet_path
    if export_path.is_dir():
        _die(f"export path is a directory: {args.export_path}")

    serializer = SnapshotSerializer()
    try:
        surface = serializer.load_sheet(sheet_path)
    except SnapshotError as e:
        _die(str(e))

    settings = SheetSettings(padding=args.padding, gutter=args.gutter)
    engine = LayoutEngine(surface, settings=settings, serializer=serializer)
    engine.status_message.connect(lambda msg, level, _ms: print(f"[{level}] {msg}"))

    safe = engine.safe_area()
    logger.info("safe area %s x %s, gutter %s",
                format_dimension(safe.width(), dpi=surface.dpi),
                format_dimension(safe.height(), dpi=surface.dpi),
                format_dimension(settings.gutter, dpi=surface.dpi))

    if args.landscape is not None:
        engine.set_landscape(args.landscape)

    code = 0
    if args.fill:
        result = asyncio.run(engine.fill_sheet())
        if result is not None and result.total_failure:
            code = 1

    serializer.save_sheet(export_path, surface)
    logger.info("wrote %d item(s) to %s", len(surface), export_path)
    return code

if __name__ == "__main__":
    sys.exit(main())
