# inksheet/config.py

# Physical sheet sizes in mm (long side, short side)
PAGE_SIZES = {
    "A5 (210x148 mm)": (210.0, 148.0),
    "A4 (297x210 mm)": (297.0, 210.0),
    "A6 (148x105 mm)": (148.0, 105.0),
    "Letter (8.5x11 inches)": (279.4, 215.9),
}
DEFAULT_PAGE_SIZE = "A5 (210x148 mm)"
CUSTOM_PAGE_SIZE = "Custom"  # sheets sized in px, not from PAGE_SIZES

PRINT_DPI = 300
MM_PER_INCH = 25.4

BLEED_MM = 5
BLEED_PX = round(BLEED_MM * PRINT_DPI / MM_PER_INCH)  # ~59 px

PLACEMENT_PADDING = 20   # px inside the bleed edge kept clear by auto-placement
PLACEMENT_GUTTER = 12    # px gap kept between placed items
DUPLICATION_OFFSET = 50  # px shift applied to duplicated items
MIN_SLIVER = 1           # free rects this thin (px) are discarded

MAX_HISTORY = 20
HISTORY_DEBOUNCE_MS = 250

SNAPSHOT_VERSION = 1

BLEED_OVERLAY = "bleedOverlay"
BLEED_AREA = "bleedArea"
DECORATION_NAMES = (BLEED_OVERLAY, BLEED_AREA)

ITEM_KINDS = ("image", "text", "symbol")

STATUS_TIMEOUT_MS = 4000
