import re

from PySide6.QtCore import QSizeF

from inksheet.config import MM_PER_INCH, PAGE_SIZES, PRINT_DPI

UNITS_TO_INCHES = {
    "in": 1.0,
    "cm": 1 / 2.54,
    "mm": 1 / MM_PER_INCH,
    "pt": 1 / 72.0,
    "px": None  # special case
}

def parse_dimension(value, dpi: int = PRINT_DPI) -> float:
    """
    Parses a dimension string or number into px.
    Supported units: "in", "cm", "mm", "pt", "px".
    Numeric input is assumed to already be px; strings without a unit are mm.
    """
    if dpi <= 0:
        raise ValueError("DPI must be a positive value.")
    if isinstance(value, (int, float)):
        return float(value)

    value = str(value).strip().lower().replace('"', "in")
    match = re.fullmatch(r"([0-9]*\.?[0-9]+)\s*([a-z]+)?", value)
    if not match:
        raise ValueError(f"Invalid dimension format: '{value}'")
    num, unit = match.groups()
    num = float(num)
    unit = (unit or "mm").strip()
    if unit not in UNITS_TO_INCHES:
        raise ValueError(f"Unsupported input unit: {unit}")
    if unit == "px":
        return num
    return num * UNITS_TO_INCHES[unit] * dpi

def mm_to_px(mm: float, dpi: int = PRINT_DPI) -> float:
    if dpi <= 0:
        raise ValueError("DPI must be a positive value.")
    return mm * dpi / MM_PER_INCH

def px_to_mm(px: float, dpi: int = PRINT_DPI) -> float:
    if dpi <= 0:
        raise ValueError("DPI must be a positive value.")
    return px * MM_PER_INCH / dpi

def page_size_px(name: str, landscape: bool = True, dpi: int = PRINT_DPI) -> QSizeF:
    """
    Pixel size of a named page, oriented. Long side is horizontal in landscape.
    """
    try:
        long_mm, short_mm = PAGE_SIZES[name]
    except KeyError as exc:
        raise ValueError(f"Unknown page size '{name}'. Known: {list(PAGE_SIZES)}") from exc
    width_mm, height_mm = (long_mm, short_mm) if landscape else (short_mm, long_mm)
    return QSizeF(mm_to_px(width_mm, dpi), mm_to_px(height_mm, dpi))

def format_dimension(pixels: float, unit: str = "mm", dpi: int = PRINT_DPI) -> str:
    if unit == "mm":
        return f"{px_to_mm(pixels, dpi):.1f} mm"
    elif unit == "cm":
        return f"{px_to_mm(pixels, dpi) / 10:.2f} cm"
    elif unit == "px":
        return f"{pixels:.0f} px"
    else:
        raise ValueError(f"Unsupported unit: {unit}")
