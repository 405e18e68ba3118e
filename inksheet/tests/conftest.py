import os
import sys

import pytest

# Headless Qt: timers and signals need an application object
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")
from PySide6.QtCore import QCoreApplication, QPointF

_app = QCoreApplication.instance() or QCoreApplication(sys.argv[:1])

from inksheet.models.sheet_item import SheetElement
from inksheet.models.sheet_surface import SheetSurface


def element(width, height, x=0.0, y=0.0, kind="image", **kwargs):
    """A SheetElement of the given size centered at (x, y)."""
    return SheetElement(kind, width, height, center=QPointF(x, y), **kwargs)


@pytest.fixture
def make_element():
    return element


@pytest.fixture
def square_surface():
    """A 100x100 px sheet with no bleed."""
    return SheetSurface.with_size(100, 100, bleed=0)
