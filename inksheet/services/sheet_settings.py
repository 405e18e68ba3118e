from PySide6.QtCore import Property, QObject, Signal

from inksheet.config import HISTORY_DEBOUNCE_MS, MAX_HISTORY, PLACEMENT_GUTTER, PLACEMENT_PADDING


class SheetSettings(QObject):
    """Placement and history tunables for one sheet. Sizes are px."""
    settings_changed = Signal()

    def __init__(self,
        padding=PLACEMENT_PADDING,
        gutter=PLACEMENT_GUTTER,
        max_history=MAX_HISTORY,
        debounce_ms=HISTORY_DEBOUNCE_MS,
    ):
        super().__init__()
        if gutter < 0:
            raise ValueError("Gutter must be non-negative.")
        self._padding = float(padding)
        self._gutter = float(gutter)
        self._max_history = max_history
        self._debounce_ms = debounce_ms

    @Property(float)
    def padding(self):
        return self._padding

    @padding.setter
    def padding(self, value):
        value = float(value)
        if value != self._padding:
            self._padding = value
            self.settings_changed.emit()

    @Property(float)
    def gutter(self):
        return self._gutter

    @gutter.setter
    def gutter(self, value):
        value = float(value)
        if value < 0:
            raise ValueError("Gutter must be non-negative.")
        if value != self._gutter:
            self._gutter = value
            self.settings_changed.emit()

    @Property(int)
    def max_history(self):
        return self._max_history

    @Property(int)
    def debounce_ms(self):
        return self._debounce_ms
