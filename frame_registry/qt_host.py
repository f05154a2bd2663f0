"""
Host accessor reading display settings from a live PySide6 main window.
"""

from __future__ import annotations

from typing import Any, Callable, Dict, Mapping, Optional

from PySide6.QtCore import Qt
from PySide6.QtWidgets import QAbstractScrollArea, QApplication, QMainWindow, QStyle, QToolBar


class QtWindowHost:
    """
    Expose a ``QMainWindow`` through the ``global_value`` / ``frame_parameter``
    accessors used by the descriptor table.

    Explicit ``globals`` and ``parameters`` entries take precedence over the
    values derived from the window; unknown names raise ``KeyError``.
    """

    def __init__(
        self,
        window: QMainWindow,
        *,
        globals: Optional[Mapping[str, Any]] = None,
        parameters: Optional[Mapping[str, Any]] = None,
    ) -> None:
        self.window = window
        self._globals = dict(globals or {})
        self._parameters = dict(parameters or {})
        self._derived_globals: Dict[str, Callable[[], Any]] = {
            "tool-bar-mode": self._tool_bar_visible,
            "menu-bar-mode": self._menu_bar_visible,
        }
        self._derived_parameters: Dict[str, Callable[[], Any]] = {
            "width": lambda: self.window.width(),
            "height": lambda: self.window.height(),
            "left": lambda: self.window.x(),
            "top": lambda: self.window.y(),
            "vertical-scroll-bars": self._vertical_scroll_bars,
            "scroll-bar-width": self._scroll_bar_width,
        }

    def global_value(self, name: str) -> Any:
        if name in self._globals:
            return self._globals[name]
        return self._derived_globals[name]()

    def frame_parameter(self, name: str) -> Any:
        if name in self._parameters:
            return self._parameters[name]
        return self._derived_parameters[name]()

    def _tool_bar_visible(self) -> bool:
        return any(bar.isVisibleTo(self.window) for bar in self.window.findChildren(QToolBar))

    def _menu_bar_visible(self) -> bool:
        menu_bar = self.window.menuWidget()
        return menu_bar is not None and menu_bar.isVisibleTo(self.window)

    def _vertical_scroll_bars(self) -> Optional[str]:
        central = self.window.centralWidget()
        if not isinstance(central, QAbstractScrollArea):
            return None
        if central.verticalScrollBarPolicy() == Qt.ScrollBarPolicy.ScrollBarAlwaysOff:
            return None
        return "right"

    def _scroll_bar_width(self) -> int:
        style = self.window.style() or QApplication.style()
        return style.pixelMetric(QStyle.PixelMetric.PM_ScrollBarExtent, None, self.window)
