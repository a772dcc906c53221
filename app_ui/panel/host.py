from __future__ import annotations

from typing import Callable, Optional

from PyQt6 import QtCore, QtWidgets, sip

from diagnostics.logging_setup import get_logger

logger = get_logger(__name__)

DOCK_OBJECT_NAME = "workspace-panel"
_DOCK_AREAS = {
    "left": QtCore.Qt.DockWidgetArea.LeftDockWidgetArea,
    "right": QtCore.Qt.DockWidgetArea.RightDockWidgetArea,
}


class DockHost:
    """Places one named view in a fixed-width side dock of a main window."""

    def __init__(
        self,
        window: QtWidgets.QMainWindow,
        *,
        title: str = "Workspaces",
        side: str = "left",
    ) -> None:
        self._window = window
        self._title = title
        self._area = _DOCK_AREAS.get(side, _DOCK_AREAS["left"])
        self._dock: Optional[QtWidgets.QDockWidget] = None
        self._view: Optional[QtWidgets.QWidget] = None

    def window(self) -> QtWidgets.QMainWindow:
        return self._window

    def dock(self) -> Optional[QtWidgets.QDockWidget]:
        if self._dock is not None and sip.isdeleted(self._dock):
            self._dock = None
            self._view = None
        return self._dock

    def ensure_view(self, factory: Callable[[], QtWidgets.QWidget]) -> QtWidgets.QWidget:
        """Return the hosted view, creating the dock and view on first use."""
        dock = self.dock()
        if dock is None:
            dock = QtWidgets.QDockWidget(self._title, self._window)
            dock.setObjectName(DOCK_OBJECT_NAME)
            dock.setAllowedAreas(self._area)
            dock.setFeatures(QtWidgets.QDockWidget.DockWidgetFeature.DockWidgetClosable)
            self._window.addDockWidget(self._area, dock)
            dock.hide()
            self._dock = dock
        if self._view is None or sip.isdeleted(self._view):
            self._view = factory()
            dock.setWidget(self._view)
        return self._view

    def place(self, width: int) -> None:
        dock = self.dock()
        if dock is None:
            return
        if not dock.isHidden():
            return
        logger.info("panel placed width=%d", width)
        dock.show()
        self.set_width(width)

    def is_placed(self) -> bool:
        dock = self.dock()
        return dock is not None and not dock.isHidden()

    def unplace(self) -> None:
        dock = self.dock()
        if dock is None or dock.isHidden():
            return
        logger.info("panel removed from side region")
        dock.hide()

    def set_width(self, width: int) -> None:
        dock = self.dock()
        if dock is None or dock.isHidden():
            return
        self._window.resizeDocks([dock], [width], QtCore.Qt.Orientation.Horizontal)

    def focus(self, widget: Optional[QtWidgets.QWidget]) -> None:
        if not self.is_alive(widget):
            return
        top = widget.window()
        if top is not None and top.isVisible():
            top.activateWindow()
        widget.setFocus(QtCore.Qt.FocusReason.OtherFocusReason)

    def focused_widget(self) -> Optional[QtWidgets.QWidget]:
        return QtWidgets.QApplication.focusWidget()

    def is_alive(self, widget: Optional[QtWidgets.QWidget]) -> bool:
        return widget is not None and not sip.isdeleted(widget)
