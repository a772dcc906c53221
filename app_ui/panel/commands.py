from __future__ import annotations

from typing import Callable, Dict, List, Mapping, Optional

from PyQt6 import QtCore, QtGui, QtWidgets

from diagnostics.logging_setup import get_logger

from .state import PanelState

logger = get_logger(__name__)

CMD_SHOW = "workspace-panel-show"
CMD_TOGGLE = "workspace-panel-toggle"
CMD_CLOSE = "workspace-panel-close"
CMD_FOCUS = "workspace-panel-focus"
CMD_RESIZE = "workspace-panel-resize"
CMD_REFRESH = "workspace-panel-refresh"
CMD_ACTIVATE = "workspace-panel-activate"

COMMAND_TITLES: Dict[str, str] = {
    CMD_SHOW: "Show Workspace Panel",
    CMD_TOGGLE: "Toggle Workspace Panel",
    CMD_CLOSE: "Close Workspace Panel",
    CMD_FOCUS: "Focus Workspace Panel",
    CMD_RESIZE: "Reset Panel Width",
    CMD_REFRESH: "Refresh Workspace Panel",
    CMD_ACTIVATE: "Switch to Workspace at Cursor",
}

DEFAULT_COMMAND_SHORTCUTS: Dict[str, str] = {
    CMD_TOGGLE: "F8",
    CMD_FOCUS: "Ctrl+Shift+W",
}


class PanelCommands(QtCore.QObject):
    """Named, argument-less user commands over a :class:`PanelState`."""

    def __init__(
        self,
        panel: PanelState,
        *,
        shortcuts: Optional[Mapping[str, str]] = None,
        parent: Optional[QtCore.QObject] = None,
    ) -> None:
        super().__init__(parent)
        self._panel = panel
        self._commands: Dict[str, Callable[[], object]] = {
            CMD_SHOW: panel.show,
            CMD_TOGGLE: panel.toggle,
            CMD_CLOSE: panel.close,
            CMD_FOCUS: panel.focus,
            CMD_RESIZE: panel.resize,
            CMD_REFRESH: panel.refresh,
            CMD_ACTIVATE: panel.activate_at_cursor,
        }
        keys = dict(DEFAULT_COMMAND_SHORTCUTS)
        if shortcuts:
            keys.update(shortcuts)
        self._actions: Dict[str, QtGui.QAction] = {}
        for name in self._commands:
            action = QtGui.QAction(COMMAND_TITLES[name], self)
            action.setObjectName(name)
            key = keys.get(name)
            if key:
                action.setShortcut(QtGui.QKeySequence(key))
                action.setShortcutContext(QtCore.Qt.ShortcutContext.WindowShortcut)
            action.triggered.connect(lambda _checked=False, n=name: self.run(n))
            self._actions[name] = action

    def names(self) -> List[str]:
        return list(self._commands)

    def action(self, name: str) -> QtGui.QAction:
        return self._actions[name]

    def run(self, name: str) -> None:
        command = self._commands[name]
        logger.debug("command run name=%s", name)
        command()

    def install(self, window: QtWidgets.QMainWindow, *, menu_title: str = "&Workspaces") -> QtWidgets.QMenu:
        """Add the commands to ``window`` (shortcuts) and to a menu."""
        menu = window.menuBar().addMenu(menu_title)
        for name in self._commands:
            action = self._actions[name]
            window.addAction(action)
            menu.addAction(action)
        return menu
