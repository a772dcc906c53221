from __future__ import annotations

from typing import Callable, Dict, List, Mapping, Optional, Sequence

from PyQt6 import QtCore, QtGui, QtWidgets, sip

from diagnostics.logging_setup import get_logger

from .state import PanelState

logger = get_logger(__name__)

ACTION_NEXT = "next"
ACTION_PREVIOUS = "previous"
ACTION_ACTIVATE = "activate"
ACTION_REFRESH = "refresh"
ACTION_RESIZE = "resize"
ACTION_CLOSE = "close"

DEFAULT_KEYMAP: Dict[str, Sequence[str]] = {
    ACTION_NEXT: ("N", "J"),
    ACTION_PREVIOUS: ("P", "K"),
    ACTION_ACTIVATE: ("Return", "Space"),
    ACTION_REFRESH: ("G",),
    ACTION_RESIZE: ("=",),
    ACTION_CLOSE: ("Q",),
}


class InputController(QtCore.QObject):
    """Maps panel-local keys and pointer activation onto panel actions.

    Shortcuts are parented to the panel view with a widget-with-children
    context, so they never fire while another widget has focus.
    """

    action_triggered = QtCore.pyqtSignal(str)

    def __init__(
        self,
        panel: PanelState,
        *,
        keymap: Optional[Mapping[str, Sequence[str]]] = None,
        parent: Optional[QtCore.QObject] = None,
    ) -> None:
        super().__init__(parent)
        self._panel = panel
        self._keymap: Dict[str, Sequence[str]] = dict(DEFAULT_KEYMAP)
        if keymap:
            self._keymap.update(keymap)
        self._handlers: Dict[str, Callable[[], object]] = {
            ACTION_NEXT: self._panel.adapter().next,
            ACTION_PREVIOUS: self._panel.adapter().previous,
            ACTION_ACTIVATE: self._panel.activate_at_cursor,
            ACTION_REFRESH: self._panel.refresh,
            ACTION_RESIZE: self._panel.resize,
            ACTION_CLOSE: self._panel.close,
        }
        unknown = set(self._keymap) - set(self._handlers)
        if unknown:
            raise ValueError(f"unknown_actions: {sorted(unknown)}")
        self._shortcuts: List[QtGui.QShortcut] = []
        self._bound_view: Optional[QtWidgets.QListWidget] = None
        self._panel.view_created.connect(self.bind)
        view = self._panel.view()
        if view is not None:
            self.bind(view)

    def actions(self) -> List[str]:
        return list(self._handlers)

    def bindings(self) -> Dict[str, List[str]]:
        result: Dict[str, List[str]] = {}
        for shortcut in self._live_shortcuts():
            action = shortcut.property("panel_action")
            result.setdefault(str(action), []).append(shortcut.key().toString())
        return result

    def shortcuts(self) -> List[QtGui.QShortcut]:
        return self._live_shortcuts()

    def bind(self, view: QtWidgets.QListWidget) -> None:
        if view is self._bound_view and self._live_shortcuts():
            return
        self._unbind()
        for action, keys in self._keymap.items():
            for key in keys:
                shortcut = QtGui.QShortcut(QtGui.QKeySequence(key), view)
                shortcut.setContext(QtCore.Qt.ShortcutContext.WidgetWithChildrenShortcut)
                shortcut.setAutoRepeat(False)
                shortcut.setProperty("panel_action", action)
                shortcut.activated.connect(lambda a=action: self.trigger(a))
                self._shortcuts.append(shortcut)
        view.itemActivated.connect(self._on_item_activated)
        self._bound_view = view
        logger.debug("panel keymap bound shortcuts=%d", len(self._shortcuts))

    def trigger(self, action: str) -> object:
        handler = self._handlers.get(action)
        if handler is None:
            raise KeyError(action)
        result = handler()
        self.action_triggered.emit(action)
        return result

    def _on_item_activated(self, item: QtWidgets.QListWidgetItem) -> None:
        view = self._panel.view()
        if view is None:
            return
        self._panel.set_cursor(view.row(item))
        self.trigger(ACTION_ACTIVATE)

    def _unbind(self) -> None:
        for shortcut in self._live_shortcuts():
            shortcut.setEnabled(False)
            shortcut.deleteLater()
        self._shortcuts = []
        view = self._bound_view
        if view is not None and not sip.isdeleted(view):
            try:
                view.itemActivated.disconnect(self._on_item_activated)
            except TypeError:
                pass
        self._bound_view = None

    def _live_shortcuts(self) -> List[QtGui.QShortcut]:
        return [s for s in self._shortcuts if not sip.isdeleted(s)]
