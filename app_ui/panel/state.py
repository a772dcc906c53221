from __future__ import annotations

from typing import Optional

from PyQt6 import QtCore, QtGui, QtWidgets, sip

from diagnostics.logging_setup import get_logger

from .host import DockHost
from .registry_adapter import RegistryAdapter
from .render import (
    LINE_CURRENT,
    LINE_ENTRY,
    LINE_HEADER,
    LINE_PLACEHOLDER,
    PanelSnapshot,
    RenderedPanel,
    render,
)

logger = get_logger(__name__)

VIEW_OBJECT_NAME = "workspace-panel-list"
NAME_ROLE = QtCore.Qt.ItemDataRole.UserRole
KIND_ROLE = QtCore.Qt.ItemDataRole.UserRole + 1
CURRENT_BACKGROUND = "#dbe8ff"
PLACEHOLDER_COLOR = "#777"


class PanelListView(QtWidgets.QListWidget):
    """Read-only list; typed characters never edit or jump the cursor."""

    def __init__(self, parent: Optional[QtWidgets.QWidget] = None) -> None:
        super().__init__(parent)
        self.setObjectName(VIEW_OBJECT_NAME)
        self.setEditTriggers(QtWidgets.QAbstractItemView.EditTrigger.NoEditTriggers)
        self.setSelectionMode(QtWidgets.QAbstractItemView.SelectionMode.SingleSelection)
        self.setFocusPolicy(QtCore.Qt.FocusPolicy.StrongFocus)
        self.setUniformItemSizes(True)

    def keyboardSearch(self, search: str) -> None:
        return


class PanelState(QtCore.QObject):
    """Visibility, cursor and last rendered snapshot of the workspace panel."""

    view_created = QtCore.pyqtSignal(object)
    rendered_changed = QtCore.pyqtSignal(object)
    visibility_changed = QtCore.pyqtSignal(bool)

    def __init__(
        self,
        adapter: RegistryAdapter,
        host: DockHost,
        *,
        width: int = 220,
        parent: Optional[QtCore.QObject] = None,
    ) -> None:
        super().__init__(parent)
        self._adapter = adapter
        self._host = host
        self._width = width
        self._view: Optional[PanelListView] = None
        self._rendered = render(PanelSnapshot())
        self._render_count = 0

    # --- accessors
    def adapter(self) -> RegistryAdapter:
        return self._adapter

    def host(self) -> DockHost:
        return self._host

    def default_width(self) -> int:
        return self._width

    def view(self) -> Optional[PanelListView]:
        if self._view is not None and sip.isdeleted(self._view):
            self._view = None
        return self._view

    def is_shown(self) -> bool:
        return self.view() is not None and self._host.is_placed()

    def snapshot(self) -> PanelSnapshot:
        return self._rendered.snapshot

    def rendered(self) -> RenderedPanel:
        return self._rendered

    def render_count(self) -> int:
        return self._render_count

    def cursor(self) -> int:
        view = self.view()
        if view is None:
            return -1
        return view.currentRow()

    def set_cursor(self, line: int) -> None:
        view = self.view()
        if view is None or line < 0 or line >= view.count():
            return
        view.setCurrentRow(line)

    # --- operations
    def show(self) -> None:
        was_shown = self.is_shown()
        view = self._ensure_view()
        self.render(self._read_snapshot())
        self._host.place(self._width)
        self._host.focus(view)
        if not was_shown:
            logger.info("panel shown entries=%d", len(self._rendered.snapshot.names))
            self.visibility_changed.emit(True)

    def close(self) -> None:
        if not self.is_shown():
            return
        self._host.unplace()
        logger.info("panel closed")
        self.visibility_changed.emit(False)

    def toggle(self) -> None:
        if self.is_shown():
            self.close()
        else:
            self.show()

    def focus(self) -> None:
        if self.is_shown():
            self._host.focus(self.view())
        else:
            self.show()

    def refresh(self) -> None:
        if not self.is_shown():
            return
        self.render(self._read_snapshot())

    def resize(self) -> None:
        if not self.is_shown():
            return
        self._host.set_width(self._width)

    def render(self, snapshot: Optional[PanelSnapshot] = None) -> RenderedPanel:
        rendered = render(snapshot if snapshot is not None else self._rendered.snapshot)
        self._rendered = rendered
        self._render_count += 1
        view = self.view()
        if view is not None:
            _draw(view, rendered)
        logger.debug("panel rendered lines=%d", len(rendered.lines))
        self.rendered_changed.emit(rendered)
        return rendered

    def activate_at_cursor(self) -> bool:
        name = self._rendered.name_at(self.cursor())
        if name is None:
            return False
        return self._adapter.switch_to(name)

    # --- helpers
    def _read_snapshot(self) -> PanelSnapshot:
        return PanelSnapshot.of(self._adapter.list_names(), self._adapter.current_name())

    def _ensure_view(self) -> PanelListView:
        view = self._host.ensure_view(PanelListView)
        if view is not self._view:
            self._view = view
            self.view_created.emit(view)
        return view


def _draw(view: QtWidgets.QListWidget, rendered: RenderedPanel) -> None:
    view.clear()
    for line in rendered.lines:
        item = QtWidgets.QListWidgetItem(line.text)
        item.setData(NAME_ROLE, line.name)
        item.setData(KIND_ROLE, line.kind)
        font = item.font()
        if line.kind == LINE_HEADER:
            item.setFlags(QtCore.Qt.ItemFlag.ItemIsEnabled)
            font.setBold(True)
        elif line.kind == LINE_PLACEHOLDER:
            item.setFlags(QtCore.Qt.ItemFlag.ItemIsEnabled)
            font.setItalic(True)
            item.setForeground(QtGui.QBrush(QtGui.QColor(PLACEHOLDER_COLOR)))
        elif line.kind == LINE_CURRENT:
            item.setFlags(QtCore.Qt.ItemFlag.ItemIsEnabled | QtCore.Qt.ItemFlag.ItemIsSelectable)
            font.setBold(True)
            item.setBackground(QtGui.QBrush(QtGui.QColor(CURRENT_BACKGROUND)))
            item.setToolTip("Current workspace")
        elif line.kind == LINE_ENTRY:
            item.setFlags(QtCore.Qt.ItemFlag.ItemIsEnabled | QtCore.Qt.ItemFlag.ItemIsSelectable)
            item.setToolTip(f"Switch to {line.name}")
        item.setFont(font)
        view.addItem(item)
    view.setCurrentRow(0)
