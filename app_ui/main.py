# =============================================================================
# NAV INDEX (search these tags)
# [NAV-00] Imports / constants
# [NAV-10] Workspace editor (central widget)
# [NAV-90] MainWindow
# [NAV-99] main() entrypoint
# =============================================================================

# === [NAV-00] Imports / constants ============================================
# region NAV-00 Imports / constants
from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Dict, List, Optional

from PyQt6 import QtCore, QtGui, QtWidgets

from core_center.workspace_registry import WorkspaceRegistry
from diagnostics.crash_capture import install_excepthook
from diagnostics.logging_setup import configure_logging, get_logger
from runtime_bus import topics
from runtime_bus.bus import RuntimeBus

from . import config as ui_config
from .panel import WorkspacePanel, build_workspace_panel

STATE_PATH = Path("data/roaming/workspaces_state.json")
DEFAULT_WORKSPACES = ("main",)

logger = get_logger(__name__)
# endregion


# === [NAV-10] Workspace editor (central widget) ==============================
# region NAV-10 WorkspaceEditor
class WorkspaceEditor(QtWidgets.QWidget):
    """Scratch notes per workspace; stands in for the user's working area."""

    def __init__(self, registry: WorkspaceRegistry, parent: Optional[QtWidgets.QWidget] = None) -> None:
        super().__init__(parent)
        self._registry = registry
        self._notes: Dict[str, str] = {}
        self._shown: Optional[str] = None

        layout = QtWidgets.QVBoxLayout(self)
        self.title = QtWidgets.QLabel()
        self.title.setStyleSheet("font-size: 18px; font-weight: bold;")
        layout.addWidget(self.title)
        self.editor = QtWidgets.QPlainTextEdit()
        self.editor.setPlaceholderText("Notes for this workspace…")
        layout.addWidget(self.editor, stretch=1)
        self.sync()

    def sync(self, renamed_from: Optional[str] = None, renamed_to: Optional[str] = None) -> None:
        if renamed_from and renamed_from in self._notes and renamed_to:
            self._notes[renamed_to] = self._notes.pop(renamed_from)
        if self._shown == renamed_from and renamed_to:
            self._shown = renamed_to
        if self._shown is not None:
            self._notes[self._shown] = self.editor.toPlainText()
        for name in list(self._notes):
            if not self._registry.exists(name):
                self._notes.pop(name, None)
        current = self._registry.current()
        self._shown = current
        self.title.setText(current or "No workspace")
        self.editor.setEnabled(current is not None)
        self.editor.setPlainText(self._notes.get(current or "", ""))


# endregion


# === [NAV-90] MainWindow =====================================================
# region NAV-90 MainWindow
class MainWindow(QtWidgets.QMainWindow):
    def __init__(
        self,
        *,
        bus: RuntimeBus,
        registry: WorkspaceRegistry,
        panel_config: ui_config.PanelConfig,
        state_path: Path = STATE_PATH,
    ) -> None:
        super().__init__()
        self.setWindowTitle("Workspaces")
        self.resize(900, 600)
        self.bus = bus
        self.registry = registry
        self.state_path = state_path
        self._bus_subs: List[str] = []

        self.workspace_editor = WorkspaceEditor(registry)
        self.setCentralWidget(self.workspace_editor)

        self.panel: WorkspacePanel = build_workspace_panel(self, registry, bus, panel_config)
        self.panel.commands.install(self)
        self._build_registry_menu()

        self._bus_subs.append(bus.subscribe(topics.WORKSPACE_RENAMED, self._on_renamed))
        for topic in topics.WORKSPACE_MUTATION_TOPICS:
            if topic != topics.WORKSPACE_RENAMED:
                self._bus_subs.append(bus.subscribe(topic, lambda _env: self.workspace_editor.sync()))
        self.statusBar().showMessage("F8 toggles the workspace panel")

    def _build_registry_menu(self) -> None:
        menu = self.menuBar().addMenu("&Registry")
        entries = (
            ("New Workspace…", "Ctrl+Alt+N", self._create_workspace),
            ("Rename Workspace…", "Ctrl+Alt+R", self._rename_workspace),
            ("Kill Workspace", "Ctrl+Alt+K", self._kill_workspace),
            ("Kill Other Workspaces", None, self._kill_others),
            ("Switch to Last", "Ctrl+Alt+L", self.registry.switch_last),
            ("Next Workspace", "Ctrl+Alt+Right", self.registry.switch_next),
            ("Previous Workspace", "Ctrl+Alt+Left", self.registry.switch_previous),
            ("Save State", None, self._save_state),
            ("Load State", None, self._load_state),
        )
        for title, key, handler in entries:
            action = QtGui.QAction(title, self)
            if key:
                action.setShortcut(QtGui.QKeySequence(key))
            action.triggered.connect(lambda _checked=False, h=handler: h())
            menu.addAction(action)

    def _create_workspace(self) -> None:
        name, ok = QtWidgets.QInputDialog.getText(self, "New Workspace", "Name:")
        if not ok:
            return
        try:
            self.registry.create(name, activate=True)
        except ValueError as exc:
            self._warn(f"Cannot create workspace: {exc}")

    def _rename_workspace(self) -> None:
        current = self.registry.current()
        if current is None:
            return
        name, ok = QtWidgets.QInputDialog.getText(self, "Rename Workspace", "New name:", text=current)
        if not ok:
            return
        try:
            self.registry.rename(name)
        except (KeyError, ValueError) as exc:
            self._warn(f"Cannot rename workspace: {exc}")

    def _kill_workspace(self) -> None:
        try:
            self.registry.kill()
        except KeyError as exc:
            self._warn(f"Cannot kill workspace: {exc}")

    def _kill_others(self) -> None:
        self.registry.kill_others()

    def _save_state(self) -> None:
        try:
            self.registry.save_state(self.state_path)
        except OSError as exc:
            self._warn(f"Cannot save workspaces: {exc}")
            return
        self.statusBar().showMessage(f"Saved {self.state_path}", 3000)

    def _load_state(self) -> None:
        if not self.registry.load_state(self.state_path):
            self._warn("No saved workspaces to load.")

    def _on_renamed(self, envelope) -> None:
        old = envelope.get("old")
        new = envelope.get("name")
        self.workspace_editor.sync(
            renamed_from=old if isinstance(old, str) else None,
            renamed_to=new if isinstance(new, str) else None,
        )

    def _warn(self, message: str) -> None:
        logger.warning(message)
        self.statusBar().showMessage(message, 5000)

    def closeEvent(self, event: QtGui.QCloseEvent) -> None:  # type: ignore[name-defined]
        for sub_id in self._bus_subs:
            self.bus.unsubscribe(sub_id)
        self._bus_subs.clear()
        self.panel.shutdown()
        self._save_state()
        super().closeEvent(event)


# endregion


# === [NAV-99] main() entrypoint =============================================
# region NAV-99 main()
def _parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Workspace list panel")
    parser.add_argument("--config", type=Path, default=None, help="panel config JSON path")
    parser.add_argument("--state", type=Path, default=STATE_PATH, help="workspace state JSON path")
    parser.add_argument(
        "--no-auto-show",
        action="store_true",
        help="refresh the panel on workspace creation instead of revealing it",
    )
    return parser.parse_args(argv)


def build_registry(bus: RuntimeBus, state_path: Path) -> WorkspaceRegistry:
    registry = WorkspaceRegistry(bus)
    if not registry.load_state(state_path):
        for name in DEFAULT_WORKSPACES:
            registry.create(name)
    return registry


def main(argv: Optional[List[str]] = None) -> int:
    args = _parse_args(argv)
    info = configure_logging()
    install_excepthook()
    panel_config = ui_config.load_panel_config(args.config)
    if args.no_auto_show:
        panel_config = ui_config.PanelConfig(
            auto_show=False,
            width=panel_config.width,
            side=panel_config.side,
        )
    logger.info("starting log_path=%s auto_show=%s", info["log_path"], panel_config.auto_show)
    app = QtWidgets.QApplication(sys.argv[:1])
    bus = RuntimeBus()
    registry = build_registry(bus, args.state)
    window = MainWindow(
        bus=bus,
        registry=registry,
        panel_config=panel_config,
        state_path=args.state,
    )
    window.show()
    QtCore.QTimer.singleShot(0, window.panel.state.show)
    return app.exec()


if __name__ == "__main__":
    sys.exit(main())
# endregion
