from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from PyQt6 import QtWidgets

from app_ui.config import PanelConfig
from core_center.workspace_registry import WorkspaceRegistry
from runtime_bus.bus import RuntimeBus

from .commands import PanelCommands
from .host import DockHost
from .input import InputController
from .observer import ChangeObserver, Scheduler
from .registry_adapter import RegistryAdapter
from .state import PanelState


@dataclass
class WorkspacePanel:
    adapter: RegistryAdapter
    host: DockHost
    state: PanelState
    controller: InputController
    observer: ChangeObserver
    commands: PanelCommands

    def shutdown(self) -> None:
        self.observer.stop()
        self.state.close()


def build_workspace_panel(
    window: QtWidgets.QMainWindow,
    registry: WorkspaceRegistry,
    bus: RuntimeBus,
    config: Optional[PanelConfig] = None,
    *,
    scheduler: Optional[Scheduler] = None,
) -> WorkspacePanel:
    """Wire adapter, host, state, input and observer for ``window``."""
    config = config or PanelConfig()
    adapter = RegistryAdapter(registry, bus)
    host = DockHost(window, side=config.side)
    state = PanelState(adapter, host, width=config.width, parent=window)
    controller = InputController(state, parent=window)
    observer = ChangeObserver(
        adapter,
        state,
        auto_show=config.auto_show,
        scheduler=scheduler,
        parent=window,
    )
    commands = PanelCommands(state, parent=window)
    observer.start()
    return WorkspacePanel(
        adapter=adapter,
        host=host,
        state=state,
        controller=controller,
        observer=observer,
        commands=commands,
    )
