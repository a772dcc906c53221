"""Live workspace list panel docked beside the main window."""

from .commands import PanelCommands
from .host import DockHost
from .input import DEFAULT_KEYMAP, InputController
from .observer import CREATE_SETTLE_DELAY_MS, ChangeObserver
from .registry_adapter import RegistryAdapter, RegistryMutation
from .render import PanelLine, PanelSnapshot, RenderedPanel, render
from .state import PanelState
from .wiring import WorkspacePanel, build_workspace_panel

__all__ = [
    "CREATE_SETTLE_DELAY_MS",
    "DEFAULT_KEYMAP",
    "ChangeObserver",
    "DockHost",
    "InputController",
    "PanelCommands",
    "PanelLine",
    "PanelSnapshot",
    "PanelState",
    "RegistryAdapter",
    "RegistryMutation",
    "RenderedPanel",
    "WorkspacePanel",
    "build_workspace_panel",
    "render",
]
