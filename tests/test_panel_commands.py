from __future__ import annotations

import pytest

from app_ui.panel.commands import (
    CMD_ACTIVATE,
    CMD_CLOSE,
    CMD_FOCUS,
    CMD_REFRESH,
    CMD_RESIZE,
    CMD_SHOW,
    CMD_TOGGLE,
    PanelCommands,
)
from app_ui.panel.registry_adapter import RegistryAdapter
from app_ui.panel.state import PanelState
from panel_helpers import FakeHost


def _commands(registry, bus) -> tuple[PanelCommands, PanelState, FakeHost]:
    host = FakeHost()
    panel = PanelState(RegistryAdapter(registry, bus), host, width=200)
    return PanelCommands(panel), panel, host


def test_command_names_are_stable(qapp, registry, bus) -> None:
    commands, _panel, _host = _commands(registry, bus)
    assert commands.names() == [
        "workspace-panel-show",
        "workspace-panel-toggle",
        "workspace-panel-close",
        "workspace-panel-focus",
        "workspace-panel-resize",
        "workspace-panel-refresh",
        "workspace-panel-activate",
    ]
    assert commands.action(CMD_TOGGLE).shortcut().toString() == "F8"
    with pytest.raises(KeyError):
        commands.run("workspace-panel-explode")


def test_commands_drive_panel(qapp, registry, bus) -> None:
    commands, panel, host = _commands(registry, bus)
    commands.run(CMD_REFRESH)
    commands.run(CMD_RESIZE)
    commands.run(CMD_CLOSE)
    assert not panel.is_shown()
    assert host.widths == []

    commands.run(CMD_SHOW)
    assert panel.is_shown()
    commands.run(CMD_TOGGLE)
    assert not panel.is_shown()
    commands.run(CMD_FOCUS)
    assert panel.is_shown()

    panel.set_cursor(2)
    assert commands.run(CMD_ACTIVATE) is None
    assert registry.current() == "work"


def test_actions_trigger_commands(qapp, registry, bus) -> None:
    commands, panel, _host = _commands(registry, bus)
    commands.action(CMD_SHOW).trigger()
    assert panel.is_shown()


def test_install_adds_menu_and_window_actions(main_window, registry, bus) -> None:
    commands, _panel, _host = _commands(registry, bus)
    menu = commands.install(main_window)
    assert [action.objectName() for action in menu.actions()] == commands.names()
    assert commands.action(CMD_FOCUS) in main_window.actions()
