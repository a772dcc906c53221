from __future__ import annotations

import json
from pathlib import Path

from app_ui.config import PanelConfig, get_auto_show, load_panel_config, save_panel_config


def test_missing_config_is_created_with_defaults(tmp_path: Path) -> None:
    path = tmp_path / "roaming" / "workspace_panel.json"
    config = load_panel_config(path)
    assert config == PanelConfig(auto_show=True, width=220, side="left")
    assert json.loads(path.read_text(encoding="utf-8"))["auto_show"] is True


def test_corrupt_or_invalid_values_fall_back(tmp_path: Path) -> None:
    path = tmp_path / "workspace_panel.json"
    path.write_text("{broken", encoding="utf-8")
    assert load_panel_config(path) == PanelConfig()

    path.write_text(json.dumps({"auto_show": "yes", "width": 5, "side": "top"}), encoding="utf-8")
    assert load_panel_config(path) == PanelConfig()

    path.write_text(json.dumps(["not", "a", "dict"]), encoding="utf-8")
    assert load_panel_config(path) == PanelConfig()


def test_saved_config_is_loaded_back(tmp_path: Path) -> None:
    path = tmp_path / "workspace_panel.json"
    save_panel_config(PanelConfig(auto_show=False, width=320, side="right"), path)
    assert load_panel_config(path) == PanelConfig(auto_show=False, width=320, side="right")
    assert get_auto_show(path) is False
