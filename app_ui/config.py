# =============================================================================
# NAV INDEX (search these tags)
# [NAV-00] Imports / constants
# [NAV-10] Config loading (defaults/roaming)
# [NAV-20] Public getters
# [NAV-99] End
# =============================================================================

# === [NAV-00] Imports / constants ============================================
from __future__ import annotations

import json
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Dict, Optional

CONFIG_PATH = Path("data/roaming/workspace_panel.json")
PANEL_SIDES = ("left", "right")
MIN_PANEL_WIDTH = 80
_DEFAULT_PANEL_CONFIG = {"auto_show": True, "width": 220, "side": "left"}


@dataclass(frozen=True)
class PanelConfig:
    auto_show: bool = True
    width: int = 220
    side: str = "left"


# === [NAV-10] Config loading (defaults/roaming) ==============================
def load_panel_config_data(path: Optional[Path] = None) -> Dict:
    path = path or CONFIG_PATH
    if not path.exists():
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(json.dumps(_DEFAULT_PANEL_CONFIG, indent=2), encoding="utf-8")
        except OSError:
            pass
        return _DEFAULT_PANEL_CONFIG.copy()
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError):
        return _DEFAULT_PANEL_CONFIG.copy()
    if not isinstance(data, dict):
        return _DEFAULT_PANEL_CONFIG.copy()
    for key, value in _DEFAULT_PANEL_CONFIG.items():
        data.setdefault(key, value)
    return data


def load_panel_config(path: Optional[Path] = None) -> PanelConfig:
    return _coerce(load_panel_config_data(path))


def save_panel_config(config: PanelConfig, path: Optional[Path] = None) -> None:
    path = path or CONFIG_PATH
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(asdict(config), indent=2), encoding="utf-8")


def _coerce(data: Dict) -> PanelConfig:
    auto_show = data.get("auto_show")
    if not isinstance(auto_show, bool):
        auto_show = _DEFAULT_PANEL_CONFIG["auto_show"]
    width = data.get("width")
    if isinstance(width, bool) or not isinstance(width, int) or width < MIN_PANEL_WIDTH:
        width = _DEFAULT_PANEL_CONFIG["width"]
    side = data.get("side")
    if side not in PANEL_SIDES:
        side = _DEFAULT_PANEL_CONFIG["side"]
    return PanelConfig(auto_show=auto_show, width=width, side=side)


# === [NAV-20] Public getters ==================================================
def get_auto_show(path: Optional[Path] = None) -> bool:
    return load_panel_config(path).auto_show


# === [NAV-99] End =============================================================
__all__ = [
    "CONFIG_PATH",
    "PANEL_SIDES",
    "MIN_PANEL_WIDTH",
    "PanelConfig",
    "load_panel_config_data",
    "load_panel_config",
    "save_panel_config",
    "get_auto_show",
]
