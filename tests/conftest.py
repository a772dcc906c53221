from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import Iterator

import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from PyQt6 import QtWidgets  # noqa: E402

from core_center.workspace_registry import WorkspaceRegistry  # noqa: E402
from panel_helpers import FakeHost, ManualScheduler  # noqa: E402
from runtime_bus.bus import RuntimeBus  # noqa: E402


@pytest.fixture(scope="session")
def qapp() -> QtWidgets.QApplication:
    app = QtWidgets.QApplication.instance()
    if app is None:
        app = QtWidgets.QApplication([])
    return app


@pytest.fixture()
def bus() -> RuntimeBus:
    return RuntimeBus()


@pytest.fixture()
def registry(bus: RuntimeBus) -> WorkspaceRegistry:
    return WorkspaceRegistry(bus, names=["main", "work"], current="main")


@pytest.fixture()
def main_window(qapp) -> Iterator[QtWidgets.QMainWindow]:
    window = QtWidgets.QMainWindow()
    window.setCentralWidget(QtWidgets.QWidget())
    yield window
    window.close()
    window.deleteLater()


@pytest.fixture()
def scheduler() -> ManualScheduler:
    return ManualScheduler()


@pytest.fixture()
def fake_host(qapp) -> FakeHost:
    return FakeHost()
