from __future__ import annotations

import threading

from PyQt6 import QtWidgets, sip

from app_ui.panel.observer import CREATE_SETTLE_DELAY_MS, ChangeObserver
from app_ui.panel.registry_adapter import RegistryAdapter
from app_ui.panel.state import PanelState
from panel_helpers import FakeHost, ManualScheduler


def _observed(registry, bus, *, auto_show: bool, scheduler: ManualScheduler):
    host = FakeHost()
    adapter = RegistryAdapter(registry, bus)
    panel = PanelState(adapter, host)
    observer = ChangeObserver(adapter, panel, auto_show=auto_show, scheduler=scheduler)
    observer.start()
    return host, panel, observer


def test_create_with_auto_show_off_only_refreshes(qapp, registry, bus, scheduler) -> None:
    host, panel, observer = _observed(registry, bus, auto_show=False, scheduler=scheduler)
    origin = QtWidgets.QLineEdit()
    host.focused = origin

    registry.create("temp")
    assert observer.pending() == 1
    assert [delay for delay, _ in scheduler.calls] == [CREATE_SETTLE_DELAY_MS]
    scheduler.run_all()

    assert not panel.is_shown()
    assert panel.render_count() == 0
    assert host.focus_calls == []
    assert host.focused is origin
    assert observer.pending() == 0


def test_create_with_auto_show_off_refreshes_visible_panel(qapp, registry, bus, scheduler) -> None:
    host, panel, _observer = _observed(registry, bus, auto_show=False, scheduler=scheduler)
    panel.show()
    registry.create("temp")
    assert "temp" not in panel.snapshot().names
    scheduler.run_all()
    assert panel.snapshot().names == ("main", "work", "temp")
    assert host.focus_calls == [panel.view()]


def test_create_with_auto_show_on_reveals_and_restores_focus(qapp, registry, bus, scheduler) -> None:
    host, panel, _observer = _observed(registry, bus, auto_show=True, scheduler=scheduler)
    origin = QtWidgets.QLineEdit()
    host.focused = origin

    registry.create("temp")
    assert not panel.is_shown()
    scheduler.run_all()

    assert panel.is_shown()
    assert panel.snapshot().names == ("main", "work", "temp")
    assert host.focus_calls == [panel.view(), origin]
    assert host.focused is origin


def test_destroyed_origin_leaves_focus_on_panel(qapp, registry, bus, scheduler) -> None:
    host, panel, _observer = _observed(registry, bus, auto_show=True, scheduler=scheduler)
    origin = QtWidgets.QLineEdit()
    host.focused = origin

    registry.create("temp")
    sip.delete(origin)
    scheduler.run_all()

    assert panel.is_shown()
    assert host.focus_calls == [panel.view()]


def test_other_mutations_refresh_immediately(qapp, registry, bus, scheduler) -> None:
    host, panel, _observer = _observed(registry, bus, auto_show=True, scheduler=scheduler)
    panel.show()
    focus_before = list(host.focus_calls)

    registry.rename("home", old_name="main")
    assert panel.snapshot().names == ("home", "work")
    registry.switch("work")
    assert panel.snapshot().current == "work"
    registry.switch_last()
    registry.switch_next()
    registry.switch_previous()
    registry.kill("work")
    registry.kill_others()
    registry.restore_state({"workspaces": ["a", "b"], "current": "b"})

    assert panel.snapshot().names == ("a", "b")
    assert panel.snapshot().current == "b"
    assert scheduler.calls == []
    assert host.focus_calls == focus_before


def test_stopped_observer_ignores_mutations(qapp, registry, bus, scheduler) -> None:
    host, panel, observer = _observed(registry, bus, auto_show=True, scheduler=scheduler)
    panel.show()
    registry.create("temp")
    observer.stop()
    assert not observer.is_running()
    scheduler.run_all()
    registry.switch("work")
    assert panel.snapshot().names == ("main", "work")
    assert panel.snapshot().current == "main"


def test_auto_show_policy_is_read_at_creation(qapp, registry, bus, scheduler) -> None:
    _host, panel, observer = _observed(registry, bus, auto_show=True, scheduler=scheduler)
    registry.create("temp")
    observer.set_auto_show(False)
    scheduler.run_all()
    assert panel.is_shown()
    assert observer.auto_show() is False


def test_notifications_from_worker_thread_land_on_gui_thread(qapp, registry, bus, scheduler) -> None:
    _host, panel, _observer = _observed(registry, bus, auto_show=True, scheduler=scheduler)
    panel.show()
    renders_on: list[object] = []
    panel.rendered_changed.connect(lambda _r: renders_on.append(threading.current_thread()))

    worker = threading.Thread(target=lambda: registry.switch("work"))
    worker.start()
    worker.join()
    assert renders_on == []

    qapp.processEvents()

    assert renders_on == [threading.main_thread()]
    assert panel.snapshot().current == "work"
