from __future__ import annotations

from typing import Callable, Optional

from PyQt6 import QtCore, QtWidgets, sip

from diagnostics.logging_setup import get_logger

from .registry_adapter import RegistryAdapter, RegistryMutation, Subscription
from .state import PanelState

logger = get_logger(__name__)

# Time given to the registry to finish its own post-creation setup.
CREATE_SETTLE_DELAY_MS = 50

Scheduler = Callable[[int, Callable[[], None]], None]


def _qt_single_shot(delay_ms: int, callback: Callable[[], None]) -> None:
    QtCore.QTimer.singleShot(delay_ms, callback)


class ChangeObserver(QtCore.QObject):
    """Keeps the panel in sync with registry mutations.

    Creation is handled after a one-shot delay and either reveals the panel
    (restoring the previous focus) or refreshes it, depending on the
    auto-show policy. Every other mutation refreshes immediately.
    """

    mutation_received = QtCore.pyqtSignal(object)

    def __init__(
        self,
        adapter: RegistryAdapter,
        panel: PanelState,
        *,
        auto_show: bool = True,
        delay_ms: int = CREATE_SETTLE_DELAY_MS,
        scheduler: Optional[Scheduler] = None,
        parent: Optional[QtCore.QObject] = None,
    ) -> None:
        super().__init__(parent)
        self._adapter = adapter
        self._panel = panel
        self._auto_show = bool(auto_show)
        self._delay_ms = max(0, int(delay_ms))
        self._scheduler = scheduler or _qt_single_shot
        self._subscription: Optional[Subscription] = None
        self._pending = 0
        # Auto connection: direct on the GUI thread, queued from any other.
        self.mutation_received.connect(self._dispatch)

    def auto_show(self) -> bool:
        return self._auto_show

    def set_auto_show(self, enabled: bool) -> None:
        self._auto_show = bool(enabled)

    def delay_ms(self) -> int:
        return self._delay_ms

    def pending(self) -> int:
        return self._pending

    def is_running(self) -> bool:
        return self._subscription is not None

    def start(self) -> None:
        if self._subscription is not None:
            return
        self._subscription = self._adapter.subscribe(self._on_registry_change)
        logger.debug("change observer started auto_show=%s", self._auto_show)

    def stop(self) -> None:
        if self._subscription is None:
            return
        self._adapter.unsubscribe(self._subscription)
        self._subscription = None
        logger.debug("change observer stopped")

    def _on_registry_change(self, mutation: RegistryMutation) -> None:
        self.mutation_received.emit(mutation)

    def _dispatch(self, mutation: RegistryMutation) -> None:
        if mutation is RegistryMutation.CREATED:
            self._schedule_created()
            return
        self._panel.refresh()

    def _schedule_created(self) -> None:
        origin = self._panel.host().focused_widget()
        auto_show = self._auto_show
        self._pending += 1
        self._scheduler(self._delay_ms, lambda: self._after_created(origin, auto_show))

    def _after_created(self, origin: Optional[QtWidgets.QWidget], auto_show: bool) -> None:
        if sip.isdeleted(self):
            return
        self._pending = max(0, self._pending - 1)
        if self._subscription is None or sip.isdeleted(self._panel):
            return
        if not auto_show:
            self._panel.refresh()
            return
        self._panel.show()
        host = self._panel.host()
        if origin is not None and origin is not self._panel.view() and host.is_alive(origin):
            host.focus(origin)
        else:
            logger.debug("focus origin gone, leaving focus on panel")
