from __future__ import annotations

import enum
from typing import Callable, Dict, List, Optional

from core_center.workspace_registry import WorkspaceRegistry
from diagnostics.logging_setup import get_logger
from runtime_bus import topics
from runtime_bus.bus import RuntimeBus
from runtime_bus.messages import MessageEnvelope

logger = get_logger(__name__)


class RegistryMutation(enum.Enum):
    CREATED = "created"
    KILLED = "killed"
    KILLED_OTHERS = "killed_others"
    RENAMED = "renamed"
    SWITCHED = "switched"
    SWITCHED_LAST = "switched_last"
    NEXT = "next"
    PREVIOUS = "previous"
    STATE_LOADED = "state_loaded"
    STATE_RESTORED = "state_restored"


TOPIC_MUTATIONS: Dict[str, RegistryMutation] = {
    topics.WORKSPACE_CREATED: RegistryMutation.CREATED,
    topics.WORKSPACE_KILLED: RegistryMutation.KILLED,
    topics.WORKSPACE_KILLED_OTHERS: RegistryMutation.KILLED_OTHERS,
    topics.WORKSPACE_RENAMED: RegistryMutation.RENAMED,
    topics.WORKSPACE_SWITCHED: RegistryMutation.SWITCHED,
    topics.WORKSPACE_SWITCHED_LAST: RegistryMutation.SWITCHED_LAST,
    topics.WORKSPACE_NEXT: RegistryMutation.NEXT,
    topics.WORKSPACE_PREVIOUS: RegistryMutation.PREVIOUS,
    topics.WORKSPACE_STATE_LOADED: RegistryMutation.STATE_LOADED,
    topics.WORKSPACE_STATE_RESTORED: RegistryMutation.STATE_RESTORED,
}

MutationListener = Callable[[RegistryMutation], None]


class Subscription:
    """Handle returned by :meth:`RegistryAdapter.subscribe`."""

    def __init__(self, sub_ids: List[str]) -> None:
        self.sub_ids = sub_ids
        self.active = True


class RegistryAdapter:
    """Narrow read/command view of a :class:`WorkspaceRegistry`.

    Reads go straight to the registry. Change notifications arrive over the
    runtime bus, one callback per registry mutation, in publish order.
    """

    def __init__(self, registry: WorkspaceRegistry, bus: RuntimeBus) -> None:
        self._registry = registry
        self._bus = bus

    def list_names(self) -> List[str]:
        return self._registry.names()

    def current_name(self) -> Optional[str]:
        return self._registry.current()

    def switch_to(self, name: str) -> bool:
        """Switch the active workspace; silently ignore names that vanished."""
        if not self._registry.exists(name):
            logger.warning("switch ignored, workspace gone name=%s", name)
            return False
        try:
            self._registry.switch(name)
        except KeyError:
            logger.warning("switch ignored, workspace gone name=%s", name)
            return False
        return True

    def next(self) -> Optional[str]:
        return self._registry.switch_next()

    def previous(self) -> Optional[str]:
        return self._registry.switch_previous()

    def subscribe(self, on_change: MutationListener) -> Subscription:
        def _on_envelope(envelope: MessageEnvelope) -> None:
            mutation = TOPIC_MUTATIONS.get(envelope.type)
            if mutation is not None:
                on_change(mutation)

        return Subscription(self._bus.subscribe_many(TOPIC_MUTATIONS.keys(), _on_envelope))

    def unsubscribe(self, subscription: Subscription) -> None:
        if not subscription.active:
            return
        for sub_id in subscription.sub_ids:
            self._bus.unsubscribe(sub_id)
        subscription.active = False
