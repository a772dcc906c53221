from __future__ import annotations

import json
from pathlib import Path
from typing import Dict, Iterable, List, Optional

from diagnostics.logging_setup import get_logger
from runtime_bus import topics
from runtime_bus.bus import RuntimeBus

logger = get_logger(__name__)

REGISTRY_SOURCE = "core_center.workspace_registry"
STATE_VERSION = 1


def _clean_name(value: object) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValueError("invalid_name")
    return value.strip()


class WorkspaceRegistry:
    """Ordered set of named workspaces with one active entry.

    Every successful mutation publishes exactly one message on the bus,
    after the registry state has been updated.
    """

    def __init__(
        self,
        bus: Optional[RuntimeBus] = None,
        *,
        names: Iterable[str] = (),
        current: Optional[str] = None,
    ) -> None:
        self._bus = bus
        self._names: List[str] = []
        for name in names:
            clean = _clean_name(name)
            if clean in self._names:
                raise ValueError("workspace_exists")
            self._names.append(clean)
        if current is not None and current not in self._names:
            raise KeyError("workspace_not_found")
        self._current: Optional[str] = current or (self._names[0] if self._names else None)
        self._last: Optional[str] = None

    # --- queries
    def names(self) -> List[str]:
        return list(self._names)

    def current(self) -> Optional[str]:
        return self._current

    def last(self) -> Optional[str]:
        return self._last

    def exists(self, name: str) -> bool:
        return name in self._names

    def snapshot(self) -> Dict[str, object]:
        return {
            "version": STATE_VERSION,
            "workspaces": list(self._names),
            "current": self._current,
            "last": self._last,
        }

    # --- mutations
    def create(self, name: str, *, activate: bool = False) -> str:
        clean = _clean_name(name)
        if clean in self._names:
            raise ValueError("workspace_exists")
        self._names.append(clean)
        if self._current is None:
            self._current = clean
        logger.info("workspace created name=%s", clean)
        self._publish(topics.WORKSPACE_CREATED, {"name": clean})
        if activate and self._current != clean:
            self.switch(clean)
        return clean

    def kill(self, name: Optional[str] = None) -> str:
        target = self._current if name is None else name
        if target is None or target not in self._names:
            raise KeyError("workspace_not_found")
        index = self._names.index(target)
        self._names.remove(target)
        if self._last == target:
            self._last = None
        if self._current == target:
            if self._last in self._names:
                self._current = self._last
            elif self._names:
                self._current = self._names[max(0, index - 1)]
            else:
                self._current = None
            self._last = None
        logger.info("workspace killed name=%s current=%s", target, self._current)
        self._publish(topics.WORKSPACE_KILLED, {"name": target})
        return target

    def kill_others(self) -> List[str]:
        if self._current is None:
            return []
        killed = [name for name in self._names if name != self._current]
        self._names = [self._current]
        self._last = None
        logger.info("workspaces killed count=%d", len(killed))
        self._publish(topics.WORKSPACE_KILLED_OTHERS, {"names": killed})
        return killed

    def rename(self, new_name: str, old_name: Optional[str] = None) -> str:
        target = self._current if old_name is None else old_name
        if target is None or target not in self._names:
            raise KeyError("workspace_not_found")
        clean = _clean_name(new_name)
        if clean != target and clean in self._names:
            raise ValueError("workspace_exists")
        self._names[self._names.index(target)] = clean
        if self._current == target:
            self._current = clean
        if self._last == target:
            self._last = clean
        logger.info("workspace renamed old=%s new=%s", target, clean)
        self._publish(topics.WORKSPACE_RENAMED, {"old": target, "name": clean})
        return clean

    def switch(self, name: str) -> str:
        if name not in self._names:
            raise KeyError("workspace_not_found")
        self._activate(name)
        self._publish(topics.WORKSPACE_SWITCHED, {"name": name})
        return name

    def switch_last(self) -> Optional[str]:
        if self._last is None or self._last not in self._names:
            return None
        target = self._last
        self._activate(target)
        self._publish(topics.WORKSPACE_SWITCHED_LAST, {"name": target})
        return target

    def switch_next(self) -> Optional[str]:
        target = self._neighbour(1)
        if target is None:
            return None
        self._activate(target)
        self._publish(topics.WORKSPACE_NEXT, {"name": target})
        return target

    def switch_previous(self) -> Optional[str]:
        target = self._neighbour(-1)
        if target is None:
            return None
        self._activate(target)
        self._publish(topics.WORKSPACE_PREVIOUS, {"name": target})
        return target

    def restore_state(self, data: Dict[str, object]) -> None:
        names, current, last = _parse_state(data)
        self._names = names
        self._current = current
        self._last = last
        logger.info("workspace state restored count=%d", len(names))
        self._publish(topics.WORKSPACE_STATE_RESTORED, {"count": len(names)})

    # --- persistence
    def save_state(self, path: Path) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(self.snapshot(), indent=2), encoding="utf-8")

    def load_state(self, path: Path) -> bool:
        if not path.exists():
            return False
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
            names, current, last = _parse_state(data)
        except (OSError, json.JSONDecodeError, ValueError, KeyError) as exc:
            logger.warning("workspace state unreadable path=%s error=%s", path, exc)
            return False
        self._names = names
        self._current = current
        self._last = last
        logger.info("workspace state loaded path=%s count=%d", path, len(names))
        self._publish(topics.WORKSPACE_STATE_LOADED, {"path": str(path), "count": len(names)})
        return True

    # --- helpers
    def _activate(self, name: str) -> None:
        if name != self._current:
            self._last = self._current
            self._current = name

    def _neighbour(self, step: int) -> Optional[str]:
        if not self._names:
            return None
        if self._current not in self._names:
            return self._names[0] if step > 0 else self._names[-1]
        index = self._names.index(self._current)
        return self._names[(index + step) % len(self._names)]

    def _publish(self, topic: str, payload: Dict[str, object]) -> None:
        if self._bus is None:
            return
        self._bus.publish(topic, payload, REGISTRY_SOURCE)


def _parse_state(data: object) -> tuple[List[str], Optional[str], Optional[str]]:
    if not isinstance(data, dict):
        raise ValueError("invalid_state")
    raw = data.get("workspaces")
    if not isinstance(raw, list):
        raise ValueError("invalid_state")
    names: List[str] = []
    for item in raw:
        clean = _clean_name(item)
        if clean in names:
            raise ValueError("workspace_exists")
        names.append(clean)
    current = data.get("current")
    if current not in names:
        current = names[0] if names else None
    last = data.get("last")
    if last not in names or last == current:
        last = None
    return names, current, last
