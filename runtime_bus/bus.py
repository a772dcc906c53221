from __future__ import annotations

import itertools
import threading
import uuid
from datetime import datetime, timezone
from typing import Callable, Dict, Iterable, List, Optional

from diagnostics.logging_setup import get_logger

from .messages import MessageEnvelope

logger = get_logger(__name__)

Handler = Callable[[MessageEnvelope], None]


def _iso_timestamp() -> str:
    return datetime.now(timezone.utc).isoformat()


class RuntimeBus:
    """In-process pub/sub bus.

    Handlers run synchronously on the publishing thread, in subscription
    order. A failing handler is logged and does not stop the others.
    """

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._subscribers: Dict[str, tuple[str, Handler]] = {}
        self._topic_index: Dict[str, List[str]] = {}
        self._last: Dict[str, MessageEnvelope] = {}
        self._seq = itertools.count(1)

    def subscribe(self, topic: str, handler: Handler, *, replay_last: bool = False) -> str:
        sub_id = str(uuid.uuid4())
        with self._lock:
            self._subscribers[sub_id] = (topic, handler)
            self._topic_index.setdefault(topic, []).append(sub_id)
            last = self._last.get(topic) if replay_last else None
        if last is not None:
            self._invoke(handler, last)
        return sub_id

    def subscribe_many(self, topics: Iterable[str], handler: Handler) -> List[str]:
        return [self.subscribe(topic, handler) for topic in topics]

    def unsubscribe(self, sub_id: str) -> None:
        with self._lock:
            topic, _ = self._subscribers.pop(sub_id, (None, None))
            if topic and topic in self._topic_index:
                ids = self._topic_index[topic]
                if sub_id in ids:
                    ids.remove(sub_id)
                if not ids:
                    self._topic_index.pop(topic, None)

    def subscriber_count(self, topic: str) -> int:
        with self._lock:
            return len(self._topic_index.get(topic, ()))

    def publish(
        self,
        topic: str,
        payload: Optional[Dict[str, object]],
        source: str,
    ) -> MessageEnvelope:
        envelope = self._build_envelope(topic, payload, source)
        with self._lock:
            self._last[topic] = envelope
        for handler in self._copy_handlers(topic):
            self._invoke(handler, envelope)
        return envelope

    def _invoke(self, handler: Handler, envelope: MessageEnvelope) -> None:
        try:
            handler(envelope)
        except Exception:
            logger.exception("runtime_bus handler error on %s", envelope.type)

    def _build_envelope(
        self,
        topic: str,
        payload: Optional[Dict[str, object]],
        source: str,
    ) -> MessageEnvelope:
        body = payload if isinstance(payload, dict) else {}
        return MessageEnvelope(
            msg_id=str(uuid.uuid4()),
            type=topic,
            timestamp=_iso_timestamp(),
            source=source,
            payload=dict(body),
            seq=next(self._seq),
        )

    def _copy_handlers(self, topic: str) -> list[Handler]:
        with self._lock:
            sub_ids = list(self._topic_index.get(topic, ()))
            return [self._subscribers[sid][1] for sid in sub_ids if sid in self._subscribers]
