from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Optional


@dataclass(slots=True)
class MessageEnvelope:
    """Envelope delivered to every subscriber of a topic."""

    msg_id: str
    type: str
    timestamp: str
    source: str
    payload: Dict[str, object] = field(default_factory=dict)
    seq: int = 0

    def get(self, key: str, default: Optional[object] = None) -> Optional[object]:
        return self.payload.get(key, default)

    def to_dict(self) -> Dict[str, object]:
        return {
            "msg_id": self.msg_id,
            "type": self.type,
            "timestamp": self.timestamp,
            "source": self.source,
            "payload": dict(self.payload),
            "seq": self.seq,
        }
