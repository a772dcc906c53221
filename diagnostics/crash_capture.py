from __future__ import annotations

import json
import sys
import time
from pathlib import Path
from types import TracebackType
from typing import Any, Dict, Optional, Type

from .logging_setup import get_logger

logger = get_logger(__name__)


def get_crash_dir(base_dir: Optional[Path] = None) -> Path:
    root = base_dir or Path("data/roaming")
    crash_dir = root / "crashes"
    crash_dir.mkdir(parents=True, exist_ok=True)
    return crash_dir


def write_crash_marker(
    exc: BaseException,
    context: Dict[str, Any] | None = None,
    *,
    base_dir: Optional[Path] = None,
) -> Path:
    crash_dir = get_crash_dir(base_dir)
    payload = {
        "ts": time.time(),
        "exception_type": type(exc).__name__,
        "message": str(exc),
        "context": context or {},
    }
    path = crash_dir / f"crash_marker_{int(time.time() * 1000)}.json"
    path.write_text(json.dumps(payload, indent=2), encoding="utf-8")
    return path


def install_excepthook(base_dir: Optional[Path] = None) -> None:
    """Log uncaught exceptions and leave a crash marker behind."""
    previous = sys.excepthook

    def _hook(
        exc_type: Type[BaseException],
        exc: BaseException,
        tb: Optional[TracebackType],
    ) -> None:
        logger.error("uncaught exception", exc_info=(exc_type, exc, tb))
        try:
            write_crash_marker(exc, {"where": "excepthook"}, base_dir=base_dir)
        except OSError:
            pass
        previous(exc_type, exc, tb)

    sys.excepthook = _hook
