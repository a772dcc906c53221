from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, Optional

LOGGER_NAME = "workspace_panel"
LOG_FORMAT = "ts=%(asctime)s level=%(levelname)s logger=%(name)s msg=%(message)s"

_CONFIGURED = False
_HANDLER: Optional[logging.Handler] = None


def configure_logging(
    base_dir: Optional[Path] = None,
    *,
    level: int = logging.INFO,
) -> Dict[str, str]:
    """Attach the kv file handler to the package logger (once per process)."""
    global _CONFIGURED, _HANDLER
    root = base_dir or Path("data/roaming")
    log_dir = root / "logs"
    log_dir.mkdir(parents=True, exist_ok=True)
    log_path = log_dir / "workspace_panel.log"

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)
    logger.propagate = False

    if not _CONFIGURED:
        handler = logging.FileHandler(log_path, encoding="utf-8")
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
        _HANDLER = handler
        _CONFIGURED = True

    return {
        "log_path": str(log_path),
        "format": "kv",
        "handlers": "file",
        "logger_name": LOGGER_NAME,
    }


def reset_logging() -> None:
    global _CONFIGURED, _HANDLER
    logger = logging.getLogger(LOGGER_NAME)
    if _HANDLER is not None:
        logger.removeHandler(_HANDLER)
        _HANDLER.close()
    _HANDLER = None
    _CONFIGURED = False


def get_logger(name: Optional[str] = None) -> logging.Logger:
    if not name:
        return logging.getLogger(LOGGER_NAME)
    return logging.getLogger(f"{LOGGER_NAME}.{name}")
