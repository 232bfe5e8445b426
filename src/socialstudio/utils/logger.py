# -*- coding: utf-8 -*-
"""Root logging setup: console plus one log file per run."""

from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path

LOG_FORMAT = "%(asctime)s [%(threadName)s] %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%dT%H:%M:%S"

# Pillow logs every PNG chunk at DEBUG.
NOISY_LOGGERS = ("PIL",)


def setup_session_logging(base_dir: str | Path | None, app_name: str, level: int = logging.INFO) -> Path | None:
    """Configure the root logger once per process.

    Returns the path of the run's log file, or None when logging to the
    console only (``base_dir`` is None or the file could not be opened).
    """
    root = logging.getLogger()
    if getattr(root, "_socialstudio_logging_configured", False):
        root.setLevel(level)
        return getattr(root, "_socialstudio_session_log", None)

    root.setLevel(level)
    # Exports and capability queries finish on pool threads, so the thread name is part of every line.
    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)

    if not any(type(handler) is logging.StreamHandler for handler in root.handlers):
        stream_handler = logging.StreamHandler()
        stream_handler.setFormatter(formatter)
        root.addHandler(stream_handler)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.INFO))

    session_log_path: Path | None = None
    if base_dir is not None:
        logs_dir = Path(base_dir) / "logs"
        safe_app_name = app_name.lower().replace(" ", "-")
        session_log_path = logs_dir / f"{safe_app_name}-{datetime.now():%Y%m%d-%H%M%S}.log"
        try:
            logs_dir.mkdir(parents=True, exist_ok=True)
            file_handler = logging.FileHandler(session_log_path, encoding="utf-8")
            file_handler.setFormatter(formatter)
            root.addHandler(file_handler)
            root.info("Session log file established: %s", session_log_path)
        except OSError as e:
            root.error("Failed to establish session log file: %s", e)
            session_log_path = None

    root._socialstudio_logging_configured = True  # type: ignore[attr-defined]
    root._socialstudio_session_log = session_log_path  # type: ignore[attr-defined]
    return session_log_path
