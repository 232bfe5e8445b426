# -*- coding: utf-8 -*-
"""Qt bridges that deliver background results on the UI thread."""

from __future__ import annotations

import logging
from concurrent.futures import Future
from pathlib import Path
from typing import Callable

from PyQt6.QtCore import QObject, Qt, pyqtSignal

from socialstudio.core.capabilities import CapabilityAggregator
from socialstudio.errors import ExportCancelledError, describe_error
from socialstudio.models.composition import Composition
from socialstudio.pipeline.exporter import CompositionExporter

logger = logging.getLogger(__name__)


class FutureWatcher(QObject):
    """Re-emit a future's outcome on the thread that owns the watcher.

    ``finished`` or ``failed`` fires exactly once, even if the future was
    already done when the watcher was created.
    """

    finished = pyqtSignal(object)
    failed = pyqtSignal(str)
    _resolved = pyqtSignal(object)

    def __init__(self, future: Future, parent: QObject | None = None) -> None:
        super().__init__(parent)
        self.future = future
        self.delivered = False
        self._resolved.connect(self._deliver, Qt.ConnectionType.QueuedConnection)
        future.add_done_callback(self._resolved.emit)

    def _deliver(self, future: Future) -> None:
        if self.delivered:
            return
        self.delivered = True
        if future.cancelled():
            self.failed.emit(describe_error(ExportCancelledError()))
            return
        exc = future.exception()
        if exc is not None:
            logger.debug("FutureWatcher: delivering failure %r", exc)
            self.failed.emit(describe_error(exc))
        else:
            self.finished.emit(future.result())


class UiDispatcher(QObject):
    """Run callables on the thread that owns this object.

    Hand an instance to ``Session(dispatcher=...)`` so session state is
    only changed on the Qt thread.
    """

    _call = pyqtSignal(object)

    def __init__(self, parent: QObject | None = None) -> None:
        super().__init__(parent)
        self._call.connect(self._run, Qt.ConnectionType.QueuedConnection)

    def __call__(self, func: Callable[[], None]) -> None:
        self._call.emit(func)

    def _run(self, func: Callable[[], None]) -> None:
        try:
            func()
        except Exception:
            logger.exception("UiDispatcher: queued update failed")


class ExportWorker(QObject):
    """Blocking export meant to be moved onto a QThread."""

    finished = pyqtSignal(object)
    error = pyqtSignal(str)

    def __init__(self, exporter: CompositionExporter, composition: Composition, output_path: Path, faststart: bool = False) -> None:
        super().__init__()
        self.exporter = exporter
        self.composition = composition
        self.output_path = output_path
        self.faststart = faststart

    def run(self) -> None:
        try:
            logger.info("ExportWorker: exporting to %s", self.output_path)
            result = self.exporter.run(self.composition, self.output_path, faststart=self.faststart)
            self.finished.emit(result)
        except Exception as e:
            logger.exception("ExportWorker: export failed")
            self.error.emit(describe_error(e))


class CapabilityRefreshWorker(QObject):
    """Refresh the permission dashboard and report each status by name."""

    status_changed = pyqtSignal(str, str)
    finished = pyqtSignal(dict)

    def __init__(self, aggregator: CapabilityAggregator) -> None:
        super().__init__()
        self.aggregator = aggregator

    def run(self) -> None:
        statuses = self.aggregator.refresh()
        settings: dict[str, str] = {}
        for capability, entry in statuses.items():
            settings[capability.value] = entry.status.value
            self.status_changed.emit(capability.value, entry.status.value)
        self.finished.emit(settings)
