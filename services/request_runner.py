# -*- coding: utf-8 -*-
"""
Request runners.

A runner executes a blocking API call and hands its result (or exception)
back to the UI thread through callbacks. The threaded runner keeps the UI
responsive; the immediate runner is used for headless scripts and tests.
"""

from typing import Any, Callable, Set

from PyQt5.QtCore import QObject, QThread, pyqtSignal

from utils.logger import get_logger

logger = get_logger(__name__)

SuccessCallback = Callable[[Any], None]
ErrorCallback = Callable[[Exception], None]


class ApiWorker(QThread):
    """Background worker running one API call."""

    succeeded = pyqtSignal(object)  # result
    failed = pyqtSignal(object)  # exception

    def __init__(self, fn: Callable[[], Any], label: str = "request"):
        super().__init__()
        self.fn = fn
        self.label = label

    def run(self):
        """Run the call in background."""
        try:
            result = self.fn()
        except Exception as e:
            logger.debug(f"Worker '{self.label}' failed: {e}")
            self.failed.emit(e)
            return
        self.succeeded.emit(result)


class RequestRunner:
    """Interface for executing remote calls."""

    def run(self, fn: Callable[[], Any], on_success: SuccessCallback,
            on_error: ErrorCallback, label: str = "request"):
        raise NotImplementedError


class ImmediateRequestRunner(RequestRunner):
    """Runs the call inline on the calling thread."""

    def run(self, fn, on_success, on_error, label="request"):
        try:
            result = fn()
        except Exception as e:
            logger.debug(f"Request '{label}' failed: {e}")
            on_error(e)
            return
        on_success(result)


class ThreadedRequestRunner(QObject, RequestRunner):
    """Runs every call on its own QThread and reports back on the UI thread."""

    def __init__(self, parent: QObject = None):
        super().__init__(parent)
        self._workers: Set[ApiWorker] = set()

    def run(self, fn, on_success, on_error, label="request"):
        worker = ApiWorker(fn, label)
        worker.succeeded.connect(on_success)
        worker.failed.connect(on_error)
        worker.finished.connect(lambda w=worker: self._release(w))
        self._workers.add(worker)
        logger.debug(f"Starting worker '{label}'")
        worker.start()

    def _release(self, worker: ApiWorker):
        self._workers.discard(worker)
        worker.deleteLater()

    @property
    def active_count(self) -> int:
        return len(self._workers)

    def wait_all(self, msecs: int = 5000):
        """Block until all workers finished (used on shutdown)."""
        for worker in list(self._workers):
            worker.wait(msecs)
