"""Qt request runner: executes client calls on background threads."""

from PySide6.QtCore import QObject, QThread, QTimer, Signal

from .runner import run_request


class RequestWorker(QThread):
    """Background worker for a single blocking client call."""

    completed = Signal(object, object)  # (RequestWorker, RequestOutcome)

    def __init__(self, func, callback, parent=None):
        super().__init__(parent)
        self.func = func
        self.callback = callback

    def run(self):
        self.completed.emit(self, run_request(self.func))


class QtRequestRunner(QObject):
    """RequestRunner backed by QThread workers.

    The runner lives on the GUI thread and its slots are bound methods, so
    worker signals are queued and callbacks run on the event loop.
    """

    def __init__(self, parent=None):
        super().__init__(parent)
        self._workers = set()

    def submit(self, func, callback):
        worker = RequestWorker(func, callback)
        self._workers.add(worker)
        worker.completed.connect(self._on_completed)
        worker.finished.connect(self._on_finished)
        worker.start()

    def _on_completed(self, worker, outcome):
        worker.callback(outcome)

    def _on_finished(self):
        worker = self.sender()
        self._workers.discard(worker)
        worker.deleteLater()

    @property
    def in_flight(self) -> int:
        return len(self._workers)


def qt_scheduler(delay_ms: int, callback) -> None:
    """Scheduler for the dashboard's status fades."""
    QTimer.singleShot(delay_ms, callback)
