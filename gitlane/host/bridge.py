"""
Host side of the graph panel.

GitHost owns the commit source and performs every repository call on a
worker thread. The panel talks to it only through wire messages
(post_message / message_posted), plus load() for the initial snapshot.
"""

import logging
from typing import Any

from PySide6.QtCore import QObject, QThread, Signal

from gitlane.git_backend.repository import CommitSource
from gitlane.graph.snapshot import GraphSnapshot
from gitlane.host.workers import CheckoutWorker, SnapshotWorker
from gitlane.sync.messages import (
    CheckoutRequest,
    CheckoutResult,
    MessageError,
    decode_message,
    encode_message,
)

logger = logging.getLogger(__name__)


class GitHost(QObject):
    """Runs repository operations for one panel, one checkout at a time."""

    snapshot_ready = Signal(object)  # GraphSnapshot
    load_failed = Signal(str)  # error message
    message_posted = Signal(dict)  # Wire message for the panel

    def __init__(self, source: CommitSource, parent: QObject | None = None) -> None:
        super().__init__(parent)
        self.source = source

        self._load_thread: QThread | None = None
        self._load_worker: SnapshotWorker | None = None
        self._checkout_thread: QThread | None = None
        self._checkout_worker: CheckoutWorker | None = None

    @property
    def checkout_running(self) -> bool:
        return self._checkout_thread is not None and self._checkout_thread.isRunning()

    @property
    def load_running(self) -> bool:
        return self._load_thread is not None and self._load_thread.isRunning()

    def load(self) -> None:
        """Load the graph snapshot in the background"""
        if self.load_running:
            logger.info("Snapshot load already running, ignoring load()")
            return

        self._load_thread = QThread()
        self._load_worker = SnapshotWorker(self.source)
        self._load_worker.moveToThread(self._load_thread)
        self._load_worker.finished.connect(self._on_snapshot_ready)
        self._load_worker.error.connect(self._on_load_failed)
        self._load_thread.started.connect(self._load_worker.run)
        self._load_thread.start()

    def _on_snapshot_ready(self, snapshot: GraphSnapshot) -> None:
        if self._load_thread:
            self._load_thread.quit()
        self.snapshot_ready.emit(snapshot)

    def _on_load_failed(self, error: str) -> None:
        if self._load_thread:
            self._load_thread.quit()
        self.load_failed.emit(error)

    def post_message(self, payload: dict[str, Any]) -> None:
        """Receive a wire message from the panel"""
        try:
            message = decode_message(payload)
        except MessageError as e:
            logger.warning("Dropping malformed panel message: %s", e)
            return

        if isinstance(message, CheckoutRequest):
            self._start_checkout(message.commit_hash)
        else:
            logger.warning("Unexpected %s from panel", type(message).__name__)

    def _start_checkout(self, commit_hash: str) -> None:
        if self.checkout_running:
            # Never run two mutating operations against the repository
            self._reply(
                CheckoutResult(
                    commit_hash=commit_hash, ok=False, reason="Another checkout is in progress"
                )
            )
            return

        self._checkout_thread = QThread()
        self._checkout_worker = CheckoutWorker(self.source, commit_hash)
        self._checkout_worker.moveToThread(self._checkout_thread)
        self._checkout_worker.finished.connect(self._on_checkout_finished)
        self._checkout_thread.started.connect(self._checkout_worker.run)
        self._checkout_thread.start()

    def _on_checkout_finished(self, result: CheckoutResult) -> None:
        if self._checkout_thread:
            self._checkout_thread.quit()
            self._checkout_thread.wait()
        self._reply(result)

    def _reply(self, result: CheckoutResult) -> None:
        self.message_posted.emit(encode_message(result))

    def shutdown(self) -> None:
        """Stop worker threads, waiting for a running checkout to finish"""
        for thread in (self._load_thread, self._checkout_thread):
            if thread is not None and thread.isRunning():
                thread.quit()
                thread.wait()
