"""
Background workers for the host.

These QObject workers are moved to a QThread so repository access never
blocks the panel:
- Loading the graph snapshot (commits, children, HEAD, layout)
- Checking out a commit
"""

import logging
from typing import TYPE_CHECKING

from PySide6.QtCore import QObject, Signal

from gitlane.git_backend.errors import CheckoutError, GitBackendError
from gitlane.graph.snapshot import load_snapshot
from gitlane.sync.messages import CheckoutResult

if TYPE_CHECKING:
    from gitlane.git_backend.repository import CommitSource

logger = logging.getLogger(__name__)


def perform_checkout(source: "CommitSource", commit_hash: str) -> CheckoutResult:
    """Run a checkout and describe the outcome as a result message."""
    try:
        source.checkout(commit_hash)
    except CheckoutError as e:
        return CheckoutResult(commit_hash=commit_hash, ok=False, reason=e.reason)
    return CheckoutResult(commit_hash=commit_hash, ok=True)


class SnapshotWorker(QObject):
    """Worker for loading the graph snapshot in background"""

    finished = Signal(object)  # GraphSnapshot
    error = Signal(str)

    def __init__(self, source: "CommitSource") -> None:
        super().__init__()
        self.source = source

    def run(self) -> None:
        """Load and lay out the history"""
        try:
            snapshot = load_snapshot(self.source)
        except GitBackendError as e:
            logger.error("Loading commit graph failed: %s", e)
            self.error.emit(str(e))
            return
        self.finished.emit(snapshot)


class CheckoutWorker(QObject):
    """Worker for checking out one commit in background"""

    finished = Signal(object)  # CheckoutResult

    def __init__(self, source: "CommitSource", commit_hash: str) -> None:
        super().__init__()
        self.source = source
        self.commit_hash = commit_hash

    def run(self) -> None:
        """Perform the checkout"""
        try:
            result = perform_checkout(self.source, self.commit_hash)
        except Exception as e:
            # Anything libgit2 throws outside CheckoutError still has to
            # produce a result, or the panel would stay pending forever
            logger.exception("Unexpected error checking out %s", self.commit_hash[:7])
            result = CheckoutResult(commit_hash=self.commit_hash, ok=False, reason=str(e))
        self.finished.emit(result)
