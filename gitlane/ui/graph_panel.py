"""
Graph panel - one commit graph session bound to one repository.

The panel owns the session state: the checkout protocol (and through it the
HEAD pointer) and the current selection. Repository access happens only in
the host; the panel sends it wire messages.
"""

import logging

from PySide6.QtCore import Qt
from PySide6.QtGui import QCloseEvent
from PySide6.QtWidgets import QHBoxLayout, QLabel, QSplitter, QVBoxLayout, QWidget

from gitlane.config.settings import Settings
from gitlane.git_backend.repository import CommitSource
from gitlane.graph.snapshot import GraphSnapshot
from gitlane.graph.types import Commit
from gitlane.host.bridge import GitHost
from gitlane.sync.protocol import CheckoutSync
from gitlane.ui.commit_details import CommitDetailsWidget
from gitlane.ui.git_graph.scene import GitGraphScene
from gitlane.ui.git_graph.types import GraphGeometry
from gitlane.ui.git_graph.widget import GitGraphView
from gitlane.ui.notification import NotificationBar

logger = logging.getLogger(__name__)


class GraphPanel(QWidget):
    """Commit graph with a details pane and checkout on double click."""

    def __init__(
        self,
        host: GitHost,
        settings: Settings | None = None,
        parent: QWidget | None = None,
    ) -> None:
        super().__init__(parent)
        self.host = host
        self.geometry_config = (
            GraphGeometry.from_settings(settings) if settings else GraphGeometry()
        )

        self.snapshot: GraphSnapshot | None = None
        self.scene: GitGraphScene | None = None
        self.view: GitGraphView | None = None
        self.sync: CheckoutSync | None = None
        self.selection: Commit | None = None
        self._disposed = False

        self.setWindowTitle("Commit Graph")

        layout = QHBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        self._splitter = QSplitter(Qt.Orientation.Horizontal)
        layout.addWidget(self._splitter)

        # Left: notification bar + status line, graph view once loaded
        left = QWidget()
        self._left_layout = QVBoxLayout(left)
        self._left_layout.setContentsMargins(4, 4, 4, 4)
        self.notification = NotificationBar()
        self._left_layout.addWidget(self.notification)
        self.status_label = QLabel("Loading commit graph…")
        self.status_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self._left_layout.addWidget(self.status_label, 1)
        self._splitter.addWidget(left)

        # Right: details of the selected commit
        self.details = CommitDetailsWidget()
        self._splitter.addWidget(self.details)
        self._splitter.setSizes([700, 300])

        self.host.snapshot_ready.connect(self.show_snapshot)
        self.host.load_failed.connect(self._on_load_failed)

    @property
    def head(self) -> str | None:
        """The session's HEAD (None until the graph is loaded)"""
        return self.sync.head if self.sync else None

    @property
    def is_disposed(self) -> bool:
        return self._disposed

    def load(self) -> None:
        """Start loading the graph through the host"""
        self.host.load()

    def show_snapshot(self, snapshot: GraphSnapshot) -> None:
        """Paint the graph and start the checkout protocol."""
        if self._disposed or self.snapshot is not None:
            return

        self.snapshot = snapshot
        self.scene = GitGraphScene(snapshot, self.geometry_config)
        self.view = GitGraphView(self.scene)

        self.sync = CheckoutSync(snapshot.head, self)
        self.sync.message_out.connect(self.host.post_message)
        self.host.message_posted.connect(self.sync.receive)
        self.sync.head_moved.connect(self._on_head_moved)
        self.sync.checkout_failed.connect(self._on_checkout_failed)
        self.notification.dismissed.connect(self.sync.acknowledge)

        self.scene.commit_selected.connect(self.select_commit)
        self.scene.checkout_requested.connect(self.request_checkout)

        self.status_label.hide()
        self._left_layout.addWidget(self.view, 1)
        self.view.center_on_commit(snapshot.head)

    def _on_load_failed(self, error: str) -> None:
        """No graph is shown when the snapshot could not be built"""
        if self._disposed:
            return
        self.status_label.setText(f"Cannot show commit graph:\n{error}")

    def select_commit(self, oid: str) -> None:
        """Show the commit's metadata. The graph is not touched."""
        if self.snapshot is None or oid not in self.snapshot.commits:
            return
        self.selection = self.snapshot.commits[oid]
        self.details.show_commit(self.selection)

    def request_checkout(self, oid: str) -> bool:
        """Ask the host to check out oid (ignored while another checkout is pending)"""
        if self.sync is None:
            return False
        return self.sync.request_checkout(oid)

    def _on_head_moved(self, old_head: str, new_head: str) -> None:
        if self.scene is not None:
            self.scene.move_head(old_head, new_head)

    def _on_checkout_failed(self, commit_hash: str, reason: str) -> None:
        self.notification.show_message(f"Checkout of {commit_hash[:7]} failed: {reason}")

    def dispose(self) -> None:
        """Tear the session down; late host messages are dropped"""
        if self._disposed:
            return
        self._disposed = True
        if self.sync is not None:
            self.sync.dispose()
        self.host.shutdown()
        logger.debug("Graph panel disposed")

    def closeEvent(self, event: QCloseEvent) -> None:  # noqa: N802
        """Clean up worker threads on close."""
        self.dispose()
        super().closeEvent(event)


def open_panel(repo_path: str, settings: Settings | None = None) -> GraphPanel:
    """
    Open a graph panel on the repository containing repo_path.

    Raises:
        BackendUnavailable: repo_path is not inside a git repository
    """
    settings = settings or Settings()
    source = CommitSource(
        repo_path,
        marker_file=settings.get_marker_file(),
        follow_branches=settings.get_follow_branches(),
    )
    source.write_marker()

    host = GitHost(source)
    panel = GraphPanel(host, settings)
    host.setParent(panel)
    panel.load()
    return panel
