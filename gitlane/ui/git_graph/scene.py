"""Git graph scene - places laid-out commits and patches the HEAD marker."""

import logging

from PySide6.QtCore import QPointF, Signal
from PySide6.QtGui import QFont
from PySide6.QtWidgets import QGraphicsScene, QGraphicsSimpleTextItem, QWidget

from gitlane.graph.snapshot import GraphSnapshot
from gitlane.graph.types import LayoutEntry
from gitlane.ui.git_graph.edges import CommitEdge
from gitlane.ui.git_graph.nodes import CommitDot, CommitItem, CommitLabel
from gitlane.ui.git_graph.types import (
    BACKGROUND_COLOR,
    DATE_COLOR,
    GraphGeometry,
    color_for,
    edge_lane_index,
)

logger = logging.getLogger(__name__)


class GitGraphScene(QGraphicsScene):
    """Scene containing the commit graph, its message column and date column.

    Built once from a snapshot. Afterwards only the HEAD decoration changes
    (move_head); positions are never recomputed.
    """

    commit_selected = Signal(str)  # oid - single click
    checkout_requested = Signal(str)  # oid - double click

    DATE_FONT_SIZE = 12

    def __init__(
        self,
        snapshot: GraphSnapshot,
        geometry: GraphGeometry | None = None,
        parent: QWidget | None = None,
    ) -> None:
        super().__init__(parent)
        self.snapshot = snapshot
        self.geometry = geometry or GraphGeometry()
        self.oid_to_entry: dict[str, LayoutEntry] = {e.hash: e for e in snapshot.layout}
        self.oid_to_items: dict[str, list[CommitItem]] = {}
        self.num_rows = snapshot.num_rows
        self.num_lanes = snapshot.num_lanes
        self._head = snapshot.head

        self.setBackgroundBrush(BACKGROUND_COLOR)
        self._build_scene()

    @property
    def head(self) -> str:
        return self._head

    def display_row(self, entry: LayoutEntry) -> int:
        """Row counted from the top of the scene (newest commit first)"""
        return self.num_rows - 1 - entry.row

    def node_pos(self, oid: str) -> QPointF:
        """Center of a commit's node"""
        entry = self.oid_to_entry[oid]
        return QPointF(
            self.geometry.node_x(entry.height), self.geometry.node_y(self.display_row(entry))
        )

    def _build_scene(self) -> None:
        """Build the graphics scene with nodes, edges, labels and dates."""
        self.clear()
        self.oid_to_items = {}
        geometry = self.geometry

        # Draw edges first (behind nodes)
        for entry in self.snapshot.layout:
            parent_pos = self.node_pos(entry.hash)
            for child_oid in entry.children:
                child = self.oid_to_entry[child_oid]
                color = color_for(edge_lane_index(entry.height, child.height))
                self.addItem(CommitEdge(self.node_pos(child_oid), parent_pos, color))

        message_x = geometry.message_x(self.num_lanes)
        date_font = QFont("sans-serif", self.DATE_FONT_SIZE)

        for entry in self.snapshot.layout:
            commit = self.snapshot.commits[entry.hash]
            pos = self.node_pos(entry.hash)

            dot = CommitDot(entry.hash, color_for(entry.height - 1), geometry.node_radius)
            dot.setPos(pos)

            label = CommitLabel(entry.hash, commit.message, geometry.text_width)
            label.setPos(message_x, pos.y())

            for item in (dot, label):
                item.set_head(entry.hash == self._head)
                item.clicked.connect(self.commit_selected.emit)
                item.double_clicked.connect(self.checkout_requested.emit)
                self.addItem(item)
            self.oid_to_items[entry.hash] = [dot, label]

            date = QGraphicsSimpleTextItem(commit.date)
            date.setFont(date_font)
            date.setBrush(DATE_COLOR)
            date.setPos(0, pos.y() - date.boundingRect().height() / 2)
            self.addItem(date)

        width = message_x + GraphGeometry.HEAD_TEXT_SHIFT + geometry.text_width
        height = geometry.base_y * 2 + max(self.num_rows - 1, 0) * geometry.row_height
        self.setSceneRect(0, 0, width, height)

    def move_head(self, old_head: str, new_head: str) -> None:
        """Move the HEAD decoration from old_head's items to new_head's items."""
        for item in self.oid_to_items.get(old_head, []):
            item.set_head(False)
        for item in self.oid_to_items.get(new_head, []):
            item.set_head(True)

        if new_head not in self.oid_to_items:
            logger.warning("HEAD %s is not part of the drawn graph", new_head[:7])
        self._head = new_head

    def decorated_commits(self) -> set[str]:
        """Commits whose items currently carry the HEAD decoration"""
        return {
            oid for oid, items in self.oid_to_items.items() if any(item.is_head for item in items)
        }
