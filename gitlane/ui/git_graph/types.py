"""Colors and geometry for git graph rendering."""

from dataclasses import dataclass
from typing import TYPE_CHECKING

from PySide6.QtGui import QColor

from gitlane.constants import (
    DEFAULT_BASE_X,
    DEFAULT_BASE_Y,
    DEFAULT_LANE_WIDTH,
    DEFAULT_NODE_RADIUS,
    DEFAULT_ROW_HEIGHT,
    DEFAULT_TEXT_WIDTH,
)

if TYPE_CHECKING:
    from gitlane.config.settings import Settings


# Colors for different lanes
LANE_COLORS = [
    QColor("navy"),
    QColor("firebrick"),
    QColor("darkgreen"),
    QColor("darkviolet"),
    QColor("darkgoldenrod"),
    QColor("teal"),
    QColor("#abdda4"),
    QColor("#66c2a5"),
    QColor("#c637e8"),
    QColor("#5e4fa2"),
]

HEAD_COLOR = QColor("lightseagreen")
HEAD_FILL = QColor("white")
HOVER_FILL = QColor("gold")
MESSAGE_COLOR = QColor("#cc6d2e")
DATE_COLOR = QColor("dimgray")
BACKGROUND_COLOR = QColor("#f8f9fa")


def color_for(lane_index: int) -> QColor:
    """Get color for a 0-based lane index."""
    return LANE_COLORS[lane_index % len(LANE_COLORS)]


def edge_lane_index(parent_height: int, child_height: int) -> int:
    """Lane index used to color the edge between two commits (the outer lane)."""
    return max(parent_height, child_height) - 1


@dataclass(frozen=True)
class GraphGeometry:
    """Scene placement of lanes, rows and the text columns."""

    base_x: int = DEFAULT_BASE_X
    base_y: int = DEFAULT_BASE_Y
    lane_width: int = DEFAULT_LANE_WIDTH
    row_height: int = DEFAULT_ROW_HEIGHT
    text_width: int = DEFAULT_TEXT_WIDTH
    node_radius: int = DEFAULT_NODE_RADIUS

    # HEAD badge and the outward shift of the HEAD commit's message
    HEAD_BADGE_WIDTH = 72
    HEAD_BADGE_HEIGHT = 30
    HEAD_TEXT_SHIFT = 80

    @classmethod
    def from_settings(cls, settings: "Settings") -> "GraphGeometry":
        return cls(
            base_x=settings.get_graph_metric("base_x", DEFAULT_BASE_X),
            base_y=settings.get_graph_metric("base_y", DEFAULT_BASE_Y),
            lane_width=settings.get_graph_metric("lane_width", DEFAULT_LANE_WIDTH),
            row_height=settings.get_graph_metric("row_height", DEFAULT_ROW_HEIGHT),
            text_width=settings.get_graph_metric("text_width", DEFAULT_TEXT_WIDTH),
            node_radius=settings.get_graph_metric("node_radius", DEFAULT_NODE_RADIUS),
        )

    def node_x(self, height: int) -> float:
        return self.base_x + (height - 1) * self.lane_width

    def node_y(self, display_row: int) -> float:
        return self.base_y + display_row * self.row_height

    def message_x(self, num_lanes: int) -> float:
        """Left edge of the message column, just past the widest lane"""
        return self.base_x + num_lanes * self.lane_width - 10
