"""Edge rendering for git graph - connections between commits."""

from PySide6.QtCore import QPointF, Qt
from PySide6.QtGui import QColor, QPainterPath, QPen
from PySide6.QtWidgets import QGraphicsItem, QGraphicsPathItem


class CommitEdge(QGraphicsPathItem):
    """
    A line connecting a child commit to its parent.

    COORDINATE SYSTEM NOTE:
    Newer commits are at the TOP of the scene (lower y), so the path runs
    DOWN from child (start) to parent (end).

    When the two commits are on different lanes the path stays in the child's
    lane and only turns into the parent's lane just above the parent.
    """

    CORNER_RADIUS = 15
    WIDTH = 5

    def __init__(
        self,
        start: QPointF,
        end: QPointF,
        color: QColor,
        parent: QGraphicsItem | None = None,
    ) -> None:
        super().__init__(parent)
        self.start = start
        self.end = end
        self.color = color
        self._build_path()
        self._setup_style()

    def _build_path(self) -> None:
        """Build an axis-aligned path with two rounded corners.

        1. Vertical line DOWN from start to (start.x, end.y - 2r)
        2. Curve toward the parent's lane
        3. Horizontal line at end.y - r
        4. Curve DOWN into the parent
        """
        path = QPainterPath()
        path.moveTo(self.start)

        dx = self.end.x() - self.start.x()
        # Keep the corners inside the vertical gap between the two commits
        r = min(self.CORNER_RADIUS, abs(dx) / 2, (self.end.y() - self.start.y()) / 2)

        if abs(dx) < 1 or r <= 0:
            path.lineTo(self.end)
        else:
            sign = 1 if dx > 0 else -1
            path.lineTo(self.start.x(), self.end.y() - 2 * r)
            path.quadTo(
                QPointF(self.start.x(), self.end.y() - r),
                QPointF(self.start.x() + sign * r, self.end.y() - r),
            )
            path.lineTo(self.end.x() - sign * r, self.end.y() - r)
            path.quadTo(QPointF(self.end.x(), self.end.y() - r), self.end)

        self.setPath(path)

    def _setup_style(self) -> None:
        """Setup pen style."""
        pen = QPen(self.color, self.WIDTH)
        pen.setCapStyle(Qt.PenCapStyle.RoundCap)
        pen.setJoinStyle(Qt.PenJoinStyle.RoundJoin)
        self.setPen(pen)
        self.setBrush(Qt.BrushStyle.NoBrush)
        self.setOpacity(0.9)

        # Draw behind commit nodes
        self.setZValue(-1)
