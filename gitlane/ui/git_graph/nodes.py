"""Commit items - the node circle and the message label for a single commit."""

from PySide6.QtCore import QRectF, Qt, Signal
from PySide6.QtGui import QColor, QFont, QFontMetrics, QPainter, QPen
from PySide6.QtWidgets import (
    QGraphicsItem,
    QGraphicsObject,
    QGraphicsSceneHoverEvent,
    QGraphicsSceneMouseEvent,
    QStyleOptionGraphicsItem,
    QWidget,
)

from gitlane.ui.git_graph.types import (
    HEAD_COLOR,
    HEAD_FILL,
    HOVER_FILL,
    MESSAGE_COLOR,
    GraphGeometry,
)


class CommitItem(QGraphicsObject):
    """
    Base class for items tagged with a commit hash.

    A single click emits `clicked`, a double click emits `double_clicked`.
    Each mouse event produces at most one of the two.
    """

    clicked = Signal(str)  # oid
    double_clicked = Signal(str)  # oid

    def __init__(self, oid: str, parent: QGraphicsItem | None = None) -> None:
        super().__init__(parent)
        self.oid = oid
        self._is_head = False
        self._hovered = False
        self.setAcceptHoverEvents(True)
        self.setCursor(Qt.CursorShape.PointingHandCursor)

    @property
    def is_head(self) -> bool:
        return self._is_head

    def set_head(self, is_head: bool) -> None:
        """Apply or remove the HEAD decoration."""
        if is_head != self._is_head:
            self.prepareGeometryChange()
            self._is_head = is_head
            self.update()

    def hoverEnterEvent(self, event: QGraphicsSceneHoverEvent) -> None:  # noqa: N802
        self._hovered = True
        self.update()

    def hoverLeaveEvent(self, event: QGraphicsSceneHoverEvent) -> None:  # noqa: N802
        self._hovered = False
        self.update()

    def mousePressEvent(self, event: QGraphicsSceneMouseEvent) -> None:  # noqa: N802
        """Accept left presses so the release comes back to this item."""
        if event.button() == Qt.MouseButton.LeftButton:
            event.accept()
            return
        super().mousePressEvent(event)

    def mouseReleaseEvent(self, event: QGraphicsSceneMouseEvent) -> None:  # noqa: N802
        if event.button() == Qt.MouseButton.LeftButton and self.contains(event.pos()):
            self.clicked.emit(self.oid)
            event.accept()
            return
        super().mouseReleaseEvent(event)

    def mouseDoubleClickEvent(self, event: QGraphicsSceneMouseEvent) -> None:  # noqa: N802
        if event.button() == Qt.MouseButton.LeftButton:
            self.double_clicked.emit(self.oid)
            event.accept()
            return
        super().mouseDoubleClickEvent(event)


class CommitDot(CommitItem):
    """The commit node: a circle in the commit's lane color, white when HEAD."""

    STROKE_WIDTH = 4

    def __init__(
        self,
        oid: str,
        color: QColor,
        radius: float,
        parent: QGraphicsItem | None = None,
    ) -> None:
        super().__init__(oid, parent)
        self.color = color
        self.radius = radius

    def boundingRect(self) -> QRectF:  # noqa: N802
        extent = self.radius + self.STROKE_WIDTH / 2
        return QRectF(-extent, -extent, 2 * extent, 2 * extent)

    def fill_color(self) -> QColor:
        if self._hovered:
            return HOVER_FILL
        return HEAD_FILL if self._is_head else self.color

    def paint(
        self,
        painter: QPainter,
        option: QStyleOptionGraphicsItem,
        widget: QWidget | None = None,
    ) -> None:
        painter.setRenderHint(QPainter.RenderHint.Antialiasing)
        painter.setPen(QPen(self.color, self.STROKE_WIDTH))
        painter.setBrush(self.fill_color())
        painter.drawEllipse(QRectF(-self.radius, -self.radius, 2 * self.radius, 2 * self.radius))


class CommitLabel(CommitItem):
    """
    The commit message in the message column.

    For HEAD, a bordered "HEAD" badge is drawn at the start of the column and
    the message is shifted right past it.
    """

    FONT_SIZE = 14

    def __init__(
        self,
        oid: str,
        message: str,
        text_width: float,
        parent: QGraphicsItem | None = None,
    ) -> None:
        super().__init__(oid, parent)
        self.message = message
        self.text_width = text_width
        self._font = QFont("sans-serif", self.FONT_SIZE)
        self._font.setBold(True)

    def text_offset(self) -> float:
        """x of the message text relative to the column start"""
        return GraphGeometry.HEAD_TEXT_SHIFT if self._is_head else 0.0

    def boundingRect(self) -> QRectF:  # noqa: N802
        height = GraphGeometry.HEAD_BADGE_HEIGHT
        return QRectF(0, -height / 2, GraphGeometry.HEAD_TEXT_SHIFT + self.text_width, height)

    def paint(
        self,
        painter: QPainter,
        option: QStyleOptionGraphicsItem,
        widget: QWidget | None = None,
    ) -> None:
        painter.setRenderHint(QPainter.RenderHint.Antialiasing)
        height = GraphGeometry.HEAD_BADGE_HEIGHT

        if self._is_head:
            badge = QRectF(0, -height / 2, GraphGeometry.HEAD_BADGE_WIDTH, height)
            painter.setBrush(Qt.BrushStyle.NoBrush)
            painter.setPen(QPen(HEAD_COLOR, 2))
            painter.drawRoundedRect(badge, 5, 5)
            painter.setFont(self._font)
            painter.drawText(badge, Qt.AlignmentFlag.AlignCenter, "HEAD")

        painter.setFont(self._font)
        painter.setPen(HOVER_FILL if self._hovered else MESSAGE_COLOR)
        text = QFontMetrics(self._font).elidedText(
            self.message, Qt.TextElideMode.ElideRight, int(self.text_width)
        )
        text_rect = QRectF(self.text_offset(), -height / 2, self.text_width, height)
        align = Qt.AlignmentFlag.AlignLeft | Qt.AlignmentFlag.AlignVCenter
        painter.drawText(text_rect, align, text)
