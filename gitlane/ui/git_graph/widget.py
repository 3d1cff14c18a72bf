"""Git graph view widget - pannable, zoomable view of the commit graph."""

from PySide6.QtCore import Qt
from PySide6.QtGui import QPainter, QWheelEvent
from PySide6.QtWidgets import QGraphicsView, QWidget

from gitlane.ui.git_graph.scene import GitGraphScene


class GitGraphView(QGraphicsView):
    """Pannable and zoomable view of the git graph."""

    MIN_ZOOM = 0.2
    MAX_ZOOM = 2.0
    ZOOM_STEP = 1.1

    def __init__(self, scene: GitGraphScene, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self._scene = scene
        self.setScene(scene)

        # Setup view
        self.setRenderHint(QPainter.RenderHint.Antialiasing)
        self.setRenderHint(QPainter.RenderHint.SmoothPixmapTransform)
        self.setViewportUpdateMode(QGraphicsView.ViewportUpdateMode.FullViewportUpdate)
        self.setTransformationAnchor(QGraphicsView.ViewportAnchor.AnchorUnderMouse)
        self.setResizeAnchor(QGraphicsView.ViewportAnchor.AnchorViewCenter)

        # Enable panning with left-click drag on empty space
        self.setDragMode(QGraphicsView.DragMode.ScrollHandDrag)
        self.setHorizontalScrollBarPolicy(Qt.ScrollBarPolicy.ScrollBarAsNeeded)
        self.setVerticalScrollBarPolicy(Qt.ScrollBarPolicy.ScrollBarAsNeeded)

        self._zoom = 1.0

    @property
    def zoom(self) -> float:
        return self._zoom

    def _apply_zoom(self, new_zoom: float) -> None:
        """Apply zoom level, clamped to min/max."""
        new_zoom = max(self.MIN_ZOOM, min(self.MAX_ZOOM, new_zoom))
        if new_zoom != self._zoom:
            factor = new_zoom / self._zoom
            self._zoom = new_zoom
            self.scale(factor, factor)

    def wheelEvent(self, event: QWheelEvent) -> None:  # noqa: N802
        """Handle mouse wheel - Ctrl+wheel zooms, plain wheel scrolls."""
        if event.modifiers() & Qt.KeyboardModifier.ControlModifier:
            delta = event.angleDelta().y()
            if delta > 0:
                self._apply_zoom(self._zoom * self.ZOOM_STEP)
            elif delta < 0:
                self._apply_zoom(self._zoom / self.ZOOM_STEP)
            event.accept()
        else:
            super().wheelEvent(event)

    def center_on_commit(self, oid: str) -> None:
        """Scroll so the given commit's node is centered."""
        if oid in self._scene.oid_to_entry:
            self.centerOn(self._scene.node_pos(oid))

