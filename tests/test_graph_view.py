"""Tests for the graph view: mouse interaction and zoom."""

import pytest
from PySide6.QtCore import QPoint, QPointF, Qt
from PySide6.QtGui import QWheelEvent
from PySide6.QtTest import QTest

from gitlane.graph.layout import compute_layout
from gitlane.graph.snapshot import GraphSnapshot
from gitlane.ui.git_graph.scene import GitGraphScene
from gitlane.ui.git_graph.widget import GitGraphView

MERGE = {"A": (1, []), "B": (2, ["A"]), "C": (3, ["A"]), "D": (4, ["B", "C"])}


@pytest.fixture
def view(qapp, build_graph):
    commits, children = build_graph(MERGE)
    snapshot = GraphSnapshot(
        repo_path="/tmp/repo",
        commits={c.hash: c for c in commits},
        layout=compute_layout(commits, children),
        head="D",
    )
    widget = GitGraphView(GitGraphScene(snapshot))
    widget.resize(1200, 800)
    widget.show()
    qapp.processEvents()
    yield widget
    widget.close()


def record(scene) -> tuple[list[str], list[str]]:
    selected: list[str] = []
    requested: list[str] = []
    scene.commit_selected.connect(selected.append)
    scene.checkout_requested.connect(requested.append)
    return selected, requested


def wheel(view: GitGraphView, delta: int, modifiers=Qt.KeyboardModifier.ControlModifier) -> None:
    center = QPointF(view.viewport().rect().center())
    event = QWheelEvent(
        center,
        QPointF(view.viewport().mapToGlobal(center.toPoint())),
        QPoint(0, 0),
        QPoint(0, delta),
        Qt.MouseButton.NoButton,
        modifiers,
        Qt.ScrollPhase.NoScrollPhase,
        False,
    )
    view.wheelEvent(event)


class TestMouse:
    """Real mouse events on the viewport reach the commit items."""

    def node_point(self, view: GitGraphView, oid: str) -> QPoint:
        return view.mapFromScene(view.scene().node_pos(oid))

    def test_click_selects(self, view):
        selected, requested = record(view.scene())

        QTest.mouseClick(
            view.viewport(),
            Qt.MouseButton.LeftButton,
            Qt.KeyboardModifier.NoModifier,
            self.node_point(view, "A"),
        )

        assert selected == ["A"]
        assert requested == []

    def test_double_click_requests_checkout(self, view):
        selected, requested = record(view.scene())

        QTest.mouseDClick(
            view.viewport(),
            Qt.MouseButton.LeftButton,
            Qt.KeyboardModifier.NoModifier,
            self.node_point(view, "A"),
        )

        assert requested == ["A"]
        assert selected == []

    def test_click_on_empty_space_selects_nothing(self, view):
        selected, requested = record(view.scene())

        QTest.mouseClick(
            view.viewport(),
            Qt.MouseButton.LeftButton,
            Qt.KeyboardModifier.NoModifier,
            QPoint(5, 5),
        )

        assert selected == []
        assert requested == []


class TestZoom:
    def test_ctrl_wheel_zooms_in_and_out(self, view):
        wheel(view, 120)
        assert view.zoom == pytest.approx(GitGraphView.ZOOM_STEP)
        wheel(view, -120)
        assert view.zoom == pytest.approx(1.0)

    def test_zoom_clamped(self, view):
        for _ in range(100):
            wheel(view, 120)
        assert view.zoom == pytest.approx(GitGraphView.MAX_ZOOM)
        assert view.transform().m11() == pytest.approx(GitGraphView.MAX_ZOOM)

        for _ in range(200):
            wheel(view, -120)
        assert view.zoom == pytest.approx(GitGraphView.MIN_ZOOM)

    def test_plain_wheel_does_not_zoom(self, view):
        wheel(view, 120, Qt.KeyboardModifier.NoModifier)
        assert view.zoom == 1.0
