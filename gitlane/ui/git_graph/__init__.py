"""Git graph visualization components."""

from gitlane.ui.git_graph.scene import GitGraphScene
from gitlane.ui.git_graph.types import GraphGeometry, color_for
from gitlane.ui.git_graph.widget import GitGraphView

__all__ = ["GitGraphScene", "GitGraphView", "GraphGeometry", "color_for"]
