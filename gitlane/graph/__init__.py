"""Commit graph model and lane layout (Qt-free)."""

from gitlane.graph.layout import assign_heights, compute_layout, lane_count
from gitlane.graph.snapshot import GraphSnapshot, load_snapshot
from gitlane.graph.types import ChronologicalOrder, Commit, LayoutEntry

__all__ = [
    "ChronologicalOrder",
    "Commit",
    "GraphSnapshot",
    "LayoutEntry",
    "assign_heights",
    "compute_layout",
    "lane_count",
    "load_snapshot",
]
