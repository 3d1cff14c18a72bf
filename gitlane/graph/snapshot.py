"""Complete, immutable graph data for one panel session."""

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from gitlane.git_backend.errors import QueryFailed
from gitlane.graph.layout import compute_layout, lane_count
from gitlane.graph.types import Commit, LayoutEntry

if TYPE_CHECKING:
    from gitlane.git_backend.repository import CommitSource

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GraphSnapshot:
    """Commits, their layout and the HEAD at load time."""

    repo_path: str
    commits: dict[str, Commit]
    layout: list[LayoutEntry]
    head: str

    @property
    def num_lanes(self) -> int:
        return lane_count(self.layout)

    @property
    def num_rows(self) -> int:
        return len(self.layout)


def load_snapshot(source: "CommitSource") -> GraphSnapshot:
    """
    Query the repository and lay out its history.

    Either the whole snapshot is built or QueryFailed is raised; there is no
    partial result.
    """
    commits = source.list_commits()
    if not commits:
        raise QueryFailed("Repository has no commits")
    children = source.list_children(commits)
    head = source.current_head()

    layout = compute_layout(commits, children)
    by_hash = {c.hash: c for c in commits}
    if head not in by_hash:
        raise QueryFailed(f"HEAD {head[:7]} is not among the listed commits")

    logger.info(
        "Loaded %d commits on %d lanes from %s",
        len(layout),
        lane_count(layout),
        source.path,
    )
    return GraphSnapshot(repo_path=source.path, commits=by_hash, layout=layout, head=head)
