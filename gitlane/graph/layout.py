"""
Lane layout for the commit graph.

Rows are chronological (oldest commit = row 0). Lanes ("heights") are assigned
by a depth-first walk along child edges that collects commits into runs: a
run grows until it reaches a branch tip or a commit that already has a lane,
and is then flushed onto the lowest lane that is free across every row the
run spans. Lanes are reused by runs whose row ranges do not overlap, which
keeps the graph narrow.
"""

from collections.abc import Mapping, Sequence
from dataclasses import dataclass

from gitlane.graph.types import ChronologicalOrder, Commit, LayoutEntry


@dataclass
class _RunFrame:
    """One pending DFS branch: the commit to visit and the run leading to it.

    `anchored` means run[0] is a branch point shared with an earlier run; it
    keeps the lane it already has.
    """

    commit: str
    run: list[str]
    anchored: bool


class LaneAllocator:
    """Assigns a lane to every commit of one snapshot."""

    def __init__(self, order: ChronologicalOrder, children: Mapping[str, Sequence[str]]) -> None:
        self.order = order
        # Drop edges to commits outside the snapshot
        self.children: dict[str, list[str]] = {
            h: [c for c in children.get(h, ()) if c in order.rows] for h in order.hashes
        }
        self.heights: list[int] = [0] * len(order)

    def _height(self, commit_hash: str) -> int:
        return self.heights[self.order.row(commit_hash)]

    def run(self) -> dict[str, int]:
        """Walk from the oldest commit, then from every other root, and return the lanes."""
        if not self.order.hashes:
            return {}

        self._walk(self.order.hashes[0], anchored=True)
        # The oldest commit always sits in the first lane
        self.heights[0] = 1

        # Separate histories (other roots, isolated commits) are unreachable
        # from the oldest commit; each gets its own walk.
        has_parent = {c for kids in self.children.values() for c in kids}
        for commit_hash in self.order.hashes[1:]:
            if commit_hash not in has_parent and self._height(commit_hash) == 0:
                self._walk(commit_hash, anchored=False)

        return {h: self.heights[row] for row, h in enumerate(self.order.hashes)}

    def _walk(self, start: str, anchored: bool) -> None:
        stack = [_RunFrame(start, [], anchored)]

        while stack:
            frame = stack.pop()
            commit_hash = frame.commit
            run = [*frame.run, commit_hash]
            kids = self.children[commit_hash]

            if not kids or self._height(commit_hash) != 0:
                self._flush(run, frame.anchored)
                continue

            # The first child continues this run; every other child starts
            # a new run at this commit. Pushed in reverse so the first child
            # is explored (and flushed) before its siblings.
            frames = [_RunFrame(kids[0], run, frame.anchored)]
            frames.extend(_RunFrame(kid, [commit_hash], True) for kid in kids[1:])
            stack.extend(reversed(frames))

    def _flush(self, run: list[str], anchored: bool) -> None:
        """Put a finished run on the first lane free across all rows it spans."""
        rows = [self.order.row(h) for h in run]
        lo, hi = min(rows), max(rows)
        new_height = 1 + max(self.heights[lo : hi + 1])

        members = run[1:] if anchored else run
        for commit_hash in members:
            row = self.order.row(commit_hash)
            # A merge commit keeps the lane of the first run that reached it
            if self.heights[row] == 0:
                self.heights[row] = new_height


def assign_heights(
    order: ChronologicalOrder, children: Mapping[str, Sequence[str]]
) -> dict[str, int]:
    """Return hash -> lane for every commit in `order`."""
    return LaneAllocator(order, children).run()


def compute_layout(
    commits: list[Commit], children: Mapping[str, Sequence[str]]
) -> list[LayoutEntry]:
    """Lay out a complete snapshot. Entries come back in chronological order."""
    order = ChronologicalOrder.from_commits(commits)
    heights = assign_heights(order, children)
    return [
        LayoutEntry(
            hash=commit_hash,
            children=tuple(c for c in children.get(commit_hash, ()) if c in order.rows),
            height=heights[commit_hash],
            row=row,
        )
        for row, commit_hash in enumerate(order.hashes)
    ]


def lane_count(layout: list[LayoutEntry]) -> int:
    """Number of lanes the layout occupies (at least 1)."""
    return max((entry.height for entry in layout), default=1)
