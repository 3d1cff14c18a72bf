"""Types shared by the commit source, the layout engine and the renderer."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class Commit:
    """An immutable commit as read from the repository."""

    hash: str
    timestamp: int
    author_name: str
    author_email: str
    message: str
    full_message: str = ""
    date: str = ""
    parents: tuple[str, ...] = ()


@dataclass(frozen=True)
class LayoutEntry:
    """Layout of a single commit: its chronological row and its lane."""

    hash: str
    children: tuple[str, ...]
    height: int
    row: int


@dataclass
class ChronologicalOrder:
    """
    Commits ordered by ascending timestamp.

    Ties keep the order the commits were supplied in. `rows` maps each hash
    to its index in `hashes`; both are built together and never change.
    """

    hashes: list[str] = field(default_factory=list)
    rows: dict[str, int] = field(default_factory=dict)

    @classmethod
    def from_commits(cls, commits: list[Commit]) -> "ChronologicalOrder":
        ordered = sorted(commits, key=lambda c: c.timestamp)
        hashes = [c.hash for c in ordered]
        return cls(hashes=hashes, rows={h: i for i, h in enumerate(hashes)})

    def __len__(self) -> int:
        return len(self.hashes)

    def row(self, commit_hash: str) -> int:
        return self.rows[commit_hash]
