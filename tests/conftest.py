"""Shared fixtures: offscreen Qt application and throwaway repositories."""

import os
import time
from collections.abc import Callable
from dataclasses import dataclass, field

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

import pygit2  # noqa: E402
import pytest  # noqa: E402
from PySide6.QtWidgets import QApplication  # noqa: E402

from gitlane.graph.types import Commit  # noqa: E402


@pytest.fixture(scope="session")
def qapp() -> QApplication:
    """One QApplication for the whole test session."""
    app = QApplication.instance()
    if app is None:
        app = QApplication([])
    return app  # type: ignore[return-value]


def wait_until(app: QApplication, predicate: Callable[[], bool], timeout: float = 10.0) -> bool:
    """Process Qt events until predicate() holds or the timeout expires."""
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        app.processEvents()
        if predicate():
            return True
        time.sleep(0.01)
    return predicate()


@pytest.fixture
def wait_for(qapp: QApplication) -> Callable[..., bool]:
    return lambda predicate, timeout=10.0: wait_until(qapp, predicate, timeout)


def make_commits(
    history: dict[str, tuple[int, list[str]]],
) -> tuple[list[Commit], dict[str, list[str]]]:
    """
    Build commits and the child relation from {hash: (timestamp, parents)}.

    Children are listed oldest first, like CommitSource.list_children().
    """
    commits = [
        Commit(
            hash=h,
            timestamp=ts,
            author_name="Test User",
            author_email="test@example.com",
            message=f"commit {h}",
            parents=tuple(parents),
        )
        for h, (ts, parents) in history.items()
    ]
    children: dict[str, list[str]] = {h: [] for h in history}
    for h, (_, parents) in sorted(history.items(), key=lambda item: item[1][0]):
        for parent in parents:
            children[parent].append(h)
    return commits, children


@pytest.fixture
def build_graph() -> Callable[..., tuple[list[Commit], dict[str, list[str]]]]:
    return make_commits


@dataclass
class HistoryRepo:
    """A repository on disk and the hashes of its named commits."""

    path: str
    repo: pygit2.Repository
    oids: dict[str, str] = field(default_factory=dict)


def _commit(
    repo: pygit2.Repository,
    message: str,
    parents: list[str],
    commit_time: int,
    files: dict[str, str],
) -> str:
    signature = pygit2.Signature("Test User", "test@example.com", commit_time, 0)
    builder = repo.TreeBuilder()
    for name, content in files.items():
        builder.insert(name, repo.create_blob(content.encode("utf-8")), pygit2.enums.FileMode.BLOB)
    tree = builder.write()
    parent_ids = [pygit2.Oid(hex=p) for p in parents]
    return str(repo.create_commit(None, signature, signature, message, tree, parent_ids))


@pytest.fixture
def history_repo(tmp_path) -> HistoryRepo:
    """
    Fork-then-merge history, HEAD on main at the merge:

        A (1000) -> B (2000) -> D (4000, merge)   main
        A (1000) -> C (3000) ---^                 topic -> C
    """
    path = tmp_path / "repo"
    path.mkdir()
    repo = pygit2.init_repository(str(path))

    a = _commit(repo, "Add a", [], 1000, {"a.txt": "A\n"})
    b = _commit(repo, "Change a", [a], 2000, {"a.txt": "B\n"})
    c = _commit(repo, "Add c\n\nLonger body", [a], 3000, {"a.txt": "A\n", "c.txt": "C\n"})
    d = _commit(repo, "Merge topic", [b, c], 4000, {"a.txt": "B\n", "c.txt": "C\n"})

    repo.references.create("refs/heads/main", pygit2.Oid(hex=d), force=True)
    repo.references.create("refs/heads/topic", pygit2.Oid(hex=c), force=True)
    repo.checkout("refs/heads/main", strategy=pygit2.enums.CheckoutStrategy.FORCE)

    return HistoryRepo(path=str(path), repo=repo, oids={"A": a, "B": b, "C": c, "D": d})
