"""
Commit source backed by pygit2
"""

import logging
from datetime import datetime, timedelta, timezone
from pathlib import Path

import pygit2

from gitlane.constants import DEFAULT_MARKER_FILE
from gitlane.git_backend.errors import BackendUnavailable, CheckoutError, QueryFailed
from gitlane.graph.types import ChronologicalOrder, Commit

logger = logging.getLogger(__name__)


def _format_date(signature: pygit2.Signature) -> str:
    """Author-local date, e.g. 2024-03-01 14:05:09"""
    tz = timezone(timedelta(minutes=signature.offset))
    return datetime.fromtimestamp(signature.time, tz).strftime("%Y-%m-%d %H:%M:%S")


class CommitSource:
    """Read access to a repository's commit graph, plus checkout"""

    def __init__(
        self,
        repo_path: str,
        marker_file: str = DEFAULT_MARKER_FILE,
        follow_branches: bool = False,
    ) -> None:
        """Open the repository containing repo_path"""
        found = pygit2.discover_repository(repo_path)
        if found is None:
            raise BackendUnavailable(repo_path)

        try:
            self.repo = pygit2.Repository(found)
        except pygit2.GitError as e:
            raise BackendUnavailable(repo_path) from e

        self.marker_file = marker_file
        self.follow_branches = follow_branches

    @property
    def path(self) -> str:
        """Working directory (or git dir for bare repositories)"""
        return str(Path(self.repo.workdir or self.repo.path))

    def _tips(self) -> list[pygit2.Oid]:
        """Commits pointed at by any ref, plus HEAD"""
        tips: list[pygit2.Oid] = []
        seen: set[str] = set()

        for ref_name in self.repo.references:
            try:
                commit = self.repo.references[ref_name].peel(pygit2.Commit)
            except (pygit2.GitError, KeyError, ValueError):
                # Refs to trees/blobs, or dangling symbolic refs
                continue
            if str(commit.id) not in seen:
                seen.add(str(commit.id))
                tips.append(commit.id)

        if not self.repo.head_is_unborn:
            head_id = self.repo.head.peel(pygit2.Commit).id
            if str(head_id) not in seen:
                tips.append(head_id)

        return tips

    def _walk(self) -> list[pygit2.Commit]:
        tips = self._tips()
        if not tips:
            return []

        walker = self.repo.walk(tips[0], pygit2.enums.SortMode.TIME)
        for tip in tips[1:]:
            walker.push(tip)
        return list(walker)

    def list_commits(self) -> list[Commit]:
        """All commits across all refs, oldest first"""
        try:
            walked = self._walk()
        except pygit2.GitError as e:
            raise QueryFailed(f"Failed to list commits: {e}") from e

        commits: list[Commit] = []
        for c in walked:
            full_message = c.message.strip()
            commits.append(
                Commit(
                    hash=str(c.id),
                    timestamp=c.author.time,
                    author_name=c.author.name,
                    author_email=c.author.email,
                    message=full_message.split("\n")[0],
                    full_message=full_message,
                    date=_format_date(c.author),
                    parents=tuple(str(p) for p in c.parent_ids),
                )
            )

        # Stable: equal timestamps keep walk order
        commits.sort(key=lambda c: c.timestamp)
        return commits

    def list_children(self, commits: list[Commit] | None = None) -> dict[str, list[str]]:
        """
        Map each commit to its direct children, oldest child first.

        Pass the result of list_commits() to avoid walking the history again.
        """
        if commits is None:
            commits = self.list_commits()
        order = ChronologicalOrder.from_commits(commits)

        children: dict[str, list[str]] = {c.hash: [] for c in commits}
        for commit in commits:
            for parent in commit.parents:
                if parent in children:
                    children[parent].append(commit.hash)

        for kids in children.values():
            kids.sort(key=order.row)
        return children

    def current_head(self) -> str:
        """Hash of the checked-out commit"""
        if self.repo.head_is_unborn:
            raise QueryFailed("HEAD does not point at a commit yet")
        try:
            return str(self.repo.head.peel(pygit2.Commit).id)
        except pygit2.GitError as e:
            raise QueryFailed(f"Failed to resolve HEAD: {e}") from e

    def _branch_at(self, commit_id: pygit2.Oid) -> str | None:
        """The local branch pointing at commit_id, if exactly one does"""
        names = [
            name
            for name in self.repo.branches.local
            if self.repo.branches.local[name].target == commit_id
        ]
        return names[0] if len(names) == 1 else None

    def checkout(self, commit_hash: str) -> None:
        """
        Check out a commit.

        The working tree is updated with the SAFE strategy, which refuses to
        overwrite local changes and fails before writing anything. HEAD only
        moves once the tree checkout succeeded.

        Raises:
            CheckoutError: unknown hash, not a commit, or conflicting changes
        """
        try:
            obj = self.repo.revparse_single(commit_hash)
        except (KeyError, ValueError) as e:
            raise CheckoutError(commit_hash, "unknown commit") from e

        if not isinstance(obj, pygit2.Commit):
            raise CheckoutError(commit_hash, f"not a commit ({type(obj).__name__})")

        branch = self._branch_at(obj.id) if self.follow_branches else None

        try:
            self.repo.checkout_tree(obj, strategy=pygit2.enums.CheckoutStrategy.SAFE)
        except pygit2.GitError as e:
            raise CheckoutError(commit_hash, str(e)) from e

        if branch is not None:
            self.repo.set_head(f"refs/heads/{branch}")
            logger.info("Checked out branch %s at %s", branch, obj.short_id)
        else:
            self.repo.set_head(obj.id)
            logger.info("Checked out %s (detached)", obj.short_id)

    def has_marker(self) -> bool:
        return has_marker(self.path, self.marker_file)

    def write_marker(self) -> None:
        write_marker(self.path, self.marker_file)


def has_marker(directory: str, marker_file: str = DEFAULT_MARKER_FILE) -> bool:
    """Whether tracking was set up for directory before"""
    return (Path(directory) / marker_file).exists()


def find_marker(directory: str, marker_file: str = DEFAULT_MARKER_FILE) -> Path | None:
    """
    Directory holding the marker file: directory itself or the nearest parent.

    The marker is written at the working-tree root, so a subdirectory of a
    tracked tree finds it here too.
    """
    start = Path(directory).resolve()
    for candidate in (start, *start.parents):
        if has_marker(str(candidate), marker_file):
            return candidate
    return None


def write_marker(directory: str, marker_file: str = DEFAULT_MARKER_FILE) -> None:
    """Create the (empty) tracking marker file if it is missing"""
    marker = Path(directory) / marker_file
    if not marker.exists():
        marker.write_text("", encoding="utf-8")


def initialize_repository(path: str) -> str:
    """
    Initialize a repository at path and create an initial commit.

    All files already present are added, so the first commit is the current
    state of the directory (or empty for an empty directory).

    Returns:
        Hash of the initial commit
    """
    repo = pygit2.init_repository(path)

    try:
        signature = repo.default_signature
    except (KeyError, pygit2.GitError):
        signature = pygit2.Signature("gitlane", "gitlane@localhost")

    repo.index.add_all()
    repo.index.write()
    tree_oid = repo.index.write_tree()

    commit_oid = repo.create_commit("HEAD", signature, signature, "Initial commit", tree_oid, [])
    logger.info("Initialized repository at %s", path)
    return str(commit_oid)
