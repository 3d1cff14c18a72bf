"""Errors raised by the git backend."""


class GitBackendError(Exception):
    """Base class for repository access failures."""


class BackendUnavailable(GitBackendError):
    """The path is not a git repository (offer to initialize one)."""

    def __init__(self, path: str) -> None:
        super().__init__(f"Not a git repository: {path}")
        self.path = path


class QueryFailed(GitBackendError):
    """Listing commits, children or HEAD failed."""


class CheckoutError(GitBackendError):
    """A checkout could not complete. Nothing was changed."""

    def __init__(self, commit_hash: str, reason: str) -> None:
        super().__init__(f"Cannot check out {commit_hash[:7]}: {reason}")
        self.commit_hash = commit_hash
        self.reason = reason
