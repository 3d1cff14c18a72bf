"""Git backend for reading the commit graph and checking out commits"""

from gitlane.git_backend.errors import (
    BackendUnavailable,
    CheckoutError,
    GitBackendError,
    QueryFailed,
)
from gitlane.git_backend.repository import CommitSource, initialize_repository

__all__ = [
    "BackendUnavailable",
    "CheckoutError",
    "CommitSource",
    "GitBackendError",
    "QueryFailed",
    "initialize_repository",
]
