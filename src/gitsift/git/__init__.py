"""Git access and repository walking."""

from gitsift.git._internal.access import RepoAccess
from gitsift.git.errors import (
    GitError,
    InvalidRevisionError,
    NotACommitError,
    NotARepositoryError,
    RefNotFoundError,
    UnresolvableRevisionError,
)
from gitsift.git.models import (
    BlobEntry,
    CommitInfo,
    Delta,
    DeltaStatus,
    ResolvedRevision,
    Signature,
)
from gitsift.git.walker import RepositoryWalker

__all__ = [
    # Access
    "RepoAccess",
    "RepositoryWalker",
    # Models
    "BlobEntry",
    "CommitInfo",
    "Delta",
    "DeltaStatus",
    "ResolvedRevision",
    "Signature",
    # Errors
    "GitError",
    "InvalidRevisionError",
    "NotACommitError",
    "NotARepositoryError",
    "RefNotFoundError",
    "UnresolvableRevisionError",
]
