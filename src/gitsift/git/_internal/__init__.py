"""Internal components for git access - not part of public API."""

from gitsift.git._internal.access import RepoAccess
from gitsift.git._internal.errors import ErrorMapper, git_operation

__all__ = [
    "ErrorMapper",
    "RepoAccess",
    "git_operation",
]
