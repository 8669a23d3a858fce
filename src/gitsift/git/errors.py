"""Git module error types."""


class GitError(Exception):
    """Base error for git operations."""

    pass


class NotARepositoryError(GitError):
    """Path is not a git repository."""

    def __init__(self, path: str) -> None:
        super().__init__(f"Not a git repository: {path}")
        self.path = path


class RefNotFoundError(GitError):
    """Reference (branch, tag, commit) not found."""

    def __init__(self, ref: str) -> None:
        super().__init__(f"Reference not found: {ref}")
        self.ref = ref


# =============================================================================
# Revision Argument Errors
# =============================================================================


class InvalidRevisionError(GitError, ValueError):
    """A revision argument does not name a commit.

    Raised before any walking begins. ``argument`` is the name of the
    offending parameter (``from_rev`` or ``to_rev``).
    """

    def __init__(self, argument: str, rev: str, reason: str) -> None:
        super().__init__(f"{argument!r}: {rev!r} is an incorrect commit sha ({reason})")
        self.argument = argument
        self.rev = rev
        self.reason = reason


class UnresolvableRevisionError(InvalidRevisionError):
    """Revision does not resolve to any object."""

    def __init__(self, argument: str, rev: str) -> None:
        super().__init__(argument, rev, "does not resolve")


class NotACommitError(InvalidRevisionError):
    """Revision resolves to an object that is not a commit."""

    def __init__(self, argument: str, rev: str, object_type: str) -> None:
        super().__init__(argument, rev, f"resolves to a {object_type}")
        self.object_type = object_type
