"""Repository access layer - owns pygit2.Repository and exposes computed facts."""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path

import pygit2

from gitsift.git._internal.constants import FILEMODE_COMMIT, SORT_TOPOLOGICAL
from gitsift.git._internal.errors import git_operation
from gitsift.git.errors import (
    GitError,
    NotACommitError,
    NotARepositoryError,
    RefNotFoundError,
    UnresolvableRevisionError,
)
from gitsift.git.models import ResolvedRevision


class RepoAccess:
    """Owns pygit2.Repository and provides normalized access to repo state."""

    def __init__(self, repo_path: Path | str) -> None:
        self._path = Path(repo_path)
        try:
            self._repo = pygit2.Repository(str(self._path))
        except pygit2.GitError as e:
            raise NotARepositoryError(str(self._path)) from e

    @property
    def repo(self) -> pygit2.Repository:
        return self._repo

    @property
    def path(self) -> Path:
        """Working directory for a working copy, the git dir for a bare repo."""
        return Path(self._repo.workdir) if self._repo.workdir else Path(self._repo.path)

    # =========================================================================
    # Repository State Facts
    # =========================================================================

    @property
    def is_bare(self) -> bool:
        return self._repo.is_bare

    @property
    def is_unborn(self) -> bool:
        return self._repo.head_is_unborn

    def must_head_sha(self) -> str:
        """Return the commit sha HEAD points at, raising if unborn."""
        if self.is_unborn:
            raise GitError("HEAD has no target (unborn branch)")
        return str(self._repo.head.peel(pygit2.Commit).id)

    # =========================================================================
    # Resolution Helpers
    # =========================================================================

    def resolve_revision(self, rev: str, argument: str) -> ResolvedRevision:
        """Resolve a caller-supplied revision to a commit.

        Annotated tags are peeled to the commit they point at. Anything
        else that is not a commit raises NotACommitError; names that do
        not resolve at all raise UnresolvableRevisionError.
        """
        try:
            obj = self._repo.revparse_single(rev)
        except (KeyError, ValueError, pygit2.GitError) as e:
            raise UnresolvableRevisionError(argument, rev) from e

        if isinstance(obj, pygit2.Tag):
            try:
                obj = obj.peel(pygit2.Commit)
            except (ValueError, pygit2.GitError) as e:
                raise NotACommitError(argument, rev, "tag of a non-commit") from e

        if not isinstance(obj, pygit2.Commit):
            raise NotACommitError(argument, rev, obj.type_str)
        return ResolvedRevision(argument=argument, rev=rev, sha=str(obj.id))

    def lookup(self, oid: str | pygit2.Oid) -> pygit2.Object:
        obj = self._repo.get(oid)
        if obj is None:
            raise RefNotFoundError(str(oid))
        return obj

    def commit(self, sha: str) -> pygit2.Commit:
        obj = self.lookup(sha)
        if not isinstance(obj, pygit2.Commit):
            raise RefNotFoundError(f"{sha} is not a commit")
        return obj

    def blob_data(self, oid: str) -> bytes:
        obj = self.lookup(oid)
        if not isinstance(obj, pygit2.Blob):
            raise RefNotFoundError(f"{oid} is not a blob")
        return obj.data

    # =========================================================================
    # Enumeration
    # =========================================================================

    def tree_of(self, sha: str) -> pygit2.Tree:
        return self.commit(sha).tree

    def subtree(self, entry: pygit2.Object) -> pygit2.Tree:
        obj = self.lookup(entry.id)
        if not isinstance(obj, pygit2.Tree):
            raise RefNotFoundError(f"{entry.id} is not a tree")
        return obj

    def index_entries(self) -> Iterator[tuple[str, str]]:
        """(path, oid) for each staged blob; gitlinks are skipped."""
        with git_operation("read index"):
            index = self._repo.index
            index.read()
        for entry in index:
            if entry.mode == FILEMODE_COMMIT:
                continue
            yield entry.path, str(entry.id)

    def diff(self, from_sha: str, to_sha: str) -> list[pygit2.DiffDelta]:
        with git_operation("diff"):
            diff = self._repo.diff(self.commit(from_sha), self.commit(to_sha))
            return list(diff.deltas)

    def walk(self, to_sha: str, hide_sha: str | None = None) -> Iterator[pygit2.Commit]:
        with git_operation("walk"):
            walker = self._repo.walk(pygit2.Oid(hex=to_sha), SORT_TOPOLOGICAL)
            if hide_sha is not None:
                walker.hide(pygit2.Oid(hex=hide_sha))
        yield from walker

    def object_ids(self) -> Iterator[pygit2.Oid]:
        """Every object id in the object database, in no particular order."""
        with git_operation("enumerate objects"):
            oids = list(self._repo.odb)
        yield from oids
