"""Enumerate the repository objects a sync pass has to look at.

Three traversal modes:

- snapshot: every blob reachable from a revision (or the staged index of a
  working copy when no revision is given)
- delta: the paths changed between two revisions, in reverse diff order
- commits: a commit range, the ancestry of one revision, or every commit
  object in the object database
"""

from __future__ import annotations

from collections.abc import Iterator

import pygit2

from gitsift.git._internal.access import RepoAccess
from gitsift.git.models import BlobEntry, CommitInfo, Delta, ResolvedRevision


class RepositoryWalker:
    """Walks a repository through a RepoAccess handle."""

    def __init__(self, access: RepoAccess) -> None:
        self._access = access

    @property
    def access(self) -> RepoAccess:
        return self._access

    # =========================================================================
    # Revision Validation
    # =========================================================================

    def resolve_revision(self, rev: str, argument: str) -> ResolvedRevision:
        """Resolve ``rev`` to a commit or raise an InvalidRevisionError subclass."""
        return self._access.resolve_revision(rev, argument)

    def resolve(self, rev: str | None, argument: str) -> ResolvedRevision | None:
        if not rev:
            return None
        return self.resolve_revision(rev, argument)

    def resolve_target(self, to_rev: str | None) -> ResolvedRevision:
        """Resolve ``to_rev``, defaulting to HEAD."""
        resolved = self.resolve(to_rev, "to_rev")
        if resolved is not None:
            return resolved
        return ResolvedRevision(argument="to_rev", rev="HEAD", sha=self._access.must_head_sha())

    # =========================================================================
    # Snapshot Walk
    # =========================================================================

    def walk_snapshot(self, to_rev: str | None = None) -> Iterator[BlobEntry]:
        """Every blob at ``to_rev``.

        A working copy with no explicit revision is enumerated from its
        index, so staged but uncommitted content is included.
        """
        if to_rev is None and not self._access.is_bare:
            for path, oid in self._access.index_entries():
                yield BlobEntry(path=path, oid=oid)
            return

        target = self.resolve_target(to_rev)
        yield from self._walk_tree(self._access.tree_of(target.sha))

    def _walk_tree(self, tree: pygit2.Tree, prefix: str = "") -> Iterator[BlobEntry]:
        subtrees: list[pygit2.Object] = []
        for entry in tree:
            if entry.type_str == "blob":
                yield BlobEntry(path=f"{prefix}{entry.name}", oid=str(entry.id))
            elif entry.type_str == "tree":
                subtrees.append(entry)
            # gitlinks (type "commit") point into other repositories

        for entry in subtrees:
            yield from self._walk_tree(self._access.subtree(entry), f"{prefix}{entry.name}/")

    # =========================================================================
    # Delta Walk
    # =========================================================================

    def walk_delta(self, from_rev: str, to_rev: str) -> Iterator[Delta]:
        """Changed paths between two revisions, last diff entry first."""
        source = self._access.resolve_revision(from_rev, "from_rev")
        target = self._access.resolve_revision(to_rev, "to_rev")
        yield from self.walk_delta_resolved(source, target)

    def walk_delta_resolved(
        self, source: ResolvedRevision, target: ResolvedRevision
    ) -> Iterator[Delta]:
        deltas = self._access.diff(source.sha, target.sha)
        for delta in reversed(deltas):
            yield Delta.from_pygit2(delta)

    # =========================================================================
    # Commit Walk
    # =========================================================================

    def walk_commits(
        self, from_rev: str | None = None, to_rev: str | None = None
    ) -> Iterator[CommitInfo]:
        source = self.resolve(from_rev, "from_rev")
        target = self.resolve(to_rev, "to_rev")
        yield from self.walk_commits_resolved(source, target)

    def walk_commits_resolved(
        self, source: ResolvedRevision | None, target: ResolvedRevision | None
    ) -> Iterator[CommitInfo]:
        if source is None and target is None:
            yield from self.all_commits()
            return

        if target is None:
            target = self.resolve_target(None)
        hide = source.sha if source is not None else None
        for commit in self._access.walk(target.sha, hide):
            yield CommitInfo.from_pygit2(commit)

    def all_commits(self) -> Iterator[CommitInfo]:
        """Every commit object in the object database, unordered."""
        for oid in self._access.object_ids():
            obj = self._access.lookup(oid)
            if isinstance(obj, pygit2.Commit):
                yield CommitInfo.from_pygit2(obj)
