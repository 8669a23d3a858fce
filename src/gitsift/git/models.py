"""Serializable data models for repository objects."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Literal

import pygit2

from gitsift.git._internal.constants import (
    DELTA_ADDED,
    DELTA_COPIED,
    DELTA_DELETED,
    DELTA_MODIFIED,
    DELTA_RENAMED,
    DELTA_TYPECHANGE,
    FILEMODE_COMMIT,
)

DeltaStatus = Literal["added", "deleted", "modified", "renamed", "copied", "typechange", "unknown"]

_DELTA_STATUS_MAP: dict[int, DeltaStatus] = {
    DELTA_ADDED: "added",
    DELTA_DELETED: "deleted",
    DELTA_MODIFIED: "modified",
    DELTA_RENAMED: "renamed",
    DELTA_COPIED: "copied",
    DELTA_TYPECHANGE: "typechange",
}


@dataclass(frozen=True, slots=True)
class Signature:
    """Git author/committer signature."""

    name: str
    email: str
    time: datetime

    @classmethod
    def from_pygit2(cls, sig: pygit2.Signature) -> Signature:
        return cls(sig.name, sig.email, datetime.fromtimestamp(sig.time, tz=UTC))


@dataclass(frozen=True, slots=True)
class CommitInfo:
    """Git commit information."""

    sha: str
    message: str
    author: Signature
    committer: Signature
    parent_shas: tuple[str, ...]

    @classmethod
    def from_pygit2(cls, commit: pygit2.Commit) -> CommitInfo:
        return cls(
            sha=str(commit.id),
            message=commit.message,
            author=Signature.from_pygit2(commit.author),
            committer=Signature.from_pygit2(commit.committer),
            parent_shas=tuple(str(p) for p in commit.parent_ids),
        )


@dataclass(frozen=True, slots=True)
class BlobEntry:
    """A blob reachable at a full path."""

    path: str
    oid: str

    @property
    def name(self) -> str:
        return self.path.rsplit("/", 1)[-1]


@dataclass(frozen=True, slots=True)
class Delta:
    """A single changed path between two revisions."""

    status: DeltaStatus
    old_path: str | None
    new_path: str | None
    old_oid: str | None
    new_oid: str | None
    old_mode: int = 0
    new_mode: int = 0

    @property
    def is_deletion(self) -> bool:
        return self.status == "deleted"

    @property
    def old_is_blob(self) -> bool:
        return self.old_oid is not None and self.old_mode not in (0, FILEMODE_COMMIT)

    @property
    def new_is_blob(self) -> bool:
        return self.new_oid is not None and self.new_mode not in (0, FILEMODE_COMMIT)

    @classmethod
    def from_pygit2(cls, delta: pygit2.DiffDelta) -> Delta:
        status = _DELTA_STATUS_MAP.get(delta.status, "unknown")
        old, new = delta.old_file, delta.new_file
        return cls(
            status=status,
            old_path=old.path if old else None,
            new_path=new.path if new else None,
            old_oid=str(old.id) if old else None,
            new_oid=str(new.id) if new else None,
            old_mode=int(old.mode) if old else 0,
            new_mode=int(new.mode) if new else 0,
        )


@dataclass(frozen=True, slots=True)
class ResolvedRevision:
    """A revision argument that names a commit."""

    argument: str
    rev: str
    sha: str
