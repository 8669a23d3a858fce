"""Map repository objects to index documents.

Pure functions: nothing here touches the repository or the store. Both the
incremental sync path and the whole-snapshot export build their documents
through this module so field names stay in one place.

Wire bodies::

    {"blob":   {"type": "blob", "oid", "rid", "content", "commit_sha"}}
    {"commit": {"type": "commit", "rid", "sha",
                "author": {"name", "email", "time"},
                "committer": {"name", "email", "time"}, "message"}}
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Literal

from gitsift.git.models import CommitInfo, Signature

DocumentType = Literal["blob", "commit"]


def blob_id(rid: str, path: str) -> str:
    """Store key for a path; re-indexing the same path overwrites it."""
    return f"{rid}_{path}"


def snapshot_blob_id(commit_sha: str, path: str) -> str:
    """Key used by the whole-snapshot export."""
    return f"{commit_sha}_{path}"


def commit_id(rid: str, sha: str) -> str:
    return f"{rid}_{sha}"


@dataclass(frozen=True, slots=True)
class BlobDocument:
    id: str
    rid: str
    oid: str
    content: str
    commit_sha: str

    type: DocumentType = "blob"

    def to_body(self) -> dict[str, Any]:
        return {
            "blob": {
                "type": self.type,
                "oid": self.oid,
                "rid": self.rid,
                "content": self.content,
                "commit_sha": self.commit_sha,
            }
        }

    def to_snapshot(self) -> dict[str, Any]:
        """Flat form used by ``as_indexed_json``."""
        return {"id": self.id, **self.to_body()["blob"]}


@dataclass(frozen=True, slots=True)
class CommitDocument:
    id: str
    rid: str
    sha: str
    author: Signature
    committer: Signature
    message: str

    type: DocumentType = "commit"

    def to_body(self) -> dict[str, Any]:
        return {
            "commit": {
                "type": self.type,
                "rid": self.rid,
                "sha": self.sha,
                "author": _signature(self.author),
                "committer": _signature(self.committer),
                "message": self.message,
            }
        }

    def to_snapshot(self) -> dict[str, Any]:
        return {"id": self.id, **self.to_body()["commit"]}


def _signature(sig: Signature) -> dict[str, str]:
    return {"name": sig.name, "email": sig.email, "time": sig.time.isoformat()}


def blob_document(
    rid: str,
    path: str,
    oid: str,
    content: str,
    commit_sha: str,
    *,
    snapshot: bool = False,
) -> BlobDocument:
    doc_id = snapshot_blob_id(commit_sha, path) if snapshot else blob_id(rid, path)
    return BlobDocument(id=doc_id, rid=rid, oid=oid, content=content, commit_sha=commit_sha)


def commit_document(rid: str, commit: CommitInfo) -> CommitDocument:
    return CommitDocument(
        id=commit_id(rid, commit.sha),
        rid=rid,
        sha=commit.sha,
        author=commit.author,
        committer=commit.committer,
        message=commit.message,
    )
