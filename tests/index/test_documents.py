"""Tests for document mapping."""

from __future__ import annotations

from datetime import UTC, datetime

from gitsift.git.models import CommitInfo, Signature
from gitsift.index.documents import (
    blob_document,
    blob_id,
    commit_document,
    commit_id,
    snapshot_blob_id,
)

WHEN = datetime(2024, 3, 1, 12, 30, tzinfo=UTC)


def _commit() -> CommitInfo:
    return CommitInfo(
        sha="a" * 40,
        message="Fix the frobnicator\n",
        author=Signature("Ada", "ada@example.com", WHEN),
        committer=Signature("Bot", "bot@example.com", WHEN),
        parent_shas=(),
    )


class TestIds:
    def test_blob_id_is_stable_per_path(self) -> None:
        """Re-indexing a path reuses its id, whatever the blob content."""
        assert blob_id("acme", "src/app.py") == "acme_src/app.py"

    def test_snapshot_id_uses_commit(self) -> None:
        assert snapshot_blob_id("abc123", "src/app.py") == "abc123_src/app.py"

    def test_commit_id(self) -> None:
        assert commit_id("acme", "f00") == "acme_f00"


class TestBlobDocument:
    def test_body_shape(self) -> None:
        doc = blob_document("acme", "a.txt", "0" * 40, "hello", "b" * 40)

        assert doc.id == "acme_a.txt"
        assert doc.to_body() == {
            "blob": {
                "type": "blob",
                "oid": "0" * 40,
                "rid": "acme",
                "content": "hello",
                "commit_sha": "b" * 40,
            }
        }

    def test_snapshot_form_flat_with_commit_id(self) -> None:
        doc = blob_document("acme", "a.txt", "0" * 40, "hello", "b" * 40, snapshot=True)

        snapshot = doc.to_snapshot()

        assert snapshot["id"] == "b" * 40 + "_a.txt"
        assert snapshot["content"] == "hello"
        assert "blob" not in snapshot


class TestCommitDocument:
    def test_body_shape(self) -> None:
        doc = commit_document("acme", _commit())

        body = doc.to_body()["commit"]

        assert doc.id == "acme_" + "a" * 40
        assert body["type"] == "commit"
        assert body["message"] == "Fix the frobnicator\n"
        assert body["author"] == {
            "name": "Ada",
            "email": "ada@example.com",
            "time": "2024-03-01T12:30:00+00:00",
        }
        assert body["committer"]["name"] == "Bot"

    def test_snapshot_form(self) -> None:
        snapshot = commit_document("acme", _commit()).to_snapshot()

        assert snapshot["id"] == "acme_" + "a" * 40
        assert snapshot["sha"] == "a" * 40
