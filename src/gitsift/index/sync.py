"""Keep a document store in step with a git repository.

``SyncEngine`` turns walker output into store mutations:

- snapshot walk (no ``from_rev``): upsert every text blob at the target
- delta walk (``from_rev`` given): upsert added/modified paths under the
  target sha, delete removed paths
- commit walk: upsert one document per commit

All data goes to one shared index; documents carry the repository identity
(``rid``) so several repositories can live side by side.

Revision arguments are validated before anything is walked, so a bad
argument never leaves a half-applied sync behind. Writes are committed to
the store every ``batch_size`` mutations and at the end of each run.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any

from gitsift.config.loader import get_index_path, load_config
from gitsift.config.models import GitSiftConfig
from gitsift.content.detect import EncodingDetector, HeuristicTextClassifier, TextClassifier
from gitsift.content.normalizer import ContentNormalizer
from gitsift.core.errors import DocumentNotFoundError
from gitsift.core.logging import get_logger
from gitsift.git._internal.access import RepoAccess
from gitsift.git.models import BlobEntry
from gitsift.git.walker import RepositoryWalker
from gitsift.index.documents import BlobDocument, blob_document, blob_id, commit_document
from gitsift.index.store import DocumentStore, TantivyDocumentStore

log = get_logger("index.sync")


@dataclass
class SyncStats:
    """Counts for one synchronization run."""

    indexed: int = 0
    deleted: int = 0
    skipped: int = 0  # non-text blobs, never sent to the store
    missing: int = 0  # deletes whose target was not in the store


@dataclass
class SyncContext:
    """Everything a SyncEngine needs, passed in explicitly."""

    repository_id: str
    access: RepoAccess
    store: DocumentStore
    classifier: TextClassifier = field(default_factory=HeuristicTextClassifier)
    normalizer: ContentNormalizer = field(default_factory=ContentNormalizer)
    batch_size: int = 500

    @classmethod
    def open(
        cls,
        repo_path: Path | str,
        store: DocumentStore,
        repository_id: str | None = None,
        **kwargs: Any,
    ) -> SyncContext:
        """Open a repository; ``repository_id`` defaults to its path."""
        access = RepoAccess(repo_path)
        detector = EncodingDetector()
        kwargs.setdefault("classifier", HeuristicTextClassifier(detector))
        kwargs.setdefault("normalizer", ContentNormalizer(detector))
        return cls(
            repository_id=repository_id or str(access.path),
            access=access,
            store=store,
            **kwargs,
        )

    @classmethod
    def from_config(
        cls, repo_path: Path | str, config: GitSiftConfig | None = None
    ) -> SyncContext:
        """Build a context with a Tantivy store placed where the config says."""
        repo_root = Path(repo_path)
        config = config or load_config(repo_root)
        store = TantivyDocumentStore(
            get_index_path(repo_root, config), writer_heap_mb=config.index.writer_heap_mb
        )
        return cls.open(
            repo_root,
            store,
            repository_id=config.index.repository_id,
            batch_size=config.index.batch_size,
        )


class SyncEngine:
    """Projects repository blobs and commits into a document store."""

    def __init__(self, context: SyncContext) -> None:
        self._ctx = context
        self._walker = RepositoryWalker(context.access)
        self._unflushed = 0

    @property
    def repository_id(self) -> str:
        return self._ctx.repository_id

    # =========================================================================
    # Blobs
    # =========================================================================

    def synchronize_blobs(
        self, from_rev: str | None = None, to_rev: str | None = None
    ) -> SyncStats:
        """Index text blobs at ``to_rev`` (HEAD when omitted).

        With ``from_rev``, only the paths changed between the two revisions
        are touched, in reverse diff order. Without it, every blob at the
        target is upserted.

        Raises:
            InvalidRevisionError: A revision argument does not name a commit.
        """
        target = self._walker.resolve_target(to_rev)
        source = self._walker.resolve(from_rev, "from_rev")

        stats = SyncStats()
        bound = log.bind(rid=self.repository_id, to_rev=target.sha)
        bound.info(
            "blob_sync_started",
            mode="delta" if source else "snapshot",
            from_rev=source.sha if source else None,
        )

        self._unflushed = 0
        try:
            if source is not None:
                for delta in self._walker.walk_delta_resolved(source, target):
                    if delta.is_deletion:
                        if delta.old_path and delta.old_is_blob:
                            self._delete_blob(delta.old_path, delta.old_oid or "", stats)
                    elif delta.new_path and delta.new_is_blob:
                        # A path that turned binary keeps its last text document
                        entry = BlobEntry(path=delta.new_path, oid=delta.new_oid or "")
                        self._index_blob(entry, target.sha, stats)
            else:
                for entry in self._walker.walk_snapshot(to_rev):
                    self._index_blob(entry, target.sha, stats)
            self._flush()
        except Exception:
            self._abort()
            raise

        bound.info("blob_sync_finished", **asdict(stats))
        return stats

    def _map_blob(
        self, entry: BlobEntry, commit_sha: str, *, snapshot: bool = False
    ) -> BlobDocument | None:
        """Document for a text blob, None for anything that must not be indexed."""
        data = self._ctx.access.blob_data(entry.oid)
        if not self._ctx.classifier.is_text(entry.path, data):
            return None
        normalized = self._ctx.normalizer.normalize(data)
        if not normalized.indexable or normalized.text is None:
            return None
        return blob_document(
            self.repository_id,
            entry.path,
            entry.oid,
            normalized.text,
            commit_sha,
            snapshot=snapshot,
        )

    def _index_blob(self, entry: BlobEntry, commit_sha: str, stats: SyncStats) -> None:
        doc = self._map_blob(entry, commit_sha)
        if doc is None:
            stats.skipped += 1
            log.debug("blob_skipped", path=entry.path, oid=entry.oid)
            return
        self._ctx.store.index(doc.id, doc.to_body())
        stats.indexed += 1
        self._tick()

    def _delete_blob(self, path: str, oid: str, stats: SyncStats) -> None:
        # Binary blobs were never indexed, so there is nothing to remove
        if not self._ctx.classifier.is_text(path, self._ctx.access.blob_data(oid)):
            stats.skipped += 1
            log.debug("blob_delete_skipped", path=path, oid=oid)
            return

        doc_id = blob_id(self.repository_id, path)
        try:
            self._ctx.store.delete(doc_id)
        except DocumentNotFoundError:
            stats.missing += 1
            log.debug("blob_delete_missing", id=doc_id)
            return
        stats.deleted += 1
        self._tick()

    # =========================================================================
    # Commits
    # =========================================================================

    def synchronize_commits(
        self, from_rev: str | None = None, to_rev: str | None = None
    ) -> SyncStats:
        """Index commit metadata.

        With ``from_rev``, commits reachable from ``to_rev`` (HEAD when
        omitted) but not from ``from_rev``. With only ``to_rev``, its whole
        ancestry. With neither, every commit in the object database.

        Raises:
            InvalidRevisionError: A revision argument does not name a commit.
        """
        source = self._walker.resolve(from_rev, "from_rev")
        target = self._walker.resolve(to_rev, "to_rev")

        stats = SyncStats()
        bound = log.bind(rid=self.repository_id)
        bound.info(
            "commit_sync_started",
            from_rev=source.sha if source else None,
            to_rev=target.sha if target else None,
        )

        self._unflushed = 0
        try:
            for commit in self._walker.walk_commits_resolved(source, target):
                doc = commit_document(self.repository_id, commit)
                self._ctx.store.index(doc.id, doc.to_body())
                stats.indexed += 1
                self._tick()
            self._flush()
        except Exception:
            self._abort()
            raise

        bound.info("commit_sync_finished", **asdict(stats))
        return stats

    # =========================================================================
    # Whole-repository projection
    # =========================================================================

    def as_indexed_json(self) -> dict[str, list[dict[str, Any]]]:
        """Every text blob at HEAD and every commit, without touching the store.

        Blob ids use the ``{commit_sha}_{path}`` form. Attention: for a
        large repository this is a very large structure.
        """
        head = self._walker.resolve_target(None)
        return {
            "blobs": self._snapshot_blobs(self._walker.walk_snapshot(), head.sha),
            "commits": [
                commit_document(self.repository_id, commit).to_snapshot()
                for commit in self._walker.all_commits()
            ],
        }

    def _snapshot_blobs(self, entries: Iterable[BlobEntry], sha: str) -> list[dict[str, Any]]:
        result = []
        for entry in entries:
            doc = self._map_blob(entry, sha, snapshot=True)
            if doc is not None:
                result.append(doc.to_snapshot())
        return result

    # =========================================================================
    # Batching
    # =========================================================================

    def _tick(self) -> None:
        self._unflushed += 1
        if self._unflushed >= self._ctx.batch_size:
            self._flush()

    def _flush(self) -> None:
        self._ctx.store.commit()
        self._unflushed = 0

    def _abort(self) -> None:
        """Drop unflushed writes when a walk is abandoned part way."""
        dropped = self._ctx.store.discard()
        self._unflushed = 0
        log.warning("sync_aborted", rid=self.repository_id, dropped=dropped)
