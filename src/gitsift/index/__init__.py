"""Index documents, the document store, and repository synchronization."""

from gitsift.index.documents import (
    BlobDocument,
    CommitDocument,
    DocumentType,
    blob_document,
    blob_id,
    commit_document,
    commit_id,
    snapshot_blob_id,
)
from gitsift.index.store import DocumentStore, TantivyDocumentStore
from gitsift.index.sync import SyncContext, SyncEngine, SyncStats
from gitsift.search.results import SearchHit, SearchPage

__all__ = [
    # Documents
    "BlobDocument",
    "CommitDocument",
    "DocumentType",
    "blob_document",
    "blob_id",
    "commit_document",
    "commit_id",
    "snapshot_blob_id",
    # Store
    "DocumentStore",
    "SearchHit",
    "SearchPage",
    "TantivyDocumentStore",
    # Sync
    "SyncContext",
    "SyncEngine",
    "SyncStats",
]
