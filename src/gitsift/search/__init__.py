"""Query building and search."""

from gitsift.search.query import (
    BLOB_FIELDS,
    COMMIT_FIELDS,
    FieldBoost,
    SearchRequest,
    build_blob_query,
    build_commit_query,
    paginate,
)
from gitsift.search.results import SearchHit, SearchPage
from gitsift.search.service import SearchResults, SearchService

__all__ = [
    # Query
    "BLOB_FIELDS",
    "COMMIT_FIELDS",
    "FieldBoost",
    "SearchRequest",
    "build_blob_query",
    "build_commit_query",
    "paginate",
    # Results
    "SearchHit",
    "SearchPage",
    # Service
    "SearchResults",
    "SearchService",
]
