"""Tests for SearchService."""

from __future__ import annotations

from datetime import UTC, datetime
from pathlib import Path

import pytest

from gitsift.config.models import SearchConfig
from gitsift.git.models import CommitInfo, Signature
from gitsift.index.documents import blob_document, commit_document
from gitsift.index.store import TantivyDocumentStore
from gitsift.search.query import SearchRequest
from gitsift.search.results import SearchPage
from gitsift.search.service import SearchService

WHEN = datetime(2024, 3, 1, tzinfo=UTC)


class _SpyStore:
    """Records requests and returns empty pages."""

    def __init__(self) -> None:
        self.requests: list[SearchRequest] = []

    def search(self, request: SearchRequest) -> SearchPage:
        self.requests.append(request)
        return SearchPage()


@pytest.fixture
def populated(tmp_path: Path) -> TantivyDocumentStore:
    store = TantivyDocumentStore(tmp_path / "index", writer_heap_mb=16)
    for rid in ("acme", "other"):
        doc = blob_document(rid, "parser.py", "0" * 40, "def parse(tokens): ...", "c" * 40)
        store.index(doc.id, doc.to_body())
    commit = CommitInfo(
        sha="d" * 40,
        message="Speed up the parser",
        author=Signature("Ada", "ada@example.com", WHEN),
        committer=Signature("Ada", "ada@example.com", WHEN),
        parent_shas=(),
    )
    doc = commit_document("acme", commit)
    store.index(doc.id, doc.to_body())
    store.commit()
    return store


class TestSearchTypes:
    def test_all_searches_both(self, populated: TantivyDocumentStore) -> None:
        results = SearchService(populated).search("parse")

        assert results.blobs.total == 2
        # "parse" and "parser" are different terms
        assert results.commits.total == 0

    def test_commit_only(self, populated: TantivyDocumentStore) -> None:
        results = SearchService(populated).search("parser", type="commit")

        assert results.blobs == SearchPage()
        assert [h.source["commit"]["sha"] for h in results.commits.hits] == ["d" * 40]

    def test_blob_only_scoped_to_rid(self, populated: TantivyDocumentStore) -> None:
        results = SearchService(populated, rid="other").search("parse", type="blob")

        assert results.commits == SearchPage()
        assert [h.id for h in results.blobs.hits] == ["other_parser.py"]

    def test_unsearched_type_is_empty_page(self, populated: TantivyDocumentStore) -> None:
        """The type that was not asked for can be read like any other page."""
        results = SearchService(populated).search("parser", type="commit")

        assert results.blobs.hits == []
        assert results.blobs.total == 0

    def test_unknown_type(self) -> None:
        with pytest.raises(ValueError, match="type must be one of"):
            SearchService(_SpyStore()).search("x", type="tree")  # type: ignore[arg-type]


class TestPagination:
    def test_page_and_per_forwarded(self) -> None:
        spy = _SpyStore()

        SearchService(spy).search("x", type="commit", page=2, per=10)

        (request,) = spy.requests
        assert (request.size, request.offset) == (10, 10)

    def test_default_per_page_from_config(self) -> None:
        spy = _SpyStore()

        SearchService(spy, config=SearchConfig(default_per_page=7)).search_blobs("x")

        assert spy.requests[0].size == 7

    def test_per_capped(self) -> None:
        spy = _SpyStore()

        SearchService(spy, config=SearchConfig(max_per_page=50)).search("x", per=500)

        assert [r.size for r in spy.requests] == [50, 50]

    def test_invalid_page(self) -> None:
        with pytest.raises(ValueError):
            SearchService(_SpyStore()).search("x", page=0)
