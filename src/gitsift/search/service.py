"""Search over indexed blobs and commits."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Literal

from gitsift.config.models import SearchConfig
from gitsift.core.logging import get_logger
from gitsift.search.query import build_blob_query, build_commit_query
from gitsift.search.results import SearchPage

if TYPE_CHECKING:
    from gitsift.index.store import DocumentStore

log = get_logger("search.service")

SearchType = Literal["all", "blob", "commit"]
_SEARCH_TYPES: tuple[SearchType, ...] = ("all", "blob", "commit")


@dataclass
class SearchResults:
    """Per-type result pages. A type that was not searched stays empty."""

    blobs: SearchPage = field(default_factory=SearchPage)
    commits: SearchPage = field(default_factory=SearchPage)


class SearchService:
    """Runs blob and commit searches against a document store.

    When ``rid`` is set, every search is restricted to that repository's
    documents.
    """

    def __init__(
        self,
        store: DocumentStore,
        rid: str | None = None,
        config: SearchConfig | None = None,
    ) -> None:
        self._store = store
        self._rid = rid
        self._config = config or SearchConfig()

    def search(
        self,
        query: str | None,
        type: SearchType = "all",
        page: int | None = 1,
        per: int | None = None,
        highlight: list[str] | None = None,
    ) -> SearchResults:
        """Search blobs, commits, or both.

        Raises:
            ValueError: Unknown ``type`` or invalid pagination.
        """
        if type not in _SEARCH_TYPES:
            raise ValueError(f"type must be one of {', '.join(_SEARCH_TYPES)}, got {type!r}")

        per = self._clamp_per(per)
        results = SearchResults()
        if type in ("all", "blob"):
            results.blobs = self.search_blobs(query, page, per, highlight)
        if type in ("all", "commit"):
            results.commits = self.search_commits(query, page, per, highlight)
        return results

    def search_commits(
        self,
        query: str | None,
        page: int | None = 1,
        per: int | None = None,
        highlight: list[str] | None = None,
    ) -> SearchPage:
        request = build_commit_query(
            query, page, self._clamp_per(per), highlight=highlight, rid=self._rid
        )
        result = self._store.search(request)
        log.debug("commit_search", query=query, page=request.page, total=result.total)
        return result

    def search_blobs(
        self,
        query: str | None,
        page: int | None = 1,
        per: int | None = None,
        highlight: list[str] | None = None,
    ) -> SearchPage:
        request = build_blob_query(
            query, page, self._clamp_per(per), highlight=highlight, rid=self._rid
        )
        result = self._store.search(request)
        log.debug("blob_search", query=query, page=request.page, total=result.total)
        return result

    def _clamp_per(self, per: int | None) -> int:
        if per is None:
            return self._config.default_per_page
        return min(per, self._config.max_per_page)
