"""Build paginated, field-boosted search requests.

Two request shapes are supported:

- commit search: multi-field match over commit metadata with per-field
  boosts, every term required within a field
- blob search: single-field match over blob content, every term required

A blank commit query degrades to match-all with constant scoring and
``track_scores`` set. ``SearchRequest.to_body()`` renders the standard
full-text request body; document stores execute the request object itself.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Literal

if TYPE_CHECKING:
    from gitsift.index.documents import DocumentType

Operator = Literal["and", "or"]

DEFAULT_PAGE = 1
DEFAULT_PER_PAGE = 20


@dataclass(frozen=True, slots=True)
class FieldBoost:
    """A dotted field path and its relative weight."""

    name: str
    boost: float = 1.0

    def render(self) -> str:
        if self.boost == 1:
            return self.name
        return f"{self.name}^{self.boost:g}"


COMMIT_FIELDS: tuple[FieldBoost, ...] = (
    FieldBoost("commit.message", 10),
    FieldBoost("commit.sha", 5),
    FieldBoost("commit.author.name", 2),
    FieldBoost("commit.author.email", 2),
    FieldBoost("commit.committer.name"),
    FieldBoost("commit.committer.email"),
)

BLOB_FIELDS: tuple[FieldBoost, ...] = (FieldBoost("blob.content"),)


@dataclass(frozen=True, slots=True)
class SearchRequest:
    """A store-independent description of one search."""

    doc_type: DocumentType
    text: str
    fields: tuple[FieldBoost, ...]
    size: int
    offset: int
    operator: Operator = "and"
    match_all: bool = False
    track_scores: bool = False
    highlight: tuple[str, ...] = ()
    rid: str | None = None

    @property
    def page(self) -> int:
        return self.offset // self.size + 1

    def to_body(self) -> dict[str, Any]:
        filters: list[dict[str, Any]] = [{"term": {f"{self.doc_type}.type": self.doc_type}}]
        if self.rid is not None:
            filters.append({"term": {f"{self.doc_type}.rid": self.rid}})

        body: dict[str, Any] = {
            "query": {"bool": {"must": self._match_clause(), "filter": filters}},
            "size": self.size,
            "from": self.offset,
        }
        if self.track_scores:
            body["track_scores"] = True
        if self.highlight:
            body["highlight"] = {"fields": {name: {} for name in self.highlight}}
        return body

    def _match_clause(self) -> dict[str, Any]:
        if self.match_all:
            return {"match_all": {}}
        if len(self.fields) == 1:
            return {
                "match": {self.fields[0].name: {"query": self.text, "operator": self.operator}}
            }
        return {
            "multi_match": {
                "fields": [f.render() for f in self.fields],
                "query": self.text,
                "operator": self.operator,
            }
        }


def paginate(page: int | None, per: int) -> tuple[int, int]:
    """Return ``(size, offset)`` for a 1-indexed page."""
    page = DEFAULT_PAGE if page is None else page
    if page < 1:
        raise ValueError(f"page must be >= 1, got {page}")
    if per < 1:
        raise ValueError(f"per must be >= 1, got {per}")
    return per, per * (page - 1)


def build_commit_query(
    text: str | None,
    page: int | None = DEFAULT_PAGE,
    per: int = DEFAULT_PER_PAGE,
    highlight: list[str] | tuple[str, ...] | None = None,
    rid: str | None = None,
) -> SearchRequest:
    size, offset = paginate(page, per)
    text = text or ""
    blank = not text.strip()
    return SearchRequest(
        doc_type="commit",
        text=text,
        fields=COMMIT_FIELDS,
        size=size,
        offset=offset,
        match_all=blank,
        track_scores=blank,
        highlight=tuple(highlight or ()),
        rid=rid,
    )


def build_blob_query(
    text: str | None,
    page: int | None = DEFAULT_PAGE,
    per: int = DEFAULT_PER_PAGE,
    highlight: list[str] | tuple[str, ...] | None = None,
    rid: str | None = None,
) -> SearchRequest:
    size, offset = paginate(page, per)
    return SearchRequest(
        doc_type="blob",
        text=text or "",
        fields=BLOB_FIELDS,
        size=size,
        offset=offset,
        highlight=tuple(highlight or ()),
        rid=rid,
    )
