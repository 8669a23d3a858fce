"""Document store: the protocol the sync engine writes to, and a Tantivy backend.

The store keeps every repository's blob and commit documents in one
namespace keyed by document id. Writes are buffered in order and applied
in a single Tantivy commit, so a sync that stops halfway leaves the index
at its last committed state.

Usage::

    store = TantivyDocumentStore(index_path)
    store.index("rid_src/app.py", {"blob": {...}})
    store.delete("rid_src/old.py")   # DocumentNotFoundError if absent
    store.commit()

    page = store.search(build_blob_query("def main"))
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import Any, Literal, Protocol

import tantivy

from gitsift.core.errors import DocumentNotFoundError, StoreError
from gitsift.core.logging import get_logger
from gitsift.index.documents import DocumentType
from gitsift.search.query import SearchRequest
from gitsift.search.results import SearchHit, SearchPage

log = get_logger("index.store")


class DocumentStore(Protocol):
    """What the sync engine and search service need from an index."""

    def index(self, doc_id: str, body: dict[str, Any]) -> None: ...

    def delete(self, doc_id: str) -> None:
        """Remove a document. Raises DocumentNotFoundError when it is absent."""
        ...

    def get(self, doc_id: str) -> dict[str, Any] | None: ...

    def search(self, request: SearchRequest) -> SearchPage: ...

    def commit(self) -> int: ...

    def discard(self) -> int: ...


# =============================================================================
# Tantivy schema
# =============================================================================

# Exact-match fields
_KEYWORD_FIELDS = (
    "id",
    "type",
    "rid",
    "oid",
    "sha",
    "commit_sha",
    "author_time",
    "committer_time",
)
# Analyzed, searchable fields
_TEXT_FIELDS = (
    "content",
    "message",
    "author_name",
    "author_email",
    "committer_name",
    "committer_email",
)

_BODY_FIELDS: dict[DocumentType, tuple[str, ...]] = {
    "blob": ("type", "oid", "rid", "content", "commit_sha"),
    "commit": ("type", "rid", "sha", "author", "committer", "message"),
}
_SIGNATURE_KEYS = ("name", "email", "time")

# Tantivy refuses writer heaps below ~15MB
_MIN_WRITER_HEAP_MB = 16

# Mirrors the "default" tokenizer: alphanumeric runs, lowercased, shorter
# than 40 bytes
_TOKEN_RE = re.compile(r"[^\W_]+")
_MAX_TOKEN_BYTES = 40

_Op = tuple[Literal["index", "delete"], str, dict[str, str] | None]


def field_name(path: str) -> str:
    """Map a dotted document path to its flat schema field.

    ``commit.author.name`` -> ``author_name``, ``blob.content`` -> ``content``.
    """
    head, _, rest = path.partition(".")
    if head in _BODY_FIELDS and rest:
        path = rest
    name = path.replace(".", "_")
    if name not in _KEYWORD_FIELDS and name not in _TEXT_FIELDS:
        raise StoreError.invalid_query(path, "unknown field")
    return name


def flatten_body(body: dict[str, Any]) -> tuple[DocumentType, dict[str, str]]:
    """Turn a ``{"blob": {...}}`` / ``{"commit": {...}}`` body into flat fields."""
    if len(body) != 1:
        raise StoreError.write_failed("document body must have exactly one root key")
    root, inner = next(iter(body.items()))
    if root not in _BODY_FIELDS:
        raise StoreError.write_failed(f"unknown document type {root!r}")

    flat: dict[str, str] = {}
    for key, value in inner.items():
        if isinstance(value, dict):
            for sub_key, sub_value in value.items():
                flat[f"{key}_{sub_key}"] = str(sub_value)
        elif value is not None:
            flat[key] = str(value)
    return root, flat  # type: ignore[return-value]


def query_terms(text: str, name: str) -> list[str]:
    """Terms ``text`` contributes to a query on schema field ``name``."""
    if name in _KEYWORD_FIELDS:
        return text.split()
    terms = (token.lower() for token in _TOKEN_RE.findall(text))
    return [term for term in terms if len(term.encode()) < _MAX_TOKEN_BYTES]


class TantivyDocumentStore:
    """DocumentStore backed by a local Tantivy index."""

    def __init__(self, index_path: Path | str, writer_heap_mb: int = 64) -> None:
        self.index_path = Path(index_path)
        self._heap_bytes = max(writer_heap_mb, _MIN_WRITER_HEAP_MB) * 1024 * 1024
        self._index: Any = None
        self._schema: Any = None
        self._initialized = False
        # Ordered write buffer, and each touched id's existence after it
        self._pending: list[_Op] = []
        self._pending_exists: dict[str, bool] = {}

    def _ensure_initialized(self) -> None:
        """Lazily create or open the Tantivy index."""
        if self._initialized:
            return

        schema_builder = tantivy.SchemaBuilder()
        for name in _KEYWORD_FIELDS:
            schema_builder.add_text_field(name, stored=True, tokenizer_name="raw")
        for name in _TEXT_FIELDS:
            schema_builder.add_text_field(name, stored=True, tokenizer_name="default")
        self._schema = schema_builder.build()

        self.index_path.mkdir(parents=True, exist_ok=True)
        self._index = tantivy.Index(self._schema, path=str(self.index_path))
        self._initialized = True

    # =========================================================================
    # Writes
    # =========================================================================

    def index(self, doc_id: str, body: dict[str, Any]) -> None:
        """Buffer an upsert. Replaces any document with the same id on commit."""
        _, flat = flatten_body(body)
        self._pending.append(("index", doc_id, flat))
        self._pending_exists[doc_id] = True

    def delete(self, doc_id: str) -> None:
        """Buffer a delete of an existing document."""
        exists = self._pending_exists.get(doc_id)
        if exists is None:
            exists = self._committed_exists(doc_id)
        if not exists:
            raise DocumentNotFoundError.for_id(doc_id)
        self._pending.append(("delete", doc_id, None))
        self._pending_exists[doc_id] = False

    def has_pending(self) -> bool:
        return bool(self._pending)

    def commit(self) -> int:
        """Apply buffered writes in order in one Tantivy commit.

        Returns:
            Number of operations applied.
        """
        if not self._pending:
            return 0

        self._ensure_initialized()
        ops = list(self._pending)
        self._pending.clear()
        self._pending_exists.clear()

        writer = self._index.writer(heap_size=self._heap_bytes)
        try:
            for kind, doc_id, flat in ops:
                writer.delete_documents_by_term("id", doc_id)
                if kind == "index" and flat is not None:
                    doc = tantivy.Document()
                    doc.add_text("id", doc_id)
                    for name, value in flat.items():
                        doc.add_text(name, value)
                    writer.add_document(doc)
            writer.commit()
        except (OSError, ValueError) as e:
            # OSError: filesystem errors during commit
            # ValueError: tantivy schema mismatch or corrupt index
            raise StoreError.write_failed(str(e), operations=len(ops)) from e
        finally:
            del writer

        self._index.reload()
        log.debug("store_committed", operations=len(ops))
        return len(ops)

    def discard(self) -> int:
        """Drop buffered writes without applying them."""
        count = len(self._pending)
        self._pending.clear()
        self._pending_exists.clear()
        return count

    def clear(self) -> None:
        """Remove every document from the index."""
        self._ensure_initialized()
        self.discard()
        writer = self._index.writer(heap_size=self._heap_bytes)
        writer.delete_all_documents()
        writer.commit()
        del writer
        self._index.reload()

    # =========================================================================
    # Reads
    # =========================================================================

    def _term(self, name: str, value: str) -> Any:
        return tantivy.Query.term_query(self._schema, name, value)

    def _committed_exists(self, doc_id: str) -> bool:
        self._ensure_initialized()
        searcher = self._index.searcher()
        return bool(searcher.search(self._term("id", doc_id), limit=1, count=True).count)

    def get(self, doc_id: str) -> dict[str, Any] | None:
        """Committed document body for an id, or None."""
        self._ensure_initialized()
        searcher = self._index.searcher()
        hits = searcher.search(self._term("id", doc_id), limit=1).hits
        if not hits:
            return None
        return self._to_body(searcher.doc(hits[0][1]))

    def doc_count(self) -> int:
        self._ensure_initialized()
        return int(self._index.searcher().num_docs)

    def search(self, request: SearchRequest) -> SearchPage:
        """Run a search request against committed documents."""
        self._ensure_initialized()
        if not request.match_all and not request.text.strip():
            return SearchPage()

        query = self._build_query(request)
        if query is None:
            return SearchPage()
        searcher = self._index.searcher()
        result = searcher.search(query, limit=request.size, count=True, offset=request.offset)

        generators = {
            name: tantivy.SnippetGenerator.create(searcher, query, self._schema, field_name(name))
            for name in request.highlight
        }

        page = SearchPage(total=int(result.count or 0))
        for score, doc_addr in result.hits:
            doc = searcher.doc(doc_addr)
            highlight: dict[str, list[str]] = {}
            for name, generator in generators.items():
                fragment = generator.snippet_from_doc(doc).to_html()
                if fragment:
                    highlight[name] = [fragment]
            page.hits.append(
                SearchHit(
                    id=doc.get_first("id") or "",
                    score=float(score),
                    source=self._to_body(doc),
                    highlight=highlight,
                )
            )
        return page

    def _build_query(self, request: SearchRequest) -> Any | None:
        """Boolean query for a request, None when the text yields no terms."""
        if request.match_all:
            main = tantivy.Query.const_score_query(tantivy.Query.all_query(), 1.0)
        else:
            per_field = []
            for fb in request.fields:
                q = self._field_query(request.text, field_name(fb.name), request.operator)
                if q is None:
                    continue
                if fb.boost != 1:
                    q = tantivy.Query.boost_query(q, float(fb.boost))
                per_field.append(q)
            if not per_field:
                return None
            if len(per_field) == 1:
                main = per_field[0]
            else:
                main = tantivy.Query.disjunction_max_query(per_field)

        filters = [self._term("type", request.doc_type)]
        if request.rid is not None:
            filters.append(self._term("rid", request.rid))
        # Filters must match but never change the score
        clauses = [(tantivy.Occur.Must, main)]
        clauses.extend(
            (tantivy.Occur.Must, tantivy.Query.const_score_query(f, 0.0)) for f in filters
        )
        return tantivy.Query.boolean_query(clauses)

    def _field_query(self, text: str, name: str, operator: str) -> Any | None:
        # Built from terms, never parsed: user text carries no query syntax
        terms = [self._term(name, term) for term in query_terms(text, name)]
        if not terms:
            return None
        if len(terms) == 1:
            return terms[0]
        occur = tantivy.Occur.Must if operator == "and" else tantivy.Occur.Should
        return tantivy.Query.boolean_query([(occur, term) for term in terms])

    def _to_body(self, doc: Any) -> dict[str, Any]:
        doc_type: DocumentType = doc.get_first("type")
        inner: dict[str, Any] = {}
        for key in _BODY_FIELDS[doc_type]:
            if key in ("author", "committer"):
                inner[key] = {sub: doc.get_first(f"{key}_{sub}") for sub in _SIGNATURE_KEYS}
            else:
                inner[key] = doc.get_first(key)
        return {doc_type: inner}
