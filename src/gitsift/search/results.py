"""What a search returns: matching documents, one page at a time."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass
class SearchHit:
    """A single matching document."""

    id: str
    score: float
    source: dict[str, Any]
    highlight: dict[str, list[str]] = field(default_factory=dict)


@dataclass
class SearchPage:
    """One page of hits plus the total number of matches."""

    hits: list[SearchHit] = field(default_factory=list)
    total: int = 0
