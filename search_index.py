"""In-memory text index over a catalog snapshot.

The index only matches; it never truncates. Ordering by recency and the
detailed/overflow split happen afterwards in ranking.py.
"""

from __future__ import annotations

import bisect
import logging
import re
from collections.abc import Iterable, Mapping
from dataclasses import dataclass

from models import PaperRecord

LOGGER = logging.getLogger(__name__)

_TOKEN_RE = re.compile(r"\w+")

# Adjacent query tokens only earn a proximity bonus when they occur at most
# this many positions apart in the document.
DEFAULT_DEPTH = 2


@dataclass(frozen=True, slots=True)
class SearchDocument:
    """Searchable projection of one PaperRecord."""

    paper_id: str
    blob: str
    type: str | None = None
    date: str | None = None

    @classmethod
    def from_record(cls, record: PaperRecord) -> SearchDocument:
        fields = (record.paper_id, record.title, record.author, record.date)
        return cls(
            paper_id=record.paper_id,
            blob=" ".join(field for field in fields if field),
            type=record.type,
            date=record.date,
        )


def tokenize(text: str) -> list[str]:
    """Lowercase word tokens; no stemming, no normalization beyond case."""
    return _TOKEN_RE.findall((text or "").lower())


class SearchIndex:
    """Inverted index: token -> {paper_id: positions}, plus sorted ids for prefix lookups."""

    def __init__(self, documents: Iterable[SearchDocument], depth: int = DEFAULT_DEPTH) -> None:
        self.depth = depth
        self._documents: dict[str, SearchDocument] = {}
        self._postings: dict[str, dict[str, list[int]]] = {}

        for doc in documents:
            self._documents[doc.paper_id] = doc
            for position, token in enumerate(tokenize(doc.blob)):
                self._postings.setdefault(token, {}).setdefault(doc.paper_id, []).append(position)

        self._sorted_ids: list[tuple[str, str]] = sorted(
            (paper_id.lower(), paper_id) for paper_id in self._documents
        )
        LOGGER.debug("Search index built: documents=%s tokens=%s", len(self._documents), len(self._postings))

    @classmethod
    def from_catalog(cls, catalog: Mapping[str, PaperRecord], depth: int = DEFAULT_DEPTH) -> SearchIndex:
        return cls((SearchDocument.from_record(record) for record in catalog.values()), depth=depth)

    def __len__(self) -> int:
        return len(self._documents)

    def search(self, query: str, type: str | None = None) -> list[str]:
        """Return ids of every document matching all query tokens.

        Each token matches a word of the blob exactly, or a prefix of the
        identifier. With ``type`` set, only documents of that type are eligible.
        Results come back by shallow relevance (descending), then id.
        """
        tokens = list(dict.fromkeys(tokenize(query)))
        if not tokens:
            return []

        matched: set[str] | None = None
        for token in tokens:
            candidates = set(self._postings.get(token, {})) | self._id_prefix_matches(token)
            matched = candidates if matched is None else matched & candidates
            if not matched:
                return []

        if type is not None:
            matched = {paper_id for paper_id in matched if self._documents[paper_id].type == type}

        scored = sorted(matched, key=lambda paper_id: (-self._score(paper_id, tokens), paper_id))
        LOGGER.debug("Search: query=%r type=%s hits=%s", query, type, len(scored))
        return scored

    def _id_prefix_matches(self, token: str) -> set[str]:
        start = bisect.bisect_left(self._sorted_ids, (token, ""))
        found: set[str] = set()
        for lowered, paper_id in self._sorted_ids[start:]:
            if not lowered.startswith(token):
                break
            found.add(paper_id)
        return found

    def _score(self, paper_id: str, tokens: list[str]) -> int:
        score = len(tokens)
        for first, second in zip(tokens, tokens[1:]):
            first_positions = self._postings.get(first, {}).get(paper_id)
            second_positions = self._postings.get(second, {}).get(paper_id)
            if not first_positions or not second_positions:
                continue
            if any(abs(a - b) <= self.depth for a in first_positions for b in second_positions):
                score += 1
        return score
