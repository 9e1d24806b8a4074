"""Query execution against a single catalog snapshot.

Every function here takes the snapshot explicitly and never raises on user
input: unknown ids become NotFound, empty searches become NoResults.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from identifiers import resolve_identifier
from models import NoResults, NotFound, PaperFound, QueryRequest, QueryResult, SearchPage
from ranking import rank
from store import Snapshot

LOGGER = logging.getLogger(__name__)


def lookup(snapshot: Snapshot, raw_text: str) -> PaperFound | NotFound:
    """Resolve ``raw_text`` to a paper, expanding bare P/D ids to their latest revision."""
    paper_id = resolve_identifier(raw_text or "", snapshot.catalog)
    record = snapshot.catalog.get(paper_id) if paper_id else None
    if record is None:
        LOGGER.info("Lookup: raw=%r resolved=%s found=False", raw_text, paper_id)
        return NotFound(query=raw_text)
    LOGGER.info("Lookup: raw=%r resolved=%s found=True", raw_text, paper_id)
    return PaperFound(record=record)


def search(snapshot: Snapshot, query: str, type_filter: str | None = None) -> SearchPage | NoResults:
    """Match, then rank by date, then paginate."""
    hits = snapshot.index.search(query, type=type_filter)
    page = rank(hits, _date_lookup(snapshot))
    LOGGER.info(
        "Search: query=%r type=%s hits=%s detailed=%s overflow=%s",
        query,
        type_filter,
        len(hits),
        len(page.detailed) if page else 0,
        len(page.overflow) if page else 0,
    )
    if page is None:
        return NoResults(query=query)
    return page


def answer(snapshot: Snapshot, request: QueryRequest) -> QueryResult:
    if request.kind == "lookup":
        return lookup(snapshot, request.raw_text)
    if request.kind == "search":
        return search(snapshot, request.raw_text, request.type_filter)
    raise ValueError(f"Unknown query kind: {request.kind!r}")


def _date_lookup(snapshot: Snapshot) -> Callable[[str], str | None]:
    def date_of(paper_id: str) -> str | None:
        record = snapshot.catalog.get(paper_id)
        return record.date if record else None

    return date_of
