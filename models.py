"""Shared typed models for the paper bot."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal


@dataclass(frozen=True, slots=True)
class PaperRecord:
    """Normalized catalog entry used across lookup, search and rendering."""

    paper_id: str
    title: str
    link: str
    author: str | None = None
    date: str | None = None
    type: str | None = None
    subgroup: str | None = None
    related_issues: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class QueryRequest:
    """Structured request produced by the chat glue."""

    kind: Literal["lookup", "search"]
    raw_text: str
    type_filter: str | None = None


@dataclass(frozen=True, slots=True)
class PaperFound:
    record: PaperRecord


@dataclass(frozen=True, slots=True)
class NotFound:
    query: str


@dataclass(frozen=True, slots=True)
class NoResults:
    query: str


@dataclass(frozen=True, slots=True)
class SearchPage:
    """Ranked search hits split into the detailed and overflow tiers."""

    detailed: tuple[str, ...]
    overflow: tuple[str, ...] = ()


QueryResult = PaperFound | NotFound | NoResults | SearchPage
