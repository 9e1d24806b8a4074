"""Recency ordering and pagination of search hits."""

from __future__ import annotations

import functools
from collections.abc import Callable, Sequence

from models import SearchPage

MAX_RESULTS = 30
DETAILED_RESULTS = 15


def parse_date(value: str | None) -> tuple[int, int, int] | None:
    """Split ``YYYY-MM-DD`` into integers; anything else counts as missing."""
    if not value:
        return None
    parts = value.strip().split("-")
    if len(parts) != 3:
        return None
    try:
        year, month, day = (int(part) for part in parts)
    except ValueError:
        return None
    return year, month, day


def compare_dates(x: str | None, y: str | None) -> int:
    """Comparator placing later dates first and missing dates last.

    Returns a negative number when ``x`` sorts before ``y``.
    """
    x_parts = parse_date(x)
    y_parts = parse_date(y)
    if x_parts is None and y_parts is None:
        return 0
    if x_parts is None:
        return 1
    if y_parts is None:
        return -1
    # year, then month, then day; later first
    for x_part, y_part in zip(x_parts, y_parts):
        if x_part != y_part:
            return -1 if x_part > y_part else 1
    return 0


def sort_by_date(paper_ids: Sequence[str], date_of: Callable[[str], str | None]) -> list[str]:
    """Stable sort of ``paper_ids`` by date descending; ties keep their input order."""
    return sorted(
        paper_ids,
        key=functools.cmp_to_key(lambda x, y: compare_dates(date_of(x), date_of(y))),
    )


def paginate(
    ranked_ids: Sequence[str],
    max_results: int = MAX_RESULTS,
    detailed: int = DETAILED_RESULTS,
) -> SearchPage:
    """Truncate to ``max_results`` and split off the first ``detailed`` ids."""
    kept = tuple(ranked_ids[:max_results])
    return SearchPage(detailed=kept[:detailed], overflow=kept[detailed:])


def rank(paper_ids: Sequence[str], date_of: Callable[[str], str | None]) -> SearchPage | None:
    """Sort then paginate; None when there is nothing to rank."""
    if not paper_ids:
        return None
    return paginate(sort_by_date(paper_ids, date_of))
