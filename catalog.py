"""Paper catalog: parsing a raw index snapshot into an immutable lookup table."""

from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping
from types import MappingProxyType
from typing import Any

from models import PaperRecord

LOGGER = logging.getLogger(__name__)


class CatalogFormatError(RuntimeError):
    """Raised when a snapshot payload does not have the expected shape."""


class Catalog(Mapping[str, PaperRecord]):
    """Read-only mapping from uppercase paper id to PaperRecord.

    Lookups are case-insensitive. There is no mutation API: a refresh builds a
    new Catalog and replaces the old one wholesale.
    """

    __slots__ = ("_records",)

    def __init__(self, records: Mapping[str, PaperRecord] | None = None) -> None:
        normalized = {key.upper(): record for key, record in (records or {}).items()}
        self._records: Mapping[str, PaperRecord] = MappingProxyType(normalized)

    def __getitem__(self, paper_id: str) -> PaperRecord:
        return self._records[paper_id.upper()]

    def __contains__(self, paper_id: object) -> bool:
        return isinstance(paper_id, str) and paper_id.upper() in self._records

    def __iter__(self) -> Iterator[str]:
        return iter(self._records)

    def __len__(self) -> int:
        return len(self._records)

    def get(self, paper_id: str, default: PaperRecord | None = None) -> PaperRecord | None:  # type: ignore[override]
        if not isinstance(paper_id, str):
            return default
        return self._records.get(paper_id.upper(), default)

    def __repr__(self) -> str:
        return f"Catalog(size={len(self)})"


def parse_catalog(payload: Any) -> Catalog:
    """Parse a snapshot payload (id -> fields mapping) into a Catalog.

    Entries without a title or a link are skipped; everything else is kept.
    """
    if not isinstance(payload, dict):
        raise CatalogFormatError("Unexpected catalog payload shape: expected an object")

    records: dict[str, PaperRecord] = {}
    skipped = 0
    for raw_id, item in payload.items():
        record = _parse_record(raw_id, item)
        if record is None:
            skipped += 1
            continue
        records[record.paper_id] = record

    if skipped:
        LOGGER.warning("Catalog parse: kept=%s skipped=%s", len(records), skipped)
    else:
        LOGGER.debug("Catalog parse: kept=%s", len(records))
    return Catalog(records)


def _parse_record(raw_id: Any, item: Any) -> PaperRecord | None:
    paper_id = _as_str(raw_id)
    if paper_id is None or not isinstance(item, dict):
        return None

    title = _as_str(item.get("title"))
    link = _as_str(item.get("link")) or _as_str(item.get("long_link"))
    if not title or not link:
        return None

    issues = item.get("issues")
    related = [issue.strip() for issue in issues if _as_str(issue)] if isinstance(issues, list) else []
    github_url = _as_str(item.get("github_url"))
    if github_url:
        related.append(github_url)

    return PaperRecord(
        paper_id=paper_id.upper(),
        title=title,
        link=link,
        author=_as_str(item.get("author")),
        date=_as_str(item.get("date")),
        type=_as_str(item.get("type")),
        subgroup=_as_str(item.get("subgroup")),
        related_issues=tuple(related),
    )


def _as_str(value: Any) -> str | None:
    return value.strip() if isinstance(value, str) and value.strip() else None
