"""Versioned catalog snapshots with an atomic publish."""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any

from catalog import Catalog, parse_catalog
from models import PaperRecord
from search_index import SearchIndex

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Snapshot:
    """One immutable catalog version together with the index derived from it."""

    catalog: Catalog
    index: SearchIndex
    version: int = 0
    loaded_at: datetime = field(default_factory=lambda: datetime.now(UTC))

    @classmethod
    def build(cls, catalog: Catalog, version: int = 0) -> Snapshot:
        return cls(catalog=catalog, index=SearchIndex.from_catalog(catalog), version=version)


EMPTY_SNAPSHOT = Snapshot.build(Catalog())


class SnapshotStore:
    """Holds the active Snapshot.

    Readers call ``current()`` once per query and keep the reference. Writers
    build the next snapshot outside the lock; only the pointer swap is guarded.
    """

    def __init__(self, initial: Snapshot = EMPTY_SNAPSHOT) -> None:
        self._snapshot = initial
        self._lock = threading.Lock()

    def current(self) -> Snapshot:
        return self._snapshot

    @property
    def is_empty(self) -> bool:
        return len(self._snapshot.catalog) == 0

    def load(self, payload: Any) -> Catalog:
        """Parse ``payload``, index it and publish it as the new active snapshot.

        Raises CatalogFormatError on a malformed payload, in which case the
        active snapshot is left untouched.
        """
        catalog = parse_catalog(payload)
        self.publish(catalog)
        return catalog

    def publish(self, catalog: Catalog) -> Snapshot:
        index = SearchIndex.from_catalog(catalog)
        with self._lock:
            snapshot = Snapshot(catalog=catalog, index=index, version=self._snapshot.version + 1)
            self._snapshot = snapshot
        LOGGER.info("Published catalog snapshot version=%s papers=%s", snapshot.version, len(catalog))
        return snapshot

    def get(self, paper_id: str) -> PaperRecord | None:
        return self._snapshot.catalog.get(paper_id)
