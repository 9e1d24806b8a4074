"""Catalog snapshot ingestion: remote fetch, local cache and periodic refresh."""

from __future__ import annotations

import json
import logging
import os
import threading
from pathlib import Path
from typing import Any

import requests

from catalog import CatalogFormatError, parse_catalog
from store import SnapshotStore

# wg21.link publishes the full paper index as a single JSON object keyed by id.
_DEFAULT_INDEX_URL = "https://wg21.link/index.json"
_DEFAULT_CACHE_PATH = "index.json"
_DEFAULT_REFRESH_INTERVAL_SECONDS = 86400
REQUEST_TIMEOUT_SECONDS = 30

LOGGER = logging.getLogger(__name__)

_REFRESH_ERRORS = (requests.RequestException, CatalogFormatError, ValueError)


def _cache_path() -> str:
    return os.getenv("CATALOG_CACHE_PATH", _DEFAULT_CACHE_PATH)


def fetch_catalog_payload(url: str | None = None) -> dict[str, Any]:
    """Download the raw index snapshot.

    Raises requests.RequestException on transport errors, ValueError on a body
    that is not JSON and CatalogFormatError when the JSON is not an object.
    """
    url = url or os.getenv("PAPERS_INDEX_URL", _DEFAULT_INDEX_URL)
    response = requests.get(url, timeout=REQUEST_TIMEOUT_SECONDS)
    response.raise_for_status()
    payload = response.json()
    if not isinstance(payload, dict):
        raise CatalogFormatError(f"Unexpected catalog payload from {url}: expected an object")
    LOGGER.info("Catalog fetch: url=%s entries=%s", url, len(payload))
    return payload


def read_cache(path: str | Path | None = None) -> Any:
    path = Path(path or _cache_path())
    with path.open(encoding="utf-8") as fh:
        return json.load(fh)


def write_cache(payload: dict[str, Any], path: str | Path | None = None) -> None:
    """Write to a temp file, then rename it over the old cache."""
    path = Path(path or _cache_path())
    tmp_path = path.with_name(path.name + ".tmp")
    with tmp_path.open("w", encoding="utf-8") as fh:
        json.dump(payload, fh)
    tmp_path.replace(path)
    LOGGER.info("Catalog cache written: path=%s entries=%s", path, len(payload))


def refresh_catalog(
    store: SnapshotStore,
    url: str | None = None,
    cache_path: str | Path | None = None,
) -> bool:
    """Fetch a fresh snapshot and publish it; on any failure keep the current one.

    Returns True when a new snapshot was published.
    """
    try:
        payload = fetch_catalog_payload(url)
        catalog = parse_catalog(payload)
    except _REFRESH_ERRORS as exc:
        LOGGER.warning("Catalog refresh failed, keeping snapshot version=%s: %s", store.current().version, exc)
        return False

    if len(catalog) == 0:
        LOGGER.warning("Catalog refresh returned no usable papers, keeping snapshot version=%s", store.current().version)
        return False

    store.publish(catalog)

    try:
        write_cache(payload, cache_path)
    except OSError as exc:
        LOGGER.warning("Catalog cache write failed (non-fatal): %s", exc)
    return True


def load_from_file(store: SnapshotStore, path: str | Path) -> bool:
    """Publish a snapshot read from a local JSON file. Returns False if unusable."""
    try:
        catalog = parse_catalog(read_cache(path))
    except (OSError, ValueError, CatalogFormatError) as exc:
        LOGGER.warning("Catalog load from %s failed: %s", path, exc)
        return False
    if len(catalog) == 0:
        LOGGER.warning("Catalog file %s has no usable papers", path)
        return False
    store.publish(catalog)
    return True


def bootstrap_catalog(
    store: SnapshotStore,
    url: str | None = None,
    cache_path: str | Path | None = None,
    fallback_path: str | Path | None = None,
) -> bool:
    """Initial load: remote first, then the local cache, then a bundled fallback file.

    The fallback defaults to CATALOG_FALLBACK_PATH when not given.
    """
    if refresh_catalog(store, url=url, cache_path=cache_path):
        return True

    candidates = [Path(cache_path or _cache_path())]
    fallback_path = fallback_path or os.getenv("CATALOG_FALLBACK_PATH")
    if fallback_path:
        candidates.append(Path(fallback_path))

    for candidate in candidates:
        if candidate.exists() and load_from_file(store, candidate):
            LOGGER.info("Catalog loaded from local file %s", candidate)
            return True

    LOGGER.error("No catalog available: remote fetch and local files all failed")
    return False


class CatalogRefresher(threading.Thread):
    """Daemon thread that calls refresh_catalog every ``interval`` seconds until stopped."""

    def __init__(
        self,
        store: SnapshotStore,
        interval: float | None = None,
        url: str | None = None,
        cache_path: str | Path | None = None,
    ) -> None:
        super().__init__(name="catalog-refresher", daemon=True)
        self.store = store
        if interval is None:
            interval = float(os.environ.get("REFRESH_INTERVAL_SECONDS", _DEFAULT_REFRESH_INTERVAL_SECONDS))
        self.interval = interval
        self.url = url
        self.cache_path = cache_path
        self._stopped = threading.Event()

    def run(self) -> None:
        LOGGER.info("Catalog refresher started: interval=%ss", self.interval)
        while not self._stopped.wait(self.interval):
            try:
                refresh_catalog(self.store, url=self.url, cache_path=self.cache_path)
            except Exception:  # a failed cycle must not stop the thread
                LOGGER.exception("Unexpected error during catalog refresh")

    def stop(self) -> None:
        self._stopped.set()
