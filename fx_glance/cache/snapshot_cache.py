"""Read, age-check and write the cached ``currentRates.json`` snapshot."""

from __future__ import annotations

import json
import time
from pathlib import Path
from typing import Callable, Iterable

from fx_glance.config import DEFAULT_CACHE_PATH, STALENESS_SECONDS
from fx_glance.errors import CacheError, MalformedResponseError
from fx_glance.ingestion.models import RateSnapshot
from fx_glance.utils.logger import get_logger

LOGGER = get_logger(__name__)

__all__ = ["SnapshotCache"]


class SnapshotCache:
    """File-backed cache holding the most recent provider response verbatim."""

    def __init__(
        self,
        path: str | Path = DEFAULT_CACHE_PATH,
        *,
        max_age_seconds: int = STALENESS_SECONDS,
        required: Iterable[str] = ("AUD", "EUR"),
        clock: Callable[[], float] = time.time,
    ) -> None:
        self.path = Path(path)
        self.max_age_seconds = max_age_seconds
        self.required = tuple(code.upper() for code in required)
        self.clock = clock

    @property
    def max_age_ms(self) -> int:
        return self.max_age_seconds * 1000

    def _decode(self, contents: str) -> RateSnapshot:
        try:
            payload = json.loads(contents)
        except json.JSONDecodeError as exc:
            raise CacheError(f"Cached data in {self.path} is not valid JSON: {exc}") from exc
        if isinstance(payload, dict) and payload.get("error"):
            raise CacheError(f"Cached data in {self.path} holds an error payload")
        try:
            return RateSnapshot.from_payload(payload, required=self.required, raw=contents)
        except MalformedResponseError as exc:
            raise CacheError(f"Cached data in {self.path} is unusable: {exc}") from exc

    def read(self) -> RateSnapshot | None:
        """Return the cached snapshot, or ``None`` when missing or corrupt."""

        try:
            contents = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            LOGGER.info("Cached data file missing...")
            return None
        except (OSError, UnicodeDecodeError) as exc:
            LOGGER.warning("Unable to read cached data from %s: %s", self.path, exc)
            return None
        try:
            return self._decode(contents)
        except CacheError as exc:
            LOGGER.warning("%s", exc)
            return None

    def is_fresh(self, snapshot: RateSnapshot, now: float | None = None) -> bool:
        """A snapshot is fresh while its age is at most ``max_age_seconds``."""

        current = self.clock() if now is None else now
        return snapshot.age_ms(current) <= self.max_age_ms

    def load_fresh(self) -> RateSnapshot | None:
        snapshot = self.read()
        if snapshot is None:
            return None
        if not self.is_fresh(snapshot):
            LOGGER.info(
                "Cached data from %s is older than %s seconds",
                snapshot.updated_at().isoformat(),
                self.max_age_seconds,
            )
            return None
        LOGGER.debug("Using cached data from %s", self.path)
        return snapshot

    def write(self, raw_body: str) -> bool:
        """Overwrite the cache file with ``raw_body``; failures are logged, not raised."""

        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(raw_body, encoding="utf-8")
        except OSError as exc:
            LOGGER.error("Unable to write cached data to %s: %s", self.path, exc)
            return False
        LOGGER.debug("Saved %s bytes of rates data to %s", len(raw_body), self.path)
        return True
