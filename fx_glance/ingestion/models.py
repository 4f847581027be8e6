"""Data models shared across the fetch, cache and display stages."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Any, Iterable, Mapping

from fx_glance.errors import MalformedResponseError

CREDENTIAL_LENGTH = 32


@dataclass(frozen=True, slots=True)
class RateSnapshot:
    """One response from the rates provider: a timestamp plus per-currency rates."""

    timestamp: int
    rates: Mapping[str, float]
    base: str = "USD"
    raw: str | None = field(default=None, compare=False, repr=False)

    @classmethod
    def from_payload(
        cls,
        payload: Any,
        *,
        required: Iterable[str] = ("AUD", "EUR"),
        raw: str | None = None,
    ) -> "RateSnapshot":
        """Validate a decoded JSON payload and build a snapshot from it.

        Only the currencies listed in ``required`` must be present; any other
        entry that is not a number is dropped rather than rejected.
        """

        if not isinstance(payload, dict):
            raise MalformedResponseError("Rates payload must be a JSON object")
        timestamp = payload.get("timestamp")
        if isinstance(timestamp, bool) or not isinstance(timestamp, (int, float)):
            raise MalformedResponseError("Rates payload is missing a numeric timestamp")
        try:
            if not math.isfinite(timestamp):
                raise MalformedResponseError(f"Rates payload timestamp must be finite, got {timestamp}")
            datetime.fromtimestamp(timestamp).astimezone()
        except (OverflowError, OSError, ValueError) as exc:
            raise MalformedResponseError(f"Rates payload timestamp {timestamp} is out of range") from exc
        raw_rates = payload.get("rates")
        if not isinstance(raw_rates, dict):
            raise MalformedResponseError("Rates missing from data!")

        rates: dict[str, float] = {}
        for code, value in raw_rates.items():
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                continue
            rates[str(code).upper()] = float(value)

        missing = [code for code in required if code.upper() not in rates]
        if missing:
            raise MalformedResponseError(f"Rates missing from data: {', '.join(missing)}")
        for code in required:
            value = rates[code.upper()]
            if not math.isfinite(value) or value <= 0:
                raise MalformedResponseError(f"Rate for {code.upper()} must be positive, got {value}")

        return cls(
            timestamp=int(timestamp),
            rates=rates,
            base=str(payload.get("base") or "USD").upper(),
            raw=raw,
        )

    def age_ms(self, now: float) -> float:
        """Milliseconds elapsed between the snapshot timestamp and ``now`` (seconds)."""

        return now * 1000 - self.timestamp * 1000

    def updated_at(self) -> datetime:
        """Return the snapshot timestamp as an aware local datetime."""

        return datetime.fromtimestamp(self.timestamp).astimezone()

    def rate(self, code: str) -> float | None:
        return self.rates.get(code.upper())


@dataclass(frozen=True, slots=True)
class Credential:
    """An openexchangerates.org App ID together with the file it came from."""

    value: str
    source: Path

    @property
    def masked(self) -> str:
        return f"{self.value[:4]}…{self.value[-2:]}" if self.value else ""

    def __repr__(self) -> str:
        return f"Credential(value={self.masked!r}, source={str(self.source)!r})"

    def __str__(self) -> str:
        return self.masked


@dataclass(frozen=True, slots=True)
class CrossRate:
    """How many ``quote`` units one ``base`` unit buys, plus the inverse."""

    base: str
    quote: str
    rate: float
    inverse: float
