"""Cross-rate arithmetic between two currencies quoted against a common base."""

from __future__ import annotations

import math

from fx_glance.errors import RateCalculationError
from fx_glance.ingestion.models import CrossRate, RateSnapshot

DEFAULT_PRECISION = 4

__all__ = ["DEFAULT_PRECISION", "cross_rate", "derive_cross_rate"]


def _checked(value: float | None, label: str) -> float:
    if value is None:
        raise RateCalculationError(f"Rate for {label} is missing")
    if not math.isfinite(value) or value <= 0:
        raise RateCalculationError(f"Rate for {label} must be a positive number, got {value}")
    return float(value)


def cross_rate(r1: float, r2: float, precision: int = DEFAULT_PRECISION) -> float:
    """Return ``r1 / r2`` rounded to ``precision`` decimal places."""

    numerator = _checked(r1, "numerator")
    denominator = _checked(r2, "denominator")
    return round(numerator / denominator, precision)


def derive_cross_rate(
    snapshot: RateSnapshot,
    base: str = "EUR",
    quote: str = "AUD",
    precision: int = DEFAULT_PRECISION,
) -> CrossRate:
    """Compute how much ``quote`` one ``base`` buys, and the reverse.

    Snapshot rates are expressed per unit of the provider's base currency, so
    ``rates[quote] / rates[base]`` is the number of ``quote`` units per
    ``base``. The inverse is taken from the unrounded ratio before rounding.
    """

    base_code = base.upper()
    quote_code = quote.upper()
    base_rate = _checked(snapshot.rate(base_code), base_code)
    quote_rate = _checked(snapshot.rate(quote_code), quote_code)
    ratio = quote_rate / base_rate
    return CrossRate(
        base=base_code,
        quote=quote_code,
        rate=round(ratio, precision),
        inverse=round(1 / ratio, precision),
    )
