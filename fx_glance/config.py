"""Runtime configuration for a single fx_glance run."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Final

DEFAULT_CACHE_PATH: Final[Path] = Path("currentRates.json")
DEFAULT_API_KEY_PATH: Final[Path] = Path("api_key.txt")
DEFAULT_BASE_URL: Final[str] = "https://openexchangerates.org"
DEFAULT_ENDPOINT: Final[str] = "/api/latest.json"
STALENESS_SECONDS: Final[int] = 60 * 60
DEFAULT_TIMEOUT: Final[float] = 30.0
USER_AGENT: Final[str] = "fx-glance/1.0"

__all__ = [
    "DEFAULT_API_KEY_PATH",
    "DEFAULT_BASE_URL",
    "DEFAULT_CACHE_PATH",
    "DEFAULT_ENDPOINT",
    "DEFAULT_TIMEOUT",
    "STALENESS_SECONDS",
    "USER_AGENT",
    "GlanceConfig",
    "Thresholds",
]


@dataclass(frozen=True, slots=True)
class Thresholds:
    """Values above which each direction of the pair is highlighted."""

    base_to_quote: float = 1.50
    quote_to_base: float = 0.70


def _default_symbols() -> dict[str, str]:
    return {"AUD": "$", "EUR": "€", "USD": "$", "GBP": "£"}


@dataclass(slots=True)
class GlanceConfig:
    """Everything a run needs besides the API key itself."""

    cache_path: Path = DEFAULT_CACHE_PATH
    api_key_path: Path = DEFAULT_API_KEY_PATH
    base_url: str = DEFAULT_BASE_URL
    endpoint: str = DEFAULT_ENDPOINT
    timeout: float = DEFAULT_TIMEOUT
    max_age_seconds: int = STALENESS_SECONDS
    base_currency: str = "EUR"
    quote_currency: str = "AUD"
    thresholds: Thresholds = field(default_factory=Thresholds)
    symbols: dict[str, str] = field(default_factory=_default_symbols)
    color: bool = True
    refresh: bool = False

    def __post_init__(self) -> None:
        self.cache_path = Path(self.cache_path)
        self.api_key_path = Path(self.api_key_path)
        self.base_currency = self.base_currency.upper()
        self.quote_currency = self.quote_currency.upper()
        if self.base_currency == self.quote_currency:
            raise ValueError("base and quote currencies must differ")
        if self.timeout <= 0:
            raise ValueError("timeout must be positive")
        if self.max_age_seconds < 0:
            raise ValueError("max_age_seconds must not be negative")

    @property
    def required_currencies(self) -> tuple[str, str]:
        return (self.quote_currency, self.base_currency)

    def symbol_for(self, code: str) -> str:
        return self.symbols.get(code.upper(), "")

    def with_overrides(self, **overrides: Any) -> "GlanceConfig":
        """Return a copy with every non-``None`` override applied."""

        cleaned = {key: value for key, value in overrides.items() if value is not None}
        return replace(self, **cleaned)
