"""Exception hierarchy raised by fx_glance."""

from __future__ import annotations

from pathlib import Path
from typing import Any


class FxGlanceError(RuntimeError):
    """Base class for every failure that ends a run."""


class CredentialError(FxGlanceError):
    """The API key could not be used."""

    def __init__(self, message: str, path: Path | str) -> None:
        super().__init__(message)
        self.path = Path(path)


class MissingCredentialError(CredentialError):
    """The API key file is absent, unreadable or empty."""


class InvalidCredentialError(CredentialError):
    """The API key is not exactly 32 characters long."""


class CacheError(FxGlanceError):
    """Raised for unreadable cache contents. Never fatal for a run."""


class FetchError(FxGlanceError):
    """The HTTP request to the rates provider did not complete."""


class RemoteError(FxGlanceError):
    """The rates provider answered with an error payload or status."""

    def __init__(
        self,
        message: str,
        *,
        payload: dict[str, Any] | None = None,
        status_code: int | None = None,
    ) -> None:
        super().__init__(message)
        self.payload = payload or {}
        self.status_code = status_code


class MalformedResponseError(FxGlanceError):
    """A payload was not valid JSON or lacked the required rates."""


class RateCalculationError(FxGlanceError, ValueError):
    """A cross-rate could not be derived from the supplied rates."""


class PipelineError(FxGlanceError):
    """A stage was run before the data it needs was available."""


__all__ = [
    "FxGlanceError",
    "CredentialError",
    "MissingCredentialError",
    "InvalidCredentialError",
    "CacheError",
    "FetchError",
    "RemoteError",
    "MalformedResponseError",
    "RateCalculationError",
    "PipelineError",
]
