"""Public interface for the fx_glance package."""

from __future__ import annotations

from importlib import metadata as importlib_metadata

from fx_glance.cache.snapshot_cache import SnapshotCache
from fx_glance.config import GlanceConfig, Thresholds
from fx_glance.errors import (
    CacheError,
    CredentialError,
    FetchError,
    FxGlanceError,
    InvalidCredentialError,
    MalformedResponseError,
    MissingCredentialError,
    PipelineError,
    RateCalculationError,
    RemoteError,
)
from fx_glance.ingestion.models import CrossRate, Credential, RateSnapshot
from fx_glance.pipeline import RunContext, run_pipeline
from fx_glance.utils.cross_rate import cross_rate, derive_cross_rate

__all__ = [
    "__version__",
    "CacheError",
    "CredentialError",
    "Credential",
    "CrossRate",
    "FetchError",
    "FxGlanceError",
    "GlanceConfig",
    "InvalidCredentialError",
    "MalformedResponseError",
    "MissingCredentialError",
    "PipelineError",
    "RateCalculationError",
    "RateSnapshot",
    "RemoteError",
    "RunContext",
    "SnapshotCache",
    "Thresholds",
    "cross_rate",
    "derive_cross_rate",
    "run_pipeline",
]

try:
    __version__ = importlib_metadata.version("fx-glance")
except importlib_metadata.PackageNotFoundError:  # pragma: no cover - fallback for local runs
    __version__ = "1.0.0"
