"""Load → fetch → present, with an explicit context passed between stages."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Literal, Protocol

from fx_glance.cache.snapshot_cache import SnapshotCache
from fx_glance.config import GlanceConfig
from fx_glance.display.summary import SummaryPresenter
from fx_glance.errors import PipelineError
from fx_glance.ingestion.credentials import load_credential
from fx_glance.ingestion.models import Credential, CrossRate, RateSnapshot
from fx_glance.ingestion.openexchangerates import OpenExchangeRatesClient, parse_rates_body
from fx_glance.utils.cross_rate import derive_cross_rate
from fx_glance.utils.logger import get_logger

LOGGER = get_logger(__name__)

SnapshotSource = Literal["cache", "remote"]

__all__ = [
    "RatesFetcher",
    "RunContext",
    "load_stage",
    "fetch_stage",
    "present_stage",
    "run_pipeline",
]


class RatesFetcher(Protocol):
    """Anything that can return the raw latest-rates body for a credential."""

    def fetch_raw(self, credential: Credential | str) -> tuple[str, int]:
        ...  # pragma: no cover - protocol definition


@dataclass(slots=True)
class RunContext:
    """State carried from one stage to the next during a single run."""

    config: GlanceConfig
    snapshot: RateSnapshot | None = None
    source: SnapshotSource | None = None
    cross: CrossRate | None = None
    cache_written: bool | None = None

    def build_cache(self, clock: Callable[[], float] | None = None) -> SnapshotCache:
        kwargs = {"clock": clock} if clock is not None else {}
        return SnapshotCache(
            self.config.cache_path,
            max_age_seconds=self.config.max_age_seconds,
            required=self.config.required_currencies,
            **kwargs,
        )


def load_stage(context: RunContext, cache: SnapshotCache) -> RunContext:
    """Fill ``context.snapshot`` from the cache when a fresh copy exists."""

    if context.config.refresh:
        LOGGER.info("Refresh requested; ignoring cached data")
        return context
    snapshot = cache.load_fresh()
    if snapshot is not None:
        context.snapshot = snapshot
        context.source = "cache"
    return context


def fetch_stage(
    context: RunContext,
    cache: SnapshotCache,
    fetcher: RatesFetcher,
    credential_loader: Callable[..., Credential] = load_credential,
) -> RunContext:
    """Fetch from the provider unless ``load_stage`` already found a snapshot.

    The credential is read only when a request is actually needed, so a bad
    key file never blocks a cache hit and always fails before any request.
    """

    if context.snapshot is not None:
        return context
    credential = credential_loader(context.config.api_key_path)
    body, status_code = fetcher.fetch_raw(credential)
    snapshot = parse_rates_body(
        body,
        required=context.config.required_currencies,
        status_code=status_code,
    )
    context.cache_written = cache.write(body)
    context.snapshot = snapshot
    context.source = "remote"
    return context


def present_stage(context: RunContext, presenter: SummaryPresenter) -> RunContext:
    if context.snapshot is None:
        raise PipelineError("present_stage called before a snapshot was loaded")
    context.cross = derive_cross_rate(
        context.snapshot,
        base=context.config.base_currency,
        quote=context.config.quote_currency,
    )
    presenter.show(context.cross, context.snapshot.updated_at())
    return context


def run_pipeline(
    config: GlanceConfig,
    *,
    fetcher: RatesFetcher | None = None,
    presenter: SummaryPresenter | None = None,
    cache: SnapshotCache | None = None,
    credential_loader: Callable[..., Credential] = load_credential,
) -> RunContext:
    """Run every stage once. Fatal problems propagate as :class:`FxGlanceError`."""

    context = RunContext(config=config)
    cache = cache or context.build_cache()
    presenter = presenter or SummaryPresenter(
        thresholds=config.thresholds,
        symbols=config.symbols,
        color=config.color,
    )
    load_stage(context, cache)
    if context.snapshot is None:
        if fetcher is not None:
            fetch_stage(context, cache, fetcher, credential_loader)
        else:
            with OpenExchangeRatesClient(
                base_url=config.base_url,
                endpoint=config.endpoint,
                timeout=config.timeout,
            ) as client:
                fetch_stage(context, cache, client, credential_loader)
    present_stage(context, presenter)
    return context
