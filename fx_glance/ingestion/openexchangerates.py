"""Client for the openexchangerates.org ``latest.json`` endpoint."""

from __future__ import annotations

import json
from typing import Any, Iterable

import requests

from fx_glance.config import DEFAULT_BASE_URL, DEFAULT_ENDPOINT, DEFAULT_TIMEOUT, USER_AGENT
from fx_glance.errors import FetchError, MalformedResponseError, RemoteError
from fx_glance.ingestion.models import Credential, RateSnapshot
from fx_glance.utils.logger import get_logger

LOGGER = get_logger(__name__)

__all__ = ["OpenExchangeRatesClient", "parse_rates_body"]


def _describe_error(payload: dict[str, Any]) -> str:
    parts = [str(payload[key]) for key in ("status", "message", "description") if payload.get(key)]
    detail = " - ".join(parts) if parts else json.dumps(payload, sort_keys=True)
    return f"Rates provider returned an error: {detail}"


def parse_rates_body(
    body: str,
    *,
    required: Iterable[str] = ("AUD", "EUR"),
    status_code: int | None = None,
) -> RateSnapshot:
    """Decode a complete response body into a validated :class:`RateSnapshot`.

    Error payloads (``{"error": true, ...}``) are reported through
    :class:`RemoteError` before any rate validation takes place.
    """

    try:
        payload = json.loads(body)
    except json.JSONDecodeError as exc:
        raise MalformedResponseError(f"Rates response is not valid JSON: {exc}") from exc
    if isinstance(payload, dict) and payload.get("error"):
        raise RemoteError(_describe_error(payload), payload=payload, status_code=status_code)
    if status_code is not None and status_code >= 400:
        raise RemoteError(
            f"Rates provider responded with HTTP {status_code}", status_code=status_code
        )
    return RateSnapshot.from_payload(payload, required=required, raw=body)


def _key(credential: Credential | str) -> str:
    return credential.value if isinstance(credential, Credential) else credential


class OpenExchangeRatesClient:
    """Issue a single ``GET`` for the latest rates; no retries."""

    def __init__(
        self,
        *,
        base_url: str = DEFAULT_BASE_URL,
        endpoint: str = DEFAULT_ENDPOINT,
        timeout: float = DEFAULT_TIMEOUT,
        session: requests.Session | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.endpoint = endpoint if endpoint.startswith("/") else f"/{endpoint}"
        self.timeout = timeout
        self._owns_session = session is None
        self.session = session or requests.Session()
        if self._owns_session:
            self.session.headers["User-Agent"] = USER_AGENT

    @property
    def url(self) -> str:
        return f"{self.base_url}{self.endpoint}"

    def fetch_raw(self, credential: Credential | str) -> tuple[str, int]:
        """Return the full response body and HTTP status code."""

        LOGGER.info("Fetching new currency exchange data from %s", self.url)
        try:
            response = self.session.get(
                self.url,
                params={"app_id": _key(credential)},
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            raise FetchError(f"Unable to reach {self.url}: {exc}") from exc
        return response.text, response.status_code

    def fetch(
        self, credential: Credential | str, *, required: Iterable[str] = ("AUD", "EUR")
    ) -> RateSnapshot:
        body, status_code = self.fetch_raw(credential)
        return parse_rates_body(body, required=required, status_code=status_code)

    def close(self) -> None:
        if self._owns_session:
            self.session.close()

    def __enter__(self) -> "OpenExchangeRatesClient":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()
