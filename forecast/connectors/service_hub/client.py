"""Housing Forecast — Service Hub Client.

Blocking HTTP client that pulls full entity collections from the service hub.
Fetches never raise: every outcome is reported as a FetchResult so callers
can tell a genuinely empty collection from an unreachable hub.
"""

from dataclasses import dataclass, field
from typing import Any, Generic, List, Optional, Type, TypeVar

import httpx
from pydantic import TypeAdapter, ValidationError

from forecast.config import settings
from forecast.core.logging import get_logger
from forecast.models.hub_models import HubBatch, HubRoom, HubUser

logger = get_logger("service_hub.client")

T = TypeVar("T")


@dataclass
class FetchResult(Generic[T]):
    """Outcome of one collection fetch."""

    records: List[T] = field(default_factory=list)
    ok: bool = True
    reason: Optional[str] = None

    @classmethod
    def success(cls, records: List[T]) -> "FetchResult[T]":
        return cls(records=list(records), ok=True)

    @classmethod
    def failure(cls, reason: str) -> "FetchResult[T]":
        return cls(records=[], ok=False, reason=reason)


class ServiceHubClient:
    """Sync HTTP client for the housing service hub."""

    def __init__(
        self,
        timeout: float | None = None,
        transport: httpx.BaseTransport | None = None,
    ):
        self.timeout = timeout or settings.fetch_timeout_seconds
        self._transport = transport
        self._client: Optional[httpx.Client] = None

    def _get_client(self) -> httpx.Client:
        if self._client is None or self._client.is_closed:
            self._client = httpx.Client(timeout=self.timeout, transport=self._transport)
        return self._client

    def close(self) -> None:
        if self._client and not self._client.is_closed:
            self._client.close()

    def url_for(self, model: str) -> str:
        return f"{settings.api_base_for(model)}/api/{model}"

    # ── Core Fetch ──

    def fetch(self, model: str, schema: Type[T]) -> FetchResult[T]:
        """GET ``/api/{model}`` and parse it as a JSON array of ``schema``."""
        url = self.url_for(model)
        client = self._get_client()

        try:
            resp = client.get(url)
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            logger.warning(f"Fetch of {model} failed: {e}", extra={"endpoint": url})
            return FetchResult.failure(f"request error: {e}")

        if not resp.is_success:
            logger.warning(
                f"Fetch of {model} returned {resp.status_code}",
                extra={"endpoint": url, "status_code": resp.status_code},
            )
            return FetchResult.failure(f"HTTP {resp.status_code}")

        try:
            payload: Any = resp.json()
            records = TypeAdapter(List[schema]).validate_python(payload)  # type: ignore[valid-type]
        except ValueError as e:
            # json.JSONDecodeError and pydantic ValidationError are both ValueErrors
            kind = "invalid payload" if isinstance(e, ValidationError) else "malformed JSON"
            logger.warning(f"Fetch of {model}: {kind}: {e}", extra={"endpoint": url})
            return FetchResult.failure(f"{kind}: {e}")

        logger.info(
            f"Fetched {len(records)} {model}",
            extra={"endpoint": url, "status_code": resp.status_code},
        )
        return FetchResult.success(records)

    # ── Collections ──

    def fetch_users(self) -> FetchResult[HubUser]:
        return self.fetch("users", HubUser)

    def fetch_rooms(self) -> FetchResult[HubRoom]:
        return self.fetch("rooms", HubRoom)

    def fetch_batches(self) -> FetchResult[HubBatch]:
        return self.fetch("batches", HubBatch)
