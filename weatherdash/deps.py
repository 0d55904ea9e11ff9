# ABOUTME: Dependency container for the weather fetchers using Pydantic BaseModel.
# ABOUTME: Holds the httpx.AsyncClient and Settings that every provider call needs, plus the tide cache.

from datetime import datetime

import httpx
from pydantic import BaseModel, ConfigDict, Field
from pydantic_ai.retries import AsyncTenacityTransport, RetryConfig, wait_retry_after
from tenacity import retry_if_exception_type, stop_after_attempt

from weatherdash.config import Settings
from weatherdash.models import Tide


class TideCache:
    """Tide extremes per rounded coordinate pair, each with the time it was fetched."""

    def __init__(self):
        self._entries: dict[tuple[float, float], tuple[datetime, tuple[Tide, ...]]] = {}

    @staticmethod
    def key(latitude: float, longitude: float) -> tuple[float, float]:
        return round(latitude, 2), round(longitude, 2)

    def get(self, latitude: float, longitude: float, now: datetime, ttl: float) -> tuple[Tide, ...] | None:
        entry = self._entries.get(self.key(latitude, longitude))
        if entry is None or (now - entry[0]).total_seconds() >= ttl:
            return None
        return entry[1]

    def put(self, latitude: float, longitude: float, now: datetime, extremes: tuple[Tide, ...]) -> None:
        self._entries[self.key(latitude, longitude)] = (now, extremes)


class DashboardDeps(BaseModel):
    """HTTP client and settings shared by the aggregator and the adapters."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    http_client: httpx.AsyncClient
    settings: Settings
    tide_cache: TideCache = Field(default_factory=TideCache)


def create_http_client(settings: Settings) -> httpx.AsyncClient:
    """Create an httpx client with tenacity retry on transient HTTP errors.

    Retries connection errors, timeouts, and 429/5xx responses with Retry-After aware
    backoff, up to ``settings.http_attempts`` attempts. The default of one attempt
    means failures surface immediately.
    """
    transport = AsyncTenacityTransport(
        RetryConfig(
            retry=retry_if_exception_type((httpx.ConnectError, httpx.ReadTimeout, httpx.HTTPStatusError)),
            wait=wait_retry_after(max_wait=30),
            stop=stop_after_attempt(max(1, settings.http_attempts)),
            reraise=True,
        ),
        validate_response=lambda r: r.raise_for_status(),
    )
    return httpx.AsyncClient(
        transport=transport,
        timeout=settings.http_timeout,
        headers={"User-Agent": settings.user_agent},
    )
