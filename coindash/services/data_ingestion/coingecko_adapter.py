"""
CoinGecko Data Adapter

Fetches REAL market data from the public CoinGecko v3 REST API and
converts the untyped JSON into typed schemas. Malformed rows are dropped
here so nothing untyped reaches the indicator engine.
"""

import asyncio
import logging
from typing import Any, Optional

import aiohttp
from pydantic import ValidationError as PydanticValidationError

from coindash.core.config import settings
from coindash.schemas.market import (
    Asset,
    AssetMarketStats,
    HistoricalData,
    Period,
)
from coindash.services.base import ExternalAPIError, RateLimitError
from coindash.services.indicators.calculations import normalize_series

logger = logging.getLogger(__name__)

SERVICE_NAME = "CoinGecko"


# =============================================================================
# PAYLOAD PARSING
# =============================================================================


def parse_assets(payload: Any) -> list[Asset]:
    """Parse /coins/list rows. Rows without an id are skipped."""
    if not isinstance(payload, list):
        logger.warning(f"Unexpected /coins/list payload type: {type(payload).__name__}")
        return []

    assets = []
    for row in payload:
        if not isinstance(row, dict):
            continue
        try:
            assets.append(
                Asset(
                    id=row.get("id"),
                    name=row.get("name") or row.get("id"),
                    symbol=row.get("symbol") or "",
                    image=row.get("image"),
                )
            )
        except PydanticValidationError:
            logger.debug(f"Skipping malformed asset row: {row!r}")
    return assets


def _optional_float(value: Any) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def parse_markets(payload: Any) -> list[AssetMarketStats]:
    """Parse /coins/markets rows. Bad numeric fields default to None."""
    if not isinstance(payload, list):
        logger.warning(f"Unexpected /coins/markets payload type: {type(payload).__name__}")
        return []

    markets = []
    for row in payload:
        if not isinstance(row, dict):
            continue
        try:
            markets.append(
                AssetMarketStats(
                    id=row.get("id"),
                    name=row.get("name") or row.get("id"),
                    symbol=row.get("symbol") or "",
                    image=row.get("image"),
                    current_price=_optional_float(row.get("current_price")),
                    market_cap=_optional_float(row.get("market_cap")),
                    total_volume=_optional_float(row.get("total_volume")),
                    price_change_percentage_24h=_optional_float(
                        row.get("price_change_percentage_24h")
                    ),
                )
            )
        except PydanticValidationError:
            logger.debug(f"Skipping malformed market row: {row!r}")
    return markets


def parse_market_chart(payload: Any, asset_id: str, period: Period) -> HistoricalData:
    """Parse /coins/{id}/market_chart into HistoricalData."""
    if not isinstance(payload, dict):
        payload = {}
    return HistoricalData(
        asset_id=asset_id,
        period=period,
        prices=normalize_series(payload.get("prices")),
        total_volumes=normalize_series(payload.get("total_volumes")),
    )


# =============================================================================
# HTTP CLIENT
# =============================================================================


class CoinGeckoClient:
    """
    Thin async client for the CoinGecko endpoints the dashboard uses.

    No retries: failures surface to the caller as ExternalAPIError.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        api_key: Optional[str] = None,
        timeout: Optional[float] = None,
    ):
        self.base_url = (base_url or settings.coingecko_base_url).rstrip("/")
        self.api_key = api_key if api_key is not None else settings.coingecko_api_key
        self.timeout = timeout or settings.http_timeout_seconds
        self._session: Optional[aiohttp.ClientSession] = None

    async def _ensure_session(self) -> aiohttp.ClientSession:
        """Ensure we have an active HTTP session."""
        if self._session is None or self._session.closed:
            headers = {"Accept": "application/json"}
            if self.api_key:
                headers["x-cg-demo-api-key"] = self.api_key
            self._session = aiohttp.ClientSession(
                timeout=aiohttp.ClientTimeout(total=self.timeout),
                headers=headers,
            )
        return self._session

    async def close(self) -> None:
        """Close the HTTP session."""
        if self._session and not self._session.closed:
            await self._session.close()

    async def _get(self, endpoint: str, params: Optional[dict] = None) -> Any:
        session = await self._ensure_session()
        url = f"{self.base_url}/{endpoint.lstrip('/')}"

        try:
            async with session.get(url, params=params) as response:
                if response.status == 429:
                    raise RateLimitError(
                        SERVICE_NAME,
                        "API rate limit reached, try again shortly",
                        {"status": 429, "endpoint": endpoint},
                    )
                if response.status >= 400:
                    message = await _error_message(response)
                    raise ExternalAPIError(
                        SERVICE_NAME,
                        message,
                        {"status": response.status, "endpoint": endpoint},
                    )
                return await response.json(content_type=None)
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            logger.error(f"CoinGecko request to {endpoint} failed: {e}")
            raise ExternalAPIError(
                SERVICE_NAME, f"Network error: {e}", {"endpoint": endpoint}
            ) from e

    async def list_assets(self) -> list[Asset]:
        payload = await self._get("coins/list", {"include_platform": "false"})
        return parse_assets(payload)

    async def get_markets(self, vs_currency: Optional[str] = None) -> list[AssetMarketStats]:
        payload = await self._get(
            "coins/markets",
            {
                "vs_currency": vs_currency or settings.vs_currency,
                "order": "market_cap_desc",
                "per_page": str(settings.markets_per_page),
                "page": "1",
                "sparkline": "false",
                "locale": "en",
            },
        )
        return parse_markets(payload)

    async def get_market_chart(
        self,
        asset_id: str,
        period: Period,
        vs_currency: Optional[str] = None,
    ) -> HistoricalData:
        payload = await self._get(
            f"coins/{asset_id}/market_chart",
            {"vs_currency": vs_currency or settings.vs_currency, "days": period.value},
        )
        return parse_market_chart(payload, asset_id, period)

    async def ping(self) -> bool:
        try:
            await self._get("ping")
            return True
        except ExternalAPIError:
            return False


async def _error_message(response: aiohttp.ClientResponse) -> str:
    """Prefer the provider's `error` field, else a status message."""
    fallback = f"API request failed with status {response.status}"
    try:
        data = await response.json(content_type=None)
    except (aiohttp.ContentTypeError, ValueError):
        return fallback
    if isinstance(data, dict):
        error = data.get("error")
        if isinstance(error, dict):
            error = error.get("message")
        if isinstance(error, str) and error:
            return error
    return fallback
