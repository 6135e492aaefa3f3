"""Liquidity provider priced from live CoinGecko spot data."""

from __future__ import annotations

import logging
import math
import os
from typing import Any, Dict, Mapping

import httpx

from ..router.providers import QuoteResult, Side
from .depth import DepthTiers

LOGGER = logging.getLogger(__name__)

COINGECKO_PUBLIC_URL = "https://api.coingecko.com/api/v3"
COINGECKO_PRO_URL = "https://pro-api.coingecko.com/api/v3"
API_KEY_ENV = "COINGECKO_API_KEY"
_HTTP_TIMEOUT = 10.0

TOKEN_IDS: Dict[str, str] = {
    "BTC": "bitcoin",
    "ETH": "ethereum",
    "XRP": "ripple",
    "XLM": "stellar",
    "XDC": "xdce-crowd-sale",
    "ADA": "cardano",
    "DOT": "polkadot",
    "LINK": "chainlink",
    "LTC": "litecoin",
    "BNB": "binancecoin",
    "SOL": "solana",
    "MATIC": "matic-network",
    "AVAX": "avalanche-2",
    "DOGE": "dogecoin",
    "USDT": "tether",
    "USDC": "usd-coin",
}

USD_QUOTES = frozenset({"USD"})

DEFAULT_DEPTH = DepthTiers.of([(5000, 0.80), (25000, 0.65)], 0.45)


class CoinGeckoProvider:
    """Quote ``BASE/QUOTE`` at the CoinGecko cross rate via USD.

    Fees, confirmation time and depth are venue parameters; only the price is
    fetched. Any HTTP or payload problem becomes a failed quote.
    """

    def __init__(
        self,
        name: str = "coingecko-spot",
        *,
        fee_bps: int = 10,
        est_confirm_ms: int = 3000,
        depth: DepthTiers = DEFAULT_DEPTH,
        api_key: str | None = None,
        base_url: str | None = None,
        timeout: float = _HTTP_TIMEOUT,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.name = name
        self.fee_bps = fee_bps
        self.est_confirm_ms = est_confirm_ms
        self.depth = depth
        self.api_key = api_key if api_key is not None else os.getenv(API_KEY_ENV) or None
        if base_url is None:
            base_url = COINGECKO_PRO_URL if self.api_key else COINGECKO_PUBLIC_URL
        self.base_url = base_url
        self.timeout = timeout
        self._transport = transport

    def _headers(self) -> Dict[str, str]:
        headers = {"Accept": "application/json"}
        if self.api_key:
            headers["x-cg-pro-api-key"] = self.api_key
        return headers

    async def _fetch_usd_prices(self, ids: list[str]) -> Mapping[str, Any]:
        params = {"ids": ",".join(ids), "vs_currencies": "usd"}
        async with httpx.AsyncClient(
            base_url=self.base_url, timeout=self.timeout, transport=self._transport
        ) as client:
            response = await client.get("/simple/price", params=params, headers=self._headers())
        response.raise_for_status()
        payload = response.json()
        if not isinstance(payload, Mapping):
            raise ValueError("unexpected price payload")
        return payload

    @staticmethod
    def _usd_price(payload: Mapping[str, Any], token_id: str) -> float | None:
        entry = payload.get(token_id)
        if not isinstance(entry, Mapping):
            return None
        try:
            value = float(entry.get("usd"))
        except (TypeError, ValueError):
            return None
        if not math.isfinite(value) or value <= 0:
            return None
        return value

    async def get_quote(
        self, base: str, quote: str, side: Side, notional_usd: float
    ) -> QuoteResult:
        base_id = TOKEN_IDS.get(base)
        quote_id = None if quote in USD_QUOTES else TOKEN_IDS.get(quote)
        if base_id is None or (quote_id is None and quote not in USD_QUOTES):
            return QuoteResult.failure(
                f"CoinGecko does not support {base}/{quote} pair", source=self.name
            )

        ids = [base_id] if quote_id is None else [base_id, quote_id]
        try:
            payload = await self._fetch_usd_prices(ids)
        except (httpx.HTTPError, ValueError) as exc:
            LOGGER.warning(
                "hybrid_router.coingecko_fetch_failed",
                extra={
                    "event": "hybrid_router_coingecko_fetch_failed",
                    "component": __name__,
                    "details": {"provider": self.name, "base": base, "quote": quote},
                },
                exc_info=exc,
            )
            return QuoteResult.failure(f"market data unavailable: {exc}", source=self.name)

        base_usd = self._usd_price(payload, base_id)
        quote_usd = 1.0 if quote_id is None else self._usd_price(payload, quote_id)
        if base_usd is None or quote_usd is None:
            return QuoteResult.failure("Unable to fetch market price", source=self.name)

        return QuoteResult.success(
            source=self.name,
            price=base_usd / quote_usd,
            fee_bps=self.fee_bps,
            liquidity_score=self.depth.score(notional_usd),
            est_confirm_ms=self.est_confirm_ms,
            meta={"network": "coingecko", "base_usd": base_usd, "quote_usd": quote_usd},
        )


__all__ = ["CoinGeckoProvider", "TOKEN_IDS"]
