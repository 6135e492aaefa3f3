"""Deterministic venue providers backed by static price tables."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Mapping

from ..router.providers import QuoteResult, Side
from .depth import DepthTiers, resolve_depth


@dataclass(frozen=True)
class StaticVenueProvider:
    """Venue quoting from a fixed ``BASE/QUOTE`` price table.

    Pairs outside ``bases`` x ``quotes`` are rejected as unsupported; supported
    pairs missing from ``prices`` are rejected as unpriced.
    """

    name: str
    label: str
    fee_bps: int
    est_confirm_ms: int
    bases: frozenset[str]
    quotes: frozenset[str]
    prices: Mapping[str, float]
    depth: DepthTiers
    depth_by_base: Mapping[str, DepthTiers] = field(default_factory=dict)
    meta: Mapping[str, str] = field(default_factory=dict)

    def supports(self, base: str, quote: str) -> bool:
        return base in self.bases and quote in self.quotes

    async def get_quote(
        self, base: str, quote: str, side: Side, notional_usd: float
    ) -> QuoteResult:
        if not self.supports(base, quote):
            return QuoteResult.failure(
                f"{self.label} does not support {base}/{quote} pair", source=self.name
            )
        price = self.prices.get(f"{base}/{quote}")
        if not price:
            return QuoteResult.failure("Unable to fetch market price", source=self.name)
        depth = resolve_depth(self.depth, self.depth_by_base, base)
        return QuoteResult.success(
            source=self.name,
            price=price,
            fee_bps=self.fee_bps,
            liquidity_score=depth.score(notional_usd),
            est_confirm_ms=self.est_confirm_ms,
            meta=self.meta,
        )


def _table(price: float, *pairs: str) -> dict[str, float]:
    return {pair: price for pair in pairs}


def xrpl_gatehub() -> StaticVenueProvider:
    return StaticVenueProvider(
        name="xrpl-gatehub",
        label="GateHub",
        fee_bps=20,
        est_confirm_ms=4000,
        bases=frozenset({"XRP", "XLM", "BTC", "ETH"}),
        quotes=frozenset({"USD", "USDT", "USDC"}),
        prices={
            **_table(0.52, "XRP/USD", "XRP/USDT", "XRP/USDC"),
            "XLM/USD": 0.095,
            "BTC/USD": 100000.0,
            "ETH/USD": 3240.0,
        },
        depth=DepthTiers.of([(1000, 0.85), (10000, 0.80), (50000, 0.70)], 0.50),
        meta={"issuer": "rhub8VRN55s94qWKDv6jmDy1pUykJzF3wq", "network": "xrpl", "tier": "institutional"},
    )


def xrpl_bitstamp() -> StaticVenueProvider:
    return StaticVenueProvider(
        name="xrpl-bitstamp",
        label="Bitstamp",
        fee_bps=15,
        est_confirm_ms=3500,
        bases=frozenset({"XRP", "BTC", "ETH"}),
        quotes=frozenset({"USD", "USDT"}),
        prices={
            **_table(0.52, "XRP/USD", "XRP/USDT"),
            **_table(100000.0, "BTC/USD", "BTC/USDT"),
            **_table(3240.0, "ETH/USD", "ETH/USDT"),
        },
        depth=DepthTiers.of([(10000, 0.85), (50000, 0.75)], 0.60),
        depth_by_base={
            "XRP": DepthTiers.of([(5000, 0.95), (25000, 0.90), (100000, 0.85)], 0.75),
        },
        meta={"issuer": "rvYAfWj5gh67oV6fW32ZzP3Aw4Eubs59B", "network": "xrpl", "tier": "institutional"},
    )


def xrpl_usdx() -> StaticVenueProvider:
    return StaticVenueProvider(
        name="xrpl-usdx",
        label="USDX retail",
        fee_bps=25,
        est_confirm_ms=4500,
        bases=frozenset({"XRP", "XLM"}),
        quotes=frozenset({"USD", "USDT", "USDC", "USDX"}),
        prices={
            **_table(0.52, "XRP/USD", "XRP/USDT", "XRP/USDC", "XRP/USDX"),
            **_table(0.095, "XLM/USD", "XLM/USDT", "XLM/USDC"),
        },
        depth=DepthTiers.of([(500, 0.90), (2000, 0.80), (10000, 0.60)], 0.30),
        meta={"issuer": "rcEGREd8NmkKRE8GE424sksyt1tJVFZwu", "network": "xrpl", "tier": "retail"},
    )


def stellar_usdc() -> StaticVenueProvider:
    return StaticVenueProvider(
        name="stellar-usdc",
        label="Stellar USDC",
        fee_bps=10,
        est_confirm_ms=6000,
        bases=frozenset({"XLM", "XRP", "BTC", "ETH"}),
        quotes=frozenset({"USDC", "USD"}),
        prices={
            **_table(0.095, "XLM/USDC", "XLM/USD"),
            **_table(0.52, "XRP/USDC", "XRP/USD"),
            "BTC/USDC": 100000.0,
            "ETH/USDC": 3240.0,
        },
        depth=DepthTiers.of([(5000, 0.75), (25000, 0.65)], 0.50),
        depth_by_base={
            "XLM": DepthTiers.of([(10000, 0.95), (50000, 0.90), (100000, 0.80)], 0.70),
        },
        meta={
            "issuer": "GA5ZSEJYB37JRC5AVCIA5MOP4RHTM335X2KGX3IHOJAPP5RE34K4KZVN",
            "network": "stellar",
            "anchor": "circle",
        },
    )


def xdc_usdt() -> StaticVenueProvider:
    return StaticVenueProvider(
        name="xdc-usdt",
        label="XDC USDT",
        fee_bps=30,
        est_confirm_ms=2500,
        bases=frozenset({"XDC", "BTC", "ETH", "XRP"}),
        quotes=frozenset({"USDT", "USD"}),
        prices={
            **_table(0.045, "XDC/USDT", "XDC/USD"),
            "BTC/USDT": 100000.0,
            "ETH/USDT": 3240.0,
            "XRP/USDT": 0.52,
        },
        depth=DepthTiers.of([(2000, 0.70), (10000, 0.55)], 0.35),
        depth_by_base={
            "XDC": DepthTiers.of([(5000, 0.85), (20000, 0.75), (50000, 0.60)], 0.40),
        },
        meta={"network": "xdc", "type": "wrapped-gateway"},
    )


def default_fixture_providers() -> list[StaticVenueProvider]:
    """The five venues wired into the router by default, in registry order."""

    return [xrpl_gatehub(), xrpl_bitstamp(), xrpl_usdx(), stellar_usdc(), xdc_usdt()]


__all__ = [
    "StaticVenueProvider",
    "default_fixture_providers",
    "stellar_usdc",
    "xdc_usdt",
    "xrpl_bitstamp",
    "xrpl_gatehub",
    "xrpl_usdx",
]
