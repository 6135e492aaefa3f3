"""Liquidity provider implementations."""

from .depth import DepthTiers
from .fixtures import StaticVenueProvider, default_fixture_providers
from .market_data import CoinGeckoProvider

__all__ = ["CoinGeckoProvider", "DepthTiers", "StaticVenueProvider", "default_fixture_providers"]
