from __future__ import annotations

import pytest

from hybrid_router.config.schema import RoutingConfig, RoutingThresholds

_ROUTING_ENV = (
    "ROUTING_CONFIG_PATH",
    "ROUTING_ENGINE_V1",
    "ROUTING_ENGINE_LOG",
    "ROUTING_THRESHOLD_LARGE_USD",
    "ROUTING_THRESHOLD_SPLIT_USD",
    "ROUTING_AUDIT_CAPACITY",
    "ROUTING_PROVIDER_TIMEOUT_S",
    "COINGECKO_API_KEY",
)


@pytest.fixture(autouse=True)
def reset_routing_env(monkeypatch):
    for name in _ROUTING_ENV:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def thresholds() -> RoutingThresholds:
    return RoutingThresholds(large_usd=1000, split_usd=25000)


@pytest.fixture
def routing_config(thresholds: RoutingThresholds) -> RoutingConfig:
    return RoutingConfig(enabled=True, thresholds=thresholds, provider_timeout_s=1.0)
