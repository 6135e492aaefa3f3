"""Aggregation, scoring and strategy selection for hybrid liquidity routing."""

from .aggregator import QuoteRequest, aggregate
from .decision_log import DecisionLog, DecisionRecord
from .hybrid_router import (
    NO_CANDIDATES,
    ROUTING_DISABLED,
    ROUTING_ERROR,
    HybridRouter,
    RouteResult,
    RoutingFailure,
)
from .providers import (
    LiquidityProvider,
    ProviderOutcome,
    ProviderRegistry,
    ProviderStatus,
    QuoteResult,
    Side,
)
from .scoring import Candidate, score_outcomes
from .strategy import ChosenRoute, RoutingDecision, SplitAllocation, select_route

__all__ = [
    "Candidate",
    "ChosenRoute",
    "DecisionLog",
    "DecisionRecord",
    "HybridRouter",
    "LiquidityProvider",
    "NO_CANDIDATES",
    "ProviderOutcome",
    "ProviderRegistry",
    "ProviderStatus",
    "QuoteRequest",
    "QuoteResult",
    "ROUTING_DISABLED",
    "ROUTING_ERROR",
    "RouteResult",
    "RoutingDecision",
    "RoutingFailure",
    "Side",
    "SplitAllocation",
    "aggregate",
    "score_outcomes",
    "select_route",
]
