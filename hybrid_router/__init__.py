"""Smart hybrid liquidity router."""

from .router import HybridRouter, QuoteResult, RoutingDecision, RoutingFailure

__version__ = "0.1.0"

__all__ = ["HybridRouter", "QuoteResult", "RoutingDecision", "RoutingFailure", "__version__"]
