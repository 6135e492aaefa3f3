"""Prometheus metrics for hybrid routing decisions."""

from prometheus_client import Counter, Histogram

routing_decisions_total = Counter(
    "hybrid_router_decisions_total",
    "Total number of hybrid routing attempts",
    labelnames=("strategy", "result"),
)

provider_quotes_total = Counter(
    "hybrid_router_provider_quotes_total",
    "Provider quote outcomes observed by the aggregator",
    labelnames=("provider", "result"),
)

route_latency_ms = Histogram(
    "hybrid_router_route_latency_ms",
    "End-to-end latency of a routing attempt in milliseconds",
    buckets=(5.0, 10.0, 20.0, 50.0, 100.0, 200.0, 500.0, 1000.0, 2000.0, 5000.0),
)

__all__ = ["provider_quotes_total", "route_latency_ms", "routing_decisions_total"]
