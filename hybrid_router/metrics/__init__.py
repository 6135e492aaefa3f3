"""Metrics exported by the hybrid router."""

from .router import provider_quotes_total, route_latency_ms, routing_decisions_total

__all__ = ["provider_quotes_total", "route_latency_ms", "routing_decisions_total"]
