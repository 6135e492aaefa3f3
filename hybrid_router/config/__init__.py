"""Routing configuration models and loaders."""

from .loader import load_routing_config, load_yaml, validate_payload
from .schema import RoutingConfig, RoutingThresholds

__all__ = [
    "RoutingConfig",
    "RoutingThresholds",
    "load_routing_config",
    "load_yaml",
    "validate_payload",
]
