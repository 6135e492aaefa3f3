from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any, Callable, Mapping

import yaml
from pydantic import ValidationError

from .feature_flags import ROUTING_ENGINE_FLAG, env_flag
from .schema import RoutingConfig

LOGGER = logging.getLogger(__name__)

CONFIG_PATH_ENV = "ROUTING_CONFIG_PATH"

_NUMERIC_OVERRIDES: tuple[tuple[str, tuple[str, ...], Callable[[str], Any]], ...] = (
    ("ROUTING_THRESHOLD_LARGE_USD", ("thresholds", "large_usd"), float),
    ("ROUTING_THRESHOLD_SPLIT_USD", ("thresholds", "split_usd"), float),
    ("ROUTING_AUDIT_CAPACITY", ("audit_capacity",), int),
    ("ROUTING_PROVIDER_TIMEOUT_S", ("provider_timeout_s",), float),
)


def load_yaml(path: Path | str) -> dict[str, Any]:
    cfg_path = Path(path)
    with cfg_path.open("r", encoding="utf-8") as handle:
        payload = yaml.safe_load(handle) or {}
    if not isinstance(payload, dict):
        raise TypeError(f"Configuration root must be a mapping, got {type(payload)!r}")
    routing = payload.get("routing", payload)
    if not isinstance(routing, dict):
        raise TypeError(f"'routing' section must be a mapping, got {type(routing)!r}")
    return dict(routing)


def _set_path(payload: dict[str, Any], path: tuple[str, ...], value: Any) -> None:
    target = payload
    for key in path[:-1]:
        nested = target.get(key)
        if not isinstance(nested, dict):
            nested = {}
        else:
            nested = dict(nested)
        target[key] = nested
        target = nested
    target[path[-1]] = value


def apply_env_overrides(
    payload: Mapping[str, Any], env: Mapping[str, str] | None = None
) -> dict[str, Any]:
    """Overlay ``ROUTING_*`` environment variables onto ``payload``.

    Numeric values that fail to parse are ignored so the file (or model)
    default stays in effect.
    """

    environ = os.environ if env is None else env
    merged: dict[str, Any] = dict(payload)

    enabled = env_flag(ROUTING_ENGINE_FLAG, environ)
    if enabled is not None:
        merged["enabled"] = enabled
    level = environ.get("ROUTING_ENGINE_LOG")
    if level:
        merged["log_level"] = level

    for name, path, parser in _NUMERIC_OVERRIDES:
        raw = environ.get(name)
        if raw is None or not raw.strip():
            continue
        try:
            value = parser(raw.strip())
        except ValueError:
            LOGGER.warning(
                "hybrid_router.config.invalid_env",
                extra={
                    "event": "hybrid_router_config_invalid_env",
                    "component": __name__,
                    "details": {"name": name, "value": raw},
                },
            )
            continue
        _set_path(merged, path, value)
    return merged


def load_routing_config(
    path: str | Path | None = None, env: Mapping[str, str] | None = None
) -> RoutingConfig:
    environ = os.environ if env is None else env
    source = path if path is not None else environ.get(CONFIG_PATH_ENV)
    raw: dict[str, Any] = load_yaml(source) if source else {}
    return RoutingConfig.model_validate(apply_env_overrides(raw, environ))


def validate_payload(payload: Any) -> list[str]:
    """Return a list of validation errors for ``payload``.

    The function returns an empty list when the payload is valid.
    """

    errors: list[str] = []
    try:
        RoutingConfig.model_validate(payload)
    except ValidationError as exc:
        for entry in exc.errors():
            location = ".".join(str(part) for part in entry.get("loc", ()))
            message = str(entry.get("msg") or "invalid")
            if location:
                errors.append(f"{location}: {message}")
            else:
                errors.append(message)
    return errors


__all__ = [
    "CONFIG_PATH_ENV",
    "apply_env_overrides",
    "load_routing_config",
    "load_yaml",
    "validate_payload",
]
