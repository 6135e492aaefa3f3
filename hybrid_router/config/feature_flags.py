import os
from typing import Mapping

TRUE_SET = {"1", "true", "on", "yes", "y"}

ROUTING_ENGINE_FLAG = "ROUTING_ENGINE_V1"


def parse_flag(raw: str) -> bool:
    return raw.strip().lower() in TRUE_SET


def env_flag(name: str, env: Mapping[str, str] | None = None) -> bool | None:
    """Return the boolean value of ``name`` or ``None`` when it is unset."""

    v = (os.environ if env is None else env).get(name)
    return parse_flag(v) if v is not None else None
