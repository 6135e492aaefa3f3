from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

LogLevel = Literal["debug", "info", "warn", "error"]

_LOG_LEVEL_ALIASES = {"warning": "warn", "err": "error", "critical": "error"}


class RoutingThresholds(BaseModel):
    model_config = ConfigDict(frozen=True)

    large_usd: float = Field(1000.0, ge=0.0)
    split_usd: float = Field(25000.0, ge=0.0)

    @model_validator(mode="after")
    def _validate_order(self) -> "RoutingThresholds":
        if self.split_usd < self.large_usd:
            raise ValueError("split_usd must be >= large_usd")
        return self


class RoutingConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    enabled: bool = False
    log_level: LogLevel = "info"
    thresholds: RoutingThresholds = Field(default_factory=RoutingThresholds)
    audit_capacity: int = Field(100, ge=1)
    provider_timeout_s: float = Field(5.0, gt=0.0)

    @field_validator("log_level", mode="before")
    @classmethod
    def _normalise_log_level(cls, value: object) -> object:
        if isinstance(value, str):
            lowered = value.strip().lower()
            return _LOG_LEVEL_ALIASES.get(lowered, lowered)
        return value


__all__ = ["LogLevel", "RoutingConfig", "RoutingThresholds"]
