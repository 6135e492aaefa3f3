"""Size-banded liquidity depth curves used by provider implementations."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Mapping


@dataclass(frozen=True, slots=True)
class DepthTiers:
    """Liquidity score as a step function of trade notional.

    ``bands`` holds ``(upper_bound_usd, score)`` pairs; the first band whose
    bound exceeds the notional wins. Notionals beyond the last band get
    ``floor``.
    """

    bands: tuple[tuple[float, float], ...]
    floor: float

    def __post_init__(self) -> None:
        bounds = [bound for bound, _ in self.bands]
        if bounds != sorted(bounds):
            raise ValueError("depth bands must be sorted by upper bound")
        for _, score in (*self.bands, (0.0, self.floor)):
            if not 0.0 <= score <= 1.0:
                raise ValueError(f"liquidity score {score} outside [0, 1]")

    @classmethod
    def of(cls, bands: Iterable[tuple[float, float]], floor: float) -> "DepthTiers":
        return cls(bands=tuple((float(b), float(s)) for b, s in bands), floor=float(floor))

    def score(self, notional_usd: float) -> float:
        for bound, score in self.bands:
            if notional_usd < bound:
                return score
        return self.floor


def resolve_depth(
    default: DepthTiers, overrides: Mapping[str, DepthTiers], base: str
) -> DepthTiers:
    return overrides.get(base, default)


__all__ = ["DepthTiers", "resolve_depth"]
