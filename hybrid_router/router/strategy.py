"""Threshold driven selection between best-price, deepest-liquidity and split routing."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Literal, Sequence

from ..config.schema import RoutingThresholds
from .providers import Side
from .scoring import Candidate, round_half_up, slippage_bps

Strategy = Literal["best-price", "deepest-liquidity", "smart-split"]

BEST_PRICE: Strategy = "best-price"
DEEPEST_LIQUIDITY: Strategy = "deepest-liquidity"
SMART_SPLIT: Strategy = "smart-split"

TOP_CANDIDATES = 5


@dataclass(frozen=True, slots=True)
class ChosenRoute:
    """Execution metrics of the chosen venue, or the blend of a split."""

    source: str
    price: float
    fee_bps: int
    liquidity_score: float
    est_confirm_ms: int
    total_cost_bps: int
    reason: Strategy

    def to_payload(self) -> dict[str, object]:
        return {
            "price": self.price,
            "feeBps": self.fee_bps,
            "liquidityScore": self.liquidity_score,
            "estConfirmMs": self.est_confirm_ms,
            "source": self.source,
            "totalCostBps": self.total_cost_bps,
            "reason": self.reason,
        }


@dataclass(frozen=True, slots=True)
class SplitAllocation:
    source: str
    pct: int

    def to_payload(self) -> dict[str, object]:
        return {"source": self.source, "pct": self.pct}


@dataclass(frozen=True, slots=True)
class RoutingDecision:
    """Outcome of a successful routing attempt."""

    strategy: Strategy
    chosen: ChosenRoute
    primary: str
    candidates: tuple[Candidate, ...]
    thresholds: RoutingThresholds
    splits: tuple[SplitAllocation, ...] | None = None
    elapsed_ms: float = 0.0
    candidate_count: int = 0

    @property
    def ok(self) -> bool:
        return True

    def to_payload(self) -> dict[str, object]:
        route: dict[str, object] = {"primary": self.primary}
        if self.splits is not None:
            route["splits"] = [split.to_payload() for split in self.splits]
        return {
            "ok": True,
            "route": route,
            "chosen": self.chosen.to_payload(),
            "candidates": [candidate.to_payload() for candidate in self.candidates],
            "policy": {
                "strategy": self.strategy,
                "thresholds": {
                    "large": self.thresholds.large_usd,
                    "split": self.thresholds.split_usd,
                },
            },
            "meta": {
                "elapsedMs": round(self.elapsed_ms, 3),
                "candidateCount": self.candidate_count,
            },
        }


def strategy_for_notional(notional_usd: float, thresholds: RoutingThresholds) -> Strategy:
    if notional_usd < thresholds.large_usd:
        return BEST_PRICE
    if notional_usd < thresholds.split_usd:
        return DEEPEST_LIQUIDITY
    return SMART_SPLIT


def rank_by_price(candidates: Sequence[Candidate], side: Side) -> list[Candidate]:
    """Best effective price first: lowest for buys, highest for sells."""

    if side == "buy":
        return sorted(candidates, key=lambda c: (c.effective_price, c.source))
    return sorted(candidates, key=lambda c: (-c.effective_price, c.source))


def rank_by_liquidity(candidates: Sequence[Candidate]) -> list[Candidate]:
    return sorted(candidates, key=lambda c: (-c.liquidity_score, c.source))


def _single(candidate: Candidate, reason: Strategy) -> ChosenRoute:
    return ChosenRoute(
        source=candidate.source,
        price=candidate.price,
        fee_bps=candidate.fee_bps,
        liquidity_score=candidate.liquidity_score,
        est_confirm_ms=candidate.est_confirm_ms,
        total_cost_bps=candidate.total_cost_bps,
        reason=reason,
    )


def split_percentages(top1: Candidate, top2: Candidate) -> tuple[int, int]:
    """Allocate 100% across two venues proportionally to their liquidity."""

    total = top1.liquidity_score + top2.liquidity_score
    if total <= 0:
        return 50, 50
    pct1 = round_half_up(100 * top1.liquidity_score / total)
    return pct1, 100 - pct1


def blend_split(top1: Candidate, top2: Candidate, pct1: int, pct2: int) -> ChosenRoute:
    """Weighted metrics of a two-venue split.

    Total cost is rebuilt from the blended fee and the slippage implied by the
    blended liquidity, not from the venues' own totals.
    """

    price = (top1.price * pct1 + top2.price * pct2) / 100
    fee_bps = round_half_up((top1.fee_bps * pct1 + top2.fee_bps * pct2) / 100)
    liquidity = (top1.liquidity_score * pct1 + top2.liquidity_score * pct2) / 100
    confirm_ms = round_half_up((top1.est_confirm_ms * pct1 + top2.est_confirm_ms * pct2) / 100)
    return ChosenRoute(
        source=f"split:{top1.source}/{top2.source}",
        price=price,
        fee_bps=fee_bps,
        liquidity_score=liquidity,
        est_confirm_ms=confirm_ms,
        total_cost_bps=fee_bps + slippage_bps(liquidity),
        reason=SMART_SPLIT,
    )


def select_route(
    candidates: Sequence[Candidate],
    notional_usd: float,
    side: Side,
    thresholds: RoutingThresholds,
) -> RoutingDecision:
    """Pick the routing regime for ``notional_usd`` and build the decision."""

    if not candidates:
        raise ValueError("select_route requires at least one candidate")

    strategy = strategy_for_notional(notional_usd, thresholds)
    if strategy == BEST_PRICE:
        ranked = rank_by_price(candidates, side)
    else:
        ranked = rank_by_liquidity(candidates)
    top = tuple(ranked[:TOP_CANDIDATES])
    leader = ranked[0]

    if strategy != SMART_SPLIT:
        return RoutingDecision(
            strategy=strategy,
            chosen=_single(leader, strategy),
            primary=leader.source,
            candidates=top,
            thresholds=thresholds,
            candidate_count=len(candidates),
        )

    if len(ranked) == 1:
        chosen = replace(_single(leader, SMART_SPLIT), source=f"split:{leader.source}")
        splits: tuple[SplitAllocation, ...] = (SplitAllocation(source=leader.source, pct=100),)
    else:
        runner_up = ranked[1]
        pct1, pct2 = split_percentages(leader, runner_up)
        chosen = blend_split(leader, runner_up, pct1, pct2)
        splits = (
            SplitAllocation(source=leader.source, pct=pct1),
            SplitAllocation(source=runner_up.source, pct=pct2),
        )

    return RoutingDecision(
        strategy=SMART_SPLIT,
        chosen=chosen,
        primary=leader.source,
        candidates=top,
        thresholds=thresholds,
        splits=splits,
        candidate_count=len(candidates),
    )


__all__ = [
    "BEST_PRICE",
    "DEEPEST_LIQUIDITY",
    "SMART_SPLIT",
    "TOP_CANDIDATES",
    "ChosenRoute",
    "RoutingDecision",
    "SplitAllocation",
    "Strategy",
    "blend_split",
    "rank_by_liquidity",
    "rank_by_price",
    "select_route",
    "split_percentages",
    "strategy_for_notional",
]
