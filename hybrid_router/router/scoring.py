"""Normalisation of provider quotes into comparable routing candidates."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable

from .providers import ProviderOutcome, QuoteResult, Side

BPS = 10_000


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero for positives."""

    return int(Decimal(repr(float(value))).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def slippage_bps(liquidity_score: float) -> int:
    """Slippage implied by a liquidity score: 1.0 means no price impact."""

    return round_half_up((1.0 - liquidity_score) * 100)


def effective_price(price: float, total_cost_bps: int, side: Side) -> float:
    """Fold costs into ``price`` so it always degrades for the requester."""

    adjustment = total_cost_bps / BPS
    if side == "buy":
        return price * (1 + adjustment)
    return price * (1 - adjustment)


@dataclass(frozen=True, slots=True)
class Candidate:
    """A valid quote together with its derived cost metrics."""

    source: str
    price: float
    fee_bps: int
    liquidity_score: float
    est_confirm_ms: int
    slippage_bps: int
    total_cost_bps: int
    effective_price: float

    def to_payload(self) -> dict[str, object]:
        return {
            "source": self.source,
            "price": self.price,
            "feeBps": self.fee_bps,
            "liquidityScore": self.liquidity_score,
            "estConfirmMs": self.est_confirm_ms,
            "slippageBps": self.slippage_bps,
            "totalCostBps": self.total_cost_bps,
            "effectivePrice": self.effective_price,
        }


def score_quote(quote: QuoteResult, side: Side) -> Candidate:
    """Return the :class:`Candidate` for a successful, validated quote."""

    invalid = quote.invalid_field() if quote.ok else "ok=false"
    if invalid is not None:
        raise ValueError(f"quote from {quote.source!r} is not scorable ({invalid})")
    price = float(quote.price or 0.0)
    fee_bps = int(quote.fee_bps or 0)
    liquidity = float(quote.liquidity_score or 0.0)

    slip = slippage_bps(liquidity)
    total = fee_bps + slip
    return Candidate(
        source=str(quote.source),
        price=price,
        fee_bps=fee_bps,
        liquidity_score=liquidity,
        est_confirm_ms=int(quote.est_confirm_ms or 0),
        slippage_bps=slip,
        total_cost_bps=total,
        effective_price=effective_price(price, total, side),
    )


def score_outcomes(outcomes: Iterable[ProviderOutcome], side: Side) -> list[Candidate]:
    """Score every successful outcome; failed ones are skipped.

    Returns a new list and leaves ``outcomes`` untouched. An empty result means
    no provider produced a usable quote.
    """

    candidates: list[Candidate] = []
    for outcome in outcomes:
        if not outcome.ok or outcome.quote is None:
            continue
        if outcome.quote.invalid_field() is not None:
            continue
        candidates.append(score_quote(outcome.quote, side))
    return candidates


__all__ = [
    "BPS",
    "Candidate",
    "effective_price",
    "round_half_up",
    "score_outcomes",
    "score_quote",
    "slippage_bps",
]
