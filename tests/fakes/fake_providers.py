"""Testing doubles for liquidity providers."""

from __future__ import annotations

import asyncio

from hybrid_router.router.providers import QuoteResult


class FixedQuoteProvider:
    """Async provider always returning the same successful quote."""

    def __init__(
        self,
        name: str,
        *,
        price: float = 1.0,
        fee_bps: int = 10,
        liquidity_score: float = 0.9,
        est_confirm_ms: int = 3000,
        source: str | None = None,
    ) -> None:
        self.name = name
        self.price = price
        self.fee_bps = fee_bps
        self.liquidity_score = liquidity_score
        self.est_confirm_ms = est_confirm_ms
        self.source = source or name
        self.calls: list[tuple[str, str, str, float]] = []

    async def get_quote(self, base, quote, side, notional_usd) -> QuoteResult:
        self.calls.append((base, quote, side, notional_usd))
        return QuoteResult.success(
            source=self.source,
            price=self.price,
            fee_bps=self.fee_bps,
            liquidity_score=self.liquidity_score,
            est_confirm_ms=self.est_confirm_ms,
        )


class RejectingProvider:
    def __init__(self, name: str, reason: str = "pair not supported") -> None:
        self.name = name
        self.reason = reason

    async def get_quote(self, base, quote, side, notional_usd) -> QuoteResult:
        return QuoteResult.failure(self.reason)


class FailingProvider:
    def __init__(self, name: str, message: str = "venue offline") -> None:
        self.name = name
        self.message = message

    async def get_quote(self, base, quote, side, notional_usd) -> QuoteResult:
        raise RuntimeError(self.message)


class SlowProvider:
    """Provider that sleeps before answering; ``started`` is set on entry."""

    def __init__(self, name: str, delay: float = 10.0) -> None:
        self.name = name
        self.delay = delay
        self.started = asyncio.Event()
        self.cancelled = False

    async def get_quote(self, base, quote, side, notional_usd) -> QuoteResult:
        self.started.set()
        try:
            await asyncio.sleep(self.delay)
        except asyncio.CancelledError:
            self.cancelled = True
            raise
        return QuoteResult.success(
            source=self.name, price=1.0, fee_bps=0, liquidity_score=1.0, est_confirm_ms=0
        )


class SyncProvider:
    """Provider with a blocking ``get_quote``."""

    def __init__(self, name: str, price: float = 2.0, liquidity_score: float = 0.5) -> None:
        self.name = name
        self.price = price
        self.liquidity_score = liquidity_score

    def get_quote(self, base, quote, side, notional_usd) -> QuoteResult:
        return QuoteResult.success(
            source=self.name,
            price=self.price,
            fee_bps=5,
            liquidity_score=self.liquidity_score,
            est_confirm_ms=1000,
        )


class RawResultProvider:
    """Provider returning whatever object it was given."""

    def __init__(self, name: str, result: object) -> None:
        self.name = name
        self.result = result

    async def get_quote(self, base, quote, side, notional_usd):
        return self.result
