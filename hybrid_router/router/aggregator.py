"""Concurrent fan-out of a quote request to every registered provider."""

from __future__ import annotations

import asyncio
import inspect
import logging
from dataclasses import dataclass
from typing import Sequence

from ..metrics.router import provider_quotes_total
from .providers import LiquidityProvider, ProviderOutcome, QuoteResult, Side

LOGGER = logging.getLogger(__name__)

DEFAULT_PROVIDER_TIMEOUT_S = 5.0


@dataclass(frozen=True, slots=True)
class QuoteRequest:
    """Normalised routing request forwarded to providers."""

    base: str
    quote: str
    side: Side
    notional_usd: float


async def _call_provider(
    provider: LiquidityProvider, request: QuoteRequest, timeout_s: float
) -> object:
    get_quote = provider.get_quote
    args = (request.base, request.quote, request.side, request.notional_usd)
    if inspect.iscoroutinefunction(get_quote):
        call = get_quote(*args)
    else:
        call = asyncio.to_thread(get_quote, *args)
    result = await asyncio.wait_for(call, timeout=timeout_s)
    if inspect.isawaitable(result):
        result = await asyncio.wait_for(result, timeout=timeout_s)
    return result


def _failed(provider: LiquidityProvider, reason: str, source: str | None = None) -> ProviderOutcome:
    return ProviderOutcome(
        provider=provider.name,
        source=source or provider.name,
        ok=False,
        reason=reason,
    )


def build_outcome(
    provider: LiquidityProvider, result: object, claimed: set[str] | None = None
) -> ProviderOutcome:
    """Convert a raw provider result (or raised exception) into an outcome."""

    if isinstance(result, asyncio.TimeoutError):
        return _failed(provider, "timeout")
    if isinstance(result, asyncio.CancelledError):
        return _failed(provider, "cancelled")
    if isinstance(result, BaseException):
        message = str(result) or type(result).__name__
        return _failed(provider, f"error: {message}")
    if not isinstance(result, QuoteResult):
        return _failed(provider, "malformed-result")

    source = result.source if isinstance(result.source, str) and result.source else None
    if not result.ok:
        return _failed(provider, result.reason or "no-quote", source)

    invalid = result.invalid_field()
    if invalid is not None:
        return _failed(provider, f"invalid-quote: {invalid}", source)

    if source is None:
        return _failed(provider, "invalid-quote: source")
    if claimed is not None:
        if source in claimed:
            return _failed(provider, "duplicate-source", source)
        claimed.add(source)
    return ProviderOutcome(provider=provider.name, source=source, ok=True, quote=result)


async def aggregate(
    providers: Sequence[LiquidityProvider],
    request: QuoteRequest,
    *,
    timeout_s: float = DEFAULT_PROVIDER_TIMEOUT_S,
) -> list[ProviderOutcome]:
    """Query every provider concurrently and return one outcome per provider.

    Provider errors, timeouts and invalid quotes are folded into failed
    outcomes; they never abort the other calls. Outcomes keep registration
    order. Cancelling the caller cancels all in-flight provider calls.
    """

    if not providers:
        return []
    tasks = [_call_provider(provider, request, timeout_s) for provider in providers]
    results = await asyncio.gather(*tasks, return_exceptions=True)

    claimed: set[str] = set()
    outcomes: list[ProviderOutcome] = []
    for provider, result in zip(providers, results):
        outcome = build_outcome(provider, result, claimed)
        if not outcome.ok:
            LOGGER.debug(
                "hybrid_router.provider_failed",
                extra={
                    "event": "hybrid_router_provider_failed",
                    "component": __name__,
                    "details": {
                        "provider": provider.name,
                        "reason": outcome.reason,
                        "base": request.base,
                        "quote": request.quote,
                    },
                },
            )
        provider_quotes_total.labels(
            provider=provider.name, result="ok" if outcome.ok else "failed"
        ).inc()
        outcomes.append(outcome)
    return outcomes


__all__ = [
    "DEFAULT_PROVIDER_TIMEOUT_S",
    "QuoteRequest",
    "aggregate",
    "build_outcome",
]
