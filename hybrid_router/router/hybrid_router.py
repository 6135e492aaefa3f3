"""Smart hybrid liquidity router.

Routing regimes by trade size:

* below ``large_usd``: venue with the best cost-adjusted price;
* up to ``split_usd``: venue with the deepest liquidity;
* from ``split_usd``: split across the two deepest venues.
"""

from __future__ import annotations

import logging
import math
import time
from dataclasses import dataclass, replace
from typing import Iterable, Literal, Union

from ..config.loader import load_routing_config
from ..config.schema import RoutingConfig
from ..metrics.router import route_latency_ms, routing_decisions_total
from .aggregator import QuoteRequest, aggregate
from .decision_log import DecisionLog, DecisionRecord, statuses, utc_now
from .providers import SIDES, LiquidityProvider, ProviderOutcome, ProviderRegistry, ProviderStatus
from .scoring import score_outcomes
from .strategy import RoutingDecision, select_route

LOGGER = logging.getLogger(__name__)
DECISION_LOGGER = logging.getLogger("hybrid_router.decisions")

FailureCode = Literal["NO_CANDIDATES", "ROUTING_ERROR", "ROUTING_DISABLED"]

NO_CANDIDATES: FailureCode = "NO_CANDIDATES"
ROUTING_ERROR: FailureCode = "ROUTING_ERROR"
ROUTING_DISABLED: FailureCode = "ROUTING_DISABLED"

SUMMARY_LEVELS = frozenset({"debug", "info"})


@dataclass(frozen=True, slots=True)
class RoutingFailure:
    """Structured failure returned instead of a :class:`RoutingDecision`."""

    code: FailureCode
    message: str
    providers: tuple[ProviderStatus, ...] = ()

    @property
    def ok(self) -> bool:
        return False

    def to_payload(self) -> dict[str, object]:
        return {
            "ok": False,
            "code": self.code,
            "message": self.message,
            "providers": [status.to_payload() for status in self.providers],
        }


RouteResult = Union[RoutingDecision, RoutingFailure]


def normalise_request(base: str, quote: str, side: str, notional_usd: float) -> QuoteRequest:
    """Validate and canonicalise a routing request.

    Raises ``ValueError`` for empty assets, unknown sides and notionals that
    are not finite positive numbers.
    """

    base_norm = str(base or "").strip().upper()
    quote_norm = str(quote or "").strip().upper()
    if not base_norm or not quote_norm:
        raise ValueError("base and quote assets are required")
    side_norm = str(side or "").strip().lower()
    if side_norm not in SIDES:
        raise ValueError(f"side must be one of {', '.join(SIDES)}, got {side!r}")
    try:
        notional = float(notional_usd)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"notional_usd must be a number, got {notional_usd!r}") from exc
    if not math.isfinite(notional) or notional <= 0:
        raise ValueError(f"notional_usd must be a positive finite number, got {notional_usd!r}")
    return QuoteRequest(base=base_norm, quote=quote_norm, side=side_norm, notional_usd=notional)  # type: ignore[arg-type]


class HybridRouter:
    """Aggregates provider quotes and selects a routing strategy."""

    def __init__(
        self,
        providers: Iterable[LiquidityProvider],
        *,
        config: RoutingConfig | None = None,
        decision_log: DecisionLog | None = None,
    ) -> None:
        if isinstance(providers, ProviderRegistry):
            self._providers = providers
        else:
            self._providers = ProviderRegistry(providers)
        self._config = config if config is not None else load_routing_config()
        if decision_log is None:
            decision_log = DecisionLog(self._config.audit_capacity)
        self._decisions = decision_log

    @property
    def providers(self) -> ProviderRegistry:
        return self._providers

    @property
    def config(self) -> RoutingConfig:
        return self._config

    @property
    def decision_log(self) -> DecisionLog:
        return self._decisions

    def recent_decisions(self, limit: int = 50) -> list[DecisionRecord]:
        return self._decisions.recent(limit)

    async def route_quote(
        self, base: str, quote: str, side: str, notional_usd: float
    ) -> RouteResult:
        """Route one trade request.

        Always returns a structured result; provider faults only show up in
        the per-provider statuses. Cancellation propagates to the caller and
        leaves the decision log untouched.
        """

        request = normalise_request(base, quote, side, notional_usd)
        if not self._config.enabled:
            return RoutingFailure(code=ROUTING_DISABLED, message="Routing engine is disabled")

        started = time.perf_counter()
        outcomes: list[ProviderOutcome] = []
        decision: RoutingDecision | None = None
        try:
            outcomes = await aggregate(
                self._providers, request, timeout_s=self._config.provider_timeout_s
            )
            candidates = score_outcomes(outcomes, request.side)
            if candidates:
                decision = select_route(
                    candidates, request.notional_usd, request.side, self._config.thresholds
                )
        except Exception as exc:
            return self._routing_error(request, outcomes, started, exc)

        if decision is None:
            return self._no_candidates(request, outcomes, started)

        elapsed_ms = _elapsed_ms(started)
        decision = replace(decision, elapsed_ms=elapsed_ms)
        chosen = decision.chosen
        record = DecisionRecord(
            ts=utc_now(),
            base=request.base,
            quote=request.quote,
            side=request.side,
            notional_usd=request.notional_usd,
            success=True,
            elapsed_ms=elapsed_ms,
            providers=statuses(outcomes),
            chosen_source=chosen.source,
            strategy=decision.strategy,
            price=chosen.price,
            fee_bps=chosen.fee_bps,
            liquidity_score=chosen.liquidity_score,
            est_confirm_ms=chosen.est_confirm_ms,
            split=decision.splits is not None,
        )
        self._finish(record, decision.strategy, "success")
        return decision

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------
    def _no_candidates(
        self, request: QuoteRequest, outcomes: list[ProviderOutcome], started: float
    ) -> RoutingFailure:
        failure = RoutingFailure(
            code=NO_CANDIDATES,
            message="No viable routing providers returned a quote",
            providers=statuses(outcomes),
        )
        self._finish(self._failure_record(request, failure, started), "none", "no_candidates")
        return failure

    def _routing_error(
        self,
        request: QuoteRequest,
        outcomes: list[ProviderOutcome],
        started: float,
        exc: Exception,
    ) -> RoutingFailure:
        LOGGER.exception(
            "hybrid_router.routing_error",
            extra={
                "event": "hybrid_router_routing_error",
                "component": __name__,
                "details": {"base": request.base, "quote": request.quote, "side": request.side},
            },
        )
        failure = RoutingFailure(
            code=ROUTING_ERROR,
            message=str(exc) or type(exc).__name__,
            providers=statuses(outcomes),
        )
        record = self._failure_record(request, failure, started, error=failure.message)
        self._finish(record, "none", "error")
        return failure

    def _failure_record(
        self,
        request: QuoteRequest,
        failure: RoutingFailure,
        started: float,
        *,
        error: str | None = None,
    ) -> DecisionRecord:
        return DecisionRecord(
            ts=utc_now(),
            base=request.base,
            quote=request.quote,
            side=request.side,
            notional_usd=request.notional_usd,
            success=False,
            elapsed_ms=_elapsed_ms(started),
            providers=failure.providers,
            code=failure.code,
            error=error,
        )

    def _finish(self, record: DecisionRecord, strategy: str, result: str) -> None:
        self._decisions.record(record)
        routing_decisions_total.labels(strategy=strategy, result=result).inc()
        route_latency_ms.observe(record.elapsed_ms)
        if self._config.log_level in SUMMARY_LEVELS:
            _log_decision(record)


def _elapsed_ms(started: float) -> float:
    return (time.perf_counter() - started) * 1000.0


def _log_decision(record: DecisionRecord) -> None:
    if record.success:
        DECISION_LOGGER.info(
            "[routing] %s/%s %s amountUsd=%s, picked=%s, price=%.6f, feeBps=%s, liq=%.2f, ms=%.1f, split=%s",
            record.base,
            record.quote,
            record.side,
            record.notional_usd,
            record.chosen_source,
            record.price,
            record.fee_bps,
            record.liquidity_score,
            record.elapsed_ms,
            record.split,
        )
        return
    DECISION_LOGGER.info(
        "[routing] %s/%s %s amountUsd=%s, FAILED, ms=%.1f, code=%s, error=%s",
        record.base,
        record.quote,
        record.side,
        record.notional_usd,
        record.elapsed_ms,
        record.code,
        record.error or "no-candidates",
    )


__all__ = [
    "DECISION_LOGGER",
    "NO_CANDIDATES",
    "ROUTING_DISABLED",
    "ROUTING_ERROR",
    "SUMMARY_LEVELS",
    "HybridRouter",
    "RouteResult",
    "RoutingFailure",
    "normalise_request",
]
