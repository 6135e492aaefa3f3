"""Liquidity provider capability and the immutable provider registry."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any, Awaitable, Iterable, Iterator, Literal, Mapping, Protocol, Sequence, Union

Side = Literal["buy", "sell"]

SIDES: tuple[str, ...] = ("buy", "sell")


@dataclass(frozen=True, slots=True)
class QuoteResult:
    """Quote returned by a liquidity provider for a single request."""

    ok: bool
    price: float | None = None
    fee_bps: int | None = None
    liquidity_score: float | None = None
    est_confirm_ms: int | None = None
    source: str | None = None
    reason: str | None = None
    meta: Mapping[str, Any] = field(default_factory=dict)

    @classmethod
    def success(
        cls,
        *,
        source: str,
        price: float,
        fee_bps: int,
        liquidity_score: float,
        est_confirm_ms: int,
        meta: Mapping[str, Any] | None = None,
    ) -> "QuoteResult":
        return cls(
            ok=True,
            price=price,
            fee_bps=fee_bps,
            liquidity_score=liquidity_score,
            est_confirm_ms=est_confirm_ms,
            source=source,
            meta=dict(meta or {}),
        )

    @classmethod
    def failure(cls, reason: str, *, source: str | None = None) -> "QuoteResult":
        return cls(ok=False, source=source, reason=reason)

    def invalid_field(self) -> str | None:
        """Return the name of the first field violating the quote contract.

        ``None`` means the quote is usable as a routing candidate. Failed quotes
        are never considered invalid: their ``reason`` already explains them.
        """

        if not self.ok:
            return None
        if not isinstance(self.source, str) or not self.source.strip():
            return "source"
        if not _finite(self.price) or self.price <= 0:
            return "price"
        if not _is_int(self.fee_bps) or self.fee_bps < 0:
            return "feeBps"
        if not _finite(self.liquidity_score) or not 0.0 <= self.liquidity_score <= 1.0:
            return "liquidityScore"
        if not _is_int(self.est_confirm_ms) or self.est_confirm_ms < 0:
            return "estConfirmMs"
        return None


def _finite(value: object) -> bool:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value)


def _is_int(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


QuoteReturn = Union[QuoteResult, Awaitable[QuoteResult]]


class LiquidityProvider(Protocol):
    """Anything able to price a trade request.

    ``get_quote`` may be a coroutine function or a plain callable; the
    aggregator runs the latter in a worker thread.
    """

    name: str

    def get_quote(self, base: str, quote: str, side: Side, notional_usd: float) -> QuoteReturn:
        ...


@dataclass(frozen=True, slots=True)
class ProviderStatus:
    """Per-provider status line exposed in failures and audit records."""

    source: str
    ok: bool
    reason: str

    def to_payload(self) -> dict[str, object]:
        return {"source": self.source, "ok": self.ok, "reason": self.reason}


@dataclass(frozen=True, slots=True)
class ProviderOutcome:
    """Result of querying one registered provider during aggregation."""

    provider: str
    source: str
    ok: bool
    reason: str | None = None
    quote: QuoteResult | None = None

    def status(self) -> ProviderStatus:
        if self.ok:
            return ProviderStatus(source=self.source, ok=True, reason="success")
        return ProviderStatus(source=self.source, ok=False, reason=self.reason or "no-quote")


class ProviderRegistry(Sequence[LiquidityProvider]):
    """Ordered, immutable collection of providers queried on every request."""

    __slots__ = ("_providers",)

    def __init__(self, providers: Iterable[LiquidityProvider] = ()) -> None:
        entries: list[LiquidityProvider] = []
        seen: set[str] = set()
        for provider in providers:
            name = getattr(provider, "name", None)
            if not isinstance(name, str) or not name:
                raise ValueError(f"provider {provider!r} must expose a non-empty name")
            if name in seen:
                raise ValueError(f"duplicate provider name: {name}")
            if not callable(getattr(provider, "get_quote", None)):
                raise TypeError(f"provider {name} does not implement get_quote")
            seen.add(name)
            entries.append(provider)
        self._providers: tuple[LiquidityProvider, ...] = tuple(entries)

    def __getitem__(self, index):  # type: ignore[override]
        return self._providers[index]

    def __len__(self) -> int:
        return len(self._providers)

    def __iter__(self) -> Iterator[LiquidityProvider]:
        return iter(self._providers)

    def names(self) -> list[str]:
        return [provider.name for provider in self._providers]

    def __repr__(self) -> str:
        return f"ProviderRegistry({self.names()!r})"


__all__ = [
    "LiquidityProvider",
    "ProviderOutcome",
    "ProviderRegistry",
    "ProviderStatus",
    "QuoteResult",
    "SIDES",
    "Side",
]
