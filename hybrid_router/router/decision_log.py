"""In-memory audit trail of routing decisions."""

from __future__ import annotations

import threading
from collections import deque
from dataclasses import dataclass
from datetime import datetime, timezone
from itertools import islice
from typing import Deque, Sequence

from .providers import ProviderOutcome, ProviderStatus

DEFAULT_CAPACITY = 100


@dataclass(frozen=True, slots=True)
class DecisionRecord:
    """Single routing attempt, successful or not."""

    ts: datetime
    base: str
    quote: str
    side: str
    notional_usd: float
    success: bool
    elapsed_ms: float
    providers: tuple[ProviderStatus, ...] = ()
    chosen_source: str | None = None
    strategy: str | None = None
    price: float | None = None
    fee_bps: int | None = None
    liquidity_score: float | None = None
    est_confirm_ms: int | None = None
    split: bool = False
    code: str | None = None
    error: str | None = None

    def to_payload(self) -> dict[str, object]:
        return {
            "timestamp": self.ts.isoformat(),
            "base": self.base,
            "quote": self.quote,
            "side": self.side,
            "amountUsd": self.notional_usd,
            "success": self.success,
            "chosenSource": self.chosen_source,
            "strategy": self.strategy,
            "price": self.price,
            "feeBps": self.fee_bps,
            "liquidityScore": self.liquidity_score,
            "estConfirmMs": self.est_confirm_ms,
            "split": self.split,
            "elapsedMs": round(self.elapsed_ms, 3),
            "code": self.code,
            "error": self.error,
            "providers": [status.to_payload() for status in self.providers],
        }


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class DecisionLog:
    """Bounded ring buffer of :class:`DecisionRecord`, newest first.

    Appends evict the oldest entry once ``capacity`` is reached. All access is
    serialised with a lock so concurrent routers never interleave writes.
    """

    def __init__(self, capacity: int = DEFAULT_CAPACITY) -> None:
        if capacity < 1:
            raise ValueError("capacity must be >= 1")
        self._capacity = int(capacity)
        self._entries: Deque[DecisionRecord] = deque(maxlen=self._capacity)
        self._lock = threading.Lock()

    @property
    def capacity(self) -> int:
        return self._capacity

    def record(self, entry: DecisionRecord) -> None:
        with self._lock:
            self._entries.appendleft(entry)

    def recent(self, limit: int = 50) -> list[DecisionRecord]:
        """Return at most ``limit`` records, most recent first."""

        if limit <= 0:
            return []
        with self._lock:
            return list(islice(self._entries, limit))

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)


def statuses(outcomes: Sequence[ProviderOutcome]) -> tuple[ProviderStatus, ...]:
    return tuple(outcome.status() for outcome in outcomes)


__all__ = ["DEFAULT_CAPACITY", "DecisionLog", "DecisionRecord", "statuses", "utc_now"]
