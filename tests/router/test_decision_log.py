from concurrent.futures import ThreadPoolExecutor
from datetime import datetime, timedelta, timezone

import pytest

from hybrid_router.router.decision_log import DecisionLog, DecisionRecord
from hybrid_router.router.providers import ProviderStatus


def _make_entry(symbol: str, offset: int) -> DecisionRecord:
    return DecisionRecord(
        ts=datetime(2024, 1, 1, tzinfo=timezone.utc) + timedelta(seconds=offset),
        base=symbol,
        quote="USDT",
        side="buy",
        notional_usd=100.0 + offset,
        success=True,
        elapsed_ms=1.5,
        providers=(ProviderStatus(source="xrpl-bitstamp", ok=True, reason="success"),),
        chosen_source="xrpl-bitstamp",
    )


def test_record_and_recent_ordering() -> None:
    log = DecisionLog()
    log.record(_make_entry("BTC", 0))
    log.record(_make_entry("ETH", 1))

    recent = log.recent(limit=2)

    assert [entry.base for entry in recent] == ["ETH", "BTC"]


def test_ring_buffer_drops_old_entries() -> None:
    log = DecisionLog(capacity=100)
    for idx in range(150):
        log.record(_make_entry(f"SYM{idx}", idx))

    everything = log.recent(limit=9999)

    assert len(log) == 100
    assert len(everything) == 100
    assert everything[0].base == "SYM149"
    assert everything[-1].base == "SYM50"
    assert [entry.base for entry in log.recent(5)] == [f"SYM{idx}" for idx in range(149, 144, -1)]


def test_recent_limits() -> None:
    log = DecisionLog(capacity=10)
    log.record(_make_entry("BTC", 0))

    assert log.recent(0) == []
    assert log.recent(-3) == []
    assert len(log.recent(50)) == 1


def test_clear_empties_buffer() -> None:
    log = DecisionLog(capacity=3)
    log.record(_make_entry("BTC", 0))
    log.clear()

    assert len(log) == 0
    assert log.recent() == []


def test_capacity_must_be_positive() -> None:
    with pytest.raises(ValueError):
        DecisionLog(capacity=0)


def test_concurrent_writers_never_exceed_capacity() -> None:
    log = DecisionLog(capacity=25)

    def _write(worker: int) -> None:
        for idx in range(200):
            log.record(_make_entry(f"W{worker}-{idx}", idx))

    with ThreadPoolExecutor(max_workers=8) as pool:
        list(pool.map(_write, range(8)))

    assert len(log) == 25
    assert len(log.recent(100)) == 25


def test_record_payload_is_camel_case() -> None:
    payload = _make_entry("XRP", 0).to_payload()

    assert payload["timestamp"] == "2024-01-01T00:00:00+00:00"
    assert payload["chosenSource"] == "xrpl-bitstamp"
    assert payload["amountUsd"] == 100.0
    assert payload["providers"] == [{"source": "xrpl-bitstamp", "ok": True, "reason": "success"}]
