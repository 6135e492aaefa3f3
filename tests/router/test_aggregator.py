import pytest

from hybrid_router.router.aggregator import QuoteRequest, aggregate
from hybrid_router.router.providers import ProviderRegistry, QuoteResult
from tests.fakes.fake_providers import (
    FailingProvider,
    FixedQuoteProvider,
    RawResultProvider,
    RejectingProvider,
    SlowProvider,
    SyncProvider,
)

REQUEST = QuoteRequest(base="XRP", quote="USDT", side="buy", notional_usd=500.0)


@pytest.mark.asyncio
async def test_aggregate_returns_one_outcome_per_provider_in_order() -> None:
    providers = [
        FixedQuoteProvider("alpha"),
        FailingProvider("bravo"),
        RejectingProvider("charlie", reason="XRP/USDT not supported"),
        SyncProvider("delta"),
    ]

    outcomes = await aggregate(providers, REQUEST)

    assert [outcome.provider for outcome in outcomes] == ["alpha", "bravo", "charlie", "delta"]
    assert [outcome.ok for outcome in outcomes] == [True, False, False, True]
    assert outcomes[1].reason == "error: venue offline"
    assert outcomes[2].reason == "XRP/USDT not supported"
    assert outcomes[2].source == "charlie"


@pytest.mark.asyncio
async def test_aggregate_passes_request_to_providers() -> None:
    provider = FixedQuoteProvider("alpha")

    await aggregate([provider], REQUEST)

    assert provider.calls == [("XRP", "USDT", "buy", 500.0)]


@pytest.mark.asyncio
async def test_slow_provider_times_out_without_blocking_others() -> None:
    outcomes = await aggregate(
        [SlowProvider("slow", delay=5.0), FixedQuoteProvider("fast")], REQUEST, timeout_s=0.05
    )

    assert outcomes[0].ok is False
    assert outcomes[0].reason == "timeout"
    assert outcomes[1].ok is True


@pytest.mark.asyncio
async def test_malformed_results_become_failures() -> None:
    nan_quote = QuoteResult(
        ok=True,
        price=float("nan"),
        fee_bps=10,
        liquidity_score=0.5,
        est_confirm_ms=100,
        source="nan-venue",
    )
    no_source = QuoteResult(
        ok=True, price=1.0, fee_bps=10, liquidity_score=0.5, est_confirm_ms=100, source=""
    )
    providers = [
        RawResultProvider("dict", {"ok": True, "price": 1.0}),
        RawResultProvider("nan", nan_quote),
        RawResultProvider("anon", no_source),
    ]

    outcomes = await aggregate(providers, REQUEST)

    assert [outcome.reason for outcome in outcomes] == [
        "malformed-result",
        "invalid-quote: price",
        "invalid-quote: source",
    ]
    assert outcomes[1].source == "nan-venue"
    assert outcomes[2].source == "anon"
    assert not any(outcome.ok for outcome in outcomes)


@pytest.mark.asyncio
async def test_duplicate_source_rejected() -> None:
    providers = [
        FixedQuoteProvider("first", source="shared"),
        FixedQuoteProvider("second", source="shared"),
    ]

    outcomes = await aggregate(providers, REQUEST)

    assert outcomes[0].ok is True
    assert outcomes[1].ok is False
    assert outcomes[1].reason == "duplicate-source"


@pytest.mark.asyncio
async def test_outcome_status_lines() -> None:
    outcomes = await aggregate([FixedQuoteProvider("alpha"), RejectingProvider("bravo")], REQUEST)

    statuses = [outcome.status().to_payload() for outcome in outcomes]

    assert statuses == [
        {"source": "alpha", "ok": True, "reason": "success"},
        {"source": "bravo", "ok": False, "reason": "pair not supported"},
    ]


def test_registry_rejects_duplicate_names() -> None:
    with pytest.raises(ValueError):
        ProviderRegistry([FixedQuoteProvider("alpha"), FixedQuoteProvider("alpha")])


def test_registry_is_ordered_and_immutable() -> None:
    registry = ProviderRegistry([FixedQuoteProvider("b"), FixedQuoteProvider("a")])

    assert registry.names() == ["b", "a"]
    assert len(registry) == 2
    assert registry[0].name == "b"
    with pytest.raises(AttributeError):
        registry.append(FixedQuoteProvider("c"))  # type: ignore[attr-defined]
