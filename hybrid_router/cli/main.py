from __future__ import annotations

import argparse
import asyncio
import json
import sys
from typing import Sequence

from ..config.loader import load_routing_config
from ..config.schema import RoutingConfig
from ..providers.fixtures import default_fixture_providers
from ..providers.market_data import CoinGeckoProvider
from ..router.hybrid_router import HybridRouter
from ..router.providers import LiquidityProvider
from ..util.logging import setup_logging


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Smart hybrid liquidity router CLI")
    parser.add_argument("--config", help="path to a routing YAML config")
    sub = parser.add_subparsers(dest="command", required=True)

    quote_parser = sub.add_parser("quote", help="route a trade request and print the decision")
    quote_parser.add_argument("--base", required=True, help="base asset (e.g. XRP)")
    quote_parser.add_argument("--quote", required=True, help="quote asset (e.g. USDT)")
    quote_parser.add_argument("--side", default="buy", choices=["buy", "sell"], help="trade side")
    quote_parser.add_argument("--notional", type=float, required=True, help="trade size in USD")
    quote_parser.add_argument(
        "--repeat",
        type=int,
        default=1,
        help="route the same request this many times",
    )
    quote_parser.add_argument(
        "--recent",
        type=int,
        default=0,
        help="also print this many recent audit records",
    )
    quote_parser.add_argument(
        "--live",
        action="store_true",
        help="add a CoinGecko-priced venue to the fixture venues",
    )
    quote_parser.add_argument(
        "--force-enable",
        action="store_true",
        help="route even when ROUTING_ENGINE_V1 is off",
    )

    sub.add_parser("config", help="print the effective routing configuration")
    return parser


def _providers(live: bool) -> list[LiquidityProvider]:
    providers: list[LiquidityProvider] = list(default_fixture_providers())
    if live:
        providers.append(CoinGeckoProvider())
    return providers


def _dump(payload: object) -> None:
    sys.stdout.write(json.dumps(payload, indent=2, sort_keys=True) + "\n")


async def _route(router: HybridRouter, args: argparse.Namespace) -> int:
    exit_code = 0
    for _ in range(max(args.repeat, 1)):
        result = await router.route_quote(args.base, args.quote, args.side, args.notional)
        _dump(result.to_payload())
        if not result.ok:
            exit_code = 2
    if args.recent > 0:
        _dump([record.to_payload() for record in router.recent_decisions(args.recent)])
    return exit_code


def _run_quote(config: RoutingConfig, args: argparse.Namespace) -> int:
    if args.force_enable:
        config = config.model_copy(update={"enabled": True})
    router = HybridRouter(_providers(args.live), config=config)
    try:
        return asyncio.run(_route(router, args))
    except ValueError as exc:
        sys.stderr.write(f"invalid request: {exc}\n")
        return 1


def main(argv: Sequence[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    config = load_routing_config(args.config)
    setup_logging(config.log_level)
    if args.command == "config":
        _dump(config.model_dump(mode="json"))
        return 0
    if args.command == "quote":
        return _run_quote(config, args)
    parser.error(f"unknown command {args.command}")
    return 2


if __name__ == "__main__":  # pragma: no cover - manual invocation
    raise SystemExit(main())
