"""Command line interface for the warehouse dashboard.

Usage:
    warehouse enderecamentos --query rua
    warehouse assign --address <uuid> --package <uuid>
    warehouse --demo stats
    warehouse seed --customers 10
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import Any

from warehouse.actions import EnderecamentoActions, ExpedicaoActions
from warehouse.actions.base import FormState, OperationResult
from warehouse.api.client import BackendClient
from warehouse.api.serialization import serialize_value
from warehouse.config import WarehouseConfig
from warehouse.exceptions import (
    ApiError,
    BackendUnavailableError,
    ConfigurationError,
    NotFoundError,
)
from warehouse.generators import SeedPlan, seed_store
from warehouse.logging import setup_logging
from warehouse.store import EntityStore, InMemoryEntityStore, RestEntityStore

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_INVALID = 1
EXIT_UNAVAILABLE = 2

UNAVAILABLE_MESSAGE = "Serviço temporariamente indisponível. Tente novamente."


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="warehouse", description="Warehouse dashboard operations")
    parser.add_argument("--backend-url", type=str, default=None, help="REST backend base URL (default: $BACKEND_URL)")
    parser.add_argument("--log-level", type=str, default=None, help="Log level (default: $LOG_LEVEL or INFO)")
    parser.add_argument(
        "--log-format",
        type=str,
        choices=["standard", "json"],
        default=None,
        help="Log format (default: $LOG_FORMAT or standard)",
    )
    parser.add_argument(
        "--demo",
        action="store_true",
        help="Use a seeded in-memory store instead of the REST backend",
    )
    parser.add_argument("--seed", type=int, default=None, help="Random seed for generated data")

    sub = parser.add_subparsers(dest="command", required=True)

    listing = sub.add_parser("enderecamentos", help="List package-to-address assignments")
    _add_listing_args(listing)

    sub.add_parser("stats", help="Warehouse occupancy and shipment statistics")
    sub.add_parser("available", help="Packages and addresses available for assignment")

    assign = sub.add_parser("assign", help="Place a package at an empty address")
    assign.add_argument("--address", required=True, help="Address id")
    assign.add_argument("--package", required=True, help="Package id")

    release = sub.add_parser("release", help="Free a filled address")
    release.add_argument("--address", required=True, help="Address id")

    shipments = sub.add_parser("expedicoes", help="List shipments with transit details")
    _add_listing_args(shipments)

    advance = sub.add_parser("advance", help="Move a shipment to its next status")
    advance.add_argument("--expedicao", required=True, help="Shipment id")
    advance.add_argument("--notes", default=None, help="Notes stored with the update")

    seed = sub.add_parser("seed", help="Generate sample data into an in-memory store")
    seed.add_argument("--customers", type=int, default=5, help="Number of customers (default: 5)")
    seed.add_argument("--streets", type=int, default=4, help="Number of streets (default: 4)")
    seed.add_argument("--addresses-per-street", type=int, default=10, help="Addresses per street (default: 10)")
    seed.add_argument("--fill-ratio", type=float, default=0.5, help="Share of addresses filled (default: 0.5)")

    sub.add_parser("health", help="Check that the backend is reachable")
    return parser


def _add_listing_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--query", default="", help="Case-insensitive search text")
    parser.add_argument("--limit", type=positive_int, default=None, help="Page size (default: $PAGE_SIZE)")
    parser.add_argument("--offset", type=non_negative_int, default=0, help="Records to skip")


def positive_int(value: str) -> int:
    number = int(value)
    if number <= 0:
        raise argparse.ArgumentTypeError(f"must be a positive integer, got {value}")
    return number


def non_negative_int(value: str) -> int:
    number = int(value)
    if number < 0:
        raise argparse.ArgumentTypeError(f"must not be negative, got {value}")
    return number


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    args = build_parser().parse_args(argv)

    try:
        config = WarehouseConfig.from_env()
    except ConfigurationError as exc:
        print(f"Configuration error: {exc}", file=sys.stderr)
        return EXIT_INVALID

    if args.backend_url:
        config.backend.base_url = args.backend_url
    setup_logging(args.log_level or config.log_level, args.log_format or config.log_format)
    seed = args.seed if args.seed is not None else config.seed

    if args.command == "seed":
        return _seed(args, seed)

    client: BackendClient | None = None
    if args.demo:
        store: EntityStore = InMemoryEntityStore()
        seed_store(store, seed=seed)
    else:
        client = BackendClient(config.backend)
        store = RestEntityStore(client)

    try:
        if args.command == "health":
            return _health(client)
        return run_command(args, store, config)
    except (BackendUnavailableError, NotFoundError, ApiError) as exc:
        logger.error("Command %s failed: %s", args.command, exc, extra={"command": args.command})
        print(UNAVAILABLE_MESSAGE, file=sys.stderr)
        return EXIT_UNAVAILABLE
    finally:
        if client is not None:
            client.close()


def run_command(args: argparse.Namespace, store: EntityStore, config: WarehouseConfig) -> int:
    """Dispatch one subcommand against ``store``."""
    enderecamentos = EnderecamentoActions(store, listing=config.listing)
    expedicoes = ExpedicaoActions(store, listing=config.listing)

    if args.command == "enderecamentos":
        page = enderecamentos.page(args.query, limit=args.limit, offset=args.offset)
        _emit({"total": page.total, "has_next": page.has_next, "items": page.items})
    elif args.command == "expedicoes":
        page = expedicoes.page(args.query, limit=args.limit, offset=args.offset)
        _emit({"total": page.total, "has_next": page.has_next, "items": page.items})
    elif args.command == "stats":
        _emit({"enderecamento": enderecamentos.stats(), "expedicao": expedicoes.stats()})
    elif args.command == "available":
        _emit({
            "packages": enderecamentos.available_packages(),
            "addresses": enderecamentos.available_addresses(),
        })
    elif args.command == "assign":
        form = {"addressId": args.address, "packageId": args.package}
        return _report(enderecamentos.create_assignment(form))
    elif args.command == "release":
        return _report(enderecamentos.remove_assignment(args.address))
    elif args.command == "advance":
        return _report(expedicoes.advance_status(args.expedicao, args.notes))
    return EXIT_OK


def _seed(args: argparse.Namespace, seed: int | None) -> int:
    plan = SeedPlan(
        customers=args.customers,
        streets=args.streets,
        addresses_per_street=args.addresses_per_street,
        fill_ratio=args.fill_ratio,
    )
    store = InMemoryEntityStore()
    seed_store(store, plan, seed=seed)
    _emit(store.summary())
    return EXIT_OK


def _health(client: BackendClient | None) -> int:
    if client is None or client.is_available():
        print("ok")
        return EXIT_OK
    print(UNAVAILABLE_MESSAGE, file=sys.stderr)
    return EXIT_UNAVAILABLE


def _report(outcome: FormState | OperationResult) -> int:
    if isinstance(outcome, FormState):
        if outcome.ok:
            print(outcome.message)
            return EXIT_OK
        for field_name, messages in outcome.errors.items():
            for message in messages:
                print(f"{field_name}: {message}", file=sys.stderr)
        return EXIT_INVALID

    stream = sys.stdout if outcome.success else sys.stderr
    print(outcome.message, file=stream)
    return EXIT_OK if outcome.success else EXIT_INVALID


def _emit(data: Any) -> None:
    print(json.dumps(serialize_value(data), ensure_ascii=False, indent=2))


if __name__ == "__main__":
    sys.exit(main())
