"""Command-line access to the Snail payment API.

Reads `SNAIL_*` settings from the environment (or `.env`); flags override
them. Results go to stdout, JSON logs and errors to stderr.
"""

import argparse
import asyncio
import base64
import json
import sys
from pathlib import Path
from typing import Any

from snailpay.client import Snail
from snailpay.common.config import ClientSettings, get_settings
from snailpay.common.errors import ConfigurationError, SnailError
from snailpay.common.logging import client_name_ctx, configure_logging
from snailpay.common.startup import log_startup_config
from snailpay.common.tracing import setup_tracing


LIST_COMMANDS = {
    "payments": "list_payments",
    "subscriptions": "list_subscriptions",
    "payment-links": "list_payment_links",
    "subscription-links": "list_subscription_links",
    "payouts": "list_payouts",
}


def _add_link_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--name", required=True)
    parser.add_argument("--price", type=float, required=True, help="Price in USD")
    parser.add_argument("--image-file", default=None, help="Product image, sent base64 encoded")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="snailpay", description="Call the Snail payment API.")
    parser.add_argument("--api-key", default=None, help="Overrides SNAIL_API_KEY")
    parser.add_argument("--base-url", default=None, help="Overrides SNAIL_BASE_URL")
    parser.add_argument("--log-level", default=None, help="Overrides SNAIL_LOG_LEVEL")
    commands = parser.add_subparsers(dest="command", required=True)

    verify = commands.add_parser("verify", help="Redeem a verification code")
    verify.add_argument("code")

    _add_link_arguments(commands.add_parser("payment-link", help="Create a payment link"))
    _add_link_arguments(commands.add_parser("subscription-link", help="Create a subscription link"))

    for name in LIST_COMMANDS:
        commands.add_parser(name, help=f"List {name.replace('-', ' ')}")

    payout = commands.add_parser("payout", help="Pay out part of the balance")
    payout.add_argument("amount", type=float, help="Amount in USD")

    refund = commands.add_parser("refund", help="Refund one or more payments")
    refund.add_argument("payment_ids", nargs="+")
    return parser


def _price(value: float) -> int | float:
    return int(value) if value.is_integer() else value


def _link_options(args: argparse.Namespace) -> dict[str, Any]:
    options: dict[str, Any] = {"name": args.name, "price": _price(args.price)}
    if args.image_file:
        options["image"] = base64.b64encode(Path(args.image_file).read_bytes()).decode("ascii")
    return options


async def run_command(client: Snail, args: argparse.Namespace) -> Any:
    """Dispatch one parsed command to the matching client operation."""

    if args.command == "verify":
        return await client.verify_payment(args.code)
    if args.command == "payment-link":
        return await client.create_payment_link(_link_options(args))
    if args.command == "subscription-link":
        return await client.create_subscription_link(_link_options(args))
    if args.command in LIST_COMMANDS:
        return await getattr(client, LIST_COMMANDS[args.command])()
    if args.command == "payout":
        return await client.new_payout(_price(args.amount))
    if args.command == "refund":
        return await client.refund_payment(args.payment_ids)
    raise ValueError(f"unknown command: {args.command}")


def _settings_from_args(args: argparse.Namespace) -> ClientSettings:
    overrides = {
        "api_key": args.api_key,
        "base_url": args.base_url,
        "log_level": args.log_level,
    }
    return get_settings().model_copy(update={k: v for k, v in overrides.items() if v is not None})


def _print_result(result: Any) -> None:
    if result is None:
        print("ok")
    elif isinstance(result, str):
        print(result)
    else:
        print(json.dumps(result, indent=2))


def main(argv: list[str] | None = None, transport=None) -> int:
    """Parse CLI args, run one command and return the process exit code."""

    args = build_parser().parse_args(argv)
    settings = _settings_from_args(args)
    configure_logging(settings.log_level, stream=sys.stderr)
    client_name_ctx.set(settings.client_name)
    setup_tracing(settings.client_name, settings.otel_exporter_otlp_endpoint)
    log_startup_config(settings)

    try:
        client = Snail.from_settings(settings, transport=transport)
    except ConfigurationError as exc:
        print(f"error: {exc} Set SNAIL_API_KEY or pass --api-key.", file=sys.stderr)
        return 2

    try:
        result = asyncio.run(run_command(client, args))
    except (SnailError, OSError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    _print_result(result)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
