"""
Main CLI entry point for paypal-client.

Fetches bearer tokens and sends authenticated requests using credentials
from PAYPAL_CLIENT_ID / PAYPAL_CLIENT_SECRET.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys

from rich.console import Console
from rich.markup import escape

from .._client import Client
from .._exceptions import PaypalError
from .._version import __version__
from .util import graceful_main, parse_header

console = Console()
err_console = Console(stderr=True)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="paypal-client",
        description="Call the PayPal REST API with client-credentials auth",
    )
    parser.add_argument(
        "--live",
        action="store_true",
        help="Use the live API instead of the sandbox (or set PAYPAL_SANDBOX=false)",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Log HTTP traffic")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    token = subparsers.add_parser("token", help="Print a bearer token")
    token.add_argument("--force", action="store_true", help="Skip the cache")

    request = subparsers.add_parser("request", help="Send an authenticated request")
    request.add_argument("method", choices=["get", "post", "put", "patch", "delete"])
    request.add_argument("path", help="Path below the API version, e.g. /notifications/webhooks")
    request.add_argument("--data", help="JSON body (or query params for get/delete)")
    request.add_argument(
        "-H",
        "--header",
        action="append",
        default=[],
        help="Extra header as 'Name: value' (repeatable)",
    )
    return parser


def create_client(args: argparse.Namespace) -> Client:
    overrides = {"sandbox": False} if args.live else {}
    if args.verbose:
        overrides["logger"] = logging.getLogger("paypal_client.http")
    return Client.from_env(**overrides)


def _run_token(client: Client, args: argparse.Namespace) -> int:
    console.print(client.auth_token(force=args.force), highlight=False, markup=False)
    return 0


def _run_request(client: Client, args: argparse.Namespace) -> int:
    data = json.loads(args.data) if args.data else None
    headers = dict(parse_header(h) for h in args.header)
    resp = getattr(client, args.method)(args.path, data, headers)
    console.print(f"[bold]{resp.status_code}[/bold] {resp.reason}")
    if resp.content:
        try:
            console.print_json(data=resp.json())
        except ValueError:
            console.print(resp.text, markup=False)
    return 0


def _real_main(argv: list[str]) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 0

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    try:
        with create_client(args) as client:
            if args.command == "token":
                return _run_token(client, args)
            return _run_request(client, args)
    except PaypalError as e:
        err_console.print(f"[red]{type(e).__name__}: {escape(str(e))}[/red]", highlight=False)
        if e.debug_id:
            err_console.print(f"debug_id: {e.debug_id}", highlight=False)
        return 1
    except ValueError as e:
        err_console.print(f"[red]{escape(str(e))}[/red]", highlight=False)
        return 2


def main() -> None:
    """Main CLI entry point with graceful interrupt handling."""
    code = graceful_main(_real_main, sys.argv[1:])
    raise SystemExit(code)


if __name__ == "__main__":
    main()
