"""Command-line interface for one-off JSON-RPC calls.

    jsonrpc-http call http://127.0.0.1:8082/api add 10.5 20.5
    jsonrpc-http call http://127.0.0.1:8082/api add 1 2 --id req-7 --string-id
    jsonrpc-http call http://127.0.0.1:8082/api ping --api-key abcdef123456 --trace

The response document is printed as JSON on stdout. Exit codes:
    0  response received without an error member
    1  response received with an error member
    2  client-side failure (bad input, transport, malformed response, config)
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
from pathlib import Path
from typing import Any

from dotenv import load_dotenv
from rich.console import Console
from rich.markup import escape

from jsonrpc_http.client import RpcClient
from jsonrpc_http.config.loader import load_config, with_overrides
from jsonrpc_http.config.schema import ClientConfig
from jsonrpc_http.core.constants import get_client_version
from jsonrpc_http.core.errors import RpcClientError
from jsonrpc_http.logging_setup import configure_logging
from jsonrpc_http.rpc.auth import ApiKey, discover_api_key

EXIT_OK = 0
EXIT_RPC_ERROR = 1
EXIT_CLIENT_ERROR = 2

console = Console()
err_console = Console(stderr=True)


def parse_param(text: str) -> Any:
    """Interpret a command-line param as a JSON literal, else as a string."""
    try:
        return json.loads(text)
    except json.JSONDecodeError:
        return text


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="jsonrpc-http",
        description="JSON-RPC 2.0 over HTTP client",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {get_client_version()}"
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    call_parser = subparsers.add_parser(
        "call",
        help="Send one request and print the response",
    )
    call_parser.add_argument("url", help="Endpoint URL, e.g. http://127.0.0.1:8082/api")
    call_parser.add_argument("method", help="Remote method name")
    call_parser.add_argument(
        "params",
        nargs="*",
        help="Positional params; JSON literals where they parse, strings otherwise",
    )
    call_parser.add_argument(
        "--id",
        dest="request_id",
        default="0",
        help="Request id (default: 0)",
    )
    call_parser.add_argument(
        "--string-id",
        action="store_true",
        help="Send the id as a JSON string instead of a number",
    )
    call_parser.add_argument(
        "--api-key",
        dest="api_key",
        help="API key value (auto-discovers from env/files if not provided)",
    )
    call_parser.add_argument(
        "--api-key-header",
        dest="api_key_header",
        help="Header name for the API key (default from config: X-API-KEY)",
    )
    call_parser.add_argument(
        "--no-api-key",
        action="store_true",
        help="Never send an API key, even if one is discoverable",
    )
    call_parser.add_argument(
        "--timeout", type=float, default=None, help="Request timeout in seconds"
    )
    call_parser.add_argument("--config", type=Path, help="Config file path")
    call_parser.add_argument(
        "-v", "--verbose", action="store_true", help="Log progress to stderr"
    )
    call_parser.add_argument(
        "--trace", action="store_true", help="Log full rendered requests to stderr"
    )
    return parser


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments."""
    return _build_parser().parse_args(argv)


def _request_id(args: argparse.Namespace) -> int | str:
    if args.string_id:
        return str(args.request_id)
    try:
        return int(args.request_id)
    except ValueError as e:
        raise RpcClientError(
            f"--id {args.request_id!r} is not an integer (use --string-id)"
        ) from e


def _resolve_api_key(args: argparse.Namespace, config: ClientConfig) -> ApiKey | None:
    if args.no_api_key:
        return None
    header = args.api_key_header or config.api_key_header
    if args.api_key:
        return ApiKey(header, args.api_key)
    return discover_api_key(header_name=header, env_var=config.api_key_env)


async def cmd_call(args: argparse.Namespace) -> int:
    """Run the call subcommand.

    Returns:
        Exit code (see module docstring).
    """
    config = with_overrides(load_config(args.config), timeout=args.timeout)

    level = logging.INFO if args.verbose else config.logging.effective_level()
    configure_logging(level, trace=args.trace or config.logging.trace)

    client = RpcClient(args.url, api_key=_resolve_api_key(args, config), config=config)
    params = [parse_param(p) for p in args.params]
    request_id = _request_id(args)

    doc = await client.call(args.method, params, request_id)
    console.print_json(json.dumps(doc.raw))
    return EXIT_RPC_ERROR if doc.is_error else EXIT_OK


def main(argv: list[str] | None = None) -> int:
    """Entry point for the jsonrpc-http command."""
    load_dotenv()
    args = parse_args(argv)
    try:
        if args.command == "call":
            return asyncio.run(cmd_call(args))
    except RpcClientError as e:
        err_console.print(f"[bold red]Error:[/bold red] {escape(e.message)}")
        return EXIT_CLIENT_ERROR
    return EXIT_CLIENT_ERROR
