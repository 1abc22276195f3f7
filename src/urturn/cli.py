"""CLI entrypoint for the urturn client."""

import argparse
import json
import sys
from concurrent.futures import TimeoutError as FutureTimeoutError
from pathlib import Path
from typing import Any, Dict, List, Optional

from urturn.client import UrturnClient
from urturn.config.loader import load_settings
from urturn.query.resources import RESOURCE_KINDS
from urturn.utils.logging import configure_logging, get_logger

logger = get_logger(__name__)

EXIT_REJECTED = 2
EXIT_NO_RESPONSE = 1


def _settings_from_args(args: argparse.Namespace):
    config_path = Path(args.config) if args.config else None
    return load_settings(config_path, host=args.host)


def _options_from_args(args: argparse.Namespace) -> Dict[str, Any]:
    options: Dict[str, Any] = {
        "queryType": args.type,
        "querySelector": args.selector,
        "query": args.query,
    }
    if args.id is not None:
        options["id"] = args.id
    if args.page is not None:
        options["page"] = args.page
    if args.per_page is not None:
        options["perPage"] = args.per_page
    return options


def cmd_get(args: argparse.Namespace) -> None:
    """Fetch one or more consecutive pages and print them as JSON."""
    settings = _settings_from_args(args)
    options = _options_from_args(args)
    wait_seconds = settings.timeout_seconds + 5

    pages: List[Any] = []
    with UrturnClient(settings) as client:
        for index in range(args.pages):
            # Only the first call carries page/perPage; later calls continue the cursor
            call_options = options if index == 0 else {
                k: v for k, v in options.items() if k not in ("page", "perPage")
            }
            future = client.fetch(call_options)
            try:
                result = future.result(timeout=wait_seconds)
            except FutureTimeoutError:
                logger.error(f"No response for page {index + 1} within {wait_seconds}s")
                print(json.dumps(pages, indent=2))
                sys.exit(EXIT_NO_RESPONSE)

            if not result.ok:
                print(json.dumps(result.error.model_dump(), indent=2))
                sys.exit(EXIT_REJECTED)
            pages.append(result.data)

    print(json.dumps(pages[0] if len(pages) == 1 else pages, indent=2))


def cmd_host(args: argparse.Namespace) -> None:
    """Print the configured API host."""
    client = UrturnClient(_settings_from_args(args))
    try:
        print(client.get_host())
    finally:
        client.close()


def cmd_kinds(args: argparse.Namespace) -> None:
    """List resource kinds and their selectors."""
    print(f"{'Type':<12} {'Collection':<14} {'Selector':<20} {'Field':<20}")
    print("-" * 66)
    for query_type, kind in RESOURCE_KINDS.items():
        for selector, field in kind.selectors.items():
            print(f"{query_type:<12} {kind.name:<14} {selector:<20} {field:<20}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Query urturn posts and expressions")
    parser.add_argument("--config", type=str, help="Path to YAML config (default: urturn.config.yaml)")
    parser.add_argument("--host", type=str, help="Override the API host")
    parser.add_argument(
        "--log-level",
        type=str,
        default="WARNING",
        help="Log level: DEBUG, INFO, WARNING, ERROR (default: WARNING)",
    )
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    get_parser = subparsers.add_parser("get", help="Fetch pages for a query")
    get_parser.add_argument("query", type=str, help="Search term")
    get_parser.add_argument(
        "--type",
        type=str,
        default="post",
        choices=sorted(RESOURCE_KINDS),
        help="Query type (default: post)",
    )
    get_parser.add_argument("--selector", type=str, default="query", help="Query selector (default: query)")
    get_parser.add_argument("--id", type=int, help="Explicit query id")
    get_parser.add_argument("--page", type=int, help="Start at this page")
    get_parser.add_argument("--per-page", type=int, help="Page size (default: 50)")
    get_parser.add_argument("--pages", type=int, default=1, help="Number of consecutive pages (default: 1)")
    get_parser.set_defaults(func=cmd_get)

    host_parser = subparsers.add_parser("host", help="Print the configured API host")
    host_parser.set_defaults(func=cmd_host)

    kinds_parser = subparsers.add_parser("kinds", help="List resource kinds and selectors")
    kinds_parser.set_defaults(func=cmd_kinds)
    return parser


def main(argv: Optional[List[str]] = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return

    configure_logging(args.log_level)
    try:
        args.func(args)
    except Exception as e:
        logger.error(f"Error running command '{args.command}': {e}", exc_info=True)
        raise


if __name__ == "__main__":
    main()
